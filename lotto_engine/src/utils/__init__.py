"""
설정 및 데이터 구성 유틸리티
"""

from .config import Config, PredictionConfig, EnsembleConfig, ConstraintConfig, LoggingConfig
from .data_loader import DataManager

__all__ = ['Config', 'PredictionConfig', 'EnsembleConfig', 'ConstraintConfig', 'LoggingConfig', 'DataManager']
