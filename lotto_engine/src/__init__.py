"""
로또 번호 예측 엔진 - 소스 코드

이 패키지는 추첨 이력 분석과 번호 예측의 핵심 기능을 구현합니다.
"""

from .analysis.statistical_analyzer import StatisticalAnalyzer
from .prediction.engine import PredictionEngine
from .utils.data_loader import DataManager

__all__ = ['StatisticalAnalyzer', 'PredictionEngine', 'DataManager']
