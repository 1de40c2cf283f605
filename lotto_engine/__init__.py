"""
로또 번호 예측 엔진

이 패키지는 과거 추첨 이력을 통계적으로 분석하고, 여러 전략을 조합하여
순위가 매겨진 번호 조합을 생성하는 기능을 제공합니다.
"""

from pathlib import Path
from .src.utils.config import Config
from .src.models import GameConfig, GAMES, Draw, DrawDataset, ScoredCandidate, ValidationError
from .src.analysis.statistical_analyzer import StatisticalAnalyzer
from .src.prediction.engine import PredictionEngine
from .src.utils.data_loader import DataManager

# 프로젝트 루트 디렉토리
ROOT_DIR = Path(__file__).parent

# 버전
__version__ = "1.0.0"

__all__ = [
    'Config', 'GameConfig', 'GAMES', 'Draw', 'DrawDataset', 'ScoredCandidate', 'ValidationError',
    'StatisticalAnalyzer', 'PredictionEngine', 'DataManager',
]
