"""
번호 예측 모듈

예측 전략, 앙상블 결합, 제약 조건 필터, 신뢰도 평가 및 이를 묶은 예측 엔진을 제공합니다.
"""

from .selection import make_rng, weighted_selection
from .algorithms import ScoringAlgorithms
from .genetic import GeneticAlgorithm
from .ensemble import EnsembleCombiner, ENSEMBLE_STRATEGIES
from .constraints import ConstraintFilter, Constraints
from .confidence import ConfidenceScorer
from .engine import PredictionEngine, STRATEGY_NAMES

__all__ = [
    'make_rng', 'weighted_selection',
    'ScoringAlgorithms', 'GeneticAlgorithm',
    'EnsembleCombiner', 'ENSEMBLE_STRATEGIES',
    'ConstraintFilter', 'Constraints',
    'ConfidenceScorer',
    'PredictionEngine', 'STRATEGY_NAMES',
]
