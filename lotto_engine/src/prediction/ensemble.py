"""
하이브리드(앙상블) 예측

여러 전략의 결과를 전략 가중치와 순위 가중치로 합산한 뒤 최종 조합을 가중 추출합니다.
"""

from typing import Dict, List, Mapping, Optional

from ..models.draw import Candidate
from ..utils.config import EnsembleConfig
from .algorithms import ScoringAlgorithms
from .selection import weighted_selection
from shared.error_handler import get_logger, log_performance

logger = get_logger(__name__)

# 앙상블에 참여하는 전략 (휠링/몬테카를로 제외)
ENSEMBLE_STRATEGIES = ('frequency', 'overdue', 'pattern', 'statistical', 'delta', 'markov', 'genetic', 'fourier')


class EnsembleCombiner:
    """전략 결과 결합기"""

    def __init__(
        self,
        algorithms: ScoringAlgorithms,
        weights: Optional[Mapping[str, float]] = None,
        default_weight: Optional[float] = None
    ):
        """
        결합기 초기화

        Args:
            algorithms: 전략 모음
            weights: 전략 이름 -> 가중치 (합이 1일 필요 없음, 정규화하지 않음)
            default_weight: 가중치가 지정되지 않은 전략의 가중치
        """
        defaults = EnsembleConfig()
        self.algorithms = algorithms
        self.weights: Dict[str, float] = dict(weights) if weights is not None else defaults.weights()
        self.default_weight = default_weight if default_weight is not None else defaults.default_weight

    def collect(self) -> Dict[str, Candidate]:
        """앙상블 대상 전략 실행"""
        settings = self.algorithms.settings
        strategies = self.algorithms.strategies()
        predictions = {}
        for name in ENSEMBLE_STRATEGIES:
            if name == 'genetic':
                predictions[name] = self.algorithms.genetic_algorithm(
                    settings.hybrid_genetic_generations,
                    settings.hybrid_genetic_population
                )
            else:
                predictions[name] = strategies[name]()
        return predictions

    def combine(self, predictions: Mapping[str, List[int]]) -> Dict[int, float]:
        """
        번호별 앙상블 점수 계산

        i번째(0부터) 번호는 weight(전략) * (K - i) / K 점을 얻습니다.

        Args:
            predictions: 전략 이름 -> 전략 결과

        Returns:
            번호 -> 점수 (1..N)
        """
        pick = self.algorithms.game.pick
        scores = {n: 0.0 for n in self.algorithms.game.numbers}
        for name, numbers in predictions.items():
            weight = self.weights.get(name, self.default_weight)
            for idx, n in enumerate(numbers):
                scores[n] += weight * (pick - idx) / pick
        return scores

    @log_performance
    def predict(self) -> Candidate:
        """하이브리드 예측"""
        predictions = self.collect()
        scores = self.combine(predictions)
        logger.debug(f"앙상블 전략 결과: {predictions}")
        return weighted_selection(scores, self.algorithms.game.pick, self.algorithms.rng, pool=self.algorithms.game.numbers)
