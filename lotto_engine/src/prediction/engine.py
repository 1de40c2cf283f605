"""
예측 엔진

통계 분석, 전략별 예측, 다중 조합 생성, 신뢰도 평가를 하나의 진입점으로 제공합니다.
엔진은 추첨 이력이나 게임 설정을 보관하지 않으며, 모든 연산은 이를 인자로 받습니다.
"""

from typing import Any, Dict, List, Mapping, Optional, Set, Tuple, Union

import numpy as np

from ..analysis.statistical_analyzer import StatisticalAnalyzer
from ..models.draw import Candidate, DrawDataset, ScoredCandidate
from ..models.errors import UnknownStrategyError, ValidationError
from ..models.game import GameConfig
from ..utils.config import Config
from .algorithms import ScoringAlgorithms
from .confidence import ConfidenceScorer
from .constraints import ConstraintFilter, Constraints
from .ensemble import EnsembleCombiner
from .selection import make_rng
from shared.error_handler import get_logger, log_performance, setup_logger

logger = get_logger(__name__)

# 패키지 최상위 로거 이름
PACKAGE_LOGGER = "lotto_engine"

HYBRID = 'hybrid'
STRATEGY_NAMES = (
    'frequency', 'overdue', 'pattern', 'statistical', 'wheeling',
    'delta', 'markov', 'genetic', 'montecarlo', 'fourier', HYBRID
)
# set_strategy_weights로 조정 가능한 전략
ADJUSTABLE_WEIGHTS = ('frequency', 'overdue', 'pattern', 'statistical')


class PredictionEngine:
    """예측 엔진"""

    def __init__(self, config: Optional[Config] = None, rng: Optional[np.random.Generator] = None):
        """
        예측 엔진 초기화

        Args:
            config: 설정 객체
            rng: 난수 생성기 (생략 시 config.prediction.random_seed로 생성)
        """
        self.config = config or Config()
        setup_logger(PACKAGE_LOGGER, self.config.logging.level, self.config.logging.log_file)
        self.rng = rng if rng is not None else make_rng(self.config.prediction.random_seed)
        self.weights: Dict[str, float] = self.config.ensemble.weights()

    def set_strategy_weights(self, weights: Mapping[str, float]) -> None:
        """
        하이브리드 전략 가중치 변경

        합계를 정규화하지 않으며, 지정하지 않은 전략은 기존 값을 유지합니다.

        Args:
            weights: frequency/overdue/pattern/statistical -> 음이 아닌 실수
        """
        self.weights.update(self._validate_weights(weights))
        logger.info(f"전략 가중치 변경: {self.weights}")

    @staticmethod
    def _validate_weights(weights: Mapping[str, float]) -> Dict[str, float]:
        """조정 가능한 전략인지, 음수가 아닌지 검사 후 실수로 변환"""
        for name, value in weights.items():
            if name not in ADJUSTABLE_WEIGHTS:
                raise ValueError(f"조정할 수 없는 가중치입니다: {name} (가능: {list(ADJUSTABLE_WEIGHTS)})")
            if value < 0:
                raise ValueError(f"가중치는 0 이상이어야 합니다: {name}={value}")
        return {name: float(value) for name, value in weights.items()}

    @staticmethod
    def _resolve_game(dataset: DrawDataset, game: Optional[GameConfig]) -> GameConfig:
        if game is None:
            return dataset.game
        if game != dataset.game:
            raise ValidationError(
                f"추첨 이력의 게임({dataset.game.name})과 요청한 게임({game.name})이 다릅니다",
                invariant='game'
            )
        return game

    def _algorithms(self, dataset: DrawDataset, game: GameConfig) -> ScoringAlgorithms:
        return ScoringAlgorithms(game, dataset, self.rng, self.config.prediction)

    def analyze(self, dataset: DrawDataset, game: Optional[GameConfig] = None) -> Dict[str, Any]:
        """전체 통계 분석"""
        game = self._resolve_game(dataset, game)
        return StatisticalAnalyzer(dataset, game).analyze()

    def _predictor(
        self,
        strategy: str,
        algorithms: ScoringAlgorithms,
        weights: Optional[Mapping[str, float]] = None
    ):
        if strategy not in STRATEGY_NAMES:
            raise UnknownStrategyError(strategy)
        overrides = self._validate_weights(weights or {})

        if strategy == HYBRID:
            merged = dict(self.weights)
            merged.update(overrides)
            combiner = EnsembleCombiner(algorithms, merged, self.config.ensemble.default_weight)
            return combiner.predict
        return algorithms.strategies()[strategy]

    def predict(
        self,
        strategy: str,
        dataset: DrawDataset,
        game: Optional[GameConfig] = None,
        weights: Optional[Mapping[str, float]] = None
    ) -> Candidate:
        """
        단일 전략 예측

        Args:
            strategy: 전략 이름 (STRATEGY_NAMES 중 하나)
            dataset: 추첨 이력
            game: 게임 설정 (생략 시 dataset.game)
            weights: 하이브리드 전략에만 적용되는 일회성 가중치

        Returns:
            오름차순 K개 번호
        """
        game = self._resolve_game(dataset, game)
        algorithms = self._algorithms(dataset, game)
        return self._predictor(strategy, algorithms, weights)()

    @log_performance
    def generate_sets(
        self,
        count: int,
        strategy: str,
        constraints: Optional[Union[Constraints, Mapping[str, Any]]],
        dataset: DrawDataset,
        game: Optional[GameConfig] = None
    ) -> List[ScoredCandidate]:
        """
        여러 조합 생성

        배치 전체에서 같은 조합이 반복되지 않도록 시도 횟수 내에서 재생성합니다.

        Args:
            count: 생성할 조합 수
            strategy: 전략 이름
            constraints: 제약 조건 (None이면 제약 없음)
            dataset: 추첨 이력
            game: 게임 설정

        Returns:
            신뢰도 내림차순 정렬된 조합 목록
        """
        if count < 0:
            raise ValueError(f"생성 개수는 0 이상이어야 합니다: {count}")
        game = self._resolve_game(dataset, game)

        if not isinstance(constraints, Constraints):
            constraints = Constraints.from_dict(constraints)

        algorithms = self._algorithms(dataset, game)
        predictor = self._predictor(strategy, algorithms)
        constraint_filter = ConstraintFilter(
            game,
            dataset,
            constraints,
            max_attempts=self.config.constraints.max_attempts,
            recent_draws=self.config.constraints.recent_draws
        )
        scorer = ConfidenceScorer(algorithms.analyzer)

        used: Set[Tuple[int, ...]] = set()
        sets = []
        for _ in range(count):
            numbers = constraint_filter.generate(predictor, used)
            used.add(tuple(numbers))
            sets.append(ScoredCandidate(numbers=numbers, confidence=scorer.score(numbers), algorithm=strategy))

        sets.sort(key=lambda s: s.confidence, reverse=True)
        logger.info(f"{strategy} 전략으로 {len(sets)}개 조합 생성")
        return sets

    def confidence(
        self,
        candidate: List[int],
        dataset: DrawDataset,
        game: Optional[GameConfig] = None
    ) -> int:
        """조합 신뢰도 (0..100)"""
        game = self._resolve_game(dataset, game)
        return ConfidenceScorer(StatisticalAnalyzer(dataset, game)).score(candidate)
