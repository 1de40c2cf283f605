"""
번호 예측 알고리즘 모음

빈도, 미출현, 패턴, 통계 균형, 휠링, 델타, 마코프 체인, 유전 알고리즘,
몬테카를로, 주기(푸리에) 분석의 10가지 전략을 제공합니다.
모든 전략은 1..N 범위의 서로 다른 K개 번호를 오름차순으로 반환합니다.
"""

from collections import Counter
from itertools import combinations
from typing import Callable, Dict, List, Optional, Sequence

import numpy as np
from scipy.special import comb

from ..analysis.statistical_analyzer import StatisticalAnalyzer, dominant_odd_count
from ..models.draw import Candidate, DrawDataset
from ..models.errors import ValidationError
from ..models.game import GameConfig
from ..utils.config import PredictionConfig
from .genetic import GeneticAlgorithm
from .selection import weighted_selection, random_combination, fill_random
from shared.error_handler import get_logger, log_performance

logger = get_logger(__name__)

# 미출현 점수 상한 (기대 간격의 3배)
OVERDUE_CAP = 3
# 델타 전략 대체 증가폭 상한
DELTA_ALT_STEP = 10


class ScoringAlgorithms:
    """번호 예측 알고리즘"""

    def __init__(
        self,
        game: GameConfig,
        dataset: DrawDataset,
        rng: np.random.Generator,
        settings: Optional[PredictionConfig] = None
    ):
        """
        알고리즘 초기화

        Args:
            game: 게임 설정
            dataset: 추첨 이력 (최신순)
            rng: 난수 생성기
            settings: 알고리즘 설정
        """
        self.game = game
        self.dataset = dataset
        self.rng = rng
        self.settings = settings or PredictionConfig()
        self.analyzer = StatisticalAnalyzer(dataset, game)

    def _select(self, weights: Dict[int, float]) -> Candidate:
        return weighted_selection(weights, self.game.pick, self.rng, pool=self.game.numbers)

    # =========================================
    # 1. 빈도 기반
    # =========================================
    def frequency_based(self) -> Candidate:
        """출현 빈도 비율을 가중치로 추출"""
        frequency = self.analyzer.frequency()
        total = sum(frequency.values())
        weights = {n: (f / total if total > 0 else 0.0) for n, f in frequency.items()}
        return self._select(weights)

    # =========================================
    # 2. 미출현 기반
    # =========================================
    def overdue_based(self) -> Candidate:
        """경과 회차 / 기대 간격(N/K)을 가중치로 추출 (상한 3)"""
        expected_interval = self.game.balls / self.game.pick
        weights = {
            n: min(draws_since / expected_interval, OVERDUE_CAP)
            for n, draws_since in self.analyzer.last_seen().items()
        }
        return self._select(weights)

    # =========================================
    # 3. 패턴 기반
    # =========================================
    def pattern_based(self) -> Candidate:
        """
        최다 출현 번호에서 시작하여 빈도 + 2*동반 출현 점수가 가장 높은 번호를 차례로 추가

        동점이면 작은 번호가 선택됩니다.
        """
        frequency = self.analyzer.frequency()
        pair_scores = {}
        for p in self.analyzer.common_pairs(self.settings.pattern_pair_count):
            a, b = p['numbers']
            pair_scores[(a, b)] = p['frequency']
            pair_scores[(b, a)] = p['frequency']

        selected = [self.analyzer.hot(1)[0]['number']]
        while len(selected) < self.game.pick:
            best_next, best_score = None, -1
            for n in self.game.numbers:
                if n in selected:
                    continue
                score = frequency[n] + sum(pair_scores.get((s, n), 0) * 2 for s in selected)
                if score > best_score:
                    best_next, best_score = n, score
            selected.append(best_next)

        return sorted(selected)

    # =========================================
    # 4. 통계 균형
    # =========================================
    def statistical_equilibrium(self) -> Candidate:
        """가장 흔한 홀짝 구성(±1)과 평균 합계(±30)에 맞는 무작위 조합을 찾음"""
        target_odds = dominant_odd_count(self.analyzer.odd_even_distribution())
        if target_odds is None:
            logger.warning("추첨 이력이 없어 통계 균형 전략을 빈도 기반으로 대체합니다")
            return self.frequency_based()

        target_sum = self.analyzer.sum_distribution()['mean']
        tolerance = self.settings.sum_tolerance

        for _ in range(self.settings.equilibrium_attempts):
            candidate = random_combination(self.game.balls, self.game.pick, self.rng)
            odds = sum(1 for n in candidate if n % 2 == 1)
            if abs(odds - target_odds) <= 1 and abs(sum(candidate) - target_sum) <= tolerance:
                return sorted(candidate)

        logger.warning(
            f"통계 균형 조합을 {self.settings.equilibrium_attempts}회 내에 찾지 못해 빈도 기반으로 대체합니다"
        )
        return self.frequency_based()

    # =========================================
    # 5. 휠링
    # =========================================
    def wheeling(self, key_numbers: Optional[Sequence[int]] = None) -> Candidate:
        """
        핵심 번호의 모든 K개 부분집합 중 빈도 합이 가장 큰 조합

        Args:
            key_numbers: 핵심 번호 (기본값: 상위 K+3개 핫 번호)

        Returns:
            최고 점수 조합 (동점이면 먼저 나열된 조합)
        """
        if key_numbers is None:
            key_numbers = [h['number'] for h in self.analyzer.hot(self.game.pick + 3)]
        key_numbers = [int(n) for n in key_numbers]

        if len(set(key_numbers)) != len(key_numbers):
            raise ValidationError(f"핵심 번호에 중복이 있습니다: {key_numbers}", invariant='distinct')
        out_of_range = [n for n in key_numbers if not 1 <= n <= self.game.balls]
        if out_of_range:
            raise ValidationError(f"핵심 번호 범위가 잘못되었습니다: {out_of_range}", invariant='range')
        if len(key_numbers) < self.game.pick:
            raise ValidationError(
                f"핵심 번호가 {self.game.pick}개 이상 필요합니다: {len(key_numbers)}개",
                invariant='count'
            )
        if len(key_numbers) > self.settings.max_wheel_keys:
            raise ValueError(
                f"핵심 번호가 너무 많습니다: {len(key_numbers)}개 "
                f"(최대 {self.settings.max_wheel_keys}개, 조합 수 "
                f"{comb(len(key_numbers), self.game.pick, exact=True)})"
            )

        frequency = self.analyzer.frequency()
        best = max(
            combinations(key_numbers, self.game.pick),
            key=lambda combo: sum(frequency[n] for n in combo)
        )
        return sorted(best)

    # =========================================
    # 6. 델타
    # =========================================
    def delta_system(self) -> Candidate:
        """자주 나온 번호 간격으로 수열을 만들고, 부족하면 무작위로 채움"""
        deltas = self.analyzer.delta_analysis()
        top_deltas = [
            d for d, _ in sorted(deltas.items(), key=lambda x: x[1], reverse=True)
        ][:self.settings.delta_top_count]

        seed_max = min(self.settings.delta_seed_max, self.game.balls)
        numbers = [int(self.rng.integers(1, seed_max + 1))]

        max_steps = self.game.pick * 20
        steps = 0
        while top_deltas and len(numbers) < self.game.pick and steps < max_steps:
            steps += 1
            delta = top_deltas[self.rng.integers(0, len(top_deltas))]
            candidate = numbers[-1] + delta
            if candidate <= self.game.balls and candidate not in numbers:
                numbers.append(candidate)
                continue

            candidate = numbers[-1] + int(self.rng.integers(1, DELTA_ALT_STEP + 1))
            if candidate <= self.game.balls and candidate not in numbers:
                numbers.append(candidate)

        if len(numbers) < self.game.pick:
            logger.info(f"델타 수열이 {len(numbers)}개에서 멈춰 나머지를 무작위로 채웁니다")
            numbers = fill_random(numbers, self.game.balls, self.game.pick, self.rng)

        return sorted(numbers)

    # =========================================
    # 7. 마코프 체인
    # =========================================
    def markov_chain(self) -> Candidate:
        """최근 추첨 번호들로부터의 전이 확률 합을 가중치로 추출"""
        latest = self.dataset.latest
        if latest is None:
            weights = {n: 0.0 for n in self.game.numbers}
        else:
            matrix = self.analyzer.transition_matrix()
            scores = matrix[[n - 1 for n in latest.numbers]].sum(axis=0)
            weights = {n: float(scores[n - 1]) for n in self.game.numbers}
        return self._select(weights)

    # =========================================
    # 8. 유전 알고리즘
    # =========================================
    def genetic_algorithm(self, generations: Optional[int] = None, population_size: Optional[int] = None) -> Candidate:
        """유전 알고리즘으로 최고 적합도 조합 탐색"""
        ga = GeneticAlgorithm(
            self.game,
            self.analyzer,
            self.rng,
            generations=generations if generations is not None else self.settings.genetic_generations,
            population_size=population_size if population_size is not None else self.settings.genetic_population,
            mutation_rate=self.settings.mutation_rate,
            elite_fraction=self.settings.elite_fraction,
            pair_count=self.settings.fitness_pair_count
        )
        return ga.run()

    # =========================================
    # 9. 몬테카를로
    # =========================================
    @log_performance
    def monte_carlo(self, iterations: Optional[int] = None) -> Candidate:
        """빈도 누적분포로 모의 추첨을 반복하여 가장 많이 나온 조합 반환"""
        iterations = iterations if iterations is not None else self.settings.monte_carlo_iterations
        frequency = np.array(list(self.analyzer.frequency().values()), dtype=float)

        if frequency.sum() <= 0:
            logger.info("빈도 합이 0이므로 몬테카를로 모의 추첨에 균등 분포를 사용합니다")
            frequency = np.ones(self.game.balls)

        cdf = np.cumsum(frequency / frequency.sum())
        cdf /= cdf[-1]

        combination_counts = Counter()
        for _ in range(max(iterations, 1)):
            sample = []
            while len(sample) < self.game.pick:
                idx = int(np.searchsorted(cdf, self.rng.random(), side='right'))
                n = min(idx, self.game.balls - 1) + 1
                if n not in sample:
                    sample.append(n)
            combination_counts[tuple(sorted(sample))] += 1

        best, _ = combination_counts.most_common(1)[0]
        return list(best)

    # =========================================
    # 10. 주기 분석
    # =========================================
    def fourier_analysis(self) -> Candidate:
        """
        번호별 평균 출현 주기 대비 경과 회차에 빈도를 곱한 점수로 추출

        출현이 2회 미만인 번호는 빈도만 점수로 사용합니다.
        """
        frequency = self.analyzer.frequency()
        weights = {}
        for n, positions in self.analyzer.appearance_positions().items():
            if len(positions) < 2:
                weights[n] = float(frequency[n])
                continue
            average_cycle = float(np.mean(np.diff(positions)))
            weights[n] = positions[0] / average_cycle * frequency[n]
        return self._select(weights)

    # =========================================
    # 전략 등록
    # =========================================
    def strategies(self) -> Dict[str, Callable[[], Candidate]]:
        """전략 이름 -> 실행 함수 (하이브리드 제외)"""
        return {
            'frequency': self.frequency_based,
            'overdue': self.overdue_based,
            'pattern': self.pattern_based,
            'statistical': self.statistical_equilibrium,
            'wheeling': self.wheeling,
            'delta': self.delta_system,
            'markov': self.markov_chain,
            'genetic': self.genetic_algorithm,
            'montecarlo': self.monte_carlo,
            'fourier': self.fourier_analysis
        }
