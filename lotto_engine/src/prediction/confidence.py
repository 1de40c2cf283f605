"""
신뢰도 점수

임의의 조합을 빈도 정렬, 홀짝 균형, 분포 폭, 구간 분포, 동반 출현 쌍의 5가지 요소로 평가합니다.
각 요소는 최대 20점이며 합계는 0..100으로 제한됩니다.
"""

import math
from itertools import combinations
from typing import Dict, Iterable

from ..analysis.statistical_analyzer import StatisticalAnalyzer, DECADE_SIZE, spread
from ..models.draw import validate_candidate

COMPONENT_MAX = 20
FREQUENCY_RATIO_CAP = 1.5
SPREAD_TARGET = 0.8
PAIR_POINTS = 2
TOP_PAIR_COUNT = 20


class ConfidenceScorer:
    """조합 신뢰도 평가"""

    def __init__(self, analyzer: StatisticalAnalyzer):
        self.analyzer = analyzer
        self.game = analyzer.game

    def components(self, numbers: Iterable[int]) -> Dict[str, float]:
        """
        요소별 점수

        Args:
            numbers: 평가할 조합 (검증 후 사용)

        Returns:
            frequency, balance, spread, decade, pair 점수
        """
        numbers = validate_candidate(numbers, self.game)
        pick = self.game.pick
        frequency = self.analyzer.frequency()
        expected = self.analyzer.expected_frequency()

        mean_frequency = sum(frequency[n] for n in numbers) / pick
        # 이력이 없으면 기대 빈도가 0이므로 빈도 점수도 0
        ratio = mean_frequency / expected if expected > 0 else 0.0
        frequency_score = min(ratio, FREQUENCY_RATIO_CAP) * COMPONENT_MAX

        odds = sum(1 for n in numbers if n % 2 == 1)
        half = pick / 2
        balance_score = (1 - abs(odds - half) / half) * COMPONENT_MAX

        spread_score = min(spread(numbers) / (self.game.balls * SPREAD_TARGET), 1) * COMPONENT_MAX

        decades = {(n - 1) // DECADE_SIZE for n in numbers}
        decade_score = len(decades) / self.game.decade_count * COMPONENT_MAX

        top_pairs = {p['numbers'] for p in self.analyzer.common_pairs(TOP_PAIR_COUNT)}
        matched = sum(1 for pair in combinations(numbers, 2) if pair in top_pairs)
        pair_score = min(PAIR_POINTS * matched, COMPONENT_MAX)

        return {
            'frequency': frequency_score,
            'balance': balance_score,
            'spread': spread_score,
            'decade': decade_score,
            'pair': float(pair_score)
        }

    def score(self, numbers: Iterable[int]) -> int:
        """신뢰도 (0..100 정수, 0.5는 올림)"""
        total = sum(self.components(numbers).values())
        return int(min(max(math.floor(total + 0.5), 0), 100))
