"""
추첨 이력 통계 분석 모듈

이 모듈은 과거 당첨 번호에서 다음과 같은 통계를 계산합니다:
- 번호별 출현 빈도 및 기대 빈도
- 핫/콜드/미출현(overdue) 번호
- 동반 출현 번호 쌍
- 홀짝, 합계, 구간(10단위), 간격(delta) 분포
- 패턴 집계 및 연속 번호 분포
- 마코프 체인 전이 행렬
- 빈도 균등성 카이제곱 검정

모든 결과는 호출 시마다 새로 계산되며, 빈 데이터에 대해서는 0/중립값을 반환합니다.
데이터셋 인덱스 0은 가장 최근 추첨입니다.
"""

from collections import Counter
from datetime import date as Date, datetime, time as Time, timedelta
from itertools import combinations
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
from scipy import stats

from ..models.draw import Draw, DrawDataset
from ..models.game import GameConfig, WEEKDAYS
from shared.error_handler import get_logger, log_performance

# 로거 설정
logger = get_logger(__name__)

# 합계 분포 구간 크기
SUM_BIN_SIZE = 20
# 구간 분포 크기
DECADE_SIZE = 10
# 넓은 분포 판정 비율 (최대-최소 >= N * 0.7)
SPREAD_RATIO = 0.7
# 당일 추첨 마감 시각
DRAW_CUTOFF = Time(22, 30)


class StatisticalAnalyzer:
    """추첨 이력 통계 분석"""

    def __init__(self, dataset: DrawDataset, game: Optional[GameConfig] = None):
        """
        통계 분석기 초기화

        Args:
            dataset: 분석할 추첨 이력 (최신순)
            game: 게임 설정 (생략 시 dataset.game 사용)
        """
        self.dataset = dataset
        self.game = game or dataset.game

    # =========================================
    # 빈도
    # =========================================
    def frequency(self) -> Dict[int, int]:
        """번호별 출현 횟수 (1..N, 미출현 번호는 0)"""
        frequency = {n: 0 for n in self.game.numbers}
        for draw in self.dataset:
            for n in draw.numbers:
                frequency[n] += 1
        return frequency

    def expected_frequency(self) -> float:
        """균등 분포일 때 번호당 기대 출현 횟수"""
        return len(self.dataset) * self.game.pick / self.game.balls

    def hot(self, count: int = 10) -> List[Dict[str, int]]:
        """출현 빈도 상위 번호 (동률이면 작은 번호 우선)"""
        ranked = sorted(self.frequency().items(), key=lambda x: x[1], reverse=True)
        return [{'number': n, 'frequency': f} for n, f in ranked[:count]]

    def cold(self, count: int = 10) -> List[Dict[str, int]]:
        """출현 빈도 하위 번호 (동률이면 작은 번호 우선)"""
        ranked = sorted(self.frequency().items(), key=lambda x: x[1])
        return [{'number': n, 'frequency': f} for n, f in ranked[:count]]

    def bonus_frequency(self) -> Dict[int, int]:
        """보너스 번호별 출현 횟수 (보너스가 없는 추첨은 제외)"""
        pool = self.game.bonus_balls or self.game.balls
        frequency = {n: 0 for n in range(1, pool + 1)}
        for draw in self.dataset:
            if draw.bonus is not None and draw.bonus in frequency:
                frequency[draw.bonus] += 1
        return frequency

    def deviation_from_expected(self) -> Dict[int, Dict[str, float]]:
        """번호별 기대 빈도 대비 편차(%)"""
        expected = self.expected_frequency()
        deviations = {}
        for n, f in self.frequency().items():
            deviation = (f - expected) / expected * 100 if expected > 0 else 0.0
            deviations[n] = {
                'frequency': f,
                'expected': expected,
                'deviation': round(deviation, 2)
            }
        return deviations

    def frequency_uniformity(self) -> Dict[str, float]:
        """
        빈도 균등성 카이제곱 검정

        Returns:
            chi2_stat, p_value (데이터가 없으면 0.0, 1.0)
        """
        if len(self.dataset) == 0:
            return {'chi2_stat': 0.0, 'p_value': 1.0}

        observed = np.array(list(self.frequency().values()), dtype=float)
        expected = np.full(self.game.balls, self.expected_frequency())
        chi2_stat, p_value = stats.chisquare(observed, f_exp=expected)
        return {'chi2_stat': float(chi2_stat), 'p_value': float(p_value)}

    # =========================================
    # 최근성
    # =========================================
    def last_seen(self) -> Dict[int, int]:
        """번호별 가장 최근 출현 인덱스 (미출현 번호는 데이터 길이)"""
        last_seen = {n: len(self.dataset) for n in self.game.numbers}
        for idx, draw in enumerate(self.dataset):
            for n in draw.numbers:
                if last_seen[n] > idx:
                    last_seen[n] = idx
        return last_seen

    def overdue(self, count: int = 10) -> List[Dict[str, int]]:
        """오래 나오지 않은 번호 (경과 회차 내림차순)"""
        ranked = sorted(self.last_seen().items(), key=lambda x: x[1], reverse=True)
        return [{'number': n, 'draws_ago': d} for n, d in ranked[:count]]

    def appearance_positions(self) -> Dict[int, List[int]]:
        """번호별 출현 인덱스 목록 (오름차순, 0이 최근)"""
        positions = {n: [] for n in self.game.numbers}
        for idx, draw in enumerate(self.dataset):
            for n in draw.numbers:
                positions[n].append(idx)
        return positions

    def recent_draws(self, count: int = 20) -> List[Draw]:
        """최근 추첨 목록"""
        return list(self.dataset.draws[:count])

    # =========================================
    # 번호 쌍
    # =========================================
    def pair_counts(self) -> Counter:
        """한 추첨 내 동반 출현 번호 쌍 집계 (키는 (작은 번호, 큰 번호))"""
        pairs = Counter()
        for draw in self.dataset:
            for pair in combinations(draw.numbers, 2):
                pairs[pair] += 1
        return pairs

    def common_pairs(self, count: int = 15) -> List[Dict[str, Any]]:
        """자주 함께 나온 번호 쌍 상위 목록 (동률이면 먼저 집계된 쌍 우선)"""
        ranked = sorted(self.pair_counts().items(), key=lambda x: x[1], reverse=True)
        return [{'numbers': pair, 'frequency': c} for pair, c in ranked[:count]]

    # =========================================
    # 분포
    # =========================================
    def odd_even_distribution(self) -> Dict[str, int]:
        """홀짝 구성별 추첨 수 (키 예: '3O/4E')"""
        distribution = {}
        for draw in self.dataset:
            odds = sum(1 for n in draw.numbers if n % 2 == 1)
            key = f'{odds}O/{len(draw.numbers) - odds}E'
            distribution[key] = distribution.get(key, 0) + 1
        return distribution

    def sum_distribution(self) -> Dict[str, Any]:
        """번호 합계의 최소/최대/평균/표준편차 및 20단위 구간 분포"""
        sums = np.array([sum(draw.numbers) for draw in self.dataset])
        if len(sums) == 0:
            return {'min': 0, 'max': 0, 'mean': 0.0, 'std': 0.0, 'ranges': {}}

        ranges = {}
        for s in sums:
            start = int(s) // SUM_BIN_SIZE * SUM_BIN_SIZE
            key = f'{start}-{start + SUM_BIN_SIZE - 1}'
            ranges[key] = ranges.get(key, 0) + 1

        return {
            'min': int(sums.min()),
            'max': int(sums.max()),
            'mean': float(sums.mean()),
            'std': float(sums.std()),
            'ranges': ranges
        }

    def decade_distribution(self) -> Dict[str, int]:
        """10단위 구간별 출현 횟수 (마지막 구간은 N에서 잘림)"""
        decades = {}
        for i in range(self.game.decade_count):
            decades[self._decade_key(i)] = 0

        for draw in self.dataset:
            for n in draw.numbers:
                decades[self._decade_key((n - 1) // DECADE_SIZE)] += 1
        return decades

    def _decade_key(self, index: int) -> str:
        start = index * DECADE_SIZE + 1
        end = min((index + 1) * DECADE_SIZE, self.game.balls)
        return f'{start}-{end}'

    def delta_analysis(self) -> Dict[int, int]:
        """정렬된 추첨 번호의 인접 간격(delta) 분포"""
        frequency = {}
        for draw in self.dataset:
            for a, b in zip(draw.numbers, draw.numbers[1:]):
                frequency[b - a] = frequency.get(b - a, 0) + 1
        return frequency

    def consecutive_pair_frequency(self) -> Dict[int, int]:
        """추첨당 연속 번호 쌍 개수별 추첨 수"""
        counts = {}
        for draw in self.dataset:
            consecutive = sum(1 for a, b in zip(draw.numbers, draw.numbers[1:]) if b == a + 1)
            counts[consecutive] = counts.get(consecutive, 0) + 1
        return counts

    def pattern_analysis(self) -> Dict[str, int]:
        """
        추첨 패턴 집계

        Returns:
            all_odd, all_even, balanced, low_numbers, high_numbers,
            has_consecutive, spread_out 별 추첨 수
        """
        patterns = {
            'all_odd': 0,
            'all_even': 0,
            'balanced': 0,
            'low_numbers': 0,
            'high_numbers': 0,
            'has_consecutive': 0,
            'spread_out': 0
        }
        pick = self.game.pick

        for draw in self.dataset:
            numbers = draw.numbers
            odds = sum(1 for n in numbers if n % 2 == 1)
            lows = sum(1 for n in numbers if n <= self.game.midpoint)

            if odds == pick:
                patterns['all_odd'] += 1
            if odds == 0:
                patterns['all_even'] += 1
            if abs(odds - pick / 2) <= 1:
                patterns['balanced'] += 1
            if lows >= pick - 1:
                patterns['low_numbers'] += 1
            if lows <= 1:
                patterns['high_numbers'] += 1
            if any(b == a + 1 for a, b in zip(numbers, numbers[1:])):
                patterns['has_consecutive'] += 1
            if numbers[-1] - numbers[0] >= self.game.balls * SPREAD_RATIO:
                patterns['spread_out'] += 1

        return patterns

    # =========================================
    # 마코프 체인
    # =========================================
    def transition_matrix(self) -> np.ndarray:
        """
        추첨 간 번호 전이 확률 행렬

        i번째 추첨(과거)의 각 번호에서 i-1번째 추첨(그 다음 회차)의 각 번호로의 전이를 집계한 뒤
        행 합계가 0보다 큰 행만 정규화합니다.

        Returns:
            (N, N) 배열, [a-1, b-1]은 a 다음 회차에 b가 나올 확률
        """
        presence = self.dataset.presence_matrix()
        if len(presence) < 2:
            return np.zeros((self.game.balls, self.game.balls))

        counts = (presence[1:].T @ presence[:-1]).astype(float)
        row_sums = counts.sum(axis=1, keepdims=True)
        return np.divide(counts, row_sums, out=np.zeros_like(counts), where=row_sums > 0)

    # =========================================
    # 일정
    # =========================================
    def next_draw_date(self, now: Optional[datetime] = None) -> Optional[Date]:
        """
        다음 추첨일 계산

        추첨 요일 당일은 22:30 이전까지만 해당 날짜를 반환합니다.

        Args:
            now: 기준 시각 (기본값: 현재 시각)

        Returns:
            다음 추첨일 (추첨 요일이 정의되지 않았으면 None)
        """
        if not self.game.draw_days:
            return None

        now = now or datetime.now()
        for offset in range(8):
            candidate = now.date() + timedelta(days=offset)
            if WEEKDAYS[candidate.weekday()] not in self.game.draw_days:
                continue
            if offset == 0 and now.time() > DRAW_CUTOFF:
                continue
            return candidate
        return None

    # =========================================
    # 전체 분석
    # =========================================
    @log_performance
    def analyze(self) -> Dict[str, Any]:
        """전체 통계 계산"""
        results = {
            'draw_count': len(self.dataset),
            'frequency': self.frequency(),
            'expected_frequency': self.expected_frequency(),
            'hot_numbers': self.hot(15),
            'cold_numbers': self.cold(15),
            'overdue_numbers': self.overdue(15),
            'common_pairs': self.common_pairs(20),
            'odd_even_distribution': self.odd_even_distribution(),
            'sum_distribution': self.sum_distribution(),
            'decade_distribution': self.decade_distribution(),
            'delta_analysis': self.delta_analysis(),
            'pattern_analysis': self.pattern_analysis(),
            'consecutive_pairs': self.consecutive_pair_frequency(),
            'bonus_frequency': self.bonus_frequency(),
            'deviation_from_expected': self.deviation_from_expected(),
            'frequency_uniformity': self.frequency_uniformity()
        }
        logger.info(f"통계 분석 완료: {self.game.name}, {len(self.dataset)} 회차")
        return results


def dominant_odd_count(distribution: Dict[str, int]) -> Optional[int]:
    """가장 흔한 홀짝 구성의 홀수 개수 (동률이면 먼저 집계된 구성)"""
    if not distribution:
        return None
    key, _ = max(distribution.items(), key=lambda x: x[1])
    return int(key.split('O')[0])


def spread(numbers: Sequence[int]) -> int:
    """최대값 - 최소값"""
    return max(numbers) - min(numbers)
