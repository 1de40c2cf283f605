"""
가중 비복원 추출 테스트 모듈
"""

import unittest
from pathlib import Path
import sys

# 프로젝트 루트 디렉토리를 Python 경로에 추가
project_root = str(Path(__file__).parent.parent.parent)
if project_root not in sys.path:
    sys.path.append(project_root)

from lotto_engine.src.prediction.selection import (
    fill_random, make_rng, random_combination, weighted_selection,
)


class TestWeightedSelection(unittest.TestCase):
    """가중 추출 테스트"""

    def test_result_is_sorted_and_distinct(self):
        weights = {n: float(n) for n in range(1, 21)}
        for seed in range(20):
            result = weighted_selection(weights, 6, make_rng(seed))
            self.assertEqual(len(result), 6)
            self.assertEqual(len(set(result)), 6)
            self.assertEqual(result, sorted(result))
            self.assertTrue(all(1 <= n <= 20 for n in result))

    def test_zero_weight_never_chosen_first(self):
        """양의 가중치 번호가 남아 있으면 0 가중치 번호는 선택되지 않음"""
        weights = {n: 0.0 for n in range(1, 11)}
        weights[4] = 1.0
        weights[7] = 3.0
        for seed in range(50):
            self.assertEqual(weighted_selection(weights, 2, make_rng(seed)), [4, 7])

    def test_single_positive_weight(self):
        """1번만 양수이면 1번은 항상 포함되고 나머지는 균등 대체"""
        weights = {n: 0.0 for n in range(1, 11)}
        weights[1] = 1.0
        for seed in range(20):
            result = weighted_selection(weights, 3, make_rng(seed))
            self.assertIn(1, result)
            self.assertEqual(len(set(result)), 3)

    def test_uniform_fallback_logged(self):
        weights = {n: 0.0 for n in range(1, 11)}
        with self.assertLogs('lotto_engine', level='INFO') as logs:
            result = weighted_selection(weights, 3, make_rng(0))
        self.assertEqual(len(set(result)), 3)
        self.assertTrue(any('균등' in message for message in logs.output))

    def test_pool_extends_candidates(self):
        """가중치에 없는 pool 번호도 대체 추출 대상"""
        result = weighted_selection({1: 1.0}, 3, make_rng(3), pool=range(1, 4))
        self.assertEqual(result, [1, 2, 3])

    def test_invalid_arguments(self):
        with self.assertRaises(ValueError):
            weighted_selection({1: -1.0, 2: 1.0}, 1, make_rng(0))
        with self.assertRaises(ValueError):
            weighted_selection({1: float('nan'), 2: 1.0}, 1, make_rng(0))
        with self.assertRaises(ValueError):
            weighted_selection({1: 1.0, 2: 1.0}, 3, make_rng(0))

    def test_seed_reproducible(self):
        weights = {n: 1.0 for n in range(1, 50)}
        a = weighted_selection(weights, 6, make_rng(42))
        b = weighted_selection(weights, 6, make_rng(42))
        self.assertEqual(a, b)


class TestRandomHelpers(unittest.TestCase):
    """무작위 조합 유틸리티 테스트"""

    def test_random_combination(self):
        combination = random_combination(10, 4, make_rng(1))
        self.assertEqual(len(set(combination)), 4)
        self.assertTrue(all(isinstance(n, int) and 1 <= n <= 10 for n in combination))

    def test_fill_random(self):
        result = fill_random([2, 5], 10, 5, make_rng(1))
        self.assertEqual(result[:2], [2, 5])
        self.assertEqual(len(set(result)), 5)
        self.assertEqual(fill_random([1, 2, 3], 10, 3, make_rng(1)), [1, 2, 3])


if __name__ == '__main__':
    unittest.main()
