"""
신뢰도 점수 테스트 모듈
"""

import unittest
from pathlib import Path
import sys

# 프로젝트 루트 디렉토리를 Python 경로에 추가
project_root = str(Path(__file__).parent.parent.parent)
if project_root not in sys.path:
    sys.path.append(project_root)

from lotto_engine.src.analysis import StatisticalAnalyzer
from lotto_engine.src.models import DrawDataset, GameConfig, ValidationError
from lotto_engine.src.prediction.confidence import ConfidenceScorer


class TestConfidenceScorer(unittest.TestCase):
    """신뢰도 점수 테스트"""

    @classmethod
    def setUpClass(cls):
        """테스트 클래스 초기화"""
        cls.small = GameConfig(name='Test 10/3', balls=10, pick=3)
        cls.identical = ConfidenceScorer(StatisticalAnalyzer(DrawDataset(cls.small, [[1, 2, 3]] * 5)))

        cls.game = GameConfig(name='Test 20/4', balls=20, pick=4)
        cls.skewed = ConfidenceScorer(StatisticalAnalyzer(DrawDataset(cls.game, [[1, 8, 13, 20]] * 6)))

    def test_components(self):
        """요소별 점수"""
        components = self.identical.components([1, 2, 3])
        # 평균 빈도 5 / 기대 빈도 1.5 -> 상한 1.5 -> 30점
        self.assertAlmostEqual(components['frequency'], 30.0)
        # 홀수 2개, K/2 = 1.5
        self.assertAlmostEqual(components['balance'], 20 * (1 - 0.5 / 1.5))
        # 폭 2 / (10 * 0.8)
        self.assertAlmostEqual(components['spread'], 5.0)
        # N=10 이면 구간 1개
        self.assertAlmostEqual(components['decade'], 20.0)
        # 상위 쌍 (1,2), (1,3), (2,3)
        self.assertAlmostEqual(components['pair'], 6.0)
        self.assertEqual(self.identical.score([1, 2, 3]), 74)

    def test_unknown_numbers_score_zero_frequency(self):
        components = self.identical.components([4, 5, 6])
        self.assertEqual(components['frequency'], 0.0)
        self.assertEqual(components['pair'], 0.0)

    def test_empty_dataset(self):
        """이력이 없으면 빈도 점수 0"""
        scorer = ConfidenceScorer(StatisticalAnalyzer(DrawDataset(self.small)))
        components = scorer.components([1, 5, 9])
        self.assertEqual(components['frequency'], 0.0)
        self.assertTrue(0 <= scorer.score([1, 5, 9]) <= 100)

    def test_clamped_to_100(self):
        """합계는 100으로 제한"""
        self.assertEqual(self.skewed.score([1, 8, 13, 20]), 100)

    def test_frequency_alignment_ordering(self):
        """최다 빈도 조합의 신뢰도는 최저 빈도 조합보다 낮지 않음"""
        analyzer = self.skewed.analyzer
        hot = [h['number'] for h in analyzer.hot(4)]
        cold = [c['number'] for c in analyzer.cold(4)]
        self.assertGreaterEqual(self.skewed.score(hot), self.skewed.score(cold))
        self.assertEqual(self.skewed.score(cold), 34)

    def test_invalid_candidate(self):
        with self.assertRaises(ValidationError):
            self.identical.score([1, 2])
        with self.assertRaises(ValidationError):
            self.identical.score([1, 2, 11])
        with self.assertRaises(ValidationError):
            self.identical.score([1, 1, 2])


if __name__ == '__main__':
    unittest.main()
