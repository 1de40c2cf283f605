"""
예측 엔진 테스트 모듈

이 모듈은 엔진의 분석, 전략 예측, 가중치 조정, 다중 조합 생성 및 신뢰도 평가를 테스트합니다.
"""

import unittest
from datetime import date
from pathlib import Path
import sys

# 프로젝트 루트 디렉토리를 Python 경로에 추가
project_root = str(Path(__file__).parent.parent.parent)
if project_root not in sys.path:
    sys.path.append(project_root)

from lotto_engine import Config, DataManager, GAMES, PredictionEngine, ScoredCandidate, ValidationError
from lotto_engine.src.models import DrawDataset, GameConfig, UnknownStrategyError
from lotto_engine.src.prediction.engine import STRATEGY_NAMES
from lotto_engine.src.prediction.selection import make_rng


class TestPredictionEngine(unittest.TestCase):
    """예측 엔진 테스트"""

    @classmethod
    def setUpClass(cls):
        """테스트 클래스 초기화"""
        cls.config = Config({
            'prediction': {
                'genetic_generations': 5,
                'genetic_population': 20,
                'hybrid_genetic_generations': 3,
                'hybrid_genetic_population': 10,
                'monte_carlo_iterations': 100,
                'random_seed': 42
            },
            'logging': {'level': 'WARNING'}
        })
        cls.game = GAMES['lotto649']
        cls.dataset = DataManager.generate_sample(cls.game, 50, make_rng(1), start_date=date(2026, 1, 17))
        cls.small = GameConfig(name='Test 10/3', balls=10, pick=3)
        cls.identical = DrawDataset(cls.small, [[1, 2, 3]] * 5)

    def setUp(self):
        self.engine = PredictionEngine(self.config)

    def assertValidCandidate(self, numbers, game):
        self.assertEqual(len(numbers), game.pick)
        self.assertEqual(len(set(numbers)), game.pick)
        self.assertEqual(numbers, sorted(numbers))
        self.assertTrue(all(1 <= n <= game.balls for n in numbers))

    def test_analyze(self):
        results = self.engine.analyze(self.dataset)
        self.assertEqual(results['draw_count'], 50)
        self.assertEqual(sum(results['frequency'].values()), 300)

    def test_predict_all_strategies(self):
        for strategy in STRATEGY_NAMES:
            with self.subTest(strategy=strategy):
                self.assertValidCandidate(self.engine.predict(strategy, self.dataset), self.game)

    def test_predict_identical_draws(self):
        self.assertEqual(self.engine.predict('frequency', self.identical), [1, 2, 3])

    def test_unknown_strategy(self):
        with self.assertRaises(UnknownStrategyError) as ctx:
            self.engine.predict('astrology', self.dataset)
        self.assertEqual(ctx.exception.name, 'astrology')
        with self.assertRaises(UnknownStrategyError):
            self.engine.generate_sets(1, 'astrology', None, self.dataset)

    def test_game_mismatch(self):
        with self.assertRaises(ValidationError) as ctx:
            self.engine.predict('frequency', self.dataset, GAMES['lottomax'])
        self.assertEqual(ctx.exception.invariant, 'game')

    def test_seed_reproducible(self):
        a = PredictionEngine(self.config).predict('hybrid', self.dataset)
        b = PredictionEngine(self.config).predict('hybrid', self.dataset)
        self.assertEqual(a, b)

    def test_set_strategy_weights(self):
        """지정한 가중치만 바뀌고 합계는 정규화하지 않음"""
        self.engine.set_strategy_weights({'frequency': 1.0, 'overdue': 0})
        self.assertEqual(self.engine.weights['frequency'], 1.0)
        self.assertEqual(self.engine.weights['overdue'], 0.0)
        self.assertEqual(self.engine.weights['pattern'], 0.25)
        self.assertEqual(self.engine.weights['markov'], 0.2)

        with self.assertRaises(ValueError):
            self.engine.set_strategy_weights({'markov': 0.5})
        with self.assertRaises(ValueError):
            self.engine.set_strategy_weights({'frequency': -0.1})
        # 실패한 호출은 아무것도 바꾸지 않음
        self.assertEqual(self.engine.weights['frequency'], 1.0)

    def test_hybrid_weight_overrides_validated(self):
        """일회성 가중치도 set_strategy_weights와 같은 검사를 거침"""
        with self.assertRaises(ValueError):
            self.engine.predict('hybrid', self.dataset, weights={'frequncy': 0.5})
        with self.assertRaises(ValueError):
            self.engine.predict('hybrid', self.dataset, weights={'overdue': -1})
        with self.assertRaises(ValueError):
            self.engine.predict('frequency', self.dataset, weights={'markov': 0.5})

        result = self.engine.predict('hybrid', self.dataset, weights={'frequency': 1.0, 'pattern': 0})
        self.assertValidCandidate(result, self.game)
        # 일회성 가중치는 저장되지 않음
        self.assertEqual(self.engine.weights['frequency'], 0.25)

    def test_generate_sets(self):
        """개수, 정렬, 전략 이름"""
        sets = self.engine.generate_sets(5, 'frequency', {'balanceOddEven': True}, self.dataset)
        self.assertEqual(len(sets), 5)
        confidences = [s.confidence for s in sets]
        self.assertEqual(confidences, sorted(confidences, reverse=True))
        for scored in sets:
            self.assertIsInstance(scored, ScoredCandidate)
            self.assertEqual(scored.algorithm, 'frequency')
            self.assertValidCandidate(scored.numbers, self.game)
            self.assertTrue(0 <= scored.confidence <= 100)
            odds = sum(1 for n in scored.numbers if n % 2 == 1)
            self.assertTrue(2 <= odds <= 4)
        self.assertEqual(len({tuple(s.numbers) for s in sets}), 5)

    def test_generate_sets_zero_and_negative(self):
        self.assertEqual(self.engine.generate_sets(0, 'frequency', None, self.dataset), [])
        with self.assertRaises(ValueError):
            self.engine.generate_sets(-1, 'frequency', None, self.dataset)

    def test_generate_sets_exhausted_duplicates(self):
        """같은 조합만 나오는 전략은 경고 후 중복 조합을 그대로 사용"""
        with self.assertLogs('lotto_engine', level='WARNING'):
            sets = self.engine.generate_sets(2, 'pattern', None, self.identical)
        self.assertEqual([s.numbers for s in sets], [[1, 2, 3], [1, 2, 3]])

    def test_confidence(self):
        self.assertEqual(self.engine.confidence([1, 2, 3], self.identical), 74)
        with self.assertRaises(ValidationError):
            self.engine.confidence([1, 2, 3], self.dataset)

    def test_to_dict(self):
        scored = self.engine.generate_sets(1, 'montecarlo', None, self.dataset)[0]
        self.assertEqual(set(scored.to_dict()), {'numbers', 'confidence', 'algorithm'})


if __name__ == '__main__':
    unittest.main()
