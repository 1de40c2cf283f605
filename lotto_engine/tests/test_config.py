"""
설정 및 로깅 테스트 모듈
"""

import unittest
import logging
from pathlib import Path
import tempfile
import shutil
import sys

import yaml

# 프로젝트 루트 디렉토리를 Python 경로에 추가
project_root = str(Path(__file__).parent.parent.parent)
if project_root not in sys.path:
    sys.path.append(project_root)

from lotto_engine.src.models import ValidationError
from lotto_engine.src.utils.config import Config, EnsembleConfig
from shared.error_handler import log_performance, setup_logger


class TestConfig(unittest.TestCase):
    """설정 테스트"""

    @classmethod
    def setUpClass(cls):
        """테스트 클래스 초기화"""
        cls.temp_dir = tempfile.mkdtemp()

    @classmethod
    def tearDownClass(cls):
        """테스트 클래스 정리"""
        shutil.rmtree(cls.temp_dir)

    def test_defaults(self):
        config = Config()
        self.assertEqual(config.prediction.genetic_generations, 50)
        self.assertEqual(config.prediction.monte_carlo_iterations, 10000)
        self.assertEqual(config.prediction.max_wheel_keys, 16)
        self.assertEqual(config.constraints.max_attempts, 100)
        self.assertEqual(config.logging.level, 'INFO')
        self.assertEqual(config.games, {})

    def test_ensemble_weights(self):
        weights = EnsembleConfig().weights()
        self.assertNotIn('default_weight', weights)
        self.assertEqual(weights['frequency'], 0.25)
        self.assertEqual(weights['fourier'], 0.15)
        self.assertEqual(len(weights), 8)

    def test_overrides(self):
        config = Config({'prediction': {'genetic_generations': 5}, 'ensemble': {'markov': 0.5}})
        self.assertEqual(config.prediction.genetic_generations, 5)
        self.assertEqual(config.prediction.genetic_population, 100)
        self.assertEqual(config.ensemble.markov, 0.5)

    def test_unknown_keys_warn(self):
        with self.assertLogs('lotto_engine', level='WARNING'):
            config = Config({'prediction': {'quantum_mode': True}})
        self.assertFalse(hasattr(config.prediction, 'quantum_mode'))

    def test_update(self):
        config = Config()
        config.update({'constraints': {'max_attempts': 7}})
        self.assertEqual(config.constraints.max_attempts, 7)
        self.assertEqual(config.get('constraints'), {'max_attempts': 7})
        config.set('note', 'x')
        self.assertEqual(config.get('note'), 'x')

    def test_set_rebuilds_sections(self):
        """set으로 바꾼 섹션은 즉시 반영됨"""
        config = Config()
        config.set('prediction', {'genetic_generations': 3, 'random_seed': 9})
        self.assertEqual(config.prediction.genetic_generations, 3)
        self.assertEqual(config.prediction.random_seed, 9)
        config.set('games', {'mini': {'name': 'Mini', 'balls': 20, 'pick': 4}})
        self.assertEqual(config.games['mini'].balls, 20)
        # 다른 섹션 값은 유지
        self.assertEqual(config.prediction.genetic_generations, 3)

    def test_custom_games(self):
        config = Config({'games': {'mini': {'name': 'Mini', 'balls': 20, 'pick': 4}}})
        self.assertEqual(config.games['mini'].pick, 4)
        with self.assertRaises(ValidationError):
            Config({'games': {'bad': {'name': 'Bad', 'balls': 'many', 'pick': 4}}})

    def test_load_yaml(self):
        path = Path(self.temp_dir) / 'config.yaml'
        with open(path, 'w', encoding='utf-8') as f:
            yaml.safe_dump({
                'prediction': {'random_seed': 7, 'monte_carlo_iterations': 500},
                'logging': {'level': 'DEBUG'}
            }, f)

        config = Config.from_file(str(path))
        self.assertEqual(config.prediction.random_seed, 7)
        self.assertEqual(config.prediction.monte_carlo_iterations, 500)
        self.assertEqual(config.logging.level, 'DEBUG')
        self.assertEqual(config.to_dict()['prediction']['random_seed'], 7)

    def test_load_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            Config.from_file(str(Path(self.temp_dir) / 'missing.yaml'))


class TestLogging(unittest.TestCase):
    """로깅 유틸리티 테스트"""

    @classmethod
    def setUpClass(cls):
        cls.temp_dir = tempfile.mkdtemp()

    @classmethod
    def tearDownClass(cls):
        logger = logging.getLogger('lotto_engine.tests.file')
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
        shutil.rmtree(cls.temp_dir)

    def test_setup_logger_no_duplicate_handlers(self):
        log_file = str(Path(self.temp_dir) / 'engine.log')
        setup_logger('lotto_engine.tests.file', logging.INFO, log_file)
        logger = setup_logger('lotto_engine.tests.file', logging.INFO, log_file)
        self.assertEqual(len(logger.handlers), 2)

        logger.info('기록 테스트')
        for handler in logger.handlers:
            handler.flush()
        self.assertIn('기록 테스트', Path(log_file).read_text(encoding='utf-8'))

    def test_log_performance_reraises(self):
        @log_performance
        def fail():
            raise RuntimeError('boom')

        with self.assertLogs(level='ERROR'):
            with self.assertRaises(RuntimeError):
                fail()


if __name__ == '__main__':
    unittest.main()
