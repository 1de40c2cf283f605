"""
설정 관리 모듈

이 모듈은 예측 엔진의 설정을 관리하는 Config 클래스를 제공합니다.
"""

from typing import Any, Dict, Optional
from dataclasses import dataclass, asdict, fields
from pathlib import Path
import logging
import yaml

from ..models.game import GameConfig
from ..models.schemas import load_game

logger = logging.getLogger(__name__)

@dataclass
class PredictionConfig:
    """예측 알고리즘 설정"""
    genetic_generations: int = 50
    genetic_population: int = 100
    mutation_rate: float = 0.1
    elite_fraction: float = 0.2
    hybrid_genetic_generations: int = 30
    hybrid_genetic_population: int = 50
    monte_carlo_iterations: int = 10000
    equilibrium_attempts: int = 1000
    sum_tolerance: float = 30
    delta_seed_max: int = 15
    delta_top_count: int = 10
    pattern_pair_count: int = 30
    fitness_pair_count: int = 50
    max_wheel_keys: int = 16
    random_seed: Optional[int] = None

@dataclass
class EnsembleConfig:
    """앙상블 전략 가중치"""
    frequency: float = 0.25
    overdue: float = 0.25
    pattern: float = 0.25
    statistical: float = 0.25
    delta: float = 0.15
    markov: float = 0.2
    genetic: float = 0.25
    fourier: float = 0.15
    default_weight: float = 0.1

    def weights(self) -> Dict[str, float]:
        """전략 이름 -> 가중치 (default_weight 제외)"""
        return {k: v for k, v in asdict(self).items() if k != 'default_weight'}

@dataclass
class ConstraintConfig:
    """제약 조건 재시도 설정"""
    max_attempts: int = 100
    recent_draws: int = 3

@dataclass
class LoggingConfig:
    """로깅 설정"""
    level: str = 'INFO'
    log_file: Optional[str] = None


def _build_section(cls, values: Optional[Dict[str, Any]]):
    """알 수 없는 키는 경고 후 무시하고 섹션 생성"""
    values = dict(values or {})
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(values) - known)
    if unknown:
        logger.warning(f'{cls.__name__}에 알 수 없는 설정 키가 있습니다: {unknown}')
    return cls(**{k: v for k, v in values.items() if k in known})


class Config:
    """설정 관리 클래스"""

    def __init__(self, config_dict: Dict[str, Any] = None):
        """
        설정 객체 초기화

        Args:
            config_dict: 설정 딕셔너리
        """
        self._config = config_dict or {}

        self.prediction = _build_section(PredictionConfig, self._config.get('prediction'))
        self.ensemble = _build_section(EnsembleConfig, self._config.get('ensemble'))
        self.constraints = _build_section(ConstraintConfig, self._config.get('constraints'))
        self.logging = _build_section(LoggingConfig, self._config.get('logging'))

        # 사용자 정의 게임
        self.games: Dict[str, GameConfig] = {
            key: load_game(value) for key, value in (self._config.get('games') or {}).items()
        }

    def get(self, key: str, default: Any = None) -> Any:
        """
        설정값 조회

        Args:
            key: 설정 키
            default: 기본값

        Returns:
            설정값
        """
        return self._config.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """
        설정값 설정 후 섹션 재구성

        Args:
            key: 설정 키
            value: 설정값
        """
        self._config[key] = value
        self.__init__(self._config)

    def update(self, config_dict: Dict[str, Any]) -> None:
        """
        설정 업데이트 후 섹션 재구성

        Args:
            config_dict: 업데이트할 설정 딕셔너리
        """
        self._config.update(config_dict)
        self.__init__(self._config)

    @classmethod
    def from_file(cls, filepath: str) -> 'Config':
        """YAML 파일에서 설정 생성"""
        config = cls()
        config.load(filepath)
        return config

    def load(self, filepath: str) -> None:
        """
        설정 로드

        Args:
            filepath: 로드할 YAML 파일 경로
        """
        try:
            if not Path(filepath).exists():
                raise FileNotFoundError(f'설정 파일을 찾을 수 없습니다: {filepath}')

            with open(filepath, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f) or {}
            logger.info(f'설정 로드 완료: {filepath}')

            # 설정 객체 재초기화
            self.__init__(loaded)
        except Exception as e:
            logger.error(f'설정 로드 실패: {str(e)}')
            raise

    def to_dict(self) -> Dict[str, Any]:
        """
        설정을 딕셔너리로 변환

        Returns:
            설정 딕셔너리
        """
        return {
            'prediction': asdict(self.prediction),
            'ensemble': asdict(self.ensemble),
            'constraints': asdict(self.constraints),
            'logging': asdict(self.logging)
        }

    def __str__(self) -> str:
        """문자열 표현"""
        return str(self.to_dict())

    def __repr__(self) -> str:
        """표현식 문자열"""
        return f'Config({self.to_dict()})'
