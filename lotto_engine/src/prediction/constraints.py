"""
구조적 제약 조건 필터

생성된 조합이 사용자 제약 조건을 만족하지 않거나 이미 생성된 조합과 같으면 다시 생성합니다.
시도 횟수를 모두 소진하면 마지막 조합을 그대로 받아들입니다 (최선 노력).
"""

from dataclasses import dataclass, fields
from typing import Any, Callable, List, Mapping, Optional, Set, Tuple

from ..models.draw import Candidate, DrawDataset
from ..models.game import GameConfig
from shared.error_handler import get_logger

logger = get_logger(__name__)

# 외부 키(camelCase) -> 필드 이름
_ALIASES = {
    'balanceOddEven': 'balance_odd_even',
    'balanceHighLow': 'balance_high_low',
    'avoidRepeats': 'avoid_repeats',
    'includeConsecutive': 'include_consecutive',
}


@dataclass
class Constraints:
    """사용자 제약 조건"""
    balance_odd_even: bool = False
    balance_high_low: bool = False
    avoid_repeats: bool = False
    include_consecutive: bool = False

    @classmethod
    def from_dict(cls, values: Optional[Mapping[str, Any]]) -> 'Constraints':
        """딕셔너리에서 생성 (camelCase 키 허용)"""
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in (values or {}).items():
            name = _ALIASES.get(key, key)
            if name not in known:
                raise ValueError(f"알 수 없는 제약 조건입니다: {key}")
            kwargs[name] = bool(value)
        return cls(**kwargs)


class ConstraintFilter:
    """제약 조건 재시도 필터"""

    def __init__(
        self,
        game: GameConfig,
        dataset: DrawDataset,
        constraints: Optional[Constraints] = None,
        max_attempts: int = 100,
        recent_draws: int = 3
    ):
        self.game = game
        self.constraints = constraints or Constraints()
        self.max_attempts = max(max_attempts, 1)

        self.recent_numbers: Set[int] = set()
        for draw in dataset.draws[:recent_draws]:
            self.recent_numbers.update(draw.numbers)

    def violations(self, numbers: List[int]) -> List[str]:
        """
        위반한 제약 조건 이름 목록

        Args:
            numbers: 검사할 조합

        Returns:
            위반 조건 이름 목록 (없으면 빈 리스트)
        """
        pick = self.game.pick
        violated = []

        if self.constraints.balance_odd_even:
            odds = sum(1 for n in numbers if n % 2 == 1)
            if odds < 2 or odds > pick - 2:
                violated.append('balance_odd_even')

        if self.constraints.balance_high_low:
            lows = sum(1 for n in numbers if n <= self.game.midpoint)
            if lows < 2 or lows > pick - 2:
                violated.append('balance_high_low')

        if self.constraints.avoid_repeats:
            overlap = sum(1 for n in numbers if n in self.recent_numbers)
            if overlap > pick / 2:
                violated.append('avoid_repeats')

        if self.constraints.include_consecutive:
            ordered = sorted(numbers)
            if not any(b == a + 1 for a, b in zip(ordered, ordered[1:])):
                violated.append('include_consecutive')

        return violated

    def generate(
        self,
        generator: Callable[[], Candidate],
        used: Optional[Set[Tuple[int, ...]]] = None
    ) -> Candidate:
        """
        제약 조건을 만족하고 중복되지 않는 조합 생성

        Args:
            generator: 조합 생성 함수
            used: 이미 생성된 조합 집합 (정렬된 튜플)

        Returns:
            생성된 조합 (시도 소진 시 마지막 조합)
        """
        used = used if used is not None else set()
        numbers: Candidate = []
        violated: List[str] = []
        duplicate = False

        for _ in range(self.max_attempts):
            numbers = sorted(generator())
            violated = self.violations(numbers)
            duplicate = tuple(numbers) in used
            if not violated and not duplicate:
                return numbers

        logger.warning(
            f"{self.max_attempts}회 시도 후 조건을 만족하지 못한 조합을 사용합니다: "
            f"{numbers} (위반={violated}, 중복={duplicate})"
        )
        return numbers
