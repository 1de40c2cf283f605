"""
추첨 데이터 모델

과거 추첨 결과(Draw), 추첨 이력(DrawDataset), 후보 조합(Candidate/ScoredCandidate)을 정의합니다.
DrawDataset은 최신 추첨이 인덱스 0에 오도록 정렬되어 있어야 합니다.
"""

import collections.abc
from dataclasses import dataclass
from datetime import date as Date
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from .errors import ValidationError
from .game import GameConfig

Candidate = List[int]


def validate_numbers(numbers: Iterable[Any], game: GameConfig, what: str = '후보') -> Tuple[int, ...]:
    """
    번호 조합의 개수/범위/중복 검사

    Args:
        numbers: 검사할 번호들
        game: 게임 설정
        what: 오류 메시지에 표시할 대상 이름

    Returns:
        오름차순 정렬된 번호 튜플
    """
    values = list(numbers)
    for n in values:
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
            raise ValidationError(f"{what} 번호는 정수여야 합니다: {n!r}", invariant='range')

    values = [int(n) for n in values]
    if len(values) != game.pick:
        raise ValidationError(
            f"{what} 번호 개수가 잘못되었습니다: {len(values)}개 (필요: {game.pick}개)",
            invariant='count'
        )
    out_of_range = [n for n in values if n < 1 or n > game.balls]
    if out_of_range:
        raise ValidationError(
            f"{what} 번호 범위가 잘못되었습니다: {out_of_range} (1..{game.balls})",
            invariant='range'
        )
    if len(set(values)) != len(values):
        raise ValidationError(f"{what} 번호에 중복이 있습니다: {values}", invariant='distinct')

    return tuple(sorted(values))


def validate_candidate(numbers: Iterable[Any], game: GameConfig) -> Candidate:
    """후보 조합 검사 후 정렬된 리스트 반환"""
    return list(validate_numbers(numbers, game, what='후보'))


@dataclass(frozen=True)
class Draw:
    """과거 추첨 결과 한 건"""
    numbers: Tuple[int, ...]
    date: Optional[Date] = None
    bonus: Optional[int] = None
    jackpot: Optional[float] = None

    def __post_init__(self):
        numbers = tuple(self.numbers)
        if len(set(numbers)) != len(numbers):
            raise ValidationError(f"추첨 번호에 중복이 있습니다: {list(numbers)}", invariant='distinct')
        normalized = (int(n) if isinstance(n, np.integer) else n for n in numbers)
        object.__setattr__(self, 'numbers', tuple(sorted(normalized)))

    def validate(self, game: GameConfig) -> None:
        """게임 설정 기준 불변 조건 검사"""
        validate_numbers(self.numbers, game, what='추첨')
        if self.bonus is not None and game.bonus_balls is not None:
            if not 1 <= self.bonus <= game.bonus_balls:
                raise ValidationError(
                    f"보너스 번호 범위가 잘못되었습니다: {self.bonus} (1..{game.bonus_balls})",
                    invariant='range'
                )


class DrawDataset(collections.abc.Sequence):
    """
    한 게임의 추첨 이력 (최신순)

    생성 시 모든 추첨을 검증하며, 이후에는 읽기 전용으로 취급합니다.
    """

    def __init__(self, game: GameConfig, draws: Iterable[Union[Draw, Sequence[int]]] = ()):
        self.game = game
        normalized = []
        for draw in draws:
            if not isinstance(draw, Draw):
                draw = Draw(numbers=tuple(draw))
            draw.validate(game)
            normalized.append(draw)
        self._draws: Tuple[Draw, ...] = tuple(normalized)

    def __len__(self) -> int:
        return len(self._draws)

    def __getitem__(self, idx):
        if isinstance(idx, slice):
            return DrawDataset(self.game, self._draws[idx])
        return self._draws[idx]

    def __iter__(self) -> Iterator[Draw]:
        return iter(self._draws)

    def __repr__(self) -> str:
        return f'DrawDataset(game={self.game.name!r}, draws={len(self)})'

    @property
    def draws(self) -> Tuple[Draw, ...]:
        return self._draws

    @property
    def latest(self) -> Optional[Draw]:
        return self._draws[0] if self._draws else None

    def presence_matrix(self) -> np.ndarray:
        """
        추첨 x 번호 출현 행렬

        Returns:
            (len, N) 크기의 0/1 정수 배열, [i, n-1]은 i번째 추첨에 n이 나왔는지 여부
        """
        matrix = np.zeros((len(self._draws), self.game.balls), dtype=int)
        for i, draw in enumerate(self._draws):
            matrix[i, [n - 1 for n in draw.numbers]] = 1
        return matrix

    def to_frame(self) -> pd.DataFrame:
        """데이터프레임으로 변환 (numbers 리스트 컬럼 사용)"""
        return pd.DataFrame(
            [
                {
                    'date': draw.date,
                    'numbers': list(draw.numbers),
                    'bonus': draw.bonus,
                    'jackpot': draw.jackpot
                }
                for draw in self._draws
            ],
            columns=['date', 'numbers', 'bonus', 'jackpot']
        )


@dataclass
class ScoredCandidate:
    """신뢰도와 생성 전략이 붙은 후보 조합"""
    numbers: Candidate
    confidence: int
    algorithm: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'numbers': list(self.numbers),
            'confidence': self.confidence,
            'algorithm': self.algorithm
        }


def evaluate_ticket(
    candidate: Iterable[int],
    draw: Draw,
    game: GameConfig,
    bonus_pick: Optional[int] = None
) -> Dict[str, Any]:
    """
    후보 조합을 실제 추첨 결과와 비교

    보너스 번호가 본 번호와 같은 범위에서 추첨되는 게임은 후보 번호에 보너스가 포함되었는지 확인하고,
    별도 범위에서 추첨되는 게임(Daily Grand 등)은 bonus_pick과 비교합니다.

    Args:
        candidate: 후보 번호
        draw: 실제 추첨 결과
        game: 게임 설정
        bonus_pick: 별도 보너스 범위 게임에서 선택한 보너스 번호

    Returns:
        일치 개수, 보너스 일치 여부, 당첨 등수(없으면 None)
    """
    numbers = validate_numbers(candidate, game)
    matches = len(set(numbers) & set(draw.numbers))

    if game.separate_bonus_pool:
        if bonus_pick is not None and not 1 <= bonus_pick <= game.bonus_balls:
            raise ValidationError(
                f"보너스 번호 범위가 잘못되었습니다: {bonus_pick} (1..{game.bonus_balls})",
                invariant='range'
            )
        bonus_match = draw.bonus is not None and bonus_pick == draw.bonus
    else:
        if bonus_pick is not None:
            raise ValidationError(
                f"{game.name}은(는) 보너스 번호를 따로 선택하지 않습니다",
                invariant='game'
            )
        bonus_match = draw.bonus is not None and draw.bonus in numbers

    prize = None
    if bonus_match:
        prize = game.prize_structure.get(f'{matches}/{game.pick}+B')
    if prize is None:
        prize = game.prize_structure.get(f'{matches}/{game.pick}')

    return {
        'matches': matches,
        'bonus_match': bonus_match,
        'prize': prize
    }
