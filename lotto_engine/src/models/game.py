"""
게임 설정 모듈

로또 게임 종류별 정적 설정(공 개수, 선택 개수, 보너스, 추첨 요일, 당첨 구조)을 정의합니다.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from .errors import ValidationError

WEEKDAYS = ('Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday')


@dataclass(frozen=True)
class GameConfig:
    """
    게임 설정

    Attributes:
        name: 게임 이름
        balls: 번호 범위 상한 N (1..N)
        pick: 추첨당 번호 개수 K
        bonus_balls: 보너스 번호 범위 (없으면 None)
        draw_days: 추첨 요일 (영문 요일명)
        jackpot_start: 기본 1등 상금
        is_annuity: 연금형 상금 여부
        prize_structure: 일치 패턴('5/6+B' 등) -> 등수 이름
    """
    name: str
    balls: int
    pick: int
    bonus_balls: Optional[int] = None
    draw_days: Tuple[str, ...] = ()
    jackpot_start: int = 0
    is_annuity: bool = False
    prize_structure: Dict[str, str] = field(default_factory=dict, compare=False, hash=False)

    def __post_init__(self):
        if self.pick < 1:
            raise ValidationError(f"선택 개수는 1 이상이어야 합니다: {self.pick}", invariant='game')
        if self.pick >= self.balls:
            raise ValidationError(
                f"선택 개수({self.pick})는 번호 범위({self.balls})보다 작아야 합니다",
                invariant='game'
            )
        if self.bonus_balls is not None and self.bonus_balls < 1:
            raise ValidationError(f"보너스 번호 범위가 잘못되었습니다: {self.bonus_balls}", invariant='game')
        unknown_days = [d for d in self.draw_days if d not in WEEKDAYS]
        if unknown_days:
            raise ValidationError(f"알 수 없는 추첨 요일입니다: {unknown_days}", invariant='game')
        # 리스트로 전달된 경우에도 불변 튜플로 보관
        object.__setattr__(self, 'draw_days', tuple(self.draw_days))

    @property
    def has_bonus(self) -> bool:
        return self.bonus_balls is not None

    @property
    def separate_bonus_pool(self) -> bool:
        """보너스 번호를 본 번호와 다른 범위에서 따로 추첨하는지 여부"""
        return self.bonus_balls is not None and self.bonus_balls != self.balls

    @property
    def midpoint(self) -> float:
        """저번호/고번호 경계 (N/2 이하가 저번호)"""
        return self.balls / 2

    @property
    def decade_count(self) -> int:
        return math.ceil(self.balls / 10)

    @property
    def numbers(self) -> range:
        return range(1, self.balls + 1)


# 지원 게임 목록
GAMES: Dict[str, GameConfig] = {
    'lottomax': GameConfig(
        name='Lotto Max',
        balls=50,
        pick=7,
        bonus_balls=50,
        draw_days=('Tuesday', 'Friday'),
        jackpot_start=10000000,
        prize_structure={
            '7/7': 'Jackpot',
            '6/7+B': '2nd Prize',
            '6/7': '3rd Prize',
            '5/7+B': '4th Prize',
            '5/7': '5th Prize',
            '4/7+B': '6th Prize',
            '4/7': '7th Prize',
            '3/7+B': '8th Prize',
            '3/7': 'Free Play'
        }
    ),
    'lotto649': GameConfig(
        name='Lotto 6/49',
        balls=49,
        pick=6,
        bonus_balls=49,
        draw_days=('Wednesday', 'Saturday'),
        jackpot_start=5000000,
        prize_structure={
            '6/6': 'Jackpot',
            '5/6+B': '2nd Prize',
            '5/6': '3rd Prize',
            '4/6': '4th Prize',
            '3/6': '5th Prize',
            '2/6+B': '6th Prize',
            '2/6': 'Free Play'
        }
    ),
    'dailygrand': GameConfig(
        name='Daily Grand',
        balls=49,
        pick=5,
        bonus_balls=7,
        draw_days=('Monday', 'Thursday'),
        jackpot_start=1000,
        is_annuity=True,
        prize_structure={
            '5/5+B': '$1,000/day for life',
            '5/5': '$25,000/year for life',
            '4/5+B': '$1,000',
            '4/5': '$500',
            '3/5+B': '$100',
            '3/5': '$20',
            '2/5+B': '$10',
            '2/5': '$4',
            '1/5+B': '$4'
        }
    ),
    'lottario': GameConfig(
        name='Lottario',
        balls=45,
        pick=6,
        bonus_balls=45,
        draw_days=('Saturday',),
        jackpot_start=250000,
        prize_structure={
            '6/6': 'Jackpot',
            '5/6+B': '2nd Prize',
            '5/6': '3rd Prize',
            '4/6+B': '4th Prize',
            '4/6': '5th Prize',
            '3/6+B': '6th Prize',
            '3/6': '7th Prize',
            '2/6+B': 'Free Play'
        }
    ),
    'ontario49': GameConfig(
        name='Ontario 49',
        balls=49,
        pick=6,
        bonus_balls=49,
        draw_days=('Wednesday', 'Saturday'),
        jackpot_start=2000000,
        prize_structure={
            '6/6': 'Jackpot',
            '5/6+B': '2nd Prize',
            '5/6': '3rd Prize',
            '4/6': '4th Prize',
            '3/6': '5th Prize',
            '2/6+B': '6th Prize'
        }
    ),
}


def get_game(key: str) -> GameConfig:
    """
    게임 키로 설정 조회

    Args:
        key: 게임 키 (예: 'lotto649')

    Returns:
        게임 설정
    """
    try:
        return GAMES[key]
    except KeyError:
        raise ValidationError(f"지원하지 않는 게임입니다: {key}", invariant='game') from None
