"""
예측 엔진 예외 정의
"""

from typing import Optional


class LotteryError(Exception):
    """예측 엔진 기본 예외"""


class ValidationError(LotteryError, ValueError):
    """
    데이터 불변 조건 위반

    Attributes:
        invariant: 위반된 조건 ('count', 'range', 'distinct', 'game', 'schema')
    """

    def __init__(self, message: str, invariant: Optional[str] = None):
        super().__init__(message)
        self.invariant = invariant

    def __str__(self) -> str:
        message = super().__str__()
        if self.invariant:
            return f"[{self.invariant}] {message}"
        return message


class UnknownStrategyError(LotteryError, KeyError):
    """등록되지 않은 전략 이름"""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"알 수 없는 전략입니다: {self.name}"
