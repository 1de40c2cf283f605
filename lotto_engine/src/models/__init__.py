"""
데이터 모델

게임 설정, 추첨 이력, 후보 조합 및 관련 예외를 제공합니다.
"""

from .errors import LotteryError, ValidationError, UnknownStrategyError
from .game import GameConfig, GAMES, get_game
from .draw import (
    Candidate,
    Draw,
    DrawDataset,
    ScoredCandidate,
    evaluate_ticket,
    validate_candidate,
)
from .schemas import DrawSchema, GameConfigSchema, load_draws, load_game

__all__ = [
    'LotteryError', 'ValidationError', 'UnknownStrategyError',
    'GameConfig', 'GAMES', 'get_game',
    'Candidate', 'Draw', 'DrawDataset', 'ScoredCandidate', 'evaluate_ticket', 'validate_candidate',
    'DrawSchema', 'GameConfigSchema', 'load_draws', 'load_game',
]
