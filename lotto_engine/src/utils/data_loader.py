"""
추첨 데이터 구성 모듈

이 모듈은 외부에서 받은 데이터프레임/레코드를 검증된 DrawDataset으로 변환하고,
테스트 및 데모용 샘플 추첨 이력을 생성하는 기능을 제공합니다.
"""

from datetime import date as Date, timedelta
from typing import Any, Dict, List, Mapping, Optional

import numpy as np
import pandas as pd
import logging

from ..models.draw import Draw, DrawDataset
from ..models.errors import ValidationError
from ..models.game import GameConfig
from ..models.schemas import load_draws

# 로거 설정
logger = logging.getLogger(__name__)

# 샘플 데이터 생성 시 균등 추출 비율 (나머지는 저빈도 번호 쪽으로 치우침)
UNIFORM_SHARE = 0.7


class DataManager:
    """데이터 관리자"""

    @staticmethod
    def from_frame(df: pd.DataFrame, game: GameConfig) -> DrawDataset:
        """
        데이터프레임에서 추첨 이력 생성

        'numbers' 리스트 컬럼 또는 num1..numK 컬럼을 지원합니다.
        행 순서는 최신순이어야 합니다.

        Args:
            df: 추첨 데이터프레임
            game: 게임 설정

        Returns:
            검증된 추첨 이력
        """
        if 'numbers' in df.columns:
            numbers_series = df['numbers'].apply(list)
        else:
            number_columns = [f'num{i}' for i in range(1, game.pick + 1)]
            missing_columns = [col for col in number_columns if col not in df.columns]
            if missing_columns:
                raise ValidationError(f"필수 컬럼이 없습니다: {missing_columns}", invariant='schema')
            numbers_series = pd.Series(df[number_columns].values.tolist(), index=df.index)

        dates = pd.to_datetime(df['date']) if 'date' in df.columns else None

        draws = []
        for idx, numbers in numbers_series.items():
            draws.append(Draw(
                numbers=tuple(int(n) for n in numbers),
                date=None if dates is None or pd.isna(dates.loc[idx]) else dates.loc[idx].date(),
                bonus=DataManager._optional_int(df, 'bonus', idx),
                jackpot=DataManager._optional_float(df, 'jackpot', idx)
            ))

        dataset = DrawDataset(game, draws)
        logger.info(f"데이터 변환 완료: {len(dataset)} 행")
        return dataset

    @staticmethod
    def from_records(records: List[Mapping[str, Any]], game: GameConfig) -> DrawDataset:
        """
        딕셔너리 레코드 목록에서 추첨 이력 생성

        Args:
            records: {'date': 'YYYY-MM-DD', 'numbers': [...], 'bonus', 'jackpot'} 목록 (최신순)
            game: 게임 설정

        Returns:
            검증된 추첨 이력
        """
        return DrawDataset(game, load_draws(list(records)))

    @staticmethod
    def generate_sample(
        game: GameConfig,
        num_draws: int,
        rng: np.random.Generator,
        start_date: Optional[Date] = None
    ) -> DrawDataset:
        """
        샘플 추첨 이력 생성

        start_date(기본값 오늘)부터 과거 방향으로 추첨일을 배치하며,
        번호는 70% 균등 추출, 30% 저빈도 번호 추출로 구성합니다.

        Args:
            game: 게임 설정
            num_draws: 생성할 추첨 수
            rng: 난수 생성기
            start_date: 가장 최근 추첨일

        Returns:
            최신순 추첨 이력
        """
        start_date = start_date or Date.today()
        days_between = 7 / max(len(game.draw_days), 1)
        frequency = {n: 0 for n in game.numbers}

        chronological = []
        for _ in range(num_draws):
            numbers = DataManager._balanced_numbers(game, frequency, rng)
            for n in numbers:
                frequency[n] += 1

            bonus_pool = game.bonus_balls or game.balls
            chronological.append({
                'numbers': tuple(sorted(numbers)),
                'bonus': int(rng.integers(1, bonus_pool + 1)) if game.has_bonus else None,
                'jackpot': float(game.jackpot_start + int(rng.integers(0, 50000000)))
            })

        # 가장 마지막에 생성된 추첨이 가장 최근 추첨
        draws = []
        for i, record in enumerate(reversed(chronological)):
            draw_date = start_date - timedelta(days=int(i * days_between))
            draws.append(Draw(date=draw_date, **record))

        logger.debug(f"샘플 데이터 생성 완료: {game.name}, {num_draws} 회차")
        return DrawDataset(game, draws)

    @staticmethod
    def _balanced_numbers(game: GameConfig, frequency: Dict[int, int], rng: np.random.Generator) -> List[int]:
        """균등 추출과 저빈도 번호 추출을 섞어 K개 번호 생성"""
        numbers = set()
        average = sum(frequency.values()) / game.balls

        while len(numbers) < game.pick:
            if rng.random() < UNIFORM_SHARE:
                numbers.add(int(rng.integers(1, game.balls + 1)))
                continue

            underrepresented = [n for n, f in frequency.items() if f < average]
            if underrepresented:
                numbers.add(int(underrepresented[rng.integers(0, len(underrepresented))]))
            else:
                numbers.add(int(rng.integers(1, game.balls + 1)))

        return sorted(numbers)

    @staticmethod
    def _optional_int(df: pd.DataFrame, column: str, idx) -> Optional[int]:
        if column not in df.columns or pd.isna(df.at[idx, column]):
            return None
        return int(df.at[idx, column])

    @staticmethod
    def _optional_float(df: pd.DataFrame, column: str, idx) -> Optional[float]:
        if column not in df.columns or pd.isna(df.at[idx, column]):
            return None
        return float(df.at[idx, column])
