"""
가중 비복원 추출

여러 전략이 공유하는 가중치 기반 번호 선택과 난수 생성기 관련 유틸리티를 제공합니다.
"""

from typing import Iterable, List, Mapping, Optional

import numpy as np

from shared.error_handler import get_logger

logger = get_logger(__name__)


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """난수 생성기 생성 (seed가 같으면 같은 결과)"""
    return np.random.default_rng(seed)


def weighted_selection(
    weights: Mapping[int, float],
    count: int,
    rng: np.random.Generator,
    pool: Optional[Iterable[int]] = None
) -> List[int]:
    """
    가중치 비례 비복원 추출

    남은 가중치 합에 균등 난수를 곱한 값을 누적합과 비교하여 한 번호씩 뽑습니다.
    가중치가 0인 번호는 양의 가중치 번호가 모두 소진되기 전에는 선택되지 않습니다.
    남은 가중치 합이 0이 되면 아직 선택되지 않은 pool 번호 전체에 가중치 1을 부여하고 계속합니다.

    Args:
        weights: 번호 -> 음이 아닌 가중치
        count: 뽑을 개수
        rng: 난수 생성기
        pool: 대체 가중치를 부여할 번호 전체 (기본값: weights의 키)

    Returns:
        오름차순 정렬된 번호 리스트
    """
    pool = list(pool) if pool is not None else list(weights)
    available = {int(n): float(w) for n, w in weights.items()}

    negative = {n: w for n, w in available.items() if w < 0 or np.isnan(w)}
    if negative:
        raise ValueError(f"가중치는 0 이상이어야 합니다: {negative}")
    if count > len(set(pool) | set(available)):
        raise ValueError(f"선택 가능한 번호보다 많이 뽑을 수 없습니다: {count}")

    selected: List[int] = []
    while len(selected) < count:
        positive = [(n, w) for n, w in available.items() if w > 0]
        total = sum(w for _, w in positive)

        if total <= 0:
            logger.info(f"가중치 합이 0이므로 균등 가중치로 대체합니다 (선택 {len(selected)}/{count})")
            for n in list(pool) + list(available):
                if n not in selected:
                    available[n] = 1.0
            continue

        threshold = rng.random() * total
        chosen = positive[-1][0]
        cumulative = 0.0
        for n, w in positive:
            cumulative += w
            if threshold < cumulative:
                chosen = n
                break

        selected.append(chosen)
        del available[chosen]

    return sorted(selected)


def random_combination(balls: int, pick: int, rng: np.random.Generator) -> List[int]:
    """1..balls에서 pick개를 균등하게 뽑은 무작위 조합 (뽑힌 순서 유지)"""
    return [int(n) for n in rng.choice(np.arange(1, balls + 1), size=pick, replace=False)]


def fill_random(numbers: List[int], balls: int, pick: int, rng: np.random.Generator) -> List[int]:
    """부족한 개수만큼 중복 없이 균등 무작위 번호로 채움"""
    result = list(numbers)
    remaining = np.setdiff1d(np.arange(1, balls + 1), result)
    missing = pick - len(result)
    if missing > 0:
        result.extend(int(n) for n in rng.choice(remaining, size=missing, replace=False))
    return result
