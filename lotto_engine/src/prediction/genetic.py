"""
유전 알고리즘 기반 번호 탐색

빈도, 동반 출현 쌍, 홀짝 균형, 분포 폭을 적합도로 하는 조합을 진화시킵니다.
상위 개체(엘리트)는 다음 세대로 그대로 넘어가므로 세대별 최고 적합도는 감소하지 않습니다.
"""

from typing import Dict, List, Tuple

import numpy as np

from ..analysis.statistical_analyzer import StatisticalAnalyzer, spread
from ..models.game import GameConfig
from .selection import random_combination
from shared.error_handler import get_logger

logger = get_logger(__name__)

# 적합도 계수
FREQUENCY_FACTOR = 0.5
PAIR_FACTOR = 0.3
BALANCE_BONUS = 10
SPREAD_BONUS = 5


class GeneticAlgorithm:
    """유전 알고리즘"""

    def __init__(
        self,
        game: GameConfig,
        analyzer: StatisticalAnalyzer,
        rng: np.random.Generator,
        generations: int = 50,
        population_size: int = 100,
        mutation_rate: float = 0.1,
        elite_fraction: float = 0.2,
        pair_count: int = 50
    ):
        """
        유전 알고리즘 초기화

        Args:
            game: 게임 설정
            analyzer: 통계 분석기
            rng: 난수 생성기
            generations: 세대 수
            population_size: 개체군 크기
            mutation_rate: 유전자별 변이 확률
            elite_fraction: 다음 세대로 보존할 상위 비율
            pair_count: 적합도 계산에 사용할 상위 번호 쌍 개수
        """
        self.game = game
        self.rng = rng
        self.generations = generations
        self.population_size = max(population_size, 1)
        self.mutation_rate = mutation_rate
        self.elite_size = max(int(self.population_size * elite_fraction), 1)

        self.frequency = analyzer.frequency()
        self.pair_scores: Dict[Tuple[int, int], int] = {
            p['numbers']: p['frequency'] for p in analyzer.common_pairs(pair_count)
        }

        # 세대별 최고 적합도 (0번은 초기 개체군)
        self.best_fitness_history: List[float] = []

    def fitness(self, numbers: List[int]) -> float:
        """적합도 = 빈도합*0.5 + 쌍 빈도*0.3 + 홀짝 균형 보너스 + 분포 폭 보너스"""
        fitness = sum(self.frequency[n] for n in numbers) * FREQUENCY_FACTOR

        for i in range(len(numbers)):
            for j in range(i + 1, len(numbers)):
                a, b = numbers[i], numbers[j]
                fitness += self.pair_scores.get((min(a, b), max(a, b)), 0) * PAIR_FACTOR

        odds = sum(1 for n in numbers if n % 2 == 1)
        evens = len(numbers) - odds
        fitness += (1 - abs(odds - evens) / len(numbers)) * BALANCE_BONUS
        fitness += spread(numbers) / self.game.balls * SPREAD_BONUS
        return fitness

    def crossover(self, parent1: List[int], parent2: List[int]) -> List[int]:
        """앞쪽 절반은 parent1, 나머지는 parent2에서 중복 없이, 부족하면 무작위로 채움"""
        pick = self.game.pick
        cross_point = pick // 2
        child = list(dict.fromkeys(parent1[:cross_point]))

        for n in parent2:
            if len(child) >= pick:
                break
            if n not in child:
                child.append(n)

        while len(child) < pick:
            n = int(self.rng.integers(1, self.game.balls + 1))
            if n not in child:
                child.append(n)

        return child

    def mutate(self, numbers: List[int]) -> List[int]:
        """각 유전자를 mutation_rate 확률로 사용되지 않은 번호로 교체"""
        mutated = list(numbers)
        for i in range(len(mutated)):
            if self.rng.random() < self.mutation_rate:
                unused = np.setdiff1d(np.arange(1, self.game.balls + 1), mutated)
                mutated[i] = int(self.rng.choice(unused))
        return mutated

    def _rank(self, population: List[List[int]]) -> List[Tuple[float, List[int]]]:
        scored = [(self.fitness(individual), individual) for individual in population]
        scored.sort(key=lambda x: x[0], reverse=True)
        return scored

    def evolve(self, population: List[List[int]]) -> List[List[int]]:
        """한 세대 진화 (엘리트 보존 + 교차 + 변이)"""
        ranked = self._rank(population)
        elite = [individual for _, individual in ranked[:self.elite_size]]

        new_population = [list(individual) for individual in elite]
        while len(new_population) < self.population_size:
            parent1 = elite[self.rng.integers(0, len(elite))]
            parent2 = elite[self.rng.integers(0, len(elite))]
            child = self.crossover(parent1, parent2)
            new_population.append(self.mutate(child))

        return new_population

    def run(self) -> List[int]:
        """
        진화 수행

        Returns:
            최종 세대의 최고 적합도 조합 (오름차순)
        """
        population = [
            random_combination(self.game.balls, self.game.pick, self.rng)
            for _ in range(self.population_size)
        ]
        self.best_fitness_history = []

        for _ in range(self.generations):
            self.best_fitness_history.append(self._rank(population)[0][0])
            population = self.evolve(population)

        best_fitness, best = self._rank(population)[0]
        self.best_fitness_history.append(best_fitness)
        logger.debug(f"유전 알고리즘 완료: {self.generations}세대, 최고 적합도={best_fitness:.2f}")
        return sorted(best)
