"""
Knapsack Problem Module
=======================

0/1 knapsack over 50 items encoded as one 50-bit locus.

Fitness (maximized):
    total price - 100 * max(0, total weight - capacity)

With capacity 200, good solutions score in the 830-860 range.
"""

import numpy as np
from typing import List, Optional, Sequence

from ..genetics import GenoTypeLayout, Individual, RandomSource, JavaRandom
from ..optimization.ga import GeneticAlgorithmPlan, GeneticOperators

WEIGHTS = np.array([
    2, 10, 7, 2, 4, 9, 10, 7, 8, 5,
    3, 10, 9, 8, 8, 5, 7, 3, 9, 7,
    2, 10, 7, 9, 7, 2, 10, 4, 9, 10,
    4, 7, 8, 5, 2, 3, 10, 9, 7, 8,
    8, 5, 7, 5, 7, 3, 9, 7, 7, 9,
])

PRICES = np.array([
    21, 22, 28, 21, 12, 24, 15, 2, 25, 28,
    4, 22, 36, 2, 7, 40, 14, 40, 33, 21,
    28, 22, 14, 36, 28, 21, 18, 12, 4, 15,
    21, 2, 5, 28, 28, 4, 22, 36, 31, 2,
    7, 40, 14, 4, 28, 40, 33, 35, 21, 20,
])

CAPACITY = 200
OVERWEIGHT_PENALTY = 100


class KnapsackPlan(GeneticAlgorithmPlan[Individual]):
    """
    Knapsack plan.

    Phenotype slot 0 holds the total weight of the packed items.
    """

    DEFAULT_EVOLUTION = {
        'population_size': 80,
        'crossover_rate': 0.7,
        'generation_gap': 0.9,
        'mutation_rate': 0.01,
        'elite_count': 2,
        'tournament_size': 2,
    }

    def __init__(self,
                 random: Optional[RandomSource] = None,
                 weights: Sequence[int] = WEIGHTS,
                 prices: Sequence[int] = PRICES,
                 capacity: int = CAPACITY,
                 crossover: str = 'two_point',
                 elite_count: int = 2,
                 tournament_size: int = 2):
        self.random = random or JavaRandom()
        self.weights = np.asarray(weights)
        self.prices = np.asarray(prices)
        self.capacity = capacity
        self.layout = GenoTypeLayout().append(len(self.weights))
        self.operators = GeneticOperators(self.random, crossover=crossover,
                                          elite_count=elite_count,
                                          tournament_size=tournament_size)

    def inflate_individual(self) -> Individual:
        individual = Individual(self.layout.inflate())
        individual.randomize(self.random)
        return individual

    def get_random(self) -> RandomSource:
        return self.random

    def evaluate(self, packed: np.ndarray) -> float:
        """Penalized price of a boolean item selection"""
        weight = int(self.weights[packed].sum())
        price = int(self.prices[packed].sum())
        return float(price - OVERWEIGHT_PENALTY * max(0, weight - self.capacity))

    def calculate_fitness(self, individuals: Sequence[Individual]):
        for individual in individuals:
            packed = individual.get_genotype_bits(0)
            individual.set_phenotype(0, int(self.weights[packed].sum()))
            individual.set_fitness(self.evaluate(packed))

    def apply_crossover(self, x: Individual, y: Individual):
        self.operators.crossover(x, y)

    def apply_selection(self, population: Sequence[Individual]) -> List[Individual]:
        return self.operators.select(population)
