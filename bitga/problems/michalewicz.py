"""
Michalewicz Sample Module
=========================

Maximize f(x) = x * sin(10 * pi * x) + 2 on [-1, 2].

x is one 22-bit locus linearly scaled onto [-1, 2]. The global maximum is
about 3.8503 at x ~= 1.8505.

References:
- Z. Michalewicz, "Genetic Algorithms + Data Structures = Evolution
  Programs", Springer-Verlag (1992)
"""

import numpy as np
from typing import List, Optional, Sequence

from ..genetics import GenoTypeLayout, Individual, RandomSource, JavaRandom
from ..optimization.ga import GeneticAlgorithmPlan, GeneticOperators

RESOLUTION_BITS = 22
X_MIN = -1.0
X_MAX = 2.0


def michalewicz(x: float) -> float:
    return float(x * np.sin(10.0 * np.pi * x) + 2.0)


class MichalewiczPlan(GeneticAlgorithmPlan[Individual]):
    """Phenotype slot 0 holds the decoded x"""

    # 5 elite + 45 tournament winners out of 50
    DEFAULT_EVOLUTION = {
        'population_size': 50,
        'crossover_rate': 0.25,
        'generation_gap': 1.0,
        'mutation_rate': 0.1,
        'elite_count': 5,
        'tournament_size': 2,
    }

    def __init__(self,
                 random: Optional[RandomSource] = None,
                 crossover: str = 'two_point',
                 elite_count: int = 5,
                 tournament_size: int = 2):
        self.random = random or JavaRandom()
        self.layout = GenoTypeLayout().append(RESOLUTION_BITS)
        self.operators = GeneticOperators(self.random, crossover=crossover,
                                          elite_count=elite_count,
                                          tournament_size=tournament_size)

    def inflate_individual(self) -> Individual:
        individual = Individual(self.layout.inflate())
        individual.randomize(self.random)
        return individual

    def get_random(self) -> RandomSource:
        return self.random

    def calculate_fitness(self, individuals: Sequence[Individual]):
        for individual in individuals:
            x = individual.get_genotype_scaled(0, X_MIN, X_MAX)
            individual.set_phenotype(0, x)
            individual.set_fitness(michalewicz(x))

    def apply_crossover(self, x: Individual, y: Individual):
        self.operators.crossover(x, y)

    def apply_selection(self, population: Sequence[Individual]) -> List[Individual]:
        return self.operators.select(population)
