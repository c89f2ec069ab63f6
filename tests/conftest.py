"""Shared fixtures for bitga tests."""

from typing import Callable, List, Optional, Sequence

import pytest

from bitga.genetics import GenoType, GenoTypeLayout, Individual, JavaRandom, RandomSource
from bitga.optimization.ga import GeneticAlgorithmPlan, crossover_single_point


def randomize_bits(genotype: GenoType, random: RandomSource):
    """Set every bit from one next_boolean() draw, in bit order."""
    mask = genotype.get_mask()
    for i in range(mask.length):
        if random.next_boolean():
            mask.set(i)
    genotype.invert(mask)


def count_ones(individual: Individual) -> int:
    genotype = individual.genotype
    return sum(int(individual.get_genotype_bits(i).sum()) for i in range(genotype.locus_count))


class OnesPlan(GeneticAlgorithmPlan[Individual]):
    """Fitness = number of set bits; records evaluator calls."""

    def __init__(self, seed: int = 1234, widths: Sequence[int] = (4,) * 8,
                 selection: Optional[Callable[[Sequence[Individual]], List[Individual]]] = None,
                 lazy: bool = False):
        self.random = JavaRandom(seed)
        self.widths = list(widths)
        self.selection = selection
        self.lazy = lazy
        self.evaluated: List[List[Individual]] = []

    def inflate_individual(self) -> Individual:
        individual = Individual(GenoType(self.widths))
        individual.randomize(self.random)
        return individual

    def get_random(self) -> RandomSource:
        return self.random

    def calculate_fitness(self, individuals):
        self.evaluated.append(list(individuals))
        if self.lazy:
            return
        for individual in individuals:
            individual.set_fitness(count_ones(individual))

    def apply_crossover(self, x, y):
        crossover_single_point(x, y, self.random)

    def apply_selection(self, population):
        if self.selection is not None:
            return self.selection(population)
        return list(population)


@pytest.fixture
def layout_8x4() -> GenoTypeLayout:
    return GenoTypeLayout().append(4, 8)


@pytest.fixture
def zero_genotype(layout_8x4) -> GenoType:
    return layout_8x4.inflate()


@pytest.fixture
def plan() -> OnesPlan:
    return OnesPlan()
