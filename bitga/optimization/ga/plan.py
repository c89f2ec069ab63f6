"""
GA Plan Module
==============

Contract between the evolution engine and a problem definition.
"""

from abc import ABC, abstractmethod
from typing import Generic, List, Sequence, TypeVar

from ...genetics import Individual, RandomSource

T = TypeVar('T', bound=Individual)


class GeneticAlgorithmPlan(ABC, Generic[T]):
    """
    Problem definition consumed by GeneticAlgorithm.

    A plan owns the shared random source and decides how individuals are
    created, scored, crossed and selected. The engine owns the population.
    """

    @abstractmethod
    def inflate_individual(self) -> T:
        """Fresh, randomized individual with the problem's layout"""

    @abstractmethod
    def get_random(self) -> RandomSource:
        """
        Shared random source.

        Must return the same instance on every call; reproducibility
        depends on a single draw sequence.
        """

    @abstractmethod
    def calculate_fitness(self, individuals: Sequence[T]):
        """
        Score individuals lacking fitness.

        Must call set_fitness() on every member; the engine raises
        InvalidStateError otherwise. Phenotype slots may be filled as a
        by-product.
        """

    @abstractmethod
    def apply_crossover(self, x: T, y: T):
        """Cross two (already copied) individuals in place"""

    @abstractmethod
    def apply_selection(self, population: Sequence[T]) -> List[T]:
        """
        Choose the next generation.

        Args:
            population: Current population sorted by the engine comparator

        Returns:
            Exactly len(population) members; repeats are allowed
        """
