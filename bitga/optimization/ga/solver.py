"""
GA Solver Module
================

Generational evolution engine.

One step of the usual loop:
    ga.cross(crossover_rate, generation_gap)
    ga.mutate(mutation_rate)
    best = ga.get_rank_at(1)
    ga.select()

Fitness is evaluated lazily, only for individuals whose cached fitness was
invalidated, whenever a ranking is needed.
"""

import logging
from functools import cmp_to_key
from typing import Callable, Generic, List, Optional, Sequence, TypeVar

from .plan import GeneticAlgorithmPlan
from ...exceptions import (
    InvalidArgumentError,
    InvalidStateError,
    OutOfRangeError,
    check_probability,
)
from ...genetics import Individual

logger = logging.getLogger(__name__)

T = TypeVar('T', bound=Individual)

Comparator = Callable[[T, T], int]


def ascending_fitness(a: Individual, b: Individual) -> int:
    return a.compare_to(b)


def descending_fitness(a: Individual, b: Individual) -> int:
    return b.compare_to(a)


class GeneticAlgorithm(Generic[T]):
    """
    Fixed-size population driven through a plan.

    Invariants:
    - len(population) never changes
    - every member is a distinct object owning its own genotype
    - every member is the active watcher of its genotype

    The population is ordered by the comparator (ascending fitness by
    default) once sort() has run; any cross/mutate/select marks it unsorted.
    """

    def __init__(self, plan: GeneticAlgorithmPlan[T], size: int):
        """
        Initialize population.

        Args:
            plan: Problem definition
            size: Population size (>= 1)
        """
        if size < 1:
            raise InvalidArgumentError(f"population size must be >= 1: {size}")
        self.plan = plan
        self._size = size
        self._comparator: Comparator = ascending_fitness
        self._sorted = False

        self._population: List[T] = []
        for _ in range(size):
            individual = plan.inflate_individual()
            individual.activate_watcher()
            self._population.append(individual)
        logger.debug("Inflated population of %d", size)

    # ------------------------------------------------------------------
    # Ordering
    # ------------------------------------------------------------------

    def set_comparator(self, comparator: Optional[Comparator]):
        """Three-way comparator over individuals; None restores ascending fitness"""
        self._comparator = comparator or ascending_fitness
        self._sorted = False

    def set_reverse_order(self, reverse_order: bool):
        """True ranks the highest fitness first (maximization)"""
        self.set_comparator(descending_fitness if reverse_order else None)

    @property
    def size(self) -> int:
        return self._size

    @property
    def is_sorted(self) -> bool:
        return self._sorted

    def individuals(self) -> List[T]:
        """Snapshot of the current members (same objects, new list)"""
        return list(self._population)

    def sort(self):
        """
        Evaluate missing fitness and sort by the comparator.

        No-op when already sorted and every member still has fitness.
        Members handed out by individuals() may be changed in place; their
        watchers clear the fitness, which makes the next sort re-rank.

        Raises:
            InvalidStateError: if the plan left any individual unevaluated
        """
        pending = [ind for ind in self._population if not ind.has_fitness()]
        if self._sorted and not pending:
            return

        if pending:
            logger.debug("Evaluating fitness of %d/%d individuals",
                         len(pending), self._size)
            self.plan.calculate_fitness(pending)
            for individual in pending:
                if not individual.has_fitness():
                    logger.error("Plan left fitness unset for %r", individual)
                    raise InvalidStateError(f"fitness is NaN after evaluation: {individual!r}")

        # list.sort is stable
        self._population.sort(key=cmp_to_key(self._comparator))
        self._sorted = True

    def get_rank_at(self, rank: int) -> T:
        """
        Copy of the individual at a rank.

        Args:
            rank: 1-based rank

        Returns:
            Independent copy, so callers cannot alter the population
        """
        if not 1 <= rank <= self._size:
            raise OutOfRangeError(f"rank {rank} outside [1, {self._size}]")
        self.sort()
        return self._population[rank - 1].copy()

    # ------------------------------------------------------------------
    # Generation step
    # ------------------------------------------------------------------

    def cross(self, crossover_rate: float, generation_gap: float):
        """
        Crossover with generation gap.

        For each member x, a partner y is drawn uniformly (it may be x). With
        probability crossover_rate, copies of both are crossed by the plan;
        otherwise x and y go through unchanged. The 2 * size candidates and
        the current members are shuffled separately, then the first
        int(size * generation_gap) candidates replace the first members.

        Args:
            crossover_rate: Probability a pair is crossed, in [0, 1]
            generation_gap: Fraction of the population replaced, in [0, 1]
        """
        check_probability("crossover rate", crossover_rate)
        check_probability("generation gap", generation_gap)

        random = self.plan.get_random()
        size = self._size
        before = list(self._population)
        after: List[T] = []
        crossed = 0
        for i in range(size):
            x = before[i]
            y = before[random.next_int(size)]
            if random.next_double() < crossover_rate:
                x = x.copy()
                y = y.copy()
                x.activate_watcher()
                y.activate_watcher()
                self.plan.apply_crossover(x, y)
                crossed += 1
            after.append(x)
            after.append(y)

        random.shuffle(before)
        random.shuffle(after)
        ng = int(size * generation_gap)
        logger.debug("Crossed %d/%d pairs, replacing %d members", crossed, size, ng)
        self._install(after[:ng] + before[ng:])

    def mutate(self, mutation_rate: float):
        """
        Flip every bit of every member independently.

        Args:
            mutation_rate: Per-bit flip probability, in [0, 1]
        """
        check_probability("mutation rate", mutation_rate)
        random = self.plan.get_random()
        changed = sum(1 for ind in self._population if ind.mutate(random, mutation_rate))
        logger.debug("Mutation touched %d/%d individuals", changed, self._size)
        self._sorted = False

    def select(self):
        """
        Replace the population with the plan's survivors.

        Raises:
            InvalidStateError: if the plan returns the wrong number of survivors
        """
        self.sort()
        winners = list(self.plan.apply_selection(list(self._population)))
        if len(winners) != self._size:
            logger.error("Selection returned %d individuals, expected %d",
                         len(winners), self._size)
            raise InvalidStateError(
                f"inconsistent size: expected {self._size}, got {len(winners)}"
            )
        self._install(winners)

    def _install(self, incoming: Sequence[T]):
        """
        Make `incoming` the population.

        Repeated objects are replaced by copies. All outgoing watchers are
        detached before the incoming ones attach.
        """
        seen = set()
        distinct: List[T] = []
        copies = 0
        for individual in incoming:
            if id(individual) in seen:
                individual = individual.copy()
                copies += 1
            seen.add(id(individual))
            distinct.append(individual)

        for individual in self._population:
            individual.deactivate_watcher()
        for individual in distinct:
            individual.activate_watcher()

        self._population = distinct
        self._sorted = False
        if copies:
            logger.debug("Copied %d repeated individuals", copies)

    def __len__(self) -> int:
        return self._size

    def __str__(self) -> str:
        return ''.join(f"{individual!r}\n" for individual in self._population)
