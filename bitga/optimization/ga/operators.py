"""
GA Operators Module
===================

Standard crossover and selection helpers for plan implementations.

Crossover (all via mask + GenoType.swap):
- Single-point: swap every bit at or after a random cut
- Two-point: swap the bits between two random cuts
- Uniform: swap each bit with probability 0.5

Selection (on a population already sorted best-first):
- Elite: top-N
- Tournament: each winner is the best of K random draws
- Roulette: winners drawn with probability proportional to fitness
"""

from typing import Callable, Dict, List, Sequence, TypeVar

import numpy as np

from ...exceptions import InvalidArgumentError, InvalidStateError
from ...genetics import GenoType, Individual, Mask, RandomSource

T = TypeVar('T', bound=Individual)


def single_point_mask(length: int, cut: int) -> Mask:
    """Mask of indices >= cut"""
    mask = Mask(length)
    mask.set(cut, length)
    return mask


def two_point_mask(length: int, p: int, q: int) -> Mask:
    """Mask of indices in [min(p, q), max(p, q))"""
    mask = Mask(length)
    mask.set(min(p, q), max(p, q))
    return mask


def crossover_single_point(x: Individual, y: Individual, random: RandomSource):
    """
    Single-point crossover.

    Args:
        x: Individual crossed in place
        y: Individual crossed in place
        random: Shared random source (one next_int draw)
    """
    length = x.genotype.bit_length
    cut = random.next_int(length)
    GenoType.swap(x.genotype, y.genotype, single_point_mask(length, cut))


def crossover_two_point(x: Individual, y: Individual, random: RandomSource):
    """Two-point crossover (two next_int draws; cut order does not matter)"""
    length = x.genotype.bit_length
    p = random.next_int(length)
    q = random.next_int(length)
    GenoType.swap(x.genotype, y.genotype, two_point_mask(length, p, q))


def crossover_uniform(x: Individual, y: Individual, random: RandomSource):
    """Uniform crossover (one next_boolean draw per bit)"""
    mask = x.genotype.get_mask()
    for i in range(mask.length):
        if random.next_boolean():
            mask.set(i)
    GenoType.swap(x.genotype, y.genotype, mask)


CROSSOVERS: Dict[str, Callable[[Individual, Individual, RandomSource], None]] = {
    'single_point': crossover_single_point,
    'two_point': crossover_two_point,
    'uniform': crossover_uniform,
}


def select_elite(candidates: Sequence[T], n: int) -> List[T]:
    """
    Top-n of a fitness-sorted list.

    Raises:
        InvalidArgumentError: if n < 1 or n > len(candidates)
    """
    if not 1 <= n <= len(candidates):
        raise InvalidArgumentError(f"elite size {n} outside [1, {len(candidates)}]")
    return list(candidates[:n])


def select_tournament(candidates: Sequence[T], random: RandomSource,
                      n: int, k: int) -> List[T]:
    """
    Tournament selection with replacement.

    Candidates must be sorted best-first, so the best of k draws is the
    lowest drawn index. k = 1 is plain uniform random selection.

    Args:
        candidates: Fitness-sorted population
        random: Shared random source (n * k next_int draws)
        n: Number of winners
        k: Tournament size

    Returns:
        List of n winners (may repeat)
    """
    size = len(candidates)
    if not 1 <= n <= size:
        raise InvalidArgumentError(f"winner count {n} outside [1, {size}]")
    if k < 1:
        raise InvalidArgumentError(f"tournament size must be >= 1: {k}")

    winners = []
    for _ in range(n):
        m = random.next_int(size)
        for _ in range(1, k):
            m = min(m, random.next_int(size))
        winners.append(candidates[m])
    return winners


def select_roulette(candidates: Sequence[T], random: RandomSource, n: int) -> List[T]:
    """
    Fitness-proportional selection with replacement.

    Each winner takes one next_double() draw, scaled onto the cumulative
    fitness. Only meaningful when higher fitness is better. When every
    fitness is 0 the draw is uniform.

    Raises:
        InvalidArgumentError: if n < 1, n > len(candidates), or any fitness
            is negative
        InvalidStateError: if any candidate is unevaluated
    """
    size = len(candidates)
    if not 1 <= n <= size:
        raise InvalidArgumentError(f"winner count {n} outside [1, {size}]")
    fitness = np.array([ind.get_fitness() for ind in candidates], dtype=float)
    if np.isnan(fitness).any():
        raise InvalidStateError("roulette selection needs evaluated candidates")
    if (fitness < 0).any():
        raise InvalidArgumentError("roulette selection needs non-negative fitness")

    total = fitness.sum()
    if total == 0:
        fitness = np.ones(size)
        total = float(size)
    cumulative = np.cumsum(fitness)
    winners = []
    for _ in range(n):
        m = int(np.searchsorted(cumulative, random.next_double() * total, side='right'))
        winners.append(candidates[min(m, size - 1)])
    return winners


class GeneticOperators:
    """
    Crossover strategy plus elite selection policy.

    Bundles the common policy choices so a plan can delegate
    apply_crossover() and apply_selection() to it. After the elite block,
    the remaining survivors come from a tournament or a roulette wheel.
    """

    SELECTIONS = ('tournament', 'roulette')

    def __init__(self,
                 random: RandomSource,
                 crossover: str = 'two_point',
                 elite_count: int = 2,
                 tournament_size: int = 2,
                 selection: str = 'tournament'):
        """
        Initialize genetic operators.

        Args:
            random: Shared random source
            crossover: 'single_point', 'two_point' or 'uniform'
            elite_count: Survivors copied by rank (0 disables elitism)
            tournament_size: K for the tournament filling the rest
            selection: 'tournament' or 'roulette' (maximization only)
        """
        if crossover not in CROSSOVERS:
            raise InvalidArgumentError(f"unknown crossover: {crossover!r}")
        if elite_count < 0:
            raise InvalidArgumentError(f"elite count must be >= 0: {elite_count}")
        if tournament_size < 1:
            raise InvalidArgumentError(f"tournament size must be >= 1: {tournament_size}")
        if selection not in self.SELECTIONS:
            raise InvalidArgumentError(f"unknown selection: {selection!r}")
        self.random = random
        self.crossover_name = crossover
        self._crossover = CROSSOVERS[crossover]
        self.elite_count = elite_count
        self.tournament_size = tournament_size
        self.selection = selection

    def crossover(self, x: Individual, y: Individual):
        self._crossover(x, y, self.random)

    def select(self, population: Sequence[T]) -> List[T]:
        """Elite block followed by the selected fill; len(population) total"""
        size = len(population)
        elite = min(self.elite_count, size)
        winners = select_elite(population, elite) if elite else []
        if size > elite:
            if self.selection == 'roulette':
                winners.extend(select_roulette(population, self.random, size - elite))
            else:
                winners.extend(select_tournament(population, self.random,
                                                 size - elite, self.tournament_size))
        return winners
