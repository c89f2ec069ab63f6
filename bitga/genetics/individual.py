"""
Individual Module
=================

Genotype wrapper with phenotype cache and fitness.

Phenotype slots hold arbitrary decoded values (one per locus). They and
the fitness are invalidated whenever the genotype bits change, provided
the individual is the genotype's active watcher.
"""

import math
import numpy as np
from typing import Any, List, Optional

from .genotype import GenoType
from .mask import Mask
from .random_source import RandomSource
from ..exceptions import (
    InvalidArgumentError,
    InvalidStateError,
    OutOfRangeError,
    check_probability,
)

INVALID_FITNESS = float('nan')


class Individual:
    """
    Candidate solution: one exclusively owned genotype, a phenotype cache
    and a fitness value.

    Fitness:
    - NaN = not evaluated (invalid)
    - Set by the plan's evaluator; NaN may not be set explicitly

    Ordering compares fitness only and fails on invalid fitness. Equality
    compares genotype content.
    """

    def __init__(self, genotype: GenoType):
        self._genotype = genotype
        self._phenotype: List[Any] = [None] * genotype.locus_count
        self._fitness = INVALID_FITNESS

    @property
    def genotype(self) -> GenoType:
        return self._genotype

    # ------------------------------------------------------------------
    # Genotype accessors
    # ------------------------------------------------------------------

    def get_genotype_boolean(self, i: int) -> bool:
        return self._genotype.get_boolean(i)

    def get_genotype_bits(self, i: int) -> np.ndarray:
        return self._genotype.get_bits(i)

    def get_genotype_long(self, i: int) -> int:
        return self._genotype.get_long(i)

    def get_genotype_double(self, i: int) -> float:
        return self._genotype.get_double(i)

    def get_genotype_scaled(self, i: int, minimum: float, maximum: float) -> float:
        return self._genotype.get_scaled(i, minimum, maximum)

    # ------------------------------------------------------------------
    # Phenotype / fitness
    # ------------------------------------------------------------------

    def get_phenotype(self, i: int) -> Any:
        self._check_slot(i)
        return self._phenotype[i]

    def set_phenotype(self, i: int, value: Any):
        self._check_slot(i)
        self._phenotype[i] = value

    def has_fitness(self) -> bool:
        return not math.isnan(self._fitness)

    def get_fitness(self) -> float:
        """Fitness, or NaN when invalid"""
        return self._fitness

    def set_fitness(self, fitness: float):
        fitness = float(fitness)
        if math.isnan(fitness):
            raise InvalidArgumentError("fitness must not be NaN")
        self._fitness = fitness

    fitness = property(get_fitness, set_fitness)

    def _check_slot(self, i: int):
        if not 0 <= i < len(self._phenotype):
            raise OutOfRangeError(f"phenotype index {i} outside [0, {len(self._phenotype)})")

    # ------------------------------------------------------------------
    # Watcher
    # ------------------------------------------------------------------

    def activate_watcher(self):
        self._genotype.set_watcher(self.on_genotype_changed)

    def deactivate_watcher(self):
        self._genotype.set_watcher(None)

    def is_watching(self) -> bool:
        return getattr(self._genotype.watcher, '__self__', None) is self

    def on_genotype_changed(self):
        for i in range(len(self._phenotype)):
            self._phenotype[i] = None
        self._fitness = INVALID_FITNESS

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def mutate(self, random: RandomSource, probability: float) -> bool:
        """
        Flip each bit independently with the given probability.

        One next_double() is drawn per bit, in bit order, whatever the
        probability.

        Returns:
            True if any bit flipped
        """
        check_probability("mutation rate", probability)
        mask = flip_mask(self._genotype, random, probability)
        self._genotype.invert(mask)
        return not mask.is_empty()

    def randomize(self, random: RandomSource) -> bool:
        return self.mutate(random, 0.5)

    # ------------------------------------------------------------------
    # Ordering
    # ------------------------------------------------------------------

    def compare_to(self, other: 'Individual') -> int:
        """
        Three-way fitness comparison.

        Raises:
            InvalidStateError: if either fitness is invalid
        """
        if not self.has_fitness():
            raise InvalidStateError(f"invalid fitness: {self!r}")
        if not other.has_fitness():
            raise InvalidStateError(f"invalid fitness: {other!r}")
        return (self._fitness > other._fitness) - (self._fitness < other._fitness)

    def is_greater_than(self, other: Optional['Individual']) -> bool:
        """True if fitter than other under ascending order, or other is None"""
        return other is None or self.compare_to(other) > 0

    def is_less_than(self, other: Optional['Individual']) -> bool:
        return other is None or self.compare_to(other) < 0

    def __lt__(self, other: 'Individual') -> bool:
        return self.compare_to(other) < 0

    def __le__(self, other: 'Individual') -> bool:
        return self.compare_to(other) <= 0

    def __gt__(self, other: 'Individual') -> bool:
        return self.compare_to(other) > 0

    def __ge__(self, other: 'Individual') -> bool:
        return self.compare_to(other) >= 0

    def __eq__(self, other) -> bool:
        if not isinstance(other, Individual):
            return NotImplemented
        return self._genotype == other._genotype

    def __hash__(self) -> int:
        return hash(self._genotype)

    # ------------------------------------------------------------------
    # Copy / display
    # ------------------------------------------------------------------

    def copy(self) -> 'Individual':
        """
        Deep-copy the genotype, shallow-copy phenotype slots, keep fitness.

        The copy is not registered as watcher of its new genotype.
        """
        clone = self.__class__.__new__(self.__class__)
        clone.__dict__.update(self.__dict__)
        clone._genotype = self._genotype.copy()
        clone._phenotype = list(self._phenotype)
        return clone

    __copy__ = copy

    def to_genotype_string(self) -> str:
        return str(self._genotype)

    def to_phenotype_string(self) -> str:
        return repr(self._phenotype)

    def describe(self) -> str:
        """Multi-line summary: identity, genotype, phenotype"""
        return '\n'.join([repr(self), self.to_genotype_string(), self.to_phenotype_string()])

    def __repr__(self) -> str:
        return f"{hash(self._genotype) & 0xFFFFFFFF:08x}#{self._fitness}"


def flip_mask(genotype: GenoType, random: RandomSource, probability: float) -> Mask:
    """Mask selecting each bit with the given probability (one draw per bit)"""
    check_probability("probability", probability)
    mask = genotype.get_mask()
    for i in range(mask.length):
        if random.next_double() < probability:
            mask.set(i)
    return mask
