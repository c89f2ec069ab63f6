"""
Generation Metrics Module
=========================

Per-generation fitness statistics and run history.
"""

import numpy as np
from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional, Sequence

from ..genetics import Individual


@dataclass
class GenerationStats:
    """Fitness statistics of one ranked population"""
    generation: int
    best: float
    worst: float
    mean: float
    std: float
    evaluated: int = 0  # individuals with valid fitness

    @classmethod
    def from_population(cls, generation: int,
                        ranked: Sequence[Individual]) -> 'GenerationStats':
        """
        Compute stats from a population sorted best-first.

        Args:
            generation: Generation index
            ranked: Individuals, best first, all with valid fitness
        """
        values = np.array([ind.get_fitness() for ind in ranked], dtype=float)
        return cls(
            generation=generation,
            best=float(values[0]),
            worst=float(values[-1]),
            mean=float(values.mean()),
            std=float(values.std()),
            evaluated=int(np.count_nonzero(~np.isnan(values))),
        )

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass
class RunHistory:
    """
    Statistics of every generation plus the best individual seen.

    "Best" follows the engine's ranking direction: with maximize=True a
    higher fitness wins.
    """
    maximize: bool = True
    generations: List[GenerationStats] = field(default_factory=list)
    best_individual: Optional[Individual] = None
    best_generation: int = -1

    def record(self, stats: GenerationStats, top: Individual) -> bool:
        """
        Append stats and update the running best.

        Args:
            stats: Statistics of the generation
            top: Copy of the generation's rank-1 individual

        Returns:
            True if top improved on the best so far
        """
        self.generations.append(stats)
        improved = (top.is_greater_than(self.best_individual) if self.maximize
                    else top.is_less_than(self.best_individual))
        if improved:
            self.best_individual = top
            self.best_generation = stats.generation
        return improved

    @property
    def best_fitness(self) -> float:
        if self.best_individual is None:
            return float('nan')
        return self.best_individual.get_fitness()

    def best_curve(self) -> np.ndarray:
        return np.array([s.best for s in self.generations])

    def mean_curve(self) -> np.ndarray:
        return np.array([s.mean for s in self.generations])

    def to_dict(self) -> Dict:
        return {
            'maximize': self.maximize,
            'best_fitness': self.best_fitness,
            'best_generation': self.best_generation,
            'best_genotype': (self.best_individual.to_genotype_string()
                              if self.best_individual is not None else None),
            'generations': [s.to_dict() for s in self.generations],
        }
