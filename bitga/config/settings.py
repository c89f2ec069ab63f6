"""
Configuration Settings Module
==============================

Dataclass-based configuration with validation and defaults.
"""

import logging
from dataclasses import dataclass, field, asdict, fields
from typing import Any, Dict, Optional

from ..exceptions import InvalidArgumentError, check_probability


@dataclass
class EvolutionConfig:
    """Genetic Algorithm run parameters"""
    population_size: int = 80
    generations: int = 200
    crossover_rate: float = 0.7
    generation_gap: float = 0.9
    mutation_rate: float = 0.01

    # Selection: elite block, tournament fills the rest
    elite_count: int = 2
    tournament_size: int = 2

    crossover: str = 'two_point'  # 'single_point', 'two_point', 'uniform'
    reverse_order: bool = True    # rank highest fitness first

    def __post_init__(self):
        if self.population_size < 1:
            raise InvalidArgumentError(f"population_size must be >= 1: {self.population_size}")
        if self.generations < 0:
            raise InvalidArgumentError(f"generations must be >= 0: {self.generations}")
        check_probability("crossover_rate", self.crossover_rate)
        check_probability("generation_gap", self.generation_gap)
        check_probability("mutation_rate", self.mutation_rate)
        # an elite larger than the population keeps everyone
        if self.elite_count < 0:
            raise InvalidArgumentError(f"elite_count must be >= 0: {self.elite_count}")
        if self.tournament_size < 1:
            raise InvalidArgumentError(f"tournament_size must be >= 1: {self.tournament_size}")


@dataclass
class LoggingConfig:
    """Logging setup used by the command line entry point"""
    level: str = 'WARNING'
    format: str = '%(asctime)s %(levelname)s %(name)s: %(message)s'

    def apply(self):
        logging.basicConfig(level=self.level.upper(), format=self.format)


@dataclass
class Config:
    """
    Master configuration class combining all sub-configurations.

    Usage:
        config = Config()
        config = Config(evolution=EvolutionConfig(population_size=50))
    """
    evolution: EvolutionConfig = field(default_factory=EvolutionConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Global settings
    random_seed: Optional[int] = None
    rng: str = 'java'  # 'java' or 'numpy'
    verbose: bool = False

    def __post_init__(self):
        if self.rng not in ('java', 'numpy'):
            raise InvalidArgumentError(f"rng must be 'java' or 'numpy': {self.rng!r}")

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'Config':
        """Create Config from dictionary (nested dicts for sub-configs)"""
        known = {f.name for f in fields(cls)}
        kwargs = {key: value for key, value in d.items() if key in known}
        if isinstance(kwargs.get('evolution'), dict):
            kwargs['evolution'] = EvolutionConfig(**kwargs['evolution'])
        if isinstance(kwargs.get('logging'), dict):
            kwargs['logging'] = LoggingConfig(**kwargs['logging'])
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Export config to dictionary"""
        return asdict(self)
