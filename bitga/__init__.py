"""
bitga - Bit-String Genetic Algorithm
====================================

Evolutionary optimization over fixed-layout bit-string genotypes.

Key Features:
- Segmented genotypes with typed locus access (bool, bits, long, double, scaled)
- Mask-based invert and swap primitives
- Individuals with phenotype cache and automatic fitness invalidation
- Generational engine: crossover with generation gap, mutation, lazy
  fitness evaluation, pluggable selection
- Java-compatible seeded random source for reproducible runs

Version: 1.0.0
"""

__version__ = "1.0.0"

from .exceptions import (
    GeneticAlgorithmError,
    InvalidLayoutError,
    InvalidAccessError,
    InvalidArgumentError,
    IncompatibleSchemaError,
    OutOfRangeError,
    InvalidStateError,
)
from .config import Config, EvolutionConfig, LoggingConfig
from .genetics import (
    Mask,
    GenoType,
    GenoTypeLayout,
    Individual,
    RandomSource,
    JavaRandom,
    NumpyRandom,
)
from .optimization import GeneticAlgorithm, GeneticAlgorithmPlan, GeneticOperators
from .metrics import GenerationStats, RunHistory
from .pipeline import EvolutionRunner, RunResult

__all__ = [
    'GeneticAlgorithmError', 'InvalidLayoutError', 'InvalidAccessError',
    'InvalidArgumentError', 'IncompatibleSchemaError', 'OutOfRangeError',
    'InvalidStateError',
    'Config', 'EvolutionConfig', 'LoggingConfig',
    'Mask', 'GenoType', 'GenoTypeLayout', 'Individual',
    'RandomSource', 'JavaRandom', 'NumpyRandom',
    'GeneticAlgorithm', 'GeneticAlgorithmPlan', 'GeneticOperators',
    'GenerationStats', 'RunHistory',
    'EvolutionRunner', 'RunResult',
]
