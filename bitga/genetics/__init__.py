"""
Genetics Module
===============

Bit-string genotype representation, masks, individuals and random sources.
"""

from .mask import Mask
from .genotype import GenoType, GenoTypeLayout
from .individual import Individual, flip_mask
from .random_source import RandomSource, JavaRandom, NumpyRandom, create_random

__all__ = [
    'Mask',
    'GenoType',
    'GenoTypeLayout',
    'Individual',
    'flip_mask',
    'RandomSource',
    'JavaRandom',
    'NumpyRandom',
    'create_random',
]
