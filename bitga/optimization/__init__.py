"""
Optimization Module
===================

Bit-string genetic search.
"""

from .ga import GeneticAlgorithm, GeneticAlgorithmPlan, GeneticOperators

__all__ = [
    'GeneticAlgorithm',
    'GeneticAlgorithmPlan',
    'GeneticOperators',
]
