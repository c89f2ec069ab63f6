"""
Genetic Algorithm Module
========================

Plan contract, standard operators and the generational engine.
"""

from .plan import GeneticAlgorithmPlan
from .operators import (
    GeneticOperators,
    crossover_single_point,
    crossover_two_point,
    crossover_uniform,
    select_elite,
    select_roulette,
    select_tournament,
    single_point_mask,
    two_point_mask,
)
from .solver import GeneticAlgorithm, ascending_fitness, descending_fitness

__all__ = [
    'GeneticAlgorithmPlan',
    'GeneticOperators',
    'crossover_single_point',
    'crossover_two_point',
    'crossover_uniform',
    'select_elite',
    'select_roulette',
    'select_tournament',
    'single_point_mask',
    'two_point_mask',
    'GeneticAlgorithm',
    'ascending_fitness',
    'descending_fitness',
]
