"""
Problems Module
===============

Sample plans for the evolution engine.
"""

from typing import Any

from ..config import EvolutionConfig
from ..exceptions import InvalidArgumentError
from .knapsack import KnapsackPlan
from .michalewicz import MichalewiczPlan, michalewicz

PROBLEMS = {
    'knapsack': KnapsackPlan,
    'michalewicz': MichalewiczPlan,
}


def problem_evolution_config(problem: str, **overrides: Any) -> EvolutionConfig:
    """
    EvolutionConfig tuned for a sample problem.

    Args:
        problem: Key of PROBLEMS
        **overrides: EvolutionConfig fields replacing the problem defaults

    Raises:
        InvalidArgumentError: for an unknown problem or invalid values
    """
    if problem not in PROBLEMS:
        raise InvalidArgumentError(
            f"unknown problem {problem!r}; choose from {sorted(PROBLEMS)}"
        )
    params = dict(PROBLEMS[problem].DEFAULT_EVOLUTION)
    params.update(overrides)
    return EvolutionConfig(**params)


__all__ = [
    'KnapsackPlan',
    'MichalewiczPlan',
    'michalewicz',
    'PROBLEMS',
    'problem_evolution_config',
]
