"""
Pipeline Module
===============

Evolution run driver.
"""

from .runner import EvolutionRunner, RunResult

__all__ = [
    'EvolutionRunner',
    'RunResult',
]
