"""
Metrics Module
==============

Fitness statistics and run history.
"""

from .generation_metrics import GenerationStats, RunHistory

__all__ = [
    'GenerationStats',
    'RunHistory',
]
