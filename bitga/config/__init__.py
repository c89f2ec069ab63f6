"""
Configuration Module
====================

Centralized configuration for evolution runs.
"""

from .settings import (
    Config,
    EvolutionConfig,
    LoggingConfig,
)

__all__ = [
    'Config',
    'EvolutionConfig',
    'LoggingConfig',
]
