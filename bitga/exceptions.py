"""
Exceptions Module
=================

Error taxonomy for genotype, individual and engine operations.

Every error derives from GeneticAlgorithmError and from the builtin that
best describes it, so callers may catch either.
"""


class GeneticAlgorithmError(Exception):
    """Base class for all bitga errors"""


class InvalidLayoutError(GeneticAlgorithmError, ValueError):
    """Locus layout is empty or contains a width below 1"""


class InvalidAccessError(GeneticAlgorithmError, ValueError):
    """Locus width is incompatible with the requested accessor"""


class InvalidArgumentError(GeneticAlgorithmError, ValueError):
    """Out-of-range or NaN probability, same-instance swap, bad value"""


class IncompatibleSchemaError(GeneticAlgorithmError, ValueError):
    """Swap or crossover between genotypes with different layouts"""


class OutOfRangeError(GeneticAlgorithmError, IndexError):
    """Locus index, bit index or rank outside its bounds"""


class InvalidStateError(GeneticAlgorithmError, RuntimeError):
    """Plan contract violation or comparison of unevaluated individuals"""


def check_probability(name: str, probability: float) -> float:
    """
    Validate a probability-like argument.

    Args:
        name: Argument name used in the error message
        probability: Value to check

    Returns:
        The value as float

    Raises:
        InvalidArgumentError: if NaN, below 0 or above 1
    """
    # NaN fails both comparisons
    if not (0.0 <= probability <= 1.0):
        raise InvalidArgumentError(f"{name} must be in [0, 1]: {probability}")
    return float(probability)
