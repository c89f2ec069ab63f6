import math
import struct

import pytest

from bitga.exceptions import InvalidArgumentError, InvalidStateError, OutOfRangeError
from bitga.genetics import GenoType, GenoTypeLayout, Individual, JavaRandom


@pytest.fixture
def individual(zero_genotype) -> Individual:
    return Individual(zero_genotype)


def test_new_individual_is_unevaluated(individual):
    assert not individual.has_fitness()
    assert math.isnan(individual.get_fitness())
    assert [individual.get_phenotype(i) for i in range(8)] == [None] * 8


def test_mutate_reference_sequence(zero_genotype):
    random = JavaRandom(59034)
    expected = [
        (0, "0000 0000 0000 0000 0000 0000 0000 0000"),
        (0.1, "0010 0001 0000 0000 0000 0100 0000 0000"),
        (0.5, "1011 1100 1000 1111 1001 1110 1111 0100"),
        (1, "1111 1111 1111 1111 1111 1111 1111 1111"),
    ]
    for rate, genotype_string in expected:
        p = Individual(zero_genotype.copy())
        p.mutate(random, rate)
        assert p.to_genotype_string() == genotype_string
    assert str(zero_genotype) == "0000 0000 0000 0000 0000 0000 0000 0000"


def test_randomize_reference(zero_genotype):
    random = JavaRandom(343129087)
    p = Individual(zero_genotype.copy())
    p.randomize(random)
    assert p.to_genotype_string() == "1101 0011 0110 0111 1000 1010 1111 0101"


def test_double_locus_reference():
    random = JavaRandom(245238909421)
    a = Individual(GenoTypeLayout().append(64).inflate())
    a.randomize(random)
    binary = "1100101001001101011110010010010001101010011011110111001000001111"
    assert a.to_genotype_string() == binary
    expected = struct.unpack('<d', struct.pack('<Q', int(binary, 2)))[0]
    assert a.get_genotype_double(0) == expected


@pytest.mark.parametrize("rate", [float('nan'), -1e-300, 1.000000001])
def test_mutate_rejects_bad_rate(individual, rate):
    with pytest.raises(InvalidArgumentError):
        individual.mutate(JavaRandom(1), rate)


def test_mutate_reports_change(individual):
    random = JavaRandom(7)
    assert individual.mutate(random, 0) is False
    assert individual.mutate(random, 1) is True


def test_set_fitness_rejects_nan(individual):
    with pytest.raises(InvalidArgumentError):
        individual.set_fitness(float('nan'))
    individual.fitness = 3.5
    assert individual.has_fitness()
    assert individual.fitness == 3.5


def test_phenotype_bounds(individual):
    individual.set_phenotype(7, 'x')
    assert individual.get_phenotype(7) == 'x'
    with pytest.raises(OutOfRangeError):
        individual.get_phenotype(8)
    with pytest.raises(OutOfRangeError):
        individual.set_phenotype(-1, 'x')


def test_watching_individual_is_invalidated_by_mutation(individual):
    individual.activate_watcher()
    individual.set_fitness(1.0)
    individual.set_phenotype(0, 'cached')

    individual.mutate(JavaRandom(3), 1.0)
    assert not individual.has_fitness()
    assert individual.get_phenotype(0) is None


def test_empty_invert_keeps_cache(individual):
    individual.activate_watcher()
    individual.set_fitness(2.0)
    individual.set_phenotype(1, 42)

    individual.mutate(JavaRandom(3), 0.0)
    assert individual.get_fitness() == 2.0
    assert individual.get_phenotype(1) == 42


def test_swap_invalidates_both_sides(zero_genotype):
    x = Individual(zero_genotype.copy())
    y = Individual(zero_genotype.copy())
    for ind in (x, y):
        ind.activate_watcher()
        ind.set_fitness(0.0)
        ind.set_phenotype(0, 'p')

    GenoType.swap(x.genotype, y.genotype, x.genotype.get_mask())
    assert not x.has_fitness() and not y.has_fitness()
    assert x.get_phenotype(0) is None and y.get_phenotype(0) is None


def test_deactivated_individual_keeps_cache(individual):
    individual.activate_watcher()
    individual.deactivate_watcher()
    individual.set_fitness(5.0)
    individual.mutate(JavaRandom(3), 1.0)
    assert individual.get_fitness() == 5.0
    assert not individual.is_watching()


def test_copy(individual):
    individual.activate_watcher()
    individual.set_fitness(4.0)
    individual.set_phenotype(2, ['shared'])

    clone = individual.copy()
    assert clone is not individual
    assert clone.genotype is not individual.genotype
    assert clone == individual
    assert clone.get_fitness() == 4.0
    assert clone.get_phenotype(2) is individual.get_phenotype(2)
    assert not clone.is_watching()
    assert individual.is_watching()

    individual.randomize(JavaRandom(11))
    assert individual.to_genotype_string() != clone.to_genotype_string()
    assert clone.get_fitness() == 4.0
    assert not individual.has_fitness()


def test_ordering_by_fitness(individual):
    individual.set_fitness(0)
    other = individual.copy()

    other.set_fitness(-1)
    assert individual.is_greater_than(other)
    assert not individual.is_less_than(other)
    assert other < individual

    other.set_fitness(0)
    assert not individual.is_greater_than(other)
    assert not individual.is_less_than(other)
    assert individual <= other and individual >= other

    other.set_fitness(1)
    assert individual.is_less_than(other)
    assert other > individual


def test_comparison_with_none(individual):
    individual.set_fitness(1)
    assert individual.is_greater_than(None)
    assert individual.is_less_than(None)


def test_comparison_with_invalid_fitness(individual):
    other = individual.copy()
    other.set_fitness(1)
    with pytest.raises(InvalidStateError):
        individual.compare_to(other)
    with pytest.raises(InvalidStateError):
        assert other < individual


def test_equality_is_content_based(zero_genotype):
    a = Individual(zero_genotype.copy())
    b = Individual(zero_genotype.copy())
    a.set_fitness(1)
    b.set_fitness(2)
    assert a == b
    assert hash(a) == hash(b)
    b.genotype.set_long(0, 1)
    assert a != b


def test_describe(individual):
    individual.set_phenotype(0, 1.5)
    lines = individual.describe().splitlines()
    assert lines[1] == "0000 0000 0000 0000 0000 0000 0000 0000"
    assert lines[2].startswith("[1.5, None")
    assert lines[0].endswith("#nan")
