import pytest

from bitga.exceptions import InvalidArgumentError, InvalidStateError
from bitga.genetics import GenoType, Individual, JavaRandom
from bitga.optimization.ga import (
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


class FixedRandom(JavaRandom):
    """Returns queued next_int values, then falls back to the LCG."""

    def __init__(self, ints):
        super().__init__(0)
        self.ints = list(ints)

    def next_int(self, bound):
        if self.ints:
            return self.ints.pop(0)
        return super().next_int(bound)


def make_pair(widths=(4,) * 4):
    x = Individual(GenoType(list(widths)))
    y = Individual(GenoType(list(widths)))
    mask = y.genotype.get_mask()
    mask.set(0, mask.length)
    y.genotype.invert(mask)
    return x, y


def test_single_point_mask():
    assert list(single_point_mask(8, 5).indices()) == [5, 6, 7]
    assert single_point_mask(8, 8).is_empty()
    assert single_point_mask(8, 0).cardinality() == 8


def test_two_point_mask_ignores_order():
    assert two_point_mask(10, 7, 3) == two_point_mask(10, 3, 7)
    assert list(two_point_mask(10, 3, 7).indices()) == [3, 4, 5, 6]
    assert two_point_mask(10, 4, 4).is_empty()


def test_single_point_cut_zero_swaps_everything():
    x, y = make_pair()
    crossover_single_point(x, y, FixedRandom([0]))
    assert str(x.genotype) == "1111 1111 1111 1111"
    assert str(y.genotype) == "0000 0000 0000 0000"


def test_single_point_cut():
    x, y = make_pair()
    crossover_single_point(x, y, FixedRandom([6]))
    # bits 6.. come from the other parent; loci print MSB first
    assert str(x.genotype) == "0000 1100 1111 1111"
    assert str(y.genotype) == "1111 0011 0000 0000"


def test_two_point_cut():
    x, y = make_pair()
    crossover_two_point(x, y, FixedRandom([12, 4]))
    assert str(x.genotype) == "0000 1111 1111 0000"
    assert str(y.genotype) == "1111 0000 0000 1111"


def test_crossover_preserves_bit_totals():
    random = JavaRandom(77)
    for operator in (crossover_single_point, crossover_two_point, crossover_uniform):
        x, y = make_pair((3, 5, 8))
        operator(x, y, random)
        for i in range(3):
            assert (x.genotype.get_long(i) ^ y.genotype.get_long(i)) == 2 ** x.genotype.get_length(i) - 1


def test_select_elite():
    candidates = list("abcde")
    assert select_elite(candidates, 2) == ['a', 'b']
    assert select_elite(candidates, 5) == candidates
    for n in (0, 6):
        with pytest.raises(InvalidArgumentError):
            select_elite(candidates, n)


def test_tournament_picks_lowest_drawn_index():
    candidates = list("abcdef")
    winners = select_tournament(candidates, FixedRandom([4, 2, 5, 5, 1, 3]), 3, 2)
    assert winners == ['c', 'f', 'b']


def test_tournament_of_one_is_uniform_draw():
    candidates = list("abcdef")
    assert select_tournament(candidates, FixedRandom([5, 0, 3]), 3, 1) == ['f', 'a', 'd']


def test_tournament_validation():
    candidates = list("abc")
    random = JavaRandom(1)
    with pytest.raises(InvalidArgumentError):
        select_tournament(candidates, random, 0, 2)
    with pytest.raises(InvalidArgumentError):
        select_tournament(candidates, random, 4, 2)
    with pytest.raises(InvalidArgumentError):
        select_tournament(candidates, random, 2, 0)


@pytest.mark.parametrize("elite", [0, 2, 10, 25])
def test_operators_select_keeps_size(elite):
    population = list(range(10))
    operators = GeneticOperators(JavaRandom(3), elite_count=elite, tournament_size=3)
    winners = operators.select(population)
    assert len(winners) == 10
    assert winners[:min(elite, 10)] == population[:min(elite, 10)]


def test_operators_validation():
    with pytest.raises(InvalidArgumentError):
        GeneticOperators(JavaRandom(1), crossover='three_point')
    with pytest.raises(InvalidArgumentError):
        GeneticOperators(JavaRandom(1), elite_count=-1)


def test_operators_reject_bad_tournament_size():
    with pytest.raises(InvalidArgumentError):
        GeneticOperators(JavaRandom(1), tournament_size=0)
    with pytest.raises(InvalidArgumentError):
        GeneticOperators(JavaRandom(1), selection='rank')


class FixedDoubles(JavaRandom):
    def __init__(self, doubles):
        super().__init__(0)
        self.doubles = list(doubles)

    def next_double(self):
        return self.doubles.pop(0)


def scored(*values):
    individuals = []
    for value in values:
        individual = Individual(GenoType([1]))
        individual.set_fitness(value)
        individuals.append(individual)
    return individuals


def positions(candidates, winners):
    # identity, since equal genotypes compare equal
    return [next(i for i, c in enumerate(candidates) if c is w) for w in winners]


def test_roulette_is_fitness_proportional():
    candidates = scored(3.0, 0.0, 1.0)
    winners = select_roulette(candidates, FixedDoubles([0.0, 0.74, 0.75]), 3)
    assert positions(candidates, winners) == [0, 0, 2]


def test_roulette_with_all_zero_fitness_is_uniform():
    candidates = scored(0.0, 0.0, 0.0, 0.0)
    winners = select_roulette(candidates, FixedDoubles([0.1, 0.3, 0.6, 0.9]), 4)
    assert positions(candidates, winners) == [0, 1, 2, 3]


def test_roulette_validation():
    random = JavaRandom(1)
    with pytest.raises(InvalidArgumentError):
        select_roulette(scored(1.0, -1.0), random, 1)
    with pytest.raises(InvalidArgumentError):
        select_roulette(scored(1.0, 2.0), random, 3)
    with pytest.raises(InvalidStateError):
        select_roulette([Individual(GenoType([1]))], random, 1)


def test_operators_roulette_fill():
    population = scored(*range(10, 0, -1))
    operators = GeneticOperators(JavaRandom(3), elite_count=1, selection='roulette')
    winners = operators.select(population)
    assert len(winners) == 10
    assert winners[0] is population[0]
    assert len(positions(population, winners)) == 10
