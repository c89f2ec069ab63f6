import pytest

from bitga.exceptions import OutOfRangeError
from bitga.genetics import Mask


def test_set_clear_flip():
    mask = Mask(10)
    assert mask.is_empty()

    mask.set(6, 9)
    mask.set(0)
    assert list(mask.indices()) == [0, 6, 7, 8]
    assert mask.cardinality() == 4

    mask.clear(7)
    mask.flip(8, 10)
    assert list(mask.indices()) == [0, 6, 9]

    mask.clear()
    assert mask.is_empty()


def test_empty_range_selects_nothing():
    mask = Mask(8)
    mask.set(8, 8)
    mask.set(3, 3)
    assert mask.is_empty()


@pytest.mark.parametrize("args", [(-1,), (8,), (0, 9), (5, 4), (-1, 2)])
def test_out_of_range(args):
    with pytest.raises(OutOfRangeError):
        Mask(8).set(*args)


def test_copy_and_equality():
    mask = Mask.from_indices(5, [1, 3])
    copy = mask.copy()
    assert copy == mask
    copy.set(0)
    assert copy != mask
    assert mask.get(1) and not mask.get(0)


def test_array_view_is_read_only():
    mask = Mask(4)
    with pytest.raises(ValueError):
        mask.to_array()[0] = True
