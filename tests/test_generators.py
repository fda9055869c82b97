"""Tests for fodgetools.perm.generators."""
import math

import pytest

from fodgetools.errors import InvalidRequestError
from fodgetools.perm import Permutation, ZnGenerator, SnGenerator, ZRGenerator


# --- Zn ---

def test_zn_walks_all_rotations():
    perms = list(ZnGenerator(4))
    assert perms == [Permutation.cyclic(4, k) for k in range(4)]


def test_zn_ends_at_identity():
    gen = ZnGenerator(5)
    for _ in range(5):
        gen.advance()
    assert gen.done
    assert gen.perm.is_identity()


def test_zn_size_one():
    gen = ZnGenerator(1)
    assert list(gen) == [Permutation.identity(1)]
    assert len(gen) == 1


# --- Sn ---

@pytest.mark.parametrize("n", [1, 2, 3, 4, 5])
def test_sn_walks_whole_group(n):
    gen = SnGenerator(n)
    perms = list(gen)
    assert len(perms) == math.factorial(n) == len(gen)
    assert len(set(perms)) == len(perms)
    assert perms[0].is_identity()


def test_sn_steps_are_transpositions():
    perms = list(SnGenerator(4))
    for a, b in zip(perms, perms[1:]):
        assert sum(1 for x, y in zip(a, b) if x != y) == 2


def test_sn_can_be_walked_twice():
    gen = SnGenerator(3)
    first = list(gen)
    assert gen.done and gen.perm.is_identity()
    assert list(gen) == first


# --- ZR ---

@pytest.mark.parametrize(
    "sizes, order",
    [
        ((4,), 4),
        ((2, 2), 8),
        ((2, 4), 8),
        ((2, 3, 3), 36),
        ((1, 1), 2),
        ((2, 2, 2), 48),
    ],
)
def test_zr_group_order(sizes, order):
    gen = ZRGenerator(sizes)
    perms = list(gen)
    assert len(gen) == order
    assert len(perms) == order
    assert len(set(perms)) == order


def test_zr_starts_and_ends_at_identity():
    gen = ZRGenerator((2, 3, 3))
    perms = list(gen)
    assert perms[0].is_identity()
    assert gen.done and gen.perm.is_identity()


def test_zr_keeps_traces_together():
    sizes = (2, 3, 3)
    starts = [0, 2, 5]
    traces = [set(range(b, b + s)) for b, s in zip(starts, sizes)]
    for p in ZRGenerator(sizes):
        for tr in traces:
            image = {p[i] for i in tr}
            assert image in traces


def test_zr_is_closed_under_composition():
    perms = set(ZRGenerator((2, 2)))
    for p in perms:
        for q in perms:
            assert p * q in perms


@pytest.mark.parametrize("sizes", [(), (3, 2), (0, 2), (-1, 3)])
def test_zr_rejects_bad_sizes(sizes):
    with pytest.raises(InvalidRequestError):
        ZRGenerator(sizes)
