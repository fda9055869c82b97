"""Tests for fodgetools.perm.permutation and fodgetools.utils.bitwise."""
import pytest

from fodgetools.perm import Permutation
from fodgetools.utils.bitwise import all_mask, bitcount, unshift, iter_bits, format_bits


# --- bitwise ---

def test_all_mask():
    assert all_mask(0) == 0
    assert all_mask(4) == 0b1111


def test_bitcount():
    assert bitcount(0) == 0
    assert bitcount(0b101101) == 4


def test_unshift_single_bit():
    for i in range(40):
        assert unshift(1 << i) == i


def test_unshift_rejects_zero():
    with pytest.raises(ValueError):
        unshift(0)


def test_iter_bits():
    assert list(iter_bits(0b100110)) == [1, 2, 5]


def test_format_bits_lsb_first():
    assert format_bits(0b0011, 4) == "XX.."
    assert format_bits(0b1000, 4) == "...X"


def test_format_bits_ignores_high_bits():
    assert format_bits(0b110001, 4) == "X..."


# --- construction ---

def test_identity():
    p = Permutation.identity(4)
    assert p.as_tuple() == (0, 1, 2, 3)
    assert p.is_identity()


def test_cyclic():
    assert Permutation.cyclic(4, 1).as_tuple() == (1, 2, 3, 0)
    assert Permutation.cyclic(4, 3).as_tuple() == (3, 0, 1, 2)
    assert Permutation.cyclic(4, 4).is_identity()


def test_rejects_non_permutation():
    with pytest.raises(ValueError):
        Permutation([0, 0, 1])
    with pytest.raises(ValueError):
        Permutation([1, 2, 3])


def test_rejects_empty():
    with pytest.raises(ValueError):
        Permutation([])


def test_getitem_out_of_range():
    p = Permutation.identity(3)
    with pytest.raises(IndexError):
        p[3]


def test_str():
    assert str(Permutation([1, 2, 0])) == "( 1 2 0 )"


# --- group structure ---

def test_composition_applies_right_first():
    p = Permutation([1, 2, 0])
    q = Permutation([0, 2, 1])
    assert (p * q).as_tuple() == (1, 0, 2)
    assert (q * p).as_tuple() == (2, 1, 0)


def test_composition_size_mismatch():
    with pytest.raises(ValueError):
        Permutation.identity(3) * Permutation.identity(4)


def test_inverse():
    p = Permutation([2, 0, 3, 1])
    assert (p * p.inverse()).is_identity()
    assert (p.inverse() * p).is_identity()


def test_associativity():
    p = Permutation([2, 0, 3, 1])
    q = Permutation([1, 0, 3, 2])
    r = Permutation([3, 2, 1, 0])
    assert (p * q) * r == p * (q * r)


def test_powers():
    p = Permutation.cyclic(5, 1)
    assert p ** 0 == Permutation.identity(5)
    assert p ** 2 == Permutation.cyclic(5, 2)
    assert p ** 5 == Permutation.identity(5)
    assert p ** 13 == Permutation.cyclic(5, 3)


def test_negative_power_is_inverse_power():
    p = Permutation([2, 0, 3, 1])
    assert p ** -1 == p.inverse()
    assert p ** -3 == p.inverse() ** 3


def test_reverse():
    assert Permutation([2, 0, 1]).reverse().as_tuple() == (1, 0, 2)


def test_swap():
    assert Permutation.identity(3).swap(0, 2).as_tuple() == (2, 1, 0)


def test_modulo_picks_least_coset_element():
    p = Permutation([2, 0, 1])
    c = Permutation.cyclic(3, 1)
    assert (p % c).is_identity()


def test_modulo_is_constant_on_cosets():
    p = Permutation([3, 1, 0, 2])
    c = Permutation.cyclic(4, 1)
    assert p % c == (p * c) % c == (p * c ** 3) % c


# --- cycle structure ---

def test_cycles():
    assert Permutation([1, 2, 0, 3]).cycles() == [(0, 1, 2), (3,)]


def test_cycle_type():
    assert Permutation([1, 0, 3, 4, 2]).cycle_type() == [2, 3]


@pytest.mark.parametrize(
    "images, order",
    [
        ([0, 1, 2], 1),
        ([1, 0, 2], 2),
        ([1, 2, 0], 3),
        ([1, 0, 3, 4, 2], 6),
    ],
)
def test_order(images, order):
    p = Permutation(images)
    assert p.order() == order
    assert (p ** order).is_identity()


@pytest.mark.parametrize(
    "images, parity",
    [
        ([0, 1, 2], 0),
        ([1, 0, 2], 1),
        ([1, 2, 0], 0),
        ([1, 2, 3, 0], 1),
        ([1, 0, 3, 2], 0),
    ],
)
def test_parity(images, parity):
    assert Permutation(images).parity() == parity


def test_fixed_points():
    assert Permutation([0, 2, 1, 3]).fixed_points() == [0, 3]


# --- actions ---

def test_permute_moves_entry_to_image():
    p = Permutation([1, 2, 0])
    assert p.permute(["a", "b", "c"]) == ["c", "a", "b"]


def test_permute_is_compatible_with_composition():
    p = Permutation([2, 0, 3, 1])
    q = Permutation([1, 3, 0, 2])
    x = list("wxyz")
    assert p.permute(q.permute(list(x))) == (p * q).permute(list(x))


def test_permute_blocks_with_offset():
    p = Permutation([1, 0])
    assert p.permute([9, 1, 2, 3, 4], offset=1, block_len=2) == [9, 3, 4, 1, 2]


def test_permute_out_of_range():
    with pytest.raises(IndexError):
        Permutation.identity(3).permute([1, 2, 3], offset=1)


def test_permute_bits_matches_permute():
    p = Permutation([2, 0, 3, 1])
    for mask in range(16):
        bits = [(mask >> i) & 1 for i in range(4)]
        moved = p.permute(bits)
        assert p.permute_bits(mask) == sum(b << i for i, b in enumerate(moved))


def test_permute_bits_offset_keeps_outside_bits():
    p = Permutation([1, 0])
    # bits 2..3 are acted on, bit 0 and bit 4 stay
    assert p.permute_bits(0b10101, offset=2) == 0b11001


def test_embedded():
    sub = Permutation([1, 0])
    assert Permutation.embedded(4, sub, offset=1).as_tuple() == (0, 2, 1, 3)
    assert Permutation.embedded(4, sub, offset=0, block_len=2).as_tuple() == (2, 3, 0, 1)


def test_hash_and_eq():
    assert len({Permutation([1, 0]), Permutation([1, 0]), Permutation([0, 1])}) == 2
