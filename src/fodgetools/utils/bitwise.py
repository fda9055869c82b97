from __future__ import annotations

from typing import Iterator


def all_mask(n: int) -> int:
    """Mask with the lowest n bits set."""
    return (1 << n) - 1


def bitcount(mask: int) -> int:
    return bin(mask).count("1")


def unshift(mask: int) -> int:
    """
    Index of the highest set bit of mask.

    For single-bit masks this is the inverse of ``1 << idx``.
    """
    if mask <= 0:
        raise ValueError(f"unshift needs a positive mask, got {mask}")
    return mask.bit_length() - 1


def iter_bits(mask: int) -> Iterator[int]:
    """Yield the indices of the set bits of mask, lowest first."""
    while mask:
        lsb = mask & -mask
        yield lsb.bit_length() - 1
        mask ^= lsb


def format_bits(mask: int, n: int, high: str = "X", low: str = ".") -> str:
    """Render the lowest n bits of mask, least significant bit first."""
    chars = [low] * n
    for i in iter_bits(mask & all_mask(n)):
        chars[i] = high
    return "".join(chars)
