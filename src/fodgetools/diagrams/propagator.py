from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
from typing import Tuple

from fodgetools.perm import Permutation
from fodgetools.utils.bitwise import all_mask, bitcount, format_bits


def normalise_mmask(mask: int, n_mom: int) -> int:
    """
    Canonical half of a momentum mask under momentum conservation.

    A mask and its complement describe the same momentum. The complement is
    taken when more than half of the n_mom bits are set, or exactly half with
    the top bit among them.
    """
    count = bitcount(mask)
    half = n_mom // 2
    if count > half or (count == half and mask & (1 << (n_mom - 1))):
        return mask ^ all_mask(n_mom)
    return mask


@total_ordering
@dataclass(frozen=True, eq=False)
class Propagator:
    """
    One internal edge of a diagram.

    momenta is the set of external legs whose momenta flow through the edge,
    as a bitmask over n_mom legs. src/dst orders are the orders of the two
    vertices it joins. For singlet edges src_prev/dst_prev hold the momentum
    of the leg next to the edge on either side; they are 0 otherwise.

    The stored form is always normalised: if momenta is not its own
    canonical half, the complement is stored and the two ends are swapped.
    """

    momenta: int
    n_mom: int
    src_order: int
    dst_order: int
    src_prev: int = 0
    dst_prev: int = 0

    def __post_init__(self):
        n = self.n_mom
        src_prev = normalise_mmask(self.src_prev, n)
        dst_prev = normalise_mmask(self.dst_prev, n)
        src_order, dst_order = self.src_order, self.dst_order

        norm = normalise_mmask(self.momenta, n)
        if norm != self.momenta:
            src_order, dst_order = dst_order, src_order
            src_prev, dst_prev = dst_prev, src_prev

        object.__setattr__(self, "momenta", norm)
        object.__setattr__(self, "src_order", src_order)
        object.__setattr__(self, "dst_order", dst_order)
        object.__setattr__(self, "src_prev", src_prev)
        object.__setattr__(self, "dst_prev", dst_prev)

    @property
    def is_singlet(self) -> bool:
        return bool(self.src_prev or self.dst_prev)

    def sort_key(self) -> Tuple[int, int, int, int, int]:
        return (self.src_order, self.dst_order, self.src_prev, self.dst_prev, self.momenta)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Propagator):
            return NotImplemented
        return self.sort_key() == other.sort_key()

    def __lt__(self, other: "Propagator") -> bool:
        return self.sort_key() < other.sort_key()

    def __hash__(self) -> int:
        return hash(self.sort_key())

    def permuted(self, perm: Permutation) -> "Propagator":
        """Relabel the legs: leg i becomes leg perm[i]."""
        if perm.size != self.n_mom:
            raise ValueError(f"permutation of size {perm.size} applied to propagator over {self.n_mom} legs")
        return Propagator(
            momenta=perm.permute_bits(self.momenta),
            n_mom=self.n_mom,
            src_order=self.src_order,
            dst_order=self.dst_order,
            src_prev=perm.permute_bits(self.src_prev),
            dst_prev=perm.permute_bits(self.dst_prev),
        )

    def __str__(self) -> str:
        def end(order: int, prev: int) -> str:
            if not prev:
                return str(order)
            return f"{order}[{format_bits(prev, self.n_mom)}]"

        return (
            f"{format_bits(self.momenta, self.n_mom)} "
            f"({end(self.src_order, self.src_prev)} -> {end(self.dst_order, self.dst_prev)})"
        )
