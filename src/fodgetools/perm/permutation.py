from __future__ import annotations

from math import gcd
from typing import Iterable, List, MutableSequence, Sequence, Tuple, TypeVar

T = TypeVar("T")


def _lcm(a: int, b: int) -> int:
    return a // gcd(a, b) * b


class Permutation:
    """
    Bijection of {0, ..., n-1}, stored as the tuple of images.

    ``p[i]`` is the image of ``i``. Acting on a sequence or a bitmask, the
    entry at position ``i`` is moved to position
    ``p[i]``, so that ``p.permute(q.permute(x)) == (p * q).permute(x)``.

    Instances are never mutated; every operation returns a new permutation.
    """

    __slots__ = ("_map",)

    def __init__(self, images: Iterable[int], *, validate: bool = True):
        m = tuple(int(x) for x in images)
        if validate and not Permutation.is_permutation(m):
            raise ValueError(f"not a permutation: {list(m)}")
        if not m:
            raise ValueError("permutation must act on at least one element")
        self._map: Tuple[int, ...] = m

    # --- construction ---

    @classmethod
    def identity(cls, n: int) -> "Permutation":
        if n <= 0:
            raise ValueError(f"permutation size must be positive, got {n}")
        return cls(range(n), validate=False)

    @classmethod
    def cyclic(cls, n: int, k: int = 1) -> "Permutation":
        """Rotation sending i to (i + k) mod n."""
        if n <= 0:
            raise ValueError(f"permutation size must be positive, got {n}")
        return cls(((i + k) % n for i in range(n)), validate=False)

    @staticmethod
    def is_permutation(images: Sequence[int]) -> bool:
        """True if images contains each of 0..len(images)-1 exactly once."""
        n = len(images)
        seen = [False] * n
        for x in images:
            if not 0 <= x < n or seen[x]:
                return False
            seen[x] = True
        return True

    # --- sequence protocol ---

    @property
    def size(self) -> int:
        return len(self._map)

    def __len__(self) -> int:
        return len(self._map)

    def __getitem__(self, i: int) -> int:
        if not 0 <= i < len(self._map):
            raise IndexError(f"index {i} out of range for permutation of size {len(self._map)}")
        return self._map[i]

    def __iter__(self):
        return iter(self._map)

    def as_tuple(self) -> Tuple[int, ...]:
        return self._map

    def __eq__(self, other) -> bool:
        if not isinstance(other, Permutation):
            return NotImplemented
        return self._map == other._map

    def __lt__(self, other: "Permutation") -> bool:
        return self._map < other._map

    def __hash__(self) -> int:
        return hash(self._map)

    def __repr__(self) -> str:
        return f"Permutation({list(self._map)})"

    def __str__(self) -> str:
        return "( " + " ".join(str(x) for x in self._map) + " )"

    # --- group structure ---

    def __mul__(self, other: "Permutation") -> "Permutation":
        """Composition: apply other first, then self."""
        if not isinstance(other, Permutation):
            return NotImplemented
        if other.size != self.size:
            raise ValueError(f"cannot compose permutations of sizes {self.size} and {other.size}")
        m = self._map
        return Permutation((m[j] for j in other._map), validate=False)

    def inverse(self) -> "Permutation":
        inv = [0] * self.size
        for i, j in enumerate(self._map):
            inv[j] = i
        return Permutation(inv, validate=False)

    def reverse(self) -> "Permutation":
        """The images read backwards: reverse()[i] == self[n-1-i]."""
        return Permutation(reversed(self._map), validate=False)

    def swap(self, i: int, j: int) -> "Permutation":
        """Copy with the images of i and j exchanged."""
        m = list(self._map)
        m[i], m[j] = m[j], m[i]
        return Permutation(m, validate=False)

    def __pow__(self, k: int) -> "Permutation":
        if k < 0:
            return self.inverse() ** (-k)
        if k > self.size:
            k %= self.order()

        result = Permutation.identity(self.size)
        base = self
        while k:
            if k & 1:
                result = result * base
            base = base * base
            k >>= 1
        return result

    def __mod__(self, other: "Permutation") -> "Permutation":
        """
        Lexicographically least element of the coset {self * other^m}.

        Used to pick one representative per coset of the cyclic group
        generated by ``other``.
        """
        if not isinstance(other, Permutation):
            return NotImplemented
        best = self
        current = self
        for _ in range(other.order() - 1):
            current = current * other
            if current < best:
                best = current
        return best

    # --- cycle structure ---

    def cycles(self) -> List[Tuple[int, ...]]:
        """Cycle decomposition, each cycle listed from its smallest element."""
        seen = [False] * self.size
        out: List[Tuple[int, ...]] = []
        for start in range(self.size):
            if seen[start]:
                continue
            cyc = []
            i = start
            while not seen[i]:
                seen[i] = True
                cyc.append(i)
                i = self._map[i]
            out.append(tuple(cyc))
        return out

    def cycle_type(self) -> List[int]:
        return sorted(len(c) for c in self.cycles())

    def order(self) -> int:
        """Smallest k > 0 with self**k == identity."""
        result = 1
        for length in self.cycle_type():
            result = _lcm(result, length)
        return result

    def parity(self) -> int:
        """0 for even permutations, 1 for odd ones."""
        return sum(1 for length in self.cycle_type() if length % 2 == 0) % 2

    def fixed_points(self) -> List[int]:
        return [i for i, j in enumerate(self._map) if i == j]

    def is_identity(self) -> bool:
        return all(i == j for i, j in enumerate(self._map))

    # --- actions ---

    def permute(
        self,
        seq: MutableSequence[T],
        offset: int = 0,
        block_len: int = 1,
    ) -> MutableSequence[T]:
        """
        Rearrange seq in place and return it.

        With block_len > 1 the permutation acts on consecutive blocks of
        that length; offset is the element index where the first block
        starts. Elements outside the acted-on range are left alone.
        """
        end = offset + self.size * block_len
        if offset < 0 or end > len(seq):
            raise IndexError(f"permutation of {self.size} blocks of {block_len} does not fit at offset {offset}")
        old = list(seq[offset:end])
        for i, j in enumerate(self._map):
            src = i * block_len
            dst = offset + j * block_len
            seq[dst:dst + block_len] = old[src:src + block_len]
        return seq

    def permute_bits(self, bits: int, offset: int = 0, block_len: int = 1) -> int:
        """
        Move the bits of an integer as permute() moves list entries.

        offset is the index of the first acted-on bit.
        Bits below and above the acted-on range are kept.
        """
        width = self.size * block_len
        lo = offset
        window = (bits >> lo) & ((1 << width) - 1)
        out = bits & ~(((1 << width) - 1) << lo)

        block = (1 << block_len) - 1
        for i, j in enumerate(self._map):
            chunk = (window >> (i * block_len)) & block
            if chunk:
                out |= chunk << (lo + j * block_len)
        return out

    @classmethod
    def embedded(cls, size: int, sub: "Permutation", offset: int = 0, block_len: int = 1) -> "Permutation":
        """
        Permutation of size elements acting as sub on the blocks starting at
        offset, and as the identity elsewhere.
        """
        m = list(range(size))
        for i, j in enumerate(sub._map):
            for t in range(block_len):
                m[offset + i * block_len + t] = offset + j * block_len + t
        return cls(m)
