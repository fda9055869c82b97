from __future__ import annotations

from math import factorial
from typing import Iterator, List, Sequence, Tuple

from fodgetools.errors import InvalidRequestError
from .permutation import Permutation


class Generator:
    """
    Stateful walk over the elements of a finite permutation group.

    A fresh generator sits at the identity with ``done`` False. Each call to
    advance() moves to the next element; after exactly ``len(gen)`` calls
    ``done`` is True and ``perm`` is the identity again, so the same object
    can be walked repeatedly.

    Iterating yields every element once, starting with the identity::

        for p in ZnGenerator(4):
            ...
    """

    def __init__(self, size: int):
        self.size = size
        self.perm = Permutation.identity(size)
        self.done = False

    def advance(self) -> "Generator":
        raise NotImplementedError

    def __len__(self) -> int:
        raise NotImplementedError

    def __iter__(self) -> Iterator[Permutation]:
        while True:
            yield self.perm
            self.advance()
            if self.done:
                return


class ZnGenerator(Generator):
    """Cyclic group of rotations of n elements."""

    def __init__(self, n: int):
        super().__init__(n)
        self.step = 0

    def advance(self) -> "ZnGenerator":
        self.step = (self.step + 1) % self.size
        self.done = self.step == 0
        self.perm = Permutation.cyclic(self.size, self.step)
        return self

    def __len__(self) -> int:
        return self.size


class SnGenerator(Generator):
    """
    Full symmetric group on n elements, in the order of Heap's algorithm.

    Consecutive elements differ by a single transposition. The counter
    stack replaces the recursion of the textbook formulation.
    """

    def __init__(self, n: int):
        super().__init__(n)
        self._images = list(range(n))
        self._ctr = [0] * n

    def advance(self) -> "SnGenerator":
        m = self._images
        for k in range(1, self.size):
            if self._ctr[k] < k:
                j = self._ctr[k] if k % 2 else 0
                m[j], m[k] = m[k], m[j]
                self._ctr[k] += 1
                self.perm = Permutation(m, validate=False)
                self.done = False
                return self
            self._ctr[k] = 0

        self._images = list(range(self.size))
        self.perm = Permutation.identity(self.size)
        self.done = True
        return self

    def __len__(self) -> int:
        return factorial(self.size)


class ZRGenerator(Generator):
    """
    Symmetry group of a tuple of flavour traces with the given sizes.

    Trace i occupies the index range starting at sum(sizes[:i]). The group
    is generated by rotations inside each trace together with arbitrary
    permutations of traces of equal size, so its order is
    prod(sizes) * prod(k! for each run of k equal sizes).

    Parameters
    ----------
    sizes:
        Trace sizes, sorted ascending.
    """

    def __init__(self, sizes: Sequence[int]):
        sizes = tuple(int(s) for s in sizes)
        if not sizes or any(s <= 0 for s in sizes):
            raise InvalidRequestError(f"trace sizes must be positive, got {list(sizes)}")
        if list(sizes) != sorted(sizes):
            raise InvalidRequestError(f"trace sizes must be sorted ascending, got {list(sizes)}")
        super().__init__(sum(sizes))
        self.sizes = sizes

        # (offset, generator) rotating one trace
        self._rotations: List[Tuple[int, ZnGenerator]] = []
        offs = 0
        for s in sizes:
            if s > 1:
                self._rotations.append((offs, ZnGenerator(s)))
            offs += s

        # (offset, block length, generator) shuffling a run of equal traces
        self._swaps: List[Tuple[int, int, SnGenerator]] = []
        i = 0
        row_begin = 0
        while i < len(sizes):
            j = i
            while j < len(sizes) and sizes[j] == sizes[i]:
                j += 1
            if j - i > 1:
                self._swaps.append((row_begin, sizes[i], SnGenerator(j - i)))
            row_begin += (j - i) * sizes[i]
            i = j

    def _subgenerators(self) -> List[Generator]:
        return [g for _, g in self._rotations] + [g for _, _, g in self._swaps]

    def advance(self) -> "ZRGenerator":
        # odometer: carry into the next subgenerator whenever one wraps
        for gen in self._subgenerators():
            gen.advance()
            if not gen.done:
                self.done = False
                break
        else:
            self.done = True

        rot = Permutation.identity(self.size)
        for offs, gen in self._rotations:
            rot = Permutation.embedded(self.size, gen.perm, offs) * rot
        shuffle = Permutation.identity(self.size)
        for offs, block, gen in self._swaps:
            shuffle = Permutation.embedded(self.size, gen.perm, offs, block) * shuffle
        self.perm = shuffle * rot
        return self

    def __len__(self) -> int:
        total = 1
        for s in self.sizes:
            total *= s
        for _, _, gen in self._swaps:
            total *= len(gen)
        return total
