from __future__ import annotations

from functools import total_ordering
from typing import TYPE_CHECKING, Iterable, List, Tuple

from fodgetools.perm import Permutation
from .propagator import Propagator

if TYPE_CHECKING:
    from .node import Vertex


@total_ordering
class Labelling:
    """
    One assignment of flavour indices to the legs of a diagram, reduced to
    the set of propagators it induces.

    perm records how the legs were relabelled relative to the tree's own
    indexing. It is bookkeeping only: two labellings with the same
    propagators compare equal whatever their permutations.
    """

    __slots__ = ("props", "perm")

    def __init__(self, props: Iterable[Propagator], perm: Permutation):
        self.props: Tuple[Propagator, ...] = tuple(sorted(set(props)))
        self.perm = perm

    @classmethod
    def from_tree(cls, root: "Vertex", n_legs: int) -> "Labelling":
        """Read the propagators off an indexed tree."""
        root.set_momenta()
        props: List[Propagator] = []
        root.label(props, n_legs)
        return cls(props, Permutation.identity(n_legs))

    def relabelled(self, perm: Permutation) -> "Labelling":
        return Labelling((p.permuted(perm) for p in self.props), perm)

    def index_locations(self) -> Permutation:
        """Leg position of each flavour index under this labelling."""
        return self.perm.inverse()

    def __len__(self) -> int:
        return len(self.props)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Labelling):
            return NotImplemented
        return self.props == other.props

    def __lt__(self, other: "Labelling") -> bool:
        return (len(self.props), self.props) < (len(other.props), other.props)

    def __hash__(self) -> int:
        return hash(self.props)

    def __repr__(self) -> str:
        return f"Labelling({list(self.props)!r}, {self.perm!r})"

    def __str__(self) -> str:
        if not self.props:
            return f"{self.perm} | [no propagators]"
        return f"{self.perm} | " + " | ".join(str(p) for p in self.props)
