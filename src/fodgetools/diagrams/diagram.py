from __future__ import annotations

import logging
from collections import OrderedDict
from functools import lru_cache, total_ordering
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, TypeVar

from fodgetools import config
from fodgetools.errors import ComputationLimitError, InvalidRequestError, InvariantError
from fodgetools.perm import ZRGenerator
from .labelling import Labelling
from .node import Node, Path, Vertex
from .propagator import Propagator
from .splits import FlavSplit, VertexSpec, valid_flav_splits, valid_vertices

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _unique_sorted(items: Iterable[T]) -> List[T]:
    """Sort stably and drop elements equal to their predecessor."""
    out: List[T] = []
    for x in sorted(items):
        if not out or out[-1] != x:
            out.append(x)
    return out


def format_flav_split(flav_split: Sequence[int]) -> str:
    return "{" + ",".join(str(s) for s in flav_split) + "}"


@total_ordering
class Diagram:
    """
    Flavour-ordered tree diagram together with its distinct labellings.

    A new Diagram is a single vertex of the given order whose legs are
    grouped into traces of the sizes in flav_split. Larger diagrams are made
    by extend(), which returns modified copies and leaves self alone.

    Attributes
    ----------
    order:
        Power of momentum of the whole diagram.
    n_legs:
        Number of external legs.
    flav_split:
        Sizes of the diagram's flavour traces, ascending.
    singlet_diagram:
        True once a singlet edge has been attached.
    labellings:
        Distinct labellings, sorted.
    """

    def __init__(self, order: int, flav_split: Sequence[int]):
        self.order = order
        self.flav_split: FlavSplit = tuple(sorted(flav_split))
        self.n_legs = sum(self.flav_split)
        self.singlet_diagram = False
        self.root = Vertex.root(order, self.flav_split)
        self.labellings: List[Labelling] = []
        self._find_flav_split()
        self._index()
        self._label()

    def copy(self) -> "Diagram":
        new = Diagram.__new__(Diagram)
        new.order = self.order
        new.flav_split = self.flav_split
        new.n_legs = self.n_legs
        new.singlet_diagram = self.singlet_diagram
        new.root = self.root.copy()
        new.labellings = list(self.labellings)
        return new

    # --- derived data ---

    def _find_flav_split(self) -> None:
        out: List[int] = []
        self.root.find_flav_split(out)
        self.flav_split = tuple(sorted(out))
        self.n_legs = sum(self.flav_split)

    def _index(self) -> None:
        blocks = []
        start = 0
        for s in self.flav_split:
            blocks.append((s, start))
            start += s
        self.root.index_legs(blocks)
        if blocks:
            raise InvariantError(f"flavour index blocks {blocks} left unused")

    def _label(self) -> None:
        base = Labelling.from_tree(self.root, self.n_legs)
        self.labellings = _unique_sorted(base.relabelled(p) for p in ZRGenerator(self.flav_split))

    def is_zero(self) -> bool:
        if self.flav_split[0] == 1:
            return True
        return self.root.is_zero()

    # --- growth ---

    def _representative_indices(self) -> List[int]:
        """First flavour index of each distinct trace size."""
        reps = []
        start = 0
        prev = None
        for s in self.flav_split:
            if s != prev:
                reps.append(start)
            prev = s
            start += s
        return reps

    def extend(self, new_verts: Sequence[VertexSpec], singlets: bool) -> List["Diagram"]:
        """
        All diagrams made by hanging one of new_verts on a leg of self.

        Only legs that carry a representative flavour index in some
        labelling are used; any other leg is equivalent to one of those
        under the symmetry of the traces.
        """
        logger.debug("Extending %s", self)
        reps = self._representative_indices()
        locations = {lbl.index_locations()[r] for lbl in self.labellings for r in reps}
        out: List[Diagram] = []
        self.root.extend(out, new_verts, locations, (), self, singlets)
        return out

    def attach(self, vert: VertexSpec, path: Path, out: List["Diagram"], singlet: bool) -> None:
        """
        Append to out a copy of self with vert replacing the leg at path,
        once per distinct trace size of vert joined to the parent, and once
        more through a singlet edge where allowed.
        """
        prev = None
        for i, s in enumerate(vert.flav_split):
            if s == prev:
                continue
            prev = s
            out.append(self._attached(vert, i, path, False))
            if singlet and s > 2:
                out.append(self._attached(vert, i, path, True))

    def _attached(self, vert: VertexSpec, split_idx: int, path: Path, singlet: bool) -> "Diagram":
        new = self.copy()
        new.order += vert.order - 2
        new.root.attach(vert, split_idx, path, 0, singlet)
        if singlet:
            new.singlet_diagram = True
        new._find_flav_split()
        new._index()
        new._label()
        logger.debug(
            "Attached O(p^%d) vertex %s at %s (split %d%s): %s",
            vert.order,
            format_flav_split(vert.flav_split),
            path,
            split_idx,
            ", singlet" if singlet else "",
            new.root,
        )
        return new

    # --- read-only traversal ---

    def walk(self) -> Iterator[Tuple[Node, Optional[Vertex]]]:
        """(node, parent) pairs of the tree, pre-order, root first."""
        return self.root.walk()

    def vertices(self) -> List[Vertex]:
        return [node for node, _ in self.walk() if not node.is_leaf]

    def propagators(self) -> List[Propagator]:
        """Propagators of the tree under its own indexing, in tree order."""
        props: List[Propagator] = []
        self.root.set_momenta()
        self.root.label(props, self.n_legs)
        return props

    # --- ordering ---

    def _key(self):
        return (self.n_legs, self.order, self.flav_split, self.labellings)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Diagram):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: "Diagram") -> bool:
        if self.n_legs != other.n_legs:
            return self.n_legs < other.n_legs
        if self.order != other.order:
            return self.order < other.order
        if self.flav_split != other.flav_split:
            # unsplit diagrams first
            return self.flav_split > other.flav_split
        return self.labellings < other.labellings

    __hash__ = None

    def __str__(self) -> str:
        return (
            f"O(p^{self.order}) {self.n_legs}-point diagram, "
            f"flavour split {format_flav_split(self.flav_split)}, "
            f"{len(self.labellings)} distinct labelings"
        )

    def describe(self, detailed: bool = False) -> str:
        lines = [str(self)]
        if detailed:
            lines.append(f"  tree: {self.root}")
            for lbl in self.labellings:
                lines.append(f"  {lbl}")
        return "\n".join(lines)


# --- generation ---


def _check_request(order: int, n_legs: int) -> None:
    if order < 2 or order % 2:
        raise InvalidRequestError(f"order must be even and at least 2, got {order}")
    if n_legs < 4 or n_legs % 2:
        raise InvalidRequestError(f"number of legs must be even and at least 4, got {n_legs}")
    if n_legs > config.FODGE_MAX_LEGS:
        raise ComputationLimitError(
            f"{n_legs} legs exceed the momentum mask width of {config.FODGE_MAX_LEGS} (FODGE_MAX_LEGS)"
        )


def _generate_uncached(order: int, n_legs: int, singlets: bool) -> Tuple[Diagram, ...]:
    logger.debug("Generating O(p^%d) %d-point diagrams", order, n_legs)
    diagrams = [Diagram(order, fs) for fs in valid_flav_splits(order, n_legs)]

    for o in range(order, order // 2, -2):
        # equal halves would be built twice from either side
        n_min = 4 if (n_legs <= 8 or 2 * o != 2 + order) else n_legs // 2
        for n in range(n_legs - 2, n_min - 1, -2):
            verts = valid_vertices(2 + order - o, 2 + n_legs - n)
            for base in _generate_all(o, n, singlets):
                diagrams.extend(base.extend(verts, singlets and o > 2 and order > 4))

    return tuple(_unique_sorted(diagrams))


_generate_cached = lru_cache(maxsize=None)(_generate_uncached)


def _generate_all(order: int, n_legs: int, singlets: bool) -> Tuple[Diagram, ...]:
    if config.FODGE_CACHE_GENERATION:
        return _generate_cached(order, n_legs, singlets)
    return _generate_uncached(order, n_legs, singlets)


def generate(order: int, n_legs: int, singlets: bool = True, remove_zero: bool = True) -> List[Diagram]:
    """
    All distinct flavour-ordered diagrams of the given order and leg count.

    Parameters
    ----------
    order:
        Power of momentum, even and >= 2.
    n_legs:
        Number of external legs, even and >= 4.
    singlets:
        Also build diagrams with singlet propagators.
    remove_zero:
        Drop diagrams whose flavour structure makes them vanish.

    Returns
    -------
    list of Diagram, sorted. The diagrams are fresh copies, so callers may
    modify them.
    """
    _check_request(order, n_legs)
    diagrams = [d.copy() for d in _generate_all(order, n_legs, singlets)]
    if remove_zero:
        before = len(diagrams)
        diagrams = [d for d in diagrams if not d.is_zero()]
        logger.debug("Removed %d vanishing diagrams", before - len(diagrams))
    logger.info("O(p^%d) %d-point: %d diagrams", order, n_legs, len(diagrams))
    return diagrams


Diagram.generate = staticmethod(generate)


def filter_flav_split(diagrams: List[Diagram], filters: Iterable[Sequence[int]], include: bool) -> int:
    """
    Remove diagrams from the list in place by flavour split.

    With include=True only diagrams whose split is in filters are kept;
    with include=False those are the ones removed. Returns how many were
    removed.
    """
    wanted = {tuple(sorted(f)) for f in filters}
    keep = [d for d in diagrams if (d.flav_split in wanted) == include]
    removed = len(diagrams) - len(keep)
    diagrams[:] = keep
    return removed


def summarise(diagrams: Iterable[Diagram]) -> str:
    """Count diagrams and labellings per (order, legs, flavour split)."""
    groups: "OrderedDict[Tuple[int, int, FlavSplit], List[int]]" = OrderedDict()
    for d in diagrams:
        entry = groups.setdefault((d.order, d.n_legs, d.flav_split), [0, 0])
        entry[0] += 1
        entry[1] += len(d.labellings)

    lines = []
    n_diagrams = n_labellings = 0
    for (order, n_legs, fs), (n_d, n_l) in groups.items():
        lines.append(
            f"O(p^{order}) {n_legs}-point, flavour split {format_flav_split(fs)}: "
            f"{n_d} diagrams, {n_l} labelings"
        )
        n_diagrams += n_d
        n_labellings += n_l
    lines.append(f"Total: {n_diagrams} diagrams, {n_labellings} labelings")
    return "\n".join(lines)
