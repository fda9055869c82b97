from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Iterator, List, Optional, Sequence, Set, Tuple, Union

from fodgetools.errors import InvariantError
from fodgetools.utils.bitwise import all_mask, unshift
from .propagator import Propagator

if TYPE_CHECKING:
    from .diagram import Diagram
    from .splits import VertexSpec

# (trace index, leg index) steps from the root down to a leg
Path = Tuple[Tuple[int, int], ...]
# (trace size, first flavour index) blocks still to be handed out
IndexBlocks = List[Tuple[int, int]]


class NodeKind(Enum):
    ROOT = "root"
    INTERIOR = "interior"
    SINGLET = "singlet"


class Leaf:
    """External leg. Its momentum mask has the single bit of its index."""

    __slots__ = ("momenta",)

    is_leaf = True
    is_singlet = False

    def __init__(self, momenta: int = 0):
        self.momenta = momenta

    @property
    def index(self) -> int:
        return unshift(self.momenta)

    def copy(self) -> "Leaf":
        return Leaf(self.momenta)

    def is_zero(self) -> bool:
        return False

    def find_flav_split(self, out: List[int]) -> int:
        return 1

    def index_legs(self, blocks: IndexBlocks, idx: int = -1) -> int:
        if idx < 0:
            raise InvariantError("leg reached without a running flavour index")
        self.momenta = 1 << idx
        return idx + 1

    def set_momenta(self) -> int:
        return self.momenta

    def label(self, props: List[Propagator], n_idcs: int, parent_order: int = 0, parent_prev: int = 0) -> None:
        return None

    def extend(
        self,
        out: List["Diagram"],
        new_verts: Sequence["VertexSpec"],
        idcs: Set[int],
        path: Path,
        owner: "Diagram",
        singlet: bool,
    ) -> None:
        if self.index not in idcs:
            return
        for vert in new_verts:
            owner.attach(vert, path, out, singlet and vert.order > 2)

    def walk(self, parent: Optional["Vertex"] = None) -> Iterator[Tuple["Node", Optional["Vertex"]]]:
        yield self, parent

    def __str__(self) -> str:
        return str(self.index) if self.momenta else "?"


@dataclass
class FlavourTrace:
    """
    Legs of a vertex that share one cyclic flavour trace, in order.

    A connected trace continues the parent's trace through the edge to the
    parent; that edge is then an implicit member placed before legs[0].
    """

    legs: List["Node"]
    connected: bool = False
    n_idcs: int = 0
    momenta: int = 0

    def copy(self) -> "FlavourTrace":
        return FlavourTrace([leg.copy() for leg in self.legs], self.connected, self.n_idcs, self.momenta)


class Vertex:
    """
    Vertex of the diagram tree.

    The root has no parent edge and none of its traces is connected. Every
    other vertex hangs off its parent through one edge (a singlet edge for
    NodeKind.SINGLET) and has exactly one connected trace, traces[connect_idx].
    """

    __slots__ = ("order", "kind", "traces", "connect_idx", "momenta")

    is_leaf = False

    def __init__(
        self,
        order: int,
        kind: NodeKind,
        traces: List[FlavourTrace],
        momenta: int = 0,
    ):
        connected = [i for i, tr in enumerate(traces) if tr.connected]
        if kind is NodeKind.ROOT and connected:
            raise InvariantError("root vertex cannot have a connected trace")
        if kind is not NodeKind.ROOT and len(connected) != 1:
            raise InvariantError(f"non-root vertex needs one connected trace, got {len(connected)}")

        self.order = order
        self.kind = kind
        self.traces = traces
        self.connect_idx: Optional[int] = connected[0] if connected else None
        self.momenta = momenta

    @classmethod
    def root(cls, order: int, flav_split: Sequence[int]) -> "Vertex":
        traces = [FlavourTrace([Leaf() for _ in range(s)]) for s in flav_split]
        return cls(order, NodeKind.ROOT, traces)

    @classmethod
    def interior(cls, order: int, flav_split: Sequence[int], split_idx: int, singlet: bool = False) -> "Vertex":
        """
        Vertex whose trace split_idx continues through the parent edge.

        That trace gets one leg fewer than flav_split[split_idx], the parent
        edge taking the remaining place.
        """
        traces = []
        for i, s in enumerate(flav_split):
            con = i == split_idx
            traces.append(FlavourTrace([Leaf() for _ in range(s - con)], connected=con))
        kind = NodeKind.SINGLET if singlet else NodeKind.INTERIOR
        return cls(order, kind, traces)

    @property
    def is_root(self) -> bool:
        return self.kind is NodeKind.ROOT

    @property
    def is_singlet(self) -> bool:
        return self.kind is NodeKind.SINGLET

    @property
    def n_legs(self) -> int:
        """Number of child legs, not counting the parent edge."""
        return sum(len(tr.legs) for tr in self.traces)

    @property
    def flav_split(self) -> Tuple[int, ...]:
        """Trace sizes of this vertex, with the parent edge counted."""
        return tuple(len(tr.legs) + tr.connected for tr in self.traces)

    def copy(self) -> "Vertex":
        return Vertex(self.order, self.kind, [tr.copy() for tr in self.traces], self.momenta)

    def is_zero(self) -> bool:
        """
        True if this subtree makes the diagram vanish.

        That happens when a trace holds a single leg whose singlet status
        differs from this vertex's, or two legs of which exactly one is a
        singlet edge.
        """
        for tr in self.traces:
            if len(tr.legs) == 1 and tr.legs[0].is_singlet != self.is_singlet:
                return True
            if len(tr.legs) == 2 and tr.legs[0].is_singlet != tr.legs[1].is_singlet:
                return True
        return any(leg.is_zero() for tr in self.traces for leg in tr.legs)

    def find_flav_split(self, out: List[int]) -> int:
        """
        Collect the diagram's trace sizes into out (unsorted).

        Legs behind a singlet edge form traces of their own. Returns the
        number of legs in the connected trace, which belong to the parent's
        trace; 0 for the root.
        """
        con_sum = 0
        for tr in self.traces:
            total = 0
            for leg in tr.legs:
                if leg.is_singlet:
                    sub = leg.find_flav_split(out)
                    if sub > 0:
                        out.append(sub)
                else:
                    total += leg.find_flav_split(out)
            tr.n_idcs = total
            if tr.connected:
                con_sum = total
            elif total > 0:
                out.append(total)
        return con_sum

    def index_legs(self, blocks: IndexBlocks, idx: int = -1) -> int:
        """
        Hand out flavour indices to the legs below this vertex.

        Each trace that starts a flavour trace of its own takes the first
        free block of matching size from blocks. A connected trace carries on
        from idx. Returns the next free index of the parent's trace.
        """
        for tr in self.traces:
            if (not tr.connected or self.is_singlet) and tr.n_idcs > 0:
                for k, (size, start) in enumerate(blocks):
                    if size == tr.n_idcs:
                        del blocks[k]
                        sub_idx = start
                        break
                else:
                    raise InvariantError(f"no flavour index block of size {tr.n_idcs} left")
            else:
                sub_idx = idx

            for leg in tr.legs:
                if leg.is_singlet:
                    leg.index_legs(blocks)
                else:
                    sub_idx = leg.index_legs(blocks, sub_idx)
            if tr.connected:
                idx = sub_idx
        return idx

    def set_momenta(self) -> int:
        self.momenta = 0
        for tr in self.traces:
            tr.momenta = 0
            for leg in tr.legs:
                tr.momenta |= leg.set_momenta()
            self.momenta |= tr.momenta
        return self.momenta

    def label(self, props: List[Propagator], n_idcs: int, parent_order: int = 0, parent_prev: int = 0) -> None:
        """
        Append one propagator per internal edge of this subtree to props.

        parent_prev is the momentum of the leg preceding this vertex in the
        parent's trace; it only enters singlet propagators.
        """
        for tr in self.traces:
            # the parent edge precedes legs[0] and carries the complement
            if tr.connected:
                prev = all_mask(n_idcs) ^ self.momenta
            else:
                prev = tr.legs[-1].momenta
            for leg in tr.legs:
                leg.label(props, n_idcs, self.order, prev)
                prev = leg.momenta

        if self.kind is NodeKind.INTERIOR:
            props.append(Propagator(self.momenta, n_idcs, self.order, parent_order))
        elif self.kind is NodeKind.SINGLET:
            props.append(
                Propagator(
                    self.momenta,
                    n_idcs,
                    self.order,
                    parent_order,
                    src_prev=self.traces[self.connect_idx].legs[-1].momenta,
                    dst_prev=parent_prev,
                )
            )

    def extend(
        self,
        out: List["Diagram"],
        new_verts: Sequence["VertexSpec"],
        idcs: Set[int],
        path: Path,
        owner: "Diagram",
        singlet: bool,
    ) -> None:
        """
        Attach every vertex of new_verts at each leg whose index is in idcs,
        appending the resulting copies of owner to out.
        """
        for t, tr in enumerate(self.traces):
            for l, leg in enumerate(tr.legs):
                leg.extend(
                    out,
                    new_verts,
                    idcs,
                    path + ((t, l),),
                    owner,
                    singlet and (not leg.is_leaf or self.order > 2),
                )

    def attach(self, vert: "VertexSpec", split_idx: int, path: Path, depth: int = 0, singlet: bool = False) -> None:
        """Replace the leg at path with a new vertex joined through split_idx."""
        t, l = path[depth]
        leg = self.traces[t].legs[l]
        if depth + 1 == len(path):
            self.traces[t].legs[l] = Vertex.interior(vert.order, vert.flav_split, split_idx, singlet)
        elif leg.is_leaf:
            raise InvariantError(f"path {path} runs through a leg at depth {depth}")
        else:
            leg.attach(vert, split_idx, path, depth + 1, singlet)

    def walk(self, parent: Optional["Vertex"] = None) -> Iterator[Tuple["Node", Optional["Vertex"]]]:
        """Pre-order traversal yielding (node, parent) pairs."""
        yield self, parent
        for tr in self.traces:
            for leg in tr.legs:
                yield from leg.walk(self)

    def __str__(self) -> str:
        mark = "s" if self.is_singlet else ""
        inner = " | ".join(
            ("^ " if tr.connected else "") + " ".join(str(leg) for leg in tr.legs) for tr in self.traces
        )
        return f"<{self.order}{mark}: {inner}>"


Node = Union[Leaf, Vertex]
