from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional, Sequence, Tuple

from fodgetools.errors import InvariantError
from .cycrep import CompRep


class EdgeType(IntEnum):
    EXT_LEG = 0
    PROPGTR = 1
    SINGLET = 2
    FLSPLIT = 4

    @property
    def carries_flavidx(self) -> bool:
        return self in (EdgeType.EXT_LEG, EdgeType.PROPGTR)


_SIDE_MARK = {
    EdgeType.EXT_LEG: "-",
    EdgeType.PROPGTR: "=",
    EdgeType.SINGLET: "~",
    EdgeType.FLSPLIT: "|",
}


@dataclass
class PolyEdge:
    """Side of a polygon; idx is the polygon on the other side, if any."""

    type: EdgeType = EdgeType.EXT_LEG
    idx: int = 0

    def copy(self) -> "PolyEdge":
        return PolyEdge(self.type, self.idx)


@dataclass
class Polygon:
    """
    A vertex drawn as a polygon whose corners are points on the diagram's
    perimeter. Side k runs from gons[k] to gons[k+1].

    order is the order label: label l stands for O(p^(2(l+1))).
    split_budget limits further flavour splits of the polygon.
    """

    gons: List[int]
    edges: List[PolyEdge]
    order: int
    split_budget: int

    @classmethod
    def make(cls, gons: Sequence[int], edges: Optional[Sequence[PolyEdge]] = None, order: int = 0) -> "Polygon":
        if edges is None:
            edges = [PolyEdge() for _ in gons]
        if len(edges) != len(gons):
            raise InvariantError(f"polygon with {len(gons)} corners and {len(edges)} sides")
        return cls(list(gons), [e.copy() for e in edges], order, order)

    @property
    def ngons(self) -> int:
        return len(self.gons)

    def copy(self) -> "Polygon":
        return Polygon(list(self.gons), [e.copy() for e in self.edges], self.order, self.split_budget)

    def __str__(self) -> str:
        sides = " ".join(
            f"{g}{_SIDE_MARK[e.type]}{e.idx if e.type else ''}" for g, e in zip(self.gons, self.edges)
        )
        return f"[{self.order}:{self.split_budget}]({sides})"


class PolygonDiagram:
    """
    Diagram as a set of polygons inscribed in a circle of ngons points.

    gons lists the perimeter points in order, gon_idx is its inverse, and
    edges[i] is the polygon owning the perimeter side starting at gons[i].
    rep and sym are filled in by the functions that build diagrams.
    """

    def __init__(
        self,
        ngons: int,
        order: int,
        gons: List[int],
        edges: List[int],
        polys: List[Polygon],
    ):
        self.ngons = ngons
        self.order = order
        self.gons = gons
        self.gon_idx = [0] * ngons
        for i, g in enumerate(gons):
            self.gon_idx[g] = i
        self.edges = edges
        self.polys = polys
        self.rep: Optional[CompRep] = None
        self.sym = 1

    @property
    def npolys(self) -> int:
        return len(self.polys)

    @property
    def momentum_order(self) -> int:
        """Power of momentum of the diagram."""
        return 2 * (self.order + 1)

    def copy(self) -> "PolygonDiagram":
        return PolygonDiagram(self.ngons, self.order, list(self.gons), list(self.edges),
                              [p.copy() for p in self.polys])

    def cross(self, p_idx: int, g_idx: int) -> Tuple[int, int]:
        """
        Step through side g_idx of polygon p_idx into the polygon behind it.

        Returns that polygon and the position of the side's start corner in
        it, which is where the walk along its boundary continues.
        """
        poly = self.polys[p_idx]
        gon = poly.gons[g_idx]
        q_idx = poly.edges[g_idx].idx
        return q_idx, self.polys[q_idx].gons.index(gon)

    def __str__(self) -> str:
        return f"O(p^{self.momentum_order}) {self.ngons}-point diagram, symmetry factor {self.sym}"

    def describe(self) -> str:
        lines = [str(self)]
        for i, poly in enumerate(self.polys):
            lines.append(f"poly {i}: {poly}")
        return "\n".join(lines)
