"""
Building polygon diagrams: contact diagrams, growth by cutting external
sides, flavour splits, singlet propagators, and sorted de-duplicating
diagram lists.

Diagram lists are kept sorted in descending compare_diagrams order without
repeats.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable, List, Tuple

from .cycrep import CycRep, compare_comprep, get_symmetry
from .polygon import EdgeType, PolyEdge, Polygon, PolygonDiagram
from .represent import represent_diagram


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def _represented(diagr: PolygonDiagram) -> PolygonDiagram:
    diagr.rep = represent_diagram(diagr)
    diagr.sym = get_symmetry(diagr.rep)
    return diagr


def make_contact_diagram(ngons: int, order: int = 0) -> PolygonDiagram:
    """Single polygon with ngons external sides and order label order."""
    poly = Polygon.make(range(ngons), order=order)
    diagr = PolygonDiagram(ngons, order, list(range(ngons)), [0] * ngons, [poly])
    return _represented(diagr)


def cut_edge(base: PolygonDiagram, edge: int, ngons: int, order: int) -> PolygonDiagram:
    """
    Replace perimeter side edge of base by a new polygon with ngons + 1
    external sides, joined by a propagator to the polygon owning that side.
    """
    n = base.ngons
    new_idx = base.npolys
    start, end = base.gons[edge], base.gons[(edge + 1) % n]
    new_gons = list(range(n, n + ngons))

    gons = base.gons[: edge + 1] + new_gons + base.gons[edge + 1:]
    edges = base.edges[:edge] + [new_idx] * (ngons + 1) + base.edges[edge + 1:]

    new_poly = Polygon.make(
        [start] + new_gons + [end],
        [PolyEdge(EdgeType.EXT_LEG) for _ in range(ngons + 1)] + [PolyEdge(EdgeType.PROPGTR, base.edges[edge])],
        order,
    )
    polys = [p.copy() for p in base.polys] + [new_poly]

    cut_poly = polys[base.edges[edge]]
    cut_poly.edges[cut_poly.gons.index(start)] = PolyEdge(EdgeType.PROPGTR, new_idx)

    return _represented(PolygonDiagram(n + ngons, base.order + order, gons, edges, polys))


def grow_diagrams(bases: Iterable[PolygonDiagram], ngons: int, order: int) -> List[PolygonDiagram]:
    """
    Every diagram made from one of bases by cut_edge.

    Only the first ngons/sym sides of each base are cut; the rest are
    rotations of those.
    """
    if not ngons:
        return []
    grown: List[PolygonDiagram] = []
    for base in bases:
        cut: List[PolygonDiagram] = []
        for edge in range(base.ngons // base.sym):
            cut = insert_diagram(cut, cut_edge(base, edge, ngons, order))
        grown = merge_diagrams(grown, cut)
    return grown


def split_poly(base: PolygonDiagram, p_idx: int) -> List[PolygonDiagram]:
    """
    Every diagram made by cutting polygon p_idx along a chord into two
    polygons joined by a flavour split.

    Each side must keep at least two flavour-carrying sides. A chord cutting
    off an odd number of sides costs 2 of the split budget and is only used
    when exactly 2 is left; even chords cost 1. The larger half inherits the
    remaining budget.
    """
    poly = base.polys[p_idx]
    if not poly.split_budget or poly.ngons < 4:
        return []

    n = poly.ngons
    new_idx = base.npolys
    out: List[PolygonDiagram] = []
    for i in range(n // 2):
        for j in range(i + 2, n):
            odd = (j - i) % 2
            if odd and poly.split_budget != 2:
                continue
            if i == 0 and j == n - 1:
                continue
            l_degen = sum(1 for k in range(i, j) if poly.edges[k].type.carries_flavidx)
            r_degen = sum(1 for k in range(j, i + n) if poly.edges[k % n].type.carries_flavidx)
            if l_degen < 2 or r_degen < 2:
                continue

            split = base.copy()

            left_gons = [poly.gons[(k + i) % n] for k in range(j - i)] + [poly.gons[j]]
            left_edges = [poly.edges[(k + i) % n] for k in range(j - i)] + [PolyEdge(EdgeType.FLSPLIT, new_idx)]

            right_gons = []
            right_edges = []
            for k in range(n - (j - i)):
                kj = (k + j) % n
                edge = poly.edges[kj]
                if edge.type == EdgeType.EXT_LEG:
                    split.edges[split.gon_idx[poly.gons[kj]]] = new_idx
                else:
                    other = split.polys[edge.idx]
                    for oe in other.edges:
                        if oe.type == edge.type and oe.idx == p_idx:
                            oe.idx = new_idx
                            break
                right_gons.append(poly.gons[kj])
                right_edges.append(edge)
            right_gons.append(poly.gons[i])
            right_edges.append(PolyEdge(EdgeType.FLSPLIT, p_idx))

            left = Polygon.make(left_gons, left_edges, poly.order)
            right = Polygon.make(right_gons, right_edges, poly.order)
            budget = poly.split_budget - (2 if odd else 1)
            if left.ngons > right.ngons:
                left.split_budget, right.split_budget = budget, 0
            else:
                left.split_budget, right.split_budget = 0, budget

            split.polys[p_idx] = left
            split.polys.append(right)
            out = insert_diagram(out, _represented(split))
    return out


def split_diagrams(bases: List[PolygonDiagram]) -> List[PolygonDiagram]:
    """bases together with everything reachable from them by split_poly."""
    split: List[PolygonDiagram] = []
    for diagr in bases:
        for idx in range(diagr.npolys):
            split = merge_diagrams(split, split_poly(diagr, idx))
    if split:
        return merge_diagrams(bases, split_diagrams(split))
    return merge_diagrams(bases, [])


def singlet_prop(base: PolygonDiagram, p_idx: int) -> List[PolygonDiagram]:
    """
    Every diagram made by turning a propagator from polygon p_idx to a
    higher-indexed polygon into a singlet edge. Both polygons need order
    label >= 1.
    """
    poly = base.polys[p_idx]
    if poly.order < 1:
        return []

    out: List[PolygonDiagram] = []
    for g_idx, edge in enumerate(poly.edges):
        if edge.type != EdgeType.PROPGTR:
            continue
        t_idx = edge.idx
        if t_idx < p_idx or base.polys[t_idx].order < 1:
            continue
        singlet = base.copy()
        singlet.polys[p_idx].edges[g_idx].type = EdgeType.SINGLET
        for te in singlet.polys[t_idx].edges:
            if te.type == EdgeType.PROPGTR and te.idx == p_idx:
                te.type = EdgeType.SINGLET
                break
        out = insert_diagram(out, _represented(singlet))
    return out


def singlet_diagrams(bases: List[PolygonDiagram]) -> List[PolygonDiagram]:
    """bases together with everything reachable from them by singlet_prop."""
    singlet: List[PolygonDiagram] = []
    for diagr in bases:
        for idx in range(diagr.npolys - 1):
            singlet = merge_diagrams(singlet, singlet_prop(diagr, idx))
    if singlet:
        return merge_diagrams(bases, singlet_diagrams(singlet))
    return merge_diagrams(bases, [])


def check_zero_fsp(diagr: PolygonDiagram) -> bool:
    """
    True if some polygon has exactly one momentum-carrying side, or none and
    fewer than two singlet sides; its flavour structure then vanishes.
    """
    for poly in diagr.polys:
        nm = sum(1 for e in poly.edges if e.type in (EdgeType.EXT_LEG, EdgeType.PROPGTR))
        ns = sum(1 for e in poly.edges if e.type == EdgeType.SINGLET)
        if nm == 1 or (nm == 0 and ns < 2):
            return True
    return False


def remove_zero_fsp(diagrams: List[PolygonDiagram]) -> List[PolygonDiagram]:
    return [d for d in diagrams if not check_zero_fsp(d)]


def compare_diagrams(diagr_1: PolygonDiagram, diagr_2: PolygonDiagram) -> int:
    """
    Three-way comparison of represented diagrams: by part count (fewer parts
    compare greater), then by polygon count, then by representation.
    """
    comp = _cmp(diagr_2.rep.nreps, diagr_1.rep.nreps)
    if comp:
        return comp
    comp = _cmp(diagr_1.npolys, diagr_2.npolys)
    if comp:
        return comp
    return compare_comprep(diagr_1.rep, diagr_2.rep)


def insert_diagram(diagrams: List[PolygonDiagram], diagr: PolygonDiagram) -> List[PolygonDiagram]:
    """Insert diagr into a sorted list unless an equal diagram is there."""
    for pos, other in enumerate(diagrams):
        comp = compare_diagrams(other, diagr)
        if comp == 0:
            return diagrams
        if comp < 0:
            return diagrams[:pos] + [diagr] + diagrams[pos:]
    return diagrams + [diagr]


def merge_diagrams(list_1: List[PolygonDiagram], list_2: List[PolygonDiagram]) -> List[PolygonDiagram]:
    """Merge two sorted lists; of two equal diagrams the one in list_1 is kept."""
    out: List[PolygonDiagram] = []
    i = j = 0
    while i < len(list_1) and j < len(list_2):
        comp = compare_diagrams(list_1[i], list_2[j])
        if comp > 0:
            out.append(list_1[i])
            i += 1
        elif comp < 0:
            out.append(list_2[j])
            j += 1
        else:
            out.append(list_1[i])
            i += 1
            j += 1
    out.extend(list_1[i:])
    out.extend(list_2[j:])
    return out


def flavour_split_of(diagr: PolygonDiagram) -> Tuple[int, ...]:
    """Flavour-index counts of the diagram's parts, in representation order."""
    return tuple(rep.n_flavidx for rep in diagr.rep.reps if isinstance(rep, CycRep))


def count_by_flavour_split(diagrams: Iterable[PolygonDiagram]) -> Counter:
    return Counter(flavour_split_of(d) for d in diagrams)
