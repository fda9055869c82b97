"""
Building compound cyclic representations of polygon diagrams.

A flavour part is the union of polygons joined by propagators; flavour
splits and singlet edges separate parts. Every part is read off by walking
its boundary. Parts attached through flavour splits are represented again
inside the connection, with the part that asked for them (its master)
replaced by BACK_TO_MASTER, so each part appears once as master and
several times as a connected part.
"""

from __future__ import annotations

from typing import List, Optional

from fodgetools.errors import InvariantError
from .cycrep import (
    BACK_TO_MASTER,
    CompRep,
    CycRep,
    GonRep,
    Level,
    LineRep,
    Part,
    compare_cycrep,
    normalise_cycrep,
)
from .info_sort import info_sort
from .polygon import EdgeType, PolygonDiagram


def _compare_rep(a: Part, b: Part) -> int:
    return compare_cycrep(a, b, Level.ALL)


def represent_diagram(diagr: PolygonDiagram) -> CompRep:
    """Sorted representation of every flavour part of diagr."""
    poly_reps: List[Optional[CycRep]] = [None] * diagr.npolys
    parts: List[Part] = []
    for p_idx in range(diagr.npolys):
        if poly_reps[p_idx] is None:
            parts.append(represent_part(diagr, p_idx, poly_reps=poly_reps))

    info = info_sort(parts, _compare_rep)
    return CompRep(info.items, info.rank, poly_reps)


def represent_part(
    diagr: PolygonDiagram,
    p_idx: int,
    poly_reps: Optional[List[Optional[CycRep]]] = None,
    master: Optional[List[bool]] = None,
) -> CycRep:
    """
    Normalised representation of the part containing polygon p_idx.

    Pass poly_reps for a part represented in its own right (it records
    which polygons the part covers), or master for a part represented as a
    connection of others (master[p] marks the polygons of those parts).
    """
    if master is None and poly_reps is not None:
        master = [False] * diagr.npolys
    elif master is not None and poly_reps is None:
        poly_reps = [None] * diagr.npolys
    else:
        raise InvariantError("represent_part needs exactly one of poly_reps and master")

    part = _init_part(diagr, p_idx, poly_reps, master)
    _fill_part(diagr, p_idx, part, master)

    for level in (Level.TOP, Level.ORD, Level.FSP):
        normalise_cycrep(part, level)
    if part.period == 0:
        raise InvariantError("normalisation gave a zero period")
    return part


def _init_part(
    diagr: PolygonDiagram,
    p_idx: int,
    poly_reps: List[Optional[CycRep]],
    master: List[bool],
) -> CycRep:
    """Measure the part and represent the connections of its polygons."""
    part = CycRep(fsp_cons=[None] * diagr.npolys)
    p_mark, g_mark = p_idx, 0
    g_idx = 0

    poly_reps[p_idx] = part
    part.fsp_cons[p_idx] = represent_fsp_con(diagr, p_idx, master)

    # flavour splits and singlets bound the part; only the latter count
    while True:
        poly = diagr.polys[p_idx]
        etype = poly.edges[g_idx].type
        if etype in (EdgeType.EXT_LEG, EdgeType.SINGLET):
            part.length += 1
            g_idx = (g_idx + 1) % poly.ngons
        elif etype == EdgeType.FLSPLIT:
            g_idx = (g_idx + 1) % poly.ngons
        else:
            p_idx, g_idx = diagr.cross(p_idx, g_idx)
            if poly_reps[p_idx] is None:
                poly_reps[p_idx] = part
                part.fsp_cons[p_idx] = represent_fsp_con(diagr, p_idx, master)
        if p_idx == p_mark and g_idx == g_mark:
            break

    if part.length == 0:
        raise InvariantError("flavour part without external sides")
    return part


def represent_fsp_con(diagr: PolygonDiagram, p_idx: int, master: List[bool]) -> Optional[CompRep]:
    """
    Representation of the parts joined to polygon p_idx by flavour splits,
    or None if there are none.

    Marks p_idx in master.
    """
    visited = [False] * diagr.npolys
    visited[p_idx] = True
    master[p_idx] = True
    p_mark, g_mark = p_idx, 0
    g_idx = 0
    reps: List[Part] = []

    # walk the vertex: cross flavour splits, go along everything else
    while True:
        if not visited[p_idx]:
            if master[p_idx]:
                reps.append(BACK_TO_MASTER)
            else:
                reps.append(represent_part(diagr, p_idx, master=list(master)))
            visited[p_idx] = True

        poly = diagr.polys[p_idx]
        if poly.edges[g_idx].type == EdgeType.FLSPLIT:
            p_idx, g_idx = diagr.cross(p_idx, g_idx)
        else:
            g_idx = (g_idx + 1) % poly.ngons
        if p_idx == p_mark and g_idx == g_mark:
            break

    if not reps:
        return None
    info = info_sort(reps, _compare_rep)
    return CompRep(info.items, info.rank)


def _fill_part(diagr: PolygonDiagram, p_idx: int, part: CycRep, master: List[bool]) -> None:
    """Fill in the gons of a part measured by _init_part."""
    part.n_flavidx = 0
    g_idx = 0

    # start right after an external leg or singlet, so that every gon's
    # propagators come before its own leg
    while True:
        poly = diagr.polys[p_idx]
        etype = poly.edges[g_idx].type
        if etype in (EdgeType.EXT_LEG, EdgeType.SINGLET):
            g_idx = (g_idx + 1) % poly.ngons
            break
        if etype == EdgeType.PROPGTR:
            p_idx, g_idx = diagr.cross(p_idx, g_idx)
        else:
            g_idx = (g_idx + 1) % poly.ngons
    p_mark, g_mark = p_idx, g_idx

    props: List[LineRep] = []
    while True:
        poly = diagr.polys[p_idx]
        edge = poly.edges[g_idx]
        if edge.type == EdgeType.EXT_LEG:
            own = LineRep(1, poly.order, part.fsp_cons[p_idx], p_idx)
            part.array.append(GonRep([own] + props))
            props = []
            part.n_flavidx += 1
            g_idx = (g_idx + 1) % poly.ngons
        elif edge.type == EdgeType.PROPGTR:
            props.append(LineRep(actual_dist(diagr, p_idx, g_idx), poly.order, part.fsp_cons[p_idx], p_idx))
            p_idx, g_idx = diagr.cross(p_idx, g_idx)
        elif edge.type == EdgeType.FLSPLIT:
            g_idx = (g_idx + 1) % poly.ngons
        else:
            own = LineRep(1, poly.order, part.fsp_cons[p_idx], p_idx)
            singlet = LineRep(0, 0, represent_singlet(diagr, p_idx, edge.idx, master), p_idx)
            part.array.append(GonRep([own] + props + [singlet]))
            props = []
            g_idx = (g_idx + 1) % poly.ngons
        if p_idx == p_mark and g_idx == g_mark:
            break

    if len(part.array) != part.length:
        raise InvariantError(f"part measured {part.length} gons but filled {len(part.array)}")


def represent_singlet(diagr: PolygonDiagram, p_idx: int, s_idx: int, master: List[bool]) -> CompRep:
    """Representation of the part behind the singlet edge from p_idx to s_idx."""
    if master[s_idx]:
        return CompRep([BACK_TO_MASTER], [0])
    m = list(master)
    m[p_idx] = True
    return CompRep([represent_part(diagr, s_idx, master=m)], [0])


def actual_dist(diagr: PolygonDiagram, p_idx: int, g_idx: int) -> int:
    """
    Number of external and singlet sides of the part between the two ends
    of side g_idx of polygon p_idx, walking the part's boundary.
    """
    poly = diagr.polys[p_idx]
    target = poly.gons[(g_idx + 1) % poly.ngons]
    dist = 0
    while True:
        poly = diagr.polys[p_idx]
        etype = poly.edges[g_idx].type
        if etype in (EdgeType.EXT_LEG, EdgeType.SINGLET):
            dist += 1
            g_idx = (g_idx + 1) % poly.ngons
        elif etype == EdgeType.FLSPLIT:
            g_idx = (g_idx + 1) % poly.ngons
        else:
            p_idx, g_idx = diagr.cross(p_idx, g_idx)
        if diagr.polys[p_idx].gons[g_idx] == target:
            return dist
