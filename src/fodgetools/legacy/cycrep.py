"""
Cyclic representations of flavour parts.

A part of a polygon diagram is read as a cyclic sequence of gons, one per
external (or singlet) side of the part. Each gon carries lines describing
the propagators that leave it. Sequences are compared on three levels,
coarsest first:

TOP
    line lengths (how many external sides a propagator cuts off),
ORD
    orders of the polygons the lines belong to,
FSP
    the parts attached through flavour splits, compared recursively.

Normalisation picks the rotation that is lexicographically least at every
level and the smallest rotation leaving the sequence unchanged (the period).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntFlag
from typing import List, Optional, Union

from fodgetools.errors import InvariantError

_BOOTH_NIL = -1


class Level(IntFlag):
    TOP = 1
    ORD = 2
    FSP = 4
    NONE = 0
    ALL = TOP | ORD | FSP


class BackToMaster:
    """
    Stands for a part that is already being represented further up.

    Used instead of a recursive reference to keep representations acyclic;
    the part is treated as an opaque box. Sorts after every real part.
    """

    _instance: Optional["BackToMaster"] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "BACK_TO_MASTER"


BACK_TO_MASTER = BackToMaster()


@dataclass(eq=False)
class LineRep:
    """
    One line leaving a gon.

    length is the number of external sides cut off by the line (1 for the
    gon's own external leg, 0 marks a singlet line), order the order label
    of its polygon, con the parts connected to that polygon.
    """

    length: int
    order: int
    con: Optional["CompRep"]
    p_idx: int


@dataclass(eq=False)
class GonRep:
    lines: List[LineRep] = field(default_factory=list)


@dataclass(eq=False)
class CycRep:
    length: int = 0
    n_flavidx: int = 0
    array: List[GonRep] = field(default_factory=list)
    offset: int = 0
    period: int = 0
    # connections of each polygon in the part, by polygon index
    fsp_cons: List[Optional["CompRep"]] = field(default_factory=list)

    def at(self, i: int) -> GonRep:
        """Gon i positions after the current offset."""
        return self.array[(i + self.offset) % self.length]


Part = Union[CycRep, BackToMaster]


@dataclass(eq=False)
class CompRep:
    """
    Sorted parts of a diagram (or of a connection) with their equality
    ranks: eq_reps[i] == eq_reps[j] iff parts i and j compare equal.
    """

    reps: List[Part]
    eq_reps: List[int]
    # part containing each polygon; only kept on whole-diagram compounds
    poly_reps: Optional[List[Optional[CycRep]]] = None

    @property
    def nreps(self) -> int:
        return len(self.reps)


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def _compare_gons(g1: GonRep, g2: GonRep, level: Level, anti_doublecount: bool = False) -> int:
    comp = _cmp(len(g1.lines), len(g2.lines))
    if comp:
        return comp
    for a, b in zip(g1.lines, g2.lines):
        if level & Level.TOP:
            comp = _cmp(a.length, b.length)
            if comp:
                return comp
        if level & Level.ORD:
            comp = _cmp(a.order, b.order)
            if comp:
                return comp
        if level & Level.FSP:
            if anti_doublecount:
                # equal but distinct connections count as different
                comp = 0 if a.con is b.con else _cmp(id(a.con), id(b.con))
            else:
                comp = compare_comprep(a.con, b.con)
            if comp:
                return comp
    return 0


def compare_cycrep(rep_1: Optional[Part], rep_2: Optional[Part], level: Level) -> int:
    """
    Three-way comparison of two normalised parts at the given levels.

    Parts without flavour indices, BACK_TO_MASTER and None sort last. Then
    fewer flavour indices, then shorter parts come first.
    """
    if not isinstance(rep_1, CycRep):
        return 1 if isinstance(rep_2, CycRep) else 0
    if not isinstance(rep_2, CycRep):
        return -1

    if not rep_1.n_flavidx:
        return 1 if rep_2.n_flavidx else 0
    if not rep_2.n_flavidx:
        return -1
    comp = _cmp(rep_1.n_flavidx, rep_2.n_flavidx)
    if comp:
        return comp
    comp = _cmp(rep_1.length, rep_2.length)
    if comp:
        return comp

    for i in range(rep_1.length):
        comp = _compare_gons(rep_1.at(i), rep_2.at(i), level)
        if comp:
            return comp
    return 0


def compare_self(
    rep: CycRep,
    idx_1: int,
    idx_2: int,
    seg_length: int,
    level: Level,
    anti_doublecount: bool = False,
) -> int:
    """
    Compare the segments of length seg_length starting at idx_1 and idx_2
    (counted from the current offset, wrapping around).
    """
    for i in range(seg_length):
        comp = _compare_gons(rep.at(i + idx_1), rep.at(i + idx_2), level, anti_doublecount)
        if comp:
            return comp
    return 0


def compare_comprep(crep_1: Optional[CompRep], crep_2: Optional[CompRep]) -> int:
    """
    Three-way comparison of compound representations.

    Part counts and equality patterns are compared first; then every part at
    TOP level before any part at ORD level, and likewise for FSP.
    """
    if crep_1 is None:
        return 1 if crep_2 is not None else 0
    if crep_2 is None:
        return -1

    comp = _cmp(crep_1.nreps, crep_2.nreps)
    if comp:
        return comp
    for a, b in zip(crep_1.eq_reps, crep_2.eq_reps):
        comp = _cmp(a, b)
        if comp:
            return comp
    for level in (Level.TOP, Level.ORD, Level.FSP):
        for a, b in zip(crep_1.reps, crep_2.reps):
            comp = compare_cycrep(a, b, level)
            if comp:
                return comp
    return 0


def booth_normalise(rep: CycRep, level: Level) -> int:
    """
    Offset of the least rotation of rep at the given level.

    Booth's algorithm, run in chunks of the period established by the
    coarser levels so that those levels stay least. Returns the new
    offset; rep is not modified.
    """
    if rep.period == rep.length:
        return rep.offset

    step = rep.period or 1
    ffunc = [_BOOTH_NIL] * (2 * rep.length // step + 1)
    noffs = 0

    for idx in range(step, 2 * rep.length, step):
        fval = ffunc[(idx - noffs) // step - 1]
        comp = compare_self(rep, idx, (1 + fval) * step + noffs, step, level)
        while fval != _BOOTH_NIL and comp != 0:
            if comp < 0:
                noffs = idx - (1 + fval) * step
            fval = ffunc[fval]
            comp = compare_self(rep, idx, (1 + fval) * step + noffs, step, level)
        if fval == _BOOTH_NIL and comp != 0:
            if comp < 0:
                noffs = idx
            ffunc[(idx - noffs) // step] = _BOOTH_NIL
        else:
            ffunc[(idx - noffs) // step] = 1 + fval

    return (rep.offset + noffs) % rep.length


def find_period(rep: CycRep, level: Level) -> int:
    """
    Smallest rotation, a multiple of the current period, that maps rep to
    itself at the given level.

    At FSP level two distinct connections never match, so exchanging equal
    connected parts is not counted as a symmetry of this part too.
    """
    step = rep.period or 1
    for period in range(step, rep.length // 2 + 1, step):
        if rep.length % period:
            continue
        if compare_self(rep, 0, period, rep.length - period, level, anti_doublecount=True) == 0:
            return period
    return rep.length


def normalise_cycrep(rep: Optional[CycRep], level: Level) -> None:
    if rep is None:
        return
    rep.offset = booth_normalise(rep, level)
    rep.period = find_period(rep, level)


def get_symmetry(crep: CompRep) -> int:
    """
    Symmetry factor of a whole-diagram representation.

    Each part without singlet sides contributes its rotational symmetry
    length/period; each run of k equal parts contributes k!.
    """
    sym = 1
    eq_fact = 1
    eq_idx = 0
    for i, rep in enumerate(crep.reps):
        # singlet sides break the cyclic symmetry
        if isinstance(rep, CycRep) and rep.length == rep.n_flavidx:
            sym *= rep.length // rep.period
        if crep.eq_reps[eq_idx] == crep.eq_reps[i]:
            eq_fact *= 1 + i - eq_idx
        else:
            sym *= eq_fact
            eq_idx = i
            eq_fact = 1
    return sym * eq_fact


def describe_comprep(crep: Optional[CompRep], indent: int = 0) -> str:
    """Multi-line dump of a representation, parts in sorted order."""
    pad = "  " * indent
    if crep is None:
        return pad + "[none]"
    lines = []
    for i, rep in enumerate(crep.reps):
        lines.append(f"{pad}part {i}:")
        if not isinstance(rep, CycRep):
            lines.append(f"{pad}  [master]")
            continue
        for g in range(rep.length):
            lines.append(f"{pad}  gon {g}:")
            for line in rep.at(g).lines:
                if line.length == 0:
                    lines.append(f"{pad}    singlet to:")
                    lines.append(describe_comprep(line.con, indent + 3))
                elif line.con is None:
                    lines.append(f"{pad}    {line.length} down, order {line.order}")
                else:
                    lines.append(f"{pad}    {line.length} down, order {line.order}, connected to:")
                    lines.append(describe_comprep(line.con, indent + 3))
    return "\n".join(lines)
