from __future__ import annotations

import logging
from typing import Dict, List, Tuple

from fodgetools.errors import InvalidRequestError
from .growth import (
    count_by_flavour_split,
    grow_diagrams,
    make_contact_diagram,
    merge_diagrams,
    remove_zero_fsp,
    singlet_diagrams,
    split_diagrams,
)
from .polygon import PolygonDiagram

logger = logging.getLogger(__name__)


class DiagramTable:
    """
    Polygon diagrams by (order label, ngons), filled on demand.

    A cell holds every diagram with ngons external legs whose polygon order
    labels sum to the cell's order label: the contact diagram, plus every
    smaller cell grown by one polygon. With split (order >= 1) and singlet
    (order >= 2) the cells handed out also contain the flavour-split and
    singlet variants, with vanishing diagrams removed.

    Parameters
    ----------
    max_ngons : int
        Largest number of external legs; even and at least 4.
    max_order : int
        Largest order label.
    """

    def __init__(self, max_ngons: int, max_order: int, split: bool = False, singlet: bool = False):
        if max_ngons < 4 or max_ngons % 2:
            raise InvalidRequestError(f"invalid diagram size {max_ngons}")
        if max_order < 0:
            raise InvalidRequestError(f"invalid order label {max_order}")
        self.max_ngons = max_ngons
        self.max_order = max_order
        self.split = split
        self.singlet = singlet
        self._grown: Dict[Tuple[int, int], List[PolygonDiagram]] = {}
        self._cells: Dict[Tuple[int, int], List[PolygonDiagram]] = {}

    def _check(self, order: int, ngons: int) -> None:
        if ngons < 4 or ngons % 2 or ngons > self.max_ngons:
            raise InvalidRequestError(f"ngons must be even in [4, {self.max_ngons}], got {ngons}")
        if order < 0 or order > self.max_order:
            raise InvalidRequestError(f"order label must be in [0, {self.max_order}], got {order}")

    def grown(self, order: int, ngons: int) -> List[PolygonDiagram]:
        """Cell before splitting and singlet insertion."""
        key = (order, ngons)
        if key in self._grown:
            return self._grown[key]

        logger.debug("Generating O(p^%d) %d-point diagrams", 2 * (order + 1), ngons)
        diagrams = [make_contact_diagram(ngons, order)]
        for o in range(order, order // 2 - 1, -1):
            for n in range(ngons - 2, max(ngons // 2, 4) - 1, -2):
                diagrams = merge_diagrams(diagrams, grow_diagrams(self.grown(o, n), ngons - n, order - o))

        self._grown[key] = diagrams
        logger.debug("O(p^%d) %d-point: %d diagrams", 2 * (order + 1), ngons, len(diagrams))
        return diagrams

    def get(self, order: int, ngons: int) -> List[PolygonDiagram]:
        """Sorted diagrams of the cell, with splits and singlets as configured."""
        self._check(order, ngons)
        key = (order, ngons)
        if key in self._cells:
            return self._cells[key]

        diagrams = self.grown(order, ngons)
        if self.split and order >= 1:
            diagrams = remove_zero_fsp(split_diagrams(diagrams))
        if self.singlet and order >= 2:
            diagrams = remove_zero_fsp(singlet_diagrams(diagrams))
        self._cells[key] = diagrams
        return diagrams

    def fill(self) -> None:
        """Fill every cell of the table."""
        for order in range(self.max_order + 1):
            for ngons in range(4, self.max_ngons + 1, 2):
                self.get(order, ngons)

    def summary(self) -> str:
        """Diagram counts of the filled cells, split up by flavour structure."""
        lines = []
        for (order, ngons), diagrams in sorted(self._cells.items()):
            lines.append(f"O(p^{2 * (order + 1)}) {ngons}-point: {len(diagrams)} diagrams")
            for split, count in sorted(count_by_flavour_split(diagrams).items()):
                fsp = ",".join(str(s) for s in split)
                lines.append(f"  {{{fsp}}}: {count}")
        return "\n".join(lines)
