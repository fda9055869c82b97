"""
fodgetools: flavour-ordered diagram generation for chiral perturbation theory,
with permutation groups over flavour traces, labelling de-duplication, and the
polygon-based cyclic representation engine for symmetry factors.
"""

from .errors import FodgeError, InvalidRequestError, InvariantError, ComputationLimitError
from .config import configure_logging

# Permutations
from .perm import Permutation, ZnGenerator, SnGenerator, ZRGenerator

# Diagrams
from .diagrams import (
    Propagator,
    Labelling,
    Diagram,
    generate,
    valid_flav_splits,
    filter_flav_split,
    parse_flav_splits,
    summarise,
)

# Polygon diagrams
from .legacy import (
    PolygonDiagram,
    DiagramTable,
    make_contact_diagram,
    represent_diagram,
    compare_comprep,
    get_symmetry,
    count_by_flavour_split,
)

from .export import diagram_to_nx, polygon_diagram_to_nx
from .viz import draw_diagram

__all__ = [
    # Errors / config
    "FodgeError",
    "InvalidRequestError",
    "InvariantError",
    "ComputationLimitError",
    "configure_logging",
    # Permutations
    "Permutation",
    "ZnGenerator",
    "SnGenerator",
    "ZRGenerator",
    # Diagrams
    "Propagator",
    "Labelling",
    "Diagram",
    "generate",
    "valid_flav_splits",
    "filter_flav_split",
    "parse_flav_splits",
    "summarise",
    # Polygon diagrams
    "PolygonDiagram",
    "DiagramTable",
    "make_contact_diagram",
    "represent_diagram",
    "compare_comprep",
    "get_symmetry",
    "count_by_flavour_split",
    # Export / viz
    "diagram_to_nx",
    "polygon_diagram_to_nx",
    "draw_diagram",
]
