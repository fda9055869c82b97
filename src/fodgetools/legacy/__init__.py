from .cycrep import (
    BACK_TO_MASTER,
    BackToMaster,
    CompRep,
    CycRep,
    GonRep,
    Level,
    LineRep,
    booth_normalise,
    compare_comprep,
    compare_cycrep,
    describe_comprep,
    find_period,
    get_symmetry,
    normalise_cycrep,
)
from .info_sort import SortInfo, info_sort
from .polygon import EdgeType, PolyEdge, Polygon, PolygonDiagram
from .represent import represent_diagram, represent_part
from .growth import (
    check_zero_fsp,
    compare_diagrams,
    count_by_flavour_split,
    cut_edge,
    flavour_split_of,
    grow_diagrams,
    insert_diagram,
    make_contact_diagram,
    merge_diagrams,
    remove_zero_fsp,
    singlet_diagrams,
    singlet_prop,
    split_diagrams,
    split_poly,
)
from .table import DiagramTable

__all__ = [
    "BACK_TO_MASTER",
    "BackToMaster",
    "CompRep",
    "CycRep",
    "GonRep",
    "Level",
    "LineRep",
    "booth_normalise",
    "compare_comprep",
    "compare_cycrep",
    "describe_comprep",
    "find_period",
    "get_symmetry",
    "normalise_cycrep",
    "SortInfo",
    "info_sort",
    "EdgeType",
    "PolyEdge",
    "Polygon",
    "PolygonDiagram",
    "represent_diagram",
    "represent_part",
    "check_zero_fsp",
    "compare_diagrams",
    "count_by_flavour_split",
    "cut_edge",
    "flavour_split_of",
    "grow_diagrams",
    "insert_diagram",
    "make_contact_diagram",
    "merge_diagrams",
    "remove_zero_fsp",
    "singlet_diagrams",
    "singlet_prop",
    "split_diagrams",
    "split_poly",
    "DiagramTable",
]
