from .propagator import Propagator, normalise_mmask
from .labelling import Labelling
from .node import NodeKind, Leaf, Vertex, FlavourTrace
from .splits import VertexSpec, valid_flav_splits, valid_vertices, parse_flav_splits
from .diagram import Diagram, generate, filter_flav_split, summarise, format_flav_split

__all__ = [
    "Propagator",
    "normalise_mmask",
    "Labelling",
    "NodeKind",
    "Leaf",
    "Vertex",
    "FlavourTrace",
    "VertexSpec",
    "valid_flav_splits",
    "valid_vertices",
    "parse_flav_splits",
    "Diagram",
    "generate",
    "filter_flav_split",
    "summarise",
    "format_flav_split",
]
