from .graph import diagram_to_nx, polygon_diagram_to_nx

__all__ = [
    "diagram_to_nx",
    "polygon_diagram_to_nx",
]
