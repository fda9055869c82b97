from .draw import diagram_layout, draw_diagram

__all__ = [
    "diagram_layout",
    "draw_diagram",
]
