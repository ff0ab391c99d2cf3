from .canvas import blit, draw_hline, draw_vline, fill, new_canvas
from .draw_lines import draw_line, draw_polyline
from .draw_shapes import fill_ellipse
from .draw_text import draw_text, text_size

__all__ = [
    "blit",
    "draw_hline",
    "draw_line",
    "draw_polyline",
    "draw_text",
    "draw_vline",
    "fill",
    "fill_ellipse",
    "new_canvas",
    "text_size",
]
