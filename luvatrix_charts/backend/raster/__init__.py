from .backend import RasterBackend
from .canvas import fill_rect, new_canvas
from .draw_lines import draw_polyline
from .draw_shapes import fill_circle, fill_polygon
from .draw_text import render_text_mask, text_size

__all__ = [
    "RasterBackend",
    "draw_polyline",
    "fill_circle",
    "fill_polygon",
    "fill_rect",
    "new_canvas",
    "render_text_mask",
    "text_size",
]
