from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from PIL import Image

from luvatrix_charts.backend.base import (
    Backend,
    CurveSpec,
    FileFormat,
    FontSpec,
    LineSpec,
    ShapeSpec,
    TextSpec,
)
from luvatrix_charts.backend.raster.canvas import Clip, fill_mask, fill_rect, new_canvas
from luvatrix_charts.backend.raster.draw_lines import draw_polyline
from luvatrix_charts.backend.raster.draw_shapes import circle_outline, fill_circle, fill_polygon, rect_outline
from luvatrix_charts.backend.raster.draw_text import render_text_mask, text_size
from luvatrix_charts.errors import UnsupportedFormat
from luvatrix_charts.geometry import Rect
from luvatrix_charts.series import Color


LOGGER = logging.getLogger(__name__)


class RasterBackend(Backend):
    """numpy RGBA canvas; saved through Pillow as PNG, JPEG or BMP."""

    def __init__(self, width: int, height: int, background: Color = (255, 255, 255, 255)) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be > 0")
        self.canvas = new_canvas(width, height, color=background)

    @property
    def size(self) -> tuple[int, int]:
        return (self.canvas.shape[1], self.canvas.shape[0])

    def to_rgba(self) -> np.ndarray:
        return self.canvas.copy()

    def text_size(self, text: str, font: FontSpec) -> tuple[int, int]:
        return text_size(text, font_family=font.name, font_size_px=font.size)

    def draw_shape(self, shape: ShapeSpec) -> None:
        clip = self._clip(shape.clip)
        cx, cy = shape.center.x, self._row(shape.center.y)
        if shape.kind == "circle":
            radius = shape.width / 2.0
            fill_circle(self.canvas, cx, cy, radius, shape.fill_color, clip=clip)
            xs, ys = circle_outline(cx, cy, radius)
        else:
            half_w = shape.width / 2.0
            half_h = (shape.width if shape.kind == "square" else shape.height) / 2.0
            x0, x1 = int(round(cx - half_w)), int(round(cx + half_w)) - 1
            y0, y1 = int(round(cy - half_h)), int(round(cy + half_h)) - 1
            fill_rect(self.canvas, x0, y0, x1, y1, shape.fill_color, clip=clip)
            xs, ys = rect_outline(x0, y0, x1, y1)
        if shape.line_width > 0 and shape.line_color[3] > 0:
            draw_polyline(self.canvas, xs, ys, shape.line_color, shape.line_width, dashes=shape.dashes, clip=clip)

    def draw_line(self, line: LineSpec) -> None:
        xs = np.array([line.p1.x, line.p2.x], dtype=np.float64)
        ys = np.array([self._row(line.p1.y), self._row(line.p2.y)], dtype=np.float64)
        draw_polyline(self.canvas, xs, ys, line.color, line.width, dashes=line.dashes, clip=self._clip(line.clip))

    def draw_curve(self, curve: CurveSpec) -> None:
        if not curve.points:
            return
        clip = self._clip(curve.clip)
        xs = np.array([p.x for p in curve.points], dtype=np.float64)
        ys = np.array([self._row(p.y) for p in curve.points], dtype=np.float64)
        if curve.fill_color is not None:
            fill_polygon(self.canvas, xs, ys, curve.fill_color, clip=clip)
        if curve.width > 0 and curve.color[3] > 0:
            draw_polyline(self.canvas, xs, ys, curve.color, curve.width, dashes=curve.dashes, clip=clip)

    def draw_text(self, text: TextSpec) -> None:
        if not text.text:
            return
        mask = render_text_mask(
            text.text,
            font_family=text.font.name,
            font_size_px=text.font.size,
            rotate_deg=text.rotation,
        )
        h, w = mask.shape
        origin = text.alignment.box_origin(text.position, w, h)
        col = int(round(origin.x))
        top_row = int(round(self.canvas.shape[0] - (origin.y + h)))
        fill_mask(self.canvas, col, top_row, mask, text.color)

    def save_file(self, filename: str | Path, format: FileFormat | None = None, dpi: int = 100) -> None:
        fmt = format or FileFormat.from_path(filename)
        if not fmt.is_raster:
            raise UnsupportedFormat(f"raster backend cannot write {fmt.value}")
        image = Image.fromarray(self.canvas)
        if fmt is FileFormat.JPEG:
            image = image.convert("RGB")
        image.save(str(filename), format=fmt.name, dpi=(dpi, dpi))
        LOGGER.debug("saved %dx%d %s to %s", self.size[0], self.size[1], fmt.value, filename)

    def _row(self, y: float) -> float:
        return (self.canvas.shape[0] - 1) - y

    def _clip(self, rect: Rect | None) -> Clip | None:
        if rect is None:
            return None
        top = int(round(self._row(rect.ymax)))
        bottom = int(round(self._row(rect.ymin)))
        return (int(rect.xmin), top, int(rect.xmax), bottom)
