from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from luvatrix_charts.backend.raster.canvas import Clip, fill_rect
from luvatrix_charts.series import Color


class DashCursor:
    """Walks an on/off dash pattern as pixels are laid down along a path."""

    def __init__(self, dashes: Sequence[float]) -> None:
        self._pattern = [max(0.0, float(d)) for d in dashes]
        if self._pattern and sum(self._pattern) <= 0.0:
            self._pattern = []
        self._index = 0
        self._remaining = self._pattern[0] if self._pattern else 0.0

    def advance(self, distance: float) -> bool:
        """Move ``distance`` along the path; return whether the pen is down there."""
        if not self._pattern:
            return True
        self._remaining -= distance
        while self._remaining < 0.0:
            self._index = (self._index + 1) % len(self._pattern)
            self._remaining += self._pattern[self._index]
        return self._index % 2 == 0


def draw_polyline(
    dst: np.ndarray,
    xs: np.ndarray,
    ys: np.ndarray,
    color: Color,
    width: int = 1,
    *,
    dashes: Sequence[float] = (),
    clip: Clip | None = None,
) -> None:
    if xs.size < 2 or width <= 0:
        return
    cursor = DashCursor(dashes)
    for i in range(xs.size - 1):
        _draw_line_segment(
            dst,
            int(round(xs[i])),
            int(round(ys[i])),
            int(round(xs[i + 1])),
            int(round(ys[i + 1])),
            color=color,
            width=width,
            cursor=cursor,
            clip=clip,
            skip_first=i > 0,
        )


def _draw_line_segment(
    dst: np.ndarray,
    x0: int,
    y0: int,
    x1: int,
    y1: int,
    *,
    color: Color,
    width: int,
    cursor: DashCursor,
    clip: Clip | None,
    skip_first: bool,
) -> None:
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy
    step = 0.0
    first = True

    while True:
        # the joint pixel was already drawn by the previous segment
        if not (first and skip_first) and cursor.advance(step):
            _draw_square_brush(dst, x0, y0, color=color, width=width, clip=clip)
        first = False
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        moved_x = moved_y = False
        if e2 >= dy:
            err += dy
            x0 += sx
            moved_x = True
        if e2 <= dx:
            err += dx
            y0 += sy
            moved_y = True
        step = math.sqrt(2.0) if moved_x and moved_y else 1.0


def _draw_square_brush(dst: np.ndarray, x: int, y: int, *, color: Color, width: int, clip: Clip | None) -> None:
    lo = (width - 1) // 2
    hi = width // 2
    fill_rect(dst, x - lo, y - lo, x + hi, y + hi, color, clip=clip)
