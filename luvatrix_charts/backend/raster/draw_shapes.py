from __future__ import annotations

import numpy as np

from luvatrix_charts.backend.raster.canvas import Clip, fill_mask
from luvatrix_charts.series import Color


CIRCLE_OUTLINE_SEGMENTS = 48


def fill_circle(dst: np.ndarray, cx: float, cy: float, radius: float, color: Color, clip: Clip | None = None) -> None:
    if radius <= 0:
        return
    x0 = int(np.floor(cx - radius))
    y0 = int(np.floor(cy - radius))
    size = int(np.ceil(2 * radius)) + 2
    cols = np.arange(size, dtype=np.float32) + x0 + 0.5
    rows = np.arange(size, dtype=np.float32) + y0 + 0.5
    dist2 = (cols[None, :] - cx) ** 2 + (rows[:, None] - cy) ** 2
    mask = np.where(dist2 <= radius * radius, 255, 0).astype(np.uint8)
    fill_mask(dst, x0, y0, mask, color, clip=clip)


def fill_polygon(dst: np.ndarray, xs: np.ndarray, ys: np.ndarray, color: Color, clip: Clip | None = None) -> None:
    """Even-odd scanline fill of the closed polygon through (xs, ys)."""
    if xs.size < 3:
        return
    x0 = int(np.floor(xs.min()))
    x1 = int(np.ceil(xs.max()))
    y0 = int(np.floor(ys.min()))
    y1 = int(np.ceil(ys.max()))
    if x1 < x0 or y1 < y0:
        return
    mask = np.zeros((y1 - y0 + 1, x1 - x0 + 1), dtype=np.uint8)
    xa = xs.astype(np.float64)
    ya = ys.astype(np.float64)
    xb = np.roll(xa, -1)
    yb = np.roll(ya, -1)
    cols = np.arange(x0, x1 + 1, dtype=np.float64) + 0.5
    for row in range(y0, y1 + 1):
        yc = row + 0.5
        crosses = (ya <= yc) != (yb <= yc)
        if not np.any(crosses):
            continue
        t = (yc - ya[crosses]) / (yb[crosses] - ya[crosses])
        xcross = np.sort(xa[crosses] + t * (xb[crosses] - xa[crosses]))
        inside = np.searchsorted(xcross, cols) % 2 == 1
        mask[row - y0, inside] = 255
    fill_mask(dst, x0, y0, mask, color, clip=clip)


def circle_outline(cx: float, cy: float, radius: float) -> tuple[np.ndarray, np.ndarray]:
    angles = np.linspace(0.0, 2.0 * np.pi, CIRCLE_OUTLINE_SEGMENTS + 1)
    return (cx + radius * np.cos(angles), cy + radius * np.sin(angles))


def rect_outline(x0: float, y0: float, x1: float, y1: float) -> tuple[np.ndarray, np.ndarray]:
    return (np.array([x0, x1, x1, x0, x0], dtype=np.float64), np.array([y0, y0, y1, y1, y0], dtype=np.float64))
