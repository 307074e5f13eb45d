from __future__ import annotations

import numpy as np

from luvatrix_charts.series import Color


# Inclusive pixel window (col0, row0, col1, row1) in array coordinates.
Clip = tuple[int, int, int, int]


def new_canvas(width: int, height: int, color: Color = (255, 255, 255, 255)) -> np.ndarray:
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    canvas[:, :, 0] = color[0]
    canvas[:, :, 1] = color[1]
    canvas[:, :, 2] = color[2]
    canvas[:, :, 3] = color[3]
    return canvas


def full_clip(dst: np.ndarray) -> Clip:
    return (0, 0, dst.shape[1] - 1, dst.shape[0] - 1)


def intersect_clip(dst: np.ndarray, clip: Clip | None) -> Clip:
    c0, r0, c1, r1 = full_clip(dst)
    if clip is None:
        return (c0, r0, c1, r1)
    return (max(c0, clip[0]), max(r0, clip[1]), min(c1, clip[2]), min(r1, clip[3]))


def blend_into(view: np.ndarray, color: Color, coverage: np.ndarray | None = None) -> None:
    """Source-over blend ``color`` into ``view`` (an (h, w, 4) slice), optionally per-pixel."""
    alpha = color[3] / 255.0
    if coverage is None:
        a = np.float32(alpha)
    else:
        a = (coverage.astype(np.float32) * alpha)[:, :, None]
    src = np.asarray(color[0:3], dtype=np.float32)
    view[:, :, :3] = (src * a + view[:, :, :3].astype(np.float32) * (1.0 - a)).astype(np.uint8)
    dst_a = view[:, :, 3].astype(np.float32) / 255.0
    src_a = a[:, :, 0] if coverage is not None else a
    view[:, :, 3] = np.clip((src_a + dst_a * (1.0 - src_a)) * 255.0, 0, 255).astype(np.uint8)


def fill_rect(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: Color, clip: Clip | None = None) -> None:
    c0, r0, c1, r1 = intersect_clip(dst, clip)
    xa = max(c0, min(x0, x1))
    xb = min(c1, max(x0, x1))
    ya = max(r0, min(y0, y1))
    yb = min(r1, max(y0, y1))
    if xa > xb or ya > yb:
        return
    blend_into(dst[ya : yb + 1, xa : xb + 1], color)


def fill_mask(dst: np.ndarray, x: int, y: int, mask: np.ndarray, color: Color, clip: Clip | None = None) -> None:
    """Blend ``color`` through an 8-bit coverage ``mask`` whose top-left pixel lands on (x, y)."""
    h, w = mask.shape
    if h <= 0 or w <= 0:
        return
    c0, r0, c1, r1 = intersect_clip(dst, clip)
    x0 = max(c0, x)
    y0 = max(r0, y)
    xe = min(c1 + 1, x + w)
    ye = min(r1 + 1, y + h)
    if xe <= x0 or ye <= y0:
        return
    cov = mask[y0 - y : ye - y, x0 - x : xe - x].astype(np.float32) / 255.0
    if not np.any(cov > 0):
        return
    blend_into(dst[y0:ye, x0:xe], color, coverage=cov)
