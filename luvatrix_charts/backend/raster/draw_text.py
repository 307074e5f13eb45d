from __future__ import annotations

from functools import lru_cache
import logging
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from luvatrix_charts.backend.base import quarter_turns


LOGGER = logging.getLogger(__name__)

SANS_FONT_FALLBACK_PATTERNS = (
    "dejavusans",
    "dejavu sans",
    "liberationsans",
    "liberation sans",
    "arial",
    "helvetica",
    "freesans",
)

FONT_DIRS = (
    Path.home() / "Library" / "Fonts",
    Path("/Library/Fonts"),
    Path("/System/Library/Fonts"),
    Path("/System/Library/Fonts/Supplemental"),
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
    Path.home() / ".fonts",
    Path("C:/Windows/Fonts"),
)

Font = ImageFont.FreeTypeFont | ImageFont.ImageFont


def text_size(text: str, *, font_family: str, font_size_px: float) -> tuple[int, int]:
    font = load_font(font_family, font_size_px)
    if not text:
        return (0, _line_height(font))
    left, top, right, bottom = font.getbbox(text)
    return (max(0, int(right - left)), max(1, int(bottom - top)))


def render_text_mask(text: str, *, font_family: str, font_size_px: float, rotate_deg: int = 0) -> np.ndarray:
    """8-bit coverage mask of ``text``, rotated counter-clockwise by ``rotate_deg``."""
    font = load_font(font_family, font_size_px)
    mask = _render_mask(text, font)
    turns = quarter_turns(rotate_deg)
    if turns == 0:
        return mask
    return np.rot90(mask, k=turns)


@lru_cache(maxsize=256)
def _render_mask(text: str, font: Font) -> np.ndarray:
    if not text:
        return np.zeros((1, 1), dtype=np.uint8)
    left, top, right, bottom = font.getbbox(text)
    width = max(1, int(right - left))
    height = max(1, int(bottom - top))
    image = Image.new("L", (width, height), 0)
    draw = ImageDraw.Draw(image)
    draw.text((-left, -top), text, fill=255, font=font)
    return np.asarray(image, dtype=np.uint8)


@lru_cache(maxsize=64)
def load_font(font_family: str, font_size_px: float) -> Font:
    size = max(1, int(round(font_size_px)))
    font_path = _resolve_font_path(font_family)
    if font_path is not None:
        try:
            return ImageFont.truetype(str(font_path), size=size)
        except OSError as exc:
            LOGGER.warning("could not load font %s (%s); using Pillow's default font", font_path, exc)
            return ImageFont.load_default(size=size)
    LOGGER.warning("no TrueType font matching %r found; using Pillow's default font", font_family)
    return ImageFont.load_default(size=size)


def _line_height(font: Font) -> int:
    if isinstance(font, ImageFont.FreeTypeFont):
        ascent, descent = font.getmetrics()
        return max(1, int(ascent + descent))
    left, top, right, bottom = font.getbbox("0")
    return max(1, int(bottom - top))


@lru_cache(maxsize=32)
def _resolve_font_path(font_family: str) -> Path | None:
    wanted = font_family.strip().lower()
    patterns = ((wanted,) if wanted else ()) + SANS_FONT_FALLBACK_PATTERNS

    candidates: list[Path] = []
    for base in FONT_DIRS:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf", "*.ttc"):
            candidates.extend(sorted(base.rglob(ext)))

    for pattern in patterns:
        p = pattern.replace(" ", "")
        # exact stem first so "DejaVu Sans" does not resolve to "DejaVuSans-Bold"
        for path in candidates:
            if path.stem.lower().replace(" ", "") == p:
                return path
        for path in candidates:
            stem = path.stem.lower().replace(" ", "")
            if p in stem:
                return path
    return None
