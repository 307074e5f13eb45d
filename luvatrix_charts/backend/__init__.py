from .base import (
    Alignment,
    Backend,
    CurveSpec,
    FileFormat,
    FontSpec,
    LineSpec,
    ShapeSpec,
    TextSpec,
)
from .raster import RasterBackend
from .recording import DrawCall, RecordingBackend
from .svg import SvgBackend

__all__ = [
    "Alignment",
    "Backend",
    "CurveSpec",
    "DrawCall",
    "FileFormat",
    "FontSpec",
    "LineSpec",
    "RasterBackend",
    "RecordingBackend",
    "ShapeSpec",
    "SvgBackend",
    "TextSpec",
]
