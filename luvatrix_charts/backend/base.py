from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Literal

from luvatrix_charts.errors import UnsupportedFormat
from luvatrix_charts.geometry import Point, Rect
from luvatrix_charts.series import Color


ShapeKind = Literal["rectangle", "circle", "square"]


class FileFormat(Enum):
    PNG = "png"
    JPEG = "jpeg"
    BMP = "bmp"
    SVG = "svg"

    @property
    def is_raster(self) -> bool:
        return self is not FileFormat.SVG

    @classmethod
    def parse(cls, name: str) -> "FileFormat":
        key = name.strip().lower().lstrip(".")
        if key == "jpg":
            key = "jpeg"
        for fmt in cls:
            if fmt.value == key:
                return fmt
        raise UnsupportedFormat(f"unsupported image format: {name!r}")

    @classmethod
    def from_path(cls, filename: str | Path) -> "FileFormat":
        suffix = Path(filename).suffix
        if not suffix:
            raise UnsupportedFormat(f"cannot infer an image format from {str(filename)!r}")
        return cls.parse(suffix)


class Alignment(Enum):
    """Which point of the text's (rotated) bounding box sits on the anchor."""

    CENTER = (0.5, 0.5)
    LEFT = (0.0, 0.5)
    RIGHT = (1.0, 0.5)
    TOP = (0.5, 1.0)
    BOTTOM = (0.5, 0.0)
    TOP_LEFT = (0.0, 1.0)
    TOP_RIGHT = (1.0, 1.0)
    BOTTOM_LEFT = (0.0, 0.0)
    BOTTOM_RIGHT = (1.0, 0.0)

    def box_origin(self, anchor: Point, width: float, height: float) -> Point:
        """Bottom-left corner (y-up) of a ``width`` x ``height`` box aligned on ``anchor``."""
        fx, fy = self.value
        return Point(anchor.x - fx * width, anchor.y - fy * height)


@dataclass(frozen=True)
class FontSpec:
    name: str
    size: float


@dataclass(frozen=True)
class ShapeSpec:
    """A filled shape centred on ``center``; circles use ``width`` as the diameter."""

    kind: ShapeKind
    center: Point
    width: float
    height: float
    fill_color: Color
    line_color: Color = (0, 0, 0, 0)
    line_width: int = 0
    dashes: tuple[float, ...] = ()
    clip: Rect | None = None


@dataclass(frozen=True)
class LineSpec:
    p1: Point
    p2: Point
    color: Color
    width: int = 1
    dashes: tuple[float, ...] = ()
    clip: Rect | None = None


@dataclass(frozen=True)
class CurveSpec:
    points: tuple[Point, ...]
    color: Color
    width: int = 1
    dashes: tuple[float, ...] = ()
    clip: Rect | None = None
    fill_color: Color | None = None


@dataclass(frozen=True)
class TextSpec:
    text: str
    position: Point
    font: FontSpec
    color: Color
    alignment: Alignment = Alignment.CENTER
    # counter-clockwise, in degrees; multiples of 90
    rotation: int = 0


class Backend(ABC):
    """Drawing surface used by the subplot composer.

    Coordinates are pixels in a y-up frame with the origin at the bottom-left
    corner of the canvas.
    """

    @property
    @abstractmethod
    def size(self) -> tuple[int, int]:
        raise NotImplementedError

    @abstractmethod
    def text_size(self, text: str, font: FontSpec) -> tuple[int, int]:
        raise NotImplementedError

    @abstractmethod
    def draw_shape(self, shape: ShapeSpec) -> None:
        raise NotImplementedError

    @abstractmethod
    def draw_line(self, line: LineSpec) -> None:
        raise NotImplementedError

    @abstractmethod
    def draw_curve(self, curve: CurveSpec) -> None:
        raise NotImplementedError

    @abstractmethod
    def draw_text(self, text: TextSpec) -> None:
        raise NotImplementedError

    @abstractmethod
    def save_file(self, filename: str | Path, format: FileFormat | None = None, dpi: int = 100) -> None:
        raise NotImplementedError


def rotated_size(size: tuple[int, int], rotation: int) -> tuple[int, int]:
    turns = quarter_turns(rotation)
    if turns % 2 == 1:
        return (size[1], size[0])
    return size


def quarter_turns(rotation: int) -> int:
    if rotation % 90 != 0:
        raise ValueError("rotation must be a multiple of 90 degrees")
    return (rotation // 90) % 4
