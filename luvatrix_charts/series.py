from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Literal, Union

import numpy as np

from luvatrix_charts.roles import AxisRole


Color = tuple[int, int, int, int]
LineStyle = Literal["solid", "dashed", "short-dashed"]
MarkerStyle = Literal["circle", "square"]

LINE_STYLES: tuple[str, ...] = ("solid", "dashed", "short-dashed")
MARKER_STYLES: tuple[str, ...] = ("circle", "square")


@dataclass(frozen=True)
class PointSeries:
    x: np.ndarray
    y: np.ndarray

    def points(self) -> Iterator[tuple[float, float]]:
        return zip(self.x.tolist(), self.y.tolist())

    @property
    def xmin(self) -> float:
        return float(np.min(self.x))

    @property
    def xmax(self) -> float:
        return float(np.max(self.x))

    @property
    def ymin(self) -> float:
        return float(np.min(self.y))

    @property
    def ymax(self) -> float:
        return float(np.max(self.y))


@dataclass(frozen=True)
class StepSeries:
    """Histogram-style data: ``values[i]`` spans ``edges[i]`` to ``edges[i + 1]``."""

    edges: np.ndarray
    values: np.ndarray

    def points(self) -> Iterator[tuple[float, float]]:
        edges = self.edges.tolist()
        for i, value in enumerate(self.values.tolist()):
            yield (edges[i], value)
            yield (edges[i + 1], value)

    @property
    def xmin(self) -> float:
        return float(np.min(self.edges))

    @property
    def xmax(self) -> float:
        return float(np.max(self.edges))

    @property
    def ymin(self) -> float:
        return float(np.min(self.values))

    @property
    def ymax(self) -> float:
        return float(np.max(self.values))


@dataclass(frozen=True)
class FillBetween:
    x: np.ndarray
    y1: np.ndarray
    y2: np.ndarray

    def curve1(self) -> Iterator[tuple[float, float]]:
        return zip(self.x.tolist(), self.y1.tolist())

    def curve2(self) -> Iterator[tuple[float, float]]:
        return zip(self.x.tolist(), self.y2.tolist())

    def outline(self) -> list[tuple[float, float]]:
        """Closed polygon: along the first curve, then back along the second."""
        return list(self.curve1()) + list(reversed(list(self.curve2())))

    @property
    def xmin(self) -> float:
        return float(np.min(self.x))

    @property
    def xmax(self) -> float:
        return float(np.max(self.x))

    @property
    def ymin(self) -> float:
        return float(min(np.min(self.y1), np.min(self.y2)))

    @property
    def ymax(self) -> float:
        return float(max(np.max(self.y1), np.max(self.y2)))


SeriesData = Union[PointSeries, StepSeries]
PlotData = Union[PointSeries, StepSeries, FillBetween]


@dataclass(frozen=True)
class PlotStyle:
    line: LineStyle | None = "solid"
    line_width: int = 3
    line_color: Color | None = None
    marker: MarkerStyle | None = None
    marker_size: int = 3
    marker_color: Color | None = None
    marker_outline: bool = False
    marker_outline_color: Color | None = None
    marker_outline_width: int = 2
    marker_outline_style: LineStyle = "solid"
    xaxis: AxisRole = AxisRole.X
    yaxis: AxisRole = AxisRole.Y
    label: str = ""
    pixel_perfect: bool = False

    def validate(self) -> None:
        if self.line is not None and self.line not in LINE_STYLES:
            raise ValueError(f"unsupported line style: {self.line}")
        if self.marker is not None and self.marker not in MARKER_STYLES:
            raise ValueError(f"unsupported marker style: {self.marker}")
        if self.marker_outline_style not in LINE_STYLES:
            raise ValueError(f"unsupported marker outline style: {self.marker_outline_style}")
        if self.line_width <= 0 or self.marker_size <= 0 or self.marker_outline_width <= 0:
            raise ValueError("line width, marker size and outline width must be > 0")
        if self.line is None and self.marker is None:
            raise ValueError("plot style must draw a line, markers, or both")


@dataclass(frozen=True)
class FillStyle:
    color: Color | None = None
    xaxis: AxisRole = AxisRole.X
    yaxis: AxisRole = AxisRole.Y
    label: str = ""


@dataclass(frozen=True)
class SeriesEntry:
    data: SeriesData
    style: PlotStyle


@dataclass(frozen=True)
class FillEntry:
    data: FillBetween
    style: FillStyle


PlotEntry = Union[SeriesEntry, FillEntry]
