from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path

import numpy as np

from luvatrix_charts.backend import Backend, FileFormat, RasterBackend, SvgBackend
from luvatrix_charts.compose import draw_subplot
from luvatrix_charts.errors import InvalidIndex
from luvatrix_charts.geometry import Rect
from luvatrix_charts.series import Color
from luvatrix_charts.subplot import Subplot
from luvatrix_charts.theme import WHITE
from luvatrix_charts.ticks import finalize_axes


LOGGER = logging.getLogger(__name__)

# Figures are laid out at this DPI; higher DPIs scale lines, text and ticks.
BASE_DPI = 100


@dataclass(frozen=True)
class FigureConfig:
    figsize: tuple[float, float] = (6.75, 5.0)
    dpi: int = BASE_DPI
    face_color: Color = WHITE

    def validate(self) -> None:
        if self.figsize[0] <= 0 or self.figsize[1] <= 0:
            raise ValueError("figsize must be > 0")
        if self.dpi <= 0:
            raise ValueError("dpi must be > 0")
        if self.pixel_size[0] <= 0 or self.pixel_size[1] <= 0:
            raise ValueError("figure must be at least one pixel in each direction")

    @property
    def pixel_size(self) -> tuple[int, int]:
        return (int(self.figsize[0] * self.dpi), int(self.figsize[1] * self.dpi))

    @property
    def scaling(self) -> float:
        return self.dpi / BASE_DPI


@dataclass
class Figure:
    config: FigureConfig = field(default_factory=FigureConfig)
    _subplots: list[tuple[Subplot, Rect]] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        self.config.validate()

    @property
    def width(self) -> int:
        return self.config.pixel_size[0]

    @property
    def height(self) -> int:
        return self.config.pixel_size[1]

    def add_subplot(self, placement: tuple[int, int, int], subplot: Subplot | None = None) -> Subplot:
        """Place ``subplot`` in cell ``index`` (1-based, row-major from the top) of an
        ``nrows`` x ``ncols`` grid."""
        nrows, ncols, index = placement
        if nrows <= 0 or ncols <= 0:
            raise ValueError("nrows and ncols must be > 0")
        if index < 1 or index > nrows * ncols:
            raise InvalidIndex(index, nrows, ncols)
        subplot = subplot if subplot is not None else Subplot()
        cell_w = self.width // ncols
        cell_h = self.height // nrows
        row, col = divmod(index - 1, ncols)
        xmin = col * cell_w
        ymax = self.height - row * cell_h
        area = Rect(xmin=xmin, xmax=xmin + cell_w, ymin=ymax - cell_h, ymax=ymax)
        self._subplots.append((subplot, area))
        LOGGER.debug("subplot %d of %dx%d placed at %s", index, nrows, ncols, area)
        return subplot

    def subplots(self) -> list[Subplot]:
        return [subplot for subplot, _ in self._subplots]

    def areas(self) -> list[Rect]:
        return [area for _, area in self._subplots]

    def draw_to_backend(self, backend: Backend) -> None:
        # resolve every subplot's ticks up front so label errors surface before drawing
        finalized = [finalize_axes(subplot.axes, subplot.used_roles()) for subplot, _ in self._subplots]
        for (subplot, area), axes in zip(self._subplots, finalized):
            draw_subplot(backend, subplot, area, self.config.scaling, axes=axes)

    def make_backend(self, format: FileFormat) -> Backend:
        if format is FileFormat.SVG:
            return SvgBackend(self.width, self.height, background=self.config.face_color)
        return RasterBackend(self.width, self.height, background=self.config.face_color)

    def draw_file(self, format: FileFormat | str, filename: str | Path) -> None:
        fmt = format if isinstance(format, FileFormat) else FileFormat.parse(format)
        backend = self.make_backend(fmt)
        self.draw_to_backend(backend)
        backend.save_file(filename, fmt, dpi=self.config.dpi)

    def to_rgba(self) -> np.ndarray:
        backend = RasterBackend(self.width, self.height, background=self.config.face_color)
        self.draw_to_backend(backend)
        return backend.to_rgba()
