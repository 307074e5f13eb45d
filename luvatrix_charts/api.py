from __future__ import annotations

from dataclasses import replace

from luvatrix_charts.figure import BASE_DPI, Figure, FigureConfig
from luvatrix_charts.series import Color
from luvatrix_charts.subplot import Subplot, SubplotConfig
from luvatrix_charts.theme import WHITE


def figure(
    figsize: tuple[float, float] | None = None,
    *,
    dpi: int = BASE_DPI,
    face_color: Color = WHITE,
) -> Figure:
    config = FigureConfig(dpi=dpi, face_color=face_color)
    if figsize is not None:
        config = replace(config, figsize=figsize)
    return Figure(config=config)


def subplots(
    nrows: int,
    ncols: int,
    config: SubplotConfig | None = None,
    *,
    figsize: tuple[float, float] | None = None,
    dpi: int = BASE_DPI,
) -> tuple[Figure, list[Subplot]]:
    """A figure filled with ``nrows * ncols`` subplots sharing one configuration."""
    fig = figure(figsize, dpi=dpi)
    for index in range(1, nrows * ncols + 1):
        fig.add_subplot((nrows, ncols, index), Subplot(config or SubplotConfig()))
    return fig, fig.subplots()
