from __future__ import annotations

import itertools
import logging
from typing import TYPE_CHECKING, Iterator

from luvatrix_charts.backend.base import (
    Alignment,
    Backend,
    CurveSpec,
    FontSpec,
    LineSpec,
    ShapeSpec,
    TextSpec,
)
from luvatrix_charts.formatting import modifier_text
from luvatrix_charts.geometry import Point, Rect, data_to_fraction, data_to_point, fractional_to_point
from luvatrix_charts.layout import GlyphMetrics, SubplotLayout, TickLengths, compute_layout
from luvatrix_charts.roles import AxisRole, RoleTable
from luvatrix_charts.series import Color, FillEntry, LineStyle, PlotEntry, SeriesEntry
from luvatrix_charts.theme import TRANSPARENT, SubplotFormat
from luvatrix_charts.ticks import FinalizedAxis, finalize_axes

if TYPE_CHECKING:
    from luvatrix_charts.subplot import Subplot


LOGGER = logging.getLogger(__name__)

DASH_LENGTH = 10.0
SHORT_DASH_LENGTH = 4.0

# Counter-clockwise text rotation for each role's axis label.
_LABEL_ROTATION = {
    AxisRole.X: 0,
    AxisRole.Y: 90,
    AxisRole.SECONDARY_X: 0,
    AxisRole.SECONDARY_Y: 270,
}


def draw_subplot(
    backend: Backend,
    subplot: "Subplot",
    area: Rect,
    scaling: float = 1.0,
    axes: RoleTable[FinalizedAxis] | None = None,
) -> SubplotLayout:
    """Emit every drawing call for ``subplot`` inside ``area``.

    ``axes`` are the subplot's finalized axes when the caller already resolved
    them. Otherwise tick labels are resolved before the first call, so a bad
    manual label list leaves the backend untouched.
    """
    fmt = subplot.format
    if axes is None:
        axes = finalize_axes(subplot.axes, subplot.used_roles())
    factor = max(1, int(round(scaling)))
    font = FontSpec(fmt.font_name, fmt.font_size * scaling)
    char_w, char_h = backend.text_size("0", font)
    tick_lengths = TickLengths.from_format(fmt, scaling)
    layout = compute_layout(axes, subplot.title, area, GlyphMetrics(char_w=char_w, char_h=char_h), tick_lengths)
    painter = _Painter(backend, fmt, layout, font, line_width=fmt.line_width * factor, scaling=scaling)

    painter.background()
    painter.grid(axes)
    palette = itertools.cycle(fmt.color_cycle or (fmt.default_marker_color,))
    for entry in subplot.entries:
        painter.entry(entry, axes, palette, factor)
    for role, axis in axes.items():
        painter.axis(role, axis, tick_lengths)
    painter.text(subplot.title, Point(layout.plot_area.center.x, layout.title_baseline), Alignment.BOTTOM)
    LOGGER.debug("drew subplot with %d entries into %s", len(subplot.entries), area)
    return layout


def line_dashes(style: LineStyle, scaling: float) -> tuple[float, ...]:
    if style == "dashed":
        return (DASH_LENGTH * scaling,) * 4
    if style == "short-dashed":
        return (SHORT_DASH_LENGTH * scaling,) * 4
    return ()


class _Painter:
    def __init__(
        self,
        backend: Backend,
        fmt: SubplotFormat,
        layout: SubplotLayout,
        font: FontSpec,
        *,
        line_width: int,
        scaling: float,
    ) -> None:
        self.backend = backend
        self.fmt = fmt
        self.layout = layout
        self.plot = layout.plot_area
        self.font = font
        self.line_width = line_width
        self.scaling = scaling

    def background(self) -> None:
        plot = self.plot
        self.backend.draw_shape(
            ShapeSpec(
                kind="rectangle",
                center=plot.center,
                width=plot.width,
                height=plot.height,
                fill_color=self.fmt.plot_color,
            )
        )

    def grid(self, axes: RoleTable[FinalizedAxis]) -> None:
        plot = self.plot
        for role, axis in axes.items():
            for ticks, enabled in ((axis.major_ticks, axis.major_grid), (axis.minor_ticks, axis.minor_grid)):
                if not enabled:
                    continue
                for loc in self._tick_points(ticks, axis.limits):
                    if role.is_vertical:
                        p1, p2 = Point(plot.xmin, round(loc.y)), Point(plot.xmax, round(loc.y))
                    else:
                        p1, p2 = Point(round(loc.x), plot.ymin), Point(round(loc.x), plot.ymax)
                    self.backend.draw_line(LineSpec(p1, p2, self.fmt.grid_color, self.line_width, clip=plot))

    def entry(
        self,
        entry: PlotEntry,
        axes: RoleTable[FinalizedAxis],
        palette: Iterator[Color],
        factor: int,
    ) -> None:
        xlim = axes[entry.style.xaxis].limits
        ylim = axes[entry.style.yaxis].limits
        if isinstance(entry, FillEntry):
            outline = tuple(data_to_point(self.plot, xy, xlim, ylim) for xy in entry.data.outline())
            color = entry.style.color or self.fmt.default_fill_color
            self.backend.draw_curve(CurveSpec(outline, TRANSPARENT, width=0, clip=self.plot, fill_color=color))
            return

        assert isinstance(entry, SeriesEntry)
        style = entry.style
        points = tuple(
            data_to_point(self.plot, xy, xlim, ylim, pixel_perfect=style.pixel_perfect) for xy in entry.data.points()
        )
        if style.line is not None:
            color = style.line_color or next(palette)
            self.backend.draw_curve(
                CurveSpec(
                    points,
                    color,
                    width=style.line_width * factor,
                    dashes=line_dashes(style.line, self.scaling),
                    clip=self.plot,
                )
            )
        if style.marker is not None:
            fill = style.marker_color or next(palette)
            if style.marker_outline:
                outline_color = style.marker_outline_color or fill
                outline_width = style.marker_outline_width * factor
                dashes = line_dashes(style.marker_outline_style, self.scaling)
            else:
                outline_color, outline_width, dashes = TRANSPARENT, 0, ()
            extent = 2 * style.marker_size * factor
            for point in points:
                self.backend.draw_shape(
                    ShapeSpec(
                        kind=style.marker,
                        center=point,
                        width=extent,
                        height=extent,
                        fill_color=fill,
                        line_color=outline_color,
                        line_width=outline_width,
                        dashes=dashes,
                        clip=self.plot,
                    )
                )

    def axis(self, role: AxisRole, axis: FinalizedAxis, ticks: TickLengths) -> None:
        layout = self.layout
        plot = self.plot
        clearance = layout.metrics.clearance
        char_w = layout.metrics.char_w

        if axis.visible:
            off = self.line_width / 2.0
            if role is AxisRole.Y:
                p1, p2 = Point(plot.xmin, plot.ymin + off), Point(plot.xmin, plot.ymax + off)
            elif role is AxisRole.SECONDARY_Y:
                p1, p2 = Point(plot.xmax, plot.ymin - off), Point(plot.xmax, plot.ymax - off)
            elif role is AxisRole.X:
                p1, p2 = Point(plot.xmin - off, plot.ymin), Point(plot.xmax - off, plot.ymin)
            else:
                p1, p2 = Point(plot.xmin + off, plot.ymax), Point(plot.xmax + off, plot.ymax)
            self.backend.draw_line(LineSpec(p1, p2, self.fmt.line_color, self.line_width))

        if axis.has_modifier:
            if role is AxisRole.X:
                position = Point(plot.xmax, layout.modifier_boundary.ymin - clearance)
                alignment = Alignment.TOP_RIGHT
            elif role is AxisRole.SECONDARY_X:
                position = Point(layout.tick_label_boundary.xmax + char_w, layout.tick_label_boundary.ymax)
                alignment = Alignment.BOTTOM_LEFT
            else:
                edge = plot.xmin if role is AxisRole.Y else plot.xmax
                position = Point(edge - char_w / 2.0, layout.modifier_boundary.ymax + clearance)
                alignment = Alignment.BOTTOM_LEFT
            self.text(modifier_text(axis.multiplier, axis.offset), position, alignment)

        center = plot.center
        label_box = layout.label_boundary
        if role is AxisRole.Y:
            position, alignment = Point(label_box.xmin - clearance, center.y), Alignment.RIGHT
        elif role is AxisRole.SECONDARY_Y:
            position, alignment = Point(label_box.xmax + clearance, center.y), Alignment.LEFT
        elif role is AxisRole.X:
            position, alignment = Point(center.x, label_box.ymin - clearance), Alignment.TOP
        else:
            position, alignment = Point(center.x, label_box.ymax + clearance), Alignment.BOTTOM
        self.text(axis.label, position, alignment, rotation=_LABEL_ROTATION[role])

        for locs, labels, outer, inner in (
            (axis.major_ticks, axis.major_labels, ticks.major_outer, ticks.major_inner),
            (axis.minor_ticks, axis.minor_labels, ticks.minor_outer, ticks.minor_inner),
        ):
            texts = labels or ("",) * len(locs)
            for label, loc in zip(texts, self._tick_points(locs, axis.limits)):
                line, position, alignment = self._tick_geometry(role, loc, outer, inner, clearance)
                self.backend.draw_line(LineSpec(line[0], line[1], self.fmt.line_color, self.line_width))
                self.text(label, position, alignment)

    def text(self, text: str, position: Point, alignment: Alignment, *, rotation: int = 0) -> None:
        if not text:
            return
        self.backend.draw_text(
            TextSpec(
                text=text,
                position=position,
                font=self.font,
                color=self.fmt.text_color,
                alignment=alignment,
                rotation=rotation,
            )
        )

    def _tick_points(self, ticks: tuple[float, ...], limits: tuple[float, float]) -> list[Point]:
        out = []
        for tick in ticks:
            frac = data_to_fraction(tick, limits)
            out.append(fractional_to_point(self.plot, Point(frac, frac)))
        return out

    def _tick_geometry(
        self,
        role: AxisRole,
        loc: Point,
        outer: int,
        inner: int,
        clearance: int,
    ) -> tuple[tuple[Point, Point], Point, Alignment]:
        plot = self.plot
        boundary = self.layout.tick_label_boundary
        x, y = float(round(loc.x)), float(round(loc.y))
        if role is AxisRole.Y:
            return (
                (Point(plot.xmin - outer, y), Point(plot.xmin + inner, y)),
                Point(boundary.xmin - clearance, y),
                Alignment.RIGHT,
            )
        if role is AxisRole.SECONDARY_Y:
            return (
                (Point(plot.xmax - inner, y), Point(plot.xmax + outer, y)),
                Point(boundary.xmax + clearance, y),
                Alignment.LEFT,
            )
        if role is AxisRole.X:
            return (
                (Point(x, plot.ymin - outer), Point(x, plot.ymin + inner)),
                Point(x, boundary.ymin - clearance),
                Alignment.TOP,
            )
        return (
            (Point(x, plot.ymax - inner), Point(x, plot.ymax + outer)),
            Point(x, boundary.ymax + clearance),
            Alignment.BOTTOM,
        )
