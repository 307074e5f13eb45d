"""Pixel margins around a subplot's plot area.

Each axis role reserves, from the plot area outward: tick marks, tick labels,
a scale annotation, the axis label and a base margin. The title takes a band
at the top. The resulting rectangles nest strictly::

    plot area <= tick-label boundary <= modifier boundary <= label boundary <= subplot area
"""

from __future__ import annotations

from dataclasses import dataclass
import logging

from luvatrix_charts.geometry import Rect
from luvatrix_charts.roles import AxisRole, RoleTable
from luvatrix_charts.theme import SubplotFormat
from luvatrix_charts.ticks import FinalizedAxis


LOGGER = logging.getLogger(__name__)

# Vertical-axis tick labels get room for this many glyph widths.
TICK_LABEL_GLYPHS = 5


@dataclass(frozen=True)
class GlyphMetrics:
    """Size of ``"0"`` at the active font, in pixels."""

    char_w: int
    char_h: int

    @property
    def clearance(self) -> int:
        return int(self.char_h * 0.6)


@dataclass(frozen=True)
class TickLengths:
    major_inner: int = 0
    major_outer: int = 0
    minor_inner: int = 0
    minor_outer: int = 0

    @classmethod
    def from_format(cls, fmt: SubplotFormat, scaling: float) -> "TickLengths":
        factor = int(round(scaling))
        major = fmt.tick_length * factor
        if fmt.minor_tick_length is not None:
            minor = fmt.minor_tick_length * factor
        else:
            minor = major // 2
        inner = fmt.tick_direction in ("inner", "both")
        outer = fmt.tick_direction in ("outer", "both")
        return cls(
            major_inner=major if inner else 0,
            major_outer=major if outer else 0,
            minor_inner=minor if inner else 0,
            minor_outer=minor if outer else 0,
        )


@dataclass
class RoleBuffers:
    tick: int = 0
    tick_label: int = 0
    modifier: int = 0
    label: int = 0
    base: int = 0

    @property
    def content(self) -> int:
        return self.tick + self.tick_label + self.modifier + self.label


@dataclass(frozen=True)
class SubplotLayout:
    area: Rect
    label_boundary: Rect
    modifier_boundary: Rect
    tick_label_boundary: Rect
    plot_area: Rect
    # bottom edge of the title text
    title_baseline: int
    buffers: RoleTable[RoleBuffers]
    metrics: GlyphMetrics

    def rects(self) -> tuple[Rect, ...]:
        """Innermost first."""
        return (self.plot_area, self.tick_label_boundary, self.modifier_boundary, self.label_boundary, self.area)


def compute_layout(
    axes: RoleTable[FinalizedAxis],
    title: str,
    area: Rect,
    metrics: GlyphMetrics,
    ticks: TickLengths,
) -> SubplotLayout:
    clearance = metrics.clearance
    buffers: RoleTable[RoleBuffers] = RoleTable.build(lambda role: RoleBuffers())

    for role, axis in axes.items():
        own = buffers[role]
        if axis.major_ticks:
            own.tick += ticks.major_outer
        elif axis.minor_ticks:
            own.tick += ticks.minor_outer

        if axis.has_tick_labels:
            size = TICK_LABEL_GLYPHS * metrics.char_w if role.is_vertical else metrics.char_h
            own.tick_label += size + clearance

        if axis.has_modifier:
            # y annotation sits above the plot, x annotation below it;
            # secondary-axis annotations reserve nothing
            if role is AxisRole.Y:
                buffers[AxisRole.SECONDARY_X].modifier += metrics.char_h * 2 // 3 + clearance
            elif role is AxisRole.X:
                buffers[AxisRole.X].modifier += metrics.char_h * 2 // 3 + clearance

        if axis.label:
            own.label += metrics.char_h + clearance

    for role, own in buffers.items():
        own.base = 3 * metrics.char_w if own.content < 2 * metrics.char_w else clearance

    left = buffers[AxisRole.Y]
    right = buffers[AxisRole.SECONDARY_Y]
    bottom = buffers[AxisRole.X]
    top = buffers[AxisRole.SECONDARY_X]

    title_band = metrics.char_h + clearance if title else 0
    label_boundary = area.shrink(
        left=left.base + left.label,
        right=right.base + right.label,
        bottom=bottom.base + bottom.label,
        top=top.base + title_band + top.label,
    )
    modifier_boundary = label_boundary.shrink(
        left=left.modifier, right=right.modifier, bottom=bottom.modifier, top=top.modifier
    )
    tick_label_boundary = modifier_boundary.shrink(
        left=left.tick_label, right=right.tick_label, bottom=bottom.tick_label, top=top.tick_label
    )
    plot_area = tick_label_boundary.shrink(left=left.tick, right=right.tick, bottom=bottom.tick, top=top.tick)

    title_baseline = max(area.ymin, area.ymax - top.base - metrics.char_h) if title else area.ymax
    LOGGER.debug(
        "layout for %s: plot area %s, margins l=%d r=%d b=%d t=%d",
        area,
        plot_area,
        plot_area.xmin - area.xmin,
        area.xmax - plot_area.xmax,
        plot_area.ymin - area.ymin,
        area.ymax - plot_area.ymax,
    )
    return SubplotLayout(
        area=area,
        label_boundary=label_boundary,
        modifier_boundary=modifier_boundary,
        tick_label_boundary=tick_label_boundary,
        plot_area=plot_area,
        title_baseline=title_baseline,
        buffers=buffers,
        metrics=metrics,
    )
