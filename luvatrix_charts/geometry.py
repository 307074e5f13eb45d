from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Rect:
    """Axis-aligned pixel rectangle in a y-up frame; ``ymin`` is the bottom edge."""

    xmin: int
    xmax: int
    ymin: int
    ymax: int

    @property
    def width(self) -> int:
        return self.xmax - self.xmin

    @property
    def height(self) -> int:
        return self.ymax - self.ymin

    @property
    def center(self) -> Point:
        return Point((self.xmin + self.xmax) / 2.0, (self.ymin + self.ymax) / 2.0)

    def contains(self, other: "Rect") -> bool:
        return (
            self.xmin <= other.xmin
            and other.xmax <= self.xmax
            and self.ymin <= other.ymin
            and other.ymax <= self.ymax
        )

    def shrink(self, *, left: int = 0, right: int = 0, bottom: int = 0, top: int = 0) -> "Rect":
        """Strip margins from each side, collapsing to the midline instead of inverting."""
        xmin = self.xmin + left
        xmax = self.xmax - right
        ymin = self.ymin + bottom
        ymax = self.ymax - top
        if xmax < xmin:
            xmin = xmax = min(max((xmin + xmax) // 2, self.xmin), self.xmax)
        if ymax < ymin:
            ymin = ymax = min(max((ymin + ymax) // 2, self.ymin), self.ymax)
        return Rect(xmin=xmin, xmax=xmax, ymin=ymin, ymax=ymax)


def fractional_to_point(rect: Rect, frac: Point) -> Point:
    """Interpolate linearly inside ``rect``; fractions outside [0, 1] land outside it."""
    return Point(
        x=rect.xmin + frac.x * (rect.xmax - rect.xmin),
        y=rect.ymin + frac.y * (rect.ymax - rect.ymin),
    )


def data_to_fraction(value: float, limits: tuple[float, float]) -> float:
    lo, hi = limits
    return (value - lo) / (hi - lo)


def data_to_point(
    rect: Rect,
    xy: tuple[float, float],
    xlimits: tuple[float, float],
    ylimits: tuple[float, float],
    *,
    pixel_perfect: bool = False,
) -> Point:
    point = fractional_to_point(rect, Point(data_to_fraction(xy[0], xlimits), data_to_fraction(xy[1], ylimits)))
    if pixel_perfect:
        return Point(float(round(point.x)), float(round(point.y)))
    return point
