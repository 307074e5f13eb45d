from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Literal, Sequence


TickSpacingKind = Literal["on", "auto", "none", "count", "manual"]
TickLabelsKind = Literal["on", "auto", "none", "manual"]
Grid = Literal["none", "major", "full"]
GRID_MODES: tuple[str, ...] = ("none", "major", "full")

# Fraction of the span added on each side under automatic limits.
LIMIT_MARGIN = 0.05


@dataclass(frozen=True)
class TickSpacing:
    """Where tick marks go: library default, only-if-used, none, a count, or a list."""

    kind: TickSpacingKind = "on"
    n: int = 0
    values: tuple[float, ...] = ()

    @classmethod
    def on(cls) -> "TickSpacing":
        return cls("on")

    @classmethod
    def auto(cls) -> "TickSpacing":
        return cls("auto")

    @classmethod
    def none(cls) -> "TickSpacing":
        return cls("none")

    @classmethod
    def count(cls, n: int) -> "TickSpacing":
        return cls("count", n=int(n))

    @classmethod
    def manual(cls, values: Sequence[float]) -> "TickSpacing":
        return cls("manual", values=tuple(float(v) for v in values))

    def validate(self) -> None:
        if self.kind not in ("on", "auto", "none", "count", "manual"):
            raise ValueError(f"unsupported tick spacing: {self.kind}")
        if self.kind == "count" and self.n < 0:
            raise ValueError("tick count must be >= 0")


@dataclass(frozen=True)
class TickLabels:
    kind: TickLabelsKind = "auto"
    labels: tuple[str, ...] = ()
    multiplier: int = 0
    offset: float = 0.0

    @classmethod
    def on(cls) -> "TickLabels":
        return cls("on")

    @classmethod
    def auto(cls) -> "TickLabels":
        return cls("auto")

    @classmethod
    def none(cls) -> "TickLabels":
        return cls("none")

    @classmethod
    def manual(cls, labels: Sequence[str], *, multiplier: int = 0, offset: float = 0.0) -> "TickLabels":
        return cls("manual", labels=tuple(str(label) for label in labels), multiplier=int(multiplier), offset=float(offset))

    def validate(self) -> None:
        if self.kind not in ("on", "auto", "none", "manual"):
            raise ValueError(f"unsupported tick labels: {self.kind}")


@dataclass(frozen=True)
class Limits:
    min: float | None = None
    max: float | None = None

    @classmethod
    def auto(cls) -> "Limits":
        return cls()

    @classmethod
    def manual(cls, min: float, max: float) -> "Limits":
        return cls(min=float(min), max=float(max))

    @property
    def is_manual(self) -> bool:
        return self.min is not None and self.max is not None

    def validate(self) -> None:
        if (self.min is None) != (self.max is None):
            raise ValueError("manual limits need both min and max")
        if self.min is not None and self.max is not None:
            if not (math.isfinite(self.min) and math.isfinite(self.max)):
                raise ValueError("manual limits must be finite")
            if self.min >= self.max:
                raise ValueError(f"manual limits need min < max, got ({self.min}, {self.max})")


@dataclass(frozen=True)
class AxisConfig:
    label: str = ""
    major_ticks: TickSpacing = TickSpacing("on")
    major_labels: TickLabels = TickLabels("auto")
    minor_ticks: TickSpacing = TickSpacing("on")
    minor_labels: TickLabels = TickLabels("none")
    grid: Grid = "none"
    limits: Limits = Limits()
    visible: bool = True

    def validate(self) -> None:
        self.major_ticks.validate()
        self.minor_ticks.validate()
        self.major_labels.validate()
        self.minor_labels.validate()
        self.limits.validate()
        if self.grid not in GRID_MODES:
            raise ValueError(f"unsupported grid mode: {self.grid}")


@dataclass
class AxisState:
    """An axis configuration plus the data extent registered on it so far."""

    config: AxisConfig
    span: tuple[float, float] | None = None
    limits: tuple[float, float] | None = None

    @classmethod
    def from_config(cls, config: AxisConfig) -> "AxisState":
        config.validate()
        lo, hi = config.limits.min, config.limits.max
        if lo is not None and hi is not None:
            bounds = (lo, hi)
            return cls(config=config, span=bounds, limits=bounds)
        return cls(config=config)

    def grow(self, lo: float, hi: float) -> None:
        if self.config.limits.is_manual:
            return
        if self.span is not None:
            lo = min(lo, self.span[0])
            hi = max(hi, self.span[1])
        self.span = (lo, hi)
        self.limits = padded_limits(lo, hi)


def padded_limits(lo: float, hi: float) -> tuple[float, float]:
    extent = hi - lo
    if extent == 0.0:
        delta = max(1.0, abs(lo) * LIMIT_MARGIN)
    else:
        delta = extent * LIMIT_MARGIN
    return (lo - delta, hi + delta)
