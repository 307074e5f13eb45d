from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet

import numpy as np

from luvatrix_charts.axis import AxisState, TickLabels, TickSpacing
from luvatrix_charts.errors import BadTickLabels
from luvatrix_charts.formatting import TickModifiers, tick_modifiers, ticks_to_labels
from luvatrix_charts.roles import AxisRole, RoleTable


DEFAULT_MAJOR_TICKS = 5
MINOR_TICKS_PER_MAJOR = 5
FALLBACK_LIMITS = (-1.0, 1.0)

# Minors closer than this fraction of the axis extent to a major are dropped.
_COINCIDENT_TOLERANCE = 1e-9


@dataclass(frozen=True)
class FinalizedAxis:
    """Everything the layout and drawing steps need about one axis for one render."""

    role: AxisRole
    label: str
    span: tuple[float, float]
    limits: tuple[float, float]
    major_ticks: tuple[float, ...]
    major_labels: tuple[str, ...]
    minor_ticks: tuple[float, ...]
    minor_labels: tuple[str, ...]
    multiplier: int
    offset: float
    major_grid: bool
    minor_grid: bool
    visible: bool

    @property
    def has_modifier(self) -> bool:
        return self.multiplier != 0 or self.offset != 0.0

    @property
    def has_tick_labels(self) -> bool:
        return bool(self.major_labels) or bool(self.minor_labels)


def linear_ticks(bounds: tuple[float, float], n: int) -> list[float]:
    if n <= 0:
        return []
    lo, hi = bounds
    if n == 1:
        return [lo]
    return [lo + (hi - lo) * i / (n - 1) for i in range(n)]


def plan_major(spacing: TickSpacing, bounds: tuple[float, float], *, used: bool) -> list[float]:
    if spacing.kind == "on" or (spacing.kind == "auto" and used):
        return linear_ticks(bounds, DEFAULT_MAJOR_TICKS)
    if spacing.kind == "count":
        return linear_ticks(bounds, spacing.n)
    if spacing.kind == "manual":
        return sorted(spacing.values)
    return []


def plan_minor(
    spacing: TickSpacing,
    bounds: tuple[float, float],
    major: list[float],
    *,
    used: bool,
) -> list[float]:
    if spacing.kind == "on" or (spacing.kind == "auto" and used):
        candidates = linear_ticks(bounds, MINOR_TICKS_PER_MAJOR * len(major))
    elif spacing.kind == "count":
        candidates = linear_ticks(bounds, spacing.n)
    elif spacing.kind == "manual":
        candidates = sorted(spacing.values)
    else:
        return []
    if not major:
        return candidates
    tolerance = abs(bounds[1] - bounds[0]) * _COINCIDENT_TOLERANCE
    majors = np.asarray(major, dtype=np.float64)
    return [t for t in candidates if not np.any(np.abs(majors - t) <= tolerance)]


def resolve_labels(
    policy: TickLabels,
    ticks: list[float],
    modifiers: TickModifiers,
    *,
    used: bool,
    role: AxisRole,
    which: str,
) -> list[str]:
    if policy.kind == "manual":
        if policy.labels and len(policy.labels) != len(ticks):
            raise BadTickLabels(
                f"{role.display_name}: {len(policy.labels)} {which} tick labels given for {len(ticks)} ticks"
            )
        return list(policy.labels)
    if policy.kind == "on" or (policy.kind == "auto" and used):
        return ticks_to_labels(ticks, modifiers)
    return []


def finalize_axis(
    state: AxisState,
    role: AxisRole,
    *,
    used: bool,
    fallback: AxisState | None = None,
) -> FinalizedAxis:
    config = state.config
    span, limits = state.span, state.limits
    if span is None or limits is None:
        if fallback is not None and fallback.span is not None and fallback.limits is not None:
            span, limits = fallback.span, fallback.limits
        else:
            span = limits = FALLBACK_LIMITS

    bounds = span if span[1] > span[0] else limits
    major = plan_major(config.major_ticks, bounds, used=used)
    minor = plan_minor(config.minor_ticks, bounds, major, used=used)

    # minor labels always follow the major ticks' scale, even under manual major labels
    modifiers = tick_modifiers(major)
    major_labels = resolve_labels(config.major_labels, major, modifiers, used=used, role=role, which="major")
    minor_labels = resolve_labels(config.minor_labels, minor, modifiers, used=used, role=role, which="minor")

    if not major_labels and not minor_labels:
        offset, multiplier = 0.0, 0
    elif config.major_labels.kind == "manual":
        offset, multiplier = config.major_labels.offset, config.major_labels.multiplier
    else:
        offset, multiplier, _ = modifiers
    return FinalizedAxis(
        role=role,
        label=config.label,
        span=span,
        limits=limits,
        major_ticks=tuple(major),
        major_labels=tuple(major_labels),
        minor_ticks=tuple(minor),
        minor_labels=tuple(minor_labels),
        multiplier=multiplier,
        offset=offset,
        major_grid=config.grid in ("major", "full"),
        minor_grid=config.grid == "full",
        visible=config.visible,
    )


def finalize_axes(states: RoleTable[AxisState], used: AbstractSet[AxisRole]) -> RoleTable[FinalizedAxis]:
    """Snapshot every axis role; raises :class:`BadTickLabels` before anything is drawn."""
    return RoleTable.build(
        lambda role: finalize_axis(
            states[role],
            role,
            used=role in used,
            fallback=states[role.opposite],
        )
    )
