from __future__ import annotations

from dataclasses import dataclass, field, replace
import logging
from typing import Any

from luvatrix_charts.adapters import fill_between, point_series, step_series
from luvatrix_charts.axis import AxisConfig, AxisState
from luvatrix_charts.roles import AxisGroup, AxisRole, RoleTable
from luvatrix_charts.series import (
    FillEntry,
    FillStyle,
    PlotData,
    PlotEntry,
    PlotStyle,
    SeriesEntry,
)
from luvatrix_charts.theme import SubplotFormat


LOGGER = logging.getLogger(__name__)

_AXIS_FIELDS = {
    AxisRole.X: "xaxis",
    AxisRole.Y: "yaxis",
    AxisRole.SECONDARY_X: "secondary_xaxis",
    AxisRole.SECONDARY_Y: "secondary_yaxis",
}


@dataclass(frozen=True)
class SubplotConfig:
    """Title, format and the four axis configurations of one subplot."""

    title: str = ""
    format: SubplotFormat = field(default_factory=SubplotFormat)
    xaxis: AxisConfig = AxisConfig()
    yaxis: AxisConfig = AxisConfig()
    secondary_xaxis: AxisConfig = AxisConfig()
    secondary_yaxis: AxisConfig = AxisConfig()

    def axis(self, role: AxisRole) -> AxisConfig:
        return getattr(self, _AXIS_FIELDS[role])

    def configure(self, group: AxisGroup | AxisRole, **changes: Any) -> "SubplotConfig":
        """Return a copy with ``changes`` applied to every axis ``group`` selects.

        ``config.configure(AxisGroup.BOTH_X, grid="major", label="time")``
        """
        roles = group.roles if isinstance(group, AxisGroup) else (group,)
        updates = {_AXIS_FIELDS[role]: replace(self.axis(role), **changes) for role in roles}
        return replace(self, **updates)

    def validate(self) -> None:
        self.format.validate()
        for role in AxisRole:
            self.axis(role).validate()


@dataclass
class Subplot:
    config: SubplotConfig = field(default_factory=SubplotConfig)
    _axes: RoleTable[AxisState] = field(init=False, repr=False)
    _entries: list[PlotEntry] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        self.config.validate()
        self._axes = RoleTable.build(lambda role: AxisState.from_config(self.config.axis(role)))

    @property
    def title(self) -> str:
        return self.config.title

    @property
    def format(self) -> SubplotFormat:
        return self.config.format

    @property
    def axes(self) -> RoleTable[AxisState]:
        return self._axes

    @property
    def entries(self) -> tuple[PlotEntry, ...]:
        return tuple(self._entries)

    def axis(self, role: AxisRole) -> AxisState:
        return self._axes[role]

    def used_roles(self) -> frozenset[AxisRole]:
        used: set[AxisRole] = set()
        for entry in self._entries:
            used.add(entry.style.xaxis)
            used.add(entry.style.yaxis)
        return frozenset(used)

    def plot(
        self,
        x: Any,
        y: Any,
        style: PlotStyle | None = None,
        *,
        data: Any = None,
        owned: bool = False,
    ) -> SeriesEntry:
        style = style or PlotStyle()
        _check_roles(style.xaxis, style.yaxis)
        style.validate()
        entry = SeriesEntry(data=point_series(x, y, data=data, owned=owned), style=style)
        self._register(entry)
        return entry

    def step(
        self,
        edges: Any,
        values: Any,
        style: PlotStyle | None = None,
        *,
        data: Any = None,
        owned: bool = False,
    ) -> SeriesEntry:
        # step edges always land on whole pixels
        style = replace(style or PlotStyle(), pixel_perfect=True)
        _check_roles(style.xaxis, style.yaxis)
        style.validate()
        entry = SeriesEntry(data=step_series(edges, values, data=data, owned=owned), style=style)
        self._register(entry)
        return entry

    def fill_between(
        self,
        x: Any,
        y1: Any,
        y2: Any,
        style: FillStyle | None = None,
        *,
        data: Any = None,
        owned: bool = False,
    ) -> FillEntry:
        style = style or FillStyle()
        _check_roles(style.xaxis, style.yaxis)
        entry = FillEntry(data=fill_between(x, y1, y2, data=data, owned=owned), style=style)
        self._register(entry)
        return entry

    def _register(self, entry: PlotEntry) -> None:
        plot_data: PlotData = entry.data
        self._axes[entry.style.xaxis].grow(plot_data.xmin, plot_data.xmax)
        self._axes[entry.style.yaxis].grow(plot_data.ymin, plot_data.ymax)
        self._entries.append(entry)
        LOGGER.debug(
            "registered %s on %s/%s; x limits %s, y limits %s",
            type(plot_data).__name__,
            entry.style.xaxis.display_name,
            entry.style.yaxis.display_name,
            self._axes[entry.style.xaxis].limits,
            self._axes[entry.style.yaxis].limits,
        )


def _check_roles(xaxis: AxisRole, yaxis: AxisRole) -> None:
    if xaxis.is_vertical:
        raise ValueError(f"{xaxis.display_name} cannot carry x data")
    if not yaxis.is_vertical:
        raise ValueError(f"{yaxis.display_name} cannot carry y data")
