from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generic, Iterator, TypeVar


T = TypeVar("T")


class AxisRole(Enum):
    X = 0
    Y = 1
    SECONDARY_X = 2
    SECONDARY_Y = 3

    @property
    def is_vertical(self) -> bool:
        return self in (AxisRole.Y, AxisRole.SECONDARY_Y)

    @property
    def opposite(self) -> "AxisRole":
        return _OPPOSITES[self]

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_OPPOSITES = {
    AxisRole.X: AxisRole.SECONDARY_X,
    AxisRole.SECONDARY_X: AxisRole.X,
    AxisRole.Y: AxisRole.SECONDARY_Y,
    AxisRole.SECONDARY_Y: AxisRole.Y,
}

_DISPLAY_NAMES = {
    AxisRole.X: "x-axis",
    AxisRole.Y: "y-axis",
    AxisRole.SECONDARY_X: "secondary x-axis",
    AxisRole.SECONDARY_Y: "secondary y-axis",
}

ROLES: tuple[AxisRole, ...] = tuple(AxisRole)


class AxisGroup(Enum):
    """Selects one or more axis roles for a single configuration change."""

    X = (AxisRole.X,)
    Y = (AxisRole.Y,)
    SECONDARY_X = (AxisRole.SECONDARY_X,)
    SECONDARY_Y = (AxisRole.SECONDARY_Y,)
    BOTH_X = (AxisRole.X, AxisRole.SECONDARY_X)
    BOTH_Y = (AxisRole.Y, AxisRole.SECONDARY_Y)
    BOTH_PRIMARY = (AxisRole.X, AxisRole.Y)
    BOTH_SECONDARY = (AxisRole.SECONDARY_X, AxisRole.SECONDARY_Y)
    ALL = (AxisRole.X, AxisRole.Y, AxisRole.SECONDARY_X, AxisRole.SECONDARY_Y)

    @property
    def roles(self) -> tuple[AxisRole, ...]:
        return self.value


@dataclass
class RoleTable(Generic[T]):
    """One slot per axis role, indexed by :class:`AxisRole`."""

    slots: list[T]

    def __post_init__(self) -> None:
        if len(self.slots) != len(ROLES):
            raise ValueError(f"RoleTable needs exactly {len(ROLES)} slots")

    @classmethod
    def build(cls, factory: Callable[[AxisRole], T]) -> "RoleTable[T]":
        return cls([factory(role) for role in ROLES])

    def __getitem__(self, role: AxisRole) -> T:
        return self.slots[role.value]

    def __setitem__(self, role: AxisRole, value: T) -> None:
        self.slots[role.value] = value

    def items(self) -> Iterator[tuple[AxisRole, T]]:
        return zip(ROLES, self.slots)
