from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
import tomllib
from typing import Any, Literal

from luvatrix_charts.series import Color


TickDirection = Literal["inner", "outer", "both"]
TICK_DIRECTIONS: tuple[str, ...] = ("inner", "outer", "both")

WHITE: Color = (255, 255, 255, 255)
BLACK: Color = (0, 0, 0, 255)
TRANSPARENT: Color = (0, 0, 0, 0)

DEFAULT_FONT_FAMILY = "DejaVu Sans"

DEFAULT_COLOR_CYCLE: tuple[Color, ...] = (
    (69, 133, 136, 255),  # blue
    (214, 93, 14, 255),  # orange
    (152, 151, 26, 255),  # green
    (177, 98, 134, 255),  # purple
    (204, 36, 29, 255),  # red
)


@dataclass(frozen=True)
class SubplotFormat:
    default_marker_color: Color = BLACK
    default_fill_color: Color = (255, 0, 0, 128)
    plot_color: Color = TRANSPARENT
    line_width: int = 2
    line_color: Color = BLACK
    grid_color: Color = (191, 191, 191, 255)
    font_name: str = DEFAULT_FONT_FAMILY
    font_size: float = 20.0
    text_color: Color = BLACK
    tick_length: int = 8
    tick_direction: TickDirection = "inner"
    minor_tick_length: int | None = None
    color_cycle: tuple[Color, ...] = DEFAULT_COLOR_CYCLE

    @classmethod
    def dark(cls) -> "SubplotFormat":
        line_color = (168, 153, 132, 255)
        return cls(
            default_marker_color=line_color,
            plot_color=(40, 40, 40, 255),
            grid_color=(64, 64, 64, 255),
            line_color=line_color,
            text_color=line_color,
        )

    def validate(self) -> None:
        if self.line_width <= 0:
            raise ValueError("line_width must be > 0")
        if self.font_size <= 0:
            raise ValueError("font_size must be > 0")
        if self.tick_length < 0:
            raise ValueError("tick_length must be >= 0")
        if self.minor_tick_length is not None and self.minor_tick_length < 0:
            raise ValueError("minor_tick_length must be >= 0")
        if self.tick_direction not in TICK_DIRECTIONS:
            raise ValueError(f"unsupported tick direction: {self.tick_direction}")


_THEMES = {
    "light": SubplotFormat,
    "dark": SubplotFormat.dark,
}


def load_format(path: str | Path) -> SubplotFormat:
    """Load a :class:`SubplotFormat` from a TOML theme file.

    The optional ``theme`` key picks the base (``"light"`` or ``"dark"``); every
    other key overrides the matching field.
    """
    theme_path = Path(path)
    if not theme_path.exists():
        raise FileNotFoundError(f"theme file not found: {theme_path}")
    with theme_path.open("rb") as f:
        raw = tomllib.load(f)
    return format_from_mapping(raw)


def format_from_mapping(raw: dict[str, Any]) -> SubplotFormat:
    raw = dict(raw)
    base_name = str(raw.pop("theme", "light"))
    if base_name not in _THEMES:
        raise ValueError(f"unknown theme: {base_name}")
    base = _THEMES[base_name]()
    known = {f.name for f in fields(SubplotFormat)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ValueError(f"unknown theme fields: {', '.join(unknown)}")

    changes: dict[str, Any] = {}
    for key, value in raw.items():
        if key == "color_cycle":
            if not isinstance(value, list):
                raise ValueError("color_cycle must be a list of colors")
            changes[key] = tuple(_coerce_color(item, key) for item in value)
        elif key.endswith("_color"):
            changes[key] = _coerce_color(value, key)
        elif key in {"line_width", "tick_length", "minor_tick_length"}:
            changes[key] = _coerce_int(value, key)
        elif key == "font_size":
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError("font_size must be a number")
            changes[key] = float(value)
        else:
            if not isinstance(value, str):
                raise ValueError(f"{key} must be a string")
            changes[key] = value
    fmt = replace(base, **changes)
    fmt.validate()
    return fmt


def _coerce_color(value: Any, field_name: str) -> Color:
    if not isinstance(value, list) or len(value) not in (3, 4):
        raise ValueError(f"{field_name} must be [r, g, b] or [r, g, b, a]")
    channels = [_coerce_int(v, field_name) for v in value]
    if any(c < 0 or c > 255 for c in channels):
        raise ValueError(f"{field_name} channels must be in [0, 255]")
    if len(channels) == 3:
        channels.append(255)
    r, g, b, a = channels
    return (r, g, b, a)


def _coerce_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{field_name} must be an integer")
    return value
