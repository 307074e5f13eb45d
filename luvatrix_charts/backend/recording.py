from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from luvatrix_charts.backend.base import (
    Backend,
    CurveSpec,
    FileFormat,
    FontSpec,
    LineSpec,
    ShapeSpec,
    TextSpec,
)


@dataclass(frozen=True)
class DrawCall:
    method: str
    spec: Any


@dataclass
class RecordingBackend(Backend):
    """Captures the ordered drawing calls instead of producing pixels.

    Text is measured with fixed glyph proportions so layouts are reproducible
    without any font installed.
    """

    width: int = 675
    height: int = 500
    glyph_width_ratio: float = 0.6
    calls: list[DrawCall] = field(default_factory=list)

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    def text_size(self, text: str, font: FontSpec) -> tuple[int, int]:
        char_w = max(1, int(round(font.size * self.glyph_width_ratio)))
        return (char_w * len(text), max(1, int(round(font.size))))

    def draw_shape(self, shape: ShapeSpec) -> None:
        self.calls.append(DrawCall("draw_shape", shape))

    def draw_line(self, line: LineSpec) -> None:
        self.calls.append(DrawCall("draw_line", line))

    def draw_curve(self, curve: CurveSpec) -> None:
        self.calls.append(DrawCall("draw_curve", curve))

    def draw_text(self, text: TextSpec) -> None:
        self.calls.append(DrawCall("draw_text", text))

    def save_file(self, filename: str | Path, format: FileFormat | None = None, dpi: int = 100) -> None:
        self.calls.append(DrawCall("save_file", (str(filename), format or FileFormat.from_path(filename), dpi)))

    def methods(self) -> list[str]:
        return [call.method for call in self.calls]

    def texts(self) -> list[str]:
        return [call.spec.text for call in self.calls if call.method == "draw_text"]
