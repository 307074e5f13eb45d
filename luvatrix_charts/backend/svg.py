from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence
import xml.etree.ElementTree as ET

from luvatrix_charts.backend.base import (
    Backend,
    CurveSpec,
    FileFormat,
    FontSpec,
    LineSpec,
    ShapeSpec,
    TextSpec,
    rotated_size,
)
from luvatrix_charts.backend.raster.draw_text import text_size
from luvatrix_charts.errors import UnsupportedFormat
from luvatrix_charts.geometry import Point, Rect
from luvatrix_charts.series import Color


LOGGER = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"


class SvgBackend(Backend):
    """Builds an SVG document with ``xml.etree``; text is measured with the raster fonts."""

    def __init__(self, width: int, height: int, background: Color = (255, 255, 255, 255)) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be > 0")
        self._width = width
        self._height = height
        self.root = ET.Element(
            "svg",
            {
                "xmlns": SVG_NS,
                "width": str(width),
                "height": str(height),
                "viewBox": f"0 0 {width} {height}",
            },
        )
        self._defs = ET.SubElement(self.root, "defs")
        self._clip_ids: dict[Rect, str] = {}
        if background[3] > 0:
            ET.SubElement(
                self.root,
                "rect",
                {"x": "0", "y": "0", "width": str(width), "height": str(height), **_fill(background)},
            )

    @property
    def size(self) -> tuple[int, int]:
        return (self._width, self._height)

    def text_size(self, text: str, font: FontSpec) -> tuple[int, int]:
        return text_size(text, font_family=font.name, font_size_px=font.size)

    def draw_shape(self, shape: ShapeSpec) -> None:
        attrs = {**_fill(shape.fill_color), **_stroke(shape.line_color, shape.line_width, shape.dashes)}
        cx, cy = shape.center.x, self._y(shape.center.y)
        if shape.kind == "circle":
            attrs.update({"cx": _num(cx), "cy": _num(cy), "r": _num(shape.width / 2.0)})
            tag = "circle"
        else:
            w = shape.width
            h = shape.width if shape.kind == "square" else shape.height
            attrs.update({"x": _num(cx - w / 2.0), "y": _num(cy - h / 2.0), "width": _num(w), "height": _num(h)})
            tag = "rect"
        self._append(tag, attrs, shape.clip)

    def draw_line(self, line: LineSpec) -> None:
        attrs = {
            "x1": _num(line.p1.x),
            "y1": _num(self._y(line.p1.y)),
            "x2": _num(line.p2.x),
            "y2": _num(self._y(line.p2.y)),
            **_stroke(line.color, line.width, line.dashes),
        }
        self._append("line", attrs, line.clip)

    def draw_curve(self, curve: CurveSpec) -> None:
        if not curve.points:
            return
        points = " ".join(f"{_num(p.x)},{_num(self._y(p.y))}" for p in curve.points)
        stroke = _stroke(curve.color, curve.width, curve.dashes)
        if curve.fill_color is not None:
            self._append("polygon", {"points": points, **_fill(curve.fill_color), **stroke}, curve.clip)
        else:
            self._append("polyline", {"points": points, "fill": "none", **stroke}, curve.clip)

    def draw_text(self, text: TextSpec) -> None:
        if not text.text:
            return
        box = rotated_size(self.text_size(text.text, text.font), text.rotation)
        origin = text.alignment.box_origin(text.position, box[0], box[1])
        center = Point(origin.x + box[0] / 2.0, self._y(origin.y + box[1] / 2.0))
        attrs = {
            "x": _num(center.x),
            "y": _num(center.y),
            "text-anchor": "middle",
            "dominant-baseline": "central",
            "font-family": text.font.name,
            "font-size": _num(text.font.size),
            **_fill(text.color),
        }
        if text.rotation % 360:
            # svg rotates clockwise in its y-down frame
            attrs["transform"] = f"rotate({-text.rotation} {_num(center.x)} {_num(center.y)})"
        element = self._append("text", attrs, None)
        element.text = text.text

    def to_string(self) -> str:
        return ET.tostring(self.root, encoding="unicode")

    def save_file(self, filename: str | Path, format: FileFormat | None = None, dpi: int = 100) -> None:
        fmt = format or FileFormat.from_path(filename)
        if fmt is not FileFormat.SVG:
            raise UnsupportedFormat(f"svg backend cannot write {fmt.value}")
        ET.ElementTree(self.root).write(str(filename), encoding="utf-8", xml_declaration=True)
        LOGGER.debug("saved %dx%d svg to %s", self._width, self._height, filename)

    def _append(self, tag: str, attrs: dict[str, str], clip: Rect | None) -> ET.Element:
        if clip is not None:
            attrs["clip-path"] = f"url(#{self._clip_id(clip)})"
        return ET.SubElement(self.root, tag, attrs)

    def _clip_id(self, rect: Rect) -> str:
        clip_id = self._clip_ids.get(rect)
        if clip_id is None:
            clip_id = f"clip{len(self._clip_ids)}"
            self._clip_ids[rect] = clip_id
            clip_path = ET.SubElement(self._defs, "clipPath", {"id": clip_id})
            ET.SubElement(
                clip_path,
                "rect",
                {
                    "x": _num(rect.xmin),
                    "y": _num(self._y(rect.ymax)),
                    "width": _num(rect.width),
                    "height": _num(rect.height),
                },
            )
        return clip_id

    def _y(self, y: float) -> float:
        return self._height - y


def _num(value: float) -> str:
    out = f"{float(value):.2f}".rstrip("0").rstrip(".")
    return "0" if out in ("", "-0") else out


def _rgb(color: Color) -> str:
    return f"rgb({color[0]},{color[1]},{color[2]})"


def _fill(color: Color) -> dict[str, str]:
    if color[3] == 0:
        return {"fill": "none"}
    attrs = {"fill": _rgb(color)}
    if color[3] < 255:
        attrs["fill-opacity"] = _num(color[3] / 255.0)
    return attrs


def _stroke(color: Color, width: int, dashes: Sequence[float]) -> dict[str, str]:
    if width <= 0 or color[3] == 0:
        return {"stroke": "none"}
    attrs = {"stroke": _rgb(color), "stroke-width": str(width)}
    if color[3] < 255:
        attrs["stroke-opacity"] = _num(color[3] / 255.0)
    if dashes:
        attrs["stroke-dasharray"] = ",".join(_num(d) for d in dashes)
    return attrs
