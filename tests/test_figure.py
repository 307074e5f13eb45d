from __future__ import annotations

import importlib
from pathlib import Path
import tempfile
import unittest
from unittest import mock
import xml.etree.ElementTree as ET

import numpy as np
from PIL import Image

from luvatrix_charts import compose, figure, subplots
from luvatrix_charts.backend import FileFormat, RasterBackend, RecordingBackend, SvgBackend
from luvatrix_charts.backend.base import Alignment, CurveSpec, FontSpec, TextSpec
from luvatrix_charts.axis import TickLabels
from luvatrix_charts.errors import BadTickLabels, InvalidIndex, UnsupportedFormat
from luvatrix_charts.figure import Figure, FigureConfig
from luvatrix_charts.geometry import Point, Rect
from luvatrix_charts.roles import AxisGroup
from luvatrix_charts.series import PlotStyle
from luvatrix_charts.subplot import Subplot, SubplotConfig
from luvatrix_charts.ticks import finalize_axes


def _demo_figure(figsize: tuple[float, float] = (3.2, 2.4)) -> Figure:
    fig = figure(figsize)
    config = SubplotConfig(title="demo").configure(AxisGroup.X, label="x").configure(AxisGroup.Y, label="y")
    subplot = fig.add_subplot((1, 1, 1), Subplot(config))
    subplot.plot([0, 1, 2, 3], [1, 4, 2, 6], PlotStyle(marker="square"))
    subplot.step([0, 1, 2, 3], [2, 3, 1], PlotStyle(line="short-dashed"))
    subplot.fill_between([0, 3], [0, 0], [1, 2])
    return fig


class FigureGridTests(unittest.TestCase):
    def test_index_outside_grid(self) -> None:
        fig = figure()
        with self.assertRaises(InvalidIndex) as ctx:
            fig.add_subplot((2, 2, 5), Subplot())
        self.assertEqual((ctx.exception.index, ctx.exception.nrows, ctx.exception.ncols), (5, 2, 2))
        with self.assertRaises(InvalidIndex):
            fig.add_subplot((2, 2, 0), Subplot())
        self.assertEqual(fig.subplots(), [])

    def test_cells_are_row_major_from_the_top(self) -> None:
        fig = figure()
        self.assertEqual((fig.width, fig.height), (675, 500))
        first = fig.add_subplot((2, 2, 1))
        last = fig.add_subplot((2, 2, 4))
        self.assertEqual(fig.subplots(), [first, last])
        self.assertEqual(
            fig.areas(),
            [Rect(xmin=0, xmax=337, ymin=250, ymax=500), Rect(xmin=337, xmax=674, ymin=0, ymax=250)],
        )

    def test_dpi_scales_pixel_size(self) -> None:
        config = FigureConfig(dpi=200)
        self.assertEqual(config.pixel_size, (1350, 1000))
        self.assertEqual(config.scaling, 2.0)
        with self.assertRaises(ValueError):
            Figure(FigureConfig(figsize=(0.0, 1.0)))

    def test_subplots_helper(self) -> None:
        fig, axes = subplots(1, 3)
        self.assertEqual(len(axes), 3)
        self.assertEqual(fig.areas()[2].xmin, 2 * (675 // 3))

    def test_draw_to_recording_backend(self) -> None:
        fig, (left, right) = subplots(1, 2)
        left.plot([0, 1], [0, 1])
        right.plot([0, 1], [1, 0])
        backend = RecordingBackend()
        fig.draw_to_backend(backend)
        curves = [call.spec for call in backend.calls if call.method == "draw_curve"]
        self.assertEqual(len(curves), 2)
        self.assertLess(max(p.x for p in curves[0].points), min(p.x for p in curves[1].points))

    def test_bad_labels_in_any_subplot_draw_nothing(self) -> None:
        fig = figure()
        fig.add_subplot((1, 2, 1)).plot([0, 1], [0, 1])
        bad = Subplot(SubplotConfig().configure(AxisGroup.Y, major_labels=TickLabels.manual(["a"])))
        fig.add_subplot((1, 2, 2), bad).plot([0, 1], [0, 1])
        backend = RecordingBackend()
        with self.assertRaisesRegex(BadTickLabels, "y-axis"):
            fig.draw_to_backend(backend)
        self.assertEqual(backend.calls, [])

    def test_axes_are_resolved_once_per_subplot(self) -> None:
        fig, (left, right) = subplots(1, 2)
        left.plot([0, 1], [0, 1])
        right.plot([0, 1], [1, 0])
        figure_module = importlib.import_module("luvatrix_charts.figure")
        with mock.patch.object(figure_module, "finalize_axes", wraps=finalize_axes) as outer:
            with mock.patch.object(compose, "finalize_axes", wraps=finalize_axes) as inner:
                fig.draw_to_backend(RecordingBackend())
        self.assertEqual(outer.call_count, 2)
        inner.assert_not_called()


class RasterOutputTests(unittest.TestCase):
    def test_to_rgba_is_deterministic(self) -> None:
        fig = _demo_figure()
        frame1 = fig.to_rgba()
        frame2 = fig.to_rgba()
        self.assertEqual(frame1.shape, (240, 320, 4))
        self.assertEqual(frame1.dtype, np.uint8)
        self.assertTrue(np.array_equal(frame1, frame2))
        # something other than the face color was drawn
        self.assertTrue(np.any(frame1[:, :, :3] != 255))

    def test_save_raster_formats(self) -> None:
        fig = _demo_figure()
        with tempfile.TemporaryDirectory() as tmp:
            for fmt in (FileFormat.PNG, FileFormat.JPEG, FileFormat.BMP):
                path = Path(tmp) / f"chart.{fmt.value}"
                fig.draw_file(fmt, path)
                with Image.open(path) as image:
                    self.assertEqual(image.size, (320, 240))
                    if fmt is FileFormat.JPEG:
                        self.assertEqual(image.mode, "RGB")

    def test_format_names_are_parsed(self) -> None:
        self.assertIs(FileFormat.parse("jpg"), FileFormat.JPEG)
        self.assertIs(FileFormat.from_path("out/chart.PNG"), FileFormat.PNG)
        with self.assertRaises(UnsupportedFormat):
            FileFormat.parse("gif")
        with self.assertRaises(UnsupportedFormat):
            FileFormat.from_path("chart")

    def test_raster_backend_refuses_svg(self) -> None:
        backend = RasterBackend(10, 10)
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(UnsupportedFormat):
                backend.save_file(Path(tmp) / "chart.svg")

    def test_polygon_fill_is_clipped(self) -> None:
        backend = RasterBackend(20, 20, background=(255, 255, 255, 255))
        square = (Point(0, 0), Point(19, 0), Point(19, 19), Point(0, 19))
        clip = Rect(xmin=0, xmax=9, ymin=0, ymax=19)
        backend.draw_curve(CurveSpec(square, (0, 0, 0, 0), width=0, clip=clip, fill_color=(0, 0, 255, 255)))
        frame = backend.to_rgba()
        self.assertEqual(tuple(frame[10, 5, :3]), (0, 0, 255))
        self.assertEqual(tuple(frame[10, 15, :3]), (255, 255, 255))

    def test_text_alignment_places_box_on_anchor(self) -> None:
        backend = RasterBackend(200, 100, background=(0, 0, 0, 0))
        font = FontSpec("DejaVu Sans", 20.0)
        backend.draw_text(TextSpec("Tick", Point(100, 50), font, (255, 255, 255, 255), alignment=Alignment.BOTTOM_LEFT))
        alpha = backend.to_rgba()[:, :, 3]
        rows, cols = np.nonzero(alpha)
        self.assertGreater(rows.size, 0)
        # y-up anchor at row 50 from the bottom: text sits above it, to the right
        self.assertGreaterEqual(cols.min(), 100)
        self.assertLessEqual(rows.max(), 100 - 50)


class SvgOutputTests(unittest.TestCase):
    def test_save_svg(self) -> None:
        fig = _demo_figure()
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "chart.svg"
            fig.draw_file("svg", path)
            root = ET.parse(path).getroot()
        self.assertTrue(root.tag.endswith("svg"))
        self.assertEqual(root.attrib["width"], "320")
        texts = [el.text for el in root.iter() if el.tag.endswith("text")]
        self.assertIn("demo", texts)
        self.assertTrue(any(el.tag.endswith("clipPath") for el in root.iter()))

    def test_svg_flips_y(self) -> None:
        backend = SvgBackend(100, 50)
        backend.draw_curve(CurveSpec((Point(0, 0), Point(100, 50)), (0, 0, 0, 255), width=1))
        self.assertIn('points="0,50 100,0"', backend.to_string())

    def test_svg_backend_refuses_png(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(UnsupportedFormat):
                SvgBackend(10, 10).save_file(Path(tmp) / "chart.png")


if __name__ == "__main__":
    unittest.main()
