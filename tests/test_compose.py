from __future__ import annotations

import unittest

from luvatrix_charts.axis import TickLabels
from luvatrix_charts.backend import Alignment, CurveSpec, LineSpec, RecordingBackend, ShapeSpec, TextSpec
from luvatrix_charts.compose import draw_subplot, line_dashes
from luvatrix_charts.errors import BadTickLabels
from luvatrix_charts.geometry import Rect
from luvatrix_charts.roles import AxisGroup
from luvatrix_charts.series import FillStyle, PlotStyle
from luvatrix_charts.subplot import Subplot, SubplotConfig
from luvatrix_charts.theme import DEFAULT_COLOR_CYCLE, SubplotFormat


AREA = Rect(xmin=0, xmax=675, ymin=0, ymax=500)


def _specs(backend: RecordingBackend, kind: type) -> list:
    return [call.spec for call in backend.calls if isinstance(call.spec, kind)]


class ComposeOrderTests(unittest.TestCase):
    def _subplot(self) -> Subplot:
        config = (
            SubplotConfig(title="demo")
            .configure(AxisGroup.X, label="time", grid="major")
            .configure(AxisGroup.Y, label="value")
        )
        subplot = Subplot(config)
        subplot.fill_between([0, 1, 2], [0, 1, 0], [1, 2, 1])
        subplot.plot([0, 1, 2], [1, 3, 2])
        return subplot

    def test_background_first_and_title_last(self) -> None:
        backend = RecordingBackend()
        layout = draw_subplot(backend, self._subplot(), AREA)
        first = backend.calls[0].spec
        self.assertIsInstance(first, ShapeSpec)
        self.assertEqual(first.kind, "rectangle")
        self.assertEqual((first.width, first.height), (layout.plot_area.width, layout.plot_area.height))
        last = backend.calls[-1].spec
        self.assertIsInstance(last, TextSpec)
        self.assertEqual(last.text, "demo")
        self.assertEqual(last.alignment, Alignment.BOTTOM)
        self.assertEqual(backend.texts()[-1], "demo")

    def test_grid_then_entries_then_axes(self) -> None:
        backend = RecordingBackend()
        draw_subplot(backend, self._subplot(), AREA)
        methods = backend.methods()
        first_curve = methods.index("draw_curve")
        grid_color = SubplotFormat().grid_color
        grid_lines = [
            i for i, call in enumerate(backend.calls) if isinstance(call.spec, LineSpec) and call.spec.color == grid_color
        ]
        self.assertEqual(len(grid_lines), 5)
        self.assertTrue(all(i < first_curve for i in grid_lines))
        curves = _specs(backend, CurveSpec)
        self.assertEqual(len(curves), 2)
        self.assertIsNotNone(curves[0].fill_color)
        self.assertIsNone(curves[1].fill_color)
        last_curve = len(methods) - 1 - methods[::-1].index("draw_curve")
        self.assertTrue(all(m in ("draw_line", "draw_text") for m in methods[last_curve + 1 :]))

    def test_recording_is_deterministic(self) -> None:
        first, second = RecordingBackend(), RecordingBackend()
        draw_subplot(first, self._subplot(), AREA)
        draw_subplot(second, self._subplot(), AREA)
        self.assertEqual(first.calls, second.calls)

    def test_axis_labels_and_tick_labels_are_drawn(self) -> None:
        backend = RecordingBackend()
        draw_subplot(backend, self._subplot(), AREA)
        texts = {spec.text: spec for spec in _specs(backend, TextSpec)}
        self.assertEqual(texts["time"].rotation, 0)
        self.assertEqual(texts["value"].rotation, 90)
        self.assertEqual(texts["value"].alignment, Alignment.RIGHT)
        self.assertIn("0.0", texts)

    def test_secondary_y_label_is_rotated_the_other_way(self) -> None:
        subplot = Subplot(SubplotConfig().configure(AxisGroup.SECONDARY_Y, label="right"))
        backend = RecordingBackend()
        draw_subplot(backend, subplot, AREA)
        (label,) = [spec for spec in _specs(backend, TextSpec) if spec.text == "right"]
        self.assertEqual(label.rotation, 270)


class ComposeStyleTests(unittest.TestCase):
    def test_palette_cycles_per_line_and_marker(self) -> None:
        subplot = Subplot()
        subplot.plot([0, 1], [0, 1])
        subplot.plot([0, 1], [1, 0], PlotStyle(line_color=(1, 2, 3, 255)))
        subplot.plot([0, 1], [0, 2], PlotStyle(marker="circle"))
        backend = RecordingBackend()
        draw_subplot(backend, subplot, AREA)
        curves = _specs(backend, CurveSpec)
        self.assertEqual([c.color for c in curves], [DEFAULT_COLOR_CYCLE[0], (1, 2, 3, 255), DEFAULT_COLOR_CYCLE[1]])
        markers = [s for s in _specs(backend, ShapeSpec) if s.kind == "circle"]
        self.assertEqual(len(markers), 2)
        self.assertTrue(all(m.fill_color == DEFAULT_COLOR_CYCLE[2] for m in markers))
        self.assertTrue(all(m.clip is not None for m in markers))

    def test_empty_color_cycle_uses_marker_default(self) -> None:
        fmt = SubplotFormat(color_cycle=())
        subplot = Subplot(SubplotConfig(format=fmt))
        subplot.plot([0, 1], [0, 1])
        backend = RecordingBackend()
        draw_subplot(backend, subplot, AREA)
        (curve,) = _specs(backend, CurveSpec)
        self.assertEqual(curve.color, fmt.default_marker_color)

    def test_fill_uses_default_fill_color(self) -> None:
        subplot = Subplot()
        subplot.fill_between([0, 1], [0, 0], [1, 1])
        subplot.fill_between([0, 1], [0, 0], [2, 2], FillStyle(color=(9, 9, 9, 90)))
        backend = RecordingBackend()
        draw_subplot(backend, subplot, AREA)
        fills = [c.fill_color for c in _specs(backend, CurveSpec)]
        self.assertEqual(fills, [SubplotFormat().default_fill_color, (9, 9, 9, 90)])

    def test_dash_patterns_scale(self) -> None:
        self.assertEqual(line_dashes("solid", 1.0), ())
        self.assertEqual(line_dashes("dashed", 2.0), (20.0, 20.0, 20.0, 20.0))
        self.assertEqual(line_dashes("short-dashed", 1.0), (4.0, 4.0, 4.0, 4.0))
        subplot = Subplot()
        subplot.plot([0, 1], [0, 1], PlotStyle(line="dashed"))
        backend = RecordingBackend()
        draw_subplot(backend, subplot, AREA)
        (curve,) = _specs(backend, CurveSpec)
        self.assertEqual(curve.dashes, (10.0, 10.0, 10.0, 10.0))

    def test_step_series_snap_to_whole_pixels(self) -> None:
        subplot = Subplot()
        entry = subplot.step([0, 1, 2, 3], [0, 1, 0.3])
        self.assertTrue(entry.style.pixel_perfect)
        backend = RecordingBackend()
        draw_subplot(backend, subplot, AREA)
        (curve,) = _specs(backend, CurveSpec)
        self.assertEqual(len(curve.points), 6)
        for point in curve.points:
            self.assertTrue(float(point.x).is_integer(), msg=f"{point} is not on a pixel")
            self.assertTrue(float(point.y).is_integer(), msg=f"{point} is not on a pixel")

    def test_scaling_widens_lines(self) -> None:
        subplot = Subplot()
        subplot.plot([0, 1], [0, 1])
        backend = RecordingBackend(width=1350, height=1000)
        draw_subplot(backend, subplot, Rect(0, 1350, 0, 1000), scaling=2.0)
        (curve,) = _specs(backend, CurveSpec)
        self.assertEqual(curve.width, 6)
        axis_lines = [s for s in _specs(backend, LineSpec) if s.color == SubplotFormat().line_color]
        self.assertTrue(all(line.width == 4 for line in axis_lines))

    def test_invisible_axis_skips_its_line(self) -> None:
        visible = RecordingBackend()
        draw_subplot(visible, Subplot(), AREA)
        hidden = RecordingBackend()
        draw_subplot(hidden, Subplot(SubplotConfig().configure(AxisGroup.SECONDARY_X, visible=False)), AREA)
        self.assertEqual(len(hidden.calls), len(visible.calls) - 1)

    def test_bad_tick_labels_draw_nothing(self) -> None:
        subplot = Subplot(SubplotConfig().configure(AxisGroup.X, major_labels=TickLabels.manual(["a"])))
        subplot.plot([0, 1], [0, 1])
        backend = RecordingBackend()
        with self.assertRaisesRegex(BadTickLabels, "x-axis"):
            draw_subplot(backend, subplot, AREA)
        self.assertEqual(backend.calls, [])


if __name__ == "__main__":
    unittest.main()
