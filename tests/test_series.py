from __future__ import annotations

from decimal import Decimal
import unittest

import numpy as np
import torch

from luvatrix_charts.adapters.normalize import coerce_1d, fill_between, point_series, step_series
from luvatrix_charts.errors import InvalidData
from luvatrix_charts.roles import AxisGroup, AxisRole
from luvatrix_charts.series import FillStyle, PlotStyle
from luvatrix_charts.subplot import Subplot, SubplotConfig


class NormalizeTests(unittest.TestCase):
    def test_decimal_values(self) -> None:
        arr = coerce_1d([Decimal("1.5"), Decimal("2.25"), 3], label="y")
        self.assertEqual(arr.dtype, np.float64)
        self.assertEqual(arr.tolist(), [1.5, 2.25, 3.0])

    def test_missing_value_is_rejected(self) -> None:
        with self.assertRaises(InvalidData):
            coerce_1d([Decimal("1.5"), None], label="y")

    def test_non_finite_values_are_rejected(self) -> None:
        with self.assertRaises(InvalidData):
            coerce_1d([1.0, float("nan")], label="y")
        with self.assertRaises(InvalidData):
            coerce_1d(np.array([1.0, np.inf]), label="y")

    def test_non_numeric_value_is_rejected(self) -> None:
        with self.assertRaisesRegex(InvalidData, "index 1"):
            coerce_1d([1.0, "two"], label="y")

    def test_torch_tensor(self) -> None:
        arr = coerce_1d(torch.tensor([1, 2, 3], dtype=torch.int64), label="y")
        self.assertEqual(arr.dtype, np.float64)
        self.assertEqual(arr.tolist(), [1.0, 2.0, 3.0])

    def test_pandas_columns_by_name(self) -> None:
        try:
            import pandas as pd
        except Exception:
            self.skipTest("pandas is not installed")

        df = pd.DataFrame({"t": [0, 1, 2], "value": [1, 4, 9]})
        series = point_series("t", "value", data=df)
        self.assertEqual(series.y.tolist(), [1.0, 4.0, 9.0])
        with self.assertRaises(InvalidData):
            point_series("t", "missing", data=df)

    def test_float_arrays_are_borrowed_unless_owned(self) -> None:
        x = np.array([0.0, 1.0, 2.0])
        y = np.array([1.0, 0.0, 1.0])
        self.assertTrue(np.shares_memory(point_series(x, y).x, x))
        self.assertFalse(np.shares_memory(point_series(x, y, owned=True).x, x))

    def test_two_dimensional_input_is_rejected(self) -> None:
        with self.assertRaises(InvalidData):
            coerce_1d(np.zeros((2, 2)), label="x")


class SeriesShapeTests(unittest.TestCase):
    def test_point_length_mismatch(self) -> None:
        with self.assertRaises(InvalidData):
            point_series([1, 2, 3], [1, 2, 3, 4])

    def test_empty_series(self) -> None:
        with self.assertRaises(InvalidData):
            point_series([], [])

    def test_step_needs_one_more_edge(self) -> None:
        with self.assertRaises(InvalidData):
            step_series([0, 1, 2, 3], [1, 2, 3, 4])
        series = step_series([0, 1, 2, 3], [5, 6, 7])
        self.assertEqual(
            list(series.points()),
            [(0.0, 5.0), (1.0, 5.0), (1.0, 6.0), (2.0, 6.0), (2.0, 7.0), (3.0, 7.0)],
        )
        self.assertEqual((series.xmin, series.xmax, series.ymin, series.ymax), (0.0, 3.0, 5.0, 7.0))

    def test_fill_outline_closes_the_band(self) -> None:
        fill = fill_between([0, 1], [0, 1], [2, 3])
        self.assertEqual(fill.outline(), [(0.0, 0.0), (1.0, 1.0), (1.0, 3.0), (0.0, 2.0)])
        self.assertEqual((fill.ymin, fill.ymax), (0.0, 3.0))
        with self.assertRaises(InvalidData):
            fill_between([0, 1], [0, 1], [2])


class SubplotRegistrationTests(unittest.TestCase):
    def test_rejected_series_leaves_axes_untouched(self) -> None:
        subplot = Subplot()
        with self.assertRaises(InvalidData):
            subplot.plot([1, 2, 3], [1, 2, 3, 4])
        self.assertEqual(subplot.entries, ())
        self.assertIsNone(subplot.axis(AxisRole.X).span)
        self.assertIsNone(subplot.axis(AxisRole.Y).span)

    def test_spans_grow_per_axis_role(self) -> None:
        subplot = Subplot()
        subplot.plot([0, 10], [0, 1])
        subplot.step([0, 1, 2], [5, -5], PlotStyle(xaxis=AxisRole.SECONDARY_X, yaxis=AxisRole.SECONDARY_Y))
        subplot.fill_between([-10, 5], [0, 0], [2, 3])
        self.assertEqual(subplot.axis(AxisRole.X).span, (-10.0, 10.0))
        self.assertEqual(subplot.axis(AxisRole.Y).span, (0.0, 3.0))
        self.assertEqual(subplot.axis(AxisRole.SECONDARY_X).span, (0.0, 2.0))
        self.assertEqual(subplot.axis(AxisRole.SECONDARY_Y).span, (-5.0, 5.0))
        self.assertEqual(subplot.used_roles(), frozenset(AxisGroup.ALL.roles))
        self.assertEqual(len(subplot.entries), 3)

    def test_style_must_draw_something(self) -> None:
        with self.assertRaises(ValueError):
            Subplot().plot([0, 1], [0, 1], PlotStyle(line=None, marker=None))

    def test_axis_roles_must_match_orientation(self) -> None:
        with self.assertRaises(ValueError):
            Subplot().plot([0, 1], [0, 1], PlotStyle(xaxis=AxisRole.Y))
        with self.assertRaises(ValueError):
            Subplot().fill_between([0, 1], [0, 1], [1, 2], FillStyle(yaxis=AxisRole.X))

    def test_configure_targets_axis_groups(self) -> None:
        config = SubplotConfig().configure(AxisGroup.BOTH_X, grid="major")
        self.assertEqual(config.xaxis.grid, "major")
        self.assertEqual(config.secondary_xaxis.grid, "major")
        self.assertEqual(config.yaxis.grid, "none")

    def test_config_is_validated_when_subplot_is_built(self) -> None:
        config = SubplotConfig().configure(AxisRole.Y, grid="diagonal")
        with self.assertRaises(ValueError):
            Subplot(config)


if __name__ == "__main__":
    unittest.main()
