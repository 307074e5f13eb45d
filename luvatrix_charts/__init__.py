from luvatrix_charts.api import figure, subplots
from luvatrix_charts.axis import AxisConfig, Limits, TickLabels, TickSpacing
from luvatrix_charts.backend import FileFormat, RasterBackend, RecordingBackend, SvgBackend
from luvatrix_charts.errors import BadTickLabels, BadTickPlacement, ChartError, InvalidData, InvalidIndex, UnsupportedFormat
from luvatrix_charts.figure import Figure, FigureConfig
from luvatrix_charts.roles import AxisGroup, AxisRole
from luvatrix_charts.series import FillStyle, PlotStyle
from luvatrix_charts.subplot import Subplot, SubplotConfig
from luvatrix_charts.theme import SubplotFormat, load_format

__all__ = [
    "AxisConfig",
    "AxisGroup",
    "AxisRole",
    "BadTickLabels",
    "BadTickPlacement",
    "ChartError",
    "FileFormat",
    "Figure",
    "FigureConfig",
    "FillStyle",
    "InvalidData",
    "InvalidIndex",
    "Limits",
    "PlotStyle",
    "RasterBackend",
    "RecordingBackend",
    "Subplot",
    "SubplotConfig",
    "SubplotFormat",
    "SvgBackend",
    "TickLabels",
    "TickSpacing",
    "UnsupportedFormat",
    "figure",
    "load_format",
    "subplots",
]
