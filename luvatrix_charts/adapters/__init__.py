from .normalize import coerce_1d, fill_between, point_series, step_series

__all__ = [
    "coerce_1d",
    "fill_between",
    "point_series",
    "step_series",
]
