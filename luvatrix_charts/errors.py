from __future__ import annotations


class ChartError(ValueError):
    """Base class for validation failures raised by luvatrix_charts."""


class InvalidData(ChartError):
    """Series coordinates were rejected at registration time."""


class InvalidIndex(ChartError):
    def __init__(self, index: int, nrows: int, ncols: int) -> None:
        super().__init__(f"subplot index {index} is outside [1, {nrows * ncols}] for a {nrows}x{ncols} grid")
        self.index = index
        self.nrows = nrows
        self.ncols = ncols


class BadTickPlacement(ChartError):
    pass


class BadTickLabels(ChartError):
    pass


class UnsupportedFormat(ChartError):
    pass
