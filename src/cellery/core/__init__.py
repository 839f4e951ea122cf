"""Core grid and neighborhood logic."""

from .cell import CellState
from .errors import IndexOutOfRange, InvalidArgument, ShapeError
from .grid import Grid
from .neighborhoods import LINE_STEPS, line_kernel, moore_kernel, von_neumann_kernel

__all__ = [
    "Grid",
    "CellState",
    "IndexOutOfRange",
    "ShapeError",
    "InvalidArgument",
    "LINE_STEPS",
    "line_kernel",
    "moore_kernel",
    "von_neumann_kernel",
]
