"""Binary-state grid with neighborhood counting for cellular automata."""

__version__ = "0.1.0"

from .core.cell import CellState
from .core.errors import IndexOutOfRange, InvalidArgument, ShapeError
from .core.grid import Grid

__all__ = ["Grid", "CellState", "IndexOutOfRange", "ShapeError", "InvalidArgument"]
