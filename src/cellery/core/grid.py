"""Grid data structure for cellular automata."""

import logging
from typing import List, Sequence, Tuple, Union

import numpy as np

from . import cell
from .cell import CellState
from .errors import IndexOutOfRange, InvalidArgument, ShapeError
from .neighborhoods import (
    check_direction,
    check_radius,
    count_with_kernel,
    line_kernel,
    moore_kernel,
    step_bounds,
    von_neumann_kernel,
)

logger = logging.getLogger(__name__)

MatrixLike = Union[np.ndarray, Sequence[Sequence[int]]]


class Grid:
    """A fixed-size 2D grid of alive/dead cells.

    Cells are addressed by (row, column) and stored in one flat row-major
    array, so cell (i, j) lives at ``i * width + j``. Neighborhood queries
    never wrap around: positions outside the grid are skipped.
    """

    def __init__(self, matrix: MatrixLike) -> None:
        """Initialize a grid from a binary matrix.

        Args:
            matrix: Rows of 0/1 values (nested sequence or 2D numpy array).
                1 becomes an alive cell, 0 a dead one.

        Raises:
            ShapeError: If the matrix is empty, not 2-dimensional or its rows differ in length
            InvalidArgument: If a value is not 0 or 1
        """
        values = self._validate_matrix(matrix)
        self.height, self.width = (int(n) for n in values.shape)
        self._storage = values.reshape(-1).copy()
        logger.debug("Created %dx%d grid with %d living cells", self.height, self.width, self.living_count())

    @classmethod
    def empty(cls, height: int, width: int) -> "Grid":
        """Create an all-dead grid.

        Raises:
            ShapeError: If either dimension is not positive
        """
        if height < 1 or width < 1:
            raise ShapeError(f"Grid dimensions must be positive, got {height}x{width}")
        return cls(np.zeros((height, width), dtype=np.int8))

    @staticmethod
    def _validate_matrix(matrix: MatrixLike) -> np.ndarray:
        if isinstance(matrix, np.ndarray):
            if matrix.ndim != 2:
                raise ShapeError(f"Matrix must be 2-dimensional, got {matrix.ndim} dimensions")
            values = matrix
        else:
            try:
                rows = [list(row) for row in matrix]
            except TypeError:
                raise ShapeError("Matrix must be a sequence of row sequences") from None
            if not rows:
                raise ShapeError("Matrix must have at least one row")
            width = len(rows[0])
            for index, row in enumerate(rows):
                if len(row) != width:
                    raise ShapeError(f"Row {index} has length {len(row)}, expected {width}")
            try:
                values = np.array(rows)
            except ValueError:
                raise ShapeError("Matrix rows must hold scalar values") from None
            if values.ndim != 2:
                raise ShapeError(f"Matrix must be 2-dimensional, got {values.ndim} dimensions")

        if values.shape[0] == 0 or values.shape[1] == 0:
            raise ShapeError(f"Matrix must be non-empty, got shape {values.shape}")
        if not np.isin(values, (0, 1)).all():
            raise InvalidArgument("Matrix values must be 0 or 1")

        return values.astype(np.int8)

    @property
    def shape(self) -> Tuple[int, int]:
        """Get grid dimensions as (height, width)."""
        return (self.height, self.width)

    @property
    def cells(self) -> np.ndarray:
        """Read-only (height, width) view of the cell bits."""
        view = self._storage.reshape(self.height, self.width)
        view.flags.writeable = False
        return view

    def _index(self, i: int, j: int) -> int:
        for coordinate in (i, j):
            if isinstance(coordinate, bool) or not isinstance(coordinate, (int, np.integer)):
                raise InvalidArgument(f"Coordinates must be integers, got ({i!r}, {j!r})")
        if not (0 <= i < self.height and 0 <= j < self.width):
            raise IndexOutOfRange(
                f"Coordinates ({i}, {j}) out of bounds for {self.height}x{self.width} grid"
            )
        return i * self.width + j

    def get(self, i: int, j: int) -> CellState:
        """Get the state of a cell.

        Args:
            i: Row coordinate
            j: Column coordinate

        Returns:
            The cell's state

        Raises:
            IndexOutOfRange: If (i, j) is outside the grid
            InvalidArgument: If a coordinate is not an integer
        """
        return cell.from_bit(cell.to_bit(self._storage, self._index(i, j)))

    def kill(self, i: int, j: int) -> None:
        """Mark the cell at (i, j) dead.

        Raises:
            IndexOutOfRange: If (i, j) is outside the grid
        """
        cell.kill(self._storage, self._index(i, j))

    def revive(self, i: int, j: int) -> None:
        """Mark the cell at (i, j) alive.

        Raises:
            IndexOutOfRange: If (i, j) is outside the grid
        """
        cell.revive(self._storage, self._index(i, j))

    def to_binary_matrix(self) -> List[List[int]]:
        """Snapshot of the grid as rows of 0/1 ints."""
        return self._storage.reshape(self.height, self.width).tolist()

    def living_count(self) -> int:
        """Get the number of living cells."""
        return int(self._storage.sum())

    def render(self) -> str:
        """Render the grid as nested brackets, e.g. ``[[0, 1], [1, 0]]``."""
        rows = ("[" + ", ".join(str(bit) for bit in row) + "]" for row in self.to_binary_matrix())
        return "[" + ", ".join(rows) + "]"

    def copy(self) -> "Grid":
        """Create an independent copy of the grid."""
        return Grid(self.cells)

    def _line_sum(self, i: int, j: int, r: int, direction: str) -> int:
        row_step, col_step = check_direction(direction)
        r = check_radius(r)
        self._index(i, j)

        # Only walk offsets whose position is inside the grid.
        lo, hi = step_bounds(-r, r, i, row_step, self.height)
        lo, hi = step_bounds(lo, hi, j, col_step, self.width)

        total = 0
        for k in range(lo, hi + 1):
            if k == 0:
                continue
            total += cell.to_bit(self._storage, (i + row_step * k) * self.width + j + col_step * k)
        return total

    def vertical(self, i: int, j: int, r: int) -> int:
        """Count living cells in column j within r rows of (i, j), excluding (i, j).

        Args:
            i: Row of the central cell
            j: Column of the central cell
            r: Radius of the line

        Returns:
            Number of living cells

        Raises:
            IndexOutOfRange: If (i, j) is outside the grid
            InvalidArgument: If r is negative
        """
        return self._line_sum(i, j, r, "vertical")

    def horizontal(self, i: int, j: int, r: int) -> int:
        """Count living cells in row i within r columns of (i, j), excluding (i, j)."""
        return self._line_sum(i, j, r, "horizontal")

    def right_diagonal(self, i: int, j: int, r: int) -> int:
        """Count living cells on the anti-diagonal through (i, j).

        The line runs from (i + r, j - r) up to (i - r, j + r).
        """
        return self._line_sum(i, j, r, "right_diagonal")

    def left_diagonal(self, i: int, j: int, r: int) -> int:
        """Count living cells on the main diagonal through (i, j).

        The line runs from (i - r, j - r) down to (i + r, j + r).
        """
        return self._line_sum(i, j, r, "left_diagonal")

    def moore(self, i: int, j: int) -> int:
        """Count living cells among the (up to) 8 cells adjacent to (i, j)."""
        return (
            self.vertical(i, j, 1)
            + self.horizontal(i, j, 1)
            + self.right_diagonal(i, j, 1)
            + self.left_diagonal(i, j, 1)
        )

    def von_neumann(self, i: int, j: int, r: int) -> int:
        """Count living cells in the von Neumann neighborhood of radius r.

        Orthogonal lines are taken at radius r and diagonals at radius r - 1.

        Raises:
            IndexOutOfRange: If (i, j) is outside the grid
            InvalidArgument: If r < 1
        """
        r = check_radius(r, minimum=1)
        diagonal = max(r - 1, 0)
        return (
            self.vertical(i, j, r)
            + self.horizontal(i, j, r)
            + self.right_diagonal(i, j, diagonal)
            + self.left_diagonal(i, j, diagonal)
        )

    def _reach(self) -> Tuple[int, int]:
        # Furthest row and column offsets that can still land inside the grid.
        return (self.height - 1, self.width - 1)

    def line_counts(self, direction: str, r: int) -> np.ndarray:
        """Compute a line-sum primitive for every cell at once.

        Args:
            direction: One of "vertical", "horizontal", "right_diagonal", "left_diagonal"
            r: Radius of the line

        Returns:
            (height, width) array where entry (i, j) equals the pointwise call
        """
        check_direction(direction)
        r = check_radius(r)
        return count_with_kernel(self.cells, line_kernel(direction, r, self._reach()))

    def moore_counts(self) -> np.ndarray:
        """Compute moore(i, j) for every cell at once."""
        return count_with_kernel(self.cells, moore_kernel())

    def von_neumann_counts(self, r: int) -> np.ndarray:
        """Compute von_neumann(i, j, r) for every cell at once."""
        r = check_radius(r, minimum=1)
        return count_with_kernel(self.cells, von_neumann_kernel(r, self._reach()))

    def __eq__(self, other: object) -> bool:
        """Check if two grids are equal."""
        if not isinstance(other, Grid):
            return False
        return self.shape == other.shape and np.array_equal(self._storage, other._storage)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Grid(height={self.height}, width={self.width}, living={self.living_count()})"
