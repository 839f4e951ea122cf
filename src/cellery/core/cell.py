"""Two-state cell values and the storage-level operations on them."""

from enum import IntEnum

import numpy as np


class CellState(IntEnum):
    """State of a single cell."""

    DEAD = 0
    ALIVE = 1

    @property
    def is_alive(self) -> bool:
        """Whether this state is alive."""
        return self is CellState.ALIVE

    def to_bit(self) -> int:
        """Return 1 for alive, 0 for dead."""
        return int(self)

    def killed(self) -> "CellState":
        """Return the state after a kill transition (always dead)."""
        return CellState.DEAD

    def revived(self) -> "CellState":
        """Return the state after a revive transition (always alive)."""
        return CellState.ALIVE


def from_bit(bit: int) -> CellState:
    """Map a bit (or any truthy/falsy value) to a cell state."""
    return CellState.ALIVE if bit else CellState.DEAD


def to_bit(storage: np.ndarray, index: int) -> int:
    """Read the bit stored at a flat index."""
    return int(storage[index])


def kill(storage: np.ndarray, index: int) -> None:
    """Mark the cell at a flat index dead."""
    storage[index] = CellState.DEAD


def revive(storage: np.ndarray, index: int) -> None:
    """Mark the cell at a flat index alive."""
    storage[index] = CellState.ALIVE
