"""Line directions, neighborhood kernels and vectorized neighbor counting.

The pointwise line sums on :class:`~cellery.core.grid.Grid` and the kernels
built here share one step table, so a convolution with a kernel always agrees
with the corresponding pointwise call.
"""

import logging
from typing import Dict, Optional, Tuple

import numpy as np
import torch
import torch.nn.functional as F

from .errors import InvalidArgument

logger = logging.getLogger(__name__)

# (row step, column step) per unit offset k in [-r, r].
LINE_STEPS: Dict[str, Tuple[int, int]] = {
    "vertical": (1, 0),
    "horizontal": (0, 1),
    "right_diagonal": (-1, 1),
    "left_diagonal": (1, 1),
}


def check_radius(radius: int, minimum: int = 0) -> int:
    """Validate a neighborhood radius.

    Args:
        radius: Radius to check
        minimum: Smallest accepted value

    Returns:
        The radius as a plain int

    Raises:
        InvalidArgument: If radius is not an integer or is below minimum
    """
    if isinstance(radius, bool) or not isinstance(radius, (int, np.integer)):
        raise InvalidArgument(f"Radius must be an integer, got {radius!r}")
    if radius < minimum:
        raise InvalidArgument(f"Radius must be >= {minimum}, got {radius}")
    return int(radius)


def check_direction(direction: str) -> Tuple[int, int]:
    """Return the step vector for a line direction.

    Raises:
        InvalidArgument: If direction is not one of LINE_STEPS
    """
    try:
        return LINE_STEPS[direction]
    except KeyError:
        raise InvalidArgument(
            f"Unknown direction {direction!r}; expected one of {sorted(LINE_STEPS)}"
        ) from None


def step_bounds(lo: int, hi: int, center: int, step: int, bound: int) -> Tuple[int, int]:
    """Narrow the offset range [lo, hi] to offsets that stay inside [0, bound).

    The position visited at offset k is ``center + step * k``.
    """
    if step > 0:
        return max(lo, -center), min(hi, bound - 1 - center)
    if step < 0:
        return max(lo, center - bound + 1), min(hi, center)
    return lo, hi


def _limit_radius(direction: str, radius: int, reach: Optional[Tuple[int, int]]) -> int:
    """Shorten a line so it never reaches further than ``reach`` (rows, cols)."""
    if reach is None:
        return radius
    row_step, col_step = LINE_STEPS[direction]
    row_reach, col_reach = reach
    if row_step:
        radius = min(radius, row_reach)
    if col_step:
        radius = min(radius, col_reach)
    return radius


def _blank(row_half: int, col_half: int) -> np.ndarray:
    return np.zeros((2 * row_half + 1, 2 * col_half + 1), dtype=np.int8)


def _stamp(kernel: np.ndarray, direction: str, radius: int) -> None:
    row_step, col_step = LINE_STEPS[direction]
    middle_row, middle_col = kernel.shape[0] // 2, kernel.shape[1] // 2
    for k in range(-radius, radius + 1):
        if k == 0:
            continue
        kernel[middle_row + row_step * k, middle_col + col_step * k] = 1


def line_kernel(direction: str, radius: int, reach: Optional[Tuple[int, int]] = None) -> np.ndarray:
    """Build the kernel for one line-sum primitive.

    Horizontal lines give a 1x(2r+1) kernel, vertical lines (2r+1)x1 and
    diagonals (2r+1)x(2r+1).

    Args:
        direction: One of LINE_STEPS
        radius: Radius of the line
        reach: Optional (rows, cols) limit on how far the kernel extends from
            its center; offsets past it can never land inside the grid

    Raises:
        InvalidArgument: If direction is unknown or radius is negative
    """
    row_step, col_step = check_direction(direction)
    radius = _limit_radius(direction, check_radius(radius), reach)
    kernel = _blank(radius * abs(row_step), radius * abs(col_step))
    _stamp(kernel, direction, radius)
    return kernel


def moore_kernel() -> np.ndarray:
    """Build the 3x3 Moore kernel (all four lines at radius 1)."""
    kernel = _blank(1, 1)
    for direction in LINE_STEPS:
        _stamp(kernel, direction, 1)
    return kernel


def von_neumann_kernel(radius: int, reach: Optional[Tuple[int, int]] = None) -> np.ndarray:
    """Build the von Neumann kernel for a radius.

    Orthogonal lines use the full radius and diagonals use ``radius - 1``.
    ``reach`` limits each line the same way as in :func:`line_kernel`.

    Raises:
        InvalidArgument: If radius < 1
    """
    radius = check_radius(radius, minimum=1)
    radii = {
        "vertical": radius,
        "horizontal": radius,
        "right_diagonal": radius - 1,
        "left_diagonal": radius - 1,
    }
    radii = {direction: _limit_radius(direction, r, reach) for direction, r in radii.items()}

    kernel = _blank(
        max(radii["vertical"], radii["right_diagonal"]),
        max(radii["horizontal"], radii["right_diagonal"]),
    )
    for direction, r in radii.items():
        _stamp(kernel, direction, r)
    return kernel


def count_with_kernel(cells: np.ndarray, kernel: np.ndarray) -> np.ndarray:
    """Count living cells under a kernel centred on every cell.

    Positions outside the grid are zero-padded, so they never contribute.

    Args:
        cells: 2D array of 0/1 values with shape (height, width)
        kernel: Kernel with odd side lengths (it need not be square)

    Returns:
        int64 array of shape (height, width) with the count for each cell
    """
    padding = (kernel.shape[0] // 2, kernel.shape[1] // 2)
    # conv2d expects (batch, channel, height, width)
    source = torch.from_numpy(np.array(cells, dtype=np.float32)).unsqueeze(0).unsqueeze(0)
    weights = torch.from_numpy(np.array(kernel, dtype=np.float32)).unsqueeze(0).unsqueeze(0)

    logger.debug("Convolving %s grid with %s kernel", tuple(cells.shape), tuple(kernel.shape))
    counts = F.conv2d(source, weights, padding=padding)

    return counts[0, 0].round().to(torch.int64).numpy()
