"""Exceptions raised by the grid."""


class IndexOutOfRange(IndexError):
    """A (row, column) coordinate lies outside the grid."""


class ShapeError(ValueError):
    """Input matrix is not a non-empty rectangle."""


class InvalidArgument(ValueError):
    """An argument has a value the operation cannot accept (e.g. a negative radius)."""
