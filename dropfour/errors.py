"""
errors.py - Exceptions raised by the dropfour engine

Every error is recoverable: the board that raised it is left exactly as it
was before the call.
"""


class BoardError(ValueError):
    """Base class for all board engine errors."""


class InvalidColumnError(BoardError):
    """A move named a column outside [0, size)."""

    def __init__(self, column, size: int):
        self.column = column
        self.size = size
        super().__init__(f"Column {column!r} is out of range for a board of size {size}")


class ColumnFullError(BoardError):
    """A move targeted a column that has no open row left."""

    def __init__(self, column: int):
        self.column = column
        super().__init__(f"Column {column} is full")


class InvalidDimensionError(BoardError):
    """A board was requested with a non-positive or non-integer size."""

    def __init__(self, size):
        self.size = size
        super().__init__(f"Board size must be a positive integer, got {size!r}")


class InvalidGridError(BoardError):
    """A raw grid handed to a constructor cannot describe a legal board."""
