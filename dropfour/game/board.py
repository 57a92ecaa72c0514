"""
board.py - Board state and move application for dropfour

This module implements the Board class: an N×N grid addressed by
(column, row) with row 0 at the bottom, per-column fill counters and the
turn flag. Pieces only enter the board through apply_move, which keeps every
column gap-free.
"""

from typing import List

import numpy as np

from dropfour.debug import debug
from dropfour.errors import (ColumnFullError, InvalidColumnError,
                             InvalidDimensionError, InvalidGridError)
from dropfour.game.lines import count_lines_of_length
from dropfour.utils import (CONNECT_N, DEFAULT_SIZE, WINS_FOR, Cell, Winner,
                            render_board_ascii)

_CELL_VALUES = [cell.value for cell in Cell]


def _heights_from_grid(grid: np.ndarray) -> np.ndarray:
    """Derive fill counters from a grid, rejecting floating pieces."""
    occupied = grid != Cell.EMPTY
    heights = occupied.sum(axis=1).astype(np.int64)
    for col, height in enumerate(heights):
        if occupied[col, height:].any():
            raise InvalidGridError(f"Column {col} has a gap below an occupied cell")
    return heights


def _as_grid(grid) -> np.ndarray:
    """Copy ``grid`` into a fresh int8 array after checking shape and values."""
    try:
        array = np.array(grid, dtype=np.int64)
    except (TypeError, ValueError) as e:
        raise InvalidGridError(f"Grid is not a rectangular array of cell values: {e}") from e
    if array.ndim != 2 or array.shape[0] != array.shape[1] or array.shape[0] == 0:
        raise InvalidGridError(f"Grid must be square and non-empty, got shape {array.shape}")
    if not np.isin(array, _CELL_VALUES).all():
        raise InvalidGridError(f"Grid may only contain {_CELL_VALUES}")
    return array.astype(np.int8)


class Board:
    """
    Connect-four board of arbitrary square size.

    The board owns its storage: copy() and every constructor allocate new
    arrays, so no two boards ever share a grid.
    """

    def __init__(self, size: int = DEFAULT_SIZE):
        """
        Create an empty board with X to move.

        Args:
            size: Number of columns (and rows); must be a positive integer
        """
        if isinstance(size, bool) or not isinstance(size, (int, np.integer)) or size <= 0:
            raise InvalidDimensionError(size)
        self._size = int(size)
        self._grid = np.zeros((self._size, self._size), dtype=np.int8)
        self._heights = np.zeros(self._size, dtype=np.int64)
        self._x_turn = True
        debug.debug(f"Initializing new {self._size}x{self._size} Board", "board")

    @classmethod
    def from_grid(cls, grid) -> 'Board':
        """
        Build a board from a pre-filled (column, row) grid.

        Fill counters are derived from the contents and X is to move. Use
        from_state when the turn matters.

        Unlike a bare array, the grid must obey gravity: a piece with an
        empty cell below it raises InvalidGridError, so positions with
        floating pieces cannot be built.
        """
        array = _as_grid(grid)
        heights = _heights_from_grid(array)
        return cls._assemble(array, heights, True)

    @classmethod
    def from_state(cls, grid, heights, x_turn: bool) -> 'Board':
        """
        Build a board from a grid, its fill counters and the turn flag.

        The inputs are copied. ``heights`` must match the grid contents.
        """
        array = _as_grid(grid)
        derived = _heights_from_grid(array)
        given = np.array(heights, dtype=np.int64)
        if given.shape != derived.shape or not np.array_equal(given, derived):
            raise InvalidGridError(
                f"Fill counters {given.tolist()} do not match grid contents {derived.tolist()}")
        return cls._assemble(array, derived, bool(x_turn))

    @classmethod
    def _assemble(cls, grid: np.ndarray, heights: np.ndarray, x_turn: bool) -> 'Board':
        board = cls.__new__(cls)
        board._size = grid.shape[0]
        board._grid = grid
        board._heights = heights
        board._x_turn = x_turn
        return board

    def copy(self) -> 'Board':
        """Return an independent deep copy with the same turn."""
        debug.trace("Creating board copy", "board")
        return self._assemble(self._grid.copy(), self._heights.copy(), self._x_turn)

    # --- state queries ---

    @property
    def size(self) -> int:
        return self._size

    @property
    def x_turn(self) -> bool:
        return self._x_turn

    @property
    def current_player(self) -> Cell:
        return Cell.X if self._x_turn else Cell.O

    @property
    def grid(self) -> np.ndarray:
        """Read-only view of the grid, indexed [column, row]."""
        view = self._grid.view()
        view.flags.writeable = False
        return view

    @property
    def heights(self) -> List[int]:
        """Fill counter of every column."""
        return self._heights.tolist()

    def get_cell(self, column: int, row: int) -> Cell:
        self._check_column(column)
        if not (0 <= row < self._size):
            raise IndexError(f"Row {row} is out of range for a board of size {self._size}")
        return Cell(int(self._grid[column, row]))

    def get_state(self) -> np.ndarray:
        """Return a writable copy of the grid."""
        return self._grid.copy()

    def empty_count(self) -> int:
        return int(np.count_nonzero(self._grid == Cell.EMPTY))

    def is_full(self) -> bool:
        return self.empty_count() == 0

    # --- moves ---

    def _in_range(self, column) -> bool:
        return (isinstance(column, (int, np.integer)) and not isinstance(column, bool)
                and 0 <= column < self._size)

    def _check_column(self, column) -> None:
        if not self._in_range(column):
            raise InvalidColumnError(column, self._size)

    def is_valid_move(self, column: int) -> bool:
        """
        Check if a piece can be dropped into a column.

        Returns:
            True iff the column exists and still has an open row
        """
        return self._in_range(column) and self._heights[column] < self._size

    def get_valid_moves(self) -> List[int]:
        return [col for col in range(self._size) if self._heights[col] < self._size]

    def apply_move(self, column: int) -> int:
        """
        Drop the current player's piece into a column and pass the turn.

        Args:
            column: Column index in [0, size)

        Returns:
            The row the piece landed on

        Raises:
            InvalidColumnError: column is outside the board
            ColumnFullError: column has no open row; the board is unchanged
        """
        if not self.is_valid_move(column):
            if not self._in_range(column):
                debug.debug(f"Rejected move: column {column!r} out of bounds", "board")
                raise InvalidColumnError(column, self._size)
            debug.debug(f"Rejected move: column {column} is full", "board")
            raise ColumnFullError(int(column))

        column = int(column)
        row = int(self._heights[column])
        player = self.current_player
        self._grid[column, row] = player.value
        self._heights[column] = row + 1
        self._x_turn = not self._x_turn
        debug.debug(f"{player.name} placed at ({column}, {row})", "board")
        return row

    # --- outcome ---

    def count_lines_of_length(self, n: int, player: Cell) -> int:
        """
        Count 4-cell windows along every ray holding at least ``n`` of
        ``player``'s pieces and none of the opponent's.

        Useful for heuristic scoring with n < 4 as well as win detection.
        """
        return count_lines_of_length(self._grid, n, player)

    def get_winner(self) -> Winner:
        """
        Report the outcome of the current position.

        X is checked before O, so a (constructed) board where both players
        have four in a line reports X_WINS.
        """
        for player in (Cell.X, Cell.O):
            if self.count_lines_of_length(CONNECT_N, player) > 0:
                return WINS_FOR[player]
        if self.is_full():
            return Winner.DRAW
        return Winner.UNDECIDED

    # --- presentation ---

    def render(self) -> str:
        return render_board_ascii(self._grid)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return (f"Board(size={self._size}, heights={self.heights}, "
                f"to_move={self.current_player.name})")

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (self._x_turn == other._x_turn
                and np.array_equal(self._heights, other._heights)
                and np.array_equal(self._grid, other._grid))

    __hash__ = None
