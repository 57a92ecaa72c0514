"""
utils.py - Constants, enumerations and helpers shared across dropfour

Boards are addressed as (column, row) with row 0 at the bottom, so the grid
array is indexed ``grid[column, row]``.
"""

from enum import Enum, IntEnum, auto
from typing import Dict, List, Tuple

import numpy as np

# Game constants
DEFAULT_SIZE = 7
CONNECT_N = 4  # pieces in a line needed to win
WINDOW_SIZE = 4  # cells held by the line scanner's sliding window


class Cell(IntEnum):
    """Contents of a single board cell. Also used to name the players."""
    EMPTY = 0
    X = 1
    O = 2

    def __str__(self):
        return _SYMBOLS[self]


_SYMBOLS = {Cell.EMPTY: ".", Cell.X: "X", Cell.O: "O"}
_OPPOSITE = {Cell.X: Cell.O, Cell.O: Cell.X}


def opposite(player: Cell) -> Cell:
    """
    Return the other player.

    Only X and O have an opposite; EMPTY (or anything else) raises ValueError.
    """
    try:
        return _OPPOSITE[player]
    except KeyError:
        raise ValueError(f"No opposite for {player!r}; expected Cell.X or Cell.O") from None


class Winner(Enum):
    """Outcome reported by Board.get_winner()."""
    UNDECIDED = auto()
    X_WINS = auto()
    O_WINS = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        return self != Winner.UNDECIDED

    @property
    def player(self):
        """The winning player, or None for UNDECIDED and DRAW."""
        return {Winner.X_WINS: Cell.X, Winner.O_WINS: Cell.O}.get(self)


WINS_FOR = {Cell.X: Winner.X_WINS, Cell.O: Winner.O_WINS}


class Direction(Enum):
    """Ray directions walked by the line scanner."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    RISING = auto()   # towards higher column and higher row
    FALLING = auto()  # towards lower column and higher row


# (column step, row step) for each direction
DIRECTION_STEPS: Dict[Direction, Tuple[int, int]] = {
    Direction.HORIZONTAL: (1, 0),
    Direction.VERTICAL: (0, 1),
    Direction.RISING: (1, 1),
    Direction.FALLING: (-1, 1),
}


def is_valid_position(column: int, row: int, size: int) -> bool:
    """Check that (column, row) lies on a size×size board."""
    return 0 <= column < size and 0 <= row < size


def render_board_ascii(grid: np.ndarray) -> str:
    """
    Render a (column, row) grid with the top row first.

    Args:
        grid: Square array of Cell values indexed [column, row]

    Returns:
        Multi-line string with a column index footer
    """
    size = grid.shape[0]
    border = "|" + "-" * (size * 2 - 1) + "|"
    lines: List[str] = [border]
    for row in range(size - 1, -1, -1):
        cells = [str(Cell(int(grid[col, row]))) for col in range(size)]
        lines.append("|" + " ".join(cells) + "|")
    lines.append(border)
    lines.append("|" + " ".join(str(col % 10) for col in range(size)) + "|")
    return "\n".join(lines)
