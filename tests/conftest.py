"""
Shared pytest fixtures for dropfour tests.
"""

from typing import Iterable

import pytest

from dropfour.debug import debug, DebugLevel
from dropfour.game.board import Board

# Column-by-column contents (bottom row first) of a full 4x4 board with no
# four-in-a-line for either player.
DRAW_GRID_4 = [
    [1, 1, 2, 2],
    [2, 2, 1, 1],
    [1, 1, 2, 2],
    [2, 2, 1, 1],
]

# Move order that produces DRAW_GRID_4 from an empty board.
DRAW_MOVES_4 = [0, 1, 2, 3, 0, 1, 2, 3, 1, 0, 3, 2, 1, 0, 3, 2]

# X stacks four in column 0 while O stacks three in column 1.
VERTICAL_X_MOVES_4 = [0, 1, 0, 1, 0, 1, 0]


def play(board: Board, moves: Iterable[int]) -> Board:
    """Apply a sequence of moves and return the same board."""
    for column in moves:
        board.apply_move(column)
    return board


@pytest.fixture
def board4() -> Board:
    return Board(4)


@pytest.fixture(autouse=True)
def quiet_debug():
    """Restore the shared logging settings after every test."""
    yield
    debug.configure(level=DebugLevel.WARNING, enabled=True, components=[], log_file="")
