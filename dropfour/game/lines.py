"""
lines.py - Ray enumeration and sliding-window line counting

A ray is the run of cells reached from a start position by repeatedly adding
a fixed (column, row) step until leaving the board. Each ray is scanned with
its own 4-cell window that starts out padded with EMPTY cells.

The enumeration in ``iter_rays`` visits the falling main diagonal twice (as
the i=0 ray from the right edge and as the i=N-1 ray from the bottom edge).
Counts produced here include that duplicate, as well as windows that are
still partly padding near the start of a ray. Both are long-standing scoring
behavior and are kept as-is.
"""

from collections import deque
from typing import Iterator, List, Sequence, Tuple

from dropfour.debug import debug
from dropfour.utils import (WINDOW_SIZE, Cell, Direction, DIRECTION_STEPS,
                            is_valid_position, opposite)

Ray = Tuple[int, int, int, int]  # start column, start row, column step, row step


def iter_rays(size: int) -> Iterator[Ray]:
    """Yield every ray scanned on a size×size board, in scan order."""
    h_step = DIRECTION_STEPS[Direction.HORIZONTAL]
    v_step = DIRECTION_STEPS[Direction.VERTICAL]
    rising = DIRECTION_STEPS[Direction.RISING]
    falling = DIRECTION_STEPS[Direction.FALLING]

    for i in range(size):
        yield (0, i) + h_step
        yield (i, 0) + v_step
        # diagonals anchored on the left and right edges
        yield (0, i) + rising
        yield (size - 1, i) + falling
        if i != 0:
            # diagonals anchored on the bottom edge
            yield (i, 0) + rising
            yield (i, 0) + falling


def ray_cells(columns: Sequence[Sequence[int]], ray: Ray) -> Iterator[int]:
    """Yield the cell values along ``ray`` for a grid given as a list of columns."""
    size = len(columns)
    col, row, d_col, d_row = ray
    while is_valid_position(col, row, size):
        yield columns[col][row]
        col += d_col
        row += d_row


def window_matches(window: Sequence[int], n: int, player: Cell, blocker: Cell) -> bool:
    """True if the window has no ``blocker`` piece and at least ``n`` of ``player``'s."""
    if blocker in window:
        return False
    return sum(1 for value in window if value == player) >= n


def count_ray(columns: Sequence[Sequence[int]], ray: Ray, n: int, player: Cell) -> int:
    """Count qualifying windows after each slide along a single ray."""
    blocker = opposite(player)
    window = deque([Cell.EMPTY] * WINDOW_SIZE, maxlen=WINDOW_SIZE)
    hits = 0
    for value in ray_cells(columns, ray):
        window.append(value)
        if window_matches(window, n, player, blocker):
            hits += 1
    return hits


def count_lines_of_length(grid, n: int, player: Cell) -> int:
    """
    Count windows holding at least ``n`` of ``player``'s pieces and none of the
    opponent's, summed over every ray of the board.

    Args:
        grid: Square (column, row) grid, as a numpy array or nested sequences
        n: Minimum number of ``player`` pieces a window needs
        player: Cell.X or Cell.O

    Returns:
        Total number of qualifying windows
    """
    player = Cell(player)
    columns: List[List[int]] = grid.tolist() if hasattr(grid, "tolist") else [list(c) for c in grid]
    total = 0
    for ray in iter_rays(len(columns)):
        hits = count_ray(columns, ray, n, player)
        if hits:
            debug.trace(f"ray {ray}: {hits} window(s) with {n}+ {player.name}", "lines")
        total += hits
    return total
