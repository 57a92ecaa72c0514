"""
cli.py - Command-line interface for dropfour

Commands:
    play       hot-seat game for two people at one terminal
    test       load a position and report everything the engine knows about it
    benchmark  time the core board operations
"""

import argparse
import math
import random
import sys
from typing import Callable, List, Optional

from dropfour.debug import debug, DebugLevel
from dropfour.errors import BoardError, InvalidGridError
from dropfour.game.board import Board
from dropfour.utils import CONNECT_N, DEFAULT_SIZE, Cell, Winner


def parse_position(text: str) -> Board:
    """
    Build a board from comma-separated cell values.

    Values are 0 (empty), 1 (X) or 2 (O), listed column by column, each
    column from the bottom row up. The count must be a perfect square.
    """
    try:
        values = [int(v) for v in text.split(',') if v.strip()]
    except ValueError as e:
        raise InvalidGridError(f"Position contains a non-integer value: {e}") from e
    size = math.isqrt(len(values))
    if size == 0 or size * size != len(values):
        raise InvalidGridError(f"Position needs a square number of values, got {len(values)}")
    columns = [values[c * size:(c + 1) * size] for c in range(size)]
    return Board.from_grid(columns)


class SimpleCLI:
    """Simple command-line interface around a single Board."""

    def __init__(self, input_func: Callable[[str], str] = input):
        self.args = None
        self._input = input_func

    def build_parser(self) -> argparse.ArgumentParser:
        common = argparse.ArgumentParser(add_help=False)
        common.add_argument('--debug', action='store_true',
                            help='Enable debug logging (same as --debug_level debug)')
        common.add_argument('--debug_level',
                            choices=[level.name.lower() for level in DebugLevel],
                            default='warning', help='Logging verbosity')
        common.add_argument('--log_file', type=str, default=None,
                            help='Also write log output to this file')

        parser = argparse.ArgumentParser(description='dropfour board engine CLI')
        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', parents=[common],
                                            help='Play a two-player game')
        play_parser.add_argument('--size', type=int, default=DEFAULT_SIZE,
                                 help=f'Board dimension (default: {DEFAULT_SIZE})')

        test_parser = subparsers.add_parser('test', parents=[common],
                                            help='Inspect a board position')
        test_parser.add_argument('--position', type=str,
                                 help='Comma-separated cells (0/1/2), column by column '
                                      'from the bottom up')

        benchmark_parser = subparsers.add_parser('benchmark', parents=[common],
                                                 help='Benchmark performance')
        benchmark_parser.add_argument('--size', type=int, default=DEFAULT_SIZE,
                                      help=f'Board dimension (default: {DEFAULT_SIZE})')
        benchmark_parser.add_argument('--iterations', type=int, default=1000,
                                      help='Number of iterations for benchmarking')
        benchmark_parser.add_argument('--seed', type=int, default=None,
                                      help='Random seed for reproducible move sequences')
        return parser

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        """Parse command-line arguments and configure logging from them."""
        self.args = self.build_parser().parse_args(argv)

        level = getattr(self.args, 'debug_level', 'warning')
        if getattr(self.args, 'debug', False):
            level = 'debug'
        debug.set_from_string(level)
        if getattr(self.args, 'log_file', None):
            debug.configure(log_file=self.args.log_file)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run the selected command and return a process exit code."""
        if self.args is None:
            self.parse_args(argv)

        if self.args.command == 'play':
            return self.play_game()
        elif self.args.command == 'test':
            return self.test_position()
        elif self.args.command == 'benchmark':
            return self.benchmark()
        print("Please specify a command. Use --help for options.")
        return 1

    def play_game(self) -> int:
        """Play a game with both players at the keyboard."""
        try:
            board = Board(self.args.size)
        except BoardError as e:
            print(f"Error: {e}")
            return 1
        history: List[Board] = []

        print("Starting a new game!")
        print(f"Enter a column number (0-{board.size - 1}); 'u' to undo, 'q' to quit.")
        print(board.render())

        while not board.get_winner().is_game_over():
            player = board.current_player
            try:
                user_input = self._input(f"{player.name} to move: ").strip().lower()
            except EOFError:
                print("\nQuitting game.")
                return 0

            if user_input == 'q':
                print("Quitting game.")
                return 0
            if user_input == 'u':
                if history:
                    board = history.pop()
                    print("Move undone.")
                    print(board.render())
                else:
                    print("No moves to undo.")
                continue

            try:
                column = int(user_input)
            except ValueError:
                print("Invalid input. Please enter a column number, 'u' or 'q'.")
                continue

            snapshot = board.copy()
            try:
                board.apply_move(column)
            except BoardError as e:
                print(f"Invalid move: {e}")
                continue
            history.append(snapshot)
            print(board.render())

        outcome = board.get_winner()
        print("Game over!")
        if outcome == Winner.DRAW:
            print("It's a draw!")
        else:
            print(f"{outcome.player.name} wins!")
        return 0

    def test_position(self) -> int:
        """Report winner, line counts and valid moves for a given position."""
        if not self.args.position:
            print("Please provide a position string with --position")
            return 1

        try:
            board = parse_position(self.args.position)
        except BoardError as e:
            print(f"Error parsing position: {e}")
            return 1

        print("Loaded position:")
        print(board.render())
        print(f"\nOutcome: {board.get_winner().name}")

        print("\nLines (windows with n+ pieces and no opponent piece):")
        for player in (Cell.X, Cell.O):
            counts = [f"{n}={board.count_lines_of_length(n, player)}"
                      for n in range(2, CONNECT_N + 1)]
            print(f"  {player.name}: {', '.join(counts)}")

        if board.is_full():
            print("\nBoard is full")
        else:
            print(f"\nEmpty spaces: {board.empty_count()}")
        print(f"Valid moves: {board.get_valid_moves()}")
        return 0

    def benchmark(self) -> int:
        """Time construction, moves, winner checks, line counts and rendering."""
        iterations = self.args.iterations
        if iterations <= 0:
            print("Error: --iterations must be positive")
            return 1
        try:
            Board(self.args.size)
        except BoardError as e:
            print(f"Error: {e}")
            return 1

        size = self.args.size
        rng = random.Random(self.args.seed)
        print(f"Running benchmark on a {size}x{size} board with {iterations} iterations...")

        with debug.timer("board_init", "cli") as t:
            for _ in range(iterations):
                Board(size)
        self._report("Board initialization", t["elapsed"], iterations, "board")

        board = Board(size)
        moves_made = 0
        with debug.timer("moves", "cli") as t:
            for _ in range(iterations):
                valid = board.get_valid_moves()
                if not valid:
                    board = Board(size)
                    valid = board.get_valid_moves()
                board.apply_move(rng.choice(valid))
                moves_made += 1
        self._report(f"Making {moves_made} moves", t["elapsed"], moves_made, "move")

        positions = [self._random_position(size, rng) for _ in range(min(iterations, 200))]
        with debug.timer("winner", "cli") as t:
            for position in positions:
                position.get_winner()
        self._report("Winner detection", t["elapsed"], len(positions), "check")

        with debug.timer("lines", "cli") as t:
            for position in positions:
                position.count_lines_of_length(2, Cell.X)
        self._report("Line counting (n=2)", t["elapsed"], len(positions), "count")

        with debug.timer("rendering", "cli") as t:
            for _ in range(iterations):
                board.render()
        self._report("Rendering", t["elapsed"], iterations, "render")
        return 0

    @staticmethod
    def _random_position(size: int, rng: random.Random) -> Board:
        board = Board(size)
        for _ in range(rng.randint(0, size * size)):
            valid = board.get_valid_moves()
            if not valid or board.get_winner().is_game_over():
                break
            board.apply_move(rng.choice(valid))
        return board

    @staticmethod
    def _report(label: str, elapsed: float, count: int, unit: str) -> None:
        per = elapsed / count * 1000 if count else 0.0
        print(f"{label}: {elapsed:.6f} seconds total, {per:.6f} ms per {unit}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    cli = SimpleCLI()
    return cli.run(argv)


if __name__ == "__main__":
    sys.exit(main())
