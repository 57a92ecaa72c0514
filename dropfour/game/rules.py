"""
rules.py - Gymnasium environment for dropfour

Wraps a single Board so reinforcement-learning tooling can drive it through
the standard reset/step interface. Rewards are given from the point of view
of the player who just moved.
"""

from typing import Any, Dict, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from dropfour.debug import debug
from dropfour.errors import BoardError
from dropfour.game.board import Board
from dropfour.utils import DEFAULT_SIZE, Winner


class DropFourEnv(gym.Env):
    """
    Connect-four environment following the Gymnasium interface.

    Actions are column indices. Observations are the (column, row) grid with
    0 for empty, 1 for X and 2 for O.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, size: int = DEFAULT_SIZE, render_mode: Optional[str] = None):
        """
        Args:
            size: Board dimension
            render_mode: None, "ascii" or "human"
        """
        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode}")
        debug.debug(f"Initializing DropFourEnv (size {size})", "env")

        self.size = size
        self.board = Board(size)
        self.render_mode = render_mode

        self.action_space = spaces.Discrete(size)
        self.observation_space = spaces.Box(
            low=0, high=2, shape=(size, size), dtype=np.int8
        )

        self.reward_win = 1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01

    def reset(self, seed: Optional[int] = None,
              options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        debug.debug("Resetting environment", "env")
        super().reset(seed=seed)
        self.board = Board(self.size)

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict[str, Any]]:
        """
        Drop a piece for the player to move.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        debug.debug(f"Environment step with action {action}", "env")
        outcome = self.board.get_winner()
        mover = self.board.current_player

        try:
            if outcome.is_game_over():
                raise BoardError(f"Game already finished ({outcome.name})")
            if isinstance(action, np.integer):
                action = int(action)
            self.board.apply_move(action)
        except BoardError as e:
            debug.warning(f"Invalid action {action}: {e}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        reward = self.reward_step
        terminated = False
        outcome = self.board.get_winner()
        if outcome.player == mover:
            debug.info(f"Game over: {mover.name} wins", "env")
            reward = self.reward_win
            terminated = True
        elif outcome == Winner.DRAW:
            debug.info("Game over: draw", "env")
            reward = self.reward_draw
            terminated = True

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[str]:
        if self.render_mode == "ascii":
            return self.board.render()
        if self.render_mode == "human":
            print(self.board.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.board.get_state()

    def _get_info(self) -> Dict[str, Any]:
        valid_moves = self.board.get_valid_moves()
        return {
            'valid_moves': valid_moves,
            'num_valid_moves': len(valid_moves),
            'current_player': int(self.board.current_player),
            'game_result': self.board.get_winner().name,
            'pieces_placed': self.size * self.size - self.board.empty_count(),
        }

