"""
dropfour.game - Board state, line scanning and the Gymnasium environment
"""

from dropfour.game.board import Board
from dropfour.game.rules import DropFourEnv

__all__ = ['Board', 'DropFourEnv']
