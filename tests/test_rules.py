"""Tests for the Gymnasium environment."""

import numpy as np
import pytest

from conftest import DRAW_MOVES_4, VERTICAL_X_MOVES_4
from dropfour.game.rules import DropFourEnv
from dropfour.utils import Cell


@pytest.fixture
def env():
    environment = DropFourEnv(size=4)
    environment.reset(seed=0)
    return environment


def test_reset_returns_empty_observation():
    env = DropFourEnv(size=4)
    observation, info = env.reset(seed=123)
    assert observation.shape == (4, 4)
    assert observation.dtype == np.int8
    assert not observation.any()
    assert env.observation_space.contains(observation)
    assert info['valid_moves'] == [0, 1, 2, 3]
    assert info['current_player'] == Cell.X
    assert info['game_result'] == 'UNDECIDED'
    assert info['pieces_placed'] == 0


def test_spaces_follow_board_size():
    env = DropFourEnv(size=6)
    assert env.action_space.n == 6
    assert env.observation_space.shape == (6, 6)


def test_regular_step(env):
    observation, reward, terminated, truncated, info = env.step(2)
    assert observation[2, 0] == Cell.X
    assert reward == env.reward_step
    assert not terminated and not truncated
    assert info['current_player'] == Cell.O
    assert info['pieces_placed'] == 1


@pytest.mark.parametrize("action", [-1, 4])
def test_out_of_range_action(env, action):
    observation, reward, terminated, truncated, info = env.step(action)
    assert reward == env.reward_invalid_move
    assert truncated and not terminated
    assert info['invalid_move']
    assert not observation.any()
    assert info['current_player'] == Cell.X


def test_full_column_action(env):
    for _ in range(4):
        env.step(0)
    _, reward, _, truncated, info = env.step(0)
    assert reward == env.reward_invalid_move
    assert truncated
    assert 0 not in info['valid_moves']


def test_win_terminates_with_reward(env):
    for action in VERTICAL_X_MOVES_4[:-1]:
        _, _, terminated, _, _ = env.step(action)
        assert not terminated
    _, reward, terminated, truncated, info = env.step(VERTICAL_X_MOVES_4[-1])
    assert reward == env.reward_win
    assert terminated and not truncated
    assert info['game_result'] == 'X_WINS'


def test_second_player_win_rewards_the_mover(env):
    *opening, last = [0, 1, 2, 1, 2, 1, 3, 1]
    for action in opening:
        env.step(action)
    _, reward, terminated, _, info = env.step(last)
    assert reward == env.reward_win
    assert terminated
    assert info['game_result'] == 'O_WINS'


def test_no_moves_after_game_over(env):
    for action in VERTICAL_X_MOVES_4:
        env.step(action)
    _, reward, terminated, truncated, info = env.step(3)
    assert reward == env.reward_invalid_move
    assert truncated and not terminated
    assert info['invalid_move']


def test_draw(env):
    for action in DRAW_MOVES_4[:-1]:
        env.step(action)
    _, reward, terminated, _, info = env.step(DRAW_MOVES_4[-1])
    assert reward == env.reward_draw
    assert terminated
    assert info['game_result'] == 'DRAW'
    assert info['valid_moves'] == []


def test_reset_starts_a_new_board(env):
    env.step(1)
    observation, info = env.reset()
    assert not observation.any()
    assert info['pieces_placed'] == 0


def test_ascii_render():
    env = DropFourEnv(size=4, render_mode="ascii")
    env.reset()
    env.step(0)
    assert env.render() == env.board.render()


def test_human_render_prints(capsys):
    env = DropFourEnv(size=4, render_mode="human")
    env.reset()
    assert "|0 1 2 3|" in capsys.readouterr().out


def test_no_render_mode():
    env = DropFourEnv(size=4)
    env.reset()
    assert env.render() is None


def test_unknown_render_mode():
    with pytest.raises(ValueError):
        DropFourEnv(size=4, render_mode="rgb_array")


@pytest.mark.parametrize("action", [1.7, 1.0, "1"])
def test_non_integer_actions_are_not_truncated(env, action):
    observation, reward, terminated, truncated, info = env.step(action)
    assert reward == env.reward_invalid_move
    assert truncated and not terminated
    assert info['invalid_move']
    assert not observation.any()


def test_numpy_integer_action(env):
    observation, reward, _, truncated, _ = env.step(np.int64(2))
    assert reward == env.reward_step
    assert not truncated
    assert observation[2, 0] == Cell.X
