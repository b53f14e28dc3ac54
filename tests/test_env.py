import numpy as np
import pytest

from weiqi import WeiqiEnv
from weiqi.core import Point, Stone, action_space_size, encode_move


def test_reset_returns_valid_observation():
    env = WeiqiEnv()
    obs, info = env.reset()

    assert obs["board"].shape == (3, 9, 9)
    assert obs["aux"].shape == (4,)
    assert env.action_space.n == 82
    assert info["legal_action_mask"].shape == (action_space_size(9),)
    assert np.count_nonzero(info["legal_action_mask"]) == 82


def test_step_places_stone_and_flips_turn():
    env = WeiqiEnv()
    obs, _ = env.reset()

    next_obs, reward, terminated, truncated, info = env.step(encode_move(Point(4, 4), 9))

    assert reward == 0.0
    assert not terminated
    assert not truncated
    assert next_obs["board"][0, 4, 4] == 1.0
    assert env.session.turn == Stone.WHITE
    assert info["legal_action_mask"][encode_move(Point(4, 4), 9)] == 0


def test_two_passes_terminate_with_komi_win_for_white():
    env = WeiqiEnv()
    env.reset()
    pass_index = encode_move(None, 9)

    env.step(pass_index)
    _, reward, terminated, truncated, info = env.step(pass_index)

    assert terminated
    assert not truncated
    assert reward == -1.0
    assert info["score"]["winner"] == "white"
    assert info["score"]["white"]["total"] == 6.5


def test_illegal_action_raises_when_enforced():
    env = WeiqiEnv()
    env.reset()
    env.step(encode_move(Point(0, 0), 9))

    with pytest.raises(ValueError):
        env.step(encode_move(Point(0, 0), 9))
    with pytest.raises(ValueError):
        env.step(82)


def test_illegal_action_becomes_pass_when_not_enforced():
    env = WeiqiEnv(enforce_legal_actions=False)
    env.reset()
    env.step(encode_move(Point(0, 0), 9))

    env.step(encode_move(Point(0, 0), 9))

    assert env.session.consecutive_passes == 1
    assert env.session.turn == Stone.BLACK


def test_move_limit_truncates_episode():
    env = WeiqiEnv(max_moves=2)
    env.reset()

    env.step(encode_move(Point(2, 2), 9))
    _, _, terminated, truncated, _ = env.step(encode_move(Point(6, 6), 9))

    assert truncated
    assert not terminated


def test_render_ansi():
    env = WeiqiEnv(render_mode="ansi")
    env.reset()
    env.step(encode_move(Point(0, 0), 9))

    assert env.render().splitlines()[0].startswith("X")
