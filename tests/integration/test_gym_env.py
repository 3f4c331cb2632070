import numpy as np
import pytest

from kanji_universe.actions import GymAction
from kanji_universe.content.default import DEFAULT_CATALOG
from kanji_universe.examples.tutorial_levels import LEVEL_REGISTRY
from kanji_universe.gym_env import KanjiUniverseEnv, board_observation, render_ansi


def test_reset_observation() -> None:
    env = KanjiUniverseEnv(level=LEVEL_REGISTRY["tutorial-01"])
    obs, info = env.reset(seed=0)
    board = obs["board"]
    assert board.shape == (8, 12, len(DEFAULT_CATALOG))
    assert board.dtype == np.uint8
    assert int(board.sum()) == 8
    assert env.observation_space["board"].contains(board)
    assert int(obs["status"]["move_count"]) == 0
    assert obs["status"]["won"] == 0
    assert info["rules"] == ["人 は 遊", "門 は 勝"]
    assert info["player_entity_id"] == 7
    assert info["win_entity_id"] == 8
    assert env.action_space.n == len(GymAction)


def test_board_counts_stacked_entities() -> None:
    env = KanjiUniverseEnv(level=LEVEL_REGISTRY["tutorial-01"])
    for _ in range(7):
        env.step(GymAction.RIGHT)
    board = board_observation(env.state)
    assert int(board[5, 9].sum()) == 2


def test_episode_reward_and_termination() -> None:
    env = KanjiUniverseEnv(level=LEVEL_REGISTRY["tutorial-01"])
    env.reset()
    rewards = []
    for _ in range(7):
        _, reward, terminated, truncated, info = env.step(GymAction.RIGHT)
        rewards.append(reward)
        assert not truncated
    assert rewards == [0.0] * 6 + [1.0]
    assert terminated
    assert info["events"][-1] == "You Win!"

    _, reward, terminated, _, info = env.step(GymAction.RIGHT)
    assert reward == 0.0
    assert terminated


def test_undo_and_restart_actions() -> None:
    env = KanjiUniverseEnv()
    env.step(GymAction.RIGHT)
    env.step(GymAction.RIGHT)
    obs, *_ = env.step(GymAction.UNDO)
    assert int(obs["status"]["move_count"]) == 1
    obs, *_ = env.step(GymAction.RESTART)
    assert int(obs["status"]["move_count"]) == 0


def test_invalid_action() -> None:
    env = KanjiUniverseEnv()
    with pytest.raises(ValueError):
        env.step(len(GymAction))


def test_render_ansi() -> None:
    env = KanjiUniverseEnv(level=LEVEL_REGISTRY["tutorial-01"])
    rows = env.render().split("\n")
    assert len(rows) == 8
    assert rows[1] == ".人は遊..門は勝..."
    assert rows[5] == "..人......門.."
    assert render_ansi(env.state) == env.render()


def test_default_level_is_first_tutorial() -> None:
    env = KanjiUniverseEnv()
    assert env.state.level_id == "tutorial-01"
    env.close()
