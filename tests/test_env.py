import gymnasium as gym
import numpy as np

import falling_blocks.env  # noqa: F401
from falling_blocks.env import Action, FallingBlocksEnv
from falling_blocks.game import COLS, ROWS


def test_reset_starts_a_game():
    env = FallingBlocksEnv()
    obs, info = env.reset(seed=0)
    assert env.observation_space.contains(obs)
    assert obs["grid"].shape == (ROWS, COLS)
    # The freshly spawned piece is overlaid as negative color ids
    assert (obs["grid"] < 0).sum() == 4
    assert 1 <= obs["next_piece"] <= 7
    assert info["score"] == 0 and info["level"] == 1


def test_same_seed_same_pieces():
    a, b = FallingBlocksEnv(), FallingBlocksEnv()
    obs_a, _ = a.reset(seed=42)
    obs_b, _ = b.reset(seed=42)
    assert np.array_equal(obs_a["grid"], obs_b["grid"])
    assert obs_a["next_piece"] == obs_b["next_piece"]


def test_hard_drop_locks_piece():
    env = FallingBlocksEnv()
    env.reset(seed=1)
    obs, reward, terminated, truncated, info = env.step(Action.HARD_DROP)
    assert (obs["grid"] > 0).sum() == 4
    assert reward == 0.0
    assert not terminated and not truncated


def test_unknown_action_is_treated_as_noop():
    env = FallingBlocksEnv()
    obs, _ = env.reset(seed=2)
    obs2, reward, terminated, _, _ = env.step(99)
    assert np.array_equal(obs["grid"], obs2["grid"])
    assert reward == 0.0 and not terminated


def test_stacking_in_the_middle_terminates():
    env = FallingBlocksEnv()
    env.reset(seed=3)
    terminated = False
    for _ in range(500):
        _, _, terminated, truncated, info = env.step(Action.HARD_DROP)
        if terminated:
            break
    assert terminated
    assert any(e.name == "game_over" for e in info["events"])


def test_truncates_at_max_steps():
    env = FallingBlocksEnv(max_episode_steps=3)
    env.reset(seed=4)
    results = [env.step(Action.NONE) for _ in range(3)]
    assert [r[3] for r in results] == [False, False, True]


def test_registered_env_and_rgb_render():
    env = gym.make("FallingBlocks-v0", render_mode="rgb_array")
    env.reset(seed=5)
    frame = env.render()
    assert frame.shape == (ROWS * 12, COLS * 12, 3)
    assert frame.dtype == np.uint8
    env.close()
