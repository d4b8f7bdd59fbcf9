from __future__ import annotations

import random
from enum import IntEnum
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import COLS, ROWS, FallingBlocksGame, GameConfig, GamePhase, ScoringRules


class Action(IntEnum):
    NONE = 0
    LEFT = 1
    RIGHT = 2
    ROTATE = 3
    SOFT_DROP = 4
    HARD_DROP = 5


class FallingBlocksEnv(gym.Env):
    """Gymnasium adapter around ``FallingBlocksGame``.

    Each step applies one command and then advances the clock by ``frame_ms``.
    ``SOFT_DROP`` holds the soft-drop input for that frame. The reward is the
    engine score gained during the step.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None,
                 render_mode: Optional[str] = None, frame_ms: float = 1000.0 / 30,
                 max_episode_steps: int = 10_000) -> None:
        super().__init__()
        self.config = config or GameConfig()
        self.rules = rules
        self.game = FallingBlocksGame(self.config, self.rules)
        self.render_mode = render_mode
        self.frame_ms = float(frame_ms)
        self.max_episode_steps = int(max_episode_steps)

        n_kinds = 7
        self.observation_space = spaces.Dict(
            {
                # Locked cells hold color ids 1..7, the falling piece -1..-7
                "grid": spaces.Box(low=-n_kinds, high=n_kinds, shape=(ROWS, COLS), dtype=np.int8),
                "next_piece": spaces.Discrete(n_kinds + 1),
            }
        )
        self.action_space = spaces.Discrete(len(Action))

        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        nxt = self.game.next_piece
        return {
            "grid": self.game.get_state().astype(np.int8),
            "next_piece": int(nxt.color) if nxt is not None else 0,
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.score,
            "lines": self.game.lines,
            "level": self.game.level,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        # A fresh engine per episode; the env's np_random seeds the piece draws
        rng_seed = int(self.np_random.integers(0, 2**31 - 1))
        self.game = FallingBlocksGame(self.config, self.rules, rng=random.Random(rng_seed))
        self.game.start()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        try:
            act = Action(int(action))
        except ValueError:
            act = Action.NONE

        score_before = self.game.score
        events = []
        if act == Action.LEFT:
            self.game.move("left")
        elif act == Action.RIGHT:
            self.game.move("right")
        elif act == Action.ROTATE:
            self.game.rotate()
        elif act == Action.HARD_DROP:
            _, events = self.game.hard_drop()

        if self.game.phase is not GamePhase.GAME_OVER:
            _, tick_events = self.game.tick(self.frame_ms, soft_drop=(act == Action.SOFT_DROP))
            events = list(events) + tick_events

        self._steps += 1
        reward = float(self.game.score - score_before)
        terminated = self.game.phase is GamePhase.GAME_OVER
        truncated = self._steps >= self.max_episode_steps and not terminated

        info = self._get_info()
        info["events"] = events
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            from falling_blocks.visualization.renderer import state_to_rgb

            return state_to_rgb(self.game.get_state())
        # human rendering delegated to visualization.human_play; noop
        return None

    def close(self) -> None:
        pass
