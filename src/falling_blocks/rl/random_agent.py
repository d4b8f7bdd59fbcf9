from __future__ import annotations

import gymnasium as gym

# Ensure envs are registered
import falling_blocks.env  # noqa: F401
from falling_blocks.utils.logging import setup_logger


def run_random(steps: int = 2000, seed: int | None = None) -> float:
    log = setup_logger(name="falling_blocks.random_agent")
    env = gym.make("FallingBlocks-v0")
    env.action_space.seed(seed)
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    episodes = 0
    for _ in range(steps):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            episodes += 1
            log.info("Episode %d finished: score=%d lines=%d level=%d", episodes, info["score"], info["lines"], info["level"])
            obs, info = env.reset()
    env.close()
    log.info("Random agent total reward: %.2f over %d finished episode(s)", total_reward, episodes)
    return total_reward


if __name__ == "__main__":  # pragma: no cover
    run_random()
