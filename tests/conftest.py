import os
import sys

import pytest

# Ensure src is on path for test imports
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

# pygame must not open a real window during tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from falling_blocks.game import FallingBlocksGame, TetrominoType  # noqa: E402


class ScriptedRng:
    """Stand-in random source that hands out a fixed piece sequence.

    Once the script runs out the last kind is repeated.
    """

    def __init__(self, *kinds):
        self.kinds = [TetrominoType(k) for k in kinds] or [TetrominoType.O]
        self.draws = 0

    def choice(self, seq):
        kind = self.kinds[min(self.draws, len(self.kinds) - 1)]
        self.draws += 1
        assert kind in seq
        return kind


@pytest.fixture
def scripted_rng():
    return ScriptedRng


@pytest.fixture
def make_game():
    def factory(*kinds, **kwargs):
        game = FallingBlocksGame(rng=ScriptedRng(*kinds), **kwargs)
        game.start()
        return game

    return factory
