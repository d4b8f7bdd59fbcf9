from __future__ import annotations

import functools
import logging
import random
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Callable, List, Optional, Tuple, Union

import numpy as np

from .events import EventBus, GameEvent, GameOver, LevelUp, LinesCleared
from .grid import COLS, ROWS, GameGrid
from .pieces import Piece, TetrominoType
from .rules import ScoringRules


logger = logging.getLogger(__name__)


class GamePhase(Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class Direction(IntEnum):
    LEFT = -1
    RIGHT = 1


_DIRECTIONS = {
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
    Direction.LEFT: Direction.LEFT,
    Direction.RIGHT: Direction.RIGHT,
}


@dataclass
class GameConfig:
    random_seed: Optional[int] = None
    soft_drop_interval_ms: int = 50
    accelerate_bonus_ms: int = 20

    def __post_init__(self) -> None:
        if self.soft_drop_interval_ms <= 0:
            raise ValueError(f"soft_drop_interval_ms must be positive, got {self.soft_drop_interval_ms}")
        if self.accelerate_bonus_ms < 0:
            raise ValueError(f"accelerate_bonus_ms must be non-negative, got {self.accelerate_bonus_ms}")


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of the engine handed to renderers and UI adapters."""

    board: np.ndarray = field(compare=False)
    current: Optional[Piece]
    next_piece: Optional[Piece]
    score: int
    lines: int
    level: int
    drop_interval_ms: int
    phase: GamePhase
    soft_drop_held: bool = False

    @property
    def running(self) -> bool:
        return self.phase in (GamePhase.RUNNING, GamePhase.PAUSED)

    @property
    def paused(self) -> bool:
        return self.phase is GamePhase.PAUSED

    @property
    def game_over(self) -> bool:
        return self.phase is GamePhase.GAME_OVER


StepResult = Tuple[GameSnapshot, List[GameEvent]]


def _exclusive(rejected: Callable[["FallingBlocksGame"], object]):
    """Reject a mutating call made while another one is still executing."""

    def decorator(method):
        @functools.wraps(method)
        def wrapper(self: "FallingBlocksGame", *args, **kwargs):
            if self._busy:
                logger.warning("Rejected re-entrant call to %s()", method.__name__)
                return rejected(self)
            self._busy = True
            try:
                return method(self, *args, **kwargs)
            finally:
                self._busy = False

        return wrapper

    return decorator


def _false(game: "FallingBlocksGame") -> bool:
    return False


def _no_events(game: "FallingBlocksGame") -> StepResult:
    return game.snapshot(), []


class FallingBlocksGame:
    """Falling-block game engine.

    The engine is a synchronous state machine over a ``GameGrid`` and the
    falling piece. It has no loop of its own: the host calls ``tick`` with the
    elapsed time and forwards player commands. Every operation is total;
    a move that would collide is rolled back and reported as ``False``.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = rng if rng is not None else random.Random(self.config.random_seed)
        self.events = EventBus()
        self.grid = GameGrid()
        self.phase = GamePhase.NOT_STARTED
        self.score = 0
        self.lines = 0
        self.level = 1
        self.drop_interval_ms = self.rules.drop_interval_ms(1)
        self.drop_accumulator_ms = 0.0
        self.drop_bonus_ms = 0.0
        self.soft_drop_held = False
        self.current: Optional[Piece] = None
        self.next_piece: Optional[Piece] = None
        self._busy = False
        self._events: List[GameEvent] = []

    # ------------------------------------------------------------------
    # Session control
    # ------------------------------------------------------------------
    @property
    def is_running(self) -> bool:
        return self.phase is GamePhase.RUNNING

    @_exclusive(_false)
    def start(self) -> bool:
        if self.phase in (GamePhase.RUNNING, GamePhase.PAUSED):
            return False
        self._events = []
        self.grid.reset()
        self.score = 0
        self.lines = 0
        self.level = 1
        self.drop_interval_ms = self.rules.drop_interval_ms(1)
        self.drop_accumulator_ms = 0.0
        self.drop_bonus_ms = 0.0
        self.soft_drop_held = False
        self.current = None
        self.next_piece = self._random_piece()
        self.phase = GamePhase.RUNNING
        logger.info("Game started (drop interval %d ms)", self.drop_interval_ms)
        self._spawn_piece()
        return True

    @_exclusive(_false)
    def pause(self) -> bool:
        if self.phase is not GamePhase.RUNNING:
            return False
        self.phase = GamePhase.PAUSED
        logger.info("Game paused")
        return True

    @_exclusive(_false)
    def resume(self) -> bool:
        if self.phase is not GamePhase.PAUSED:
            return False
        self.phase = GamePhase.RUNNING
        # Time spent paused must not trigger a catch-up drop; a pending accelerate bonus is kept
        self.drop_accumulator_ms = 0.0
        logger.info("Game resumed")
        return True

    def toggle_pause(self) -> bool:
        if self.phase is GamePhase.PAUSED:
            return self.resume()
        return self.pause()

    # ------------------------------------------------------------------
    # Timing
    # ------------------------------------------------------------------
    @_exclusive(_no_events)
    def tick(self, elapsed_ms: float, soft_drop: bool = False) -> StepResult:
        if self.phase is not GamePhase.RUNNING:
            return self.snapshot(), []
        self._events = []
        self.soft_drop_held = bool(soft_drop)
        self.drop_accumulator_ms += max(0.0, float(elapsed_ms))
        interval = self.config.soft_drop_interval_ms if self.soft_drop_held else self.drop_interval_ms
        if self.drop_accumulator_ms + self.drop_bonus_ms > interval:
            self.drop_accumulator_ms = 0.0
            self.drop_bonus_ms = 0.0
            if not self._try_shift(0, 1):
                self._lock_piece()
        return self.snapshot(), list(self._events)

    @_exclusive(_false)
    def accelerate(self) -> bool:
        if self.phase is not GamePhase.RUNNING:
            return False
        self.drop_bonus_ms += self.config.accelerate_bonus_ms
        return True

    # ------------------------------------------------------------------
    # Player commands
    # ------------------------------------------------------------------
    @_exclusive(_false)
    def move(self, direction: Union[str, int, Direction]) -> bool:
        # bool is an int subclass; True must not read as RIGHT
        valid = isinstance(direction, (str, int)) and not isinstance(direction, bool)
        step = _DIRECTIONS.get(direction) if valid else None
        if step is None:
            logger.debug("Ignoring unknown direction %r", direction)
            return False
        if self.phase is not GamePhase.RUNNING:
            return False
        return self._try_shift(int(step), 0)

    @_exclusive(_false)
    def rotate(self) -> bool:
        if self.phase is not GamePhase.RUNNING or self.current is None:
            return False
        # No wall kicks: a rotation that collides is simply rejected
        rotated = self.current.rotated()
        if self.grid.collides(rotated.cells()):
            return False
        self.current = rotated
        return True

    @_exclusive(_no_events)
    def hard_drop(self) -> StepResult:
        if self.phase is not GamePhase.RUNNING or self.current is None:
            return self.snapshot(), []
        self._events = []
        while self._try_shift(0, 1):
            pass
        self._lock_piece()
        return self.snapshot(), list(self._events)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _emit(self, event: GameEvent) -> None:
        self._events.append(event)
        self.events.emit(self, event)

    def _random_piece(self) -> Piece:
        kind = self.rng.choice(list(TetrominoType))
        return Piece.new(kind)

    def _try_shift(self, dx: int, dy: int) -> bool:
        if self.current is None:
            return False
        moved = self.current.moved(dx, dy)
        if self.grid.collides(moved.cells()):
            return False
        self.current = moved
        return True

    def _spawn_piece(self) -> None:
        assert self.next_piece is not None
        piece = self.next_piece
        self.current = piece.at(COLS // 2 - piece.width // 2, 0)
        self.next_piece = self._random_piece()
        logger.debug("Spawned %s at (%d, %d)", self.current.kind.name, self.current.x, self.current.y)
        if self.grid.collides(self.current.cells()):
            self.phase = GamePhase.GAME_OVER
            self.soft_drop_held = False
            logger.info("Game over: score=%d lines=%d level=%d", self.score, self.lines, self.level)
            self._emit(GameOver(score=self.score, lines=self.lines, level=self.level))

    def _lock_piece(self) -> None:
        assert self.current is not None
        self.grid.lock(self.current.cells(), self.current.color)
        logger.debug("Locked %s at (%d, %d)", self.current.kind.name, self.current.x, self.current.y)
        self._clear_lines()
        self._spawn_piece()

    def _clear_lines(self) -> int:
        cleared = self.grid.clear_full_lines()
        if cleared == 0:
            return 0
        self.lines += cleared
        self.score += self.rules.score_for_lines(cleared)
        logger.debug("Cleared %d line(s); score=%d lines=%d", cleared, self.score, self.lines)
        self._emit(LinesCleared(count=cleared))
        new_level = self.rules.level_for_lines(self.lines)
        if new_level > self.level:
            self.level = new_level
            self.drop_interval_ms = self.rules.drop_interval_ms(new_level)
            logger.info("Level %d reached (drop interval %d ms)", self.level, self.drop_interval_ms)
            self._emit(LevelUp(level=self.level, drop_interval_ms=self.drop_interval_ms))
        return cleared

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------
    def snapshot(self) -> GameSnapshot:
        board = self.grid.clone_state()
        board.setflags(write=False)
        return GameSnapshot(
            board=board,
            current=self.current,
            next_piece=self.next_piece,
            score=self.score,
            lines=self.lines,
            level=self.level,
            drop_interval_ms=self.drop_interval_ms,
            phase=self.phase,
            soft_drop_held=self.soft_drop_held,
        )

    def ghost_y(self) -> Optional[int]:
        """Row the current piece would lock at if hard-dropped."""
        if self.current is None:
            return None
        probe = self.current
        while not self.grid.collides(probe.moved(0, 1).cells()):
            probe = probe.moved(0, 1)
        return probe.y

    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the grid for observation
        state = self.grid.clone_state()
        if self.current is not None:
            for x, y in self.current.cells():
                if 0 <= y < ROWS and 0 <= x < COLS:
                    # Use negative to indicate falling piece overlay
                    state[y, x] = -self.current.color
        return state
