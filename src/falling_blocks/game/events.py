"""Events emitted by the game engine for UI adapters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, ClassVar, Dict, Union

from blinker import Signal


EVENT_LINES_CLEARED = "lines_cleared"   # payload: count
EVENT_LEVEL_UP = "level_up"             # payload: level, drop_interval_ms
EVENT_GAME_OVER = "game_over"           # payload: score, lines, level


@dataclass(frozen=True)
class LinesCleared:
    name: ClassVar[str] = EVENT_LINES_CLEARED
    count: int


@dataclass(frozen=True)
class LevelUp:
    name: ClassVar[str] = EVENT_LEVEL_UP
    level: int
    drop_interval_ms: int


@dataclass(frozen=True)
class GameOver:
    name: ClassVar[str] = EVENT_GAME_OVER
    score: int
    lines: int
    level: int


GameEvent = Union[LinesCleared, LevelUp, GameOver]


class EventBus:
    """Per-engine event bus on top of blinker Signal objects.

    Subscribers are called as ``fn(sender, event=<GameEvent>)``.
    """

    def __init__(self) -> None:
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn: Callable[..., object]) -> None:
        sig = self._signals.setdefault(name, Signal(name))
        # Strong reference so lambdas and bound methods of short-lived adapters stay connected
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn: Callable[..., object]) -> None:
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, sender: object, event: GameEvent) -> None:
        sig = self._signals.get(event.name)
        if sig:
            sig.send(sender, event=event)
