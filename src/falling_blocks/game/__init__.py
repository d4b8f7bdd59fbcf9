"""Game module for Falling Blocks.

Exports the core game engine and supporting classes:
- GameGrid: Fixed 10x20 board, collision checks and line clearing
- Piece: Tetromino piece with clockwise rotation
- TetrominoType: Enum of the seven piece kinds (values double as colors)
- ScoringRules: Score, level and drop-interval tables
- FallingBlocksGame: Timed-drop state machine and player commands
- EventBus and event types: Notifications for UI adapters
"""

from .grid import COLS, ROWS, GameGrid
from .pieces import BASE_SHAPES, PIECE_COLORS, Piece, TetrominoType, rotate_cw
from .rules import ScoringRules
from .events import (
    EVENT_GAME_OVER,
    EVENT_LEVEL_UP,
    EVENT_LINES_CLEARED,
    EventBus,
    GameEvent,
    GameOver,
    LevelUp,
    LinesCleared,
)
from .core import Direction, FallingBlocksGame, GameConfig, GamePhase, GameSnapshot

__all__ = [
    "COLS",
    "ROWS",
    "GameGrid",
    "BASE_SHAPES",
    "PIECE_COLORS",
    "Piece",
    "TetrominoType",
    "rotate_cw",
    "ScoringRules",
    "EVENT_GAME_OVER",
    "EVENT_LEVEL_UP",
    "EVENT_LINES_CLEARED",
    "EventBus",
    "GameEvent",
    "GameOver",
    "LevelUp",
    "LinesCleared",
    "Direction",
    "FallingBlocksGame",
    "GameConfig",
    "GamePhase",
    "GameSnapshot",
]
