from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    J = 2
    L = 3
    O = 4
    S = 5
    T = 6
    Z = 7


Shape = np.ndarray


def _frozen(rows: List[List[int]]) -> Shape:
    arr = np.array(rows, dtype=np.bool_)
    arr.setflags(write=False)
    return arr


BASE_SHAPES: Dict[TetrominoType, Shape] = {
    TetrominoType.I: _frozen([[1, 1, 1, 1]]),
    TetrominoType.J: _frozen([[1, 0, 0], [1, 1, 1]]),
    TetrominoType.L: _frozen([[0, 0, 1], [1, 1, 1]]),
    TetrominoType.O: _frozen([[1, 1], [1, 1]]),
    TetrominoType.S: _frozen([[0, 1, 1], [1, 1, 0]]),
    TetrominoType.T: _frozen([[0, 1, 0], [1, 1, 1]]),
    TetrominoType.Z: _frozen([[1, 1, 0], [0, 1, 1]]),
}

# Color names per kind; the kind's integer value is what the board stores.
PIECE_COLORS: Dict[TetrominoType, str] = {
    TetrominoType.I: "cyan",
    TetrominoType.J: "blue",
    TetrominoType.L: "orange",
    TetrominoType.O: "yellow",
    TetrominoType.S: "green",
    TetrominoType.T: "purple",
    TetrominoType.Z: "red",
}


def rotate_cw(shape: Shape) -> Shape:
    """Rotate a shape matrix clockwise about its bounding box.

    Row ``r`` of the result is column ``r`` of the input read bottom-to-top.
    """
    rotated = np.rot90(shape, 1, axes=(1, 0)).copy()
    rotated.setflags(write=False)
    return rotated


@dataclass(frozen=True, eq=False)
class Piece:
    kind: TetrominoType
    shape: Shape
    x: int = 0
    y: int = 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Piece):
            return NotImplemented
        return (
            self.kind == other.kind
            and self.x == other.x
            and self.y == other.y
            and np.array_equal(self.shape, other.shape)
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.x, self.y, self.shape.shape, self.shape.tobytes()))

    @classmethod
    def new(cls, kind: TetrominoType) -> "Piece":
        return cls(kind=TetrominoType(kind), shape=BASE_SHAPES[TetrominoType(kind)])

    @property
    def color(self) -> int:
        return int(self.kind)

    @property
    def color_name(self) -> str:
        return PIECE_COLORS[self.kind]

    @property
    def width(self) -> int:
        return int(self.shape.shape[1])

    @property
    def height(self) -> int:
        return int(self.shape.shape[0])

    def at(self, x: int, y: int) -> "Piece":
        return Piece(self.kind, self.shape, int(x), int(y))

    def moved(self, dx: int, dy: int) -> "Piece":
        return Piece(self.kind, self.shape, self.x + dx, self.y + dy)

    def rotated(self) -> "Piece":
        return Piece(self.kind, rotate_cw(self.shape), self.x, self.y)

    def cells(self) -> List[Tuple[int, int]]:
        """Board coordinates ``(x, y)`` of every occupied cell."""
        ys, xs = np.nonzero(self.shape)
        return [(self.x + int(dx), self.y + int(dy)) for dy, dx in zip(ys, xs)]
