from __future__ import annotations

from typing import Iterable, Tuple

import numpy as np


Coordinate = Tuple[int, int]

COLS, ROWS = 10, 20


class GameGrid:
    """Fixed ``ROWS x COLS`` board of locked cells.

    The grid uses 0 for empty cells and the locked piece's color identifier
    (its ``TetrominoType`` value) for filled cells. Row 0 is the top.
    """

    width = COLS
    height = ROWS

    def __init__(self) -> None:
        self.grid = np.zeros((ROWS, COLS), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(0)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < COLS and 0 <= y < ROWS

    def collides(self, cells: Iterable[Coordinate]) -> bool:
        # Cells above the top edge only collide with the side walls.
        for x, y in cells:
            if x < 0 or x >= COLS or y >= ROWS:
                return True
            if y >= 0 and self.grid[y, x] != 0:
                return True
        return False

    def lock(self, cells: Iterable[Coordinate], value: int) -> int:
        """Write ``value`` into every on-board cell; return how many were written."""
        written = 0
        for x, y in cells:
            if self.is_inside(x, y):
                self.grid[y, x] = value
                written += 1
        return written

    def is_row_full(self, y: int) -> bool:
        return bool(np.all(self.grid[y] != 0))

    def clear_full_lines(self) -> int:
        full_rows = np.where(np.all(self.grid != 0, axis=1))[0]
        if full_rows.size == 0:
            return 0
        num = int(full_rows.size)
        # Remove full rows and add empty rows at the top
        kept = np.delete(self.grid, full_rows, axis=0)
        new_rows = np.zeros((num, COLS), dtype=np.int8)
        self.grid = np.vstack((new_rows, kept))
        return num

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
