from __future__ import annotations

from typing import Iterable, Tuple

import numpy as np

from .pieces import Variant


Coordinate = Tuple[int, int]


class GameGrid:
    """Fixed-size board of locked cells.

    ``grid[y, x]`` holds a ``Variant`` code, 0 for empty. Row 0 is the bottom
    of the well; the renderer flips rows to draw top-down.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(Variant.NONE)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def variant_at(self, x: int, y: int) -> Variant:
        return Variant(int(self.grid[y, x]))

    def set_cell(self, x: int, y: int, variant: Variant) -> None:
        self.grid[y, x] = int(variant)

    def can_place(self, cells: Iterable[Coordinate]) -> bool:
        for x, y in cells:
            if not self.is_inside(x, y):
                return False
            if self.grid[y, x] != Variant.NONE:
                return False
        return True

    def lock(self, cells: Iterable[Coordinate], variant: Variant) -> int:
        """Write ``cells`` permanently; cells off the board are dropped.

        Returns the number of cells written.
        """
        written = 0
        for x, y in cells:
            if self.is_inside(x, y):
                self.grid[y, x] = int(variant)
                written += 1
        return written

    def is_row_full(self, y: int) -> bool:
        return bool(np.all(self.grid[y] != Variant.NONE))

    def clear_full_lines(self) -> int:
        """Remove every full row, pulling the rows above it down by one.

        Rows are scanned from the top so several full rows in one lock all
        collapse in a single pass. Returns the number of rows removed.
        """
        cleared = 0
        for y in range(self.height - 1, -1, -1):
            if not self.is_row_full(y):
                continue
            cleared += 1
            self.grid[y : self.height - 1] = self.grid[y + 1 : self.height].copy()
            self.grid[self.height - 1].fill(Variant.NONE)
        return cleared

    def occupied_count(self) -> int:
        return int(np.count_nonzero(self.grid))

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
