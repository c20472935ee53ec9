"""Grid bounds and occupancy helpers for the snake game."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Grid:
    """Fixed-size playing field addressed by integer ``(x, y)`` cells.

    The origin is the top-left cell. Occupancy masks are NumPy arrays of
    shape ``(height, width)`` indexed as ``mask[y, x]``.
    """

    width: int = 20
    height: int = 20

    def __post_init__(self) -> None:
        if self.width < 2 or self.height < 2:
            raise ValueError("Grid dimensions must be at least 2×2.")

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    def in_bounds(self, x: int, y: int) -> bool:
        """Check whether a coordinate lies within the grid."""
        return 0 <= x < self.width and 0 <= y < self.height

    def occupancy(self, cells: Iterable[tuple[int, int]]) -> np.ndarray:
        """Return a boolean mask with ``True`` for every in-bounds cell given."""
        mask = np.zeros((self.height, self.width), dtype=bool)
        for x, y in cells:
            if self.in_bounds(x, y):
                mask[y, x] = True
        return mask

    def empty_cells(
        self, cells: Iterable[tuple[int, int]],
    ) -> list[tuple[int, int]]:
        """Return every cell not listed in *cells*, in row-major order."""
        ys, xs = np.where(~self.occupancy(cells))
        return list(zip(xs.tolist(), ys.tolist(), strict=True))

    def to_dict(self) -> dict:
        """Serialize grid dimensions to a dictionary."""
        return {"width": self.width, "height": self.height}


DEFAULT_GRID = Grid()
