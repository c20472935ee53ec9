"""Food placement logic."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

import numpy as np

from enhanced_snake.grid import DEFAULT_GRID, Grid

if TYPE_CHECKING:
    from enhanced_snake.snake import Segment

logger = logging.getLogger(__name__)


def spawn_food(
    snake: Iterable[Segment],
    grid: Grid = DEFAULT_GRID,
    rng: np.random.Generator | None = None,
) -> tuple[int, int] | None:
    """Pick a uniformly random cell not covered by *snake*.

    Only empty cells are sampled, so the work is bounded by the grid size.
    Returns ``None`` when the snake covers the whole board.
    """
    rng = rng if rng is not None else np.random.default_rng()
    empty = grid.empty_cells(seg.cell for seg in snake)
    if not empty:
        logger.warning("No empty cells available for food spawning.")
        return None
    return empty[int(rng.integers(len(empty)))]
