"""Directions, segments and the starting snake geometry."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> Direction:
        dx, dy = self.value
        return Direction((-dx, -dy))


# Names accepted from input sources (websocket messages, key names).
_DIRECTION_ALIASES: dict[str, Direction] = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
    "arrowup": Direction.UP,
    "arrowdown": Direction.DOWN,
    "arrowleft": Direction.LEFT,
    "arrowright": Direction.RIGHT,
}


def is_allowed(current: Direction, requested: Direction) -> bool:
    """Return False only when *requested* is a 180° reversal of *current*."""
    return requested is not current.opposite


def parse_direction(name: str) -> Direction | None:
    """Map an input name such as ``"up"`` or ``"ArrowUp"`` to a direction."""
    return _DIRECTION_ALIASES.get(name.strip().lower())


@dataclass(frozen=True)
class Segment:
    """One occupied cell of the snake.

    ``direction`` is the way the segment was facing when it was laid down.
    It only matters for rendering.
    """

    x: int
    y: int
    direction: Direction = Direction.RIGHT

    @property
    def cell(self) -> tuple[int, int]:
        return self.x, self.y

    def moved(self, direction: Direction) -> Segment:
        """Return the neighbouring segment one step towards *direction*."""
        dx, dy = direction.value
        return Segment(self.x + dx, self.y + dy, direction)

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "direction": self.direction.name}


INITIAL_DIRECTION = Direction.RIGHT


def initial_snake() -> tuple[Segment, ...]:
    """Return the fixed two-segment start-of-game snake, head first."""
    return (
        Segment(10, 10, INITIAL_DIRECTION),
        Segment(9, 10, INITIAL_DIRECTION),
    )
