"""Immutable game state values produced by the tick engine."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import NamedTuple

from enhanced_snake.snake import INITIAL_DIRECTION, Direction, Segment


class RunState(enum.Enum):
    RUNNING = "running"
    TERMINATED = "terminated"


class Outcome(enum.Enum):
    """Why a run terminated."""

    WALL = "wall"
    SELF = "self"
    BOARD_FULL = "board_full"


@dataclass(frozen=True)
class GameState:
    """Snapshot of one game after a tick.

    ``snake`` is ordered head first. ``direction`` is the heading applied on
    the last tick and is what reversal requests are checked against.
    """

    snake: tuple[Segment, ...]
    food: tuple[int, int] | None
    score: int = 0
    direction: Direction = INITIAL_DIRECTION
    run_state: RunState = RunState.RUNNING
    outcome: Outcome | None = None
    tick: int = 0

    @property
    def head(self) -> Segment:
        return self.snake[0]

    @property
    def length(self) -> int:
        return len(self.snake)

    @property
    def running(self) -> bool:
        return self.run_state is RunState.RUNNING

    def occupies(self, x: int, y: int) -> bool:
        """Check whether the snake covers a given cell."""
        return any(seg.x == x and seg.y == y for seg in self.snake)

    def to_dict(self) -> dict:
        """Serialize the state to a JSON-compatible dictionary."""
        return {
            "tick": self.tick,
            "score": self.score,
            "run_state": self.run_state.value,
            "game_over": not self.running,
            "outcome": self.outcome.value if self.outcome else None,
            "direction": self.direction.name,
            "snake": [seg.to_dict() for seg in self.snake],
            "food": list(self.food) if self.food is not None else None,
        }


class TickResult(NamedTuple):
    """Outcome of a single :func:`~enhanced_snake.engine.advance` call."""

    state: GameState
    ate_food: bool
