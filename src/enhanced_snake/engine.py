"""Tick engine: pure state transitions plus the single-player session."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, replace

import numpy as np

from enhanced_snake.config import GameConfig
from enhanced_snake.cosmetics import HeadMode, Settings
from enhanced_snake.food import spawn_food
from enhanced_snake.grid import DEFAULT_GRID, Grid
from enhanced_snake.snake import (
    INITIAL_DIRECTION,
    Direction,
    initial_snake,
    is_allowed,
)
from enhanced_snake.state import GameState, Outcome, RunState, TickResult

logger = logging.getLogger(__name__)

__all__ = ["GameEngine", "TickEvents", "advance", "reset", "spawn_food"]


def reset(
    grid: Grid = DEFAULT_GRID,
    rng: np.random.Generator | None = None,
) -> GameState:
    """Return the start-of-game state with a freshly spawned food cell."""
    snake = initial_snake()
    return GameState(
        snake=snake,
        food=spawn_food(snake, grid, rng),
        score=0,
        direction=INITIAL_DIRECTION,
        run_state=RunState.RUNNING,
    )


def advance(
    state: GameState,
    direction: Direction,
    grid: Grid = DEFAULT_GRID,
    *,
    head_mode: HeadMode = HeadMode.NORMAL,
    rng: np.random.Generator | None = None,
) -> TickResult:
    """Advance *state* by one tick in *direction*.

    *direction* must already have passed :func:`is_allowed`. A collision
    terminates the run and keeps the previous snake; a terminated state is
    returned unchanged.
    """
    if not state.running:
        return TickResult(state, False)

    new_head = state.head.moved(direction)
    body = deque(state.snake)
    body.appendleft(new_head)
    tail = body.pop()

    # --- boundary check ---
    if not grid.in_bounds(new_head.x, new_head.y):
        return TickResult(_terminate(state, Outcome.WALL), False)

    # --- self-collision check ---
    # A normal snake collides with its whole pre-move body, tail included.
    # A double-headed snake has already let go of its tail.
    if head_mode is HeadMode.DOUBLE_HEAD:
        others = list(body)[1:]
    else:
        others = list(state.snake)
    if any(seg.cell == new_head.cell for seg in others):
        return TickResult(_terminate(state, Outcome.SELF), False)

    # --- food ---
    ate = new_head.cell == state.food
    food = state.food
    score = state.score
    run_state = RunState.RUNNING
    outcome = None
    if ate:
        # Grow by keeping a copy of the pre-move tail at the back.
        body.append(tail)
        score += 1
        food = spawn_food(body, grid, rng)
        if food is None:
            run_state = RunState.TERMINATED
            outcome = Outcome.BOARD_FULL
            logger.info(
                "Board full at tick %d with score %d.", state.tick + 1, score,
            )

    next_state = replace(
        state,
        snake=tuple(body),
        food=food,
        score=score,
        direction=direction,
        run_state=run_state,
        outcome=outcome,
        tick=state.tick + 1,
    )
    return TickResult(next_state, ate)


def _terminate(state: GameState, outcome: Outcome) -> GameState:
    """End the run without applying the attempted move."""
    return replace(
        state,
        run_state=RunState.TERMINATED,
        outcome=outcome,
        tick=state.tick + 1,
    )


@dataclass(frozen=True)
class TickEvents:
    """Side-channel signals of the last tick for audio and animation."""

    ate: bool = False
    hiss: bool = False

    def to_dict(self) -> dict:
        return {"ate": self.ate, "hiss": self.hiss}


class GameEngine:
    """Single-player game session driven one tick at a time.

    Holds the latest :class:`GameState`, a one-slot pending direction and the
    cosmetic settings. Food placement and cosmetic randomness use separate
    generators derived from the configured seed, so hiss draws never shift
    where food appears.
    """

    def __init__(self, config: GameConfig | None = None) -> None:
        self.config = config if config is not None else GameConfig()
        self.grid = self.config.grid
        self.settings = self.config.settings

        food_seq, cosmetic_seq = np.random.SeedSequence(self.config.seed).spawn(2)
        self.rng = np.random.default_rng(food_seq)
        self.cosmetic_rng = np.random.default_rng(cosmetic_seq)

        self.state = reset(self.grid, self.rng)
        self.events = TickEvents()
        self._pending_direction: Direction | None = None

    @property
    def game_over(self) -> bool:
        return not self.state.running

    def set_direction(self, direction: Direction) -> bool:
        """Buffer a direction for the next tick; the latest valid one wins.

        Reversals of the current heading are ignored. Returns whether the
        request was accepted.
        """
        if self.game_over:
            return False
        if not is_allowed(self.state.direction, direction):
            return False
        self._pending_direction = direction
        return True

    def step(self) -> dict:
        """Advance the game by one tick and return the full state dict."""
        if self.game_over:
            self.events = TickEvents()
            return self.get_state()

        direction = self._pending_direction or self.state.direction
        self._pending_direction = None

        self.state, ate = advance(
            self.state,
            direction,
            self.grid,
            head_mode=self.settings.head_mode,
            rng=self.rng,
        )
        hiss = (
            self.state.running
            and self.cosmetic_rng.random() < self.config.hiss_probability
        )
        self.events = TickEvents(ate=ate, hiss=bool(hiss))

        if self.game_over:
            logger.info(
                "Run ended (%s) at tick %d with score %d.",
                self.state.outcome.value,
                self.state.tick,
                self.state.score,
            )
        return self.get_state()

    def abort(self) -> None:
        """End the current run without a collision outcome."""
        if self.game_over:
            return
        self.state = replace(self.state, run_state=RunState.TERMINATED)
        self._pending_direction = None
        self.events = TickEvents()
        logger.warning("Run aborted at tick %d.", self.state.tick)

    def reset(self, settings: Settings | None = None) -> dict:
        """Start a new game, optionally with new cosmetic settings.

        Settings can only change once the current run is over.
        """
        if settings is not None and settings != self.settings:
            if not self.game_over:
                raise ValueError("Settings can only change after the game is over.")
            self.settings = settings

        self.state = reset(self.grid, self.rng)
        self.events = TickEvents()
        self._pending_direction = None
        logger.info("Game reset with settings %s.", self.settings.to_dict())
        return self.get_state()

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        result = self.state.to_dict()
        result["grid"] = self.grid.to_dict()
        result["settings"] = self.settings.to_dict()
        result["render"] = {
            "eyed_segments": self.settings.eyed_segments(self.state.length),
            "segment_colors": [
                self.settings.color.segment_color(i)
                for i in range(self.state.length)
            ],
            "food_color": self.settings.food.color,
        }
        result["events"] = self.events.to_dict()
        return result
