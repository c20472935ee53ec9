"""Headless simulation of complete games with a random turning policy."""

from __future__ import annotations

import logging
import time
from collections import Counter
from dataclasses import dataclass, field

import numpy as np

from enhanced_snake.config import GameConfig
from enhanced_snake.cosmetics import HeadMode, Settings
from enhanced_snake.engine import GameEngine
from enhanced_snake.snake import Direction, is_allowed

logger = logging.getLogger(__name__)

_DIRECTIONS = list(Direction)


@dataclass
class SimulationResult:
    """Aggregate statistics over a batch of simulated games."""

    games: int
    total_ticks: int
    scores: list[int] = field(default_factory=list)
    outcomes: Counter = field(default_factory=Counter)
    wall_time_seconds: float = 0.0

    @property
    def mean_score(self) -> float:
        return float(np.mean(self.scores)) if self.scores else 0.0

    @property
    def max_score(self) -> int:
        return max(self.scores, default=0)

    def summary(self) -> str:
        outcomes = ", ".join(
            f"{name}={count}" for name, count in sorted(self.outcomes.items())
        )
        return (
            f"Simulated {self.games} game(s), {self.total_ticks} ticks in "
            f"{self.wall_time_seconds:.2f}s | mean score "
            f"{self.mean_score:.2f}, max score {self.max_score} | {outcomes}"
        )


def choose_direction(
    engine: GameEngine, rng: np.random.Generator, turn_probability: float,
) -> Direction:
    """Keep heading straight or turn to a random non-reversing direction.

    Turns that would leave the grid are avoided when another option exists.
    """
    current = engine.state.direction
    head = engine.state.head
    options = [d for d in _DIRECTIONS if is_allowed(current, d)]
    safe = [d for d in options if engine.grid.in_bounds(*head.moved(d).cell)]
    if current in safe and rng.random() >= turn_probability:
        return current
    pool = safe or options
    return pool[int(rng.integers(len(pool)))]


def simulate_games(
    *,
    games: int = 100,
    seed: int | None = 0,
    head_mode: HeadMode = HeadMode.NORMAL,
    max_ticks: int = 2_000,
    turn_probability: float = 0.2,
) -> SimulationResult:
    """Play *games* complete games headlessly and collect statistics.

    A game stops when the run terminates or after *max_ticks* ticks; runs cut
    short by the tick limit are counted under the ``timeout`` outcome.
    """
    if games < 1:
        raise ValueError("games must be at least 1.")
    policy_rng = np.random.default_rng(seed)
    result = SimulationResult(games=games, total_ticks=0)

    start = time.perf_counter()
    for i in range(games):
        config = GameConfig(
            settings=Settings(head_mode=head_mode),
            seed=None if seed is None else seed + i,
        )
        engine = GameEngine(config)
        for _ in range(max_ticks):
            engine.set_direction(
                choose_direction(engine, policy_rng, turn_probability),
            )
            engine.step()
            if engine.game_over:
                break
        result.total_ticks += engine.state.tick
        result.scores.append(engine.state.score)
        outcome = engine.state.outcome
        result.outcomes[outcome.value if outcome else "timeout"] += 1
    result.wall_time_seconds = time.perf_counter() - start

    logger.info("Simulation finished: %s", result.summary())
    return result
