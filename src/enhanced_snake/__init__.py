"""Enhanced Snake: single-player tick engine and game server."""

from enhanced_snake.config import GameConfig
from enhanced_snake.cosmetics import (
    EyeStyle,
    FoodKind,
    HeadMode,
    Settings,
    SnakeColor,
)
from enhanced_snake.engine import GameEngine, TickEvents, advance, reset
from enhanced_snake.food import spawn_food
from enhanced_snake.grid import DEFAULT_GRID, Grid
from enhanced_snake.snake import Direction, Segment, is_allowed
from enhanced_snake.state import GameState, Outcome, RunState, TickResult

__all__ = [
    "DEFAULT_GRID",
    "Direction",
    "EyeStyle",
    "FoodKind",
    "GameConfig",
    "GameEngine",
    "GameState",
    "Grid",
    "HeadMode",
    "Outcome",
    "RunState",
    "Segment",
    "Settings",
    "SnakeColor",
    "TickEvents",
    "TickResult",
    "advance",
    "is_allowed",
    "reset",
    "spawn_food",
]
