"""Game session configuration."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path

from enhanced_snake.cosmetics import Settings
from enhanced_snake.grid import Grid
from enhanced_snake.snake import initial_snake

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Configuration for one game session.

    Supports JSON serialization so a setup can be shared or replayed.
    """

    grid_width: int = 20
    grid_height: int = 20
    tick_rate_ms: int = 150
    hiss_probability: float = 0.05
    settings: Settings = field(default_factory=Settings)
    seed: int | None = None

    def __post_init__(self) -> None:
        grid = Grid(self.grid_width, self.grid_height)
        if not all(grid.in_bounds(*seg.cell) for seg in initial_snake()):
            raise ValueError(
                "Grid is too small for the starting snake; "
                "grid_width and grid_height must each be at least 11.",
            )
        if not 10 <= self.tick_rate_ms <= 2000:
            raise ValueError("tick_rate_ms must be between 10 and 2000.")
        if not 0.0 <= self.hiss_probability <= 1.0:
            raise ValueError("hiss_probability must be between 0 and 1.")

    @property
    def grid(self) -> Grid:
        return Grid(self.grid_width, self.grid_height)

    def to_dict(self) -> dict:
        """Serialize to a plain, JSON-compatible dict."""
        return {
            "grid_width": self.grid_width,
            "grid_height": self.grid_height,
            "tick_rate_ms": self.tick_rate_ms,
            "hiss_probability": self.hiss_probability,
            "settings": self.settings.to_dict(),
            "seed": self.seed,
        }

    @classmethod
    def from_dict(cls, raw: dict) -> GameConfig:
        unknown = sorted(set(raw) - {f.name for f in fields(cls)})
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}.")
        data = dict(raw)
        data["settings"] = Settings.from_dict(data.pop("settings", None) or {})
        return cls(**data)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        return cls.from_dict(json.loads(Path(path).read_text()))
