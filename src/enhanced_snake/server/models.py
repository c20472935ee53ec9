"""Pydantic models for API request/response schemas."""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field


class GameStatus(str, enum.Enum):
    """Lifecycle states for a game session."""

    READY = "ready"
    ACTIVE = "active"
    GAME_OVER = "game_over"


class SettingsModel(BaseModel):
    """Cosmetic choices by name."""

    head_mode: str = "normal"
    color: str = "black"
    eyes: str = "normal"
    food: str = "apple"


class CreateGameRequest(BaseModel):
    """Request body for POST /games."""

    settings: SettingsModel = Field(default_factory=SettingsModel)
    tick_rate_ms: int = Field(default=150, ge=10, le=2000)
    hiss_probability: float = Field(default=0.05, ge=0.0, le=1.0)
    seed: int | None = None


class StartRequest(BaseModel):
    """Request body for POST /games/{game_id}/start."""

    token: str


class ResetRequest(BaseModel):
    """Request body for POST /games/{game_id}/reset."""

    token: str
    settings: SettingsModel | None = None


class GameSummary(BaseModel):
    """Compact session info for list endpoints."""

    game_id: str
    status: GameStatus
    score: int
    tick_rate_ms: int
    settings: SettingsModel


class CreateGameResponse(GameSummary):
    """Response for a newly created session; the token authorises control."""

    token: str
