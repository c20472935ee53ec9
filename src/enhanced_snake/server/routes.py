"""REST API route handlers for game session lifecycle management."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from enhanced_snake.cosmetics import Settings, catalog
from enhanced_snake.server.models import (
    CreateGameRequest,
    CreateGameResponse,
    GameSummary,
    ResetRequest,
    StartRequest,
)
from enhanced_snake.server.session_manager import SessionManager

router = APIRouter(prefix="/games", tags=["games"])


def _get_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


@router.post("", status_code=201)
async def create_game(
    body: CreateGameRequest, request: Request,
) -> CreateGameResponse:
    """Create a new single-player session."""
    manager = _get_manager(request)
    client_ip = request.client.host if request.client else "unknown"
    try:
        session = manager.create_session(
            settings=body.settings.model_dump(),
            tick_rate_ms=body.tick_rate_ms,
            hiss_probability=body.hiss_probability,
            seed=body.seed,
            client_ip=client_ip,
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return CreateGameResponse(
        **session.summary().model_dump(), token=session.token,
    )


@router.get("")
async def list_games(request: Request) -> list[GameSummary]:
    """List all known sessions."""
    return _get_manager(request).list_sessions()


@router.get("/catalog")
async def get_catalog() -> dict[str, list[str]]:
    """List every cosmetic choice offered by the settings panel."""
    return catalog()


@router.get("/{game_id}")
async def get_game(game_id: str, request: Request) -> dict:
    """Get session metadata and the current game state."""
    session = _get_manager(request).get_session(game_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Game not found.")
    return {
        "game_id": session.game_id,
        "status": session.status.value,
        "tick_rate_ms": session.config.tick_rate_ms,
        "connected": len(session.sockets),
        "state": session.engine.get_state(),
    }


@router.post("/{game_id}/start", status_code=200)
async def start_game(
    game_id: str, body: StartRequest, request: Request,
) -> dict:
    """Start ticking a ready session."""
    manager = _get_manager(request)
    try:
        manager.start_session(game_id, body.token)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except PermissionError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return {"status": "started", "game_id": game_id}


@router.post("/{game_id}/reset", status_code=200)
async def reset_game(
    game_id: str, body: ResetRequest, request: Request,
) -> dict:
    """Play again after game over, optionally with new cosmetics."""
    manager = _get_manager(request)
    settings = None
    if body.settings is not None:
        try:
            settings = Settings.from_dict(body.settings.model_dump())
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
    try:
        state = manager.reset_session(game_id, body.token, settings)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except PermissionError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return {"status": "reset", "game_id": game_id, "state": state}


@router.delete("/{game_id}", status_code=200)
async def delete_game(game_id: str, token: str, request: Request) -> dict:
    """End a session and release its resources."""
    manager = _get_manager(request)
    try:
        await manager.delete_session(game_id, token)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except PermissionError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc
    return {"status": "deleted", "game_id": game_id}
