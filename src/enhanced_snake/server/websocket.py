"""WebSocket handler for real-time play."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from enhanced_snake.server.session_manager import SessionManager
from enhanced_snake.snake import parse_direction

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_manager(ws: WebSocket) -> SessionManager:
    return ws.app.state.session_manager


@ws_router.websocket("/games/{game_id}/play")
async def play(websocket: WebSocket, game_id: str, token: str = "") -> None:
    """Player WebSocket: send directions, receive game state each tick."""
    manager = _get_manager(websocket)
    session = manager.get_session(game_id)
    if session is None:
        await websocket.close(code=4004, reason="Game not found.")
        return
    if token != session.token:
        await websocket.close(code=4001, reason="Invalid token.")
        return

    await websocket.accept()
    session.sockets.append(websocket)
    logger.info("Player connected to game %s.", game_id)

    # Initial snapshot so the client can draw before the first tick.
    await websocket.send_text(
        json.dumps(session.engine.get_state(), separators=(",", ":")),
    )

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                continue
            if not isinstance(msg, dict):
                continue

            direction_str = msg.get("direction")
            if not isinstance(direction_str, str):
                continue

            direction = parse_direction(direction_str)
            if direction is None:
                continue

            await manager.set_direction(session, direction)
    except WebSocketDisconnect:
        logger.info("Player disconnected from game %s.", game_id)
    finally:
        if websocket in session.sockets:
            session.sockets.remove(websocket)
