"""In-memory session registry, lifecycle management, and async tick loops."""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass, field

from starlette.websockets import WebSocket, WebSocketState

from enhanced_snake.config import GameConfig
from enhanced_snake.cosmetics import Settings
from enhanced_snake.engine import GameEngine
from enhanced_snake.server.models import GameStatus, GameSummary, SettingsModel
from enhanced_snake.snake import Direction

logger = logging.getLogger(__name__)

# Simple rate limit: max sessions created per IP within the window.
_RATE_LIMIT_WINDOW = 60.0  # seconds
_RATE_LIMIT_MAX = 10
_RATE_COMPACT_INTERVAL = 60.0  # seconds between stale-key sweeps
_MAX_IDLE_SESSIONS = 100


@dataclass
class GameSession:
    """All state for one player's game."""

    game_id: str
    token: str
    config: GameConfig
    engine: GameEngine
    status: GameStatus = GameStatus.READY
    sockets: list[WebSocket] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)
    ended_at: float | None = None
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    _task: asyncio.Task | None = field(default=None, repr=False)

    def summary(self) -> GameSummary:
        return GameSummary(
            game_id=self.game_id,
            status=self.status,
            score=self.engine.state.score,
            tick_rate_ms=self.config.tick_rate_ms,
            settings=SettingsModel(**self.engine.settings.to_dict()),
        )


class SessionManager:
    """Central registry managing all game sessions."""

    def __init__(self, max_idle_sessions: int = _MAX_IDLE_SESSIONS) -> None:
        if max_idle_sessions < 0:
            raise ValueError("max_idle_sessions must be >= 0.")
        self._sessions: dict[str, GameSession] = {}
        self._rate_limits: dict[str, list[float]] = {}
        self._last_rate_compact: float = 0.0
        self._max_idle_sessions = max_idle_sessions

    def _check_rate_limit(self, client_ip: str) -> bool:
        """Return True if the client is within rate limits."""
        now = time.monotonic()
        timestamps = [
            t for t in self._rate_limits.get(client_ip, [])
            if now - t < _RATE_LIMIT_WINDOW
        ]
        if timestamps:
            self._rate_limits[client_ip] = timestamps
        else:
            self._rate_limits.pop(client_ip, None)
        self._compact_rate_limits(now)
        return len(timestamps) < _RATE_LIMIT_MAX

    def _compact_rate_limits(self, now: float) -> None:
        """Remove rate-limit entries whose timestamps have all expired."""
        if now - self._last_rate_compact < _RATE_COMPACT_INTERVAL:
            return
        self._last_rate_compact = now
        stale_ips = [
            ip for ip, ts in self._rate_limits.items()
            if all(now - t >= _RATE_LIMIT_WINDOW for t in ts)
        ]
        for ip in stale_ips:
            del self._rate_limits[ip]
        if stale_ips:
            logger.info(
                "Compacted %d stale rate-limit entries.", len(stale_ips),
            )

    def _record_creation(self, client_ip: str) -> None:
        self._rate_limits.setdefault(client_ip, []).append(time.monotonic())

    def create_session(
        self,
        settings: dict | None = None,
        tick_rate_ms: int = 150,
        hiss_probability: float = 0.05,
        seed: int | None = None,
        client_ip: str = "unknown",
    ) -> GameSession:
        """Create a new session in the READY state."""
        if not self._check_rate_limit(client_ip):
            raise ValueError("Rate limit exceeded. Try again later.")

        config = GameConfig(
            tick_rate_ms=tick_rate_ms,
            hiss_probability=hiss_probability,
            settings=Settings.from_dict(settings or {}),
            seed=seed,
        )
        game_id = uuid.uuid4().hex[:12]
        session = GameSession(
            game_id=game_id,
            token=uuid.uuid4().hex,
            config=config,
            engine=GameEngine(config),
        )
        self._sessions[game_id] = session
        self._record_creation(client_ip)
        logger.info("Game %s created.", game_id)
        return session

    def get_session(self, game_id: str) -> GameSession | None:
        return self._sessions.get(game_id)

    def list_sessions(self) -> list[GameSummary]:
        return [s.summary() for s in self._sessions.values()]

    def _require(self, game_id: str, token: str) -> GameSession:
        session = self._sessions.get(game_id)
        if session is None:
            raise KeyError(f"Game {game_id} not found.")
        if token != session.token:
            raise PermissionError("Invalid token for this game.")
        return session

    def start_session(self, game_id: str, token: str) -> None:
        """Start the tick loop of a READY session."""
        session = self._require(game_id, token)
        if session.status != GameStatus.READY:
            raise ValueError("Game is not in ready state.")
        self._launch(session)
        logger.info("Game %s started.", game_id)

    def reset_session(
        self,
        game_id: str,
        token: str,
        settings: Settings | None = None,
    ) -> dict:
        """Restart a finished session, optionally with new settings."""
        session = self._require(game_id, token)
        if session.status != GameStatus.GAME_OVER:
            raise ValueError("Game can only be reset after it is over.")

        state = session.engine.reset(settings)
        session.ended_at = None
        self._launch(session)
        logger.info("Game %s reset.", game_id)
        return state

    def _launch(self, session: GameSession) -> None:
        if session._task is not None and not session._task.done():
            session._task.cancel()
        session.status = GameStatus.ACTIVE
        session._task = asyncio.create_task(self._tick_loop(session))

    async def set_direction(
        self, session: GameSession, direction: Direction,
    ) -> bool:
        """Queue a direction for the session's next tick."""
        async with session.lock:
            if session.status != GameStatus.ACTIVE:
                return False
            return session.engine.set_direction(direction)

    async def _tick_loop(self, session: GameSession) -> None:
        """Run the tick loop, broadcasting state each tick."""
        tick_interval = session.config.tick_rate_ms / 1000.0
        try:
            while session.status == GameStatus.ACTIVE:
                await asyncio.sleep(tick_interval)
                async with session.lock:
                    state = session.engine.step()
                    if session.engine.game_over:
                        self._mark_game_over(session)
                await self._broadcast(session, state)
        except asyncio.CancelledError:
            logger.info("Tick loop cancelled for game %s.", session.game_id)
            raise
        except Exception:
            logger.exception("Tick loop error in game %s.", session.game_id)
            async with session.lock:
                session.engine.abort()
            self._mark_game_over(session)
        if session.status == GameStatus.GAME_OVER:
            self._prune_idle_sessions()

    def _mark_game_over(self, session: GameSession) -> None:
        """Transition a session to game over exactly once per run."""
        if session.status != GameStatus.GAME_OVER:
            session.status = GameStatus.GAME_OVER
            session.ended_at = time.monotonic()

    def _prune_idle_sessions(self) -> None:
        """Bound retained finished sessions to avoid unbounded registry growth."""
        idle = [
            s for s in self._sessions.values()
            if s.status == GameStatus.GAME_OVER and not s.sockets
        ]
        overflow = len(idle) - self._max_idle_sessions
        if overflow <= 0:
            return

        idle.sort(
            key=lambda s: s.ended_at if s.ended_at is not None else s.created_at,
        )
        for stale in idle[:overflow]:
            self._sessions.pop(stale.game_id, None)
        logger.info(
            "Pruned %d idle sessions (retaining up to %d).",
            overflow,
            self._max_idle_sessions,
        )

    async def _broadcast(self, session: GameSession, state: dict) -> None:
        """Send game state to every connected socket of the session."""
        payload = json.dumps(state, separators=(",", ":"))
        dead: list[WebSocket] = []

        # Iterate over a snapshot so disconnect handlers can mutate the list.
        for ws in list(session.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(payload)
            except Exception:
                dead.append(ws)

        for ws in dead:
            if ws in session.sockets:
                session.sockets.remove(ws)

    async def _close_connections(self, session: GameSession) -> None:
        for ws in list(session.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.close(code=1000, reason="Game closed.")
            except Exception:
                logger.warning(
                    "Failed closing socket in game %s.", session.game_id,
                )
        session.sockets.clear()

    async def delete_session(self, game_id: str, token: str) -> None:
        """Stop a session's tick loop, close its sockets and forget it."""
        session = self._require(game_id, token)
        task = session._task
        if task is not None and not task.done():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
        await self._close_connections(session)
        self._sessions.pop(game_id, None)
        logger.info("Game %s deleted.", game_id)

    async def cleanup(self) -> None:
        """Cancel all running tick loops and release rate-limit state."""
        tasks = [
            s._task for s in self._sessions.values()
            if s._task and not s._task.done()
        ]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._rate_limits.clear()
        logger.info("SessionManager cleanup complete.")
