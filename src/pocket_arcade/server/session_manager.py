"""In-memory session registry wiring engines to connected clients."""

from __future__ import annotations

import asyncio
import dataclasses
import json
import logging
import time
import uuid
from dataclasses import dataclass, field

from pocket_arcade.commands import Command
from pocket_arcade.config import SequenceConfig, SnakeConfig
from pocket_arcade.cues import cue_for
from pocket_arcade.events import Event
from pocket_arcade.scheduler import AsyncioScheduler
from pocket_arcade.sequence_engine import SequenceGameEngine
from pocket_arcade.server.models import GameKind, SessionStatus, SessionSummary
from pocket_arcade.snake_engine import SnakeGameEngine

logger = logging.getLogger(__name__)

_MAX_CLOSED_SESSIONS = 100

Engine = SequenceGameEngine | SnakeGameEngine
# ``None`` tells a client pump that the session is gone.
ClientQueue = asyncio.Queue[str | None]


@dataclass
class Session:
    """One engine instance plus the clients watching it."""

    session_id: str
    game: GameKind
    engine: Engine
    status: SessionStatus = SessionStatus.ACTIVE
    clients: list[ClientQueue] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)
    closed_at: float | None = None

    def summary(self) -> SessionSummary:
        state = self.engine.get_state()
        return SessionSummary(
            session_id=self.session_id,
            game=self.game,
            status=self.status,
            phase=state["phase"],
            score=state["score"],
            high_score=state["high_score"],
            clients=len(self.clients),
        )


def _encode(message: dict) -> str:
    return json.dumps(message, separators=(",", ":"))


def _override(config, overrides: dict):
    """Apply the non-``None`` overrides that belong to *config*'s fields."""
    names = {f.name for f in dataclasses.fields(config)}
    changes = {k: v for k, v in overrides.items() if k in names and v is not None}
    return dataclasses.replace(config, **changes)


class SessionManager:
    """Central registry managing all sessions.

    Engines run on an :class:`AsyncioScheduler`, so their timers and the
    commands handled here share one event loop and never interleave.
    Each connected client gets its own queue; engine events and state
    updates are pushed to every queue in the order they happen.
    """

    def __init__(self, max_closed_sessions: int = _MAX_CLOSED_SESSIONS) -> None:
        if max_closed_sessions < 0:
            raise ValueError("max_closed_sessions must be >= 0.")
        self._sessions: dict[str, Session] = {}
        self._max_closed_sessions = max_closed_sessions

    def create_session(self, game: GameKind, **overrides) -> Session:
        """Create a session whose engine waits for a start command.

        Raises ``ValueError`` when the overrides form an invalid config.
        """
        scheduler = AsyncioScheduler()
        engine: Engine
        if game == GameKind.SEQUENCE:
            config = _override(SequenceConfig(), overrides)
            engine = SequenceGameEngine(config, scheduler=scheduler)
        else:
            config = _override(SnakeConfig(), overrides)
            engine = SnakeGameEngine(config, scheduler=scheduler)

        session = Session(
            session_id=uuid.uuid4().hex[:12], game=game, engine=engine,
        )
        engine.events.subscribe(
            lambda event: self._fan_out_event(session, event),
        )
        self._sessions[session.session_id] = session
        logger.info("Session %s created (%s).", session.session_id, game.value)
        return session

    def get_session(self, session_id: str) -> Session | None:
        return self._sessions.get(session_id)

    def list_sessions(self) -> list[SessionSummary]:
        """Return summaries of sessions that are still open."""
        return [
            s.summary() for s in self._sessions.values()
            if s.status == SessionStatus.ACTIVE
        ]

    def apply(self, session_id: str, command: Command) -> dict:
        """Run a command against a session's engine and broadcast the result."""
        session = self._require_active(session_id)
        state, _ = session.engine.apply(command)
        self._push(session, _encode({"type": "state", "state": state}))
        return state

    def connect(self, session: Session) -> ClientQueue:
        queue: ClientQueue = asyncio.Queue()
        session.clients.append(queue)
        return queue

    def disconnect(self, session: Session, queue: ClientQueue) -> None:
        if queue in session.clients:
            session.clients.remove(queue)

    def close_session(self, session_id: str) -> None:
        """Tear a session down: cancel its timers and release its clients."""
        session = self._sessions.get(session_id)
        if session is None:
            raise KeyError(f"Session {session_id} not found.")
        self._close(session)
        self._prune_closed_sessions()

    def _close(self, session: Session) -> None:
        if session.status == SessionStatus.CLOSED:
            return
        session.engine.close()
        session.status = SessionStatus.CLOSED
        session.closed_at = time.monotonic()
        self._push(session, None)
        logger.info("Session %s closed.", session.session_id)

    def _require_active(self, session_id: str) -> Session:
        session = self._sessions.get(session_id)
        if session is None:
            raise KeyError(f"Session {session_id} not found.")
        if session.status != SessionStatus.ACTIVE:
            raise ValueError("Session is closed.")
        return session

    def _fan_out_event(self, session: Session, event: Event) -> None:
        cue = cue_for(event)
        self._push(session, _encode({
            "type": "event",
            "event": event.to_dict(),
            "cue": cue.to_dict() if cue else None,
            "state": session.engine.get_state(),
        }))

    @staticmethod
    def _push(session: Session, payload: str | None) -> None:
        for queue in list(session.clients):
            queue.put_nowait(payload)

    def _prune_closed_sessions(self) -> None:
        """Bound retained closed sessions to avoid unbounded registry growth."""
        closed = [
            s for s in self._sessions.values() if s.status == SessionStatus.CLOSED
        ]
        overflow = len(closed) - self._max_closed_sessions
        if overflow <= 0:
            return
        closed.sort(
            key=lambda s: s.closed_at if s.closed_at is not None else s.created_at,
        )
        for stale in closed[:overflow]:
            self._sessions.pop(stale.session_id, None)
        logger.info(
            "Pruned %d closed sessions (retaining up to %d).",
            overflow,
            self._max_closed_sessions,
        )

    async def cleanup(self) -> None:
        """Close every session so no timer outlives the application."""
        for session in list(self._sessions.values()):
            self._close(session)
        # Let client pumps observe the close sentinel.
        await asyncio.sleep(0)
        logger.info("SessionManager cleanup complete.")
