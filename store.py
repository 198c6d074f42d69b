"""In-memory session store.

Each session owns one ``CalculatorEngine``.  The engine is strictly
single-threaded, so commands against one session are serialized with a
per-session lock; different sessions run independently.

The store holds at most ``max_sessions`` engines.  Opening one more
evicts the session that was used least recently.
"""

from __future__ import annotations

import logging
import threading
import uuid
from collections import OrderedDict

from engine import CalculatorEngine
from models import Command, Snapshot
from settings import EngineSettings

logger = logging.getLogger(__name__)

DEFAULT_MAX_SESSIONS = 1024


class SessionNotFoundError(Exception):
    """Raised when a session lookup fails."""

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        super().__init__(f"Session not found: {session_id}")


def _new_id() -> str:
    return uuid.uuid4().hex


class _Entry:
    def __init__(self, engine: CalculatorEngine) -> None:
        self.engine = engine
        self.lock = threading.Lock()


class SessionStore:
    """In-memory registry of calculator sessions."""

    def __init__(
        self,
        default_settings: EngineSettings | None = None,
        max_sessions: int = DEFAULT_MAX_SESSIONS,
    ) -> None:
        if max_sessions < 1:
            raise ValueError(f"max_sessions must be positive, got {max_sessions}")
        self.default_settings = default_settings or EngineSettings()
        self.max_sessions = max_sessions
        self._sessions: OrderedDict[str, _Entry] = OrderedDict()
        self._lock = threading.Lock()

    def _get(self, session_id: str) -> _Entry:
        with self._lock:
            try:
                entry = self._sessions[session_id]
            except KeyError:
                raise SessionNotFoundError(session_id) from None
            self._sessions.move_to_end(session_id)
            return entry

    def create(self, settings: EngineSettings | None = None) -> tuple[str, Snapshot]:
        """Open a session and return its id with the initial snapshot."""
        engine = CalculatorEngine(settings or self.default_settings)
        session_id = _new_id()
        with self._lock:
            while len(self._sessions) >= self.max_sessions:
                evicted, _ = self._sessions.popitem(last=False)
                logger.info("session %s evicted (limit %d)", evicted, self.max_sessions)
            self._sessions[session_id] = _Entry(engine)
        logger.info("session %s opened", session_id)
        return session_id, engine.snapshot()

    def snapshot(self, session_id: str) -> Snapshot:
        entry = self._get(session_id)
        with entry.lock:
            return entry.engine.snapshot()

    def execute(self, session_id: str, command: Command) -> Snapshot:
        entry = self._get(session_id)
        with entry.lock:
            return entry.engine.execute(command)

    def delete(self, session_id: str) -> None:
        with self._lock:
            if self._sessions.pop(session_id, None) is None:
                raise SessionNotFoundError(session_id)
        logger.info("session %s closed", session_id)

    def count(self) -> int:
        return len(self._sessions)

    def clear(self) -> None:
        """Remove all sessions (useful for testing)."""
        with self._lock:
            self._sessions.clear()
