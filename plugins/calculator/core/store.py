"""In-memory registry of calculator sessions."""

from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable

from .session import CalculatorSession

DEFAULT_SESSION_TTL = timedelta(minutes=30)
DEFAULT_MAX_SESSIONS = 1000


class SessionNotFoundError(KeyError):
    """Raised when a session id is unknown or expired."""


class SessionLimitError(RuntimeError):
    """Raised when the store already holds the maximum number of sessions."""


@dataclass(slots=True)
class SessionRecord:
    session: CalculatorSession
    session_id: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    last_accessed: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def touch(self) -> None:
        self.last_accessed = datetime.now(timezone.utc)


class SessionStore:
    """Thread-safe in-memory session registry with TTL purging."""

    def __init__(
        self,
        *,
        ttl: timedelta = DEFAULT_SESSION_TTL,
        max_sessions: int = DEFAULT_MAX_SESSIONS,
    ) -> None:
        self.ttl = ttl
        self.max_sessions = max_sessions
        self._items: dict[str, SessionRecord] = {}
        self._lock = threading.Lock()

    def _purge_locked(self) -> None:
        now = datetime.now(timezone.utc)
        expired = [
            session_id
            for session_id, record in self._items.items()
            if now - record.last_accessed > self.ttl
        ]
        for session_id in expired:
            self._items.pop(session_id, None)

    def create(self, factory: Callable[[], CalculatorSession]) -> tuple[str, CalculatorSession]:
        session_id = uuid.uuid4().hex
        with self._lock:
            self._purge_locked()
            if len(self._items) >= self.max_sessions:
                raise SessionLimitError("Too many active calculator sessions")
            record = SessionRecord(session=factory(), session_id=session_id)
            self._items[session_id] = record
        return session_id, record.session

    def get(self, session_id: str) -> CalculatorSession:
        with self._lock:
            self._purge_locked()
            try:
                record = self._items[session_id]
            except KeyError as exc:
                raise SessionNotFoundError("Session expired or not found") from exc
            record.touch()
            return record.session

    def delete(self, session_id: str) -> None:
        with self._lock:
            if self._items.pop(session_id, None) is None:
                raise SessionNotFoundError("Session expired or not found")

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


__all__ = [
    "SessionLimitError",
    "SessionNotFoundError",
    "SessionRecord",
    "SessionStore",
]
