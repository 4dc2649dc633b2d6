from __future__ import annotations

import uuid
from typing import Callable

from bookingsync.application.ports.session_store import SessionStorePort
from bookingsync.application.use_cases.booking_session import BookingSession


class MemorySessionStore(SessionStorePort):
    """Process-local sessions. Nothing survives a restart."""

    def __init__(self, session_factory: Callable[[str], BookingSession]) -> None:
        self._sessions: dict[str, BookingSession] = {}
        self._session_factory = session_factory

    def create(self) -> BookingSession:
        session_id = uuid.uuid4().hex
        session = self._session_factory(session_id)
        self._sessions[session_id] = session
        return session

    def get(self, session_id: str) -> BookingSession | None:
        return self._sessions.get(session_id)

    def delete(self, session_id: str) -> bool:
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.close()
        return True
