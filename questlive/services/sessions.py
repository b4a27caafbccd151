"""Session lookups and seat accounting."""

from __future__ import annotations

import logging
from typing import List, Optional

from ..models import LiveSession
from ..store import Constraint, DataStore, equals
from ..store.base import GREATER_THAN

log = logging.getLogger("questlive.sessions")


class SessionRepository:
    def __init__(self, store: DataStore) -> None:
        self.store = store

    async def list_sessions(self, date: Optional[str] = None) -> List[LiveSession]:
        """All sessions, optionally for one calendar date, earliest first."""

        constraints = [equals("date", date)] if date else []
        rows = await self.store.list(LiveSession.record_type, constraints)
        sessions = [LiveSession.from_record(row) for row in rows]
        return sorted(sessions, key=lambda session: session.start_time)

    async def list_available_sessions(self, date: str) -> List[LiveSession]:
        """Sessions open for self-service registration on ``date``.

        Walk-in reserved slots and full slots are never offered.
        """

        constraints = [
            equals("date", date),
            equals("is_active", True),
            equals("is_reserved_for_walkins", False),
            Constraint("available_seats", GREATER_THAN, 0),
        ]
        rows = await self.store.list(LiveSession.record_type, constraints)
        sessions = [
            session
            for session in (LiveSession.from_record(row) for row in rows)
            if session.is_active
            and not session.is_reserved_for_walkins
            and session.available_seats > 0
        ]
        return sorted(sessions, key=lambda session: session.start_time)

    async def get_session(self, session_id: str) -> LiveSession:
        row = await self.store.get(LiveSession.record_type, session_id)
        return LiveSession.from_record(row)

    async def next_session(self, session: LiveSession) -> Optional[LiveSession]:
        """The next active slot later on the same day, if any."""

        for candidate in await self.list_sessions(session.date):
            if candidate.start_time > session.start_time and candidate.is_active:
                return candidate
        return None

    async def release_seat(self, session_id: str) -> LiveSession:
        """Decrement the session's available seats, never below zero.

        Callers hold the session lock so the read and the write are not
        interleaved with another claim in this process.
        """

        session = await self.get_session(session_id)
        remaining = max(0, session.available_seats - 1)
        await self.store.update(
            LiveSession.record_type, session_id, {"available_seats": remaining}
        )
        log.info("Session %s seats %d -> %d", session_id, session.available_seats, remaining)
        return session.model_copy(update={"available_seats": remaining})


__all__ = ["SessionRepository"]
