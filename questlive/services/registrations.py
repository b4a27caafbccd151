"""Registration, walk-in and check-in workflows."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, List

from ..core import ConflictError, InvalidInputError, PreconditionError, isoformat, utcnow
from ..models import SOURCE_PRE_REGISTRATION, SOURCE_WALK_IN, LiveRegistration
from ..store import DataStore, equals
from .fun_names import generate_fun_name
from .locks import KeyedLocks
from .sessions import SessionRepository

log = logging.getLogger("questlive.registrations")


class RegistrationRepository:
    def __init__(
        self,
        store: DataStore,
        sessions: SessionRepository,
        locks: KeyedLocks,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.store = store
        self.sessions = sessions
        self.locks = locks
        self.clock = clock

    async def register_for_session(
        self, session_id: str, email: str, name: str, company: str = ""
    ) -> str:
        """Self-service registration; returns the new registration id."""

        return await self._register(session_id, email, name, company, SOURCE_PRE_REGISTRATION)

    async def admin_add_walkin(
        self, session_id: str, email: str, name: str, company: str = ""
    ) -> str:
        """Register an on-site arrival, including into walk-in reserved slots."""

        return await self._register(session_id, email, name, company, SOURCE_WALK_IN)

    async def _register(
        self, session_id: str, email: str, name: str, company: str, source: str
    ) -> str:
        email = (email or "").strip()
        name = (name or "").strip()
        if not email or not name:
            raise InvalidInputError("Email and name are required")

        async with self.locks.lock("session", session_id):
            session = await self.sessions.get_session(session_id)
            if source == SOURCE_PRE_REGISTRATION:
                if not session.is_active:
                    raise PreconditionError("Session is not open for registration")
                if session.is_reserved_for_walkins:
                    raise PreconditionError("Session is reserved for walk-ins")
                if session.available_seats <= 0:
                    raise ConflictError("Session is full")

            registration = LiveRegistration(
                session=session_id,
                email=email,
                name=name,
                company=(company or "").strip(),
                registered_at=self.clock(),
                source=source,
            )
            registration_id = await self.store.create(
                LiveRegistration.record_type, registration.to_fields()
            )
            await self.sessions.release_seat(session_id)

        log.info("Registered %s for session %s (%s)", registration_id, session_id, source)
        return registration_id

    async def check_in_player(
        self, registration_id: str, player_name: str, player_icon: str
    ) -> LiveRegistration:
        """Assign the player's race identity; allowed exactly once.

        Names and icons may repeat within a race. A blank name gets a
        generated one.
        """

        player_icon = (player_icon or "").strip()
        if not player_icon:
            raise InvalidInputError("Player icon is required")

        async with self.locks.lock("registration", registration_id):
            registration = await self.get_registration(registration_id)
            if registration.checked_in:
                raise ConflictError("Player is already checked in")

            now = self.clock()
            fields = {
                "checked_in": True,
                "checked_in_at": isoformat(now),
                "player_name": (player_name or "").strip() or generate_fun_name(),
                "player_icon": player_icon,
            }
            await self.store.update(LiveRegistration.record_type, registration_id, fields)

        log.info("Checked in %s as %s", registration_id, fields["player_name"])
        return registration.model_copy(update={**fields, "checked_in_at": now})

    async def get_registration(self, registration_id: str) -> LiveRegistration:
        row = await self.store.get(LiveRegistration.record_type, registration_id)
        return LiveRegistration.from_record(row)

    async def list_registrations(self, session_id: str) -> List[LiveRegistration]:
        rows = await self.store.list(
            LiveRegistration.record_type, [equals("session", session_id)]
        )
        return [LiveRegistration.from_record(row) for row in rows]

    async def list_user_registrations(self, email: str) -> List[LiveRegistration]:
        rows = await self.store.list(LiveRegistration.record_type, [equals("email", email)])
        return [LiveRegistration.from_record(row) for row in rows]

    async def checked_in_players(self, session_id: str) -> List[LiveRegistration]:
        rows = await self.store.list(
            LiveRegistration.record_type,
            [equals("session", session_id), equals("checked_in", True)],
        )
        return [LiveRegistration.from_record(row) for row in rows]


__all__ = ["RegistrationRepository"]
