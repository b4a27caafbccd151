"""Competition lifecycle: start, status transitions and lookups."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Iterable, List, Optional

from ..core import (
    ConflictError,
    InvalidInputError,
    PreconditionError,
    isoformat,
    utcnow,
)
from ..models import (
    OPEN_STATUSES,
    CompetitionStatus,
    LiveCompetition,
    LiveProgress,
)
from ..store import Constraint, DataStore, equals
from ..store.base import IN
from .locks import KeyedLocks
from .registrations import RegistrationRepository
from .sessions import SessionRepository

log = logging.getLogger("questlive.competitions")

MIN_PLAYERS = 2
GAME_START_OFFSET = timedelta(seconds=5)


def _aware(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _latest(competitions: Iterable[LiveCompetition]) -> Optional[LiveCompetition]:
    epoch = datetime.min.replace(tzinfo=timezone.utc)
    ordered = sorted(
        competitions,
        key=lambda comp: _aware(comp.started_at) if comp.started_at else epoch,
        reverse=True,
    )
    return ordered[0] if ordered else None


class CompetitionManager:
    """Owns every competition status transition.

    ``countdown -> active`` happens here, lazily, the first time a
    competition is read after its ``game_start_at``; ``active -> finished``
    happens when the last player finishes or an operator closes the race.
    """

    def __init__(
        self,
        store: DataStore,
        sessions: SessionRepository,
        registrations: RegistrationRepository,
        locks: KeyedLocks,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.store = store
        self.sessions = sessions
        self.registrations = registrations
        self.locks = locks
        self.clock = clock

    async def start_competition(self, session_id: str) -> str:
        """Create a competition in countdown and seed one progress per player."""

        async with self.locks.lock("session", session_id):
            session = await self.sessions.get_session(session_id)
            players = await self.registrations.checked_in_players(session_id)
            if len(players) < MIN_PLAYERS:
                raise PreconditionError(
                    f"Need at least {MIN_PLAYERS} players checked in to start"
                )

            rows = await self.store.list(
                LiveCompetition.record_type, [equals("session", session_id)]
            )
            if any(row.get("status") != CompetitionStatus.FINISHED.value for row in rows):
                raise ConflictError("Session already has a competition in progress")

            now = self.clock()
            competition = LiveCompetition(
                session=session_id,
                status=CompetitionStatus.COUNTDOWN,
                started_at=now,
                game_start_at=now + GAME_START_OFFSET,
                day_number=session.day_number,
            )
            competition_id = await self.store.create(
                LiveCompetition.record_type, competition.to_fields()
            )

            for player in players:
                progress = LiveProgress(competition=competition_id, registration=player.id)
                await self.store.create(LiveProgress.record_type, progress.to_fields())

        log.info(
            "Started competition %s for session %s with %d players (day %d)",
            competition_id,
            session_id,
            len(players),
            session.day_number,
        )
        return competition_id

    async def update_competition_status(
        self, competition_id: str, status: CompetitionStatus | str
    ) -> None:
        """Write a status; a finished competition can only be finished again."""

        try:
            status = CompetitionStatus(status)
        except ValueError as exc:
            raise InvalidInputError(f"Unknown competition status: {status}") from exc

        async with self.locks.lock("competition-status", competition_id):
            row = await self.store.get(LiveCompetition.record_type, competition_id)
            if (
                row.get("status") == CompetitionStatus.FINISHED.value
                and status != CompetitionStatus.FINISHED
            ):
                raise ConflictError("Competition is already finished")
            await self._write_status(competition_id, status)

    async def _write_status(self, competition_id: str, status: CompetitionStatus) -> None:
        fields = {"status": status.value}
        if status == CompetitionStatus.FINISHED:
            fields["finished_at"] = isoformat(self.clock())
        await self.store.update(LiveCompetition.record_type, competition_id, fields)
        log.info("Competition %s -> %s", competition_id, status.value)

    def _countdown_elapsed(self, competition: LiveCompetition) -> bool:
        return (
            competition.status == CompetitionStatus.COUNTDOWN
            and competition.game_start_at is not None
            and self.clock() >= _aware(competition.game_start_at)
        )

    async def advance(self, competition: LiveCompetition) -> LiveCompetition:
        """Persist ``countdown -> active`` once the game start has passed.

        The stored status is re-read under the competition's status lock so
        a stale read never overwrites a later transition.
        """

        if not self._countdown_elapsed(competition):
            return competition

        async with self.locks.lock("competition-status", competition.id):
            row = await self.store.get(LiveCompetition.record_type, competition.id)
            current = LiveCompetition.from_record(row)
            if not self._countdown_elapsed(current):
                return current
            await self._write_status(competition.id, CompetitionStatus.ACTIVE)
        return current.model_copy(update={"status": CompetitionStatus.ACTIVE})

    async def get_competition(self, competition_id: str) -> LiveCompetition:
        row = await self.store.get(LiveCompetition.record_type, competition_id)
        return await self.advance(LiveCompetition.from_record(row))

    async def get_active_competition(self) -> Optional[LiveCompetition]:
        rows = await self.store.list(
            LiveCompetition.record_type,
            [Constraint("status", IN, [status.value for status in OPEN_STATUSES])],
        )
        competition = _latest(LiveCompetition.from_record(row) for row in rows)
        if competition is None:
            return None
        competition = await self.advance(competition)
        return None if competition.is_finished else competition

    async def get_competition_by_session(self, session_id: str) -> Optional[LiveCompetition]:
        """The session's most recent competition, if one was ever started."""

        rows = await self.store.list(
            LiveCompetition.record_type, [equals("session", session_id)]
        )
        competition = _latest(LiveCompetition.from_record(row) for row in rows)
        return await self.advance(competition) if competition else None

    async def list_competitions(self, session_id: str) -> List[LiveCompetition]:
        rows = await self.store.list(
            LiveCompetition.record_type, [equals("session", session_id)]
        )
        return [LiveCompetition.from_record(row) for row in rows]


__all__ = ["CompetitionManager", "GAME_START_OFFSET", "MIN_PLAYERS"]
