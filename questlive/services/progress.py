"""Challenge completion tracking and finish-order ranking."""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Callable, List

from ..core import ConflictError, InvalidInputError, NotFoundError, isoformat, utcnow
from ..models import (
    CHALLENGE_COUNT,
    CompetitionStatus,
    LiveProgress,
    LiveProgressWithPlayer,
    challenge_time_field,
)
from ..store import DataStore, equals
from .competitions import CompetitionManager
from .locks import KeyedLocks
from .race import join_players, results_order, sort_race

log = logging.getLogger("questlive.progress")


class ProgressTracker:
    def __init__(
        self,
        store: DataStore,
        competitions: CompetitionManager,
        locks: KeyedLocks,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.store = store
        self.competitions = competitions
        self.locks = locks
        self.clock = clock

    async def update_progress(
        self,
        competition_id: str,
        registration_id: str,
        challenge_number: int,
        time_seconds: float,
    ) -> LiveProgress:
        """Record one challenge completion for a player.

        Completing the last challenge finishes the player. Rank is the
        number of players already finished plus one, so ranks follow the
        order in which final answers arrive rather than total time.
        """

        if isinstance(challenge_number, bool) or not isinstance(challenge_number, int):
            raise InvalidInputError("challenge_number must be a whole number")
        time_field = challenge_time_field(challenge_number)
        if not math.isfinite(time_seconds) or time_seconds < 0:
            raise InvalidInputError("time_seconds must be a finite, non-negative number")

        async with self.locks.lock("competition", competition_id):
            competition = await self.competitions.get_competition(competition_id)
            if competition.is_finished:
                raise ConflictError("Competition is already finished")

            rows = await self.store.list(
                LiveProgress.record_type,
                [equals("competition", competition_id), equals("registration", registration_id)],
            )
            if not rows:
                raise NotFoundError(
                    f"Progress record not found for registration {registration_id}"
                )
            progress = LiveProgress.from_record(rows[0])
            if progress.finished:
                raise ConflictError("Player has already finished")

            fields = {"current_challenge": challenge_number + 1, time_field: time_seconds}
            finishing = challenge_number >= CHALLENGE_COUNT
            everyone_done = False
            if finishing:
                times = progress.challenge_times()
                times[challenge_number - 1] = time_seconds
                others = [
                    LiveProgress.from_record(row)
                    for row in await self.store.list(
                        LiveProgress.record_type, [equals("competition", competition_id)]
                    )
                    if row.get("_id") != progress.id
                ]
                finished_before = sum(1 for other in others if other.finished)
                fields.update(
                    {
                        "total_time": sum(value or 0 for value in times),
                        "finished": True,
                        "finished_at": isoformat(self.clock()),
                        "rank": finished_before + 1,
                    }
                )
                everyone_done = finished_before == len(others)

            await self.store.update(LiveProgress.record_type, progress.id, fields)

            if finishing:
                log.info(
                    "Registration %s finished competition %s: rank %s, total %ss",
                    registration_id,
                    competition_id,
                    fields["rank"],
                    fields["total_time"],
                )
            if everyone_done:
                await self.competitions.update_competition_status(
                    competition_id, CompetitionStatus.FINISHED
                )

        return LiveProgress.from_record({**rows[0], **fields})

    async def get_competition_progress(self, competition_id: str) -> List[LiveProgress]:
        rows = await self.store.list(
            LiveProgress.record_type, [equals("competition", competition_id)]
        )
        return [LiveProgress.from_record(row) for row in rows]

    async def _joined(self, competition_id: str) -> List[LiveProgressWithPlayer]:
        competition = await self.competitions.get_competition(competition_id)
        progress = await self.get_competition_progress(competition_id)
        registrations = await self.competitions.registrations.list_registrations(
            competition.session
        )
        return join_players(progress, registrations)

    async def race_view(self, competition_id: str) -> List[LiveProgressWithPlayer]:
        """Progress joined with players, leaders first."""

        return sort_race(await self._joined(competition_id))

    async def results(self, competition_id: str) -> List[LiveProgressWithPlayer]:
        return results_order(await self._joined(competition_id))


__all__ = ["ProgressTracker"]
