"""One live run of a session's race."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import ClassVar, Optional

from .base import RemoteRecord


class CompetitionStatus(str, Enum):
    WAITING = "waiting"
    COUNTDOWN = "countdown"
    ACTIVE = "active"
    FINISHED = "finished"


# Statuses a lobby or race screen is still interested in.
OPEN_STATUSES = (CompetitionStatus.COUNTDOWN, CompetitionStatus.ACTIVE)


class LiveCompetition(RemoteRecord):
    record_type: ClassVar[str] = "live-competition"

    session: str
    status: CompetitionStatus = CompetitionStatus.COUNTDOWN
    started_at: Optional[datetime] = None
    game_start_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    day_number: int = 1

    @property
    def is_finished(self) -> bool:
        return self.status == CompetitionStatus.FINISHED


__all__ = ["CompetitionStatus", "LiveCompetition", "OPEN_STATUSES"]
