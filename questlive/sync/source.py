"""What the watchers read from: the service in-process or the HTTP API."""

from __future__ import annotations

from typing import List, Optional, Protocol

from ..models import LiveCompetition, LiveProgress, LiveRegistration
from ..services import LiveService


class RaceSource(Protocol):
    async def get_competition_by_session(self, session_id: str) -> Optional[LiveCompetition]:
        ...

    async def list_registrations(self, session_id: str) -> List[LiveRegistration]:
        ...

    async def get_competition_progress(self, competition_id: str) -> List[LiveProgress]:
        ...


class ServiceSource:
    """Adapts :class:`LiveService` to :class:`RaceSource`."""

    def __init__(self, service: LiveService) -> None:
        self.service = service

    async def get_competition_by_session(self, session_id: str) -> Optional[LiveCompetition]:
        return await self.service.competitions.get_competition_by_session(session_id)

    async def list_registrations(self, session_id: str) -> List[LiveRegistration]:
        return await self.service.registrations.list_registrations(session_id)

    async def get_competition_progress(self, competition_id: str) -> List[LiveProgress]:
        return await self.service.progress.get_competition_progress(competition_id)


__all__ = ["RaceSource", "ServiceSource"]
