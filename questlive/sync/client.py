"""HTTP client for the Quest Live API, used by screens and tools."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from ..models import LiveCompetition, LiveProgress, LiveRegistration


class QuestLiveClient:
    def __init__(
        self,
        base_url: str,
        timeout: float = 10,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        async with httpx.AsyncClient(
            base_url=self.base_url, timeout=self.timeout, transport=self._transport
        ) as client:
            response = await client.get(path, params=params or {})
            response.raise_for_status()
            return response.json()

    async def get_competition_by_session(self, session_id: str) -> Optional[LiveCompetition]:
        data = await self._get(f"/api/sessions/{session_id}/competition")
        return LiveCompetition.model_validate(data) if data else None

    async def list_registrations(self, session_id: str) -> List[LiveRegistration]:
        data = await self._get(f"/api/sessions/{session_id}/registrations")
        return [LiveRegistration.model_validate(item) for item in data]

    async def get_competition_progress(self, competition_id: str) -> List[LiveProgress]:
        data = await self._get(f"/api/competitions/{competition_id}/progress")
        return [LiveProgress.model_validate(item) for item in data["progress"]]


__all__ = ["QuestLiveClient"]
