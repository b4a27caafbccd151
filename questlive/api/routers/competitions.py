"""Competition lifecycle and race progress endpoints."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException

from ...models import LiveCompetition, LiveProgress, LiveProgressWithPlayer
from ...services import LiveService, race_complete
from ..deps import get_live_service, require_admin

router = APIRouter(tags=["competitions"])


def _whole_number(value: Any) -> int:
    """Accept ``3``, ``3.0`` or ``"3"``; reject ``2.7``, ``"2.7"`` and booleans."""

    if isinstance(value, bool):
        raise ValueError("booleans are not challenge numbers")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{value} is not a whole number")
        return int(value)
    return int(value)


@router.post(
    "/api/sessions/{session_id}/competition",
    status_code=201,
    dependencies=[Depends(require_admin)],
)
async def start_competition(
    session_id: str, service: LiveService = Depends(get_live_service)
) -> Dict[str, str]:
    """Start the race for a session once enough players are checked in."""

    competition_id = await service.competitions.start_competition(session_id)
    return {"competition_id": competition_id}


@router.get("/api/sessions/{session_id}/competition")
async def competition_for_session(
    session_id: str, service: LiveService = Depends(get_live_service)
) -> Optional[LiveCompetition]:
    return await service.competitions.get_competition_by_session(session_id)


@router.get("/api/competitions/active")
async def active_competition(
    service: LiveService = Depends(get_live_service),
) -> Optional[LiveCompetition]:
    return await service.competitions.get_active_competition()


@router.get("/api/competitions/{competition_id}")
async def get_competition(
    competition_id: str, service: LiveService = Depends(get_live_service)
) -> LiveCompetition:
    return await service.competitions.get_competition(competition_id)


@router.patch("/api/competitions/{competition_id}", dependencies=[Depends(require_admin)])
async def update_competition(
    competition_id: str,
    body: Dict[str, Any],
    service: LiveService = Depends(get_live_service),
) -> LiveCompetition:
    status = body.get("status")
    if not status:
        raise HTTPException(400, "status required")
    await service.competitions.get_competition(competition_id)
    await service.competitions.update_competition_status(competition_id, status)
    return await service.competitions.get_competition(competition_id)


@router.get("/api/competitions/{competition_id}/progress")
async def race_progress(
    competition_id: str, service: LiveService = Depends(get_live_service)
) -> Dict[str, Any]:
    """Live race view: progress joined with players, leaders first."""

    competition = await service.competitions.get_competition(competition_id)
    entries = await service.progress.race_view(competition_id)
    return {
        "competition": competition,
        "progress": entries,
        "finished_count": sum(1 for entry in entries if entry.finished),
        "complete": race_complete(competition, entries),
    }


@router.post("/api/competitions/{competition_id}/progress")
async def record_progress(
    competition_id: str,
    body: Dict[str, Any],
    service: LiveService = Depends(get_live_service),
) -> LiveProgress:
    """Record a challenge completion reported by the game host."""

    registration_id = body.get("registration_id")
    if not registration_id:
        raise HTTPException(400, "registration_id required")
    try:
        challenge_number = _whole_number(body["challenge_number"])
        time_seconds = float(body["time_seconds"])
    except (KeyError, TypeError, ValueError):
        raise HTTPException(400, "challenge_number and time_seconds must be numbers")

    return await service.progress.update_progress(
        competition_id, registration_id, challenge_number, time_seconds
    )


@router.get("/api/competitions/{competition_id}/results")
async def results(
    competition_id: str, service: LiveService = Depends(get_live_service)
) -> List[LiveProgressWithPlayer]:
    return await service.progress.results(competition_id)


__all__ = ["router"]
