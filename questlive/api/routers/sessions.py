"""Session browsing and registration endpoints."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse

from ...models import LiveRegistration, LiveSession
from ...services import LiveService, session_ics
from ..deps import get_live_service, require_admin

router = APIRouter(prefix="/api/sessions", tags=["sessions"])


def _registrant(body: Dict[str, Any]) -> Dict[str, str]:
    email = (body.get("email") or "").strip()
    name = (body.get("name") or "").strip()
    if not email or not name:
        raise HTTPException(400, "Email and name are required")
    return {"email": email, "name": name, "company": (body.get("company") or "").strip()}


@router.get("")
async def list_sessions(
    date: Optional[str] = None, service: LiveService = Depends(get_live_service)
) -> List[LiveSession]:
    return await service.sessions.list_sessions(date)


@router.get("/available")
async def list_available_sessions(
    date: str, service: LiveService = Depends(get_live_service)
) -> List[LiveSession]:
    """Slots open for self-service registration on a given day."""

    return await service.sessions.list_available_sessions(date)


@router.get("/{session_id}")
async def get_session(
    session_id: str, service: LiveService = Depends(get_live_service)
) -> LiveSession:
    return await service.sessions.get_session(session_id)


@router.get("/{session_id}/next")
async def next_session(
    session_id: str, service: LiveService = Depends(get_live_service)
) -> Dict[str, Optional[LiveSession]]:
    session = await service.sessions.get_session(session_id)
    return {"next": await service.sessions.next_session(session)}


@router.get("/{session_id}/registrations")
async def list_registrations(
    session_id: str, service: LiveService = Depends(get_live_service)
) -> List[LiveRegistration]:
    return await service.registrations.list_registrations(session_id)


@router.post("/{session_id}/register", status_code=201)
async def register(
    session_id: str, body: Dict[str, Any], service: LiveService = Depends(get_live_service)
) -> Dict[str, str]:
    """Self-service registration for a slot."""

    registration_id = await service.registrations.register_for_session(
        session_id, **_registrant(body)
    )
    return {"registration_id": registration_id}


@router.post("/{session_id}/walkins", status_code=201, dependencies=[Depends(require_admin)])
async def add_walkin(
    session_id: str, body: Dict[str, Any], service: LiveService = Depends(get_live_service)
) -> Dict[str, str]:
    """Booth operator adds an on-site arrival."""

    registration_id = await service.registrations.admin_add_walkin(
        session_id, **_registrant(body)
    )
    return {"registration_id": registration_id}


@router.get("/{session_id}/calendar.ics", response_class=PlainTextResponse)
async def session_calendar(
    session_id: str, booth: str = "TBD", service: LiveService = Depends(get_live_service)
) -> PlainTextResponse:
    session = await service.sessions.get_session(session_id)
    return PlainTextResponse(
        session_ics(session, booth),
        media_type="text/calendar; charset=utf-8",
        headers={"Content-Disposition": 'attachment; filename="quest-live.ics"'},
    )


__all__ = ["router"]
