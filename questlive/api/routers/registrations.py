"""Registration lookup and check-in endpoints."""

from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from ...models import LiveRegistration
from ...services import LiveService
from ..deps import get_live_service, require_admin

router = APIRouter(prefix="/api/registrations", tags=["registrations"])


@router.get("")
async def list_user_registrations(
    email: str, service: LiveService = Depends(get_live_service)
) -> List[LiveRegistration]:
    return await service.registrations.list_user_registrations(email)


@router.get("/{registration_id}")
async def get_registration(
    registration_id: str, service: LiveService = Depends(get_live_service)
) -> LiveRegistration:
    return await service.registrations.get_registration(registration_id)


@router.post("/{registration_id}/check-in", dependencies=[Depends(require_admin)])
async def check_in(
    registration_id: str,
    body: Dict[str, Any],
    service: LiveService = Depends(get_live_service),
) -> LiveRegistration:
    """Mark a player ready to race with their chosen name and icon."""

    return await service.registrations.check_in_player(
        registration_id,
        player_name=body.get("player_name") or "",
        player_icon=body.get("player_icon") or "",
    )


__all__ = ["router"]
