"""System-level API endpoints."""

from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from ...core import GAME_HOST_URL, LOBBY_POLL_SECONDS, RACE_POLL_SECONDS
from ...models import EVENT_DAYS, PLAYER_ICONS
from ...services import LiveService, generate_fun_names
from ..deps import get_live_service

router = APIRouter(tags=["system"])


@router.get("/health")
def health() -> Dict[str, bool]:
    """Simple readiness check."""

    return {"ok": True}


@router.get("/config")
def get_config(service: LiveService = Depends(get_live_service)) -> Dict[str, Any]:
    """Expose frontend configuration values."""

    settings = getattr(service.store, "settings", None)
    return {
        "environment": settings.environment if settings else "memory",
        "store_url": settings.base_url if settings else None,
        "game_host_url": GAME_HOST_URL,
        "lobby_poll_seconds": LOBBY_POLL_SECONDS,
        "race_poll_seconds": RACE_POLL_SECONDS,
        "player_icons": PLAYER_ICONS,
        "event_days": EVENT_DAYS,
    }


@router.get("/api/fun-names")
def fun_names(count: int = 5) -> Dict[str, List[str]]:
    """Suggested player names for the check-in screen."""

    return {"names": generate_fun_names(min(max(count, 1), 50))}


__all__ = ["router"]
