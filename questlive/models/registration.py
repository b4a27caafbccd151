"""A person's claim on a session."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional

from .base import RemoteRecord

SOURCE_PRE_REGISTRATION = "pre-registration"
SOURCE_WALK_IN = "walk-in"


class LiveRegistration(RemoteRecord):
    record_type: ClassVar[str] = "live-registration"

    session: str
    email: str
    name: str
    company: str = ""
    registered_at: Optional[datetime] = None
    source: str = SOURCE_PRE_REGISTRATION
    checked_in: bool = False
    checked_in_at: Optional[datetime] = None
    player_name: Optional[str] = None
    player_icon: Optional[str] = None


__all__ = ["LiveRegistration", "SOURCE_PRE_REGISTRATION", "SOURCE_WALK_IN"]
