"""Per-player progress through the five challenges of a competition."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, List, Optional

from ..core.errors import InvalidInputError
from .base import RemoteRecord
from .registration import LiveRegistration

CHALLENGE_COUNT = 5


def challenge_time_field(challenge_number: int) -> str:
    """Name of the stored field holding the time for ``challenge_number``."""

    if not 1 <= challenge_number <= CHALLENGE_COUNT:
        raise InvalidInputError(
            f"challenge_number must be between 1 and {CHALLENGE_COUNT}, got {challenge_number}"
        )
    return f"challenge_{challenge_number}_time"


class LiveProgress(RemoteRecord):
    record_type: ClassVar[str] = "live-progress"

    competition: str
    registration: str
    current_challenge: int = 1
    challenge_1_time: Optional[float] = None
    challenge_2_time: Optional[float] = None
    challenge_3_time: Optional[float] = None
    challenge_4_time: Optional[float] = None
    challenge_5_time: Optional[float] = None
    total_time: Optional[float] = None
    hints_used: int = 0
    finished: bool = False
    finished_at: Optional[datetime] = None
    rank: Optional[int] = None

    def challenge_times(self) -> List[Optional[float]]:
        return [
            getattr(self, challenge_time_field(number))
            for number in range(1, CHALLENGE_COUNT + 1)
        ]


class LiveProgressWithPlayer(LiveProgress):
    """Progress joined with the registration of the player it belongs to."""

    player: Optional[LiveRegistration] = None


__all__ = [
    "CHALLENGE_COUNT",
    "LiveProgress",
    "LiveProgressWithPlayer",
    "challenge_time_field",
]
