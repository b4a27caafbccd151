"""Record model exports."""

from .base import RemoteRecord
from .catalog import EVENT_DAYS, PLAYER_ICONS, SESSION_TIMES
from .competition import OPEN_STATUSES, CompetitionStatus, LiveCompetition
from .progress import (
    CHALLENGE_COUNT,
    LiveProgress,
    LiveProgressWithPlayer,
    challenge_time_field,
)
from .registration import SOURCE_PRE_REGISTRATION, SOURCE_WALK_IN, LiveRegistration
from .session import LiveSession, parse_day_number

__all__ = [
    "CHALLENGE_COUNT",
    "CompetitionStatus",
    "EVENT_DAYS",
    "LiveCompetition",
    "LiveProgress",
    "LiveProgressWithPlayer",
    "LiveRegistration",
    "LiveSession",
    "OPEN_STATUSES",
    "PLAYER_ICONS",
    "RemoteRecord",
    "SESSION_TIMES",
    "SOURCE_PRE_REGISTRATION",
    "SOURCE_WALK_IN",
    "challenge_time_field",
    "parse_day_number",
]
