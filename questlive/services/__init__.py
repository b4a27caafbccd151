"""Service layer helpers."""

from .competitions import GAME_START_OFFSET, MIN_PLAYERS, CompetitionManager
from .email import EmailDeliveryError, SendGridMailer, missing_fields, render_email
from .fun_names import generate_fun_name, generate_fun_names
from .ics import google_calendar_url, session_ics
from .live import LiveService
from .locks import KeyedLocks
from .progress import ProgressTracker
from .race import join_players, race_complete, race_sort_key, results_order, sort_race
from .registrations import RegistrationRepository
from .sessions import SessionRepository

__all__ = [
    "CompetitionManager",
    "EmailDeliveryError",
    "GAME_START_OFFSET",
    "KeyedLocks",
    "LiveService",
    "MIN_PLAYERS",
    "ProgressTracker",
    "RegistrationRepository",
    "SendGridMailer",
    "SessionRepository",
    "generate_fun_name",
    "generate_fun_names",
    "google_calendar_url",
    "join_players",
    "missing_fields",
    "race_complete",
    "race_sort_key",
    "render_email",
    "results_order",
    "session_ics",
    "sort_race",
]
