"""Core configuration and infrastructure helpers."""

from .config import (
    ADMIN_PASS,
    ADMIN_USER,
    ALLOWED_CORS_ORIGINS,
    FRONTEND_ORIGIN,
    GAME_HOST_URL,
    LOBBY_POLL_SECONDS,
    LOG_LEVEL,
    QUEST_ENV,
    RACE_POLL_SECONDS,
    REQUEST_TIMEOUT,
    SENDGRID_API_KEY,
    SENDGRID_FROM_EMAIL,
    SENDGRID_FROM_NAME,
    STORE_BACKEND,
    StoreSettings,
    store_settings_from_env,
)
from .errors import (
    ConflictError,
    InvalidInputError,
    NotFoundError,
    PreconditionError,
    QuestError,
    StoreError,
)
from .time import isoformat, utcnow

__all__ = [
    "ADMIN_PASS",
    "ADMIN_USER",
    "ALLOWED_CORS_ORIGINS",
    "ConflictError",
    "InvalidInputError",
    "FRONTEND_ORIGIN",
    "GAME_HOST_URL",
    "LOBBY_POLL_SECONDS",
    "LOG_LEVEL",
    "NotFoundError",
    "PreconditionError",
    "QUEST_ENV",
    "QuestError",
    "RACE_POLL_SECONDS",
    "REQUEST_TIMEOUT",
    "SENDGRID_API_KEY",
    "SENDGRID_FROM_EMAIL",
    "SENDGRID_FROM_NAME",
    "STORE_BACKEND",
    "StoreError",
    "StoreSettings",
    "isoformat",
    "store_settings_from_env",
    "utcnow",
]
