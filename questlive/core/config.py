"""Application settings and environment helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable, List

from dotenv import load_dotenv

load_dotenv(override=False)


def _require_env(name: str) -> str:
    """Return a required environment variable or raise an error."""

    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing required environment variable: {name}")
    return value


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be a number") from exc


def _split_csv(raw: str | None) -> List[str]:
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def _unique(values: Iterable[str]) -> List[str]:
    seen = set()
    ordered: List[str] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            ordered.append(value)
    return ordered


# Remote data store ----------------------------------------------------------
QUEST_ENV = os.getenv("QUEST_ENV", "live").strip().lower()
if QUEST_ENV not in {"live", "test"}:
    raise RuntimeError("QUEST_ENV must be 'live' or 'test'")

BUBBLE_API_URL = os.getenv("BUBBLE_API_URL", "https://quest.fwd.app/api/1.1")
BUBBLE_TEST_API_URL = os.getenv(
    "BUBBLE_TEST_API_URL", "https://quest.fwd.app/version-test/api/1.1"
)
BUBBLE_API_KEY = os.getenv("BUBBLE_API_KEY", "")

# "bubble" talks to the hosted store, "memory" keeps records in-process.
STORE_BACKEND = os.getenv("STORE_BACKEND", "bubble").strip().lower()
REQUEST_TIMEOUT = _env_float("REQUEST_TIMEOUT", 20.0)


# Transactional email --------------------------------------------------------
SENDGRID_API_KEY = os.getenv("SENDGRID_API_KEY", "")
SENDGRID_FROM_EMAIL = os.getenv("SENDGRID_FROM_EMAIL") or "noreply@forwardnetworks.com"
SENDGRID_FROM_NAME = os.getenv("SENDGRID_FROM_NAME") or "Forward Networks Quest"


# Admin authentication -------------------------------------------------------
ADMIN_USER = os.getenv("ADMIN_USER", "admin")
ADMIN_PASS = os.getenv("ADMIN_PASS", "changeme")


# Frontend / CORS ------------------------------------------------------------
_frontend_origins = _split_csv(os.getenv("FRONTEND_ORIGIN"))
_additional_origins = _split_csv(os.getenv("ADDITIONAL_ALLOWED_ORIGINS"))

# The public email function is callable from any origin.
ALLOWED_CORS_ORIGINS = _unique([*_frontend_origins, *_additional_origins]) or ["*"]

FRONTEND_ORIGIN = _frontend_origins[0] if _frontend_origins else ""
GAME_HOST_URL = os.getenv("GAME_HOST_URL", "https://quest.fwd.app")


# Runtime behaviour ----------------------------------------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOBBY_POLL_SECONDS = _env_float("LOBBY_POLL_SECONDS", 1.0)
RACE_POLL_SECONDS = _env_float("RACE_POLL_SECONDS", 1.5)


@dataclass(frozen=True)
class StoreSettings:
    """Connection details for one remote data store environment."""

    environment: str = "live"
    live_url: str = BUBBLE_API_URL
    test_url: str = BUBBLE_TEST_API_URL
    api_key: str = ""
    timeout: float = REQUEST_TIMEOUT

    @property
    def base_url(self) -> str:
        url = self.test_url if self.environment == "test" else self.live_url
        return url.rstrip("/")


def store_settings_from_env(require_key: bool = False) -> StoreSettings:
    """Build store settings from the process environment."""

    api_key = _require_env("BUBBLE_API_KEY") if require_key else BUBBLE_API_KEY
    return StoreSettings(
        environment=QUEST_ENV,
        live_url=BUBBLE_API_URL,
        test_url=BUBBLE_TEST_API_URL,
        api_key=api_key,
        timeout=REQUEST_TIMEOUT,
    )


__all__ = [
    "ADMIN_PASS",
    "ADMIN_USER",
    "ALLOWED_CORS_ORIGINS",
    "BUBBLE_API_KEY",
    "BUBBLE_API_URL",
    "BUBBLE_TEST_API_URL",
    "FRONTEND_ORIGIN",
    "GAME_HOST_URL",
    "LOBBY_POLL_SECONDS",
    "LOG_LEVEL",
    "QUEST_ENV",
    "RACE_POLL_SECONDS",
    "REQUEST_TIMEOUT",
    "SENDGRID_API_KEY",
    "SENDGRID_FROM_EMAIL",
    "SENDGRID_FROM_NAME",
    "STORE_BACKEND",
    "StoreSettings",
    "store_settings_from_env",
]
