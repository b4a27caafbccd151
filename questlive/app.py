"""FastAPI application factory and configuration."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import register_routes
from .core import (
    ALLOWED_CORS_ORIGINS,
    LOG_LEVEL,
    REQUEST_TIMEOUT,
    SENDGRID_API_KEY,
    SENDGRID_FROM_EMAIL,
    SENDGRID_FROM_NAME,
    STORE_BACKEND,
    store_settings_from_env,
)
from .services import LiveService, SendGridMailer
from .store import BubbleStore, DataStore, MemoryStore

log = logging.getLogger("questlive")


def build_store() -> DataStore:
    """Pick the data store backend named by ``STORE_BACKEND``."""

    if STORE_BACKEND == "memory":
        log.info("Using in-memory data store")
        return MemoryStore()
    if STORE_BACKEND != "bubble":
        raise RuntimeError(f"Unknown STORE_BACKEND: {STORE_BACKEND}")
    settings = store_settings_from_env()
    log.info("Using %s data store at %s", settings.environment, settings.base_url)
    return BubbleStore(settings)


def build_mailer() -> SendGridMailer:
    if not SENDGRID_API_KEY:
        log.warning("SENDGRID_API_KEY not set; /api/send-email will fail upstream")
    return SendGridMailer(
        SENDGRID_API_KEY, SENDGRID_FROM_EMAIL, SENDGRID_FROM_NAME, timeout=REQUEST_TIMEOUT
    )


def create_app(
    service: Optional[LiveService] = None, mailer: Optional[SendGridMailer] = None
) -> FastAPI:
    logging.basicConfig(
        level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    log.setLevel(LOG_LEVEL)

    app = FastAPI(title="Quest Live API", version="0.1.0")
    app.state.live_service = service or LiveService(build_store())
    app.state.mailer = mailer or build_mailer()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_CORS_ORIGINS,
        allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    register_routes(app)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("questlive.app:app", host="127.0.0.1", port=3000, reload=True)
