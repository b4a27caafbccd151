"""Translate domain exceptions into HTTP responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..core import (
    ConflictError,
    InvalidInputError,
    NotFoundError,
    PreconditionError,
    QuestError,
    StoreError,
)

log = logging.getLogger("questlive.api")

_STATUS_BY_ERROR = (
    (NotFoundError, 404),
    (ConflictError, 409),
    (PreconditionError, 400),
    (InvalidInputError, 400),
    (StoreError, 502),
)


async def quest_error_handler(request: Request, exc: QuestError) -> JSONResponse:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            break
    else:
        status_code = 500
    if status_code >= 500:
        log.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse({"detail": str(exc)}, status_code=status_code)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(QuestError, quest_error_handler)


__all__ = ["quest_error_handler", "register_error_handlers"]
