"""Request-scoped collaborators and admin authentication."""

from __future__ import annotations

import secrets

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from ..core import ADMIN_PASS, ADMIN_USER
from ..services import LiveService, SendGridMailer

security = HTTPBasic()


def get_live_service(request: Request) -> LiveService:
    return request.app.state.live_service


def get_mailer(request: Request) -> SendGridMailer:
    return request.app.state.mailer


def require_admin(credentials: HTTPBasicCredentials = Depends(security)) -> bool:
    ok_user = secrets.compare_digest(credentials.username, ADMIN_USER)
    ok_pass = secrets.compare_digest(credentials.password, ADMIN_PASS)
    if not (ok_user and ok_pass):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Basic"},
        )
    return True


__all__ = ["get_live_service", "get_mailer", "require_admin", "security"]
