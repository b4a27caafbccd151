"""Aggregate API routers."""

from fastapi import APIRouter

from .competitions import router as competitions_router
from .email import router as email_router
from .registrations import router as registrations_router
from .sessions import router as sessions_router
from .system import router as system_router

ALL_ROUTERS: tuple[APIRouter, ...] = (
    system_router,
    sessions_router,
    registrations_router,
    competitions_router,
    email_router,
)

__all__ = ["ALL_ROUTERS"]
