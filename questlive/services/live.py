"""Composition root for the Quest Live workflows."""

from __future__ import annotations

from datetime import datetime
from typing import Callable

from ..core import utcnow
from ..store import DataStore
from .competitions import CompetitionManager
from .locks import KeyedLocks
from .progress import ProgressTracker
from .registrations import RegistrationRepository
from .sessions import SessionRepository


class LiveService:
    """Wires the repositories over one store, clock and lock registry."""

    def __init__(self, store: DataStore, clock: Callable[[], datetime] = utcnow) -> None:
        self.store = store
        self.clock = clock
        self.locks = KeyedLocks()
        self.sessions = SessionRepository(store)
        self.registrations = RegistrationRepository(store, self.sessions, self.locks, clock)
        self.competitions = CompetitionManager(
            store, self.sessions, self.registrations, self.locks, clock
        )
        self.progress = ProgressTracker(store, self.competitions, self.locks, clock)


__all__ = ["LiveService"]
