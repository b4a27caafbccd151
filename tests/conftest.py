from datetime import datetime, timedelta, timezone

import pytest

from questlive.models import LiveSession
from questlive.services import LiveService
from questlive.store import MemoryStore


class FakeClock:
    def __init__(self, start=None):
        self.now = start or datetime(2025, 2, 9, 9, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def service(store, clock):
    return LiveService(store, clock=clock)


@pytest.fixture
def make_session(store):
    async def _make(**overrides):
        fields = {
            "date": "2025-02-09",
            "start_time": "10:00",
            "total_seats": 5,
            "available_seats": 5,
            "challenge_set": "Day1",
        }
        fields.update(overrides)
        return await store.create(LiveSession.record_type, LiveSession(**fields).to_fields())

    return _make


@pytest.fixture
def make_players(service):
    """Register and check in ``count`` walk-ins; returns their registration ids."""

    async def _make(session_id, count, check_in=True):
        ids = []
        for index in range(count):
            registration_id = await service.registrations.admin_add_walkin(
                session_id, f"player{index}@example.com", f"Player {index}", "Acme"
            )
            if check_in:
                await service.registrations.check_in_player(
                    registration_id, f"Racer {index}", "rocket"
                )
            ids.append(registration_id)
        return ids

    return _make
