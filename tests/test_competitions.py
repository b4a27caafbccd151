import asyncio

import pytest

from questlive.core import ConflictError, InvalidInputError, NotFoundError, PreconditionError
from questlive.models import CompetitionStatus
from questlive.services import GAME_START_OFFSET


async def test_start_needs_two_checked_in_players(service, make_session, make_players):
    session_id = await make_session()
    await make_players(session_id, 1)
    await service.registrations.admin_add_walkin(session_id, "late@example.com", "Late")

    with pytest.raises(PreconditionError):
        await service.competitions.start_competition(session_id)
    assert await service.competitions.get_competition_by_session(session_id) is None


async def test_start_creates_countdown_and_progress(service, make_session, make_players, clock):
    session_id = await make_session(challenge_set="Day3")
    players = await make_players(session_id, 2)
    await service.registrations.admin_add_walkin(session_id, "idle@example.com", "Idle")

    competition_id = await service.competitions.start_competition(session_id)

    competition = await service.competitions.get_competition(competition_id)
    assert competition.status is CompetitionStatus.COUNTDOWN
    assert competition.session == session_id
    assert competition.started_at == clock.now
    assert competition.game_start_at == clock.now + GAME_START_OFFSET
    assert competition.day_number == 3

    progress = await service.progress.get_competition_progress(competition_id)
    assert sorted(entry.registration for entry in progress) == sorted(players)
    assert all(entry.current_challenge == 1 for entry in progress)
    assert all(not entry.finished and entry.rank is None for entry in progress)


async def test_second_open_competition_rejected(service, make_session, make_players):
    session_id = await make_session()
    await make_players(session_id, 2)
    competition_id = await service.competitions.start_competition(session_id)

    with pytest.raises(ConflictError):
        await service.competitions.start_competition(session_id)

    await service.competitions.update_competition_status(competition_id, "finished")
    rematch = await service.competitions.start_competition(session_id)
    assert rematch != competition_id


async def test_countdown_becomes_active_after_game_start(service, make_session, make_players, clock):
    session_id = await make_session()
    await make_players(session_id, 2)
    competition_id = await service.competitions.start_competition(session_id)

    clock.advance(4.9)
    assert (await service.competitions.get_competition(competition_id)).status is (
        CompetitionStatus.COUNTDOWN
    )

    clock.advance(0.1)
    assert (await service.competitions.get_competition(competition_id)).status is (
        CompetitionStatus.ACTIVE
    )
    stored = await service.store.get("live-competition", competition_id)
    assert stored["status"] == "active"

    active = await service.competitions.get_active_competition()
    assert active.id == competition_id


async def test_latest_competition_for_session(service, make_session, make_players, clock):
    session_id = await make_session()
    await make_players(session_id, 2)
    first = await service.competitions.start_competition(session_id)
    await service.competitions.update_competition_status(first, CompetitionStatus.FINISHED)

    clock.advance(60)
    second = await service.competitions.start_competition(session_id)

    latest = await service.competitions.get_competition_by_session(session_id)
    assert latest.id == second
    assert len(await service.competitions.list_competitions(session_id)) == 2


async def test_finishing_stamps_finished_at(service, make_session, make_players, clock):
    session_id = await make_session()
    await make_players(session_id, 2)
    competition_id = await service.competitions.start_competition(session_id)

    clock.advance(30)
    await service.competitions.update_competition_status(competition_id, "finished")

    competition = await service.competitions.get_competition(competition_id)
    assert competition.is_finished
    assert competition.finished_at == clock.now
    assert await service.competitions.get_active_competition() is None


async def test_unknown_status_and_competition(service, make_session, make_players):
    session_id = await make_session()
    await make_players(session_id, 2)
    competition_id = await service.competitions.start_competition(session_id)

    with pytest.raises(InvalidInputError):
        await service.competitions.update_competition_status(competition_id, "paused")
    with pytest.raises(NotFoundError):
        await service.competitions.get_competition("missing")


async def test_stale_read_cannot_reopen_finished_competition(
    service, store, make_session, make_players, clock, monkeypatch
):
    session_id = await make_session()
    await make_players(session_id, 2)
    competition_id = await service.competitions.start_competition(session_id)
    clock.advance(6)

    read_row = store.get

    async def slow_get(record_type, record_id):
        await asyncio.sleep(0.01)
        return await read_row(record_type, record_id)

    monkeypatch.setattr(store, "get", slow_get)

    reader = asyncio.create_task(service.competitions.get_competition(competition_id))
    await asyncio.sleep(0)
    await service.competitions.update_competition_status(
        competition_id, CompetitionStatus.FINISHED
    )
    seen = await reader

    stored = await read_row("live-competition", competition_id)
    assert stored["status"] == "finished"
    assert stored["finished_at"] is not None
    assert seen.is_finished


async def test_finished_competition_cannot_reopen(service, make_session, make_players):
    session_id = await make_session()
    await make_players(session_id, 2)
    competition_id = await service.competitions.start_competition(session_id)
    await service.competitions.update_competition_status(competition_id, "finished")

    for status in ("active", "countdown", "waiting"):
        with pytest.raises(ConflictError):
            await service.competitions.update_competition_status(competition_id, status)

    assert (await service.competitions.get_competition(competition_id)).is_finished
    assert len(service.locks) == 0
