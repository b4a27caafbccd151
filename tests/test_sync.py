import asyncio
import logging
from datetime import datetime, timedelta, timezone

import httpx
import pytest

from questlive.app import create_app
from questlive.models import CompetitionStatus, LiveCompetition
from questlive.sync import (
    LobbyCountdown,
    QuestLiveClient,
    RaceWatcher,
    ServiceSource,
    countdown_remaining,
    game_url,
)

START = datetime(2025, 2, 9, 9, 0, tzinfo=timezone.utc)


class StubSource:
    """Returns a scripted competition; raises any exception instances it is given."""

    def __init__(self, *competitions):
        self.competitions = list(competitions)
        self.calls = 0

    async def get_competition_by_session(self, session_id):
        self.calls += 1
        item = self.competitions.pop(0) if len(self.competitions) > 1 else self.competitions[0]
        if isinstance(item, Exception):
            raise item
        return item


def _competition(status, offset=5):
    return LiveCompetition(
        id="comp1",
        session="s1",
        status=status,
        started_at=START,
        game_start_at=START + timedelta(seconds=offset),
    )


def test_countdown_remaining_rounds_up():
    assert countdown_remaining(START + timedelta(seconds=5), START) == 5
    assert countdown_remaining(START + timedelta(seconds=4.2), START) == 5
    assert countdown_remaining(START, START) == 0
    assert countdown_remaining(START - timedelta(seconds=2), START) == -2
    assert countdown_remaining(datetime(2025, 2, 9, 9, 0, 3), START) == 3


def test_game_url():
    assert game_url("https://host/", "c1", "r1") == "https://host/live-game/c1?player=r1"
    assert game_url("https://host", "c1", None) == "https://host/live-game/c1?player="


async def test_lobby_counts_down_then_redirects():
    now = [START + timedelta(seconds=2)]
    events = []

    def on_countdown(seconds):
        events.append(seconds)
        now[0] += timedelta(seconds=1)

    lobby = LobbyCountdown(
        StubSource(_competition(CompetitionStatus.COUNTDOWN)),
        "s1",
        "reg1",
        on_countdown=on_countdown,
        on_go=lambda: events.append("go"),
        on_redirect=events.append,
        game_host_url="https://host",
        interval=0.001,
        go_delay=0.01,
        clock=lambda: now[0],
    )
    await asyncio.wait_for(lobby.run(), timeout=2)

    assert events == [3, 2, 1, 0, "go", "https://host/live-game/comp1?player=reg1"]
    assert lobby.went
    assert lobby.stopped


async def test_lobby_redirects_immediately_when_active():
    events = []
    lobby = LobbyCountdown(
        StubSource(_competition(CompetitionStatus.ACTIVE)),
        "s1",
        "reg1",
        on_countdown=events.append,
        on_redirect=events.append,
        game_host_url="https://host",
        interval=0.001,
        clock=lambda: START,
    )
    await asyncio.wait_for(lobby.run(), timeout=2)

    assert events == ["https://host/live-game/comp1?player=reg1"]
    assert not lobby.went


async def test_lobby_retries_after_poll_failure(caplog):
    events = []
    source = StubSource(RuntimeError("store down"), _competition(CompetitionStatus.ACTIVE))
    lobby = LobbyCountdown(
        source, "s1", on_redirect=events.append, interval=0.001, clock=lambda: START
    )

    with caplog.at_level(logging.ERROR, logger="questlive.sync"):
        await asyncio.wait_for(lobby.run(), timeout=2)

    assert source.calls == 2
    assert len(events) == 1
    assert "lobby poll failed" in caplog.text


async def test_stopped_lobby_ignores_late_results():
    release = asyncio.Event()
    events = []

    class SlowSource:
        async def get_competition_by_session(self, session_id):
            await release.wait()
            return _competition(CompetitionStatus.ACTIVE)

    lobby = LobbyCountdown(SlowSource(), "s1", on_redirect=events.append, interval=0.001)
    task = asyncio.create_task(lobby.run())
    await asyncio.sleep(0.01)

    lobby.stop()
    release.set()
    await asyncio.wait_for(task, timeout=2)

    assert events == []


async def test_stop_cancels_pending_redirect():
    events = []
    lobby = LobbyCountdown(
        StubSource(_competition(CompetitionStatus.COUNTDOWN, offset=0)),
        "s1",
        on_go=lambda: events.append("go"),
        on_redirect=events.append,
        interval=0.001,
        go_delay=10,
        clock=lambda: START,
    )
    task = asyncio.create_task(lobby.run())
    for _ in range(50):
        if lobby.went:
            break
        await asyncio.sleep(0.001)

    lobby.stop()
    await asyncio.wait_for(task, timeout=2)
    assert events == ["go"]


@pytest.fixture
def finished_race(service, make_session, make_players, clock):
    async def _build():
        session_id = await make_session()
        players = await make_players(session_id, 2)
        competition_id = await service.competitions.start_competition(session_id)
        clock.advance(5)
        for registration_id, seconds in zip(players, (10, 20)):
            for challenge in range(1, 6):
                await service.progress.update_progress(
                    competition_id, registration_id, challenge, seconds
                )
        return session_id, competition_id, players

    return _build


async def test_race_watcher_updates_then_completes(service, finished_race):
    session_id, competition_id, players = await finished_race()
    updates = []
    completed = []

    watcher = RaceWatcher(
        ServiceSource(service),
        session_id,
        on_update=lambda competition, entries: updates.append((competition, entries)),
        on_complete=completed.append,
        interval=0.001,
        results_delay=0.01,
    )
    await asyncio.wait_for(watcher.run(), timeout=2)

    assert completed == [session_id]
    competition, entries = updates[0]
    assert competition.id == competition_id
    assert [entry.registration for entry in entries] == players
    assert entries[0].player.player_name == "Racer 0"


async def test_race_watcher_waits_for_competition():
    class EmptySource:
        async def get_competition_by_session(self, session_id):
            return None

    updates = []
    watcher = RaceWatcher(EmptySource(), "s1", on_update=lambda *args: updates.append(args))
    watcher.interval = 0.001
    task = asyncio.create_task(watcher.run())
    await asyncio.sleep(0.01)
    watcher.stop()
    await asyncio.wait_for(task, timeout=2)
    assert updates == []


async def test_client_reads_api(service, finished_race):
    session_id, competition_id, players = await finished_race()
    client = QuestLiveClient(
        "http://test", transport=httpx.ASGITransport(app=create_app(service=service))
    )

    competition = await client.get_competition_by_session(session_id)
    assert competition.id == competition_id
    assert competition.status is CompetitionStatus.FINISHED

    registrations = await client.list_registrations(session_id)
    assert sorted(entry.id for entry in registrations) == sorted(players)

    progress = await client.get_competition_progress(competition_id)
    assert [entry.rank for entry in progress] == [1, 2]

    assert await client.get_competition_by_session("unknown") is None


async def test_lobby_shows_go_before_redirect_against_service(
    service, make_session, make_players, clock
):
    session_id = await make_session()
    players = await make_players(session_id, 2)
    competition_id = await service.competitions.start_competition(session_id)
    events = []

    def on_countdown(seconds):
        events.append(seconds)
        clock.advance(1)

    lobby = LobbyCountdown(
        ServiceSource(service),
        session_id,
        players[0],
        on_countdown=on_countdown,
        on_go=lambda: events.append("go"),
        on_redirect=events.append,
        game_host_url="https://host",
        interval=0.001,
        go_delay=0.01,
        clock=clock,
    )
    await asyncio.wait_for(lobby.run(), timeout=2)

    url = f"https://host/live-game/{competition_id}?player={players[0]}"
    assert events == [5, 4, 3, 2, 1, 0, "go", url]
    stored = await service.store.get("live-competition", competition_id)
    assert stored["status"] == "active"


async def test_failing_results_callback_still_stops_watcher(service, finished_race, caplog):
    session_id, _, _ = await finished_race()

    def on_complete(session_id):
        raise RuntimeError("results screen unavailable")

    watcher = RaceWatcher(
        ServiceSource(service),
        session_id,
        on_complete=on_complete,
        interval=0.001,
        results_delay=0.01,
    )
    with caplog.at_level(logging.ERROR, logger="questlive.sync"):
        await asyncio.wait_for(watcher.run(), timeout=2)

    assert watcher.stopped
    assert "race scheduled callback failed" in caplog.text
