import asyncio

import pytest

from questlive.core import ConflictError, InvalidInputError, NotFoundError
from questlive.models import CompetitionStatus


@pytest.fixture
def race(service, make_session, make_players, clock):
    async def _race(players=2):
        session_id = await make_session()
        ids = await make_players(session_id, players)
        competition_id = await service.competitions.start_competition(session_id)
        clock.advance(5)
        return session_id, competition_id, ids

    return _race


async def _finish(service, competition_id, registration_id, seconds=10.0):
    result = None
    for challenge in range(1, 6):
        result = await service.progress.update_progress(
            competition_id, registration_id, challenge, seconds
        )
    return result


async def test_challenge_advances_current(service, race):
    _, competition_id, (player, _) = await race()

    updated = await service.progress.update_progress(competition_id, player, 1, 12.5)
    assert updated.current_challenge == 2
    assert updated.challenge_1_time == 12.5
    assert not updated.finished
    assert updated.rank is None


async def test_last_challenge_finishes_with_total_and_rank(service, race, clock):
    _, competition_id, (player, _) = await race()

    for challenge, seconds in enumerate((10, 20, 30, 40), start=1):
        await service.progress.update_progress(competition_id, player, challenge, seconds)
    clock.advance(100)
    finished = await service.progress.update_progress(competition_id, player, 5, 50)

    assert finished.finished
    assert finished.total_time == 150
    assert finished.rank == 1
    assert finished.current_challenge == 6
    assert finished.finished_at == clock.now


async def test_missing_challenge_times_count_as_zero(service, race):
    _, competition_id, (player, _) = await race()

    await service.progress.update_progress(competition_id, player, 2, 20)
    finished = await service.progress.update_progress(competition_id, player, 5, 5)
    assert finished.total_time == 25


async def test_rank_follows_finish_order_not_total_time(service, race):
    _, competition_id, (slow, fast, _) = await race(players=3)

    slow_done = await _finish(service, competition_id, slow, seconds=30)
    fast_done = await _finish(service, competition_id, fast, seconds=5)

    assert slow_done.rank == 1
    assert fast_done.rank == 2
    assert fast_done.total_time < slow_done.total_time


async def test_concurrent_finishes_get_distinct_ranks(service, race):
    _, competition_id, (first, second, third) = await race(players=3)
    for player in (first, second):
        for challenge in range(1, 5):
            await service.progress.update_progress(competition_id, player, challenge, 10)

    results = await asyncio.gather(
        service.progress.update_progress(competition_id, first, 5, 10),
        service.progress.update_progress(competition_id, second, 5, 10),
    )
    assert sorted(result.rank for result in results) == [1, 2]

    competition = await service.competitions.get_competition(competition_id)
    assert competition.status is CompetitionStatus.ACTIVE


async def test_competition_finishes_when_everyone_is_done(service, race, clock):
    _, competition_id, (first, second) = await race()

    await _finish(service, competition_id, first)
    assert not (await service.competitions.get_competition(competition_id)).is_finished

    await _finish(service, competition_id, second)
    competition = await service.competitions.get_competition(competition_id)
    assert competition.is_finished
    assert competition.finished_at == clock.now

    with pytest.raises(ConflictError):
        await service.progress.update_progress(competition_id, first, 1, 1)


async def test_finished_player_cannot_report_again(service, race):
    _, competition_id, (first, _) = await race()
    await _finish(service, competition_id, first)

    with pytest.raises(ConflictError):
        await service.progress.update_progress(competition_id, first, 5, 1)


async def test_unknown_registration_and_bad_input(service, race):
    _, competition_id, (player, _) = await race()

    with pytest.raises(NotFoundError, match="Progress record not found"):
        await service.progress.update_progress(competition_id, "stranger", 1, 10)
    with pytest.raises(InvalidInputError):
        await service.progress.update_progress(competition_id, player, 6, 10)
    with pytest.raises(InvalidInputError):
        await service.progress.update_progress(competition_id, player, 1, -1)


async def test_views_join_players(service, race):
    _, competition_id, (first, second) = await race()
    await service.progress.update_progress(competition_id, second, 1, 10)
    await _finish(service, competition_id, first)

    view = await service.progress.race_view(competition_id)
    assert [entry.registration for entry in view] == [first, second]
    assert view[0].player.player_name == "Racer 0"

    results = await service.progress.results(competition_id)
    assert results[0].rank == 1
    assert results[1].rank is None


async def test_full_event_flow(service, make_session, clock):
    session_id = await make_session(total_seats=5, available_seats=5)
    ids = [
        await service.registrations.register_for_session(
            session_id, f"{name}@example.com", name.title()
        )
        for name in ("ada", "grace", "alan")
    ]
    assert (await service.sessions.get_session(session_id)).available_seats == 2

    player_a, player_b, _ = ids
    await service.registrations.check_in_player(player_a, "Swift Fox", "fox")
    await service.registrations.check_in_player(player_b, "Brave Owl", "owl")

    competition_id = await service.competitions.start_competition(session_id)
    competition = await service.competitions.get_competition(competition_id)
    assert competition.status is CompetitionStatus.COUNTDOWN
    progress = await service.progress.get_competition_progress(competition_id)
    assert len(progress) == 2
    assert all(entry.current_challenge == 1 for entry in progress)

    clock.advance(5)
    for challenge in range(1, 5):
        await service.progress.update_progress(competition_id, player_a, challenge, 10)
        await service.progress.update_progress(competition_id, player_b, challenge, 10)
    a_done = await service.progress.update_progress(competition_id, player_a, 5, 10)
    b_done = await service.progress.update_progress(competition_id, player_b, 5, 10)

    assert (a_done.rank, a_done.total_time) == (1, 50)
    assert (b_done.rank, b_done.total_time) == (2, 50)
    assert (await service.competitions.get_competition(competition_id)).is_finished


@pytest.mark.parametrize("seconds", [float("nan"), float("inf"), float("-inf")])
async def test_non_finite_times_rejected(service, race, seconds):
    _, competition_id, (player, _) = await race()

    with pytest.raises(InvalidInputError):
        await service.progress.update_progress(competition_id, player, 1, seconds)

    progress = await service.progress.get_competition_progress(competition_id)
    assert all(entry.challenge_1_time is None for entry in progress)
    assert all(entry.current_challenge == 1 for entry in progress)


@pytest.mark.parametrize("challenge", [2.7, 3.0, "2", True])
async def test_challenge_number_must_be_int(service, race, challenge):
    _, competition_id, (player, _) = await race()

    with pytest.raises(InvalidInputError):
        await service.progress.update_progress(competition_id, player, challenge, 10)
