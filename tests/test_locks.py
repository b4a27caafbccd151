import asyncio

import pytest

from questlive.services.locks import KeyedLocks


async def test_same_key_is_serialised():
    locks = KeyedLocks()
    events = []

    async def worker(name):
        async with locks.lock("session", "s1"):
            events.append(f"{name}-in")
            await asyncio.sleep(0.01)
            events.append(f"{name}-out")

    await asyncio.gather(worker("a"), worker("b"))

    assert events == ["a-in", "a-out", "b-in", "b-out"]
    assert len(locks) == 0


async def test_distinct_keys_do_not_block_each_other():
    locks = KeyedLocks()
    inside = asyncio.Event()

    async def holder():
        async with locks.lock("session", "s1"):
            await inside.wait()

    task = asyncio.create_task(holder())
    await asyncio.sleep(0)
    async with locks.lock("session", "s2"):
        assert len(locks) == 2
        inside.set()
    await task

    assert len(locks) == 0


async def test_lock_released_when_body_raises():
    locks = KeyedLocks()

    with pytest.raises(RuntimeError):
        async with locks.lock("competition", "c1"):
            raise RuntimeError("boom")

    assert len(locks) == 0

    async def reacquire():
        async with locks.lock("competition", "c1"):
            return True

    assert await asyncio.wait_for(reacquire(), timeout=1)


async def test_service_keeps_no_locks_after_registrations(
    service, make_session, make_players
):
    session_id = await make_session(available_seats=5)
    await asyncio.gather(
        *(
            service.registrations.register_for_session(
                session_id, f"p{index}@example.com", f"P{index}"
            )
            for index in range(3)
        )
    )
    await make_players(session_id, 2)

    assert len(service.locks) == 0
