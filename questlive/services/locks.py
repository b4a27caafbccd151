"""Per-key serialisation of read-modify-write sequences."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Hashable, List, Tuple


class KeyedLocks:
    """Hands out one ``asyncio.Lock`` per key.

    Seat claims are keyed by session and rank assignment by competition, so
    this process is the single writer for each of those counters. A key's
    lock is dropped once its last holder or waiter leaves.
    """

    def __init__(self) -> None:
        # key -> [lock, holders and waiters]
        self._locks: Dict[Tuple[Hashable, ...], List] = {}

    def __len__(self) -> int:
        return len(self._locks)

    @asynccontextmanager
    async def lock(self, *key: Hashable) -> AsyncIterator[None]:
        entry = self._locks.setdefault(key, [asyncio.Lock(), 0])
        entry[1] += 1
        try:
            async with entry[0]:
                yield
        finally:
            entry[1] -= 1
            if entry[1] == 0:
                del self._locks[key]


__all__ = ["KeyedLocks"]
