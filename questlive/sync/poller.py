"""Fixed-interval polling with explicit cancellation."""

from __future__ import annotations

import asyncio
import inspect
import logging
import math
from datetime import datetime, timezone
from typing import Any, Callable, Optional

log = logging.getLogger("questlive.sync")


def countdown_remaining(game_start_at: datetime, now: datetime) -> int:
    """Whole seconds left before the game starts, rounded up."""

    if game_start_at.tzinfo is None:
        game_start_at = game_start_at.replace(tzinfo=timezone.utc)
    return math.ceil((game_start_at - now).total_seconds())


class Poller:
    """Calls :meth:`tick` every ``interval`` seconds until stopped.

    One tick runs at a time, so slow fetches delay the next tick instead of
    overlapping it. A failed tick is logged and retried on the next one.
    Results are only applied while the poller is still running; call
    :meth:`stop` when the owning view goes away.
    """

    name = "poller"

    def __init__(self, interval: float) -> None:
        self.interval = interval
        self.stopped = False
        self._wake = asyncio.Event()
        self.scheduled = False
        self._pending: Optional[asyncio.Task] = None

    async def tick(self) -> None:
        raise NotImplementedError

    async def run(self) -> None:
        while not self.stopped:
            try:
                await self.tick()
            except Exception:
                log.exception("%s poll failed; retrying in %.1fs", self.name, self.interval)
            if self.stopped:
                break
            try:
                await asyncio.wait_for(self._wake.wait(), timeout=self.interval)
            except asyncio.TimeoutError:
                pass

    def stop(self) -> None:
        self.stopped = True
        self._wake.set()
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()

    async def apply(self, callback: Optional[Callable[..., Any]], *args: Any) -> None:
        """Invoke a state-applying callback unless the poller was stopped."""

        if self.stopped or callback is None:
            return
        result = callback(*args)
        if inspect.isawaitable(result):
            await result

    def schedule(self, delay: float, callback: Callable[..., Any], *args: Any) -> None:
        """Run ``callback`` once after ``delay`` seconds, then stop polling."""

        async def _later() -> None:
            try:
                await asyncio.sleep(delay)
                self._pending = None
                await self.apply(callback, *args)
            except Exception:
                log.exception("%s scheduled callback failed", self.name)
            finally:
                self._pending = None
                self.stop()

        self.scheduled = True
        self._pending = asyncio.create_task(_later())


__all__ = ["Poller", "countdown_remaining"]
