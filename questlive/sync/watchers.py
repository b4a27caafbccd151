"""Lobby countdown and race screen polling loops."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, List, Optional

from ..core import GAME_HOST_URL, LOBBY_POLL_SECONDS, RACE_POLL_SECONDS, utcnow
from ..models import CompetitionStatus, LiveCompetition, LiveProgressWithPlayer
from ..services.race import join_players, race_complete, sort_race
from .poller import Poller, countdown_remaining
from .source import RaceSource

log = logging.getLogger("questlive.sync")

GO_DISPLAY_SECONDS = 1.5
RESULTS_DELAY_SECONDS = 3.0


def game_url(game_host_url: str, competition_id: str, registration_id: Optional[str]) -> str:
    return f"{game_host_url.rstrip('/')}/live-game/{competition_id}?player={registration_id or ''}"


class LobbyCountdown(Poller):
    """Counts a player down to the start and sends them to the game host.

    ``on_countdown(seconds)`` fires every tick while the countdown runs,
    ``on_go()`` fires once when it reaches zero and ``on_redirect(url)``
    fires once, ``go_delay`` seconds later. A lobby opened after the race
    went active redirects straight away.
    """

    name = "lobby"

    def __init__(
        self,
        source: RaceSource,
        session_id: str,
        registration_id: Optional[str] = None,
        *,
        on_countdown: Optional[Callable[[int], Any]] = None,
        on_go: Optional[Callable[[], Any]] = None,
        on_redirect: Optional[Callable[[str], Any]] = None,
        game_host_url: str = GAME_HOST_URL,
        interval: float = LOBBY_POLL_SECONDS,
        go_delay: float = GO_DISPLAY_SECONDS,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        super().__init__(interval)
        self.source = source
        self.session_id = session_id
        self.registration_id = registration_id
        self.on_countdown = on_countdown
        self.on_go = on_go
        self.on_redirect = on_redirect
        self.game_host_url = game_host_url
        self.go_delay = go_delay
        self.clock = clock
        self.counting = False
        self.went = False

    async def tick(self) -> None:
        competition = await self.source.get_competition_by_session(self.session_id)
        if competition is None or self.stopped or self.scheduled:
            return

        url = game_url(self.game_host_url, competition.id, self.registration_id)
        if competition.status == CompetitionStatus.COUNTDOWN and competition.game_start_at:
            remaining = countdown_remaining(competition.game_start_at, self.clock())
            if remaining > 0:
                self.counting = True
                await self.apply(self.on_countdown, remaining)
                return
            await self._go(url)
        elif competition.status == CompetitionStatus.ACTIVE:
            # The server flips to active as the countdown hits zero, so a
            # lobby that was counting still shows "go" before leaving.
            if self.counting:
                await self._go(url)
                return
            await self._redirect(url)
            self.stop()

    async def _go(self, url: str) -> None:
        self.went = True
        await self.apply(self.on_countdown, 0)
        await self.apply(self.on_go)
        self.schedule(self.go_delay, self._redirect, url)

    async def _redirect(self, url: str) -> None:
        log.info("Lobby %s redirecting to %s", self.session_id, url)
        await self.apply(self.on_redirect, url)


class RaceWatcher(Poller):
    """Refreshes the race view and moves on to results when the race ends.

    ``on_update(competition, entries)`` receives the joined, sorted view on
    every tick; ``on_complete(session_id)`` fires once, ``results_delay``
    seconds after the race is detected as complete.
    """

    name = "race"

    def __init__(
        self,
        source: RaceSource,
        session_id: str,
        *,
        on_update: Optional[
            Callable[[LiveCompetition, List[LiveProgressWithPlayer]], Any]
        ] = None,
        on_complete: Optional[Callable[[str], Any]] = None,
        interval: float = RACE_POLL_SECONDS,
        results_delay: float = RESULTS_DELAY_SECONDS,
    ) -> None:
        super().__init__(interval)
        self.source = source
        self.session_id = session_id
        self.on_update = on_update
        self.on_complete = on_complete
        self.results_delay = results_delay

    async def tick(self) -> None:
        competition = await self.source.get_competition_by_session(self.session_id)
        if competition is None:
            return
        registrations = await self.source.list_registrations(self.session_id)
        progress = await self.source.get_competition_progress(competition.id)
        if self.stopped:
            return

        await self.apply(self.on_update, competition, sort_race(join_players(progress, registrations)))
        if race_complete(competition, progress) and not self.scheduled:
            log.info("Race for session %s complete", self.session_id)
            self.schedule(self.results_delay, self.on_complete, self.session_id)


__all__ = [
    "GO_DISPLAY_SECONDS",
    "LobbyCountdown",
    "RESULTS_DELAY_SECONDS",
    "RaceWatcher",
    "game_url",
]
