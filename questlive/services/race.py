"""Pure helpers deriving the live race and results views."""

from __future__ import annotations

import math
from typing import Iterable, List, Optional, Sequence, Tuple

from ..models import LiveCompetition, LiveProgress, LiveProgressWithPlayer, LiveRegistration

# Unfinished totals sort after every real time on the results board.
_NO_TIME = 999_999


def race_sort_key(progress: LiveProgress) -> Tuple[int, float, int]:
    """Ordering for the live race: finishers first by total time, then the
    rest by how far along they are."""

    if progress.finished:
        total = progress.total_time if progress.total_time is not None else math.inf
        return (0, total, 0)
    return (1, 0.0, -progress.current_challenge)


def sort_race(progress: Iterable[LiveProgress]) -> list:
    return sorted(progress, key=race_sort_key)


def results_sort_key(progress: LiveProgress) -> Tuple[int, int, int, float]:
    if progress.rank:
        return (0, progress.rank, 0, 0.0)
    total = progress.total_time if progress.total_time is not None else _NO_TIME
    return (1, 0, 0 if progress.finished else 1, total)


def results_order(progress: Iterable[LiveProgress]) -> list:
    return sorted(progress, key=results_sort_key)


def join_players(
    progress: Iterable[LiveProgress], registrations: Iterable[LiveRegistration]
) -> List[LiveProgressWithPlayer]:
    players = {registration.id: registration for registration in registrations}
    return [
        LiveProgressWithPlayer.model_validate(
            {**entry.model_dump(), "player": players.get(entry.registration)}
        )
        for entry in progress
    ]


def race_complete(
    competition: Optional[LiveCompetition], progress: Sequence[LiveProgress]
) -> bool:
    """True once the competition is closed or every player has finished."""

    if competition is None:
        return False
    if competition.is_finished:
        return True
    return bool(progress) and all(entry.finished for entry in progress)


__all__ = [
    "join_players",
    "race_complete",
    "race_sort_key",
    "results_order",
    "results_sort_key",
    "sort_race",
]
