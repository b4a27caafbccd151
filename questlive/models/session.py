"""Bookable competition time slots."""

from __future__ import annotations

import re
from typing import ClassVar, Dict

from .base import RemoteRecord

_DAY_DIGITS = re.compile(r"(\d+)")


def parse_day_number(challenge_set: str | None) -> int:
    """Turn a challenge-set label such as ``"Day3"`` into ``3``.

    Labels without digits fall back to day 1.
    """

    match = _DAY_DIGITS.search(challenge_set or "")
    if not match:
        return 1
    return int(match.group(1)) or 1


class LiveSession(RemoteRecord):
    """A time slot players register for."""

    record_type: ClassVar[str] = "live-session"
    # The hosted schema names the time-of-day column ``start_date``.
    wire_names: ClassVar[Dict[str, str]] = {"start_time": "start_date"}

    date: str
    start_time: str
    total_seats: int = 0
    available_seats: int = 0
    is_reserved_for_walkins: bool = False
    is_active: bool = True
    challenge_set: str = "Day1"

    @property
    def day_number(self) -> int:
        return parse_day_number(self.challenge_set)


__all__ = ["LiveSession", "parse_day_number"]
