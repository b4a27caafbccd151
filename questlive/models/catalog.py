"""Static catalogues shared with the frontend."""

from __future__ import annotations

from typing import Dict, List

PLAYER_ICONS: List[Dict[str, str]] = [
    {"id": "rocket", "emoji": "\U0001F680", "label": "Rocket"},
    {"id": "star", "emoji": "⭐", "label": "Star"},
    {"id": "lightning", "emoji": "⚡", "label": "Lightning"},
    {"id": "fire", "emoji": "\U0001F525", "label": "Fire"},
    {"id": "diamond", "emoji": "\U0001F48E", "label": "Diamond"},
    {"id": "crown", "emoji": "\U0001F451", "label": "Crown"},
    {"id": "unicorn", "emoji": "\U0001F984", "label": "Unicorn"},
    {"id": "dragon", "emoji": "\U0001F409", "label": "Dragon"},
    {"id": "phoenix", "emoji": "\U0001F426‍\U0001F525", "label": "Phoenix"},
    {"id": "robot", "emoji": "\U0001F916", "label": "Robot"},
]

EVENT_DAYS: List[Dict[str, object]] = [
    {"date": "2025-02-09", "label": "Sun Feb 9", "day_number": 1, "challenge_set": "Day1"},
    {"date": "2025-02-10", "label": "Mon Feb 10", "day_number": 2, "challenge_set": "Day2"},
    {"date": "2025-02-11", "label": "Tue Feb 11", "day_number": 3, "challenge_set": "Day3"},
    {"date": "2025-02-12", "label": "Wed Feb 12", "day_number": 4, "challenge_set": "Day4"},
]

SESSION_TIMES: List[str] = [
    "09:00", "10:00", "11:00", "12:00", "13:00", "14:00", "15:00", "16:00",
]

__all__ = ["EVENT_DAYS", "PLAYER_ICONS", "SESSION_TIMES"]
