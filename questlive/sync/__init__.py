"""Client-side polling synchronizer."""

from .client import QuestLiveClient
from .poller import Poller, countdown_remaining
from .source import RaceSource, ServiceSource
from .watchers import LobbyCountdown, RaceWatcher, game_url

__all__ = [
    "LobbyCountdown",
    "Poller",
    "QuestLiveClient",
    "RaceSource",
    "RaceWatcher",
    "ServiceSource",
    "countdown_remaining",
    "game_url",
]
