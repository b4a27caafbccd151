"""Follow a session's lobby or race from the terminal.

Usage:
    python -m questlive.tools.watch lobby SESSION_ID [--player REGISTRATION_ID]
    python -m questlive.tools.watch race SESSION_ID
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from typing import List, Optional

from ..core import LOBBY_POLL_SECONDS, RACE_POLL_SECONDS
from ..models import LiveCompetition, LiveProgressWithPlayer
from ..sync import LobbyCountdown, QuestLiveClient, RaceWatcher


def _print_race(competition: LiveCompetition, entries: List[LiveProgressWithPlayer]) -> None:
    print(f"-- {competition.status.value} --")
    for position, entry in enumerate(entries, start=1):
        who = entry.player.player_name if entry.player else entry.registration
        if entry.finished:
            state = f"finished #{entry.rank} in {entry.total_time}s"
        else:
            state = f"challenge {entry.current_challenge}"
        print(f"{position:>2}. {who}: {state}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Watch a Quest Live session")
    parser.add_argument("screen", choices=["lobby", "race"])
    parser.add_argument("session_id")
    parser.add_argument("--api", default="http://127.0.0.1:3000", help="API base URL")
    parser.add_argument("--player", help="registration id used in the game link")
    parser.add_argument("--interval", type=float, help="poll interval in seconds")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")
    client = QuestLiveClient(args.api)

    if args.screen == "lobby":
        watcher = LobbyCountdown(
            client,
            args.session_id,
            args.player,
            on_countdown=lambda seconds: print(seconds if seconds > 0 else "GO!"),
            on_redirect=lambda url: print(f"Play at {url}"),
            interval=args.interval or LOBBY_POLL_SECONDS,
        )
    else:
        watcher = RaceWatcher(
            client,
            args.session_id,
            on_update=_print_race,
            on_complete=lambda session_id: print(f"Results: /results/{session_id}"),
            interval=args.interval or RACE_POLL_SECONDS,
        )

    try:
        asyncio.run(watcher.run())
    except KeyboardInterrupt:
        watcher.stop()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
