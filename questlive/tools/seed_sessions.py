"""Seed the event's session matrix (days x time slots) into the data store.

Usage:
    python -m questlive.tools.seed_sessions [--dry-run] [--seats 5]
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Dict, Iterator, List, Optional

from ..core import StoreError, store_settings_from_env
from ..models import EVENT_DAYS, SESSION_TIMES, LiveSession
from ..store import BubbleStore, DataStore

log = logging.getLogger("questlive.tools.seed")

WALKIN_SLOT = "09:00"
# Spacing between creates keeps the hosted API under its rate limit.
CREATE_DELAY_SECONDS = 0.1


def session_matrix(total_seats: int = 5) -> Iterator[LiveSession]:
    """Every session slot of the event; the first slot of each day is walk-in only."""

    for day in EVENT_DAYS:
        for start_time in SESSION_TIMES:
            yield LiveSession(
                date=str(day["date"]),
                start_time=start_time,
                total_seats=total_seats,
                # One seat per slot is held back for walk-ins.
                available_seats=max(0, total_seats - 1),
                is_reserved_for_walkins=start_time == WALKIN_SLOT,
                is_active=True,
                challenge_set=str(day["challenge_set"]),
            )


async def seed(
    store: DataStore, total_seats: int = 5, delay: float = CREATE_DELAY_SECONDS
) -> Dict[str, int]:
    created = failed = 0
    for session in session_matrix(total_seats):
        label = f"{session.date} {session.start_time} ({session.challenge_set})"
        try:
            record_id = await store.create(LiveSession.record_type, session.to_fields())
        except StoreError as exc:
            log.error("Failed: %s - %s", label, exc)
            failed += 1
        else:
            log.info("Created: %s - ID: %s", label, record_id)
            created += 1
        if delay:
            await asyncio.sleep(delay)
    return {"created": created, "failed": failed, "total": created + failed}


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Seed Quest Live sessions")
    parser.add_argument("--seats", type=int, default=5, help="seats per session")
    parser.add_argument("--dry-run", action="store_true", help="print the matrix only")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    if args.dry_run:
        for session in session_matrix(args.seats):
            print(session.to_fields())
        return 0

    store = BubbleStore(store_settings_from_env(require_key=True))
    summary = asyncio.run(seed(store, args.seats))
    print(f"Created: {summary['created']}  Failed: {summary['failed']}  Total: {summary['total']}")
    return 1 if summary["failed"] else 0


if __name__ == "__main__":
    raise SystemExit(main())
