"""In-process stand-in for the hosted data store."""

from __future__ import annotations

import copy
import uuid
from typing import Dict, List, Optional, Sequence

from ..core import NotFoundError, isoformat, utcnow
from .base import Constraint, DataStore, Record


class MemoryStore(DataStore):
    """Keeps records in dictionaries, one per record type.

    Mirrors the hosted store closely enough for tests and local demos:
    constraint filtering, ``Created Date``/``Modified Date`` stamps and
    copies on every read so callers never share mutable state.
    """

    def __init__(self) -> None:
        self._tables: Dict[str, Dict[str, Record]] = {}

    def _table(self, record_type: str) -> Dict[str, Record]:
        return self._tables.setdefault(record_type, {})

    async def list(
        self, record_type: str, constraints: Optional[Sequence[Constraint]] = None
    ) -> List[Record]:
        rows = self._table(record_type).values()
        return [
            copy.deepcopy(row)
            for row in rows
            if all(constraint.matches(row) for constraint in constraints or ())
        ]

    async def get(self, record_type: str, record_id: str) -> Record:
        row = self._table(record_type).get(record_id)
        if row is None:
            raise NotFoundError(f"{record_type} {record_id} not found")
        return copy.deepcopy(row)

    async def create(self, record_type: str, fields: Record) -> str:
        record_id = uuid.uuid4().hex
        stamp = isoformat(utcnow())
        row = copy.deepcopy(fields)
        row.update({"_id": record_id, "Created Date": stamp, "Modified Date": stamp})
        self._table(record_type)[record_id] = row
        return record_id

    async def update(self, record_type: str, record_id: str, fields: Record) -> None:
        row = self._table(record_type).get(record_id)
        if row is None:
            raise NotFoundError(f"{record_type} {record_id} not found")
        row.update(copy.deepcopy(fields))
        row["Modified Date"] = isoformat(utcnow())

    async def delete(self, record_type: str, record_id: str) -> None:
        if self._table(record_type).pop(record_id, None) is None:
            raise NotFoundError(f"{record_type} {record_id} not found")


__all__ = ["MemoryStore"]
