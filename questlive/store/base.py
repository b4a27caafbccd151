"""Data store interface shared by the hosted and in-memory backends."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence

EQUALS = "equals"
NOT_EQUAL = "not equal"
IN = "in"
NOT_IN = "not in"
GREATER_THAN = "greater than"
LESS_THAN = "less than"
IS_EMPTY = "is_empty"
IS_NOT_EMPTY = "is_not_empty"

CONSTRAINT_TYPES = frozenset(
    {EQUALS, NOT_EQUAL, IN, NOT_IN, GREATER_THAN, LESS_THAN, IS_EMPTY, IS_NOT_EMPTY}
)

Record = Dict[str, Any]


@dataclass(frozen=True)
class Constraint:
    """A single search filter in the remote store's constraint format."""

    key: str
    constraint_type: str
    value: Any = None

    def __post_init__(self) -> None:
        if self.constraint_type not in CONSTRAINT_TYPES:
            raise ValueError(f"Unsupported constraint type: {self.constraint_type}")

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"key": self.key, "constraint_type": self.constraint_type}
        if self.constraint_type not in (IS_EMPTY, IS_NOT_EMPTY):
            data["value"] = self.value
        return data

    def matches(self, record: Record) -> bool:
        actual = record.get(self.key)
        kind = self.constraint_type
        if kind == IS_EMPTY:
            return actual in (None, "", [])
        if kind == IS_NOT_EMPTY:
            return actual not in (None, "", [])
        if kind == EQUALS:
            return actual == self.value
        if kind == NOT_EQUAL:
            return actual != self.value
        if kind == IN:
            return actual in self.value
        if kind == NOT_IN:
            return actual not in self.value
        if actual is None:
            return False
        if kind == GREATER_THAN:
            return actual > self.value
        return actual < self.value


def equals(key: str, value: Any) -> Constraint:
    return Constraint(key, EQUALS, value)


def encode_constraints(constraints: Iterable[Constraint]) -> str:
    return json.dumps([constraint.to_dict() for constraint in constraints])


class DataStore(ABC):
    """Generic CRUD access to typed records.

    Records are plain dicts keyed by their stored field names, with the
    record identifier under ``_id``.
    """

    @abstractmethod
    async def list(
        self, record_type: str, constraints: Optional[Sequence[Constraint]] = None
    ) -> List[Record]:
        """Return every record of ``record_type`` matching all constraints."""

    @abstractmethod
    async def get(self, record_type: str, record_id: str) -> Record:
        """Return one record or raise ``NotFoundError``."""

    @abstractmethod
    async def create(self, record_type: str, fields: Record) -> str:
        """Create a record and return its identifier."""

    @abstractmethod
    async def update(self, record_type: str, record_id: str, fields: Record) -> None:
        """Patch the given fields onto an existing record."""

    @abstractmethod
    async def delete(self, record_type: str, record_id: str) -> None:
        """Remove a record."""


__all__ = [
    "CONSTRAINT_TYPES",
    "Constraint",
    "DataStore",
    "EQUALS",
    "GREATER_THAN",
    "IN",
    "IS_EMPTY",
    "IS_NOT_EMPTY",
    "LESS_THAN",
    "NOT_EQUAL",
    "NOT_IN",
    "Record",
    "encode_constraints",
    "equals",
]
