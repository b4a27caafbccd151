"""Shared behaviour for records kept in the remote data store."""

from __future__ import annotations

from typing import Any, ClassVar, Dict, Mapping, Optional, TypeVar

from sqlmodel import SQLModel

RecordT = TypeVar("RecordT", bound="RemoteRecord")


class RemoteRecord(SQLModel):
    """Base model translating between Python field names and wire records.

    The store identifies records by ``_id``; models expose it as ``id``.
    ``wire_names`` maps any other Python field whose stored name differs.
    """

    record_type: ClassVar[str] = ""
    wire_names: ClassVar[Dict[str, str]] = {}

    id: Optional[str] = None

    @classmethod
    def from_record(cls: type[RecordT], record: Mapping[str, Any]) -> RecordT:
        reverse = {wire: name for name, wire in cls.wire_names.items()}
        data: Dict[str, Any] = {}
        for key, value in record.items():
            if key == "_id":
                data["id"] = value
            else:
                data[reverse.get(key, key)] = value
        return cls.model_validate(data)

    def to_fields(self) -> Dict[str, Any]:
        """Serialise to the field dict sent on create (``id`` omitted)."""

        dumped = self.model_dump(mode="json", exclude={"id"})
        return {self.wire_names.get(key, key): value for key, value in dumped.items()}


__all__ = ["RemoteRecord"]
