from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from ..core.enums import RecordKind, RoomKind
from ..rooms.model import Room


class EntityRepository(Protocol):
    """Store interface used by services, the aggregation engine and persistence.

    Note (DIP): consumers depend on this interface, not on the in-memory store.
    """

    def add(self, kind: RecordKind, fields: Mapping[str, Any]) -> str:
        raise NotImplementedError

    def update(self, kind: RecordKind, record_id: str, fields: Mapping[str, Any]) -> bool:
        raise NotImplementedError

    def remove(self, kind: RecordKind, record_id: str) -> bool:
        raise NotImplementedError

    def find(self, kind: RecordKind, record_id: str) -> Optional[Any]:
        raise NotImplementedError

    def list(self, kind: RecordKind) -> Sequence[Any]:
        raise NotImplementedError

    def find_by_name(self, kind: RoomKind, name: str) -> Optional[Room]:
        raise NotImplementedError

    def replace_attendance(self, kind: RoomKind, records: Sequence[Any]) -> None:
        raise NotImplementedError

    def snapshot(self) -> dict:
        raise NotImplementedError

    def restore(self, snapshot: Mapping[str, Any]) -> None:
        raise NotImplementedError
