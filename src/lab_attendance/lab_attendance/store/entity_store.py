from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..attendance.model import AttendanceEntry
from ..common.ids import generate_id
from ..common.validators import (
    require_date,
    require_field,
    require_int,
    require_int_in_range,
    require_non_empty,
)
from ..core.enums import RecordKind, RoomKind
from ..core.exceptions import NotFoundError, ValidationError
from ..rooms.factory import RoomPolicyFactory
from ..rooms.model import Room
from .repository import EntityRepository

logger = logging.getLogger(__name__)

# Keys of the persisted snapshot, shared by the local file and remote loading.
SNAPSHOT_KEYS = {
    RecordKind.LAB: "labs",
    RecordKind.CLASS: "classes",
    RecordKind.LAB_ATTENDANCE: "labAttendance",
    RecordKind.CLASS_ATTENDANCE: "classAttendance",
}


class EntityStore(EntityRepository):
    """In-memory collections of labs, classes and their attendance entries.

    Collections keep insertion order; an update replaces the record at its
    current position. Every add/update is validated before anything changes,
    so a rejected call leaves the store untouched.
    """

    def __init__(self, policies: Optional[RoomPolicyFactory] = None, *, id_factory=generate_id):
        self._policies = policies or RoomPolicyFactory()
        self._id_factory = id_factory
        self._collections: Dict[RecordKind, List[Any]] = {kind: [] for kind in RecordKind}

    @property
    def policies(self) -> RoomPolicyFactory:
        return self._policies

    # --- reads ------------------------------------------------------------

    def find(self, kind: RecordKind, record_id: str) -> Optional[Any]:
        for record in self._collections[RecordKind(kind)]:
            if record.id == record_id:
                return record
        return None

    def list(self, kind: RecordKind) -> Sequence[Any]:
        return tuple(self._collections[RecordKind(kind)])

    def find_by_name(self, kind: RoomKind, name: str) -> Optional[Room]:
        for room in self._collections[RecordKind.rooms_of(RoomKind(kind))]:
            if room.name == name:
                return room
        return None

    # --- writes -----------------------------------------------------------

    def add(self, kind: RecordKind, fields: Mapping[str, Any]) -> str:
        kind = RecordKind(kind)
        record_id = self._new_id(kind)
        record = self._build(kind, record_id, fields)
        self._collections[kind].append(record)
        logger.debug("Added %s %s", kind.value, record_id)
        return record_id

    def update(self, kind: RecordKind, record_id: str, fields: Mapping[str, Any]) -> bool:
        kind = RecordKind(kind)
        index = self._index_of(kind, record_id)
        current = self._collections[kind][index]
        merged = {**self._fields_of(current), **{k: v for k, v in fields.items() if v is not None}}
        self._collections[kind][index] = self._build(kind, record_id, merged)
        logger.debug("Updated %s %s", kind.value, record_id)
        return True

    def remove(self, kind: RecordKind, record_id: str) -> bool:
        kind = RecordKind(kind)
        index = self._index_of(kind, record_id)
        del self._collections[kind][index]

        if not kind.is_attendance:
            dependents = RecordKind.attendance_of(kind.room_kind)
            before = len(self._collections[dependents])
            self._collections[dependents] = [e for e in self._collections[dependents] if e.room_id != record_id]
            logger.debug(
                "Removed %s %s (cascade: %d attendance entries)",
                kind.value,
                record_id,
                before - len(self._collections[dependents]),
            )
        return True

    def replace_attendance(self, kind: RoomKind, records: Sequence[AttendanceEntry]) -> None:
        self._collections[RecordKind.attendance_of(RoomKind(kind))] = list(records)

    # --- snapshot ---------------------------------------------------------

    def snapshot(self) -> dict:
        out: dict = {}
        for kind, key in SNAPSHOT_KEYS.items():
            policy = self._policies.for_kind(kind)
            if kind.is_attendance:
                out[key] = [policy.attendance_to_dict(e) for e in self._collections[kind]]
            else:
                out[key] = [policy.room_to_dict(r) for r in self._collections[kind]]
        return out

    def restore(self, snapshot: Mapping[str, Any]) -> None:
        """Replace every collection from a snapshot dict (missing keys -> empty)."""

        loaded: Dict[RecordKind, List[Any]] = {}
        for kind, key in SNAPSHOT_KEYS.items():
            policy = self._policies.for_kind(kind)
            items = snapshot.get(key) or []
            if kind.is_attendance:
                loaded[kind] = [policy.attendance_from_dict(item) for item in items]
            else:
                loaded[kind] = [policy.room_from_dict(item) for item in items]
        self._collections = loaded

    # --- helpers ----------------------------------------------------------

    def _new_id(self, kind: RecordKind) -> str:
        record_id = self._id_factory()
        while self.find(kind, record_id) is not None:
            record_id = self._id_factory()
        return record_id

    def _index_of(self, kind: RecordKind, record_id: str) -> int:
        for index, record in enumerate(self._collections[kind]):
            if record.id == record_id:
                return index
        raise NotFoundError(f"{kind.value} {record_id} not found")

    def _fields_of(self, record: Any) -> dict:
        if isinstance(record, AttendanceEntry):
            return {"date": record.date, "room_id": record.room_id, "slot": record.slot, "count": record.count}
        return {"name": record.name, "capacity": record.capacity}

    def _build(self, kind: RecordKind, record_id: str, fields: Mapping[str, Any]):
        policy = self._policies.for_kind(kind)

        if not kind.is_attendance:
            name = require_non_empty(fields.get("name"), "Name")
            capacity = require_int_in_range(require_field(fields, "capacity"), "Capacity", 0, policy.capacity_max)
            return policy.make_room(id=record_id, name=name, capacity=capacity)

        work_date = require_date(require_field(fields, "date"))
        room_id = str(require_field(fields, "room_id"))
        room = self.find(RecordKind.rooms_of(policy.kind), room_id)
        if room is None:
            raise ValidationError(f"{policy.type_label} {room_id} does not exist")

        slot = str(require_field(fields, "slot"))
        if not policy.is_valid_slot(slot):
            raise ValidationError(f"Unknown {policy.type_label.lower()} slot: {slot}")

        count = require_int(require_field(fields, "count"), "Student count")
        if count < 0:
            raise ValidationError("Student count cannot be negative")
        if count > room.capacity:
            raise ValidationError(
                f"Student count cannot exceed {policy.type_label.lower()} capacity ({room.capacity})"
            )
        return policy.make_attendance(
            id=record_id,
            date=work_date,
            room_id=room.id,
            room_name=room.name,
            slot=slot,
            count=count,
        )
