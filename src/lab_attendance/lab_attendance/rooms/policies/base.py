from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping, Sequence, Type

from ...attendance.model import AttendanceEntry
from ...common.datetime_utils import coerce_date, format_iso_date
from ...core.enums import RoomKind
from ..model import Room


class RoomPolicy(ABC):
    """Per-kind rules (Strategy Pattern): slots, capacity bound, labels, wire keys."""

    kind: RoomKind
    room_cls: Type[Room]
    attendance_cls: Type[AttendanceEntry]

    @property
    @abstractmethod
    def capacity_max(self) -> int:
        raise NotImplementedError

    @property
    @abstractmethod
    def slots(self) -> Sequence[str]:
        raise NotImplementedError

    @property
    @abstractmethod
    def slot_export_labels(self) -> Sequence[str]:
        raise NotImplementedError

    @property
    @abstractmethod
    def type_label(self) -> str:
        """Value of the `Type` column in the records sheet ("Lab" / "Class")."""
        raise NotImplementedError

    @property
    def name_header(self) -> str:
        return f"{self.type_label} Name"

    @property
    def summary_sheet_name(self) -> str:
        return f"{self.type_label} Summary"

    @property
    def id_key(self) -> str:
        return f"{self.kind.value}Id"

    @property
    def name_key(self) -> str:
        return f"{self.kind.value}Name"

    def is_valid_slot(self, slot: str) -> bool:
        return slot in self.slots

    # --- construction -----------------------------------------------------

    def make_room(self, *, id: str, name: str, capacity: int) -> Room:
        return self.room_cls(id=id, name=name, capacity=capacity)

    def make_attendance(self, *, id: str, date, room_id: str, room_name: str, slot: str, count: int) -> AttendanceEntry:
        return self.attendance_cls(
            id=id,
            date=date,
            room_id=room_id,
            room_name=room_name,
            slot=slot,
            count=count,
        )

    # --- wire format ------------------------------------------------------

    def room_to_dict(self, room: Room) -> dict:
        return {"id": room.id, "name": room.name, "capacity": room.capacity}

    def room_from_dict(self, data: Mapping[str, Any]) -> Room:
        # Older dashboard snapshots stored the capacity as "strength".
        capacity = data.get("capacity", data.get("strength", 0))
        return self.make_room(id=str(data["id"]), name=str(data["name"]), capacity=int(capacity or 0))

    def attendance_to_dict(self, entry: AttendanceEntry) -> dict:
        return {
            "id": entry.id,
            "date": format_iso_date(entry.date),
            self.id_key: entry.room_id,
            self.name_key: entry.room_name,
            "slot": entry.slot,
            "count": entry.count,
        }

    def attendance_from_dict(self, data: Mapping[str, Any]) -> AttendanceEntry:
        return self.make_attendance(
            id=str(data["id"]),
            date=coerce_date(data["date"]),
            room_id=str(data[self.id_key]),
            room_name=str(data.get(self.name_key) or ""),
            slot=str(data["slot"]),
            count=int(data.get("count") or 0),
        )
