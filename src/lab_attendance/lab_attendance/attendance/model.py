from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import ClassVar

from ..core.enums import RoomKind


@dataclass(frozen=True)
class AttendanceEntry:
    """Domain entity: head count for one room, date and slot.

    `room_name` is the room's name at entry time, kept for listings and the
    full-records export.
    """

    kind: ClassVar[RoomKind]

    id: str
    date: date
    room_id: str
    room_name: str
    slot: str
    count: int


@dataclass(frozen=True)
class LabAttendance(AttendanceEntry):
    kind: ClassVar[RoomKind] = RoomKind.LAB


@dataclass(frozen=True)
class ClassAttendance(AttendanceEntry):
    kind: ClassVar[RoomKind] = RoomKind.CLASS


@dataclass(frozen=True)
class AttendanceListRow:
    """Read-model for attendance listings."""

    id: str
    date: str
    room_id: str
    room_name: str
    slot: str
    slot_label: str
    count: int
