from __future__ import annotations

from enum import Enum


class RoomKind(str, Enum):
    """Room kinds tracked by the dashboard."""

    LAB = "lab"
    CLASS = "class"


class RecordKind(str, Enum):
    """Collections held by the entity store."""

    LAB = "lab"
    CLASS = "class"
    LAB_ATTENDANCE = "lab_attendance"
    CLASS_ATTENDANCE = "class_attendance"

    @property
    def is_attendance(self) -> bool:
        return self in (RecordKind.LAB_ATTENDANCE, RecordKind.CLASS_ATTENDANCE)

    @property
    def room_kind(self) -> RoomKind:
        if self in (RecordKind.LAB, RecordKind.LAB_ATTENDANCE):
            return RoomKind.LAB
        return RoomKind.CLASS

    @classmethod
    def rooms_of(cls, kind: RoomKind) -> "RecordKind":
        return cls.LAB if kind == RoomKind.LAB else cls.CLASS

    @classmethod
    def attendance_of(cls, kind: RoomKind) -> "RecordKind":
        return cls.LAB_ATTENDANCE if kind == RoomKind.LAB else cls.CLASS_ATTENDANCE


class LabSlot(str, Enum):
    """Fixed lab time windows, in declared order."""

    MORNING = "9:10-11:10"
    MIDDAY = "12:10-14:10"
    AFTERNOON = "14:20-16:20"


class ClassSlot(str, Enum):
    """Fixed class time windows, in declared order."""

    FIRST = "9:10-10:10"
    SECOND = "10:10-11:10"
    THIRD = "12:10-13:10"
    FOURTH = "13:10-14:10"
    FIFTH = "14:20-15:20"
    SIXTH = "15:20-16:20"


class NotificationLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
