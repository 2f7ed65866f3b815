from __future__ import annotations

from ...attendance.model import ClassAttendance
from ...core.constants import CLASS_CAPACITY_MAX, CLASS_SLOT_EXPORT_LABELS
from ...core.enums import ClassSlot, RoomKind
from ..model import ClassRoom
from .base import RoomPolicy


class ClassPolicy(RoomPolicy):
    kind = RoomKind.CLASS
    room_cls = ClassRoom
    attendance_cls = ClassAttendance

    capacity_max = CLASS_CAPACITY_MAX
    slots = tuple(s.value for s in ClassSlot)
    slot_export_labels = CLASS_SLOT_EXPORT_LABELS
    type_label = "Class"
