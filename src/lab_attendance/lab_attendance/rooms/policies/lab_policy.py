from __future__ import annotations

from ...attendance.model import LabAttendance
from ...core.constants import LAB_CAPACITY_MAX, LAB_SLOT_EXPORT_LABELS
from ...core.enums import LabSlot, RoomKind
from ..model import Lab
from .base import RoomPolicy


class LabPolicy(RoomPolicy):
    kind = RoomKind.LAB
    room_cls = Lab
    attendance_cls = LabAttendance

    capacity_max = LAB_CAPACITY_MAX
    slots = tuple(s.value for s in LabSlot)
    slot_export_labels = LAB_SLOT_EXPORT_LABELS
    type_label = "Lab"
