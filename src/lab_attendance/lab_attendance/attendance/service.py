from __future__ import annotations

import threading
from typing import Optional

from ..common.datetime_utils import format_iso_date, slot_display_label
from ..common.notifications import NotificationCenter
from ..core.enums import RecordKind, RoomKind
from ..persistence.adapter import PersistenceAdapter
from ..rooms.factory import RoomPolicyFactory
from ..store.repository import EntityRepository
from .model import AttendanceEntry, AttendanceListRow


class AttendanceService:
    """Command API for attendance entries.

    Each command holds the shared lock until the store mutation and the local
    save are done, so two commands never interleave.
    """

    def __init__(
        self,
        store: EntityRepository,
        persistence: PersistenceAdapter,
        *,
        notifications: Optional[NotificationCenter] = None,
        policies: Optional[RoomPolicyFactory] = None,
        lock: Optional[threading.RLock] = None,
    ):
        self._store = store
        self._persistence = persistence
        self._notifications = notifications or NotificationCenter()
        self._policies = policies or RoomPolicyFactory()
        self._lock = lock or threading.RLock()

    def add_attendance(self, kind: RoomKind, *, date, room_id: str, slot: str, count) -> str:
        record_kind = RecordKind.attendance_of(RoomKind(kind))
        with self._lock:
            entry_id = self._store.add(record_kind, {"date": date, "room_id": room_id, "slot": slot, "count": count})
            self._persistence.record_created(record_kind, entry_id)
        self._notifications.success(f"{self._label(kind)} attendance entry added successfully!")
        return entry_id

    def edit_attendance(self, kind: RoomKind, entry_id: str, *, date=None, room_id=None, slot=None, count=None) -> None:
        record_kind = RecordKind.attendance_of(RoomKind(kind))
        with self._lock:
            self._store.update(
                record_kind,
                entry_id,
                {"date": date, "room_id": room_id, "slot": slot, "count": count},
            )
            self._persistence.record_updated(record_kind, entry_id)
        self._notifications.success(f"{self._label(kind)} attendance entry updated successfully!")

    def delete_attendance(self, kind: RoomKind, entry_id: str) -> None:
        record_kind = RecordKind.attendance_of(RoomKind(kind))
        with self._lock:
            self._store.remove(record_kind, entry_id)
            self._persistence.record_deleted(record_kind, entry_id)
        self._notifications.success("Attendance entry deleted successfully!")

    def get_entry(self, kind: RoomKind, entry_id: str) -> Optional[AttendanceEntry]:
        return self._store.find(RecordKind.attendance_of(RoomKind(kind)), entry_id)

    def list_attendance(self, kind: RoomKind) -> list[AttendanceListRow]:
        """Listing rows, newest date first, then by room name."""

        entries = list(self._store.list(RecordKind.attendance_of(RoomKind(kind))))
        entries.sort(key=lambda e: e.room_name)
        entries.sort(key=lambda e: e.date, reverse=True)
        return [self._to_row(e) for e in entries]

    def _to_row(self, e: AttendanceEntry) -> AttendanceListRow:
        return AttendanceListRow(
            id=e.id,
            date=format_iso_date(e.date),
            room_id=e.room_id,
            room_name=e.room_name,
            slot=e.slot,
            slot_label=slot_display_label(e.slot),
            count=e.count,
        )

    def _label(self, kind: RoomKind) -> str:
        return self._policies.for_kind(kind).type_label
