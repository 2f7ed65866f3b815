from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendanceEntry
from ..common.datetime_utils import coerce_date
from ..core.enums import RecordKind, RoomKind
from ..rooms.factory import RoomPolicyFactory
from ..rooms.model import Room
from ..store.repository import EntityRepository


@dataclass(frozen=True)
class SlotTableRow:
    """One row of the per-room slot table (dashboard table and summary sheet)."""

    room: Room
    slot_counts: tuple[int, ...]
    total: int


@dataclass(frozen=True)
class GroupedSeries:
    name: str
    slot_counts: tuple[int, ...]


@dataclass(frozen=True)
class SlotTotal:
    slot: str
    label: str
    total: int


@dataclass(frozen=True)
class RoomTotal:
    name: str
    total: int


@dataclass(frozen=True)
class DashboardSummary:
    lab_count: int
    class_count: int
    lab_attendance: int
    class_attendance: int


class AggregationEngine:
    """Sums attendance counts by room, date and slot.

    Pure reads over the store: every figure is built from `summarize_slot`,
    and rooms are always visited in store order.
    """

    def __init__(self, store: EntityRepository, policies: Optional[RoomPolicyFactory] = None):
        self._store = store
        self._policies = policies or RoomPolicyFactory()

    def summarize_slot(self, room_id: str, on: date | str, slot: str, *, kind: Optional[RoomKind] = None) -> int:
        on = coerce_date(on)
        kinds = (RoomKind(kind),) if kind else tuple(RoomKind)
        return sum(
            e.count
            for k in kinds
            for e in self._entries(k)
            if e.room_id == room_id and e.date == on and e.slot == slot
        )

    def total_for_room_on_date(self, room_id: str, on: date | str, *, kind: Optional[RoomKind] = None) -> int:
        kind = kind or self._kind_of(room_id)
        if kind is None:
            return 0
        policy = self._policies.for_kind(kind)
        return sum(self.summarize_slot(room_id, on, slot, kind=kind) for slot in policy.slots)

    def dashboard_totals(self, on: date | str) -> tuple[int, int]:
        """(total lab attendance, total class attendance) for the date."""
        on = coerce_date(on)
        return (
            sum(row.total for row in self.per_room_slot_table(RoomKind.LAB, on)),
            sum(row.total for row in self.per_room_slot_table(RoomKind.CLASS, on)),
        )

    def per_room_slot_table(self, kind: RoomKind, on: date | str) -> list[SlotTableRow]:
        kind = RoomKind(kind)
        on = coerce_date(on)
        policy = self._policies.for_kind(kind)

        rows: list[SlotTableRow] = []
        for room in self._rooms(kind):
            counts = tuple(self.summarize_slot(room.id, on, slot, kind=kind) for slot in policy.slots)
            rows.append(SlotTableRow(room=room, slot_counts=counts, total=sum(counts)))
        return rows

    def grouped_series(self, kind: RoomKind, on: date | str) -> list[GroupedSeries]:
        """Per-slot counts, only for rooms with at least one entry on the date.

        Unlike `per_room_slot_table`, idle rooms are left out.
        """

        kind = RoomKind(kind)
        on = coerce_date(on)
        active = {e.room_id for e in self._entries(kind) if e.date == on}
        return [
            GroupedSeries(name=row.room.name, slot_counts=row.slot_counts)
            for row in self.per_room_slot_table(kind, on)
            if row.room.id in active
        ]

    def slot_totals(self, kind: RoomKind, on: date | str) -> list[SlotTotal]:
        kind = RoomKind(kind)
        policy = self._policies.for_kind(kind)
        table = self.per_room_slot_table(kind, on)

        out: list[SlotTotal] = []
        for index, slot in enumerate(policy.slots):
            out.append(
                SlotTotal(
                    slot=slot,
                    label=policy.slot_export_labels[index],
                    total=sum(row.slot_counts[index] for row in table),
                )
            )
        return out

    def room_totals(self, kind: RoomKind, on: date | str) -> list[RoomTotal]:
        return [RoomTotal(name=row.room.name, total=row.total) for row in self.per_room_slot_table(kind, on)]

    def dashboard_summary(self, on: date | str) -> DashboardSummary:
        lab_total, class_total = self.dashboard_totals(on)
        return DashboardSummary(
            lab_count=len(self._rooms(RoomKind.LAB)),
            class_count=len(self._rooms(RoomKind.CLASS)),
            lab_attendance=lab_total,
            class_attendance=class_total,
        )

    def _rooms(self, kind: RoomKind) -> Sequence[Room]:
        return self._store.list(RecordKind.rooms_of(kind))

    def _entries(self, kind: RoomKind) -> Iterable[AttendanceEntry]:
        return self._store.list(RecordKind.attendance_of(kind))

    def _kind_of(self, room_id: str) -> Optional[RoomKind]:
        for kind in RoomKind:
            if self._store.find(RecordKind.rooms_of(kind), room_id) is not None:
                return kind
        return None
