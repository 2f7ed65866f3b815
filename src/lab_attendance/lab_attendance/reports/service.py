from __future__ import annotations

import io
import logging
import threading
from dataclasses import dataclass
from datetime import date
from typing import BinaryIO, Optional

from ..common.datetime_utils import coerce_date, format_iso_date, today_local
from ..common.notifications import NotificationCenter
from ..core.constants import RECORDS_SHEET_NAME
from ..core.enums import RoomKind
from ..persistence.adapter import PersistenceAdapter
from ..rooms.factory import RoomPolicyFactory
from .aggregation import AggregationEngine
from .exporter import ImportResult, ReportExporter
from .workbook import read_first_sheet, write_workbook

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WorkbookFile:
    filename: str
    content: io.BytesIO


class ReportService:
    def __init__(
        self,
        engine: AggregationEngine,
        exporter: ReportExporter,
        persistence: PersistenceAdapter,
        *,
        notifications: Optional[NotificationCenter] = None,
        policies: Optional[RoomPolicyFactory] = None,
        lock: Optional[threading.RLock] = None,
    ):
        self._engine = engine
        self._exporter = exporter
        self._persistence = persistence
        self._notifications = notifications or NotificationCenter()
        self._policies = policies or RoomPolicyFactory()
        self._lock = lock or threading.RLock()

    def dashboard(self, on: date | str) -> dict:
        """Everything the dashboard page draws for one date, as plain data."""

        on = coerce_date(on)
        summary = self._engine.dashboard_summary(on)
        out: dict = {
            "date": format_iso_date(on),
            "summary": {
                "total_labs": summary.lab_count,
                "total_classes": summary.class_count,
                "lab_attendance": summary.lab_attendance,
                "class_attendance": summary.class_attendance,
            },
        }
        for policy in self._policies.all():
            kind = policy.kind
            out[kind.value] = {
                "slots": list(policy.slots),
                "table": [
                    {
                        "id": row.room.id,
                        "name": row.room.name,
                        "capacity": row.room.capacity,
                        "slots": list(row.slot_counts),
                        "total": row.total,
                    }
                    for row in self._engine.per_room_slot_table(kind, on)
                ],
                "room_totals": [{"name": t.name, "total": t.total} for t in self._engine.room_totals(kind, on)],
                "slot_totals": [
                    {"slot": t.slot, "label": t.label, "total": t.total} for t in self._engine.slot_totals(kind, on)
                ],
                "grouped": [
                    {"name": s.name, "slots": list(s.slot_counts)} for s in self._engine.grouped_series(kind, on)
                ],
            }
        return out

    def export_table(self, kind: RoomKind, on: date | str) -> list[list]:
        return self._exporter.export_table(kind, on)

    def export_all_records(self) -> list[list]:
        return self._exporter.export_all_records()

    def import_records(self, rows) -> ImportResult:
        with self._lock:
            result = self._exporter.import_records(rows)
            self._persistence.save_local()
        self._notifications.success(
            f"Attendance data imported: {result.imported} rows imported, {result.skipped} skipped."
        )
        return result

    def summary_workbook(self, kind: RoomKind, on: date | str) -> WorkbookFile:
        on = coerce_date(on)
        policy = self._policies.for_kind(kind)
        content = write_workbook(self.export_table(kind, on), policy.summary_sheet_name)
        return WorkbookFile(filename=f"{policy.kind.value}-summary-{format_iso_date(on)}.xlsx", content=content)

    def records_workbook(self) -> WorkbookFile:
        content = write_workbook(self.export_all_records(), RECORDS_SHEET_NAME)
        return WorkbookFile(filename=f"attendance-data-{format_iso_date(today_local())}.xlsx", content=content)

    def import_workbook(self, source: BinaryIO) -> ImportResult:
        return self.import_records(read_first_sheet(source))
