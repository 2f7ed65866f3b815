from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, Mapping, Optional

from ..attendance.model import AttendanceEntry
from ..common.datetime_utils import coerce_date, format_iso_date
from ..common.ids import generate_id
from ..common.validators import parse_count
from ..core.constants import RECORDS_HEADER
from ..core.enums import RecordKind, RoomKind
from ..core.exceptions import ImportRowError
from ..rooms.factory import RoomPolicyFactory
from ..store.repository import EntityRepository
from .aggregation import AggregationEngine

logger = logging.getLogger(__name__)

DATE_COL, NAME_COL, TYPE_COL, SLOT_COL, COUNT_COL = RECORDS_HEADER


@dataclass(frozen=True)
class ImportResult:
    imported: int
    skipped: int


class ReportExporter:
    """Turns aggregation output into sheet rows and sheet rows back into entries."""

    def __init__(
        self,
        store: EntityRepository,
        engine: AggregationEngine,
        policies: Optional[RoomPolicyFactory] = None,
        *,
        id_factory=generate_id,
    ):
        self._store = store
        self._engine = engine
        self._policies = policies or RoomPolicyFactory()
        self._id_factory = id_factory

    def export_table(self, kind: RoomKind, on: date | str) -> list[list]:
        """[Name, Capacity, <slots...>, Total] rows for every room, header first."""

        policy = self._policies.for_kind(kind)
        rows: list[list] = [[policy.name_header, "Capacity", *policy.slot_export_labels, "Total"]]
        for row in self._engine.per_room_slot_table(kind, on):
            rows.append([row.room.name, row.room.capacity, *row.slot_counts, row.total])
        return rows

    def export_all_records(self) -> list[list]:
        """Every attendance entry of both kinds, labs first, not filtered by date."""

        rows: list[list] = [list(RECORDS_HEADER)]
        for policy in self._policies.all():
            for entry in self._store.list(RecordKind.attendance_of(policy.kind)):
                rows.append([format_iso_date(entry.date), entry.room_name, policy.type_label, entry.slot, entry.count])
        return rows

    def import_records(self, rows: Iterable[Mapping[str, Any]]) -> ImportResult:
        """Rebuild both attendance collections from imported rows.

        Destructive: existing attendance of both kinds is replaced by the
        imported entries, even for a kind with no matching rows. Rows that
        cannot be matched or parsed are skipped and counted.
        """

        imported: dict[RoomKind, list[AttendanceEntry]] = {kind: [] for kind in RoomKind}
        skipped = 0

        for line_no, row in enumerate(rows, start=2):
            try:
                entry = self._parse_row(row)
            except ImportRowError as e:
                skipped += 1
                logger.info("Skipping import row %d: %s", line_no, e)
                continue
            imported[entry.kind].append(entry)

        for kind, entries in imported.items():
            self._store.replace_attendance(kind, entries)

        result = ImportResult(imported=sum(len(v) for v in imported.values()), skipped=skipped)
        logger.info("Imported %d attendance rows (%d skipped)", result.imported, result.skipped)
        return result

    def _parse_row(self, row: Mapping[str, Any]) -> AttendanceEntry:
        policy = self._policies.for_type_label(row.get(TYPE_COL))
        if policy is None:
            raise ImportRowError(f"unrecognized type {row.get(TYPE_COL)!r}")

        name = row.get(NAME_COL)
        room = self._store.find_by_name(policy.kind, str(name)) if name is not None else None
        if room is None:
            raise ImportRowError(f"no {policy.type_label.lower()} named {name!r}")

        try:
            work_date = coerce_date(row.get(DATE_COL))
        except (TypeError, ValueError):
            raise ImportRowError(f"bad date {row.get(DATE_COL)!r}") from None

        slot = str(row.get(SLOT_COL) or "").strip()
        if not policy.is_valid_slot(slot):
            raise ImportRowError(f"unknown slot {slot!r}")

        count = parse_count(row.get(COUNT_COL))
        if count < 0 or count > room.capacity:
            raise ImportRowError(f"count {count} outside 0..{room.capacity}")

        return policy.make_attendance(
            id=self._id_factory(),
            date=work_date,
            room_id=room.id,
            room_name=room.name,
            slot=slot,
            count=count,
        )
