from __future__ import annotations

from datetime import date

import pytest

from src.lab_attendance.lab_attendance.core.enums import RecordKind
from src.lab_attendance.lab_attendance.core.exceptions import NotFoundError, ValidationError
from src.lab_attendance.lab_attendance.store.entity_store import EntityStore


def _lab_entry(store: EntityStore, lab_id: str, *, day="2024-01-10", slot="9:10-11:10", count=10) -> str:
    return store.add(RecordKind.LAB_ATTENDANCE, {"date": day, "room_id": lab_id, "slot": slot, "count": count})


def test_rooms_listed_in_insertion_order(store):
    ids = [store.add(RecordKind.LAB, {"name": n, "capacity": 40}) for n in ("B", "A", "C")]

    assert [r.id for r in store.list(RecordKind.LAB)] == ids
    assert [r.name for r in store.list(RecordKind.LAB)] == ["B", "A", "C"]
    assert len(set(ids)) == 3


@pytest.mark.parametrize(
    "kind,capacity",
    [(RecordKind.LAB, 41), (RecordKind.LAB, -1), (RecordKind.CLASS, 91), (RecordKind.CLASS, "abc")],
)
def test_capacity_out_of_bounds_rejected(store, kind, capacity):
    with pytest.raises(ValidationError):
        store.add(kind, {"name": "R", "capacity": capacity})

    assert store.list(kind) == ()


def test_capacity_bounds_are_inclusive(store):
    store.add(RecordKind.LAB, {"name": "L0", "capacity": 0})
    store.add(RecordKind.LAB, {"name": "L40", "capacity": "40"})
    store.add(RecordKind.CLASS, {"name": "C90", "capacity": 90})

    assert [r.capacity for r in store.list(RecordKind.LAB)] == [0, 40]
    assert store.list(RecordKind.CLASS)[0].capacity == 90


def test_blank_name_rejected(store):
    with pytest.raises(ValidationError):
        store.add(RecordKind.LAB, {"name": "   ", "capacity": 10})


def test_update_keeps_id_and_position(store):
    first = store.add(RecordKind.CLASS, {"name": "A", "capacity": 60})
    second = store.add(RecordKind.CLASS, {"name": "B", "capacity": 60})

    store.update(RecordKind.CLASS, first, {"name": "A2", "capacity": 70})

    rooms = store.list(RecordKind.CLASS)
    assert [r.id for r in rooms] == [first, second]
    assert rooms[0].name == "A2" and rooms[0].capacity == 70


def test_update_out_of_bounds_leaves_record_unchanged(store):
    lab_id = store.add(RecordKind.LAB, {"name": "L", "capacity": 30})

    with pytest.raises(ValidationError):
        store.update(RecordKind.LAB, lab_id, {"capacity": 45})

    assert store.find(RecordKind.LAB, lab_id).capacity == 30


def test_update_and_remove_unknown_id_raise_not_found(store):
    with pytest.raises(NotFoundError):
        store.update(RecordKind.LAB, "missing", {"name": "X"})
    with pytest.raises(NotFoundError):
        store.remove(RecordKind.CLASS_ATTENDANCE, "missing")


def test_find_unknown_returns_none(store):
    assert store.find(RecordKind.LAB, "nope") is None


def test_attendance_records_room_name_and_parsed_date(store):
    lab_id = store.add(RecordKind.LAB, {"name": "AIML-324A", "capacity": 40})
    entry_id = _lab_entry(store, lab_id, count="25")

    entry = store.find(RecordKind.LAB_ATTENDANCE, entry_id)
    assert entry.date == date(2024, 1, 10)
    assert entry.room_name == "AIML-324A"
    assert entry.room_id == lab_id
    assert entry.count == 25


def test_count_above_capacity_rejected_and_store_unchanged(store):
    lab_id = store.add(RecordKind.LAB, {"name": "L", "capacity": 20})
    entry_id = _lab_entry(store, lab_id, count=20)
    before = store.snapshot()

    with pytest.raises(ValidationError):
        _lab_entry(store, lab_id, count=21)
    with pytest.raises(ValidationError):
        store.update(RecordKind.LAB_ATTENDANCE, entry_id, {"count": 21})

    assert store.snapshot() == before


def test_slot_must_belong_to_kind(store):
    lab_id = store.add(RecordKind.LAB, {"name": "L", "capacity": 40})

    with pytest.raises(ValidationError):
        _lab_entry(store, lab_id, slot="9:10-10:10")


def test_attendance_requires_existing_room_of_same_kind(store):
    class_id = store.add(RecordKind.CLASS, {"name": "C", "capacity": 90})

    with pytest.raises(ValidationError):
        _lab_entry(store, class_id)


@pytest.mark.parametrize("missing", ["date", "room_id", "slot", "count"])
def test_attendance_missing_field_rejected(store, missing):
    lab_id = store.add(RecordKind.LAB, {"name": "L", "capacity": 40})
    fields = {"date": "2024-01-10", "room_id": lab_id, "slot": "9:10-11:10", "count": 5}
    del fields[missing]

    with pytest.raises(ValidationError):
        store.add(RecordKind.LAB_ATTENDANCE, fields)


def test_capacity_shrink_does_not_revalidate_existing_entries(store):
    lab_id = store.add(RecordKind.LAB, {"name": "L", "capacity": 40})
    entry_id = _lab_entry(store, lab_id, count=35)

    store.update(RecordKind.LAB, lab_id, {"capacity": 10})

    assert store.find(RecordKind.LAB_ATTENDANCE, entry_id).count == 35


def test_remove_room_cascades_only_to_its_entries(store):
    keep_lab = store.add(RecordKind.LAB, {"name": "Keep", "capacity": 40})
    drop_lab = store.add(RecordKind.LAB, {"name": "Drop", "capacity": 40})
    class_id = store.add(RecordKind.CLASS, {"name": "C", "capacity": 90})

    kept = _lab_entry(store, keep_lab)
    _lab_entry(store, drop_lab)
    _lab_entry(store, drop_lab, slot="12:10-14:10")
    class_entry = store.add(
        RecordKind.CLASS_ATTENDANCE,
        {"date": "2024-01-10", "room_id": class_id, "slot": "9:10-10:10", "count": 50},
    )

    store.remove(RecordKind.LAB, drop_lab)

    assert [e.id for e in store.list(RecordKind.LAB_ATTENDANCE)] == [kept]
    assert [e.id for e in store.list(RecordKind.CLASS_ATTENDANCE)] == [class_entry]
    assert [r.id for r in store.list(RecordKind.LAB)] == [keep_lab]


def test_snapshot_restore_round_trip(store):
    lab_id = store.add(RecordKind.LAB, {"name": "L", "capacity": 40})
    _lab_entry(store, lab_id, count=7)
    snapshot = store.snapshot()

    other = EntityStore()
    other.restore(snapshot)

    assert other.snapshot() == snapshot
    assert snapshot["labAttendance"][0]["labId"] == lab_id
    assert snapshot["labAttendance"][0]["labName"] == "L"
    assert snapshot["labAttendance"][0]["date"] == "2024-01-10"


def test_restore_accepts_legacy_strength_key(store):
    store.restore({"labs": [{"id": "x1", "name": "Old", "strength": 32}]})

    assert store.find(RecordKind.LAB, "x1").capacity == 32
    assert store.list(RecordKind.CLASS) == ()
