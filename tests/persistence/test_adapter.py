from __future__ import annotations

import json

from src.lab_attendance.lab_attendance.core.enums import NotificationLevel, RecordKind
from src.lab_attendance.lab_attendance.persistence.local_storage import LocalJsonStorage


def _local_snapshot():
    return {
        "labs": [{"id": "lab-1", "name": "AIML-324A", "capacity": 40}],
        "classes": [],
        "labAttendance": [
            {
                "id": "la-1",
                "date": "2024-01-10",
                "labId": "lab-1",
                "labName": "AIML-324A",
                "slot": "9:10-11:10",
                "count": 25,
            }
        ],
        "classAttendance": [],
    }


def test_load_falls_back_to_local_file_when_remote_fails(store, storage_path, make_adapter, fake_remote):
    LocalJsonStorage(storage_path).save(_local_snapshot())
    adapter = make_adapter(fake_remote(fail=True))

    assert adapter.load() == "local"
    assert [lab.name for lab in store.list(RecordKind.LAB)] == ["AIML-324A"]
    assert store.list(RecordKind.LAB_ATTENDANCE)[0].count == 25


def test_load_without_remote_or_file_is_empty(store, make_adapter):
    adapter = make_adapter()

    assert adapter.load() == "empty"
    assert store.snapshot() == {"labs": [], "classes": [], "labAttendance": [], "classAttendance": []}


def test_load_from_remote_refreshes_local_file(store, storage_path, make_adapter, fake_remote):
    remote = fake_remote(data={RecordKind.CLASS: [{"id": "c-1", "name": "AIML-322A", "capacity": 90}]})
    adapter = make_adapter(remote)

    assert adapter.load() == "remote"
    assert store.find(RecordKind.CLASS, "c-1").name == "AIML-322A"

    saved = json.loads(storage_path.read_text(encoding="utf-8"))
    assert saved["classes"] == [{"id": "c-1", "name": "AIML-322A", "capacity": 90}]


def test_create_sends_serialized_record(store, make_adapter, fake_remote):
    remote = fake_remote()
    adapter = make_adapter(remote)
    lab_id = store.add(RecordKind.LAB, {"name": "AIML-324A", "capacity": 40})

    adapter.record_created(RecordKind.LAB, lab_id)

    assert remote.calls == [("create", RecordKind.LAB, {"id": lab_id, "name": "AIML-324A", "capacity": 40})]


def test_remote_failure_keeps_local_state_and_notifies(store, storage_path, notifications, make_adapter, fake_remote):
    adapter = make_adapter(fake_remote(fail=True))
    lab_id = store.add(RecordKind.LAB, {"name": "AIML-324A", "capacity": 40})

    adapter.record_created(RecordKind.LAB, lab_id)

    assert store.find(RecordKind.LAB, lab_id) is not None
    saved = json.loads(storage_path.read_text(encoding="utf-8"))
    assert [lab["id"] for lab in saved["labs"]] == [lab_id]

    queued = notifications.drain()
    assert len(queued) == 1
    assert queued[0].level == NotificationLevel.ERROR


def test_update_and_delete_go_to_remote_in_order(store, make_adapter, fake_remote):
    remote = fake_remote()
    adapter = make_adapter(remote)
    lab_id = store.add(RecordKind.LAB, {"name": "AIML-324A", "capacity": 40})
    store.update(RecordKind.LAB, lab_id, {"capacity": 35})
    adapter.record_updated(RecordKind.LAB, lab_id)
    store.remove(RecordKind.LAB, lab_id)
    adapter.record_deleted(RecordKind.LAB, lab_id)

    assert [c[0] for c in remote.calls] == ["update", "delete"]
    assert remote.calls[0][3]["capacity"] == 35
    assert remote.calls[1] == ("delete", RecordKind.LAB, lab_id)


def test_without_remote_only_local_file_is_written(store, storage_path, make_adapter):
    adapter = make_adapter()
    store.add(RecordKind.LAB, {"name": "AIML-325M", "capacity": 40})

    adapter.save_local()

    assert LocalJsonStorage(storage_path).load()["labs"][0]["name"] == "AIML-325M"


def test_local_storage_ignores_non_object_file(storage_path):
    storage_path.write_text("[]", encoding="utf-8")

    assert LocalJsonStorage(storage_path).load() is None


def test_local_storage_ignores_corrupt_file(storage_path):
    storage_path.write_text("{not json", encoding="utf-8")

    assert LocalJsonStorage(storage_path).load() is None


def test_corrupt_local_file_loads_empty(store, storage_path, make_adapter):
    storage_path.write_text('{"labs": [{"id": "lab-1", "na', encoding="utf-8")

    assert make_adapter().load() == "empty"
    assert store.list(RecordKind.LAB) == ()


def test_malformed_remote_records_fall_back_to_local(store, storage_path, make_adapter, fake_remote):
    LocalJsonStorage(storage_path).save(_local_snapshot())
    remote = fake_remote(
        data={
            RecordKind.LAB_ATTENDANCE: [
                {"id": "a", "date": "2024-01-10", "lab_id": "x", "slot": "9:10-11:10", "count": 3}
            ]
        }
    )

    assert make_adapter(remote).load() == "local"
    assert [e.id for e in store.list(RecordKind.LAB_ATTENDANCE)] == ["la-1"]


def test_unconvertible_remote_value_falls_back_to_local(store, storage_path, make_adapter, fake_remote):
    LocalJsonStorage(storage_path).save(_local_snapshot())
    remote = fake_remote(data={RecordKind.LAB: [{"id": "lab-9", "name": "X", "capacity": "abc"}]})

    assert make_adapter(remote).load() == "local"
    assert store.find(RecordKind.LAB, "lab-9") is None
    assert store.find(RecordKind.LAB, "lab-1") is not None


def test_malformed_local_records_load_empty(store, storage_path, make_adapter):
    LocalJsonStorage(storage_path).save({"labs": [{"name": "no id"}]})

    assert make_adapter().load() == "empty"
    assert store.list(RecordKind.LAB) == ()
