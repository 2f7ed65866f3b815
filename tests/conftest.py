from __future__ import annotations

from concurrent.futures import Executor, Future
from datetime import date

import pytest

from src.lab_attendance.lab_attendance.common.notifications import NotificationCenter
from src.lab_attendance.lab_attendance.container import build_container
from src.lab_attendance.lab_attendance.core.enums import RecordKind
from src.lab_attendance.lab_attendance.core.exceptions import TransportFailure
from src.lab_attendance.lab_attendance.persistence.adapter import PersistenceAdapter
from src.lab_attendance.lab_attendance.persistence.local_storage import LocalJsonStorage
from src.lab_attendance.lab_attendance.store.entity_store import EntityStore


class ImmediateExecutor(Executor):
    """Runs submitted work inline so remote sync is observable in tests."""

    def submit(self, fn, /, *args, **kwargs):
        future: Future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except BaseException as e:
            future.set_exception(e)
        return future


class FakeRemote:
    def __init__(self, *, fail: bool = False, data: dict | None = None):
        self.fail = fail
        self.data = data or {}
        self.calls: list[tuple] = []

    def _maybe_fail(self, what: str):
        if self.fail:
            raise TransportFailure(f"{what}: connection refused")

    def list(self, kind: RecordKind):
        self.calls.append(("list", kind))
        self._maybe_fail("list")
        return list(self.data.get(kind, []))

    def create(self, kind: RecordKind, payload: dict):
        self.calls.append(("create", kind, payload))
        self._maybe_fail("create")
        return {"id": payload["id"]}

    def update(self, kind: RecordKind, record_id: str, payload: dict):
        self.calls.append(("update", kind, record_id, payload))
        self._maybe_fail("update")

    def delete(self, kind: RecordKind, record_id: str):
        self.calls.append(("delete", kind, record_id))
        self._maybe_fail("delete")

    def close(self):
        pass


@pytest.fixture
def day() -> date:
    return date(2024, 1, 10)


@pytest.fixture
def store() -> EntityStore:
    return EntityStore()


@pytest.fixture
def storage_path(tmp_path):
    return tmp_path / "lab_attendance.json"


@pytest.fixture
def notifications() -> NotificationCenter:
    return NotificationCenter()


@pytest.fixture
def make_adapter(store, storage_path, notifications):
    def _make(remote=None) -> PersistenceAdapter:
        return PersistenceAdapter(
            store,
            LocalJsonStorage(storage_path),
            remote,
            notifications=notifications,
            executor=ImmediateExecutor(),
        )

    return _make


@pytest.fixture
def container(storage_path):
    return build_container(
        storage_config={"remote_sync_enabled": False, "local_storage_path": str(storage_path)},
    )


@pytest.fixture
def fake_remote():
    return FakeRemote
