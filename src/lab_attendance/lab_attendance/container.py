from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional

from .attendance.service import AttendanceService
from .common.notifications import NotificationCenter
from .core.constants import DEFAULT_API_BASE_URL, DEFAULT_LOCAL_STORAGE_PATH, DEFAULT_REQUEST_TIMEOUT
from .persistence.adapter import PersistenceAdapter
from .persistence.api_client import RemoteStoreClient
from .persistence.local_storage import LocalJsonStorage
from .reports.aggregation import AggregationEngine
from .reports.exporter import ReportExporter
from .reports.service import ReportService
from .rooms.factory import RoomPolicyFactory
from .rooms.service import RoomService
from .store.entity_store import EntityStore


@dataclass(frozen=True)
class Container:
    store: EntityStore
    notifications: NotificationCenter
    persistence: PersistenceAdapter

    aggregation: AggregationEngine
    exporter: ReportExporter

    room_service: RoomService
    attendance_service: AttendanceService
    report_service: ReportService


def build_container(
    *,
    storage_config: dict,
    remote_client: Optional[RemoteStoreClient] = None,
    executor=None,
) -> Container:
    policies = RoomPolicyFactory()
    store = EntityStore(policies)
    notifications = NotificationCenter()
    lock = threading.RLock()

    if remote_client is None and storage_config.get("remote_sync_enabled", True):
        remote_client = RemoteStoreClient(
            str(storage_config.get("api_base_url") or DEFAULT_API_BASE_URL),
            timeout=float(storage_config.get("request_timeout", DEFAULT_REQUEST_TIMEOUT)),
        )

    local = LocalJsonStorage(storage_config.get("local_storage_path") or DEFAULT_LOCAL_STORAGE_PATH)
    persistence = PersistenceAdapter(
        store,
        local,
        remote_client,
        notifications=notifications,
        policies=policies,
        executor=executor,
    )

    aggregation = AggregationEngine(store, policies)
    exporter = ReportExporter(store, aggregation, policies)

    room_service = RoomService(store, persistence, notifications=notifications, policies=policies, lock=lock)
    attendance_service = AttendanceService(
        store, persistence, notifications=notifications, policies=policies, lock=lock
    )
    report_service = ReportService(
        aggregation,
        exporter,
        persistence,
        notifications=notifications,
        policies=policies,
        lock=lock,
    )

    return Container(
        store=store,
        notifications=notifications,
        persistence=persistence,
        aggregation=aggregation,
        exporter=exporter,
        room_service=room_service,
        attendance_service=attendance_service,
        report_service=report_service,
    )
