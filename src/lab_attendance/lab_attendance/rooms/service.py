from __future__ import annotations

import logging
import threading
from typing import Optional, Sequence

from ..common.notifications import NotificationCenter
from ..core.constants import DEFAULT_CLASSES, DEFAULT_LABS
from ..core.enums import RecordKind, RoomKind
from ..persistence.adapter import PersistenceAdapter
from ..store.repository import EntityRepository
from .factory import RoomPolicyFactory
from .model import Room

logger = logging.getLogger(__name__)


class RoomService:
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

    def list_rooms(self, kind: RoomKind) -> Sequence[Room]:
        return self._store.list(RecordKind.rooms_of(RoomKind(kind)))

    def get_room(self, kind: RoomKind, room_id: str) -> Optional[Room]:
        return self._store.find(RecordKind.rooms_of(RoomKind(kind)), room_id)

    def add_room(self, kind: RoomKind, name: str, capacity) -> str:
        record_kind = RecordKind.rooms_of(RoomKind(kind))
        with self._lock:
            room_id = self._store.add(record_kind, {"name": name, "capacity": capacity})
            self._persistence.record_created(record_kind, room_id)
        room = self._store.find(record_kind, room_id)
        self._notifications.success(f'{self._label(kind)} "{room.name}" added successfully!')
        return room_id

    def edit_room(self, kind: RoomKind, room_id: str, name: str, capacity) -> None:
        record_kind = RecordKind.rooms_of(RoomKind(kind))
        with self._lock:
            self._store.update(record_kind, room_id, {"name": name, "capacity": capacity})
            self._persistence.record_updated(record_kind, room_id)
        room = self._store.find(record_kind, room_id)
        self._notifications.success(f'{self._label(kind)} "{room.name}" updated successfully!')

    def delete_room(self, kind: RoomKind, room_id: str) -> None:
        """Delete a room and, with it, every attendance entry that references it."""

        record_kind = RecordKind.rooms_of(RoomKind(kind))
        with self._lock:
            room = self._store.find(record_kind, room_id)
            self._store.remove(record_kind, room_id)
            self._persistence.record_deleted(record_kind, room_id)
        self._notifications.success(f'{self._label(kind)} "{room.name}" deleted successfully!')

    def seed_defaults(self) -> int:
        """Seed the default AIML rooms into any empty room collection."""

        seeded = 0
        defaults = {RoomKind.LAB: DEFAULT_LABS, RoomKind.CLASS: DEFAULT_CLASSES}
        with self._lock:
            for kind, names in defaults.items():
                record_kind = RecordKind.rooms_of(kind)
                if self._store.list(record_kind):
                    continue
                capacity = self._policies.for_kind(kind).capacity_max
                for name in names:
                    room_id = self._store.add(record_kind, {"name": name, "capacity": capacity})
                    self._persistence.record_created(record_kind, room_id)
                    seeded += 1
        if seeded:
            logger.info("Seeded %d default rooms", seeded)
        return seeded

    def _label(self, kind: RoomKind) -> str:
        return self._policies.for_kind(kind).type_label
