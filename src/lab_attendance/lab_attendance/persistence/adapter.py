from __future__ import annotations

import logging
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Callable, Optional

from ..common.notifications import NotificationCenter
from ..core.enums import RecordKind
from ..core.exceptions import TransportFailure
from ..rooms.factory import RoomPolicyFactory
from ..store.entity_store import SNAPSHOT_KEYS
from ..store.repository import EntityRepository
from .api_client import RemoteStoreClient
from .local_storage import LocalJsonStorage

logger = logging.getLogger(__name__)


class PersistenceAdapter:
    """Keeps the entity store in step with the local file and the remote API.

    Local saves are synchronous. Remote calls are fire-and-forget on a
    single worker, so they reach the server in mutation order; their outcome
    never changes the in-memory state and failures only produce a soft
    notification.
    """

    def __init__(
        self,
        store: EntityRepository,
        local: LocalJsonStorage,
        remote: Optional[RemoteStoreClient] = None,
        *,
        notifications: Optional[NotificationCenter] = None,
        policies: Optional[RoomPolicyFactory] = None,
        executor: Optional[Executor] = None,
    ):
        self._store = store
        self._local = local
        self._remote = remote
        self._notifications = notifications or NotificationCenter()
        self._policies = policies or RoomPolicyFactory()
        self._executor = executor or (ThreadPoolExecutor(max_workers=1, thread_name_prefix="remote-sync") if remote else None)

    @property
    def local_path(self):
        return self._local.path

    def load(self) -> str:
        """Fill the store from the remote API, else from the local file.

        Returns where the data came from: "remote", "local" or "empty".
        """

        if self._remote is not None:
            try:
                snapshot = {key: self._remote.list(kind) for kind, key in SNAPSHOT_KEYS.items()}
                self._store.restore(snapshot)
            except TransportFailure as e:
                logger.warning("Error loading data from API, falling back to local storage: %s", e)
            except (AttributeError, KeyError, ValueError, TypeError) as e:
                logger.warning("Malformed records from API, falling back to local storage: %r", e)
            else:
                self.save_local()
                logger.info("Loaded data from remote store")
                return "remote"

        snapshot = self._local.load()
        if snapshot is not None:
            try:
                self._store.restore(snapshot)
            except (AttributeError, KeyError, ValueError, TypeError) as e:
                logger.warning("Malformed records in %s, starting empty: %r", self._local.path, e)
            else:
                logger.info("Loaded data from %s", self._local.path)
                return "local"

        self._store.restore({})
        return "empty"

    def save_local(self) -> None:
        self._local.save(self._store.snapshot())

    def record_created(self, kind: RecordKind, record_id: str) -> None:
        self.save_local()
        payload = self._payload(kind, record_id)
        if payload is not None:
            self._dispatch(lambda remote: remote.create(kind, payload), f"create {kind.value}")

    def record_updated(self, kind: RecordKind, record_id: str) -> None:
        self.save_local()
        payload = self._payload(kind, record_id)
        if payload is not None:
            self._dispatch(lambda remote: remote.update(kind, record_id, payload), f"update {kind.value}")

    def record_deleted(self, kind: RecordKind, record_id: str) -> None:
        self.save_local()
        self._dispatch(lambda remote: remote.delete(kind, record_id), f"delete {kind.value}")

    def shutdown(self, wait: bool = True) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=wait)
        if self._remote is not None:
            self._remote.close()

    def _payload(self, kind: RecordKind, record_id: str) -> Optional[dict]:
        record = self._store.find(kind, record_id)
        if record is None:
            return None
        policy = self._policies.for_kind(kind)
        return policy.attendance_to_dict(record) if kind.is_attendance else policy.room_to_dict(record)

    def _dispatch(self, call: Callable[[RemoteStoreClient], object], action: str) -> None:
        if self._remote is None or self._executor is None:
            return
        remote = self._remote

        def run() -> None:
            try:
                call(remote)
            except TransportFailure as e:
                logger.warning("Remote %s failed, data kept locally: %s", action, e)
                self._notifications.error(f"Could not reach the server ({action}); changes saved locally.")

        self._executor.submit(run)
