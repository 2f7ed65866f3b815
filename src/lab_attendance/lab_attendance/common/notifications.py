from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass
from typing import Deque, List

from ..core.constants import DEFAULT_NOTIFICATION_BUFFER
from ..core.enums import NotificationLevel


@dataclass(frozen=True)
class Notification:
    level: NotificationLevel
    message: str

    def to_dict(self) -> dict:
        return {"level": self.level.value, "message": self.message}


class NotificationCenter:
    """Bounded queue of soft notifications for the front end to show.

    Pushed from the request thread and from the remote sync worker, so access
    is guarded by a lock.
    """

    def __init__(self, maxlen: int = DEFAULT_NOTIFICATION_BUFFER):
        self._items: Deque[Notification] = deque(maxlen=maxlen)
        self._lock = threading.Lock()

    def success(self, message: str) -> None:
        self._push(Notification(NotificationLevel.SUCCESS, message))

    def error(self, message: str) -> None:
        self._push(Notification(NotificationLevel.ERROR, message))

    def _push(self, item: Notification) -> None:
        with self._lock:
            self._items.append(item)

    def drain(self) -> List[Notification]:
        with self._lock:
            items = list(self._items)
            self._items.clear()
        return items
