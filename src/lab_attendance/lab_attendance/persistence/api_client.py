from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from ..core.constants import DEFAULT_API_BASE_URL, DEFAULT_REQUEST_TIMEOUT
from ..core.enums import RecordKind
from ..core.exceptions import TransportFailure

logger = logging.getLogger(__name__)

COLLECTIONS = {
    RecordKind.LAB: "labs",
    RecordKind.CLASS: "classes",
    RecordKind.LAB_ATTENDANCE: "lab-attendance",
    RecordKind.CLASS_ATTENDANCE: "class-attendance",
}


class RemoteStoreClient:
    """REST client for the four remote collections.

    Any transport error or non-2xx status is raised as TransportFailure.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_BASE_URL,
        *,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()

    def list(self, kind: RecordKind) -> list[dict]:
        data = self._request("GET", self._url(kind))
        if not isinstance(data, list):
            raise TransportFailure(f"GET {COLLECTIONS[kind]} returned {type(data).__name__}, expected a list")
        return data

    def create(self, kind: RecordKind, payload: dict) -> Any:
        return self._request("POST", self._url(kind), json=payload)

    def update(self, kind: RecordKind, record_id: str, payload: dict) -> Any:
        return self._request("PUT", self._url(kind, record_id), json=payload)

    def delete(self, kind: RecordKind, record_id: str) -> Any:
        return self._request("DELETE", self._url(kind, record_id))

    def close(self) -> None:
        self._session.close()

    def _url(self, kind: RecordKind, record_id: Optional[str] = None) -> str:
        url = f"{self._base_url}/{COLLECTIONS[RecordKind(kind)]}"
        return f"{url}/{record_id}" if record_id is not None else url

    def _request(self, method: str, url: str, **kwargs) -> Any:
        try:
            response = self._session.request(method, url, timeout=self._timeout, **kwargs)
        except requests.RequestException as e:
            raise TransportFailure(f"{method} {url} failed: {e}") from e

        if not response.ok:
            raise TransportFailure(f"{method} {url} returned {response.status_code}")

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None
