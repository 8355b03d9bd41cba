from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Dict, Optional
from urllib.parse import urlsplit

import requests

from .constants import METADATA_TIMEOUT
from .logging import get_logger

logger = get_logger()


@dataclass(frozen=True)
class HttpResponse:
    status_code: int
    status_message: str
    body: str

    @property
    def ok(self) -> bool:
        return self.status_code == 200


def _origin(uri: str) -> str:
    parsed = urlsplit(uri)
    return f"{parsed.scheme}://{parsed.netloc}"


class ConnectionPools:
    """
    Reusable HTTP sessions, one per endpoint origin.

    Sessions are created on first use. Creation happens under a lock so that
    concurrent callers never build two sessions for the same origin.
    """

    def __init__(
        self,
        *,
        proxy: Optional[str] = None,
        ca_bundle: Optional[str] = None,
        timeout: float = METADATA_TIMEOUT,
    ) -> None:
        self.proxy = proxy
        self.ca_bundle = ca_bundle
        self.timeout = timeout
        self._pools: Dict[str, requests.Session] = {}
        self._lock = threading.Lock()

    def __enter__(self) -> "ConnectionPools":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __len__(self) -> int:
        return len(self._pools)

    def pool_for(self, uri: str) -> requests.Session:
        key = _origin(uri)
        session = self._pools.get(key)
        if session is not None:
            return session
        with self._lock:
            session = self._pools.get(key)
            if session is None:
                session = self._create_session()
                self._pools[key] = session
                logger.debug("created connection pool for %s", key)
        return session

    def _create_session(self) -> requests.Session:
        session = requests.Session()
        if self.proxy:
            session.proxies.update({"http": self.proxy, "https": self.proxy})
        if self.ca_bundle:
            session.verify = self.ca_bundle
        return session

    def fetch(self, uri: str) -> HttpResponse:
        session = self.pool_for(uri)
        resp = session.get(uri, timeout=self.timeout)
        return HttpResponse(
            status_code=resp.status_code,
            status_message=resp.reason or "",
            body=resp.text,
        )

    def close(self) -> None:
        with self._lock:
            pools = list(self._pools.values())
            self._pools.clear()
        for session in pools:
            session.close()
