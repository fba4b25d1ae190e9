from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from core.errors import TransportError
from providers.transport import HTTPTransport, FileField

log = logging.getLogger(__name__)


class HttpxTransport(HTTPTransport):
    """
    httpx-backed transport.

    A short-lived httpx.Client is opened per call, so instances hold no
    connection state and can be shared between threads. `transport` lets
    tests plug in an httpx.MockTransport.
    """

    def __init__(self, timeout: float = 30.0, transport: Optional[httpx.BaseTransport] = None):
        self.timeout = float(timeout)
        self._transport = transport

    def _client(self) -> httpx.Client:
        kwargs: Dict[str, Any] = {"timeout": self.timeout}
        if self._transport is not None:
            kwargs["transport"] = self._transport
        return httpx.Client(**kwargs)

    def _send(self, method: str, url: str, **kwargs: Any) -> bytes:
        log.debug("[IPFS] %s %s", method, url)
        try:
            with self._client() as client:
                r = client.request(method, url, **kwargs)
                r.raise_for_status()
                return r.content
        except httpx.HTTPStatusError as e:
            status = e.response.status_code if e.response is not None else None
            raise TransportError(f"{method} {url} failed with HTTP {status}", url=url, status_code=status) from e
        except httpx.RequestError as e:
            raise TransportError(f"{method} {url} failed: {e}", url=url) from e

    def submit(self, url: str, data: Dict[str, str], file: FileField) -> bytes:
        field, (filename, content) = file
        return self._send("POST", url, data=data, files={field: (filename, content)})

    def post(self, url: str, data: Dict[str, str]) -> bytes:
        return self._send("POST", url, data=data)

    def get(self, url: str, params: Optional[Dict[str, str]] = None) -> bytes:
        return self._send("GET", url, params=params)
