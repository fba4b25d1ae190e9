from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict, Optional

from core.context import RequestContext
from core.errors import ProtocolError, TransportError
from core.settings import StorageConfig
from providers.protocol import ProtocolAdapter
from providers.storage import StorageProvider
from providers.transport import HTTPTransport

log = logging.getLogger(__name__)


def resolve_prefix(config: StorageConfig, context: RequestContext) -> str:
    """
    Base URL every object endpoint hangs off:

      follow      -> scheme of the current request, then as below
      auto        -> //<domain>
      http/https  -> <scheme>://<domain>
      path        -> /<base path> ("" at root)

    domain is the configured override, else the current host.
    """
    scheme = (config.http_protocol or "follow").strip().lower()
    if scheme == "follow":
        scheme = (context.scheme or "http").strip().lower()

    base = (context.base_path or "").strip().strip("\\/")
    prefix = f"/{base}" if base else ""

    if scheme != "path":
        domain = (config.http_domain or context.host or "").strip().rstrip("/")
        if scheme == "auto":
            prefix = f"//{domain}"
        elif scheme in ("http", "https"):
            prefix = f"{scheme}://{domain}"
    return prefix


class IpfsStorageProvider(StorageProvider):
    """
    StorageProvider over an HTTP-accessible IPFS store.

    The prefix is resolved once in __init__; the wire format is delegated to
    `adapter` and the HTTP exchange to `transport`.
    """

    def __init__(
        self,
        config: StorageConfig,
        context: RequestContext,
        adapter: ProtocolAdapter,
        transport: HTTPTransport,
    ):
        self.config = config
        self.context = context
        self.adapter = adapter
        self.transport = transport
        self.prefix = resolve_prefix(config, context)
        log.info("[IPFS] storage ready driver=%s prefix=%r", adapter.name, self.prefix)

    # -----------------------------------------------------------------
    # Helpers
    # -----------------------------------------------------------------

    def _endpoint(self, path: str) -> str:
        return f"{self.prefix}/{path.strip('/')}"

    def _absolute(self, url: str) -> str:
        # "//host/..." and "/path/..." prefixes are resolved against the request
        if url.startswith("//"):
            return f"{self.context.scheme}:{url}"
        if url.startswith("/"):
            return f"{self.context.origin()}{url}"
        return url

    def _post(self, path: str, data: Dict[str, str]) -> Any:
        url = self._absolute(self._endpoint(path))
        return self._decode(self.transport.post(url, data), url)

    @staticmethod
    def _decode(body: bytes, url: str) -> Any:
        try:
            return json.loads(body)
        except (TypeError, ValueError) as e:
            raise ProtocolError(f"Non-JSON response from {url}", url=url, body=body) from e

    # -----------------------------------------------------------------
    # Contract
    # -----------------------------------------------------------------

    def set(self, name: str, content: bytes, safe: bool = False, attname: Optional[str] = None) -> Any:
        url = self._absolute(self.upload())
        if isinstance(content, str):
            content = content.encode("utf-8")
        body = self.transport.submit(url, self.adapter.store_form(name), ("file", (name, content or b"")))
        return self._decode(body, url)

    def get(self, name: str, safe: bool = False) -> bytes:
        url = self._absolute(self.url(name, safe))
        return self.transport.get(url, params={"e": str(int(time.time()))})

    def delete(self, name: str, safe: bool = False) -> bool:
        decoded = self._post(self.adapter.delete_path, self.adapter.delete_form(name))
        return self.adapter.parse_delete(decoded)

    def has(self, name: str, safe: bool = False) -> bool:
        return bool(self.info(name, safe))

    def url(self, name: str, safe: bool = False, attname: Optional[str] = None) -> str:
        return f"{self.prefix}/{self.adapter.object_path}/{(name or '').lstrip('/')}"

    def path(self, name: str, safe: bool = False) -> str:
        return self.url(name, safe)

    def info(self, name: str, safe: bool = False, attname: Optional[str] = None) -> Dict[str, Any]:
        try:
            decoded = self._post(self.adapter.info_path, self.adapter.info_form(name))
        except ProtocolError as e:
            log.warning("[IPFS] info name=%s malformed response: %s", name, e)
            return {}
        except TransportError as e:
            # Missing objects come back as HTTP errors; a dead backend still raises
            if e.status_code is None:
                raise
            log.warning("[IPFS] info name=%s status=%s", name, e.status_code)
            return {}

        payload = self.adapter.parse_info(decoded)
        if payload is None:
            return {}
        return {**payload, "name": name, "url": self.url(name, safe, attname), "key": name}

    def upload(self) -> str:
        return self._endpoint(self.adapter.upload_path)
