from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, List, Optional, Protocol

log = logging.getLogger(__name__)


def _to_float(raw: Optional[str], default: float) -> float:
    raw = raw or ""
    if not raw.strip():
        return default
    try:
        return float(raw)
    except Exception:
        return default


# ---------------------------------------------------------------------
# Configuration sources
# ---------------------------------------------------------------------

class ConfigSource(Protocol):
    """
    Anything with a dict-like `get(key)`.

    A plain dict keyed by "storage.ipfs_http_domain" etc. qualifies.
    """

    def get(self, key: str) -> Optional[Any]: ...


class EnvConfigSource:
    """
    Maps dotted config keys onto environment variables:
      storage.ipfs_http_domain -> STORAGE_IPFS_HTTP_DOMAIN
    """

    @staticmethod
    def env_name(key: str) -> str:
        return key.replace(".", "_").upper()

    def get(self, key: str) -> Optional[str]:
        return os.getenv(self.env_name(key))


def _get(source: ConfigSource, key: str, default: str = "") -> str:
    v = source.get(key)
    if v is None:
        return default
    return str(v).strip() or default


# ---------------------------------------------------------------------
# Settings models
# ---------------------------------------------------------------------

DRIVER_GATEWAY = "gateway"
DRIVER_SIGNED = "signed"

PROTOCOL_SCHEMES = ("follow", "auto", "http", "https", "path")


@dataclass(frozen=True)
class StorageConfig:
    """
    IPFS storage configuration, read once when the driver is built.

    driver:
      - "gateway" -> unsigned gateway API (flapi/*)
      - "signed"  -> authenticated API (md5 signed forms)

    http_protocol:
      - "follow" -> scheme of the current request
      - "auto"   -> protocol-relative "//domain"
      - "http" / "https"
      - "path"   -> no scheme/domain, app base path only
    """
    driver: str = DRIVER_GATEWAY
    http_protocol: str = "follow"
    http_domain: str = ""

    # Signed variant only
    api_user: str = ""
    api_secret: str = ""

    timeout_seconds: float = 30.0

    def missing(self) -> List[str]:
        out: List[str] = []
        if self.http_protocol != "path" and not self.http_domain:
            out.append("storage.ipfs_http_domain")
        if self.driver == DRIVER_SIGNED:
            if not self.api_user:
                out.append("storage.ipfs_api_user")
            if not self.api_secret:
                out.append("storage.ipfs_api_secret")
        return out

    def validate(self) -> List[str]:
        """
        Missing values are allowed (they default to ""), so this only reports.
        A missing domain falls back to the request host at runtime.
        """
        missing = self.missing()
        if missing:
            log.warning("[IPFS] storage config incomplete. Missing: %s", ", ".join(missing))
        return missing


@dataclass(frozen=True)
class Settings:
    storage: StorageConfig


# ---------------------------------------------------------------------
# Loaders
# ---------------------------------------------------------------------

def _normalize_driver(raw: str) -> str:
    v = (raw or "").strip().lower()
    if v in ("", "gateway", "ipfs", "plain", "default"):
        return DRIVER_GATEWAY
    if v in ("signed", "auth", "authenticated"):
        return DRIVER_SIGNED
    # Unknown names are kept so the factory can reject them
    return v


def _normalize_protocol(raw: str) -> str:
    v = (raw or "").strip().lower()
    return v or "follow"


def load_storage_config(source: Optional[ConfigSource] = None) -> StorageConfig:
    src = source if source is not None else EnvConfigSource()

    return StorageConfig(
        driver=_normalize_driver(_get(src, "storage.driver")),
        http_protocol=_normalize_protocol(_get(src, "storage.ipfs_http_protocol")),
        http_domain=_get(src, "storage.ipfs_http_domain").rstrip("/"),
        api_user=_get(src, "storage.ipfs_api_user"),
        api_secret=_get(src, "storage.ipfs_api_secret"),
        timeout_seconds=max(1.0, _to_float(_get(src, "storage.ipfs_timeout_seconds"), 30.0)),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings(storage=load_storage_config())
