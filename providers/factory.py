from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, Optional

from core.context import RequestContext
from core.errors import ConfigurationError
from core.settings import DRIVER_GATEWAY, DRIVER_SIGNED, StorageConfig, get_settings
from .protocol import ProtocolAdapter
from .storage import StorageProvider
from .transport import HTTPTransport
from providers.impl.protocol_gateway import GatewayProtocol
from providers.impl.protocol_signed import SignedProtocol
from providers.impl.storage_ipfs import IpfsStorageProvider
from providers.impl.transport_httpx import HttpxTransport

log = logging.getLogger(__name__)


def _gateway(config: StorageConfig) -> ProtocolAdapter:
    return GatewayProtocol()


def _signed(config: StorageConfig) -> ProtocolAdapter:
    return SignedProtocol(api_user=config.api_user, api_secret=config.api_secret)


_ADAPTERS: Dict[str, Callable[[StorageConfig], ProtocolAdapter]] = {
    DRIVER_GATEWAY: _gateway,
    DRIVER_SIGNED: _signed,
}


def build_adapter(config: StorageConfig, name: Optional[str] = None) -> ProtocolAdapter:
    driver = (name or config.driver or DRIVER_GATEWAY).strip().lower()
    make = _ADAPTERS.get(driver)
    if make is None:
        raise ConfigurationError(
            f"Unknown storage driver {driver!r} (expected one of: {', '.join(sorted(_ADAPTERS))})"
        )
    return make(config)


def build_storage(
    config: StorageConfig,
    context: RequestContext,
    transport: Optional[HTTPTransport] = None,
    name: Optional[str] = None,
) -> StorageProvider:
    """
    Plain constructor: no globals are consulted.
    """
    adapter = build_adapter(config, name)
    return IpfsStorageProvider(
        config=config,
        context=context,
        adapter=adapter,
        transport=transport or HttpxTransport(timeout=config.timeout_seconds),
    )


_cached: Optional[StorageProvider] = None
_lock = threading.Lock()


def get_storage(name: Optional[str] = None, context: Optional[RequestContext] = None) -> StorageProvider:
    """
    Process-wide storage driver, built on first use from get_settings().

    The context of the first caller fixes the prefix for the process.
    """
    global _cached
    if _cached is None:
        with _lock:
            if _cached is None:
                config = get_settings().storage
                config.validate()
                _cached = build_storage(config, context or RequestContext(), name=name)
    return _cached


def reset_storage() -> None:
    global _cached
    with _lock:
        _cached = None
