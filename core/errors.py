from __future__ import annotations

from typing import Optional


class StorageError(RuntimeError):
    pass


class ConfigurationError(StorageError):
    """Storage driver selection or wiring cannot be resolved."""


class ProtocolError(StorageError):
    """
    Remote response is not the structured data the protocol expects.

    Keeps the endpoint and a short excerpt of the body so logs are useful
    without dumping whole payloads.
    """

    def __init__(self, message: str, url: str = "", body: bytes = b""):
        super().__init__(message)
        self.url = url
        self.body_excerpt = (body or b"")[:200]


class TransportError(StorageError):
    def __init__(self, message: str, url: str = "", status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        # None when no HTTP response was received at all
        self.status_code = status_code
