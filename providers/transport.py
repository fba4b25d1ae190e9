from __future__ import annotations

from typing import Protocol, runtime_checkable, Optional, Dict, Tuple


# (field name, (filename, content))
FileField = Tuple[str, Tuple[str, bytes]]


@runtime_checkable
class HTTPTransport(Protocol):
    """
    Outbound HTTP abstraction used by storage drivers.

    Every call returns the raw response body. Implementations raise
    core.errors.TransportError when the call fails outright.
    """

    def submit(self, url: str, data: Dict[str, str], file: FileField) -> bytes: ...

    def post(self, url: str, data: Dict[str, str]) -> bytes: ...

    def get(self, url: str, params: Optional[Dict[str, str]] = None) -> bytes: ...
