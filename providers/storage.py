from __future__ import annotations

from typing import Protocol, runtime_checkable, Optional, Dict, Any


@runtime_checkable
class StorageProvider(Protocol):
    """
    Uniform file storage contract.

    `safe` is accepted on every call for parity with other drivers; the IPFS
    driver has no separate safe area so it is ignored.
    """

    def set(self, name: str, content: bytes, safe: bool = False, attname: Optional[str] = None) -> Any: ...

    def get(self, name: str, safe: bool = False) -> bytes: ...

    def delete(self, name: str, safe: bool = False) -> bool: ...

    def has(self, name: str, safe: bool = False) -> bool: ...

    def url(self, name: str, safe: bool = False, attname: Optional[str] = None) -> str: ...

    def path(self, name: str, safe: bool = False) -> str: ...

    def info(self, name: str, safe: bool = False, attname: Optional[str] = None) -> Dict[str, Any]: ...

    def upload(self) -> str: ...
