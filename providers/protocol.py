from __future__ import annotations

from typing import Protocol, runtime_checkable, Optional, Dict, Any


@runtime_checkable
class ProtocolAdapter(Protocol):
    """
    Wire format of one IPFS backend API.

    Paths are relative to the driver prefix (no leading slash). Form builders
    are called once per request, so signed variants stamp a fresh timestamp.
    """

    name: str
    object_path: str
    upload_path: str
    delete_path: str
    info_path: str

    def store_form(self, name: str) -> Dict[str, str]: ...

    def delete_form(self, name: str) -> Dict[str, str]: ...

    def info_form(self, name: str) -> Dict[str, str]: ...

    def parse_delete(self, decoded: Any) -> bool: ...

    def parse_info(self, decoded: Any) -> Optional[Dict[str, Any]]: ...
