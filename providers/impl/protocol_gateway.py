from __future__ import annotations

from typing import Any, Dict, Optional

from providers.protocol import ProtocolAdapter


class GatewayProtocol(ProtocolAdapter):
    """
    Unauthenticated IPFS gateway API.

      upload: POST flapi/add         (multipart file + key/fileName)
      delete: POST flapi/files/rm    (arg=<name>)
      stat:   POST flapi/files/stat  (arg=<name>), "Hash" present when found
      fetch:  GET  flipfs/<name>
    """

    name = "gateway"
    object_path = "flipfs"
    upload_path = "flapi/add"
    delete_path = "flapi/files/rm"
    info_path = "flapi/files/stat"

    def store_form(self, name: str) -> Dict[str, str]:
        return {"key": name, "fileName": name}

    def delete_form(self, name: str) -> Dict[str, str]:
        return {"arg": name}

    def info_form(self, name: str) -> Dict[str, str]:
        return {"arg": name}

    def parse_delete(self, decoded: Any) -> bool:
        return bool(decoded)

    def parse_info(self, decoded: Any) -> Optional[Dict[str, Any]]:
        if not isinstance(decoded, dict) or decoded.get("Hash") is None:
            return None
        out: Dict[str, Any] = {"hash": decoded["Hash"]}
        if "Size" in decoded:
            out["size"] = decoded["Size"]
        return out
