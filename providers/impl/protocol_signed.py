from __future__ import annotations

import hashlib
import time
from typing import Any, Callable, Dict, Optional

from providers.protocol import ProtocolAdapter


def sign_request(api_user: str, timestamp: int, secret: str) -> str:
    raw = f"{api_user}#{timestamp}#{secret}"
    return hashlib.md5(raw.encode("utf-8")).hexdigest()


def _is_ok(decoded: Any) -> bool:
    if not isinstance(decoded, dict):
        return False
    code = decoded.get("code")
    # bool is an int subclass; true must not pass for 1
    if isinstance(code, bool):
        return False
    return code in (1, "1")


class SignedProtocol(ProtocolAdapter):
    """
    Authenticated IPFS API.

    Every non-fetch request carries {sign, api_user, time, filename} where
    sign = md5("<api_user>#<time>#<secret>"). The timestamp is read from
    `clock` each time a form is built; forms are never reused.
    Responses look like {"code": 1, "data": {...}, "msg": "..."}.
    """

    name = "signed"
    object_path = "file"
    upload_path = "api/upload"
    delete_path = "api/delete"
    info_path = "api/info"

    def __init__(self, api_user: str = "", api_secret: str = "", clock: Callable[[], float] = time.time):
        self.api_user = api_user or ""
        self._secret = api_secret or ""
        self._clock = clock

    def signed_form(self, name: str) -> Dict[str, str]:
        ts = int(self._clock())
        return {
            "sign": sign_request(self.api_user, ts, self._secret),
            "api_user": self.api_user,
            "time": str(ts),
            "filename": name,
        }

    def store_form(self, name: str) -> Dict[str, str]:
        return self.signed_form(name)

    def delete_form(self, name: str) -> Dict[str, str]:
        return self.signed_form(name)

    def info_form(self, name: str) -> Dict[str, str]:
        return self.signed_form(name)

    def parse_delete(self, decoded: Any) -> bool:
        if isinstance(decoded, dict) and "code" in decoded:
            return _is_ok(decoded)
        return bool(decoded)

    def parse_info(self, decoded: Any) -> Optional[Dict[str, Any]]:
        if not _is_ok(decoded):
            return None
        data = decoded.get("data")
        return dict(data) if isinstance(data, dict) else {}
