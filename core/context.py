from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request


@dataclass(frozen=True)
class RequestContext:
    """
    Ambient request values the storage prefix is derived from.

    base_path is the directory the app is served from ("" or "/" at root).
    """
    scheme: str = "http"
    host: str = "localhost"
    base_path: str = ""

    @classmethod
    def from_request(cls, request: Request) -> "RequestContext":
        # Host header keeps a non-default port; fall back to the parsed URL
        host = (request.headers.get("host") or request.url.netloc or "localhost").strip()
        root_path = str(request.scope.get("root_path") or "")
        return cls(
            scheme=(request.url.scheme or "http").lower(),
            host=host,
            base_path=root_path,
        )

    def origin(self) -> str:
        return f"{self.scheme}://{self.host}"
