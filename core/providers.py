from __future__ import annotations

from fastapi import FastAPI, HTTPException, Request

from core.context import RequestContext
from core.errors import ConfigurationError
from providers.factory import get_storage
from providers.storage import StorageProvider


def init_providers(app: FastAPI) -> None:
    """
    Called once at startup. The driver itself is built lazily on the first
    request, because its prefix depends on that request's scheme and host.
    """
    app.state.storage = None


def storage_from_request(request: Request) -> StorageProvider:
    """
    Canonical storage accessor for ALL routers (use as a FastAPI dependency).
    """
    storage = getattr(request.app.state, "storage", None)
    if storage is None:
        try:
            storage = get_storage(context=RequestContext.from_request(request))
        except ConfigurationError as exc:
            raise HTTPException(status_code=500, detail=f"Storage not configured: {exc}") from exc
        request.app.state.storage = storage
    return storage
