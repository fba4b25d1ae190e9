# health/router.py
from fastapi import APIRouter, Depends

from core.settings import get_settings
from core.providers import storage_from_request
from providers.storage import StorageProvider

router = APIRouter(tags=["health"])

@router.get("/health")
def health():
    # Keep this super simple and always unauthenticated
    return {"ok": True}

@router.get("/health/storage")
def health_storage(storage: StorageProvider = Depends(storage_from_request)):
    """
    Reports the resolved storage wiring without calling the backend:
      - driver variant and prefix
      - config keys that are still empty
    """
    config = get_settings().storage
    return {
        "ok": True,
        "driver": getattr(getattr(storage, "adapter", None), "name", config.driver),
        "prefix": getattr(storage, "prefix", ""),
        "upload": storage.upload(),
        "missingConfig": config.missing(),
    }
