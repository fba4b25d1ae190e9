import pytest

from core.context import RequestContext
from core.settings import get_settings
from providers.factory import reset_storage

from fakes import MemoryIpfsBackend


@pytest.fixture
def context() -> RequestContext:
    return RequestContext(scheme="https", host="app.example.com", base_path="/")


@pytest.fixture
def backend() -> MemoryIpfsBackend:
    return MemoryIpfsBackend()


@pytest.fixture(autouse=True)
def _fresh_storage():
    get_settings.cache_clear()
    reset_storage()
    yield
    get_settings.cache_clear()
    reset_storage()
