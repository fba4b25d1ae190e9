import hashlib

import pytest

from core.errors import ProtocolError
from core.settings import StorageConfig
from providers.impl.protocol_signed import SignedProtocol, sign_request
from providers.impl.storage_ipfs import IpfsStorageProvider

from fakes import FakeTransport

PREFIX = "https://ipfs.example.com"


def _driver(context, transport, clock=lambda: 1000):
    cfg = StorageConfig(driver="signed", http_protocol="https", http_domain="ipfs.example.com", api_user="u1", api_secret="s1")
    return IpfsStorageProvider(cfg, context, SignedProtocol("u1", "s1", clock=clock), transport)


def test_signature_vector():
    assert sign_request("u1", 1000, "s1") == hashlib.md5(b"u1#1000#s1").hexdigest()


@pytest.mark.parametrize("args", [("u2", 1000, "s1"), ("u1", 1001, "s1"), ("u1", 1000, "s2")])
def test_signature_changes_with_any_input(args):
    assert sign_request(*args) != sign_request("u1", 1000, "s1")


def test_signed_form_uses_clock_per_call():
    ticks = iter([1000, 1001])
    p = SignedProtocol("u1", "s1", clock=lambda: next(ticks))

    first = p.info_form("a.txt")
    second = p.info_form("a.txt")
    assert first == {"sign": sign_request("u1", 1000, "s1"), "api_user": "u1", "time": "1000", "filename": "a.txt"}
    assert second["time"] == "1001"
    assert second["sign"] != first["sign"]


def test_store_sends_signed_form_instead_of_key(context):
    t = FakeTransport(default={"code": 1, "data": {"filename": "a.txt"}})
    d = _driver(context, t)

    assert d.upload() == f"{PREFIX}/api/upload"
    assert d.set("a.txt", b"hello") == {"code": 1, "data": {"filename": "a.txt"}}
    kind, url, req = t.calls[0]
    assert (kind, url) == ("submit", f"{PREFIX}/api/upload")
    assert req["data"] == {"sign": sign_request("u1", 1000, "s1"), "api_user": "u1", "time": "1000", "filename": "a.txt"}
    assert "key" not in req["data"] and "fileName" not in req["data"]


def test_fetch_uses_file_path(context):
    t = FakeTransport(default=b"bytes")
    assert _driver(context, t).get("a.txt") == b"bytes"
    assert t.calls[0][1] == f"{PREFIX}/file/a.txt"
    assert "e" in t.calls[0][2]["params"]


def test_info_posts_signed_form_not_bare_timestamp(context):
    t = FakeTransport(default={"code": 1, "data": {"size": 5, "hash": "QmA"}})
    info = _driver(context, t).info("a.txt")

    assert info == {"size": 5, "hash": "QmA", "name": "a.txt", "url": f"{PREFIX}/file/a.txt", "key": "a.txt"}
    kind, url, req = t.calls[0]
    assert url == f"{PREFIX}/api/info"
    assert req["data"]["sign"] == sign_request("u1", 1000, "s1")
    assert req["data"]["filename"] == "a.txt"


def test_info_contract_fields_win_over_payload(context):
    t = FakeTransport(default={"code": 1, "data": {"name": "other", "url": "elsewhere"}})
    info = _driver(context, t).info("a.txt")
    assert info["name"] == "a.txt"
    assert info["url"] == f"{PREFIX}/file/a.txt"


@pytest.mark.parametrize("body", [{"code": 0, "msg": "not found"}, {"data": {}}, b"<html>", [1, 2]])
def test_info_unsuccessful_is_empty(context, body):
    d = _driver(context, FakeTransport(default=body))
    assert d.info("a.txt") == {}
    assert d.has("a.txt") is False


def test_info_success_with_empty_data_still_exists(context):
    d = _driver(context, FakeTransport(default={"code": "1", "data": None}))
    assert d.has("a.txt") is True


def test_delete_maps_code(context):
    assert _driver(context, FakeTransport(default={"code": 1})).delete("a.txt") is True
    assert _driver(context, FakeTransport(default={"code": 0, "msg": "missing"})).delete("a.txt") is False
    with pytest.raises(ProtocolError):
        _driver(context, FakeTransport(default=b"")).delete("a.txt")


@pytest.mark.parametrize("code, ok", [(1, True), ("1", True), (1.9, False), (True, False), ("1.0", False), (2, False)])
def test_success_code_compared_exactly(context, code, ok):
    d = _driver(context, FakeTransport(default={"code": code, "data": {}}))
    assert d.has("a.txt") is ok
    assert SignedProtocol().parse_delete({"code": code}) is ok
