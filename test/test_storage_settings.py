from core.settings import EnvConfigSource, StorageConfig, get_settings, load_storage_config


def test_env_keys_map_to_upper_snake():
    assert EnvConfigSource.env_name("storage.ipfs_http_domain") == "STORAGE_IPFS_HTTP_DOMAIN"


def test_storage_config_read_from_env(monkeypatch):
    monkeypatch.setenv("STORAGE_DRIVER", "authenticated")
    monkeypatch.setenv("STORAGE_IPFS_HTTP_PROTOCOL", "HTTPS")
    monkeypatch.setenv("STORAGE_IPFS_HTTP_DOMAIN", "ipfs.example.com/")
    monkeypatch.setenv("STORAGE_IPFS_API_USER", "u1")
    monkeypatch.setenv("STORAGE_IPFS_API_SECRET", "s1")

    get_settings.cache_clear()
    s = get_settings()
    assert s.storage.driver == "signed"
    assert s.storage.http_protocol == "https"
    assert s.storage.http_domain == "ipfs.example.com"
    assert s.storage.api_user == "u1"
    assert s.storage.api_secret == "s1"


def test_missing_values_default_to_empty(monkeypatch):
    for name in (
        "STORAGE_DRIVER",
        "STORAGE_IPFS_HTTP_PROTOCOL",
        "STORAGE_IPFS_HTTP_DOMAIN",
        "STORAGE_IPFS_API_USER",
        "STORAGE_IPFS_API_SECRET",
        "STORAGE_IPFS_TIMEOUT_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)

    get_settings.cache_clear()
    s = get_settings()
    assert s.storage == StorageConfig()
    assert s.storage.driver == "gateway"
    assert s.storage.http_protocol == "follow"
    assert s.storage.http_domain == ""


def test_dict_source_and_unknown_driver_kept():
    cfg = load_storage_config({"storage.driver": "s3", "storage.ipfs_timeout_seconds": "nope"})
    assert cfg.driver == "s3"
    assert cfg.timeout_seconds == 30.0


def test_validate_reports_missing_signed_credentials():
    cfg = load_storage_config({"storage.driver": "signed", "storage.ipfs_http_protocol": "path"})
    assert cfg.validate() == ["storage.ipfs_api_user", "storage.ipfs_api_secret"]
