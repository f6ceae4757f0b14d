from pathlib import Path

from docquery.config import Settings


def test_defaults(monkeypatch):
    for name in (
        "COUCHBASE_BUCKET",
        "QUERY_EXECUTOR_WITH_SYNC_GATEWAY",
        "QUERY_EXECUTOR_USE_DEFAULT_ID_FIELDS",
        "ENTITIES_FILE",
        "CORS_ALLOW_ORIGINS",
    ):
        monkeypatch.delenv(name, raising=False)
    s = Settings.from_env()
    assert s.bucket == "default"
    assert s.with_sync_gateway is False
    assert s.use_default_id_fields is True
    assert s.entities_path == Path("config/entities.yaml")
    assert s.cors_origins == ()


def test_from_env(monkeypatch):
    monkeypatch.setenv("COUCHBASE_BUCKET", "travel-sample")
    monkeypatch.setenv("QUERY_EXECUTOR_WITH_SYNC_GATEWAY", "TRUE")
    monkeypatch.setenv("QUERY_EXECUTOR_USE_DEFAULT_ID_FIELDS", "false")
    monkeypatch.setenv("GLOBAL_MAX_PAGE_SIZE", "250")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "http://a, http://b ,")
    s = Settings.from_env()
    assert s.bucket == "travel-sample"
    assert s.with_sync_gateway is True
    assert s.use_default_id_fields is False
    assert s.global_max_page_size == 250
    assert s.cors_origins == ("http://a", "http://b")
