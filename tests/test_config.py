import pytest

from core.config import Settings
from db.database import async_database_url
from db.store import MemoryStore, create_store
from db.store.sql import SqlStore


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("PORT", "DATABASE_URL", "DEVICE_KEY", "WEB_ORIGIN", "STORE_TIMEOUT"):
            monkeypatch.delenv(name, raising=False)
        s = Settings()
        assert s.port == 5000
        assert s.database_url is None
        assert s.use_database is False
        assert s.device_key == "CHANGE_ME_DEVICE_KEY"
        assert s.web_origin == "*"
        assert s.cors_origins == ["*"]
        assert s.store_timeout == 10

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("DATABASE_URL", "postgres://u:p@db/inventory")
        monkeypatch.setenv("WEB_ORIGIN", "https://a.example, https://b.example")
        s = Settings()
        assert s.port == 8080
        assert s.use_database is True
        assert s.cors_origins == ["https://a.example", "https://b.example"]

    def test_empty_database_url_means_memory(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "")
        assert Settings().use_database is False

    def test_overrides(self):
        assert Settings(port=1234).port == 1234
        with pytest.raises(TypeError):
            Settings(not_a_setting=1)


class TestStoreSelection:
    def test_memory_without_database_url(self):
        assert isinstance(create_store(Settings(database_url=None)), MemoryStore)

    def test_sql_with_database_url(self, tmp_path):
        store = create_store(Settings(database_url=f"sqlite+aiosqlite:///{tmp_path / 'x.db'}", store_timeout=3))
        assert isinstance(store, SqlStore)
        assert store.timeout == 3


@pytest.mark.parametrize(
    "url,expected",
    [
        ("postgres://u:p@h/db", "postgresql+asyncpg://u:p@h/db"),
        ("postgresql://u:p@h/db", "postgresql+asyncpg://u:p@h/db"),
        ("postgresql+asyncpg://u:p@h/db", "postgresql+asyncpg://u:p@h/db"),
        ("sqlite+aiosqlite:///x.db", "sqlite+aiosqlite:///x.db"),
    ],
)
def test_async_database_url(url, expected):
    assert async_database_url(url) == expected
