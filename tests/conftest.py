import asyncio

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine

from core.config import Settings
from db.store.memory import MemoryStore
from db.store.sql import SqlStore
from main import create_app

DEVICE_KEY = "test-device-key"


def _build_store(kind, tmp_path, timeout=5):
    if kind == "memory":
        return MemoryStore(timeout=timeout)
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'inventory.db'}")
    return SqlStore(engine, timeout=timeout)


@pytest.fixture(params=["memory", "sql"])
def store_kind(request):
    return request.param


@pytest.fixture
def run_store(store_kind, tmp_path):
    """Run an async scenario against a fresh store inside one event loop."""

    def run(scenario):
        async def runner():
            store = _build_store(store_kind, tmp_path)
            await store.start()
            try:
                return await scenario(store)
            finally:
                await store.close()

        return asyncio.run(runner())

    return run


@pytest.fixture
def settings():
    return Settings(database_url=None, device_key=DEVICE_KEY, web_origin="*", log_level="WARNING")


@pytest.fixture
def app(store_kind, tmp_path, settings):
    return create_app(settings=settings, store=_build_store(store_kind, tmp_path))


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def device_headers():
    return {"x-api-key": DEVICE_KEY}
