import asyncio

import pytest
from fastapi.testclient import TestClient

from core.errors import BackendError
from db.store.memory import MemoryStore
from main import create_app


class SlowStore(MemoryStore):
    async def _all_lots(self):
        await asyncio.sleep(1)
        return []


class CrashingStore(MemoryStore):
    async def _recent_hardware_logs(self, limit):
        raise KeyError("internal detail")


def test_slow_store_call_times_out():
    store = SlowStore(timeout=0.05)
    with pytest.raises(BackendError):
        asyncio.run(store.list_lots())


def test_timeout_becomes_generic_500(settings):
    app = create_app(settings=settings, store=SlowStore(timeout=0.05))
    with TestClient(app) as client:
        res = client.get("/api/stock")
    assert res.status_code == 500
    assert res.json() == {"ok": False, "message": "server error"}


def test_unexpected_error_does_not_leak_detail(settings):
    app = create_app(settings=settings, store=CrashingStore())
    with TestClient(app, raise_server_exceptions=False) as client:
        res = client.get("/api/hardware/logs")
    assert res.status_code == 500
    assert "internal detail" not in res.text
    assert res.json()["ok"] is False
