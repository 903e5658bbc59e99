"""HTTP behaviour of the REST endpoints, run against both store variants."""

import pytest


def _add(client, **overrides):
    body = {"uid": "A1", "ma_lo": "L1", "ten": "Widget", "so_luong": 10, "nguoi": "bob"}
    body.update(overrides)
    return client.post("/api/add", json=body)


class TestHealthAndLogin:
    def test_hello(self, client):
        res = client.get("/api/hello")
        assert res.status_code == 200
        assert res.json() == {"message": "Backend OK"}

    def test_demo_login(self, client):
        res = client.post("/api/login", json={"username": "admin", "password": "123456"})
        assert res.json() == {"success": True, "user": {"username": "admin", "role": "admin"}}

    def test_wrong_password(self, client):
        res = client.post("/api/login", json={"username": "admin", "password": "nope"})
        assert res.status_code == 200
        body = res.json()
        assert body["success"] is False
        assert body["message"]
        assert "user" not in body


class TestStock:
    def test_stock_in_then_list(self, client):
        res = _add(client)
        assert res.status_code == 200
        assert res.json() == {"ok": True}

        res = client.get("/api/stock")
        assert res.status_code == 200
        body = res.json()
        assert body["ok"] is True
        lot = body["data"][0]
        assert lot["uid"] == "A1"
        assert lot["ma_lo"] == "L1"
        assert lot["ten"] == "Widget"
        assert lot["so_luong_con_lai"] == 10
        assert lot["trang_thai"] == "tồn kho"
        assert lot["nguoi_nhap"] == "bob"
        assert lot["ngay_nhap"]

    @pytest.mark.parametrize("missing", ["uid", "ma_lo", "ten", "so_luong"])
    def test_stock_in_missing_field(self, client, missing):
        res = _add(client, **{missing: None})
        assert res.status_code == 400
        assert res.json()["ok"] is False
        assert client.get("/api/stock").json()["data"] == []

    def test_stock_in_without_body(self, client):
        res = client.post("/api/add")
        assert res.status_code == 400
        assert res.json()["ok"] is False

    def test_stock_out_beyond_remaining_depletes(self, client):
        _add(client)
        res = client.post("/api/out", json={"uid": "A1", "qty": 15, "nguoi": "eve"})
        assert res.status_code == 200
        assert res.json() == {"ok": True, "remain": 0}

        lot = client.get("/api/stock").json()["data"][0]
        assert lot["so_luong_con_lai"] == 0
        assert lot["trang_thai"] == "đã xuất hết"
        assert lot["nguoi_xuat_cuoi"] == "eve"

    def test_partial_stock_out(self, client):
        _add(client)
        res = client.post("/api/out", json={"uid": "A1", "qty": 4})
        assert res.json() == {"ok": True, "remain": 6}
        lot = client.get("/api/stock").json()["data"][0]
        assert lot["trang_thai"] == "tồn kho"
        assert lot["nguoi_xuat_cuoi"] == "unknown"

    def test_stock_out_unknown_uid(self, client):
        res = client.post("/api/out", json={"uid": "ghost", "qty": 1})
        assert res.status_code == 404
        assert res.json()["ok"] is False
        assert client.get("/api/stock").json()["data"] == []

    def test_stock_out_missing_qty(self, client):
        _add(client)
        res = client.post("/api/out", json={"uid": "A1"})
        assert res.status_code == 400

    def test_out_of_range_numbers_are_bad_requests(self, client):
        res = _add(client, so_luong=10 ** 400)
        assert res.status_code == 400
        assert res.json()["ok"] is False

        _add(client)
        res = client.post("/api/out", json={"uid": "A1", "qty": 10 ** 400})
        assert res.status_code == 400
        assert client.get("/api/stock").json()["data"][0]["so_luong_con_lai"] == 10


class TestHardwareLogs:
    def test_wrong_key_is_rejected_before_storing(self, client):
        res = client.post("/api/hardware/logs", json={"uid": "T1", "value": 3.2}, headers={"x-api-key": "bad"})
        assert res.status_code == 401
        assert res.json()["ok"] is False
        assert client.get("/api/hardware/logs").json() == []

    def test_missing_key_is_rejected(self, client):
        res = client.post("/api/hardware/logs", json={"uid": "T1", "value": 3.2})
        assert res.status_code == 401

    def test_ingest_returns_stored_entry(self, client, device_headers):
        res = client.post("/api/hardware/logs", json={"uid": "T1", "value": 3.2}, headers=device_headers)
        assert res.status_code == 200
        body = res.json()
        assert body["ok"] is True
        data = body["data"]
        assert isinstance(data["id"], int)
        assert data["uid"] == "T1"
        assert data["value"] == 3.2
        assert data["created_at"]

    @pytest.mark.parametrize("body", [{"uid": "T1"}, {"value": 1}, {"uid": "T1", "value": "warm"}, {"uid": "T1", "value": 10 ** 400}, ["T1", 1]])
    def test_ingest_bad_body(self, client, device_headers, body):
        res = client.post("/api/hardware/logs", json=body, headers=device_headers)
        assert res.status_code == 400
        assert res.json()["ok"] is False

    def test_wrong_key_wins_over_malformed_body(self, client):
        res = client.post(
            "/api/hardware/logs",
            content=b"{not json",
            headers={"x-api-key": "bad", "content-type": "application/json"},
        )
        assert res.status_code == 401
        assert res.json()["ok"] is False

    def test_malformed_body_with_valid_key(self, client, device_headers):
        res = client.post(
            "/api/hardware/logs",
            content=b"{not json",
            headers={**device_headers, "content-type": "application/json"},
        )
        assert res.status_code == 400
        assert client.get("/api/hardware/logs").json() == []

    def test_history_newest_first_with_limit(self, client, device_headers):
        for v in range(4):
            client.post("/api/hardware/logs", json={"uid": "T1", "value": v}, headers=device_headers)

        res = client.get("/api/hardware/logs", params={"limit": 2})
        assert res.status_code == 200
        assert [e["value"] for e in res.json()] == [3, 2]

        assert len(client.get("/api/hardware/logs", params={"limit": 0}).json()) == 1
        assert len(client.get("/api/hardware/logs", params={"limit": "abc"}).json()) == 4
