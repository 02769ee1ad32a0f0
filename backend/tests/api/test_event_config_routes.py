"""Event Config Routes — HTTP status codes and bodies for every outcome.

Invariants:
    - GET returns camelCase bodies with canonical instants
    - PUT/PATCH map DATE_REQUIRED/NO_UPDATE_FIELDS → 400, INVALID_DATE_FORMAT → 422,
      UPDATES_DISABLED → 403, configuration failures → 500
    - Malformed bodies are rejected with 400 VALIDATION_ERROR
"""

import pytest

from event_countdown.api.dependencies import get_config_service
from event_countdown.infrastructure.config_store import JsonConfigStore
from event_countdown.main import app
from event_countdown.services.config_service import ConfigService


@pytest.fixture
def locked_client_service(client, locked_config_path, clock):
    """Point the already-open client at a locked record."""
    service = ConfigService(JsonConfigStore(locked_config_path), clock=clock)
    app.dependency_overrides[get_config_service] = lambda: service
    return service


# ─── GET ─────────────────────────────────────────────────────────

async def test_get_full_config(client):
    res = await client.get("/api/v1/config")
    assert res.status_code == 200
    body = res.json()
    assert body["eventDetails"]["targetInstant"] == "2025-09-01T00:00:00Z"
    assert body["eventDetails"]["participants"] == {"primary": "Ada", "secondary": "Grace"}
    assert body["display"]["unitLabels"]["hours"] == "Hours"
    assert body["settings"] == {
        "updatesAllowed": True, "lastUpdated": "2025-05-01T08:30:00Z",
    }
    countdown = body["countdown"]
    assert countdown["now"] == "2025-06-01T12:00:00Z"
    assert countdown["isComplete"] is False
    assert countdown["remainingMs"] == countdown["targetTimestampMs"] - countdown["nowTimestampMs"]
    assert countdown["breakdown"]["days"] == 91


async def test_get_date(client):
    res = await client.get("/api/v1/config/date")
    assert res.status_code == 200
    body = res.json()
    assert set(body) == {
        "targetInstant", "targetTimestampMs", "timezone",
        "now", "remainingMs", "isComplete",
    }
    assert body["timezone"] == "Europe/Oslo"


async def test_get_with_corrupt_store_returns_500(client, config_path):
    config_path.write_text("{", encoding="utf-8")
    res = await client.get("/api/v1/config")
    assert res.status_code == 500
    assert res.json()["error"]["code"] == "CONFIG_PARSE_ERROR"
    assert res.json()["error"]["category"] == "configuration"


async def test_get_with_missing_store_returns_500(client, config_path):
    config_path.unlink()
    res = await client.get("/api/v1/config/date")
    assert res.status_code == 500
    assert res.json()["error"]["code"] == "CONFIG_NOT_FOUND"


# ─── PUT ─────────────────────────────────────────────────────────

async def test_put_date(client):
    res = await client.put("/api/v1/config/date", json={"date": "2026-01-01T00:00:00Z"})
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["previous"] == "2025-09-01T00:00:00Z"
    assert body["new"] == "2026-01-01T00:00:00Z"
    assert "changedFields" not in body

    after = (await client.get("/api/v1/config/date")).json()
    assert after["targetInstant"] == "2026-01-01T00:00:00Z"
    assert after["isComplete"] is False


async def test_put_missing_date_returns_400(client):
    res = await client.put("/api/v1/config/date", json={"timezone": "UTC"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "DATE_REQUIRED"


async def test_put_invalid_date_returns_422(client):
    res = await client.put("/api/v1/config/date", json={"date": "32/01/2026"})
    assert res.status_code == 422
    assert res.json()["error"]["code"] == "INVALID_DATE_FORMAT"


async def test_put_date_beyond_utc_range_returns_422(client):
    res = await client.put(
        "/api/v1/config/date", json={"date": "9999-12-31T23:30:00-01:00"},
    )
    assert res.status_code == 422
    assert res.json()["error"]["code"] == "INVALID_DATE_FORMAT"


async def test_put_wrong_body_type_returns_400(client):
    res = await client.put("/api/v1/config/date", json={"date": 20260101})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_put_locked_returns_403(client, locked_client_service, locked_config_path):
    before = locked_config_path.read_bytes()
    res = await client.put("/api/v1/config/date", json={"date": "2026-01-01T00:00:00Z"})
    assert res.status_code == 403
    assert res.json()["error"]["code"] == "UPDATES_DISABLED"
    assert locked_config_path.read_bytes() == before


# ─── PATCH ───────────────────────────────────────────────────────

async def test_patch_timezone(client):
    res = await client.patch("/api/v1/config/date", json={"timezone": "Asia/Tokyo"})
    assert res.status_code == 200
    body = res.json()
    assert body["changedFields"] == ["timezone"]
    assert body["previousTimezone"] == "Europe/Oslo"
    assert body["timezone"] == "Asia/Tokyo"


async def test_patch_no_fields_returns_400(client):
    res = await client.patch("/api/v1/config/date", json={})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "NO_UPDATE_FIELDS"


async def test_patch_without_body_returns_400(client):
    res = await client.patch("/api/v1/config/date")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "NO_UPDATE_FIELDS"


async def test_patch_invalid_date_with_valid_timezone_commits_nothing(client, config_path):
    before = config_path.read_bytes()
    res = await client.patch(
        "/api/v1/config/date", json={"date": "nope", "timezone": "Asia/Tokyo"},
    )
    assert res.status_code == 422
    assert config_path.read_bytes() == before


async def test_patch_invalid_timezone_returns_400(client):
    res = await client.patch("/api/v1/config/date", json={"timezone": "Mars Base"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_TIMEZONE"
    assert res.json()["error"]["field"] == "timezone"


async def test_patch_locked_returns_403(client, locked_client_service):
    res = await client.patch("/api/v1/config/date", json={})
    assert res.status_code == 403


async def test_patch_write_failure_returns_500(client, monkeypatch):
    def _boom(src, dst):
        raise OSError("read-only file system")

    monkeypatch.setattr("event_countdown.infrastructure.config_store.os.replace", _boom)
    res = await client.patch("/api/v1/config/date", json={"timezone": "UTC"})
    assert res.status_code == 500
    assert res.json()["error"]["code"] == "CONFIG_WRITE_FAILED"


# ─── routing errors ──────────────────────────────────────────────

async def test_unknown_path_returns_error_envelope(client):
    res = await client.get("/api/v1/nowhere")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "NOT_FOUND"
    assert res.json()["error"]["message"] == "Endpoint not found"


async def test_unsupported_method_returns_error_envelope(client):
    res = await client.delete("/api/v1/config/date")
    assert res.status_code == 405
    assert res.json()["error"]["code"] == "METHOD_NOT_ALLOWED"
    assert "PUT" in res.headers["allow"]
