"""Root conftest — shared fixtures: event document on disk, fixed clock, service, client.

Invariants:
    - Every test gets its own event document under tmp_path
    - The clock is fixed unless a test advances it explicitly
    - The route client talks to the real app with get_config_service overridden
"""

import copy
import json
from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient

from event_countdown.api.dependencies import get_config_service
from event_countdown.infrastructure.config_store import JsonConfigStore
from event_countdown.main import app
from event_countdown.services.config_service import ConfigService

NOW = datetime(2025, 6, 1, 12, 0, 0, tzinfo=timezone.utc)

BASE_DOCUMENT = {
    "eventDetails": {
        "targetInstant": "2025-09-01T00:00:00Z",
        "location": "Old Town Hall",
        "timezone": "Europe/Oslo",
        "title": "Summer Wedding",
        "participants": {"primary": "Ada", "secondary": "Grace"},
    },
    "display": {
        "completedMessage": "Just married!",
        "unitLabels": {
            "days": "Days", "hours": "Hours",
            "minutes": "Minutes", "seconds": "Seconds",
        },
    },
    "settings": {
        "updatesAllowed": True,
        "lastUpdated": "2025-05-01T08:30:00Z",
    },
}


class FixedClock:
    """Injectable clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta) -> None:
        self.now = self.now + timedelta(**delta)


@pytest.fixture
def event_document():
    return copy.deepcopy(BASE_DOCUMENT)


@pytest.fixture
def write_document(tmp_path):
    """Write a document (dict or raw text) to the event path and return the path."""
    path = tmp_path / "event.json"

    def _write(document) -> object:
        text = document if isinstance(document, str) else json.dumps(document, indent=2)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def config_path(write_document, event_document):
    return write_document(event_document)


@pytest.fixture
def locked_config_path(write_document, event_document):
    event_document["settings"]["updatesAllowed"] = False
    return write_document(event_document)


@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest.fixture
def store(config_path):
    return JsonConfigStore(config_path)


@pytest.fixture
def service(store, clock):
    return ConfigService(store, clock=clock)


@pytest.fixture
async def client(service):
    """FastAPI test client bound to the per-test service."""
    app.dependency_overrides[get_config_service] = lambda: service
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()
