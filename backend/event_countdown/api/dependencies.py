"""Route Dependencies — hand the process-wide ConfigService to route handlers.

Invariants:
    - The service is built once in the lifespan and stored on app.state
    - Tests replace it through app.dependency_overrides[get_config_service]
"""

from fastapi import Request

from event_countdown.config import Settings
from event_countdown.infrastructure.config_store import JsonConfigStore
from event_countdown.services.config_service import ConfigService


def build_config_service(settings: Settings) -> ConfigService:
    return ConfigService(JsonConfigStore(settings.config_path))


def get_config_service(request: Request) -> ConfigService:
    return request.app.state.config_service
