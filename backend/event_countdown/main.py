"""Event Countdown API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map CountdownError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - One ConfigService per process, built in the lifespan and stored on app.state

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - The event document is provisioned out-of-band: startup only warns when it
      is missing; requests report CONFIG_NOT_FOUND until it appears
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from event_countdown.api.dependencies import build_config_service
from event_countdown.api.error_handlers import register_error_handlers
from event_countdown.api.routes import event_config, health
from event_countdown.config import get_settings
from event_countdown.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.config_service = build_config_service(settings)
    if not settings.config_path.is_file():
        logger.warning(
            f"Event config not provisioned at {settings.config_path}",
            extra={"config_path": str(settings.config_path)},
        )
    logger.info("Event Countdown API started")
    yield
    logger.info("Event Countdown API shutting down")


settings = get_settings()
app = FastAPI(
    title="Event Countdown API", version=settings.service_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "PUT", "PATCH"],
    allow_headers=["Content-Type", "Authorization"],
)

app.include_router(health.router)
app.include_router(event_config.router)

register_error_handlers(app)
