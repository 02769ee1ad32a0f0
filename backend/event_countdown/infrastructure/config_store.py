"""Config Store — single JSON document with schema validation and atomic writes.

Invariants:
    - load() never writes; save() is the only path that changes the file
    - save() validates the FULL record before touching disk
    - Writes go to a temp file in the same directory, fsync'd, then os.replace'd:
      readers see either the old document or the new one, never a partial one
    - Every OS / JSON / schema failure surfaces as ConfigurationError (core/errors.py)

Design Decisions:
    - Blocking file IO in asyncio.to_thread: routes stay async without stalling the loop
    - json.loads then model_validate (not model_validate_json): parse failures and
      schema violations get distinct error codes
"""

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path

from pydantic import BaseModel, ValidationError as SchemaValidationError

from event_countdown.core.errors import ConfigurationError, ErrorContext
from event_countdown.schemas.event_config import EventConfig

logger = logging.getLogger(__name__)


class JsonConfigStore:
    """Owns the on-disk representation of the one EventConfig."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    async def load(self) -> EventConfig:
        return await asyncio.to_thread(self._read)

    async def save(self, config: EventConfig | dict) -> EventConfig:
        """Validate, then atomically replace the stored document. Returns what was written."""
        validated = self._validate_for_save(config)
        await asyncio.to_thread(self._write, validated)
        return validated

    # ─── read ────────────────────────────────────────────────────

    def _read(self) -> EventConfig:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            logger.error(
                f"Event config not found at {self.path}",
                extra={"config_path": str(self.path)},
            )
            raise ConfigurationError(
                "Event configuration not found", "CONFIG_NOT_FOUND",
            ) from e
        except OSError as e:
            logger.error(
                f"Event config unreadable: {e}",
                extra={"config_path": str(self.path)},
            )
            raise ConfigurationError(
                "Failed to load event configuration", "CONFIG_UNREADABLE",
            ) from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(
                f"Event config is not valid JSON: {e}",
                extra={"config_path": str(self.path)},
            )
            raise ConfigurationError(
                "Event configuration could not be parsed", "CONFIG_PARSE_ERROR",
            ) from e

        try:
            return EventConfig.model_validate(data)
        except SchemaValidationError as e:
            logger.error(
                f"Event config violates schema: {e.error_count()} error(s)",
                extra={"config_path": str(self.path)},
            )
            raise ConfigurationError(
                "Invalid event configuration format", "CONFIG_SCHEMA_VIOLATION",
                ErrorContext(debug_info={"errors": _summarize(e)}),
            ) from e

    # ─── write ───────────────────────────────────────────────────

    def _validate_for_save(self, config: EventConfig | dict) -> EventConfig:
        payload = config.model_dump() if isinstance(config, BaseModel) else config
        try:
            return EventConfig.model_validate(payload)
        except SchemaValidationError as e:
            logger.error(
                f"Refusing to save invalid event config: {e.error_count()} error(s)",
                extra={"config_path": str(self.path)},
            )
            raise ConfigurationError(
                "Invalid configuration data", "CONFIG_SCHEMA_VIOLATION",
                ErrorContext(debug_info={"errors": _summarize(e)}),
            ) from e

    def _write(self, config: EventConfig) -> None:
        document = config.model_dump_json(by_alias=True, indent=2) + "\n"
        tmp: str | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent,
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(document)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, self.path)
        except OSError as e:
            logger.error(
                f"Failed to write event config: {e}",
                extra={"config_path": str(self.path)},
            )
            raise ConfigurationError(
                "Failed to save event configuration", "CONFIG_WRITE_FAILED",
            ) from e
        finally:
            if tmp is not None:
                Path(tmp).unlink(missing_ok=True)


def _summarize(exc: SchemaValidationError) -> list[dict]:
    """Field paths and messages only; input values may be large."""
    return [
        {"field": ".".join(str(loc) for loc in err["loc"]), "message": err["msg"]}
        for err in exc.errors()
    ]
