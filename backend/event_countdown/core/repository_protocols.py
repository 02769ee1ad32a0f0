"""Boundary Protocols — contracts between the service and the config store.

Invariants:
    - The service depends on ConfigRepository, never on a concrete store
    - load() has no side effects; save() is the only path that changes stored state
    - save() validates the full record and writes all-or-nothing

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async methods: implementations do file IO off the event loop
"""

from typing import Protocol

from event_countdown.schemas.event_config import EventConfig


class ConfigRepository(Protocol):
    """Contract for single-record event config persistence — implemented by shell."""
    async def load(self) -> EventConfig: ...
    async def save(self, config: EventConfig) -> EventConfig: ...
