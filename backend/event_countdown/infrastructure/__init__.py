"""Infrastructure Layer — file storage and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All IO failures mapped to typed errors from core/errors.py

Design Decisions:
    - Store exposes async methods over blocking IO (ADR: async routes end to end)
"""
