"""Core Layer — pure domain logic, no IO, no async, no file access.

Invariants:
    - No module in core/ imports from services/, api/, or infrastructure/
    - All functions are pure and deterministic (the clock is always an argument)

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
"""
