"""Services Layer — orchestration between the HTTP surface and the config store.

Invariants:
    - Services own IO sequencing; rules live in core/
    - One service instance per process (holds the update lock)

Design Decisions:
    - Store and clock injected via constructor (ADR: no module-level singletons)
"""
