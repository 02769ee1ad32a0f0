"""Pydantic Schemas — the stored record and the API request/response contracts.

Invariants:
    - Schemas validate at system boundaries (the JSON document, HTTP bodies)
    - Derived countdown values come from core/, never computed in a schema

Design Decisions:
    - Stored record and API views share the camelCase base model (ADR: one wire vocabulary)
"""
