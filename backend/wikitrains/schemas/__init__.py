"""Pydantic Schemas: validation for socket envelopes and HTTP responses.

Invariants:
    - Schemas validate at system boundary (client messages)
    - Domain types from core/ used for enum fields

Design Decisions:
    - Separate from models: schemas are wire contracts, models are persistence (ADR: DDD boundary)
"""
