"""Infrastructure Layer: external service clients and cross-cutting concerns.

Invariants:
    - All external calls wrapped with timeout and error mapping
    - Failures surface as WikiTrainsError subclasses, never raw httpx/SQLAlchemy errors

Design Decisions:
    - Thin adapters over raw clients; decoding lives in core/wiki_response.py
"""
