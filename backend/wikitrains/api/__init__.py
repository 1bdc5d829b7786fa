"""API Layer: FastAPI routes, the game WebSocket, and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - HTTP endpoints return structured JSON responses

Design Decisions:
    - Thin routes delegate to services (ADR: impureim sandwich)
"""
