"""Services Layer: article classification, pool building, game sessions.

Invariants:
    - Services receive their collaborators through GameServices (no module globals)
    - IO goes through the article source and article cache boundaries only

Design Decisions:
    - One file per concern for locality (ADR: no god objects)
"""
