"""Game Socket: the persistent per-client channel carrying game commands and events.

Invariants:
    - One GameSessionHandler per accepted WebSocket; state dies with the connection
    - Client frames are JSON envelopes validated as ClientMessage; malformed frames are
      logged and ignored (the connection stays open)
    - Commands are processed one at a time, in arrival order

Design Decisions:
    - WebSocket over SSE + POST: the game needs a bidirectional channel per player
    - Route only parses, dispatches, and serializes; game rules live in services/
"""

import logging
from uuid import uuid4

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from wikitrains.api.dependencies import get_game_services
from wikitrains.core.domain_types import ConnectionId
from wikitrains.schemas.game import ClientMessage
from wikitrains.services.game_services import GameServices
from wikitrains.services.game_session import GameSessionHandler

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/game", tags=["game"])


@router.websocket("/ws")
async def game_socket(
    websocket: WebSocket,
    services: GameServices = Depends(get_game_services),
):
    """Run one game session for the lifetime of the connection."""
    await websocket.accept()
    connection_id = ConnectionId(uuid4().hex)
    handler = GameSessionHandler(services, connection_id)
    logger.info("Client connected", extra={"connection_id": connection_id})
    try:
        while True:
            raw = await websocket.receive_text()
            message = _parse_message(raw, connection_id)
            if message is None:
                continue
            async for event in handler.handle(message):
                await websocket.send_json(event)
    except WebSocketDisconnect:
        logger.info("Client disconnected", extra={"connection_id": connection_id})


def _parse_message(raw: str, connection_id: str) -> ClientMessage | None:
    try:
        return ClientMessage.model_validate_json(raw)
    except ValidationError as e:
        logger.warning(
            f"Ignored malformed frame: {e.errors(include_url=False)}",
            extra={"connection_id": connection_id},
        )
        return None
