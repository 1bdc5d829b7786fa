"""Game Socket Schemas: validated client envelopes for the game WebSocket.

Invariants:
    - Envelope shape is {"type": <ClientEvent>, "data": <payload>}
    - endingArticleChosen / nextArticleChosen require a non-empty title in data
    - initGame carries no payload (data ignored)
"""

from pydantic import BaseModel, Field, model_validator

from wikitrains.core.domain_types import ClientEvent


class ClientMessage(BaseModel):
    """One command received from the game client."""
    type: ClientEvent
    data: str | None = Field(None, max_length=512)

    @model_validator(mode="after")
    def require_title(self) -> "ClientMessage":
        if self.type == ClientEvent.INIT_GAME:
            return self
        if self.data is None or not self.data.strip():
            raise ValueError(f"{self.type.value} requires an article title")
        self.data = self.data.strip()
        return self

    @property
    def title(self) -> str:
        return self.data or ""
