"""Game Socket tests: the WebSocket route end to end over Starlette's TestClient.

Invariants:
    - initGame over the socket yields one initArticles frame
    - Malformed frames and ignored commands produce no frame; the connection stays usable
    - Failures reach the client as one "error" frame

Design Decisions:
    - app.dependency_overrides swaps GameServices for fakes; lifespan is not run
"""

import pytest
from fastapi.testclient import TestClient

from wikitrains.api.dependencies import get_game_services
from wikitrains.main import app

from tests.services.fake_wikipedia import FakeArticleSource, FakePage, seeded_store

SOCKET_PATH = "/api/v1/game/ws"


@pytest.fixture
def socket_client(make_services):
    source = FakeArticleSource({"Stub": FakePage(links=["Lake Erie", "Cleveland"])})
    services = make_services(source=source, store=seeded_store(tier_one=12, tier_two=3))
    app.dependency_overrides[get_game_services] = lambda: services
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_init_game_over_socket(socket_client):
    with socket_client.websocket_connect(SOCKET_PATH) as ws:
        ws.send_json({"type": "initGame"})
        event = ws.receive_json()

    assert event["type"] == "initArticles"
    assert len(event["data"]) == 9
    assert event["data"][0]["title"].startswith("Two ")


def test_malformed_frame_is_ignored(socket_client):
    with socket_client.websocket_connect(SOCKET_PATH) as ws:
        ws.send_text("not json at all")
        ws.send_json({"type": "teleport", "data": "Ohio"})
        ws.send_json({"type": "nextArticleChosen", "data": "   "})
        ws.send_json({"type": "initGame"})
        event = ws.receive_json()

    assert event["type"] == "initArticles"


def test_invalid_ending_choice_then_error_frame(socket_client):
    with socket_client.websocket_connect(SOCKET_PATH) as ws:
        ws.send_json({"type": "initGame"})
        ws.receive_json()
        ws.send_json({"type": "endingArticleChosen", "data": "Not Offered"})
        ws.send_json({"type": "nextArticleChosen", "data": "Stub"})
        event = ws.receive_json()

    assert event["type"] == "error"
    assert event["data"]["code"] == "INSUFFICIENT_LINKS"
    assert event["data"]["recoverable"] is True


def test_underfilled_cache_sends_error_frame(make_services):
    services = make_services(store=seeded_store(tier_one=2, tier_two=0))
    app.dependency_overrides[get_game_services] = lambda: services
    try:
        with TestClient(app).websocket_connect(SOCKET_PATH) as ws:
            ws.send_json({"type": "initGame"})
            event = ws.receive_json()
    finally:
        app.dependency_overrides.clear()

    assert event["type"] == "error"
    assert event["data"]["code"] == "ARTICLE_NOT_CACHED"
