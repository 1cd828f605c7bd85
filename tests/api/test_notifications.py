from unittest.mock import AsyncMock

import pytest
from litestar.testing import TestClient

from webgis.api.websocket import NotificationHub, broadcast_to_user
from webgis.main import create_app
from webgis.storage import MemoryRecordStore


@pytest.fixture()
def ws_client():
    app = create_app(store=MemoryRecordStore(), bcrypt_rounds=4)
    with TestClient(app=app) as client:
        yield client


def test_socket_receives_count_and_response_events(ws_client):
    with ws_client.websocket_connect("/ws/notifications/U1") as ws:
        assert ws.receive_json() == {"type": "unread_count", "count": 0}

        ws.send_json({"type": "ping"})
        assert ws.receive_json() == {"type": "pong"}

        feedback = ws_client.post(
            "/api/submit_feedback",
            json={"userId": "U1", "title": "Slow map", "content": "Tiles load slowly"},
        ).json()["feedback"]
        response = ws_client.post(
            f"/api/feedback/{feedback['id']}/respond",
            json={"content": "Fixed in next release"},
        ).json()["response"]

        created = ws.receive_json()
        assert created["type"] == "response_created"
        assert created["response"]["id"] == response["id"]
        assert created["unreadCount"] == 1

        ws_client.post(f"/api/responses/{response['id']}/read")
        read = ws.receive_json()
        assert read["type"] == "response_read"
        assert read["response"]["isRead"] is True
        assert read["unreadCount"] == 0

        ws.send_json({"type": "request_count"})
        assert ws.receive_json() == {"type": "unread_count", "count": 0}

        ws.send_json({"type": "dance"})
        assert ws.receive_json()["type"] == "error"


def test_invalid_json_message_keeps_socket_open(ws_client):
    with ws_client.websocket_connect("/ws/notifications/U9") as ws:
        ws.receive_json()
        ws.send_text("{nope")
        assert ws.receive_json() == {"type": "error", "message": "Invalid JSON"}
        ws.send_json({"type": "ping"})
        assert ws.receive_json() == {"type": "pong"}


@pytest.mark.asyncio
async def test_hub_drops_failing_sockets():
    hub = NotificationHub()
    good, bad = AsyncMock(), AsyncMock()
    bad.send_json.side_effect = RuntimeError("closed")
    hub.connect("U1", good)
    room = hub.connect("U1", bad)

    await room.broadcast({"type": "ping"})

    good.send_json.assert_awaited_once_with({"type": "ping"})
    assert room.connections == {good}


@pytest.mark.asyncio
async def test_hub_removes_empty_rooms():
    hub = NotificationHub()
    ws = AsyncMock()
    hub.connect("U1", ws)
    assert hub.has_listeners("U1")

    hub.disconnect("U1", ws)
    hub.disconnect("U2", ws)

    assert not hub.has_listeners("U1")
    assert "U1" not in hub._rooms


@pytest.mark.asyncio
async def test_broadcast_without_listeners_is_a_noop():
    await broadcast_to_user("nobody-listens", {"type": "response_created"})
