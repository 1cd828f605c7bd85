"""WebSocket channel pushing response notifications to their recipients."""

import json
import logging
from dataclasses import dataclass, field
from typing import Dict, Set

from litestar import WebSocket, websocket
from litestar.exceptions import WebSocketDisconnect

from webgis.models import Response
from webgis.services import ResponseWorkflow
from webgis.utils.logging import error_log

logger = logging.getLogger("WebGIS.WebSocket")


@dataclass
class NotificationRoom:
    """Open sockets of one user (several tabs may be connected)."""
    user_id: str
    connections: Set[WebSocket] = field(default_factory=set)

    async def broadcast(self, message: dict) -> None:
        """Send to every socket, dropping the ones that fail."""
        disconnected = []
        for ws in self.connections:
            try:
                await ws.send_json(message)
            except Exception as e:
                logger.warning(f"Failed to notify user {self.user_id}: {e}")
                disconnected.append(ws)
        for ws in disconnected:
            self.connections.discard(ws)

    @property
    def connection_count(self) -> int:
        return len(self.connections)


class NotificationHub:
    """Tracks notification rooms per user id."""

    def __init__(self):
        self._rooms: Dict[str, NotificationRoom] = {}

    def get_room(self, user_id: str) -> NotificationRoom:
        if user_id not in self._rooms:
            self._rooms[user_id] = NotificationRoom(user_id=user_id)
        return self._rooms[user_id]

    def remove_room(self, user_id: str) -> None:
        self._rooms.pop(user_id, None)

    def connect(self, user_id: str, ws: WebSocket) -> NotificationRoom:
        room = self.get_room(user_id)
        room.connections.add(ws)
        return room

    def disconnect(self, user_id: str, ws: WebSocket) -> None:
        room = self._rooms.get(user_id)
        if room is None:
            return
        room.connections.discard(ws)
        if room.connection_count == 0:
            self.remove_room(user_id)

    def has_listeners(self, user_id: str) -> bool:
        room = self._rooms.get(user_id)
        return bool(room and room.connection_count)


# Global hub instance
notification_hub = NotificationHub()


async def broadcast_to_user(user_id: str, message: dict) -> None:
    """
    Push a message to every socket of ``user_id``.

    Called by REST handlers after a successful write. Delivery problems are
    logged and never propagated: the polling endpoints remain the source of
    truth.
    """
    if not notification_hub.has_listeners(user_id):
        return
    try:
        await notification_hub.get_room(user_id).broadcast(message)
        logger.debug(f"Notified user {user_id}: {message.get('type')}")
    except Exception as e:
        error_log("Notification broadcast failed", exc=e, context={"user_id": user_id})


async def notify_response_event(event_type: str, response: Response, responses: ResponseWorkflow) -> None:
    """Push a response event together with the recipient's fresh unread count."""
    if not notification_hub.has_listeners(response.user_id):
        return
    try:
        unread = await responses.unread_count(response.user_id)
    except Exception as e:
        error_log("Could not compute unread count for notification", exc=e, context={"user_id": response.user_id})
        return
    await broadcast_to_user(
        response.user_id,
        {"type": event_type, "response": response.to_public(), "unreadCount": unread},
    )


@websocket("/ws/notifications/{user_id:str}")
async def notifications_websocket(
    socket: WebSocket,
    user_id: str,
    responses: ResponseWorkflow,
) -> None:
    """
    Live notifications for one user.

    Message types (client -> server):
    - {"type": "ping"}
    - {"type": "request_count"}

    Message types (server -> client):
    - {"type": "unread_count", "count": n}  - on connect and on request
    - {"type": "response_created", "response": {...}, "unreadCount": n}
    - {"type": "response_read", "response": {...}, "unreadCount": n}
    - {"type": "pong"}
    - {"type": "error", "message": "..."}
    """
    await socket.accept()
    notification_hub.connect(user_id, socket)
    logger.info(f"Notification socket opened for user {user_id}")

    try:
        await socket.send_json({"type": "unread_count", "count": await responses.unread_count(user_id)})

        while True:
            try:
                data = json.loads(await socket.receive_text())
            except json.JSONDecodeError:
                await socket.send_json({"type": "error", "message": "Invalid JSON"})
                continue

            msg_type = data.get("type") if isinstance(data, dict) else None

            if msg_type == "ping":
                await socket.send_json({"type": "pong"})
            elif msg_type == "request_count":
                await socket.send_json({"type": "unread_count", "count": await responses.unread_count(user_id)})
            else:
                await socket.send_json({"type": "error", "message": f"Unknown message type: {msg_type}"})

    except WebSocketDisconnect:
        logger.info(f"Notification socket closed for user {user_id}")

    except Exception as e:
        logger.exception(f"Notification socket error for user {user_id}: {e}")

    finally:
        notification_hub.disconnect(user_id, socket)


websocket_handler = notifications_websocket
