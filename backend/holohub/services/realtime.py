"""
Real-time fan-out over Socket.IO.

Every durable write is followed by a publish so connected clients can update
their views without polling. Publishing is best effort: a failed emit is
logged and never fails the write that triggered it.
"""

from typing import Any

import socketio

from holohub.logging import get_logger

logger = get_logger('services.realtime')

HUB_ROOM = "hub"


def chatroom_channel(room_id: str) -> str:
    return f"chatroom:{room_id}"


class RealtimeService:
    """Thin publisher around the Socket.IO server."""

    def __init__(self, sio: socketio.AsyncServer | None):
        self.sio = sio

    async def publish(self, event: str, data: dict[str, Any], room: str = HUB_ROOM) -> None:
        if self.sio is None:
            return
        try:
            await self.sio.emit(event, data, room=room)
        except Exception as e:
            logger.warning(f"Failed to publish {event} to {room}: {e}")

    async def publish_to_chatroom(self, room_id: str, event: str, data: dict[str, Any]) -> None:
        await self.publish(event, data, room=chatroom_channel(room_id))
