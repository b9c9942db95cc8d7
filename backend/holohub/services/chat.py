"""
Chat channel service.

Owns the chatroom collection and each room's append-only conversation log.
"""

from collections.abc import Iterable
from datetime import datetime, timezone
from uuid import uuid4

import aiosqlite

from holohub.logging import get_logger
from holohub.models import (
    SYSTEM_AUTHOR_ID,
    SYSTEM_AUTHOR_NAME,
    Chatroom,
    ChatroomCreate,
    ChatroomUpdate,
    ChatMessage,
    SessionContext,
)
from holohub.services.realtime import RealtimeService

logger = get_logger('services.chat')


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _row_to_chatroom(row: dict) -> Chatroom:
    return Chatroom(
        id=row["id"],
        name=row["name"],
        cover_url=row.get("cover_url"),
        bg_url=row.get("bg_url"),
        creator_id=row.get("creator_id"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _row_to_message(row: dict) -> ChatMessage:
    return ChatMessage(
        id=row["id"],
        room_id=row["room_id"],
        text=row["text"],
        author_id=row["author_id"],
        author_name=row["author_name"],
        author_photo_url=row.get("author_photo_url"),
        is_npc=bool(row["is_npc"]),
        created_at=row["created_at"],
        seq=row.get("seq"),
    )


def order_messages(messages: Iterable[ChatMessage]) -> list[ChatMessage]:
    """
    Order a set of messages for display.

    Sorts by ``created_at`` ascending. Equal timestamps fall back to the
    store's insertion ``seq`` and then ``id``, so the same set always renders
    in the same order regardless of arrival order.
    """
    return sorted(messages, key=lambda m: (m.created_at, m.seq or 0, m.id))


class ChatService:
    """Service for chatroom CRUD and conversation log appends."""

    def __init__(self, db_path: str, realtime: RealtimeService):
        self.db_path = db_path
        self.realtime = realtime

    async def _get_db(self) -> aiosqlite.Connection:
        db = await aiosqlite.connect(self.db_path)
        db.row_factory = aiosqlite.Row
        await db.execute("PRAGMA foreign_keys = ON")
        return db

    # ── Chatrooms ──

    async def list_rooms(self) -> list[Chatroom]:
        db = await self._get_db()
        try:
            cursor = await db.execute("SELECT * FROM chatrooms ORDER BY created_at")
            rows = await cursor.fetchall()
            return [_row_to_chatroom(dict(r)) for r in rows]
        finally:
            await db.close()

    async def get_room(self, room_id: str) -> Chatroom | None:
        db = await self._get_db()
        try:
            cursor = await db.execute("SELECT * FROM chatrooms WHERE id = ?", (room_id,))
            row = await cursor.fetchone()
            return _row_to_chatroom(dict(row)) if row else None
        finally:
            await db.close()

    async def create_room(self, session: SessionContext, data: ChatroomCreate) -> Chatroom:
        now = _now()
        room = Chatroom(
            id=str(uuid4()),
            name=data.name.strip(),
            cover_url=data.cover_url,
            bg_url=data.bg_url,
            creator_id=session.user_id,
            created_at=now,
            updated_at=now,
        )
        db = await self._get_db()
        try:
            await db.execute(
                """INSERT INTO chatrooms (id, name, cover_url, bg_url, creator_id, created_at, updated_at)
                   VALUES (?, ?, ?, ?, ?, ?, ?)""",
                (room.id, room.name, room.cover_url, room.bg_url, room.creator_id, now, now),
            )
            await db.commit()
        finally:
            await db.close()

        logger.info(f"Created chatroom: {room.name} ({room.id[:8]})")
        await self.realtime.publish("chatroom_created", room.model_dump(mode="json"))
        return room

    async def update_room(self, room_id: str, data: ChatroomUpdate) -> Chatroom | None:
        existing = await self.get_room(room_id)
        if not existing:
            return None

        fields: dict = {}
        if data.name is not None:
            fields["name"] = data.name.strip()
        if data.cover_url is not None:
            fields["cover_url"] = data.cover_url
        if data.bg_url is not None:
            fields["bg_url"] = data.bg_url
        if not fields:
            return existing

        fields["updated_at"] = _now()
        set_clause = ", ".join(f"{k} = ?" for k in fields)
        params = list(fields.values()) + [room_id]
        db = await self._get_db()
        try:
            await db.execute(f"UPDATE chatrooms SET {set_clause} WHERE id = ?", params)
            await db.commit()
        finally:
            await db.close()

        room = await self.get_room(room_id)
        if room:
            await self.realtime.publish("chatroom_updated", room.model_dump(mode="json"))
        return room

    async def delete_room(self, room_id: str) -> bool:
        db = await self._get_db()
        try:
            cursor = await db.execute("DELETE FROM chatrooms WHERE id = ?", (room_id,))
            await db.commit()
            deleted = cursor.rowcount > 0
        finally:
            await db.close()

        if deleted:
            logger.info(f"Deleted chatroom {room_id[:8]} and its messages")
            await self.realtime.publish("chatroom_deleted", {"id": room_id})
        return deleted

    # ── Conversation log ──

    async def list_messages(self, room_id: str) -> list[ChatMessage]:
        db = await self._get_db()
        try:
            cursor = await db.execute(
                "SELECT * FROM chat_messages WHERE room_id = ? ORDER BY created_at, seq",
                (room_id,),
            )
            rows = await cursor.fetchall()
            messages = [_row_to_message(dict(r)) for r in rows]
        finally:
            await db.close()
        return order_messages(messages)

    async def append_message(
        self,
        room_id: str,
        *,
        text: str,
        author_id: str,
        author_name: str,
        author_photo_url: str | None = None,
        is_npc: bool = False,
    ) -> ChatMessage:
        """
        Append one message to a room's log and broadcast it.

        :raises LookupError: If the room does not exist
        """
        message = ChatMessage(
            id=str(uuid4()),
            room_id=room_id,
            text=text,
            author_id=author_id,
            author_name=author_name,
            author_photo_url=author_photo_url,
            is_npc=is_npc,
            created_at=_now(),
        )
        db = await self._get_db()
        try:
            try:
                cursor = await db.execute(
                    """INSERT INTO chat_messages
                       (id, room_id, text, author_id, author_name, author_photo_url, is_npc, created_at)
                       VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
                    (
                        message.id,
                        message.room_id,
                        message.text,
                        message.author_id,
                        message.author_name,
                        message.author_photo_url,
                        1 if message.is_npc else 0,
                        message.created_at.isoformat(),
                    ),
                )
            except aiosqlite.IntegrityError as exc:
                raise LookupError(f"Chatroom {room_id} not found") from exc
            await db.commit()
            message.seq = cursor.lastrowid
        finally:
            await db.close()

        await self.realtime.publish_to_chatroom(
            room_id, "message_created", message.model_dump(mode="json")
        )
        return message

    async def post_user_message(self, session: SessionContext, room_id: str, text: str) -> ChatMessage:
        return await self.append_message(
            room_id,
            text=text,
            author_id=session.user_id,
            author_name=session.display_name,
            author_photo_url=session.photo_url,
        )

    async def post_system_message(self, room_id: str, text: str) -> ChatMessage:
        return await self.append_message(
            room_id,
            text=text,
            author_id=SYSTEM_AUTHOR_ID,
            author_name=SYSTEM_AUTHOR_NAME,
        )
