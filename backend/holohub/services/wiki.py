"""Holo-Wiki entry operations, including the NPC directory and NPC memory."""

from datetime import datetime, timezone
from uuid import uuid4

import aiosqlite

from holohub.config import settings
from holohub.logging import get_logger
from holohub.models import (
    SessionContext,
    WikiEntry,
    WikiEntryCreate,
    WikiEntryType,
    WikiEntryUpdate,
    normalize_type,
)
from holohub.services.realtime import RealtimeService

logger = get_logger("services.wiki")


class NpcNameConflictError(ValueError):
    """Raised when an NPC name is already taken by another NPC entry."""


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _row_to_entry(row: dict) -> WikiEntry:
    return WikiEntry(
        id=row["id"],
        name=row["name"],
        type=row["type"],
        content=row.get("content"),
        personality=row.get("personality"),
        interaction_history=row.get("interaction_history") or "",
        history_version=row.get("history_version") or 0,
        cover_url=row.get("cover_url"),
        bg_url=row.get("bg_url"),
        creator_id=row.get("creator_id"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _name_conflict(name: str) -> NpcNameConflictError:
    return NpcNameConflictError(f'An NPC named "{name}" already exists')


def format_memory_block(npc_name: str, utterance: str, reply: str) -> str:
    return f"User: {utterance}\n{npc_name}: {reply}\n\n"


class WikiService:
    def __init__(self, db_path: str, realtime: RealtimeService):
        self.db_path = db_path
        self.realtime = realtime

    async def _get_db(self) -> aiosqlite.Connection:
        db = await aiosqlite.connect(self.db_path)
        db.row_factory = aiosqlite.Row
        await db.execute("PRAGMA foreign_keys = ON")
        return db

    async def _publish(self, event: str, entry: WikiEntry) -> None:
        await self.realtime.publish(event, entry.model_dump(mode="json"))

    async def _ensure_npc_name_free(
        self, db: aiosqlite.Connection, name: str, exclude_id: str | None = None
    ) -> None:
        cursor = await db.execute(
            "SELECT id FROM wiki_entries WHERE type = ? AND name = ? AND id != ?",
            (WikiEntryType.NPC.value, name, exclude_id or ""),
        )
        if await cursor.fetchone():
            raise _name_conflict(name)

    async def create_entry(self, session: SessionContext, data: WikiEntryCreate) -> WikiEntry:
        now = _now()
        is_npc = data.type == WikiEntryType.NPC
        entry = WikiEntry(
            id=str(uuid4()),
            name=data.name.strip(),
            type=data.type,
            content=None if is_npc else data.content,
            personality=data.personality if is_npc else None,
            interaction_history=settings.NPC_INITIAL_HISTORY if is_npc else "",
            cover_url=data.cover_url,
            bg_url=data.bg_url,
            creator_id=session.user_id,
            created_at=now,
            updated_at=now,
        )
        db = await self._get_db()
        try:
            if is_npc:
                await self._ensure_npc_name_free(db, entry.name)
            await db.execute(
                """INSERT INTO wiki_entries
                   (id, name, type, content, personality, interaction_history, history_version,
                    cover_url, bg_url, creator_id, created_at, updated_at)
                   VALUES (?, ?, ?, ?, ?, ?, 0, ?, ?, ?, ?, ?)""",
                (
                    entry.id,
                    entry.name,
                    entry.type.value,
                    entry.content,
                    entry.personality,
                    entry.interaction_history,
                    entry.cover_url,
                    entry.bg_url,
                    entry.creator_id,
                    now,
                    now,
                ),
            )
            await db.commit()
        except aiosqlite.IntegrityError as exc:
            if is_npc:
                raise _name_conflict(entry.name) from exc
            raise
        finally:
            await db.close()

        logger.info(f"Created {entry.type.value} wiki entry: {entry.name} ({entry.id[:8]})")
        await self._publish("wiki_entry_created", entry)
        return entry

    async def get_entry(self, entry_id: str) -> WikiEntry | None:
        db = await self._get_db()
        try:
            cursor = await db.execute("SELECT * FROM wiki_entries WHERE id = ?", (entry_id,))
            row = await cursor.fetchone()
            return _row_to_entry(dict(row)) if row else None
        finally:
            await db.close()

    async def list_entries(
        self,
        type: str | None = None,
        search: str | None = None,
    ) -> list[WikiEntry]:
        conditions: list[str] = []
        params: list = []
        if type:
            conditions.append("type = ?")
            params.append(WikiEntryType(normalize_type(type)).value)
        if search:
            conditions.append("name LIKE ?")
            params.append(f"%{search}%")
        where = f"WHERE {' AND '.join(conditions)}" if conditions else ""
        db = await self._get_db()
        try:
            cursor = await db.execute(f"SELECT * FROM wiki_entries {where} ORDER BY name", params)
            rows = await cursor.fetchall()
            return [_row_to_entry(dict(r)) for r in rows]
        finally:
            await db.close()

    async def update_entry(self, entry_id: str, data: WikiEntryUpdate) -> WikiEntry | None:
        existing = await self.get_entry(entry_id)
        if not existing:
            return None

        fields: dict = {}
        if data.name is not None:
            fields["name"] = data.name.strip()
        if data.cover_url is not None:
            fields["cover_url"] = data.cover_url
        if data.bg_url is not None:
            fields["bg_url"] = data.bg_url
        if existing.is_npc:
            if data.personality is not None:
                fields["personality"] = data.personality
        elif data.content is not None:
            fields["content"] = data.content
        if not fields:
            return existing

        fields["updated_at"] = _now()
        set_clause = ", ".join(f"{k} = ?" for k in fields)
        params = list(fields.values()) + [entry_id]
        db = await self._get_db()
        try:
            if existing.is_npc and "name" in fields and fields["name"] != existing.name:
                await self._ensure_npc_name_free(db, fields["name"], exclude_id=entry_id)
            await db.execute(f"UPDATE wiki_entries SET {set_clause} WHERE id = ?", params)
            await db.commit()
        except aiosqlite.IntegrityError as exc:
            if existing.is_npc and "name" in fields:
                raise _name_conflict(fields["name"]) from exc
            raise
        finally:
            await db.close()

        entry = await self.get_entry(entry_id)
        if entry:
            await self._publish("wiki_entry_updated", entry)
        return entry

    async def delete_entry(self, entry_id: str) -> bool:
        db = await self._get_db()
        try:
            cursor = await db.execute("DELETE FROM wiki_entries WHERE id = ?", (entry_id,))
            await db.commit()
            deleted = cursor.rowcount > 0
        finally:
            await db.close()

        if deleted:
            await self.realtime.publish("wiki_entry_deleted", {"id": entry_id})
        return deleted

    # ── NPC directory ──

    async def find_npcs_by_name(self, name: str) -> list[WikiEntry]:
        """Exact, case-sensitive name match among NPC entries, oldest first."""
        db = await self._get_db()
        try:
            cursor = await db.execute(
                "SELECT * FROM wiki_entries WHERE type = ? AND name = ? ORDER BY created_at, id",
                (WikiEntryType.NPC.value, name),
            )
            rows = await cursor.fetchall()
            return [_row_to_entry(dict(r)) for r in rows]
        finally:
            await db.close()

    async def append_npc_memory(
        self, entry_id: str, npc_name: str, utterance: str, reply: str
    ) -> WikiEntry | None:
        """
        Append one exchange to an NPC's interaction history.

        The append is a single UPDATE so concurrent conversations with the
        same NPC cannot overwrite each other's exchanges.

        :return: The updated entry, or None if it no longer exists
        """
        block = format_memory_block(npc_name, utterance, reply)
        db = await self._get_db()
        try:
            cursor = await db.execute(
                """UPDATE wiki_entries
                   SET interaction_history = interaction_history || ?,
                       history_version = history_version + 1,
                       updated_at = ?
                   WHERE id = ? AND type = ?""",
                (block, _now(), entry_id, WikiEntryType.NPC.value),
            )
            await db.commit()
            updated = cursor.rowcount > 0
        finally:
            await db.close()

        if not updated:
            logger.warning(f"NPC {entry_id[:8]} vanished before its memory could be updated")
            return None

        entry = await self.get_entry(entry_id)
        if entry:
            await self._publish("wiki_entry_updated", entry)
        return entry
