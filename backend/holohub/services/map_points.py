"""Galaxy map point operations."""

from datetime import datetime, timezone
from uuid import uuid4

import aiosqlite

from holohub.logging import get_logger
from holohub.models import MapPoint, MapPointCreate, MapPointUpdate
from holohub.services.realtime import RealtimeService

logger = get_logger("services.map_points")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _row_to_point(row: dict) -> MapPoint:
    return MapPoint(
        id=row["id"],
        name=row["name"],
        x=row["x"],
        y=row["y"],
        linked_chatroom_id=row.get("linked_chatroom_id"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class MapPointService:
    def __init__(self, db_path: str, realtime: RealtimeService):
        self.db_path = db_path
        self.realtime = realtime

    async def _get_db(self) -> aiosqlite.Connection:
        db = await aiosqlite.connect(self.db_path)
        db.row_factory = aiosqlite.Row
        await db.execute("PRAGMA foreign_keys = ON")
        return db

    async def _ensure_chatroom(self, db: aiosqlite.Connection, room_id: str) -> None:
        cursor = await db.execute("SELECT 1 FROM chatrooms WHERE id = ?", (room_id,))
        if await cursor.fetchone() is None:
            raise ValueError(f"Linked chatroom {room_id} does not exist")

    async def list_points(self) -> list[MapPoint]:
        db = await self._get_db()
        try:
            cursor = await db.execute("SELECT * FROM map_points ORDER BY name")
            rows = await cursor.fetchall()
            return [_row_to_point(dict(r)) for r in rows]
        finally:
            await db.close()

    async def get_point(self, point_id: str) -> MapPoint | None:
        db = await self._get_db()
        try:
            cursor = await db.execute("SELECT * FROM map_points WHERE id = ?", (point_id,))
            row = await cursor.fetchone()
            return _row_to_point(dict(row)) if row else None
        finally:
            await db.close()

    async def create_point(self, data: MapPointCreate) -> MapPoint:
        now = _now()
        point = MapPoint(
            id=str(uuid4()),
            name=data.name.strip(),
            x=data.x,
            y=data.y,
            linked_chatroom_id=data.linked_chatroom_id or None,
            created_at=now,
            updated_at=now,
        )
        db = await self._get_db()
        try:
            if point.linked_chatroom_id:
                await self._ensure_chatroom(db, point.linked_chatroom_id)
            await db.execute(
                """INSERT INTO map_points (id, name, x, y, linked_chatroom_id, created_at, updated_at)
                   VALUES (?, ?, ?, ?, ?, ?, ?)""",
                (point.id, point.name, point.x, point.y, point.linked_chatroom_id, now, now),
            )
            await db.commit()
        finally:
            await db.close()

        logger.info(f"Placed map point: {point.name} at ({point.x}, {point.y})")
        await self.realtime.publish("map_point_created", point.model_dump(mode="json"))
        return point

    async def update_point(self, point_id: str, data: MapPointUpdate) -> MapPoint | None:
        """Patch a map point. An empty ``linked_chatroom_id`` unlinks the point."""
        existing = await self.get_point(point_id)
        if not existing:
            return None

        fields: dict = {}
        if data.name is not None:
            fields["name"] = data.name.strip()
        if data.x is not None:
            fields["x"] = data.x
        if data.y is not None:
            fields["y"] = data.y
        if data.linked_chatroom_id is not None:
            fields["linked_chatroom_id"] = data.linked_chatroom_id or None
        if not fields:
            return existing

        fields["updated_at"] = _now()
        set_clause = ", ".join(f"{k} = ?" for k in fields)
        params = list(fields.values()) + [point_id]
        db = await self._get_db()
        try:
            if fields.get("linked_chatroom_id"):
                await self._ensure_chatroom(db, fields["linked_chatroom_id"])
            await db.execute(f"UPDATE map_points SET {set_clause} WHERE id = ?", params)
            await db.commit()
        finally:
            await db.close()

        point = await self.get_point(point_id)
        if point:
            await self.realtime.publish("map_point_updated", point.model_dump(mode="json"))
        return point

    async def delete_point(self, point_id: str) -> bool:
        db = await self._get_db()
        try:
            cursor = await db.execute("DELETE FROM map_points WHERE id = ?", (point_id,))
            await db.commit()
            deleted = cursor.rowcount > 0
        finally:
            await db.close()

        if deleted:
            await self.realtime.publish("map_point_deleted", {"id": point_id})
        return deleted
