"""Blog post (data log) operations."""

from datetime import datetime, timezone
from uuid import uuid4

import aiosqlite

from holohub.logging import get_logger
from holohub.models import BlogPost, BlogPostCreate, BlogPostUpdate, SessionContext
from holohub.services.realtime import RealtimeService

logger = get_logger("services.blogs")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _row_to_post(row: dict) -> BlogPost:
    return BlogPost(
        id=row["id"],
        name=row["name"],
        content=row.get("content"),
        cover_url=row.get("cover_url"),
        creator_id=row.get("creator_id"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class BlogService:
    def __init__(self, db_path: str, realtime: RealtimeService):
        self.db_path = db_path
        self.realtime = realtime

    async def _get_db(self) -> aiosqlite.Connection:
        db = await aiosqlite.connect(self.db_path)
        db.row_factory = aiosqlite.Row
        await db.execute("PRAGMA foreign_keys = ON")
        return db

    async def list_posts(self) -> list[BlogPost]:
        db = await self._get_db()
        try:
            cursor = await db.execute("SELECT * FROM blogs ORDER BY created_at DESC")
            rows = await cursor.fetchall()
            return [_row_to_post(dict(r)) for r in rows]
        finally:
            await db.close()

    async def get_post(self, post_id: str) -> BlogPost | None:
        db = await self._get_db()
        try:
            cursor = await db.execute("SELECT * FROM blogs WHERE id = ?", (post_id,))
            row = await cursor.fetchone()
            return _row_to_post(dict(row)) if row else None
        finally:
            await db.close()

    async def create_post(self, session: SessionContext, data: BlogPostCreate) -> BlogPost:
        now = _now()
        post = BlogPost(
            id=str(uuid4()),
            name=data.name.strip(),
            content=data.content,
            cover_url=data.cover_url,
            creator_id=session.user_id,
            created_at=now,
            updated_at=now,
        )
        db = await self._get_db()
        try:
            await db.execute(
                """INSERT INTO blogs (id, name, content, cover_url, creator_id, created_at, updated_at)
                   VALUES (?, ?, ?, ?, ?, ?, ?)""",
                (post.id, post.name, post.content, post.cover_url, post.creator_id, now, now),
            )
            await db.commit()
        finally:
            await db.close()

        logger.info(f"Created blog post: {post.name} ({post.id[:8]})")
        await self.realtime.publish("blog_created", post.model_dump(mode="json"))
        return post

    async def update_post(self, post_id: str, data: BlogPostUpdate) -> BlogPost | None:
        existing = await self.get_post(post_id)
        if not existing:
            return None

        fields = data.model_dump(exclude_none=True)
        if "name" in fields:
            fields["name"] = fields["name"].strip()
        if not fields:
            return existing

        fields["updated_at"] = _now()
        set_clause = ", ".join(f"{k} = ?" for k in fields)
        params = list(fields.values()) + [post_id]
        db = await self._get_db()
        try:
            await db.execute(f"UPDATE blogs SET {set_clause} WHERE id = ?", params)
            await db.commit()
        finally:
            await db.close()

        post = await self.get_post(post_id)
        if post:
            await self.realtime.publish("blog_updated", post.model_dump(mode="json"))
        return post

    async def delete_post(self, post_id: str) -> bool:
        db = await self._get_db()
        try:
            cursor = await db.execute("DELETE FROM blogs WHERE id = ?", (post_id,))
            await db.commit()
            deleted = cursor.rowcount > 0
        finally:
            await db.close()

        if deleted:
            await self.realtime.publish("blog_deleted", {"id": post_id})
        return deleted
