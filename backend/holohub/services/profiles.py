"""User profile storage and session identity resolution."""

from datetime import datetime, timezone

import aiosqlite

from holohub.logging import get_logger
from holohub.models import Profile, ProfileUpdate, SessionContext
from holohub.services.realtime import RealtimeService

logger = get_logger("services.profiles")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class ProfileService:
    def __init__(self, db_path: str, realtime: RealtimeService):
        self.db_path = db_path
        self.realtime = realtime

    async def _get_db(self) -> aiosqlite.Connection:
        db = await aiosqlite.connect(self.db_path)
        db.row_factory = aiosqlite.Row
        return db

    async def get_profile(self, user_id: str) -> Profile | None:
        db = await self._get_db()
        try:
            cursor = await db.execute("SELECT * FROM profiles WHERE user_id = ?", (user_id,))
            row = await cursor.fetchone()
            return Profile(**dict(row)) if row else None
        finally:
            await db.close()

    async def update_profile(self, user_id: str, data: ProfileUpdate) -> Profile:
        """Merge the provided fields into the caller's profile, creating it if needed."""
        existing = await self.get_profile(user_id) or Profile(user_id=user_id)
        profile = Profile(
            user_id=user_id,
            display_name=(data.display_name if data.display_name is not None else existing.display_name).strip(),
            photo_url=(data.photo_url if data.photo_url is not None else existing.photo_url).strip(),
            banner_url=(data.banner_url if data.banner_url is not None else existing.banner_url).strip(),
            updated_at=_now(),
        )
        db = await self._get_db()
        try:
            await db.execute(
                """INSERT INTO profiles (user_id, display_name, photo_url, banner_url, updated_at)
                   VALUES (?, ?, ?, ?, ?)
                   ON CONFLICT(user_id) DO UPDATE SET
                       display_name = excluded.display_name,
                       photo_url = excluded.photo_url,
                       banner_url = excluded.banner_url,
                       updated_at = excluded.updated_at""",
                (
                    profile.user_id,
                    profile.display_name,
                    profile.photo_url,
                    profile.banner_url,
                    profile.updated_at.isoformat(),
                ),
            )
            await db.commit()
        finally:
            await db.close()

        logger.info(f"Updated profile for {user_id[:8]}")
        await self.realtime.publish("profile_updated", profile.model_dump(mode="json"))
        return profile

    async def session_for(self, user_id: str) -> SessionContext:
        return SessionContext.from_profile(user_id, await self.get_profile(user_id))
