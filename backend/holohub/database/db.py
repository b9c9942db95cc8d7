"""
Database connection and initialization.
"""

import aiosqlite
from pathlib import Path
from holohub.config import settings
from holohub.logging import get_logger

logger = get_logger('database')

DATABASE_PATH = Path(settings.DATABASE_PATH)


async def _table_columns(db: aiosqlite.Connection, table_name: str) -> set[str]:
    cursor = await db.execute(f"PRAGMA table_info({table_name})")
    rows = await cursor.fetchall()
    return {row[1] for row in rows}


async def _migrate_wiki_history_version(db: aiosqlite.Connection) -> None:
    wiki_columns = await _table_columns(db, "wiki_entries")
    if "history_version" in wiki_columns:
        return

    logger.info("Applying migration: add wiki_entries.history_version")
    await db.execute(
        "ALTER TABLE wiki_entries ADD COLUMN history_version INTEGER NOT NULL DEFAULT 0"
    )


async def _migrate_wiki_npc_name_index(db: aiosqlite.Connection) -> None:
    cursor = await db.execute(
        "SELECT 1 FROM sqlite_master WHERE type = 'index' AND name = 'ux_wiki_entries_npc_name'"
    )
    if await cursor.fetchone():
        return

    cursor = await db.execute(
        """SELECT name FROM wiki_entries WHERE type = 'npc'
           GROUP BY name HAVING COUNT(*) > 1"""
    )
    duplicates = [row[0] for row in await cursor.fetchall()]
    if duplicates:
        logger.warning(
            f"Skipping unique NPC name index, duplicate NPC names present: {duplicates}"
        )
        return

    logger.info("Applying migration: unique index on NPC names")
    await db.execute(
        """CREATE UNIQUE INDEX ux_wiki_entries_npc_name
           ON wiki_entries(name) WHERE type = 'npc'"""
    )


async def init_db(db_path: str | Path | None = None):
    """
    Initialize database with schema.

    :param db_path: Database file to initialize, defaults to the configured path
    :type db_path: str | Path | None
    :return: None
    :rtype: None
    """
    path = Path(db_path) if db_path else DATABASE_PATH
    path.parent.mkdir(parents=True, exist_ok=True)

    async with aiosqlite.connect(path) as db:
        schema_path = Path(__file__).parent / "init_db.sql"
        with open(schema_path) as f:
            await db.executescript(f.read())
        await _migrate_wiki_history_version(db)
        await _migrate_wiki_npc_name_index(db)
        await db.commit()
        logger.info(f"Database initialized at {path}")
