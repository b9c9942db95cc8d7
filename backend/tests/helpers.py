"""Shared test helpers."""

import aiosqlite


async def set_history(db_path: str, entry_id: str, history: str) -> None:
    async with aiosqlite.connect(db_path) as db:
        await db.execute(
            "UPDATE wiki_entries SET interaction_history = ? WHERE id = ?",
            (history, entry_id),
        )
        await db.commit()


def emitted(sio, event: str) -> list[dict]:
    return [c.args[1] for c in sio.emit.call_args_list if c.args[0] == event]
