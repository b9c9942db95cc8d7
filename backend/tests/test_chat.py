"""Tests for chatrooms and the conversation log."""

from datetime import datetime, timedelta, timezone
import random

import pytest

from holohub.models import ChatMessage, ChatroomUpdate, SYSTEM_AUTHOR_ID
from holohub.services.chat import order_messages
from helpers import emitted


async def test_append_and_list_in_created_order(chat, room, session):
    first = await chat.post_user_message(session, room.id, "one")
    second = await chat.post_system_message(room.id, "two")
    third = await chat.append_message(
        room.id, text="three", author_id="npc-abc", author_name="Greedo", is_npc=True
    )

    messages = await chat.list_messages(room.id)
    assert [m.id for m in messages] == [first.id, second.id, third.id]
    assert messages[0].author_name == "Luke"
    assert messages[1].author_id == SYSTEM_AUTHOR_ID
    assert messages[2].is_npc is True


async def test_same_timestamp_messages_keep_posting_order(chat, room, session, monkeypatch):
    frozen = datetime(2026, 1, 1, tzinfo=timezone.utc).isoformat()
    monkeypatch.setattr("holohub.services.chat._now", lambda: frozen)
    texts = [f"line {i}" for i in range(8)]
    for text in texts:
        await chat.post_user_message(session, room.id, text)

    messages = await chat.list_messages(room.id)
    assert [m.text for m in messages] == texts
    assert [m.seq for m in messages] == sorted(m.seq for m in messages)


async def test_append_to_missing_room_raises_lookup_error(chat):
    with pytest.raises(LookupError):
        await chat.post_system_message("no-such-room", "hello")


async def test_append_publishes_to_room_channel(chat, room, session, sio):
    message = await chat.post_user_message(session, room.id, "hello")
    calls = [c for c in sio.emit.call_args_list if c.args[0] == "message_created"]
    assert len(calls) == 1
    assert calls[0].kwargs["room"] == f"chatroom:{room.id}"
    assert calls[0].args[1]["id"] == message.id


async def test_publish_failure_does_not_break_append(chat, room, session, sio):
    sio.emit.side_effect = RuntimeError("socket down")
    message = await chat.post_user_message(session, room.id, "still saved")
    assert [m.id for m in await chat.list_messages(room.id)] == [message.id]


async def test_delete_room_removes_messages(chat, room, session):
    await chat.post_user_message(session, room.id, "bye")
    assert await chat.delete_room(room.id) is True
    assert await chat.get_room(room.id) is None
    assert await chat.list_messages(room.id) == []
    assert await chat.delete_room(room.id) is False


async def test_update_room(chat, room, sio):
    updated = await chat.update_room(room.id, ChatroomUpdate(name="Jabba's Palace"))
    assert updated.name == "Jabba's Palace"
    assert emitted(sio, "chatroom_updated")[0]["name"] == "Jabba's Palace"
    assert await chat.update_room("missing", ChatroomUpdate(name="x")) is None


def _message(i: int, at: datetime) -> ChatMessage:
    return ChatMessage(
        id=f"m{i:02d}", room_id="r", text=str(i), author_id="u", author_name="U", created_at=at
    )


def test_order_messages_is_independent_of_arrival_order():
    base = datetime(2026, 1, 1, tzinfo=timezone.utc)
    messages = [_message(i, base + timedelta(seconds=i // 2)) for i in range(12)]
    expected = [m.id for m in order_messages(messages)]
    for seed in range(5):
        shuffled = messages[:]
        random.Random(seed).shuffle(shuffled)
        assert [m.id for m in order_messages(shuffled)] == expected
    assert expected == [m.id for m in messages]
