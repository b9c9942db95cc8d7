"""Tests for the NPC responder flow: lookup, generation, log append, memory."""

import asyncio
from unittest.mock import AsyncMock

import aiosqlite

from holohub.config import settings
from holohub.models import ChatResponse, NpcTurnStatus, SYSTEM_AUTHOR_ID, WikiEntryCreate, WikiEntryType
from holohub.services.npc_responder import NpcResponder
from helpers import set_history


async def test_unknown_npc_posts_single_notice(responder, chat, wiki, room, backboard):
    result = await responder.respond(room.id, "Greedo", "hello")

    assert result.status == NpcTurnStatus.NOT_FOUND
    messages = await chat.list_messages(room.id)
    assert len(messages) == 1
    assert messages[0].author_id == SYSTEM_AUTHOR_ID
    assert 'NPC named "Greedo" not found in Holo-Wiki.' in messages[0].text
    backboard.generate.assert_not_awaited()
    assert await wiki.list_entries() == []


async def test_non_npc_entry_with_same_name_is_not_resolved(responder, chat, wiki, room, session):
    await wiki.create_entry(session, WikiEntryCreate(name="Greedo", type=WikiEntryType.CHARACTER))
    result = await responder.respond(room.id, "Greedo", "hello")
    assert result.status == NpcTurnStatus.NOT_FOUND


async def test_lookup_is_exact_match(responder, room, make_npc):
    await make_npc("Greedo")
    result = await responder.respond(room.id, "greedo", "hello")
    assert result.status == NpcTurnStatus.NOT_FOUND


async def test_successful_turn_appends_reply_and_memory(responder, chat, wiki, room, make_npc, db_path, backboard):
    npc = await make_npc("Greedo")
    await set_history(db_path, npc.id, "H0")
    backboard.generate.return_value = ChatResponse(success=True, response="R1")

    result = await responder.respond(room.id, "Greedo", "U1")

    assert result.status == NpcTurnStatus.REPLIED
    assert result.generated is True
    assert result.memory_recorded is True
    messages = await chat.list_messages(room.id)
    assert len(messages) == 1
    reply = messages[0]
    assert reply.text == "R1"
    assert reply.is_npc is True
    assert reply.author_id == f"npc-{npc.id}"
    assert reply.author_name == "Greedo"
    entry = await wiki.get_entry(npc.id)
    assert entry.interaction_history == "H0" + "User: U1\nGreedo: R1\n\n"


async def test_prompt_carries_personality_history_and_utterance(responder, room, make_npc, db_path, backboard):
    npc = await make_npc("Greedo", personality="Twitchy Rodian")
    await set_history(db_path, npc.id, "User: hi\nGreedo: Oota.\n\n")

    await responder.respond(room.id, "Greedo", "Going somewhere, Solo?")

    prompt = backboard.generate.await_args.args[0]
    assert "NPC named Greedo" in prompt
    assert "Twitchy Rodian" in prompt
    assert "User: hi\nGreedo: Oota." in prompt
    assert "Going somewhere, Solo?" in prompt


async def test_empty_personality_uses_default(responder, room, make_npc, backboard):
    await make_npc("Greedo", personality="   ")
    await responder.respond(room.id, "Greedo", "hi")
    prompt = backboard.generate.await_args.args[0]
    assert settings.NPC_DEFAULT_PERSONALITY in prompt


async def test_generation_failure_uses_fallback_and_still_remembers(responder, chat, wiki, room, make_npc, backboard):
    npc = await make_npc("Greedo")
    backboard.generate.return_value = ChatResponse(success=False, error="503 Service Unavailable")

    result = await responder.respond(room.id, "Greedo", "hello")

    assert result.status == NpcTurnStatus.REPLIED
    assert result.generated is False
    messages = await chat.list_messages(room.id)
    assert [m.text for m in messages] == [settings.NPC_OFFLINE_REPLY]
    assert messages[0].is_npc is True
    entry = await wiki.get_entry(npc.id)
    assert entry.history_version == 1
    assert entry.interaction_history.endswith(f"User: hello\nGreedo: {settings.NPC_OFFLINE_REPLY}\n\n")


async def test_generation_exception_uses_fallback(responder, chat, room, make_npc, backboard):
    await make_npc("Greedo")
    backboard.generate.side_effect = ConnectionError("network unreachable")

    result = await responder.respond(room.id, "Greedo", "hello")

    assert result.status == NpcTurnStatus.REPLIED
    assert [m.text for m in await chat.list_messages(room.id)] == [settings.NPC_OFFLINE_REPLY]


async def test_empty_generated_text_uses_fallback(responder, chat, room, make_npc, backboard):
    await make_npc("Greedo")
    backboard.generate.return_value = ChatResponse(success=True, response="")

    await responder.respond(room.id, "Greedo", "hello")

    assert [m.text for m in await chat.list_messages(room.id)] == [settings.NPC_OFFLINE_REPLY]


async def test_log_append_failure_posts_failure_notice(chat, wiki, room, make_npc, backboard):
    npc = await make_npc("Greedo")
    original_append = chat.append_message

    async def failing_npc_append(room_id, **kwargs):
        if kwargs.get("is_npc"):
            raise RuntimeError("write rejected")
        return await original_append(room_id, **kwargs)

    chat.append_message = failing_npc_append
    responder = NpcResponder(chat=chat, wiki=wiki, backboard=backboard)

    result = await responder.respond(room.id, "Greedo", "hello")

    assert result.status == NpcTurnStatus.FAILED
    assert result.npc_id == npc.id
    messages = await chat.list_messages(room.id)
    assert [m.text for m in messages] == [settings.NPC_FAILURE_NOTICE]
    assert messages[0].author_id == SYSTEM_AUTHOR_ID
    assert (await wiki.get_entry(npc.id)).history_version == 0


async def test_lookup_failure_posts_failure_notice(chat, wiki, room, backboard):
    wiki.find_npcs_by_name = AsyncMock(side_effect=RuntimeError("store offline"))
    responder = NpcResponder(chat=chat, wiki=wiki, backboard=backboard)

    result = await responder.respond(room.id, "Greedo", "hello")

    assert result.status == NpcTurnStatus.FAILED
    assert [m.text for m in await chat.list_messages(room.id)] == [settings.NPC_FAILURE_NOTICE]
    backboard.generate.assert_not_awaited()


async def test_memory_failure_keeps_visible_reply(chat, wiki, room, make_npc, backboard):
    await make_npc("Greedo")
    wiki.append_npc_memory = AsyncMock(side_effect=RuntimeError("disk full"))
    responder = NpcResponder(chat=chat, wiki=wiki, backboard=backboard)

    result = await responder.respond(room.id, "Greedo", "hello")

    assert result.status == NpcTurnStatus.REPLIED
    assert result.memory_recorded is False
    messages = await chat.list_messages(room.id)
    assert [m.text for m in messages] == ["Hmm. Greetings."]


async def test_sequential_turns_accumulate_in_order(responder, wiki, room, make_npc, backboard):
    npc = await make_npc("Greedo")
    backboard.generate.side_effect = [
        ChatResponse(success=True, response=f"R{i}") for i in range(5)
    ]

    for i in range(5):
        await responder.respond(room.id, "Greedo", f"U{i}")

    entry = await wiki.get_entry(npc.id)
    expected = "NPC created." + "".join(f"User: U{i}\nGreedo: R{i}\n\n" for i in range(5))
    assert entry.interaction_history == expected


async def test_concurrent_turns_keep_both_exchanges(responder, chat, wiki, room, make_npc, backboard):
    npc = await make_npc("Greedo")
    release = asyncio.Event()

    async def slow_generate(prompt: str) -> ChatResponse:
        await release.wait()
        return ChatResponse(success=True, response="A" if "from A" in prompt else "B")

    backboard.generate.side_effect = slow_generate
    turns = asyncio.gather(
        responder.respond(room.id, "Greedo", "from A"),
        responder.respond(room.id, "Greedo", "from B"),
    )
    await asyncio.sleep(0.05)
    release.set()
    await turns

    assert sorted(m.text for m in await chat.list_messages(room.id)) == ["A", "B"]
    entry = await wiki.get_entry(npc.id)
    assert "User: from A\nGreedo: A\n\n" in entry.interaction_history
    assert "User: from B\nGreedo: B\n\n" in entry.interaction_history
    assert entry.history_version == 2


async def test_legacy_duplicate_names_resolve_to_oldest(responder, chat, room, make_npc, db_path):
    first = await make_npc("Greedo")
    second = await make_npc("Greedo II")
    async with aiosqlite.connect(db_path) as db:
        await db.execute("UPDATE wiki_entries SET name = 'Greedo' WHERE id = ?", (second.id,))
        await db.commit()

    result = await responder.respond(room.id, "Greedo", "hello")

    assert result.npc_id == first.id
