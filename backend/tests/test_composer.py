"""Tests for composer dispatch and the per-composer in-flight slot."""

import asyncio

import pytest

from holohub.models import ChatResponse, ComposerState, SessionContext
from holohub.services.composer import ComposerBusyError
from helpers import emitted


async def test_plain_message_is_appended_without_npc(composer, chat, room, session, backboard):
    response = await composer.submit(session, room.id, "Anyone seen Solo?")

    assert response.npc_invocation is None
    assert response.npc_pending is False
    assert response.message.author_id == session.user_id
    await composer.wait_idle()
    assert [m.text for m in await chat.list_messages(room.id)] == ["Anyone seen Solo?"]
    backboard.generate.assert_not_awaited()


async def test_blank_message_rejected(composer, room, session):
    with pytest.raises(ValueError):
        await composer.submit(session, room.id, "   ")


async def test_missing_room_raises_lookup_error(composer, session):
    with pytest.raises(LookupError):
        await composer.submit(session, "nowhere", "@Greedo, hi")
    assert composer.state(session.user_id, "nowhere") == ComposerState.IDLE


async def test_invocation_posts_user_message_then_npc_reply(composer, chat, room, session, make_npc):
    await make_npc("Greedo")

    response = await composer.submit(session, room.id, "@Greedo, going somewhere?")

    assert response.npc_pending is True
    assert response.npc_invocation.target_name == "Greedo"
    assert response.npc_invocation.utterance == "going somewhere?"
    await composer.wait_idle()
    messages = await chat.list_messages(room.id)
    assert [m.text for m in messages] == ["@Greedo, going somewhere?", "Hmm. Greetings."]
    assert [m.is_npc for m in messages] == [False, True]
    assert composer.state(session.user_id, room.id) == ComposerState.IDLE


async def test_second_invocation_while_pending_is_refused(composer, chat, room, session, make_npc, backboard):
    await make_npc("Greedo")
    release = asyncio.Event()

    async def slow_generate(prompt: str) -> ChatResponse:
        await release.wait()
        return ChatResponse(success=True, response="Later.")

    backboard.generate.side_effect = slow_generate
    await composer.submit(session, room.id, "@Greedo, first")
    assert composer.state(session.user_id, room.id) == ComposerState.PENDING

    with pytest.raises(ComposerBusyError):
        await composer.submit(session, room.id, "@Greedo, second")

    other = SessionContext(user_id="user-han-0002", display_name="Han")
    await composer.submit(other, room.id, "@Greedo, from another composer")

    release.set()
    await composer.wait_idle()
    texts = [m.text for m in await chat.list_messages(room.id)]
    assert "@Greedo, second" not in texts
    assert texts.count("Later.") == 2
    assert composer.state(session.user_id, room.id) == ComposerState.IDLE


async def test_plain_messages_allowed_while_pending(composer, room, session, make_npc, backboard):
    await make_npc("Greedo")
    release = asyncio.Event()

    async def slow_generate(prompt: str) -> ChatResponse:
        await release.wait()
        return ChatResponse(success=True, response="...")

    backboard.generate.side_effect = slow_generate
    await composer.submit(session, room.id, "@Greedo, first")
    response = await composer.submit(session, room.id, "just chatting")
    assert response.npc_pending is False
    release.set()
    await composer.wait_idle()


async def test_thinking_signal_fires_once_each_way(composer, room, session, make_npc, sio):
    await make_npc("Greedo")
    await composer.submit(session, room.id, "@Greedo, hi")
    await composer.wait_idle()

    signals = emitted(sio, "npc_thinking")
    assert [s["active"] for s in signals] == [True, False]
    assert all(s["npc_name"] == "Greedo" for s in signals)


async def test_thinking_cleared_when_npc_missing(composer, chat, room, session, sio):
    await composer.submit(session, room.id, "@Greedo, hi")
    await composer.wait_idle()

    assert [s["active"] for s in emitted(sio, "npc_thinking")] == [True, False]
    messages = await chat.list_messages(room.id)
    assert len(messages) == 2
    assert 'NPC named "Greedo" not found in Holo-Wiki.' in messages[1].text
    assert composer.state(session.user_id, room.id) == ComposerState.IDLE


async def test_slot_released_when_responder_crashes(composer, room, session, responder, sio):
    async def crash(*args, **kwargs):
        raise RuntimeError("boom")

    responder.respond = crash
    await composer.submit(session, room.id, "@Greedo, hi")
    await composer.wait_idle()

    assert composer.state(session.user_id, room.id) == ComposerState.IDLE
    assert [s["active"] for s in emitted(sio, "npc_thinking")] == [True, False]
