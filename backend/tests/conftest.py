from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from holohub.database.db import init_db
from holohub.models import ChatResponse, ChatroomCreate, SessionContext, WikiEntryCreate, WikiEntryType
from holohub.services.chat import ChatService
from holohub.services.composer import MessageComposer
from holohub.services.npc_responder import NpcResponder
from holohub.services.realtime import RealtimeService
from holohub.services.wiki import WikiService


@pytest.fixture
async def db_path(tmp_path):
    path = tmp_path / "holohub-test.db"
    await init_db(path)
    return str(path)


@pytest.fixture
def sio():
    server = MagicMock()
    server.emit = AsyncMock()
    return server


@pytest.fixture
def realtime(sio) -> RealtimeService:
    return RealtimeService(sio)


@pytest.fixture
def backboard():
    """Stands in for BackboardService; tests set ``generate`` per scenario."""
    fake = SimpleNamespace()
    fake.is_available = True
    fake.generate = AsyncMock(return_value=ChatResponse(success=True, response="Hmm. Greetings."))
    return fake


@pytest.fixture
def chat(db_path, realtime) -> ChatService:
    return ChatService(db_path=db_path, realtime=realtime)


@pytest.fixture
def wiki(db_path, realtime) -> WikiService:
    return WikiService(db_path=db_path, realtime=realtime)


@pytest.fixture
def responder(chat, wiki, backboard) -> NpcResponder:
    return NpcResponder(chat=chat, wiki=wiki, backboard=backboard)


@pytest.fixture
def composer(chat, responder, realtime) -> MessageComposer:
    return MessageComposer(chat=chat, responder=responder, realtime=realtime)


@pytest.fixture
def session() -> SessionContext:
    return SessionContext(user_id="user-luke-0001", display_name="Luke", photo_url=None)


@pytest.fixture
async def room(chat, session):
    return await chat.create_room(session, ChatroomCreate(name="Mos Eisley Cantina"))


@pytest.fixture
def make_npc(wiki, session):
    async def _make(name: str, personality: str = "A gruff bounty hunter."):
        return await wiki.create_entry(
            session,
            WikiEntryCreate(name=name, type=WikiEntryType.NPC, personality=personality),
        )

    return _make
