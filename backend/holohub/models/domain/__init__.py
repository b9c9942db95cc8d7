"""Domain models: the core data structures of the roleplay hub."""

from holohub.models.domain.chat import (
    SYSTEM_AUTHOR_ID,
    SYSTEM_AUTHOR_NAME,
    npc_author_id,
    Chatroom,
    ChatroomCreate,
    ChatroomUpdate,
    ChatMessage,
    ChatMessageSubmit,
)
from holohub.models.domain.wiki import WikiEntry, WikiEntryCreate, WikiEntryUpdate
from holohub.models.domain.npc import NpcInvocation, NpcTurnResult, ChatSubmitResponse
from holohub.models.domain.blog import BlogPost, BlogPostCreate, BlogPostUpdate
from holohub.models.domain.map_point import MapPoint, MapPointCreate, MapPointUpdate
from holohub.models.domain.profile import Profile, ProfileUpdate, SessionContext
from holohub.models.domain.formatting import FormattedLine, FormattedWikiEntry

__all__ = [
    "SYSTEM_AUTHOR_ID", "SYSTEM_AUTHOR_NAME", "npc_author_id",
    "Chatroom", "ChatroomCreate", "ChatroomUpdate", "ChatMessage", "ChatMessageSubmit",
    "WikiEntry", "WikiEntryCreate", "WikiEntryUpdate",
    "NpcInvocation", "NpcTurnResult", "ChatSubmitResponse",
    "BlogPost", "BlogPostCreate", "BlogPostUpdate",
    "MapPoint", "MapPointCreate", "MapPointUpdate",
    "Profile", "ProfileUpdate", "SessionContext",
    "FormattedLine", "FormattedWikiEntry",
]
