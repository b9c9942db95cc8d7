"""
HoloHub models.

Usage:
    from holohub.models import ChatMessage, WikiEntry, WikiEntryCreate
    from holohub.models import WikiEntryType, ComposerState, normalize_type
    from holohub.models import ChatResponse, ThreadCreated
"""

# --- Enums & utilities ---
from holohub.models.enums import (
    WikiEntryType,
    ComposerState,
    NpcTurnStatus,
    normalize_type,
)

# --- Domain models ---
from holohub.models.domain import (
    SYSTEM_AUTHOR_ID, SYSTEM_AUTHOR_NAME, npc_author_id,
    Chatroom, ChatroomCreate, ChatroomUpdate, ChatMessage, ChatMessageSubmit,
    WikiEntry, WikiEntryCreate, WikiEntryUpdate,
    NpcInvocation, NpcTurnResult, ChatSubmitResponse,
    BlogPost, BlogPostCreate, BlogPostUpdate,
    MapPoint, MapPointCreate, MapPointUpdate,
    Profile, ProfileUpdate, SessionContext,
    FormattedLine, FormattedWikiEntry,
)

# --- Result models ---
from holohub.models.results import (
    BackboardResult,
    AssistantCreated, ThreadCreated, ThreadDeleted, ChatResponse,
)

__all__ = [
    # Enums
    "WikiEntryType", "ComposerState", "NpcTurnStatus", "normalize_type",
    # Domain
    "SYSTEM_AUTHOR_ID", "SYSTEM_AUTHOR_NAME", "npc_author_id",
    "Chatroom", "ChatroomCreate", "ChatroomUpdate", "ChatMessage", "ChatMessageSubmit",
    "WikiEntry", "WikiEntryCreate", "WikiEntryUpdate",
    "NpcInvocation", "NpcTurnResult", "ChatSubmitResponse",
    "BlogPost", "BlogPostCreate", "BlogPostUpdate",
    "MapPoint", "MapPointCreate", "MapPointUpdate",
    "Profile", "ProfileUpdate", "SessionContext",
    "FormattedLine", "FormattedWikiEntry",
    # Results
    "BackboardResult",
    "AssistantCreated", "ThreadCreated", "ThreadDeleted", "ChatResponse",
]
