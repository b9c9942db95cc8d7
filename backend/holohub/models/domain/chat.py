"""Chatroom and chat message domain models."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime, timezone
from uuid import uuid4

SYSTEM_AUTHOR_ID = "system"
SYSTEM_AUTHOR_NAME = "System"


def npc_author_id(entry_id: str) -> str:
    """Synthesized author id for messages written by an NPC wiki entry."""
    return f"npc-{entry_id}"


class ChatroomCreate(BaseModel):
    """Payload for creating a chat channel."""
    name: str = Field(min_length=1)
    cover_url: Optional[str] = None
    bg_url: Optional[str] = None


class ChatroomUpdate(BaseModel):
    """Payload for updating a chat channel. Only provided fields are patched."""
    name: Optional[str] = Field(default=None, min_length=1)
    cover_url: Optional[str] = None
    bg_url: Optional[str] = None


class Chatroom(BaseModel):
    """A chat channel with its own conversation log."""
    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    cover_url: Optional[str] = None
    bg_url: Optional[str] = None
    creator_id: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ChatMessage(BaseModel):
    """One entry in a room's append-only conversation log."""
    id: str = Field(default_factory=lambda: str(uuid4()))
    room_id: str
    text: str
    author_id: str
    author_name: str
    author_photo_url: Optional[str] = None
    is_npc: bool = False
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    # Store-assigned insertion counter; breaks ties between equal timestamps.
    seq: Optional[int] = None


class ChatMessageSubmit(BaseModel):
    """Raw composer input submitted by a user."""
    text: str = Field(min_length=1, max_length=12000)
