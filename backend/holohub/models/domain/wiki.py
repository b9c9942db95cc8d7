"""Holo-Wiki entry domain model."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime, timezone
from uuid import uuid4

from holohub.models.enums import WikiEntryType


class WikiEntryCreate(BaseModel):
    """Payload for creating a wiki entry (character, NPC or lore page)."""
    name: str = Field(min_length=1)
    type: WikiEntryType = WikiEntryType.LORE
    content: Optional[str] = None
    personality: Optional[str] = None
    cover_url: Optional[str] = None
    bg_url: Optional[str] = None


class WikiEntryUpdate(BaseModel):
    """
    Payload for updating a wiki entry.

    The type and the NPC interaction history are not editable here;
    history only grows through NPC conversations.
    """
    name: Optional[str] = Field(default=None, min_length=1)
    content: Optional[str] = None
    personality: Optional[str] = None
    cover_url: Optional[str] = None
    bg_url: Optional[str] = None


class WikiEntry(BaseModel):
    """A Holo-Wiki entry. Entries of type ``npc`` form the NPC directory."""
    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    type: WikiEntryType
    content: Optional[str] = None
    personality: Optional[str] = None
    interaction_history: str = ""
    history_version: int = 0
    cover_url: Optional[str] = None
    bg_url: Optional[str] = None
    creator_id: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_npc(self) -> bool:
        return self.type == WikiEntryType.NPC
