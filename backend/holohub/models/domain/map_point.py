"""Galaxy map point domain model."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime, timezone
from uuid import uuid4


class MapPointCreate(BaseModel):
    """Payload for placing a point on the galaxy map. Coordinates are percentages."""
    name: str = Field(min_length=1)
    x: float = Field(default=50, ge=0, le=100)
    y: float = Field(default=50, ge=0, le=100)
    linked_chatroom_id: Optional[str] = None


class MapPointUpdate(BaseModel):
    """Payload for moving or renaming a map point."""
    name: Optional[str] = Field(default=None, min_length=1)
    x: Optional[float] = Field(default=None, ge=0, le=100)
    y: Optional[float] = Field(default=None, ge=0, le=100)
    linked_chatroom_id: Optional[str] = None


class MapPoint(BaseModel):
    """A named point on the galaxy map, optionally linked to a chat channel."""
    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    x: float = 50
    y: float = 50
    linked_chatroom_id: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
