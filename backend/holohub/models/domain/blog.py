"""Blog post (data log) domain model."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime, timezone
from uuid import uuid4


class BlogPostCreate(BaseModel):
    """Payload for creating a blog post."""
    name: str = Field(min_length=1)
    content: Optional[str] = None
    cover_url: Optional[str] = None


class BlogPostUpdate(BaseModel):
    """Payload for updating a blog post."""
    name: Optional[str] = Field(default=None, min_length=1)
    content: Optional[str] = None
    cover_url: Optional[str] = None


class BlogPost(BaseModel):
    """A community blog post."""
    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    content: Optional[str] = None
    cover_url: Optional[str] = None
    creator_id: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
