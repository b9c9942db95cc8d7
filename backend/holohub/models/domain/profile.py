"""User profile and session identity models."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime, timezone


class ProfileUpdate(BaseModel):
    """Payload for editing the caller's own profile."""
    display_name: Optional[str] = None
    photo_url: Optional[str] = None
    banner_url: Optional[str] = None


class Profile(BaseModel):
    """Public profile of an authenticated user."""
    user_id: str
    display_name: str = ""
    photo_url: str = ""
    banner_url: str = ""
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class SessionContext(BaseModel):
    """Identity of the caller, passed explicitly into every operation that needs it."""
    user_id: str
    display_name: str
    photo_url: Optional[str] = None

    @classmethod
    def from_profile(cls, user_id: str, profile: Optional[Profile]) -> "SessionContext":
        display_name = (profile.display_name if profile else "").strip()
        photo_url = (profile.photo_url if profile else "").strip()
        return cls(
            user_id=user_id,
            display_name=display_name or user_id[:8],
            photo_url=photo_url or None,
        )
