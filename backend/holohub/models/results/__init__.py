"""Result models for service operations."""

from holohub.models.results.backboard import (
    BackboardResult, AssistantCreated, ThreadCreated, ThreadDeleted, ChatResponse,
)

__all__ = [
    "BackboardResult", "AssistantCreated", "ThreadCreated", "ThreadDeleted", "ChatResponse",
]
