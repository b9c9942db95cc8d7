"""Domain models for NPC chat invocations."""

from pydantic import BaseModel
from typing import Optional

from holohub.models.domain.chat import ChatMessage
from holohub.models.enums import NpcTurnStatus


class NpcInvocation(BaseModel):
    """A chat message recognized as addressed to a named NPC."""

    target_name: str
    utterance: str


class NpcTurnResult(BaseModel):
    """Outcome of one NPC responder run."""

    status: NpcTurnStatus
    target_name: str
    npc_id: Optional[str] = None
    message: Optional[ChatMessage] = None
    generated: bool = False
    memory_recorded: bool = False
    error: Optional[str] = None


class ChatSubmitResponse(BaseModel):
    """Response for a composer submission."""

    message: ChatMessage
    npc_invocation: Optional[NpcInvocation] = None
    npc_pending: bool = False
