"""
Message composer: dispatches submitted chat text.

Plain messages are appended and done. NPC invocations append the user's
message, then run the NPC responder as a background task. Each composer
(one user in one room) has a single in-flight slot that moves
idle -> pending -> idle; a second invocation while pending is refused.
"""

from __future__ import annotations

import asyncio

from holohub.logging import get_logger
from holohub.models import (
    ChatSubmitResponse,
    ComposerState,
    NpcInvocation,
    NpcTurnResult,
    SessionContext,
)
from holohub.services.chat import ChatService
from holohub.services.npc_parser import parse_npc_invocation
from holohub.services.npc_responder import NpcResponder
from holohub.services.realtime import RealtimeService

logger = get_logger("services.composer")

ComposerKey = tuple[str, str]


class ComposerBusyError(RuntimeError):
    """Raised when a composer already has an NPC reply in flight."""


class MessageComposer:
    def __init__(
        self,
        chat: ChatService,
        responder: NpcResponder,
        realtime: RealtimeService,
    ):
        self.chat = chat
        self.responder = responder
        self.realtime = realtime
        self._pending: set[ComposerKey] = set()
        self._tasks: set[asyncio.Task[NpcTurnResult]] = set()

    def state(self, user_id: str, room_id: str) -> ComposerState:
        if (user_id, room_id) in self._pending:
            return ComposerState.PENDING
        return ComposerState.IDLE

    async def submit(
        self, session: SessionContext, room_id: str, text: str
    ) -> ChatSubmitResponse:
        """
        Classify and post a composer submission.

        :raises ValueError: If the text is blank
        :raises ComposerBusyError: If an NPC reply is already pending for this composer
        :raises LookupError: If the room does not exist
        """
        if not text.strip():
            raise ValueError("Message text is empty")

        invocation = parse_npc_invocation(text)
        if invocation is None:
            message = await self.chat.post_user_message(session, room_id, text)
            return ChatSubmitResponse(message=message)

        key: ComposerKey = (session.user_id, room_id)
        if key in self._pending:
            raise ComposerBusyError("An NPC reply is already pending for this composer")
        self._pending.add(key)
        try:
            message = await self.chat.post_user_message(session, room_id, text)
        except BaseException:
            self._pending.discard(key)
            raise

        task = asyncio.create_task(self._run(key, room_id, invocation))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return ChatSubmitResponse(message=message, npc_invocation=invocation, npc_pending=True)

    async def _set_thinking(self, key: ComposerKey, room_id: str, npc_name: str, active: bool) -> None:
        await self.realtime.publish_to_chatroom(
            room_id,
            "npc_thinking",
            {"room_id": room_id, "user_id": key[0], "npc_name": npc_name, "active": active},
        )

    async def _run(
        self, key: ComposerKey, room_id: str, invocation: NpcInvocation
    ) -> NpcTurnResult:
        await self._set_thinking(key, room_id, invocation.target_name, True)
        try:
            result = await self.responder.respond(
                room_id, invocation.target_name, invocation.utterance
            )
            logger.debug(
                "[Composer] user=%s room=%s npc=%r status=%s",
                key[0],
                room_id,
                invocation.target_name,
                result.status.value,
            )
            return result
        except Exception:
            logger.exception("[Composer] NPC task crashed user=%s room=%s", key[0], room_id)
            raise
        finally:
            self._pending.discard(key)
            await self._set_thinking(key, room_id, invocation.target_name, False)

    async def wait_idle(self) -> None:
        """Wait for every in-flight NPC reply to finish."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
