"""NPC responder: turns an ``@Name, ...`` invocation into an in-character reply."""

from __future__ import annotations

from holohub.config import settings
from holohub.logging import get_logger
from holohub.models import (
    ChatMessage,
    NpcTurnResult,
    NpcTurnStatus,
    WikiEntry,
    npc_author_id,
)
from holohub.services.backboard import BackboardService
from holohub.services.chat import ChatService
from holohub.services.prompts import build_npc_turn_prompt, recent_history
from holohub.services.wiki import WikiService

logger = get_logger("services.npc_responder")


def not_found_notice(npc_name: str) -> str:
    return f'[System] NPC named "{npc_name}" not found in Holo-Wiki.'


class NpcResponder:
    """
    Resolve an NPC, ask the model for its reply, post it, and remember it.

    Holds no per-NPC state: every run re-reads the NPC record, so the
    interaction history stored in the wiki is the only memory.
    """

    def __init__(
        self,
        chat: ChatService,
        wiki: WikiService,
        backboard: BackboardService,
    ):
        self.chat = chat
        self.wiki = wiki
        self.backboard = backboard

    async def _resolve(self, npc_name: str) -> WikiEntry | None:
        matches = await self.wiki.find_npcs_by_name(npc_name)
        if not matches:
            return None
        if len(matches) > 1:
            logger.warning(
                "[NPC] %d directory entries named %r; using oldest %s",
                len(matches),
                npc_name,
                matches[0].id,
            )
        return matches[0]

    async def _generate_reply(self, npc: WikiEntry, npc_name: str, utterance: str) -> tuple[str, bool]:
        prompt = build_npc_turn_prompt(
            npc_name=npc_name,
            personality=(npc.personality or "").strip() or settings.NPC_DEFAULT_PERSONALITY,
            history=recent_history(npc.interaction_history, settings.NPC_PROMPT_HISTORY_MAX_CHARS),
            utterance=utterance,
        )
        try:
            result = await self.backboard.generate(prompt)
        except Exception as e:
            logger.error(f"Generation failed for NPC {npc_name!r}: {e}")
            return settings.NPC_OFFLINE_REPLY, False

        if not result.success or not result.response:
            logger.warning(
                "[NPC] generation unavailable for %r: %s", npc_name, result.error or "empty response"
            )
            return settings.NPC_OFFLINE_REPLY, False
        return result.response, True

    async def _remember(self, npc: WikiEntry, npc_name: str, utterance: str, reply: str) -> bool:
        try:
            updated = await self.wiki.append_npc_memory(npc.id, npc_name, utterance, reply)
        except Exception:
            logger.exception("[NPC] memory update failed for %r (%s)", npc_name, npc.id)
            return False
        return updated is not None

    async def respond(self, room_id: str, npc_name: str, utterance: str) -> NpcTurnResult:
        """
        Run one NPC turn in a chatroom.

        Never raises: an unknown NPC, a failed generation or a failed log
        append all end as messages in the room.

        :param room_id: Chatroom the invocation was posted in
        :type room_id: str
        :param npc_name: Target name exactly as typed
        :type npc_name: str
        :param utterance: What the user said to the NPC
        :type utterance: str
        :return: Outcome of the turn
        :rtype: NpcTurnResult
        """
        npc: WikiEntry | None = None
        try:
            npc = await self._resolve(npc_name)
            if npc is None:
                notice = await self.chat.post_system_message(room_id, not_found_notice(npc_name))
                return NpcTurnResult(
                    status=NpcTurnStatus.NOT_FOUND,
                    target_name=npc_name,
                    message=notice,
                )

            reply, generated = await self._generate_reply(npc, npc_name, utterance)

            message: ChatMessage = await self.chat.append_message(
                room_id,
                text=reply,
                author_id=npc_author_id(npc.id),
                author_name=npc_name,
                is_npc=True,
            )
        except Exception as e:
            logger.exception("[NPC] turn failed for %r in room %s", npc_name, room_id)
            try:
                await self.chat.post_system_message(room_id, settings.NPC_FAILURE_NOTICE)
            except Exception:
                logger.exception("[NPC] could not post failure notice in room %s", room_id)
            return NpcTurnResult(
                status=NpcTurnStatus.FAILED,
                target_name=npc_name,
                npc_id=npc.id if npc else None,
                error=str(e),
            )

        memory_recorded = await self._remember(npc, npc_name, utterance, reply)

        logger.info(
            "[NPC] room=%s npc=%s generated=%s memory_recorded=%s",
            room_id,
            npc.id,
            generated,
            memory_recorded,
        )
        return NpcTurnResult(
            status=NpcTurnStatus.REPLIED,
            target_name=npc_name,
            npc_id=npc.id,
            message=message,
            generated=generated,
            memory_recorded=memory_recorded,
        )
