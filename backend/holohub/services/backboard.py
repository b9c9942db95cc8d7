"""
Backboard.io integration service.

Handles assistant provisioning, thread lifecycle and single-shot generation.
Prompt construction and NPC semantics live in NpcResponder; this is the
transport layer.
"""

from typing import Any

from backboard import BackboardClient

from holohub.config import settings
from holohub.logging import get_logger
from holohub.models import (
    AssistantCreated, ThreadCreated, ThreadDeleted, ChatResponse,
)
from holohub.services.prompts import build_npc_assistant_prompt

logger = get_logger('services.backboard')


class BackboardService:
    """Service for interacting with Backboard.io."""

    def __init__(self):
        self.client = None
        self.assistant_id: str | None = settings.BACKBOARD_ASSISTANT_ID or None
        self._initialized = False

    async def initialize(self):
        if not settings.BACKBOARD_API_KEY:
            logger.warning("BACKBOARD_API_KEY not set - NPC replies will use the offline fallback")
            return

        try:
            self.client = BackboardClient(api_key=settings.BACKBOARD_API_KEY)
            self._initialized = True
            logger.info("Backboard client initialized")
        except Exception as e:
            logger.error(f"Failed to initialize Backboard: {e}")

    @property
    def is_available(self) -> bool:
        return self._initialized and self.client is not None

    # ── Assistants ──

    async def create_npc_assistant(self) -> AssistantCreated:
        if not self.is_available:
            return AssistantCreated(success=False)

        try:
            assistant = await self.client.create_assistant(
                name=settings.BACKBOARD_ASSISTANT_NAME,
                description=build_npc_assistant_prompt(),
            )
            logger.info(f"Created NPC assistant: {assistant.assistant_id}")
            return AssistantCreated(success=True, id=str(assistant.assistant_id))
        except Exception as e:
            logger.error(f"Failed to create NPC assistant: {e}")
            return AssistantCreated(success=False)

    async def ensure_assistant(self) -> str | None:
        if self.assistant_id:
            return self.assistant_id
        result = await self.create_npc_assistant()
        if result.success and result.id:
            self.assistant_id = result.id
        return self.assistant_id

    # ── Threads ──

    async def create_thread(self, assistant_id: str) -> ThreadCreated:
        if not self.is_available:
            return ThreadCreated(success=False)

        try:
            thread = await self.client.create_thread(assistant_id=assistant_id)
            return ThreadCreated(success=True, id=str(thread.thread_id))
        except Exception as e:
            logger.error(f"Failed to create thread for assistant {assistant_id}: {e}")
            return ThreadCreated(success=False)

    async def delete_thread(self, thread_id: str) -> ThreadDeleted:
        if not self.is_available:
            return ThreadDeleted(success=False)

        try:
            await self.client.delete_thread(thread_id=thread_id)
            return ThreadDeleted(success=True)
        except Exception as e:
            logger.error(f"Failed to delete thread: {e}")
            return ThreadDeleted(success=False)

    # ── Chat ──

    async def chat(self, thread_id: str, prompt: str) -> ChatResponse:
        if not self.is_available:
            return ChatResponse(success=False, error="Backboard service unavailable")

        llm_provider = str(settings.LLM_PROVIDER or "").strip()
        model_name = str(settings.MODEL_NAME or "").strip()
        add_message_kwargs: dict[str, Any] = {
            "thread_id": thread_id,
            "content": prompt,
            "memory": "off",
        }
        if llm_provider:
            add_message_kwargs["llm_provider"] = llm_provider
        if model_name:
            add_message_kwargs["model_name"] = model_name
        logger.debug(
            "Backboard add_message routing thread=%s provider=%s model=%s",
            thread_id,
            llm_provider or "(default)",
            model_name or "(default)",
        )

        try:
            response = await self.client.add_message(**add_message_kwargs)
        except Exception as e:
            logger.error(f"Chat failed for thread {thread_id}: {e}")
            return ChatResponse(success=False, error=str(e))

        content = getattr(response, "content", None)
        response_model_provider = str(getattr(response, "model_provider", "") or "").strip() or None
        response_model_name = str(getattr(response, "model_name", "") or "").strip() or None
        input_tokens = getattr(response, "input_tokens", None)
        output_tokens = getattr(response, "output_tokens", None)
        total_tokens = getattr(response, "total_tokens", None)

        logger.info(
            "Backboard usage thread=%s provider=%s model=%s tokens=%s/%s/%s",
            thread_id,
            response_model_provider or "(unknown)",
            response_model_name or "(unknown)",
            input_tokens if input_tokens is not None else "?",
            output_tokens if output_tokens is not None else "?",
            total_tokens if total_tokens is not None else "?",
        )

        if not isinstance(content, str) or not content.strip():
            return ChatResponse(
                success=False,
                error="Generation response carried no text",
                model_provider=response_model_provider,
                model_name=response_model_name,
            )

        return ChatResponse(
            success=True,
            response=content,
            model_provider=response_model_provider,
            model_name=response_model_name,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            total_tokens=total_tokens,
        )

    async def generate(self, prompt: str) -> ChatResponse:
        """
        Run one prompt through a throwaway thread.

        Exactly one generation attempt is made. Failures are reported through
        the returned ChatResponse, never raised.

        :param prompt: Full instruction block for the model
        :type prompt: str
        :return: Generation result
        :rtype: ChatResponse
        """
        if not self.is_available:
            return ChatResponse(success=False, error="Backboard service unavailable")

        assistant_id = await self.ensure_assistant()
        if not assistant_id:
            return ChatResponse(success=False, error="No Backboard assistant configured")

        thread_id: str | None = None
        try:
            thread_result = await self.create_thread(assistant_id)
            if not thread_result.success or not thread_result.id:
                return ChatResponse(success=False, error="Failed to create generation thread")
            thread_id = thread_result.id
            return await self.chat(thread_id=thread_id, prompt=prompt)
        finally:
            if thread_id:
                await self.delete_thread(thread_id)
