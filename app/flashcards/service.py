from __future__ import annotations

import logging
from typing import Protocol

from app.core.llm.chat_client import LLMContentError, LLMHTTPError
from app.domain.exceptions import LLMOutputFormatError, NoValidFlashcardsError, UpstreamLLMError
from app.flashcards.models import Flashcard
from app.flashcards.parser import parse_flashcards
from app.flashcards.prompt import build_flashcard_messages
from app.flashcards.schemas import GeneratedFlashcard

logger = logging.getLogger("app.flashcards")


class LLMClient(Protocol):
    async def complete(self, *, messages: list[dict[str, str]]) -> str: ...


class FlashcardRepository(Protocol):
    async def insert_flashcards(
        self, *, set_id: str, flashcards: list[GeneratedFlashcard]
    ) -> list[Flashcard]: ...


class FlashcardGenerationService:
    def __init__(
        self,
        *,
        llm_client: LLMClient,
        store: FlashcardRepository,
        request_id: str | None = None,
    ):
        self._llm = llm_client
        self._store = store
        self._request_id = request_id

    async def generate(self, *, prompt: str, set_id: str, count: int) -> list[Flashcard]:
        """
        Ask the LLM for `count` flashcards about `prompt` and persist the valid ones.

        Raises:
            UpstreamLLMError: the provider answered non-2xx (status passed through).
            LLMOutputFormatError: the completion is not text or not a JSON array.
            NoValidFlashcardsError: no entry had both a question and an answer.
            FlashcardStorageError: the bulk insert failed.
        """

        messages = build_flashcard_messages(prompt=prompt, count=count)

        try:
            content = await self._llm.complete(messages=messages)
        except LLMHTTPError as exc:
            logger.error(
                "LLM API returned an error",
                extra={
                    "request_id": self._request_id,
                    "set_id": set_id,
                    "upstream_status": exc.status_code,
                },
            )
            raise UpstreamLLMError(
                f"Failed to get response from LLM API: {exc.reason}",
                status_code=exc.status_code,
                details=exc.body,
            ) from exc
        except LLMContentError as exc:
            logger.warning(
                "LLM returned no text content",
                extra={"request_id": self._request_id, "set_id": set_id},
            )
            raise LLMOutputFormatError("message content is not text") from exc

        try:
            cards = parse_flashcards(content)
        except LLMOutputFormatError as exc:
            logger.warning(
                "Failed to parse LLM generated content",
                extra={
                    "request_id": self._request_id,
                    "set_id": set_id,
                    "content_chars": len(content),
                    "error": exc.reason,
                },
            )
            raise

        if not cards:
            raise NoValidFlashcardsError()

        return await self._store.insert_flashcards(set_id=set_id, flashcards=cards)
