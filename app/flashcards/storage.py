from __future__ import annotations

import logging
from typing import Any

from fastapi import Depends
from sqlalchemy import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_session
from app.domain.exceptions import FlashcardStorageError
from app.flashcards.models import Flashcard
from app.flashcards.schemas import GeneratedFlashcard

logger = logging.getLogger("app.flashcards.storage")


def _error_details(exc: SQLAlchemyError) -> dict[str, Any]:
    orig = getattr(exc, "orig", None)
    return {
        "type": type(orig).__name__ if orig is not None else type(exc).__name__,
        "code": getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None) or exc.code,
        "message": str(orig) if orig is not None else str(exc),
    }


class FlashcardStore:
    """Persistence for generated flashcards."""

    def __init__(self, *, session: AsyncSession):
        self._session = session

    async def insert_flashcards(
        self, *, set_id: str, flashcards: list[GeneratedFlashcard]
    ) -> list[Flashcard]:
        """
        Insert all `flashcards` under `set_id` in one statement and return the new rows.

        Either every row is committed or none is.
        """

        rows = [
            {"set_id": set_id, "question": card.question, "answer": card.answer}
            for card in flashcards
        ]
        stmt = insert(Flashcard).returning(Flashcard, sort_by_parameter_order=True)

        try:
            result = await self._session.scalars(stmt, rows)
            inserted = list(result.all())
            await self._session.commit()
        except SQLAlchemyError as exc:
            await self._session.rollback()
            details = _error_details(exc)
            logger.warning(
                "Flashcard insert failed",
                extra={"set_id": set_id, "error": details["type"]},
            )
            raise FlashcardStorageError(
                details["message"] or "Failed to save generated flashcards.", details=details
            ) from exc

        return inserted


def get_flashcard_store(session: AsyncSession = Depends(get_session)) -> FlashcardStore:
    return FlashcardStore(session=session)
