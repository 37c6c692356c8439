from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictInt, StrictStr

DEFAULT_FLASHCARD_COUNT = 5


class GenerateFlashcardsIn(BaseModel):
    """
    Request body for LLM flashcard generation.

    Required fields are optional here on purpose: presence is checked by the route so
    missing values map to specific 400 messages instead of a generic 422.
    Strict types keep JSON booleans from being coerced into a set id or a count.
    """

    model_config = ConfigDict(extra="ignore")

    prompt: str | None = Field(default=None, description="Topic or instructions for the LLM.")
    set_id: StrictStr | StrictInt | None = Field(
        default=None,
        validation_alias=AliasChoices("setId", "set_id"),
        description="Flashcard set the generated cards are attached to.",
    )
    count: StrictInt | None = Field(
        default=None,
        ge=1,
        description=f"Number of flashcards to request (default {DEFAULT_FLASHCARD_COUNT}).",
    )

    @property
    def resolved_count(self) -> int:
        return self.count if self.count is not None else DEFAULT_FLASHCARD_COUNT


class GeneratedFlashcard(BaseModel):
    """A single flashcard as parsed from LLM output."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    question: str = Field(min_length=1)
    answer: str = Field(min_length=1)


class FlashcardOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    set_id: str
    question: str
    answer: str
    created_at: datetime


class GenerateFlashcardsOut(BaseModel):
    message: str = Field(examples=["Successfully generated and saved 5 flashcards."])
    flashcards: list[FlashcardOut]


class ErrorOut(BaseModel):
    error: str
    details: Any = None
