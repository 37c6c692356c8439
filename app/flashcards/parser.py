"""Parse raw LLM completion text into flashcards.

Models are asked for a bare JSON array but regularly wrap it in a markdown code
fence, so one enclosing fence is removed before parsing. Entries are validated
one by one and invalid ones are dropped rather than failing the whole batch.
"""

from __future__ import annotations

import json
import re
from typing import Any

from pydantic import ValidationError

from app.domain.exceptions import LLMOutputFormatError
from app.flashcards.schemas import GeneratedFlashcard

_FENCE_PATTERN = re.compile(
    r"^\s*```[ \t]*(?:json)?[ \t]*\r?\n?(?P<body>.*?)\r?\n?[ \t]*```\s*$",
    re.IGNORECASE | re.DOTALL,
)


def strip_code_fences(text: str) -> str:
    match = _FENCE_PATTERN.match(text)
    if match is None:
        return text.strip()
    return match.group("body").strip()


def _to_flashcard(entry: Any) -> GeneratedFlashcard | None:
    if not isinstance(entry, dict):
        return None
    try:
        return GeneratedFlashcard.model_validate(entry)
    except ValidationError:
        return None


def parse_flashcards(content: str) -> list[GeneratedFlashcard]:
    """
    Return the valid flashcards found in `content`.

    Raises LLMOutputFormatError when the text is not JSON or not a JSON array.
    An empty list means the array held no entry with both a question and an answer.
    """

    try:
        parsed = json.loads(strip_code_fences(content))
    except ValueError as exc:
        raise LLMOutputFormatError("content is not valid JSON") from exc

    if not isinstance(parsed, list):
        raise LLMOutputFormatError("LLM did not return a JSON array as expected")

    cards: list[GeneratedFlashcard] = []
    for entry in parsed:
        card = _to_flashcard(entry)
        if card is not None:
            cards.append(card)
    return cards
