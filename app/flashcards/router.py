from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Depends, Request, status
from pydantic import ValidationError

from app.core.auth import AuthenticatedUser, get_current_user
from app.core.llm.chat_client import ChatCompletionClient
from app.core.llm.deps import get_llm_client
from app.core.metrics import record_generation
from app.domain.exceptions import (
    ApiError,
    ConfigurationError,
    FlashcardStorageError,
    InvalidRequestError,
    LLMOutputFormatError,
    NoValidFlashcardsError,
    UpstreamLLMError,
)
from app.flashcards.schemas import (
    ErrorOut,
    FlashcardOut,
    GenerateFlashcardsIn,
    GenerateFlashcardsOut,
)
from app.flashcards.service import FlashcardGenerationService
from app.flashcards.storage import FlashcardStore, get_flashcard_store

router = APIRouter(prefix="/api/llm", tags=["llm-flashcards"])
logger = logging.getLogger("app.flashcards")

_OUTCOMES: dict[type[ApiError], str] = {
    UpstreamLLMError: "llm_error",
    LLMOutputFormatError: "format_error",
    NoValidFlashcardsError: "no_valid_flashcards",
    FlashcardStorageError: "storage_error",
}


async def _read_payload(request: Request) -> GenerateFlashcardsIn:
    body = await request.body()
    try:
        raw = json.loads(body) if body.strip() else {}
    except ValueError:
        raise InvalidRequestError("Request body must be valid JSON.") from None
    if not isinstance(raw, dict):
        raise InvalidRequestError("Request body must be a JSON object.")

    try:
        return GenerateFlashcardsIn.model_validate(raw)
    except ValidationError as exc:
        fields = {str(err["loc"][0]) for err in exc.errors() if err.get("loc")}
        if "count" in fields:
            raise InvalidRequestError("count must be a positive integer.") from None
        if "prompt" in fields:
            raise InvalidRequestError("Prompt must be a string.") from None
        raise InvalidRequestError("Flashcard Set ID must be a string or integer.") from None


@router.post(
    "/generate-flashcards-with-llm",
    response_model=GenerateFlashcardsOut,
    status_code=status.HTTP_200_OK,
    summary="Generate flashcards with an LLM and save them to a set",
    responses={
        400: {"model": ErrorOut},
        401: {"model": ErrorOut},
        500: {"model": ErrorOut},
    },
)
async def generate_flashcards_with_llm(
    request: Request,
    user: AuthenticatedUser = Depends(get_current_user),
    llm_client: ChatCompletionClient | None = Depends(get_llm_client),
    store: FlashcardStore = Depends(get_flashcard_store),
) -> GenerateFlashcardsOut:
    """
    Generate flashcards for `prompt` and attach them to `setId`.

    Cards are attached to the set as given; set ownership is not checked here.
    Upstream LLM failures are passed through with the provider's status code.
    """

    request_id = getattr(request.state, "request_id", None)
    payload = await _read_payload(request)

    prompt = (payload.prompt or "").strip()
    if not prompt:
        raise InvalidRequestError("Prompt is required to generate flashcards.")
    # Integer 0 is not a usable set id and counts as missing.
    set_id = "" if payload.set_id in (None, 0) else str(payload.set_id).strip()
    if not set_id:
        raise InvalidRequestError(
            "Flashcard Set ID is required to associate generated flashcards."
        )
    if llm_client is None:
        logger.error("LLM API key is not set (DEEPSEEK_API_KEY or LLM_API_KEY).")
        record_generation(outcome="not_configured")
        raise ConfigurationError("Server configuration error: LLM API key missing.")

    count = payload.resolved_count
    context = {"request_id": request_id, "user_id": user.id, "set_id": set_id}
    svc = FlashcardGenerationService(
        llm_client=llm_client, store=store, request_id=request_id
    )

    try:
        inserted = await svc.generate(prompt=prompt, set_id=set_id, count=count)
    except ApiError as exc:
        record_generation(outcome=_OUTCOMES.get(type(exc), "error"))
        logger.info(
            "Flashcard generation failed",
            extra={**context, "requested_count": count, "success": False},
        )
        raise
    except Exception:  # noqa: BLE001 - any other failure is a generic 500
        record_generation(outcome="error")
        logger.exception("Unexpected error in LLM generation route", extra=context)
        raise ApiError("Internal server error during flashcard generation.") from None

    record_generation(outcome="success", saved=len(inserted))
    logger.info(
        "Flashcards generated",
        extra={
            **context,
            "requested_count": count,
            "flashcard_count": len(inserted),
            "success": True,
        },
    )
    return GenerateFlashcardsOut(
        message=f"Successfully generated and saved {len(inserted)} flashcards.",
        flashcards=[FlashcardOut.model_validate(fc) for fc in inserted],
    )
