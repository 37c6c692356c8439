from __future__ import annotations

from typing import Any


class ApiError(Exception):
    """Base for errors rendered as `{"error": ..., "details": ...}` JSON bodies."""

    status_code: int = 500

    def __init__(self, message: str, *, status_code: int | None = None, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details
        if status_code is not None:
            self.status_code = status_code


class InvalidRequestError(ApiError):
    """Raised when a required field is missing or has the wrong shape."""

    status_code = 400


class AuthenticationError(ApiError):
    status_code = 401


class ConfigurationError(ApiError):
    """Raised when the server is missing required configuration."""

    status_code = 500


class UpstreamLLMError(ApiError):
    """The LLM provider answered with a non-success status; status is passed through."""


class LLMOutputFormatError(ApiError):
    status_code = 500

    def __init__(self, reason: str):
        super().__init__(
            "LLM generated invalid format. Please try again or refine your prompt."
        )
        self.reason = reason


class NoValidFlashcardsError(ApiError):
    status_code = 400

    def __init__(self) -> None:
        super().__init__(
            "LLM did not generate any valid flashcards from the prompt. Try a different prompt."
        )


class FlashcardStorageError(ApiError):
    status_code = 500
