from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx


class LLMError(Exception):
    """Base error for chat-completion client failures."""


class LLMHTTPError(LLMError):
    """The provider answered with a non-success HTTP status."""

    def __init__(self, *, status_code: int, reason: str, body: str):
        super().__init__(f"LLM API returned {status_code} {reason}".rstrip())
        self.status_code = status_code
        self.reason = reason
        self.body = body


class LLMTransportError(LLMError):
    """The request never produced an HTTP response (DNS, connect, timeout...)."""


class LLMResponseError(LLMError):
    """A 2xx response did not carry `choices[0].message.content`."""


class LLMContentError(LLMResponseError):
    """`choices[0].message.content` is present but is not text (e.g. null)."""


@dataclass(frozen=True)
class ChatCompletionConfig:
    api_key: str
    base_url: str
    model: str
    max_tokens: int
    temperature: float
    timeout_seconds: float


class ChatCompletionClient:
    """
    Minimal client for OpenAI-compatible `/chat/completions` endpoints.

    One request per call, no retries. Prompts and completions are not logged here.
    """

    def __init__(
        self,
        *,
        config: ChatCompletionConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._config = config
        self._transport = transport

    @property
    def config(self) -> ChatCompletionConfig:
        return self._config

    def build_payload(self, *, messages: list[dict[str, str]]) -> dict[str, Any]:
        return {
            "model": self._config.model,
            "messages": messages,
            "max_tokens": self._config.max_tokens,
            "temperature": self._config.temperature,
            "response_format": {"type": "json_object"},
        }

    async def complete(self, *, messages: list[dict[str, str]]) -> str:
        """Send `messages` and return the text content of the first choice."""

        url = f"{self._config.base_url.rstrip('/')}/chat/completions"
        headers = {
            "Authorization": f"Bearer {self._config.api_key}",
            "Content-Type": "application/json",
        }
        payload = self.build_payload(messages=messages)

        try:
            async with httpx.AsyncClient(
                timeout=self._config.timeout_seconds, transport=self._transport
            ) as client:
                resp = await client.post(url, headers=headers, json=payload)
        except httpx.TimeoutException as exc:
            raise LLMTransportError("LLM request timed out") from exc
        except httpx.HTTPError as exc:
            raise LLMTransportError("LLM request failed") from exc

        if not resp.is_success:
            raise LLMHTTPError(
                status_code=resp.status_code,
                reason=resp.reason_phrase,
                body=resp.text,
            )

        try:
            content = resp.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise LLMResponseError("LLM response did not contain message content") from exc

        if not isinstance(content, str):
            raise LLMContentError("LLM message content must be a string")
        return content
