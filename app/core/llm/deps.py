from __future__ import annotations

from app.core.llm.chat_client import ChatCompletionClient, ChatCompletionConfig
from app.core.settings import get_settings


def get_llm_client() -> ChatCompletionClient | None:
    """
    Dependency provider for ChatCompletionClient.

    Returns None when no API key is configured so the route can answer with a
    configuration error before any outbound call is made.
    """

    settings = get_settings()
    if not settings.llm_api_key:
        return None

    config = ChatCompletionConfig(
        api_key=settings.llm_api_key,
        base_url=settings.llm_base_url,
        model=settings.llm_model,
        max_tokens=int(settings.llm_max_tokens),
        temperature=float(settings.llm_temperature),
        timeout_seconds=float(settings.llm_timeout_seconds),
    )
    return ChatCompletionClient(config=config)
