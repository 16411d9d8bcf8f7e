import logging
from typing import Any

from openai import AsyncOpenAI

from mediguide.config import settings

log = logging.getLogger(__name__)

_client: AsyncOpenAI | None = None
_model: str = settings.llm.model

# Models served by the OpenAI-compatible endpoint that accept image input.
AVAILABLE_MODELS = [
    "gemini-2.5-flash",
    "gemini-2.5-flash-lite",
    "gemini-2.5-pro",
]


def get_client() -> AsyncOpenAI:
    global _client
    if _client is None:
        cfg = settings.llm
        _client = AsyncOpenAI(api_key=cfg.api_key, base_url=cfg.base_url)
    return _client


def is_configured() -> bool:
    return bool(settings.llm.api_key)


def get_model() -> str:
    return _model


def set_model(name: str) -> None:
    global _model
    _model = name
    log.info("Model changed to: %s", name)


async def complete(
    messages: list[dict[str, Any]],
    temperature: float | None = None,
    response_format: dict[str, Any] | None = None,
) -> str:
    """Send a chat completion request and return the reply text ("" if none)."""
    client = get_client()

    kwargs: dict = {"model": _model, "messages": messages}
    if temperature is not None:
        kwargs["temperature"] = temperature
    if response_format is not None:
        kwargs["response_format"] = response_format

    resp = await client.chat.completions.create(**kwargs)
    if not resp.choices:
        return ""
    return resp.choices[0].message.content or ""
