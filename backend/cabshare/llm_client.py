from __future__ import annotations

from typing import Any

import httpx

from .provider_client import ProviderAuth, ProviderClient
from .settings import settings

DEFAULT_API_BASE = "https://api.openai.com/v1"


class LLMNotConfigured(RuntimeError):
    """OPENAI_API_KEY is missing; callers must not retry."""


class LLMUnavailable(RuntimeError):
    pass


def llm_auth() -> ProviderAuth:
    if not settings.OPENAI_API_KEY:
        raise LLMNotConfigured("OPENAI_API_KEY not configured")
    return ProviderAuth(headers={"Authorization": f"Bearer {settings.OPENAI_API_KEY}"})


_llm = ProviderClient(
    "LLM provider",
    base_url=lambda: settings.OPENAI_API_BASE or DEFAULT_API_BASE,
    timeout=lambda: httpx.Timeout(
        settings.OPENAI_TIMEOUT_SECONDS, connect=settings.OPENAI_CONNECT_TIMEOUT_SECONDS
    ),
    auth=llm_auth,
    unavailable=LLMUnavailable,
)


async def post_json(
    path: str, payload: dict[str, Any], *, timeout: float | None = None
) -> dict[str, Any]:
    return await _llm.request_json("POST", path, payload=payload, timeout=timeout)


async def close_llm_client() -> None:
    await _llm.aclose()


__all__ = ["LLMNotConfigured", "LLMUnavailable", "close_llm_client", "llm_auth", "post_json"]
