from __future__ import annotations

import logging

from .llm_client import LLMUnavailable, post_json
from .settings import settings
from .validators import parse_iso_datetime

logger = logging.getLogger(__name__)

MAX_EMBED_CHARS = 2000


def localized_datetime(value: str) -> str:
    """Render an ISO timestamp as ``M/D/YYYY, h:MM:SS AM``; unparseable text passes through."""
    try:
        dt = parse_iso_datetime(value)
    except ValueError:
        return value
    hour = dt.hour % 12 or 12
    meridiem = "AM" if dt.hour < 12 else "PM"
    return f"{dt.month}/{dt.day}/{dt.year}, {hour}:{dt.minute:02d}:{dt.second:02d} {meridiem}"


def ride_to_text(pickup: str, drop: str, datetime_iso: str | None = None) -> str:
    when = f" at {localized_datetime(datetime_iso)}" if datetime_iso else ""
    return f"Ride from {pickup} to {drop}{when}."


async def embed_text(text: str) -> list[float]:
    """Embed ``text``; an upstream failure yields an empty vector.

    ``LLMNotConfigured`` is not caught: a missing key is a deployment problem,
    not a degraded provider.
    """
    payload = {
        "model": settings.EMBEDDING_MODEL,
        "input": [text[:MAX_EMBED_CHARS]],
        "dimensions": settings.EMBEDDING_DIMENSIONS,
    }
    try:
        response = await post_json("/embeddings", payload, timeout=settings.OPENAI_TIMEOUT_SECONDS)
    except LLMUnavailable as exc:
        logger.warning("Embedding call failed: %s", exc)
        return []
    data = response.get("data") or []
    if not data:
        return []
    vector = data[0].get("embedding") or []
    return [float(x) for x in vector]


__all__ = ["embed_text", "localized_datetime", "ride_to_text"]
