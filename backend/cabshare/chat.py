from __future__ import annotations

import logging
from collections.abc import Sequence

from .contracts import ChatMessage
from .distance import DistanceResult, compute_distance
from .extraction import has_distance_intent, parse_route_intent
from .llm_client import LLMUnavailable, post_json
from .settings import settings

logger = logging.getLogger(__name__)

USER_WINDOW = 5

SYSTEM_PROMPT = f"""You are a specialized assistant ONLY for the CabShare app at the {settings.CAMPUS_INSTITUTION} campus.

STRICT RULES:
- ONLY answer questions about cabsharing, ride posting, ride finding, campus transportation, safety tips, and pricing for rides
- If asked about anything else, politely decline and redirect to cabshare topics
- Be brief, helpful, and campus-specific

TOPICS YOU CAN HELP WITH:
- How to post a ride
- How to find rides
- Safety tips for sharing rides
- Fair pricing and cost splitting
- Contacting other riders
- Distance and travel time between two places (ask the user to phrase it as "from X to Y")

If the question is not about cabsharing or campus rides, respond: "I'm specifically designed to help with CabShare app questions. Please ask me about posting rides, finding rides, safety tips, or pricing for campus transportation."
"""

UNRESOLVED_REPLY = (
    "I tried to calculate the distance but couldn't resolve one of the places.\n"
    'Please try again with clearer names (e.g., "NIT Rourkela Main Gate to Rourkela Railway Station").'
)

FALLBACK_REPLY = (
    "Sorry, I can't answer right now. You can still post or search rides, "
    'or ask for a distance like "from Main Gate to Rourkela station".'
)


def text_to_parse(messages: Sequence[ChatMessage]) -> str:
    """The latest message if it asks about distance, else the recent user turns."""
    latest = messages[-1].content if messages else ""
    if has_distance_intent(latest):
        return latest
    user_turns = [m.content for m in messages if m.role == "user"][-USER_WINDOW:]
    return " \n ".join(user_turns)


def format_distance_reply(info: DistanceResult) -> str:
    return (
        "I can calculate the distance and travel time for you. Let me check...\n\n"
        f"**From:** {info.origin_label}\n"
        f"**To:** {info.dest_label}\n"
        f"**Distance:** {info.distance_km:.1f} km\n"
        f"**Travel time:** {info.duration_mins} minutes\n\n"
        "Tip: Use this to split cab costs fairly among passengers."
    )


async def generate_reply(messages: Sequence[ChatMessage]) -> str:
    payload = {
        "model": settings.CHAT_MODEL,
        "messages": [{"role": "system", "content": SYSTEM_PROMPT}]
        + [{"role": m.role, "content": m.content} for m in messages if m.role != "system"],
        "temperature": settings.CHAT_TEMPERATURE,
        "max_tokens": settings.CHAT_MAX_TOKENS,
    }
    try:
        response = await post_json(
            "/chat/completions", payload, timeout=settings.OPENAI_TIMEOUT_SECONDS
        )
    except LLMUnavailable as exc:
        logger.warning("Chat completion failed: %s", exc)
        return FALLBACK_REPLY
    choices = response.get("choices") or []
    content = choices[0].get("message", {}).get("content") if choices else None
    return (content or "").strip() or FALLBACK_REPLY


async def reply_to(messages: Sequence[ChatMessage]) -> str:
    """Answer the conversation: distance questions locally, the rest via the LLM."""
    candidate = text_to_parse(messages)
    if candidate.strip() and has_distance_intent(candidate):
        pair = parse_route_intent(candidate)
        if pair is not None:
            info = await compute_distance(pair.origin, pair.destination)
            if info is None:
                return UNRESOLVED_REPLY
            return format_distance_reply(info)
    return await generate_reply(messages)


__all__ = ["format_distance_reply", "generate_reply", "reply_to", "text_to_parse"]
