"""Pull an origin/destination pair out of a free-text distance question.

The parser is an ordered cascade of ``(name, regex)`` pairs. The first pattern
that yields two non-empty, case-insensitively distinct places wins; there is no
backtracking into later patterns once a pair is accepted. A reversed
``"B from A"`` fallback runs after the cascade, and callers may additionally try
the quoted-pair fallback (``"X" "Y"``).
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from .settings import settings

logger = logging.getLogger(__name__)

# Place names end at sentence punctuation or at the end of the text.
_STOP = r"(?=[.?!,;]|$)"

ROUTE_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("from_to", re.compile(rf"\bfrom\s+(.+?)\s+(?:to|→|and)\s+(.+?){_STOP}", re.IGNORECASE)),
    ("between", re.compile(rf"\bbetween\s+(.+?)\s+(?:and|to)\s+(.+?){_STOP}", re.IGNORECASE)),
    (
        "how_far",
        re.compile(
            rf"\bhow\s+far(?:\s+is\s+it)?\s+(.+?)\s+(?:to|from)\s+(.+?){_STOP}", re.IGNORECASE
        ),
    ),
    ("generic", re.compile(rf"(.+?)\s+(?:to|→|and)\s+(.+?){_STOP}", re.IGNORECASE)),
)

# "B from A": destination first, origin after "from".
REVERSED_PATTERN = re.compile(rf"(.+?)\s+from\s+(.+?){_STOP}", re.IGNORECASE)

QUOTED_PAIR_PATTERN = re.compile(
    r"[\"“'‘]([^\"“”'’]+)[\"”'’][\s,;:]+[\"“'‘]([^\"“”'’]+)[\"”'’]"
)

DISTANCE_INTENT_PATTERN = re.compile(
    r"\b(distance|how\s+far|travel\s*time|route|directions|eta|reach"
    r"|kilomet(?:er|re)s?|km|mins?|minutes?)\b",
    re.IGNORECASE,
)

CAMPUS_ALIAS_PATTERN = re.compile(
    r"\b(main gate|front gate|back gate|sac building|sac|hostel|lecture avenue|tiir|tsg|dtp)\b",
    re.IGNORECASE,
)

_WHITESPACE_RUNS = re.compile(r"\s{2,}")
_EDGE_PUNCT = re.compile(r"^[\s,.;:]+|[\s,.;:]+$")


class ExtractionInputError(ValueError):
    """Raised when there is no text to parse at all."""


@dataclass(slots=True, frozen=True)
class RoutePair:
    origin: str
    destination: str
    pattern: str


def sanitize_place(raw: str) -> str:
    """Collapse repeated whitespace and trim edge punctuation only."""
    collapsed = _WHITESPACE_RUNS.sub(" ", raw or "").strip()
    return _EDGE_PUNCT.sub("", collapsed)


def expand_campus_alias(name: str) -> str:
    """Pin bare campus landmarks ("Main Gate", "SAC") to the institution."""
    lowered = name.lower()
    if not CAMPUS_ALIAS_PATTERN.search(lowered):
        return name
    # "NITR main gate" already names the institution
    if any(term in lowered for term in settings.campus_mention_terms):
        return name
    return f"{name}{settings.campus_suffix}"


def has_distance_intent(text: str) -> bool:
    return bool(DISTANCE_INTENT_PATTERN.search(text or ""))


def _prepare(text: str | None) -> str:
    if text is None or not text.strip():
        raise ExtractionInputError("text must not be blank")
    return _WHITESPACE_RUNS.sub(" ", text).strip()


def _accept(origin: str, destination: str, pattern: str) -> RoutePair | None:
    a = sanitize_place(origin)
    b = sanitize_place(destination)
    if a and b and a.lower() != b.lower():
        return RoutePair(origin=a, destination=b, pattern=pattern)
    return None


def extract_locations(text: str) -> RoutePair | None:
    """Return the first origin/destination pair the cascade can find."""
    normalized = _prepare(text)
    for name, pattern in ROUTE_PATTERNS:
        match = pattern.search(normalized)
        if not match:
            continue
        pair = _accept(match.group(1), match.group(2), name)
        if pair is not None:
            return pair

    match = REVERSED_PATTERN.search(normalized)
    if match:
        return _accept(match.group(2), match.group(1), "reversed_from")
    return None


def extract_quoted_pair(text: str) -> RoutePair | None:
    normalized = _prepare(text)
    match = QUOTED_PAIR_PATTERN.search(normalized)
    if not match:
        return None
    return _accept(
        expand_campus_alias(sanitize_place(match.group(1))),
        expand_campus_alias(sanitize_place(match.group(2))),
        "quoted",
    )


def parse_route_intent(text: str) -> RoutePair | None:
    pair = extract_locations(text) or extract_quoted_pair(text)
    if pair is None:
        logger.info("No route pair found in %d chars of text", len(text))
    else:
        logger.info("Route pair matched via %s", pair.pattern)
    return pair


__all__ = [
    "ExtractionInputError",
    "RoutePair",
    "expand_campus_alias",
    "extract_locations",
    "extract_quoted_pair",
    "has_distance_intent",
    "parse_route_intent",
    "sanitize_place",
]
