"""Shared input sanitizers for API models."""

from __future__ import annotations

import re
from datetime import datetime

NAME_MAX_LENGTH = 80
PLACE_MAX_LENGTH = 160
NOTE_MAX_LENGTH = 400
PHONE_PATTERN = re.compile(r"^[0-9+()\-\.\s]{6,32}$")
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
EMAIL_MAX_LENGTH = 254


def _squash_whitespace(text: str) -> str:
    return " ".join(text.split())


def normalize_display_name(value: str, *, field: str = "name") -> str:
    if not isinstance(value, str):  # pragma: no cover - Pydantic guards by default
        raise ValueError(f"{field} must be a string")
    cleaned = _squash_whitespace(value.strip())
    if not cleaned:
        raise ValueError(f"{field} cannot be blank")
    if len(cleaned) > NAME_MAX_LENGTH:
        raise ValueError(f"{field} must be <= {NAME_MAX_LENGTH} characters")
    return cleaned


def normalize_place(value: str, *, field: str = "place") -> str:
    cleaned = _squash_whitespace((value or "").strip())
    if not cleaned:
        raise ValueError(f"{field} cannot be blank")
    if len(cleaned) > PLACE_MAX_LENGTH:
        raise ValueError(f"{field} must be <= {PLACE_MAX_LENGTH} characters")
    return cleaned


def normalize_phone(value: str | None) -> str | None:
    if value is None:
        return None
    cleaned = value.strip()
    if not cleaned:
        return None
    if not PHONE_PATTERN.fullmatch(cleaned):
        raise ValueError(
            "phone must contain digits, spaces, '.', '-', '()' or '+' and be 6-32 characters"
        )
    return cleaned


def normalize_email(value: str) -> str:
    cleaned = (value or "").strip().lower()
    if not cleaned:
        raise ValueError("email cannot be blank")
    if len(cleaned) > EMAIL_MAX_LENGTH or not EMAIL_PATTERN.fullmatch(cleaned):
        raise ValueError("email must look like name@example.com")
    return cleaned


def normalize_note(
    value: str | None, *, field: str = "notes", max_length: int = NOTE_MAX_LENGTH
) -> str | None:
    if value is None:
        return None
    cleaned = _squash_whitespace(value.strip())
    if not cleaned:
        return None
    if len(cleaned) > max_length:
        raise ValueError(f"{field} must be <= {max_length} characters")
    return cleaned


def parse_iso_datetime(value: str) -> datetime:
    """``datetime.fromisoformat`` that also takes the ``Z`` suffix browsers send."""
    cleaned = value.strip()
    if cleaned[-1:] in ("Z", "z"):
        cleaned = cleaned[:-1] + "+00:00"
    return datetime.fromisoformat(cleaned)


def ensure_iso_datetime(value: str, *, field: str = "datetime") -> str:
    cleaned = (value or "").strip()
    try:
        parse_iso_datetime(cleaned)
    except ValueError as exc:
        raise ValueError(f"{field} must be an ISO-8601 timestamp") from exc
    return cleaned


__all__ = [
    "NAME_MAX_LENGTH",
    "NOTE_MAX_LENGTH",
    "PLACE_MAX_LENGTH",
    "ensure_iso_datetime",
    "normalize_email",
    "parse_iso_datetime",
    "normalize_display_name",
    "normalize_note",
    "normalize_phone",
    "normalize_place",
]
