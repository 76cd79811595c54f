"""On-campus residence codes that route straight to the campus gate."""

from __future__ import annotations

import re

HOSTEL_CODES: tuple[str, ...] = ("HB", "MSS", "DBA", "GDB", "VS", "SD", "CVR", "KMS")

# Words people tack onto a code, e.g. "SD hall" or "kms hostel"
HOSTEL_SUFFIXES: tuple[str, ...] = (" HALL", " HOSTEL", " BLOCK", " BHAVAN", " HSE", " HOUSE")

_NON_ALNUM = re.compile(r"[^A-Z0-9 ]+")
_SPACES = re.compile(r"\s+")


def normalize_code_text(value: str) -> str:
    """Uppercase, turn punctuation into spaces and collapse whitespace."""
    upper = (value or "").upper()
    return _SPACES.sub(" ", _NON_ALNUM.sub(" ", upper)).strip()


def looks_like_hostel(value: str) -> bool:
    norm = normalize_code_text(value)
    if not norm:
        return False
    # "S D" -> "SD"
    tight = norm.replace(" ", "")
    for code in HOSTEL_CODES:
        if norm == code:
            return True
        if (
            norm.startswith(code + " ")
            or norm.endswith(" " + code)
            or f" {code} " in norm
        ):
            return True
        if code in tight:
            return True
        if any(code + suffix in norm for suffix in HOSTEL_SUFFIXES):
            return True
    return False


__all__ = ["HOSTEL_CODES", "HOSTEL_SUFFIXES", "looks_like_hostel", "normalize_code_text"]
