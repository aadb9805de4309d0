"""Low-level text helpers shared by the categorizer, reply engine and routes.

No dependency on any other project module.
"""

import re
from typing import Optional
from urllib.parse import parse_qsl

WORD_SPLIT_RE = re.compile(r"\W+")


def normalize_whitespace(text: str) -> str:
    return " ".join((text or "").split()).strip()


def sanitize_input(text: Optional[str], max_chars: int = 2000) -> str:
    """Drop NUL bytes, trim, then truncate to *max_chars*."""
    if text is None:
        return ""
    cleaned = str(text).replace("\x00", "").strip()
    return cleaned[:max_chars]


def cap_length(text: str, max_chars: int) -> str:
    # Lossy on purpose: no word-boundary handling.
    if len(text) <= max_chars:
        return text
    return text[:max_chars]


def split_words(text: str) -> list[str]:
    return [w for w in WORD_SPLIT_RE.split(text or "") if w]


def form_value(encoded: str, name: str) -> Optional[str]:
    """Return the first URL-decoded value of *name* in a form-encoded string."""
    if not encoded:
        return None
    for key, value in parse_qsl(encoded, keep_blank_values=True):
        if key == name:
            return value
    return None


def is_printable_path(path: str) -> bool:
    return all(ch.isprintable() for ch in path or "")
