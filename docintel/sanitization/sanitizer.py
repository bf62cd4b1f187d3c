"""Text and payload cleaning before anything reaches JSON storage.

PostgreSQL rejects NUL bytes inside JSONB and most control characters make
the stored metadata unreadable, so every string leaf is stripped of them.
"""

import re
from typing import Any

ELLIPSIS = "..."
SNIPPET_KEYS = ("raw_text_snippet", "ocr_text")
DEFAULT_MAX_SNIPPET_CHARS = 3000

# \t (0x09), \n (0x0A) and \r (0x0D) fall outside these ranges.
_CONTROL_CHARS_RE = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F-\x9F]")


def sanitize_text(text: str | None) -> str:
    """Remove NUL and non-printable control characters, then trim."""
    if not text:
        return ""
    return _CONTROL_CHARS_RE.sub("", text).strip()


def clean_object(obj: Any) -> Any:
    """Apply sanitize_text to every string leaf, keeping the structure."""
    if isinstance(obj, str):
        return sanitize_text(obj)
    if isinstance(obj, dict):
        return {key: clean_object(value) for key, value in obj.items()}
    if isinstance(obj, list):
        return [clean_object(item) for item in obj]
    if isinstance(obj, tuple):
        return tuple(clean_object(item) for item in obj)
    return obj


def truncate(text: str, max_len: int) -> str:
    if len(text) <= max_len:
        return text
    return text[:max_len] + ELLIPSIS


def prepare_for_storage(data: Any, max_snippet_len: int = DEFAULT_MAX_SNIPPET_CHARS) -> Any:
    """Clean a payload and bound the size of its well-known text snippets."""
    cleaned = clean_object(data)
    if not isinstance(cleaned, dict):
        return cleaned
    for key in SNIPPET_KEYS:
        value = cleaned.get(key)
        if isinstance(value, str):
            cleaned[key] = truncate(value, max_snippet_len)
    return cleaned
