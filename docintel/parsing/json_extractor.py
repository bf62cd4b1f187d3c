"""Recover a JSON object from free-form provider output."""

import json
import re

_DECODER = json.JSONDecoder()
_FENCE_PATTERN = re.compile(r"\A```[A-Za-z]*\s*(.*?)\s*```\Z", re.DOTALL)


def strip_code_fence(raw: str) -> str:
    """Remove a surrounding ```json ... ``` fence, on one line or several."""
    cleaned = raw.strip()
    match = _FENCE_PATTERN.match(cleaned)
    if match is not None:
        return match.group(1)
    return cleaned


def extract_json_object(raw: str | None) -> dict[str, object] | None:
    """Return the first JSON object found in raw, or None.

    Accepts bare JSON, fenced JSON, and prose with an embedded object.
    Non-object JSON (lists, scalars) is treated as not found.
    """
    if not raw:
        return None
    cleaned = strip_code_fence(raw)

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError:
        parsed = _scan_for_object(cleaned)

    if isinstance(parsed, dict):
        return parsed
    return None


def _scan_for_object(text: str) -> object | None:
    start = text.find("{")
    while start != -1:
        try:
            parsed, _ = _DECODER.raw_decode(text, start)
        except json.JSONDecodeError:
            start = text.find("{", start + 1)
            continue
        if isinstance(parsed, dict):
            return parsed
        start = text.find("{", start + 1)
    return None
