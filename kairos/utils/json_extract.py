"""Pull JSON payloads out of free-form model output.

Model responses routinely wrap the payload in prose or markdown fences
(```json ... ```). These helpers locate the first well-formed JSON value of
the requested kind and return it, or ``None`` when nothing parses.
"""

from __future__ import annotations

import json
import re
from typing import Any

_FENCE_PATTERN = re.compile(r"```(?:json|JSON)?\s*(.*?)```", re.DOTALL)
_decoder = json.JSONDecoder()


def strip_code_fences(text: str) -> str:
    if not text:
        return ""
    match = _FENCE_PATTERN.search(text)
    if match:
        return match.group(1).strip()
    return text.strip()


def _first_value(text: str, opener: str, kind: type) -> Any | None:
    idx = text.find(opener)
    while idx != -1:
        try:
            value, _ = _decoder.raw_decode(text, idx)
        except json.JSONDecodeError:
            value = None
        if isinstance(value, kind):
            return value
        idx = text.find(opener, idx + 1)
    return None


def _extract(text: str | None, opener: str, kind: type) -> Any | None:
    if not isinstance(text, str) or not text.strip():
        return None
    fenced = strip_code_fences(text)
    found = _first_value(fenced, opener, kind)
    if found is None and fenced != text:
        found = _first_value(text, opener, kind)
    return found


def extract_json_array(text: str | None) -> list[Any] | None:
    return _extract(text, "[", list)


def extract_json_object(text: str | None) -> dict[str, Any] | None:
    return _extract(text, "{", dict)
