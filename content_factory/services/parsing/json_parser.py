"""
JSON extraction and parsing for model responses.

This module provides:
- Fenced code block extraction (```json ... ```)
- JSON parsing with repair of the usual model mistakes
- A truncation heuristic for diagnosing cut-off responses
"""

import json
import re
from typing import Any, List, Optional

from content_factory.core import ResponseParseError

_FENCE_PATTERN = re.compile(r"```(?:json)?[ \t]*\r?\n?([\s\S]*?)```", re.IGNORECASE)


def extract_json(raw_text: str) -> str:
    """Recover the JSON payload from a raw model response.

    If the text contains a fenced code block (optionally tagged "json"),
    the fenced content is returned trimmed of surrounding whitespace.
    Otherwise the text is returned unchanged. Never raises.
    """
    if not raw_text:
        return raw_text
    match = _FENCE_PATTERN.search(raw_text)
    if match is None:
        return raw_text
    return match.group(1).strip()


def extract_largest_balanced_json(text: str) -> Optional[str]:
    """Extract the largest balanced JSON object from text.

    Scans for balanced braces/brackets while respecting string literals and escapes.
    Top-level arrays are skipped, every stage payload is an object.

    Args:
        text: Source text potentially containing JSON.

    Returns:
        The largest balanced JSON substring, or None if not found.
    """
    if not text:
        return None

    in_string = False
    escape = False
    stack: List[str] = []
    start_idx: Optional[int] = None
    best: Optional[str] = None

    for i, ch in enumerate(text):
        if in_string:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == "\"":
                in_string = False
            continue

        if ch == "\"":
            in_string = True
            continue

        if ch in "{[":
            if not stack:
                start_idx = i
            stack.append(ch)
            continue

        if ch in "}]":
            if not stack:
                continue
            if (stack[-1], ch) in (("{", "}"), ("[", "]")):
                stack.pop()
                if not stack and start_idx is not None:
                    candidate = text[start_idx:i + 1]
                    start_idx = None
                    if candidate.startswith("["):
                        continue
                    if best is None or len(candidate) > len(best):
                        best = candidate
            else:
                # Mismatched closing; reset state.
                stack.clear()
                start_idx = None

    return best


def is_likely_truncated_json(text: str) -> bool:
    """Heuristic check for truncated JSON payloads.

    Detects unterminated strings or unbalanced braces/brackets. Used to
    tell a cut-off response apart from otherwise invalid JSON in logs.
    """
    if not text:
        return False

    in_string = False
    escape = False
    stack: List[str] = []

    for ch in text:
        if in_string:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == "\"":
                in_string = False
            continue

        if ch == "\"":
            in_string = True
            continue

        if ch in "{[":
            stack.append(ch)
        elif ch in "}]":
            if not stack:
                continue
            if (stack[-1], ch) in (("{", "}"), ("[", "]")):
                stack.pop()
            else:
                # Mismatched closure is invalid, not necessarily truncated.
                return False

    return bool(stack) or in_string


_ESCAPE_PATTERN = re.compile(r'\\(["\\/bfnrt]|u[0-9a-fA-F]{4})?')


def fix_json_escapes(text: str) -> str:
    """Escape lone backslashes while preserving valid JSON escapes.

    Valid JSON escapes: \\", \\\\, \\/, \\b, \\f, \\n, \\r, \\t, \\uXXXX
    """
    return _ESCAPE_PATTERN.sub(lambda m: m.group(0) if m.group(1) else "\\\\", text)


def parse_json_payload(raw_text: str) -> Any:
    """Parse the JSON payload of a model response.

    Tries, in order: the whole response as is, the fence-extracted text,
    the same text with invalid escapes fixed, and the largest balanced
    object found in it.

    Raises:
        ResponseParseError: If no strategy yields valid JSON
    """
    stripped = (raw_text or "").strip()
    if not stripped:
        raise ResponseParseError("Empty model response", raw_text=raw_text)

    # Unfenced JSON whose string values contain ``` must not be cut at the inner fence
    try:
        return json.loads(stripped)
    except json.JSONDecodeError:
        pass

    text = extract_json(stripped).strip()
    if not text:
        raise ResponseParseError("Empty model response", raw_text=raw_text)

    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    try:
        return json.loads(fix_json_escapes(text))
    except json.JSONDecodeError:
        pass

    candidate = extract_largest_balanced_json(text)
    if candidate:
        for attempt in (candidate, fix_json_escapes(candidate)):
            try:
                return json.loads(attempt)
            except json.JSONDecodeError:
                continue

    raise ResponseParseError(
        "Model response is not valid JSON",
        raw_text=raw_text,
        truncated=is_likely_truncated_json(text),
    )
