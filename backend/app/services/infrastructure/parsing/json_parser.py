"""
JSON parsing utilities for LLM responses.

Models frequently wrap JSON in markdown code fences or emit slightly invalid
escape sequences even when asked for raw JSON. These helpers recover the
payload before it is handed to ``json.loads``.
"""

import json
import re
from typing import Any, List, Optional

_FENCE_RE = re.compile(r"^\s*```[\w-]*\s*\n?(?P<body>[\s\S]*?)\n?\s*```\s*$")


def strip_code_fences(text: str) -> str:
    """Remove wrapping markdown code fences (```json ... ```), keeping the content."""
    if not text:
        return ""

    text = text.strip()
    match = _FENCE_RE.match(text)
    if match:
        return match.group("body").strip()

    if text.startswith("```"):
        # Unterminated or multi-block fences: drop every fence marker line
        lines = [line for line in text.split("\n") if not line.strip().startswith("```")]
        text = "\n".join(lines).strip()

    return text


def extract_largest_balanced_json(text: str) -> Optional[str]:
    """Extract the largest balanced JSON object/array from text.

    Scans for balanced braces/brackets while respecting string literals and escapes.

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
            open_ch = stack[-1]
            if (open_ch == "{" and ch == "}") or (open_ch == "[" and ch == "]"):
                stack.pop()
                if not stack and start_idx is not None:
                    candidate = text[start_idx:i + 1]
                    start_idx = None
                    if best is None or len(candidate) > len(best):
                        best = candidate
            else:
                # Mismatched closing; reset state.
                stack.clear()
                start_idx = None

    return best


_ESCAPE_RE = re.compile(r"\\(u[0-9a-fA-F]{4}|.)", re.DOTALL)
_VALID_ESCAPES = set('"\\/bfnrt')


def fix_json_escapes(text: str) -> str:
    """Escape lone backslashes while preserving valid JSON escape sequences."""

    def _fix(match: "re.Match[str]") -> str:
        escaped = match.group(1)
        if len(escaped) > 1 or escaped in _VALID_ESCAPES:
            return match.group(0)
        return "\\\\" + escaped

    return _ESCAPE_RE.sub(_fix, text)


def parse_json_payload(text: str) -> Any:
    """Parse a JSON value from an LLM response.

    Tries, in order: the fence-stripped text as-is, the text with escape
    sequences repaired, and the largest balanced JSON fragment inside it.

    Raises:
        ValueError: if no JSON value can be recovered.
    """
    cleaned = strip_code_fences(text)
    if not cleaned:
        raise ValueError("Empty response payload")

    try:
        return json.loads(cleaned)
    except json.JSONDecodeError:
        pass

    try:
        return json.loads(fix_json_escapes(cleaned))
    except json.JSONDecodeError:
        pass

    candidate = extract_largest_balanced_json(cleaned)
    if candidate:
        try:
            return json.loads(candidate)
        except json.JSONDecodeError:
            try:
                return json.loads(fix_json_escapes(candidate))
            except json.JSONDecodeError:
                pass

    raise ValueError(f"Response is not valid JSON: {cleaned[:120]!r}")
