# codeops/services/text.py
from __future__ import annotations

from typing import Optional

FENCE = "```"
ERROR_EXCERPT_LIMIT = 1200

def strip_code_fences(text: str) -> str:
    """Return the body of a single ``` fenced block, or the trimmed text.

    The opening fence may carry a language tag up to the first newline. The
    closing fence is the rightmost one, so bodies containing literal backtick
    runs survive.
    """
    t = text.strip()
    if not t.startswith(FENCE):
        return t
    rest = t[len(FENCE):]
    newline = rest.find("\n")
    if newline == -1:
        return t
    rest = rest[newline + 1:]
    end = rest.rfind(FENCE)
    if end == -1:
        return t
    return rest[:end].strip()

def find_first_object(text: str) -> Optional[str]:
    """Return the first balanced top-level {...} in free text, or None.

    Braces inside JSON strings are ignored. No recovery is attempted on
    malformed input.
    """
    depth = 0
    start: Optional[int] = None
    in_string = False
    escaped = False

    for i, ch in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch == "{":
            if depth == 0:
                start = i
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0 and start is not None:
                return text[start:i + 1]

    return None

def shorten_for_error(body: str) -> str:
    t = body.strip()
    if not t:
        return "<empty response body>"
    if len(t) <= ERROR_EXCERPT_LIMIT:
        return t
    return t[:ERROR_EXCERPT_LIMIT] + "…"
