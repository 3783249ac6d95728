"""Parse model output against an expected JSON shape.

Model text is not always clean JSON: it often arrives wrapped in Markdown code
fences. Parsing happens in two stages (strip, then decode + validate) and the
failure kind tells callers whether the text was not JSON at all (malformed) or
was JSON of the wrong shape (semantic).
"""

from __future__ import annotations

import json
import re
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from .errors import ParseFailureKind, ResponseParseError

T = TypeVar("T")

# Opening fence with optional language tag, closing fence at the very end
_OPENING_FENCE = re.compile(r"^\s*(```|~~~)[\w+-]*[ \t]*\n?")
_CLOSING_FENCE = re.compile(r"\n?[ \t]*(```|~~~)\s*$")


def strip_code_fences(text: str) -> str:
    """Remove a surrounding Markdown code fence, if any, and trim whitespace."""
    cleaned = text.strip()
    cleaned = _OPENING_FENCE.sub("", cleaned, count=1)
    cleaned = _CLOSING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


def parse_response(raw_text: str | None, shape: Any) -> Any:
    """Decode model text and validate it against `shape`.

    Args:
        raw_text: Text returned by the model
        shape: A pydantic model class or any type TypeAdapter accepts,
            e.g. ``list[RawQuestion]``

    Returns:
        The validated value

    Raises:
        ResponseParseError: MALFORMED if the text is empty or not JSON,
            SEMANTIC if it is JSON of the wrong shape or an empty array
    """
    cleaned = strip_code_fences(raw_text or "")
    if not cleaned:
        raise ResponseParseError(ParseFailureKind.MALFORMED, "Empty response")

    try:
        decoded = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ResponseParseError(ParseFailureKind.MALFORMED, f"Invalid JSON: {e.msg}") from e

    try:
        value = TypeAdapter(shape).validate_python(decoded)
    except ValidationError as e:
        raise ResponseParseError(
            ParseFailureKind.SEMANTIC,
            f"Unexpected shape: {e.error_count()} validation error(s)",
        ) from e

    if isinstance(value, list) and not value:
        raise ResponseParseError(ParseFailureKind.SEMANTIC, "Empty array")

    return value
