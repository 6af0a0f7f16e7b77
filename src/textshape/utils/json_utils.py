"""JSON parsing with size and nesting limits for untrusted model output."""

import json
from typing import Any


class JSONParsingError(ValueError):
    """Raised when text is not acceptable JSON."""

    pass


# Deepest array/object nesting accepted from model output
MAX_JSON_DEPTH = 32


def safe_json_loads(
    text: str | None, max_size: int = 5_000_000, max_depth: int = MAX_JSON_DEPTH
) -> Any:
    """Parse JSON text, rejecting oversized or deeply nested documents.

    The text must be a JSON document on its own; surrounding prose or
    markdown fences are not stripped.

    Args:
        text: Raw text to parse
        max_size: Maximum accepted length in characters
        max_depth: Maximum nesting depth of arrays/objects

    Returns:
        Decoded value

    Raises:
        JSONParsingError: If text is empty, too large, too deep or invalid
    """
    if text is None or not text.strip():
        raise JSONParsingError("Empty response")

    if len(text) > max_size:
        raise JSONParsingError(f"JSON too large: {len(text)} characters (max {max_size})")

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise JSONParsingError(f"Invalid JSON: {e.msg} at line {e.lineno} column {e.colno}") from e

    depth = _depth(data)
    if depth > max_depth:
        raise JSONParsingError(f"JSON nesting too deep: {depth} levels (max {max_depth})")

    return data


def _depth(value: Any) -> int:
    deepest = 0
    stack = [(value, 1)]
    while stack:
        current, level = stack.pop()
        if isinstance(current, dict):
            deepest = max(deepest, level)
            stack.extend((child, level + 1) for child in current.values())
        elif isinstance(current, list):
            deepest = max(deepest, level)
            stack.extend((child, level + 1) for child in current)
    return deepest
