"""Typed extraction of tool arguments.

Tool hosts deliver arguments as decoded JSON, so numbers may arrive as floats
even when the schema declares an integer. These helpers validate and coerce
them before any request is made.
"""

import math
from typing import Any


class ParameterError(ValueError):
    """A tool argument is missing or has the wrong type."""

    def __init__(self, key: str, message: str) -> None:
        self.key = key
        super().__init__(f"{key} {message}")


def _as_number(value: Any) -> int | None:
    # bool is an int subclass but never a valid number argument
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return int(value)


def require_number(params: dict[str, Any], key: str) -> int:
    """Extract a required number, truncated toward zero.

    Zero is a valid value.

    Raises:
        ParameterError: If the key is absent, null, or not a number.
    """
    number = _as_number(params.get(key))
    if number is None:
        raise ParameterError(key, "must be a number")
    return number


def optional_number(params: dict[str, Any], key: str) -> int | None:
    """Extract an optional number; None when absent or not a number."""
    return _as_number(params.get(key))


def require_string(params: dict[str, Any], key: str) -> str:
    """Extract a required, non-empty string.

    Raises:
        ParameterError: If the key is absent, null, not a string, or empty.
    """
    value = params.get(key)
    if not isinstance(value, str) or value == "":
        raise ParameterError(key, "must be a non-empty string")
    return value


def optional_string(params: dict[str, Any], key: str) -> str:
    """Extract an optional string; empty string when absent or not a string."""
    value = params.get(key)
    return value if isinstance(value, str) else ""
