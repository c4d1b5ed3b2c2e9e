"""Result of a tool invocation."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ToolResult:
    """Text returned to the tool host.

    ``is_error`` marks a call that completed but whose remote operation was
    rejected; hard failures are raised instead.
    """

    text: str
    is_error: bool = False

    @classmethod
    def error(cls, text: str) -> "ToolResult":
        """Build a flagged result."""
        return cls(text=text, is_error=True)
