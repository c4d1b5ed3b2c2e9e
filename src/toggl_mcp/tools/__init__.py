"""Toggl tools exposed to MCP hosts."""

from toggl_mcp.tools.formatting import format_duration, format_elapsed
from toggl_mcp.tools.params import (
    ParameterError,
    optional_number,
    optional_string,
    require_number,
    require_string,
)
from toggl_mcp.tools.registry import (
    ToolParam,
    ToolRegistry,
    ToolSpec,
    UnknownToolError,
    build_registry,
)
from toggl_mcp.tools.result import ToolResult

__all__ = [
    "format_duration",
    "format_elapsed",
    "ParameterError",
    "optional_number",
    "optional_string",
    "require_number",
    "require_string",
    "ToolParam",
    "ToolRegistry",
    "ToolSpec",
    "UnknownToolError",
    "build_registry",
    "ToolResult",
]
