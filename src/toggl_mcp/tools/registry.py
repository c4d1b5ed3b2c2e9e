"""Tool declarations and dispatch."""

import logging
from dataclasses import dataclass, field
from typing import Any, Literal

from toggl_mcp.toggl import TogglClient
from toggl_mcp.tools import handlers
from toggl_mcp.tools.handlers import Handler
from toggl_mcp.tools.result import ToolResult

logger = logging.getLogger(__name__)

ParamType = Literal["string", "number", "boolean"]


class UnknownToolError(KeyError):
    """No tool is registered under the requested name."""


@dataclass(frozen=True)
class ToolParam:
    """One declared tool parameter."""

    name: str
    type: ParamType
    required: bool = False
    description: str = ""


@dataclass(frozen=True)
class ToolSpec:
    """Name, description and parameter schema of a tool."""

    name: str
    description: str
    parameters: tuple[ToolParam, ...] = field(default_factory=tuple)

    def input_schema(self) -> dict[str, Any]:
        """Build the JSON Schema describing the tool's arguments."""
        properties: dict[str, Any] = {}
        for param in self.parameters:
            prop: dict[str, Any] = {"type": param.type}
            if param.description:
                prop["description"] = param.description
            properties[param.name] = prop

        schema: dict[str, Any] = {"type": "object", "properties": properties}
        required = [param.name for param in self.parameters if param.required]
        if required:
            schema["required"] = required
        return schema


class ToolRegistry:
    """Binds tool specs to handlers sharing one Toggl client."""

    def __init__(self, client: TogglClient) -> None:
        """Initialize registry.

        Args:
            client: Toggl client passed to every handler.
        """
        self.client = client
        self._tools: dict[str, tuple[ToolSpec, Handler]] = {}

    def register(self, spec: ToolSpec, handler: Handler) -> None:
        """Register a tool.

        Raises:
            ValueError: If a tool with the same name is already registered.
        """
        if spec.name in self._tools:
            raise ValueError(f"Tool already registered: {spec.name}")
        self._tools[spec.name] = (spec, handler)

    def specs(self) -> list[ToolSpec]:
        """Return all tool specs in registration order."""
        return [spec for spec, _ in self._tools.values()]

    def get(self, name: str) -> ToolSpec:
        """Return the spec of a registered tool.

        Raises:
            UnknownToolError: If no such tool exists.
        """
        if name not in self._tools:
            raise UnknownToolError(name)
        return self._tools[name][0]

    async def call(self, name: str, arguments: dict[str, Any] | None = None) -> ToolResult:
        """Dispatch a tool call to its handler.

        Args:
            name: Tool name.
            arguments: Loosely-typed arguments from the tool host.

        Returns:
            The handler's result.

        Raises:
            UnknownToolError: If no such tool exists.
        """
        if name not in self._tools:
            raise UnknownToolError(name)

        _, handler = self._tools[name]
        logger.info(f"Calling tool {name}")
        result = await handler(self.client, dict(arguments or {}))
        if result.is_error:
            logger.warning(f"Tool {name} returned an error: {result.text}")
        return result


WORKSPACE_ID = ToolParam("workspace_id", "number", required=True, description="Workspace ID")

TOOLS: list[tuple[ToolSpec, Handler]] = [
    (
        ToolSpec(
            "test_connection",
            "Test the Toggl API connection and authentication",
        ),
        handlers.handle_test_connection,
    ),
    (
        ToolSpec(
            "start_time_entry",
            "Start a new time entry",
            (
                ToolParam("description", "string", required=True, description="Entry description"),
                WORKSPACE_ID,
                ToolParam("project_id", "number", description="Project to book the entry on"),
            ),
        ),
        handlers.handle_start_time_entry,
    ),
    (
        ToolSpec(
            "stop_time_entry",
            "Stop the current running time entry",
            (WORKSPACE_ID,),
        ),
        handlers.handle_stop_time_entry,
    ),
    (
        ToolSpec(
            "get_current_time_entry",
            "Get the currently running time entry",
        ),
        handlers.handle_get_current_time_entry,
    ),
    (
        ToolSpec(
            "get_time_entries",
            "Get time entries with optional date filtering. Note: To get entries for a "
            "single day (e.g., July 9th), use start_date=2025-07-09 and end_date=2025-07-10. "
            "The API uses inclusive start, exclusive end date logic.",
            (
                ToolParam("start_date", "string", description="Start date (YYYY-MM-DD), inclusive"),
                ToolParam("end_date", "string", description="End date (YYYY-MM-DD), exclusive"),
            ),
        ),
        handlers.handle_get_time_entries,
    ),
    (
        ToolSpec(
            "get_time_entries_for_day",
            "Get time entries for a specific day (automatically handles the date range correctly)",
            (ToolParam("date", "string", required=True, description="Day (YYYY-MM-DD)"),),
        ),
        handlers.handle_get_time_entries_for_day,
    ),
    (
        ToolSpec(
            "create_project",
            "Create a new project",
            (
                ToolParam("name", "string", required=True, description="Project name"),
                WORKSPACE_ID,
                ToolParam("color", "string", description="Hex color, e.g. #06aaf5"),
                ToolParam("client_id", "number", description="Client ID"),
            ),
        ),
        handlers.handle_create_project,
    ),
    (
        ToolSpec(
            "get_projects",
            "Get projects in a workspace",
            (
                WORKSPACE_ID,
                ToolParam("active", "boolean", description="Only active (true) or inactive (false)"),
            ),
        ),
        handlers.handle_get_projects,
    ),
]


def build_registry(client: TogglClient) -> ToolRegistry:
    """Create a registry with all Toggl tools registered."""
    registry = ToolRegistry(client)
    for spec, handler in TOOLS:
        registry.register(spec, handler)
    return registry
