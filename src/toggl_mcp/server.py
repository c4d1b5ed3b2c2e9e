"""MCP server exposing the Toggl tools over stdio."""

import logging
from typing import Any

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from toggl_mcp import __version__
from toggl_mcp.config import Settings
from toggl_mcp.toggl import TogglClient
from toggl_mcp.tools import ToolRegistry, ToolResult, ToolSpec, build_registry

logger = logging.getLogger(__name__)

SERVER_NAME = "toggl-mcp"


def to_mcp_tool(spec: ToolSpec) -> types.Tool:
    """Convert a tool spec to its MCP declaration."""
    return types.Tool(
        name=spec.name,
        description=spec.description,
        inputSchema=spec.input_schema(),
    )


def to_call_tool_result(result: ToolResult) -> types.CallToolResult:
    """Convert a tool result to an MCP call result."""
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=result.text)],
        isError=result.is_error,
    )


def create_server(registry: ToolRegistry) -> Server:
    """Create an MCP server dispatching to ``registry``.

    Exceptions raised by handlers are left to the framework, which reports
    them to the host as failed calls.
    """
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [to_mcp_tool(spec) for spec in registry.specs()]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> types.CallToolResult:
        result = await registry.call(name, arguments)
        return to_call_tool_result(result)

    return server


async def run_stdio(settings: Settings) -> None:
    """Serve the Toggl tools over stdio until the host closes the stream.

    Args:
        settings: Resolved runtime settings.
    """
    async with TogglClient(
        settings.api_token,
        base_url=settings.base_url,
        timeout=settings.timeout,
    ) as client:
        server = create_server(build_registry(client))

        logger.info("Starting Toggl MCP server")
        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )

    logger.info("Server stopped gracefully")
