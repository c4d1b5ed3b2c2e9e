"""Utility modules for the Toggl MCP server."""

from toggl_mcp.utils.logging import get_logger, setup_logging
from toggl_mcp.utils.storage import StorageManager

__all__ = ["get_logger", "setup_logging", "StorageManager"]
