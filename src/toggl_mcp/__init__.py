"""Toggl Track tools for MCP hosts."""

__version__ = "1.0.0"
