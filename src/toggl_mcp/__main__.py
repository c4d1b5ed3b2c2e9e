"""Allow running as ``python -m toggl_mcp``."""

from toggl_mcp.cli import main

main()
