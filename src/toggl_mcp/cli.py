"""Command-line interface for the Toggl MCP server."""

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table

from toggl_mcp import __version__
from toggl_mcp.config import TOKEN_SERVICE, ConfigurationError, Settings, load_settings
from toggl_mcp.server import run_stdio
from toggl_mcp.toggl import RequestExecutionError, TogglClient, TogglError
from toggl_mcp.tools import ParameterError, ToolResult, UnknownToolError, build_registry
from toggl_mcp.tools.registry import TOOLS
from toggl_mcp.utils import StorageManager, get_logger, setup_logging
from toggl_mcp.utils.confirmation import CANCELLED_MESSAGE

app = typer.Typer(help="Expose Toggl Track as MCP tools")
# stdout belongs to the MCP stream while serving
console = Console(stderr=True)
out = Console()
logger = get_logger(__name__)

CONFIG_DIR_HELP = "Configuration directory. Defaults to ~/.toggl-mcp/"


def _load_settings_or_exit(config_dir: Optional[Path]) -> Settings:
    try:
        return load_settings(config_dir)
    except ConfigurationError as e:
        logger.error(f"Missing API token: {e}")
        console.print(f"[red]{e}[/red]")
        console.print("Set TOGGL_API_TOKEN or run: toggl-mcp configure")
        raise typer.Exit(code=1)


def _make_client(settings: Settings, confirm: bool = False) -> TogglClient:
    return TogglClient(
        settings.api_token,
        base_url=settings.base_url,
        timeout=settings.timeout,
        confirm=confirm,
    )


def _parse_arguments(pairs: list[str]) -> dict[str, Any]:
    """Parse ``key=value`` pairs; values are JSON when they parse as JSON."""
    arguments: dict[str, Any] = {}
    for pair in pairs:
        key, sep, raw = pair.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"expected key=value, got {pair!r}", param_hint="--arg")
        try:
            arguments[key] = json.loads(raw)
        except json.JSONDecodeError:
            arguments[key] = raw
    return arguments


async def _invoke(settings: Settings, name: str, arguments: dict[str, Any], confirm: bool) -> ToolResult:
    async with _make_client(settings, confirm=confirm) as client:
        return await build_registry(client).call(name, arguments)


@app.command()
def serve(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging.",
    ),
    config_dir: Optional[Path] = typer.Option(
        None,
        "--config-dir",
        help=CONFIG_DIR_HELP,
    ),
) -> None:
    """Run the MCP server over stdio."""
    settings = _load_settings_or_exit(config_dir)
    setup_logging(
        log_level=logging.DEBUG if verbose else settings.log_level,
        config_dir=config_dir,
    )
    logger.info(f"Toggl MCP server v{__version__}")

    asyncio.run(run_stdio(settings))


@app.command()
def configure(
    config_dir: Optional[Path] = typer.Option(
        None,
        "--config-dir",
        help=CONFIG_DIR_HELP,
    ),
) -> None:
    """Store the Toggl API token and test the connection."""
    setup_logging(config_dir=config_dir)
    storage = StorageManager(config_dir)

    console.print("[bold cyan]Toggl MCP Configuration[/bold cyan]")
    api_token = Prompt.ask("Enter your Toggl API token", password=True, console=console).strip()
    if not api_token:
        console.print("[red]✗ No API token entered[/red]")
        raise typer.Exit(code=1)

    storage.set_token(TOKEN_SERVICE, api_token)
    console.print("[green]✓ Toggl API token saved[/green]")

    console.print("[cyan]Testing connection...[/cyan]")
    settings = _load_settings_or_exit(config_dir)
    try:
        result = asyncio.run(_invoke(settings, "test_connection", {}, confirm=False))
    except TogglError as e:
        console.print(f"[red]✗ Failed to connect to Toggl: {e}[/red]")
        raise typer.Exit(code=1)

    if result.is_error:
        console.print(f"✗ {result.text}", style="red", markup=False)
        raise typer.Exit(code=1)
    console.print(result.text, style="green", markup=False)


@app.command()
def tools() -> None:
    """List the available tools and their parameters."""
    table = Table(title="Toggl Tools")
    table.add_column("Tool", style="cyan", no_wrap=True)
    table.add_column("Required", style="magenta")
    table.add_column("Optional", style="yellow")

    for spec, _ in TOOLS:
        required = ", ".join(p.name for p in spec.parameters if p.required)
        optional = ", ".join(p.name for p in spec.parameters if not p.required)
        table.add_row(spec.name, required or "-", optional or "-")

    out.print(table)


@app.command()
def call(
    name: str = typer.Argument(..., help="Tool name, e.g. get_time_entries."),
    arg: Optional[list[str]] = typer.Option(
        None,
        "--arg",
        "-a",
        help="Tool argument as key=value. Values are parsed as JSON when possible.",
    ),
    confirm: bool = typer.Option(
        False,
        "--confirm",
        help="Print each API call and prompt for confirmation before sending.",
    ),
    config_dir: Optional[Path] = typer.Option(
        None,
        "--config-dir",
        help=CONFIG_DIR_HELP,
    ),
) -> None:
    """Invoke one tool and print its result."""
    setup_logging(log_level=logging.WARNING, config_dir=config_dir)
    settings = _load_settings_or_exit(config_dir)
    arguments = _parse_arguments(arg or [])

    try:
        result = asyncio.run(_invoke(settings, name, arguments, confirm))
    except UnknownToolError:
        console.print(f"[red]Unknown tool: {name}[/red]")
        console.print("Run 'toggl-mcp tools' to list the available tools.")
        raise typer.Exit(code=1)
    except ParameterError as e:
        console.print(f"[red]Invalid argument: {e}[/red]")
        raise typer.Exit(code=1)
    except RequestExecutionError as e:
        if CANCELLED_MESSAGE in str(e):
            console.print("[yellow]Call cancelled by user[/yellow]")
            raise typer.Exit(code=0)
        logger.error(f"API request failed: {e}", exc_info=True)
        console.print(f"[red]Error: API request failed: {e}[/red]")
        raise typer.Exit(code=1)
    except TogglError as e:
        logger.error(f"Tool {name} failed: {e}", exc_info=True)
        console.print(f"Error: {e}", style="red", markup=False)
        raise typer.Exit(code=1)

    if result.is_error:
        console.print(result.text, style="red", markup=False, soft_wrap=True)
        raise typer.Exit(code=1)
    out.print(result.text, highlight=False, markup=False, soft_wrap=True)


@app.command()
def version() -> None:
    """Show version information."""
    out.print(f"Toggl MCP v{__version__}")


def main() -> None:
    """Main entry point."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        console.print(f"[red]Unexpected error: {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
