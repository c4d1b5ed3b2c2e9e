"""Interactive confirmation for outgoing API calls."""

import json
import logging
from collections.abc import Callable
from typing import Any

import httpx
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

logger = logging.getLogger(__name__)
console = Console(stderr=True)

CANCELLED_MESSAGE = "API call cancelled by user"


def _redact_sensitive_data(text: str) -> str:
    """Redact sensitive data from strings like tokens and API keys.

    Args:
        text: Text that may contain sensitive data.

    Returns:
        Text with sensitive data redacted.
    """
    # Keep first 4 and last 4 chars
    if len(text) <= 8:
        return "****"

    return f"{text[:4]}...{text[-4:]}"


def _redact_headers(headers: dict[str, str]) -> dict[str, str]:
    """Redact sensitive headers like Authorization.

    Args:
        headers: Original headers dictionary.

    Returns:
        Dictionary with sensitive values redacted.
    """
    sensitive_keys = {"authorization", "x-api-key", "cookie"}
    redacted = {}

    for key, value in headers.items():
        if key.lower() in sensitive_keys:
            redacted[key] = _redact_sensitive_data(value)
        else:
            redacted[key] = value

    return redacted


def _format_payload(data: Any) -> str:
    """Format request payload for display.

    Args:
        data: Request payload (dict, bytes, or other).

    Returns:
        Formatted payload string.
    """
    if isinstance(data, bytes):
        try:
            data = json.loads(data)
        except (json.JSONDecodeError, UnicodeDecodeError):
            return "[binary data]"

    if isinstance(data, dict):
        try:
            return json.dumps(data, indent=2)
        except (TypeError, ValueError):
            return str(data)

    return str(data) if data else "[no payload]"


def _prompt_for_confirmation() -> bool:
    """Prompt user for confirmation to proceed with API call.

    Returns:
        True if user confirms (y), False if user declines (n).
    """
    while True:
        response = console.input(
            "[bold cyan]Proceed with this API call? [y/n][/bold cyan] "
        ).strip().lower()

        if response in ("y", "yes"):
            return True
        elif response in ("n", "no"):
            return False
        else:
            console.print("[yellow]Please enter 'y' or 'n'[/yellow]")


def _show_request(request: httpx.Request) -> None:
    """Print method, URL, redacted headers and payload of a request."""
    console.print("\n" + "=" * 80)
    console.print("[bold blue]API Request[/bold blue]")
    console.print("=" * 80)

    console.print(f"[bold cyan]Method:[/bold cyan] {request.method}")
    console.print(f"[bold cyan]URL:[/bold cyan] {request.url}")

    if request.headers:
        redacted_headers = _redact_headers(dict(request.headers))
        table = Table(title="Headers", show_header=True, header_style="bold magenta")
        table.add_column("Key", style="cyan")
        table.add_column("Value", style="green")

        for key, value in redacted_headers.items():
            table.add_row(key, value)

        console.print(table)

    if request.content:
        payload_str = _format_payload(request.content)
        console.print("\n[bold cyan]Payload:[/bold cyan]")
        if payload_str.startswith("{"):
            syntax = Syntax(payload_str, "json", theme="monokai", line_numbers=False)
            console.print(syntax)
        else:
            console.print(payload_str)

    console.print("=" * 80)


class ConfirmationTransport(httpx.AsyncBaseTransport):
    """Async httpx transport that prompts for confirmation before each request."""

    def __init__(
        self,
        transport: httpx.AsyncBaseTransport,
        prompt: Callable[[], bool] = _prompt_for_confirmation,
    ) -> None:
        """Initialize confirmation transport with underlying transport.

        Args:
            transport: The underlying httpx transport to wrap.
            prompt: Callable asking the user; returns True to proceed.
        """
        self.transport = transport
        self.prompt = prompt

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        """Handle request with confirmation prompt.

        Args:
            request: The HTTP request.

        Returns:
            The HTTP response.

        Raises:
            httpx.RequestError: If user declines confirmation.
        """
        _show_request(request)

        # Blocks the event loop while waiting for the answer; only the
        # interactive `call --confirm` path installs this transport.
        if not self.prompt():
            console.print("[bold red]✗ API call cancelled by user[/bold red]\n")
            logger.info(f"Declined {request.method} {request.url.path}")
            raise httpx.RequestError(CANCELLED_MESSAGE, request=request)

        console.print("[bold green]✓ Proceeding with API call[/bold green]\n")
        return await self.transport.handle_async_request(request)

    async def aclose(self) -> None:
        """Close the wrapped transport."""
        await self.transport.aclose()
