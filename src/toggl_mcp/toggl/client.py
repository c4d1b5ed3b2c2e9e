"""Toggl Track API client."""

import logging
from typing import Any, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from toggl_mcp.toggl.errors import (
    APIError,
    DecodeError,
    RequestBuildError,
    RequestExecutionError,
    ResponseReadError,
)
from toggl_mcp.utils.confirmation import ConfirmationTransport

logger = logging.getLogger(__name__)

T = TypeVar("T")

TOGGL_API_BASE = "https://api.track.toggl.com/api/v9"
DEFAULT_TIMEOUT = 30.0

# Toggl takes the token as the Basic auth username and this literal as password.
API_TOKEN_PASSWORD = "api_token"


async def decode_response(response: httpx.Response, shape: type[T]) -> T:
    """Read a response and decode its JSON body into ``shape``.

    The response is always closed, whatever the outcome.

    Args:
        response: Streamed response returned by :meth:`TogglClient.send`.
        shape: Any type pydantic can validate against (a model class,
            ``list[Model]``, ``dict``, ...).

    Returns:
        The decoded value.

    Raises:
        ResponseReadError: If the body could not be read.
        APIError: If the status is outside the 2xx range.
        DecodeError: If a 2xx body does not match ``shape``.
    """
    try:
        try:
            await response.aread()
        except httpx.HTTPError as e:
            raise ResponseReadError(f"reading response body: {e}") from e

        if not response.is_success:
            raise APIError(response.status_code, response.text)

        try:
            return TypeAdapter(shape).validate_json(response.content)
        except ValidationError as e:
            raise DecodeError(f"decoding response: {e}") from e
    finally:
        await response.aclose()


class TogglClient:
    """Async client for the Toggl Track API v9."""

    def __init__(
        self,
        api_token: str,
        *,
        base_url: str = TOGGL_API_BASE,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
        logger: logging.Logger | None = None,
        confirm: bool = False,
    ) -> None:
        """Initialize Toggl client.

        Args:
            api_token: Toggl API token.
            base_url: API base URL including the version segment.
            timeout: Default timeout in seconds for every request.
            transport: Transport to send requests through. Defaults to httpx's
                network transport.
            logger: Logger for request records. Defaults to this module's logger.
            confirm: If True, prompt for confirmation before each API call.
        """
        if not api_token:
            raise ValueError("Toggl API token not provided")

        self.api_token = api_token
        self.base_url = base_url
        self.timeout = timeout
        self.logger = logger or logging.getLogger(__name__)

        if confirm:
            transport = ConfirmationTransport(transport or httpx.AsyncHTTPTransport())

        self.client = httpx.AsyncClient(
            base_url=base_url,
            auth=httpx.BasicAuth(api_token, API_TOKEN_PASSWORD),
            headers={"Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    async def send(
        self,
        method: str,
        endpoint: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        """Send one authenticated request.

        The body of the returned response is not read yet; pass it to
        :func:`decode_response`, which reads and closes it.

        Args:
            method: HTTP method.
            endpoint: Path relative to the API base, e.g. ``/me``.
            params: Query parameters.
            json: JSON-serializable request body.
            timeout: Timeout for this call, overriding the client default.

        Returns:
            Streamed HTTP response.

        Raises:
            RequestBuildError: If the request cannot be constructed.
            RequestExecutionError: If the transport fails or times out.
        """
        extra: dict[str, Any] = {}
        if timeout is not None:
            extra["timeout"] = timeout

        try:
            request = self.client.build_request(
                method, endpoint, params=params, json=json, **extra
            )
        except (httpx.InvalidURL, TypeError, ValueError) as e:
            raise RequestBuildError(f"creating request: {e}") from e

        self.logger.debug(f"Making API request: {method} {endpoint}")

        try:
            return await self.client.send(request, stream=True)
        except httpx.HTTPError as e:
            raise RequestExecutionError(f"executing request: {e}") from e

    async def request(
        self,
        method: str,
        endpoint: str,
        shape: type[T],
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        timeout: float | None = None,
    ) -> T:
        """Send a request and decode its response into ``shape``.

        Raises:
            RequestBuildError, RequestExecutionError: Before a response exists.
            ResponseReadError, APIError, DecodeError: See :func:`decode_response`.
        """
        response = await self.send(method, endpoint, params=params, json=json, timeout=timeout)
        try:
            return await decode_response(response, shape)
        except APIError as e:
            self.logger.warning(f"Toggl API returned {e.status_code} for {method} {endpoint}")
            raise

    async def aclose(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()

    async def __aenter__(self) -> "TogglClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit."""
        await self.aclose()
