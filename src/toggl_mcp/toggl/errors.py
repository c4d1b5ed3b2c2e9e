"""Error types raised by the Toggl API client."""


class TogglError(Exception):
    """Base class for all Toggl client errors."""


class RequestBuildError(TogglError):
    """The outgoing request could not be constructed."""


class RequestExecutionError(TogglError):
    """The request failed in transport (connect, TLS, timeout)."""


class ResponseReadError(TogglError):
    """The response body could not be read."""


class DecodeError(TogglError):
    """A successful response carried a body that does not match the expected shape."""


class APIError(TogglError):
    """Non-2xx response from the Toggl API.

    The raw body is kept verbatim so callers can show the remote message even
    when it is not JSON.
    """

    def __init__(self, status_code: int, body: str) -> None:
        """Initialize API error.

        Args:
            status_code: HTTP status code of the response.
            body: Raw response body text.
        """
        self.status_code = status_code
        self.body = body
        super().__init__(f"API error (status {status_code}): {body}")

    @property
    def is_not_found(self) -> bool:
        """Whether the API answered 404."""
        return self.status_code == 404
