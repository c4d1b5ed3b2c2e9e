"""Pytest configuration and fixtures."""

import json
import logging
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
import pytest

from toggl_mcp.toggl import TogglClient
from toggl_mcp.tools import ToolRegistry, build_registry
from toggl_mcp.utils import StorageManager

API_PREFIX = "/api/v9"


class FakeToggl:
    """Routes requests to canned responses and records what was sent."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], tuple[int, Any]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, status: int = 200, body: Any = None) -> None:
        """Answer ``method path`` with ``status`` and a JSON (or raw str) body."""
        self.routes[(method, path)] = (status, body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix(API_PREFIX)
        try:
            status, body = self.routes[(request.method, path)]
        except KeyError:
            raise AssertionError(f"Unexpected request: {request.method} {path}") from None
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def body(self, index: int = -1) -> Any:
        """Decoded JSON body of a recorded request."""
        return json.loads(self.requests[index].content)


@pytest.fixture
def temp_config_dir() -> Path:
    """Create a temporary configuration directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def storage_manager(temp_config_dir: Path) -> StorageManager:
    """Create a storage manager with temporary directory."""
    return StorageManager(temp_config_dir)


@pytest.fixture
def fake_toggl() -> FakeToggl:
    """Create an empty fake Toggl API."""
    return FakeToggl()


@pytest.fixture
def make_client() -> Callable[..., TogglClient]:
    """Factory for clients whose requests go through a mock transport."""

    def factory(handler: Callable[[httpx.Request], Any], **kwargs: Any) -> TogglClient:
        return TogglClient("test_token", transport=httpx.MockTransport(handler), **kwargs)

    return factory


@pytest.fixture
def toggl_client(fake_toggl: FakeToggl) -> TogglClient:
    """Create a Toggl client talking to the fake API."""
    return TogglClient("test_token", transport=fake_toggl.transport)


@pytest.fixture
def registry(toggl_client: TogglClient) -> ToolRegistry:
    """Create a registry with all tools bound to the fake API."""
    return build_registry(toggl_client)


@pytest.fixture
def sample_time_entry() -> dict[str, Any]:
    """Raw time entry as returned by the API."""
    return {
        "id": 4001,
        "workspace_id": 123,
        "project_id": 77,
        "description": "Code review",
        "start": "2025-01-15T09:00:00+00:00",
        "stop": "2025-01-15T10:01:05+00:00",
        "duration": 3665,
        "tags": ["review"],
        "tag_ids": [9],
        "at": "2025-01-15T10:01:06+00:00",
    }


@pytest.fixture
def running_time_entry() -> dict[str, Any]:
    """Raw running time entry as returned by the API."""
    return {
        "id": 4002,
        "workspace_id": 123,
        "description": "Writing docs",
        "start": "2025-01-15T11:00:00Z",
        "duration": -1,
        "at": "2025-01-15T11:00:00Z",
    }


@pytest.fixture
def sample_project() -> dict[str, Any]:
    """Raw project as returned by the API."""
    return {
        "id": 77,
        "workspace_id": 123,
        "name": "Website",
        "active": True,
        "color": "#06aaf5",
        "at": "2025-01-01T00:00:00Z",
    }


@pytest.fixture
def restore_logging():
    """Undo the root logger changes made by setup_logging."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    quiet = {name: logging.getLogger(name).level for name in ("httpx", "httpcore")}
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            handler.close()
            root.removeHandler(handler)
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
    for name, quiet_level in quiet.items():
        logging.getLogger(name).setLevel(quiet_level)
