"""Configuration for the Toggl MCP server."""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from toggl_mcp.toggl.client import DEFAULT_TIMEOUT, TOGGL_API_BASE
from toggl_mcp.utils.storage import StorageManager

TOKEN_ENV_VAR = "TOGGL_API_TOKEN"
TIMEOUT_ENV_VAR = "TOGGL_TIMEOUT"
TOKEN_SERVICE = "toggl"


class ConfigurationError(Exception):
    """Settings are missing or invalid; the server cannot start."""


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings."""

    api_token: str
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = "INFO"
    base_url: str = TOGGL_API_BASE


def _parse_timeout(value: Any, source: str) -> float:
    try:
        timeout = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{source} must be a number of seconds, got {value!r}") from e
    if timeout <= 0:
        raise ConfigurationError(f"{source} must be positive, got {value!r}")
    return timeout


def load_settings(
    config_dir: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Resolve settings from the environment and the config directory.

    The API token comes from ``TOGGL_API_TOKEN``, falling back to the token
    saved by ``toggl-mcp configure``. ``settings.yaml`` may set ``timeout``,
    ``log_level`` and ``base_url``; ``TOGGL_TIMEOUT`` overrides the timeout.

    Args:
        config_dir: Configuration directory. Defaults to ~/.toggl-mcp/
        environ: Environment mapping. Defaults to ``os.environ``.

    Returns:
        Resolved settings.

    Raises:
        ConfigurationError: If no API token is available or a value is invalid.
    """
    env = os.environ if environ is None else environ
    storage = StorageManager(config_dir)
    stored = storage.load_settings()

    api_token = env.get(TOKEN_ENV_VAR, "").strip() or storage.get_token(TOKEN_SERVICE)
    if not api_token:
        raise ConfigurationError(f"{TOKEN_ENV_VAR} environment variable is required")

    timeout = DEFAULT_TIMEOUT
    if "timeout" in stored:
        timeout = _parse_timeout(stored["timeout"], "settings.yaml timeout")
    if env.get(TIMEOUT_ENV_VAR):
        timeout = _parse_timeout(env[TIMEOUT_ENV_VAR], TIMEOUT_ENV_VAR)

    return Settings(
        api_token=api_token,
        timeout=timeout,
        log_level=str(stored.get("log_level", "INFO")).upper(),
        base_url=stored.get("base_url", TOGGL_API_BASE),
    )
