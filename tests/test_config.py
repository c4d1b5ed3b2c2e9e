"""Tests for settings resolution."""

import pytest

from toggl_mcp.config import ConfigurationError, Settings, load_settings
from toggl_mcp.toggl import TOGGL_API_BASE
from toggl_mcp.utils import StorageManager


class TestLoadSettings:
    """Test load_settings."""

    def test_token_from_environment(self, temp_config_dir) -> None:
        """Test the environment token is used."""
        settings = load_settings(temp_config_dir, environ={"TOGGL_API_TOKEN": "env_token"})

        assert settings == Settings(api_token="env_token")
        assert settings.base_url == TOGGL_API_BASE
        assert settings.timeout == 30.0

    def test_token_from_storage(self, temp_config_dir, storage_manager: StorageManager) -> None:
        """Test the stored token is the fallback."""
        storage_manager.set_token("toggl", "stored_token")

        settings = load_settings(temp_config_dir, environ={})

        assert settings.api_token == "stored_token"

    def test_environment_wins_over_storage(
        self, temp_config_dir, storage_manager: StorageManager
    ) -> None:
        """Test the environment takes precedence."""
        storage_manager.set_token("toggl", "stored_token")

        settings = load_settings(temp_config_dir, environ={"TOGGL_API_TOKEN": "env_token"})

        assert settings.api_token == "env_token"

    def test_missing_token(self, temp_config_dir) -> None:
        """Test a missing token is a configuration error."""
        with pytest.raises(ConfigurationError, match="TOGGL_API_TOKEN environment variable is required"):
            load_settings(temp_config_dir, environ={"TOGGL_API_TOKEN": "  "})

    def test_settings_file(self, temp_config_dir, storage_manager: StorageManager) -> None:
        """Test values from settings.yaml."""
        storage_manager.save_settings({"timeout": 10, "log_level": "debug"})

        settings = load_settings(temp_config_dir, environ={"TOGGL_API_TOKEN": "t"})

        assert settings.timeout == 10.0
        assert settings.log_level == "DEBUG"

    def test_timeout_env_override(self, temp_config_dir, storage_manager: StorageManager) -> None:
        """Test TOGGL_TIMEOUT overrides the file."""
        storage_manager.save_settings({"timeout": 10})

        settings = load_settings(
            temp_config_dir, environ={"TOGGL_API_TOKEN": "t", "TOGGL_TIMEOUT": "2.5"}
        )

        assert settings.timeout == 2.5

    @pytest.mark.parametrize("value", ["soon", "0", "-1"])
    def test_invalid_timeout(self, temp_config_dir, value: str) -> None:
        """Test invalid timeouts are rejected."""
        with pytest.raises(ConfigurationError, match="TOGGL_TIMEOUT"):
            load_settings(temp_config_dir, environ={"TOGGL_API_TOKEN": "t", "TOGGL_TIMEOUT": value})
