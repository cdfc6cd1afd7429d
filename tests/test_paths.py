"""Tests for samplepool.utils.paths module."""

from pathlib import Path
from unittest.mock import patch

import pytest

from samplepool.utils.paths import AppPaths


@pytest.fixture(autouse=True)
def linux_data_home(tmp_path, monkeypatch):
    """Point the user data directory at tmp_path, as on Linux."""
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
    AppPaths.reset()
    with patch("samplepool.utils.paths.platform.system", return_value="Linux"):
        yield tmp_path
    AppPaths.reset()


class TestAppPaths:
    """Test suite for AppPaths class."""

    def test_get_user_data_dir_creates_directory(self, linux_data_home):
        """Test that get_user_data_dir creates the application directory."""
        result = AppPaths.get_user_data_dir()
        assert result == linux_data_home / "samplepool"
        assert result.is_dir()

    def test_get_config_path(self):
        """Test that get_config_path returns config.json in the data dir."""
        result = AppPaths.get_config_path()
        assert isinstance(result, Path)
        assert result.name == "config.json"
        assert result.parent == AppPaths.get_user_data_dir()

    def test_get_logs_dir(self):
        """Test that the logs directory exists after the call."""
        result = AppPaths.get_logs_dir()
        assert result.name == "logs"
        assert result.is_dir()

    def test_get_default_pool_dir(self):
        """Test that the default audio pool folder is created."""
        result = AppPaths.get_default_pool_dir()
        assert result.name == "pool"
        assert result.is_dir()

    def test_without_xdg_uses_local_share(self, monkeypatch, tmp_path):
        """Test the ~/.local/share fallback."""
        monkeypatch.delenv("XDG_DATA_HOME")
        AppPaths.reset()
        with patch("samplepool.utils.paths.Path.home", return_value=tmp_path):
            result = AppPaths.get_user_data_dir()
        assert result == tmp_path / ".local" / "share" / "samplepool"

    def test_macos_location(self, tmp_path):
        """Test the Application Support location on macOS."""
        with (
            patch("samplepool.utils.paths.platform.system", return_value="Darwin"),
            patch("samplepool.utils.paths.Path.home", return_value=tmp_path),
        ):
            AppPaths.reset()
            result = AppPaths.get_user_data_dir()
        assert result == tmp_path / "Library" / "Application Support" / "samplepool"
