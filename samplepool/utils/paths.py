"""Module: paths.py.

Author: Michael Economou
Date: 2026-03-02

Centralized path management for the samplepool application.

Platform-specific behavior:
- Windows: %LOCALAPPDATA%/samplepool/
- Linux: $XDG_DATA_HOME/samplepool/ or ~/.local/share/samplepool/
- macOS: ~/Library/Application Support/samplepool/

Usage:
    from samplepool.utils.paths import AppPaths

    config_path = AppPaths.get_config_path()
    logs_dir = AppPaths.get_logs_dir()
"""

import os
import platform
from pathlib import Path

from samplepool.config import APP_NAME
from samplepool.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)


class AppPaths:
    """Cross-platform access to the user data directory.

    Directory Structure:
        <user_data_dir>/
        ├── config.json          # Browser + window configuration
        ├── logs/                # Rotating session logs
        └── pool/                # Default audio pool root
    """

    _user_data_dir: Path | None = None
    _initialized: bool = False

    @classmethod
    def _get_platform_data_dir(cls) -> Path:
        system = platform.system()

        if system == "Windows":
            base = os.environ.get("LOCALAPPDATA")
            if not base:
                base = Path(os.environ.get("USERPROFILE", "")) / "AppData" / "Local"
            return Path(base) / APP_NAME

        elif system == "Darwin":
            return Path.home() / "Library" / "Application Support" / APP_NAME

        else:
            xdg_data = os.environ.get("XDG_DATA_HOME")
            if xdg_data:
                return Path(xdg_data) / APP_NAME
            return Path.home() / ".local" / "share" / APP_NAME

    @classmethod
    def get_user_data_dir(cls) -> Path:
        """Get the user data directory, creating it if necessary."""
        if cls._user_data_dir is None:
            cls._user_data_dir = cls._get_platform_data_dir()

        cls._user_data_dir.mkdir(parents=True, exist_ok=True)

        if not cls._initialized:
            logger.info("[AppPaths] User data directory: %s", cls._user_data_dir)
            cls._initialized = True

        return cls._user_data_dir

    @classmethod
    def get_config_path(cls) -> Path:
        return cls.get_user_data_dir() / "config.json"

    @classmethod
    def get_logs_dir(cls) -> Path:
        logs_dir = cls.get_user_data_dir() / "logs"
        logs_dir.mkdir(parents=True, exist_ok=True)
        return logs_dir

    @classmethod
    def get_default_pool_dir(cls) -> Path:
        """Get the audio pool root used when none is given on the command line."""
        pool_dir = cls.get_user_data_dir() / "pool"
        pool_dir.mkdir(parents=True, exist_ok=True)
        return pool_dir

    @classmethod
    def reset(cls) -> None:
        """Reset cached paths (mainly for testing)."""
        cls._user_data_dir = None
        cls._initialized = False
