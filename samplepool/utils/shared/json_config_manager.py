"""Module: json_config_manager.py

Author: Michael Economou
Date: 2026-03-02

JSON-based configuration manager for the sample pool browser.
Persists the browser state (last source folder, filters, sort order) and the
main window layout between sessions, with a backup of the previous file.
"""

import json
import shutil
import threading
from datetime import datetime
from pathlib import Path
from typing import Any, Generic, TypeVar

from samplepool.config import APP_NAME, APP_VERSION
from samplepool.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)

T = TypeVar("T")


class ConfigCategory(Generic[T]):
    """Base class for configuration categories with defaults."""

    def __init__(self, name: str, defaults: dict[str, Any]):
        self.name = name
        self.defaults = defaults
        self._data = defaults.copy()

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value with fallback to default."""
        return self._data.get(key, default if default is not None else self.defaults.get(key))

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def update(self, data: dict[str, Any]) -> None:
        self._data.update(data)

    def reset(self) -> None:
        self._data = self.defaults.copy()

    def to_dict(self) -> dict[str, Any]:
        return self._data.copy()

    def from_dict(self, data: dict[str, Any]) -> None:
        """Load from dictionary, applying defaults for missing keys."""
        self._data = self.defaults.copy()
        self._data.update(data)


class BrowserConfig(ConfigCategory[Any]):
    """Dual-pane browser state."""

    def __init__(self) -> None:
        defaults = {
            "last_source_folder": "",
            "source_pane_open": True,
            "source_sort": {"column": "name", "direction": "asc"},
            "destination_sort": {"column": "name", "direction": "asc"},
        }
        super().__init__("browser", defaults)


class WindowConfig(ConfigCategory[Any]):
    """Main window geometry and splitter layout."""

    def __init__(self) -> None:
        defaults = {
            "geometry": None,
            "window_state": "normal",
            "splitter_sizes": [500, 500],
            "transfer_panel_height": 180,
        }
        super().__init__("window", defaults)


class JSONConfigManager:
    """Thread-safe JSON configuration with per-category sections."""

    def __init__(self, app_name: str = APP_NAME, config_dir: str | None = None):
        self.app_name = app_name
        self.config_dir = Path(config_dir or self._get_default_config_dir())
        self.config_file = self.config_dir / "config.json"
        self.backup_file = self.config_dir / "config.json.bak"

        self._lock = threading.RLock()
        self._categories: dict[str, ConfigCategory[Any]] = {}

        self.config_dir.mkdir(parents=True, exist_ok=True)

        logger.debug(
            "[JSONConfigManager] Initialized for '%s' with dir: %s",
            app_name,
            self.config_dir,
            extra={"dev_only": True},
        )

    def _get_default_config_dir(self) -> str:
        from samplepool.utils.paths import AppPaths

        return str(AppPaths.get_user_data_dir())

    def register_category(self, category: ConfigCategory[Any]) -> None:
        with self._lock:
            self._categories[category.name] = category

    def get_category(
        self, category_name: str, create_if_not_exists: bool = False
    ) -> ConfigCategory[Any] | None:
        """Get configuration category by name."""
        with self._lock:
            category = self._categories.get(category_name)
            if category is None and create_if_not_exists:
                logger.debug("Category '%s' not found, creating it dynamically.", category_name)
                category = ConfigCategory(category_name, {})
                self._categories[category_name] = category
            return category

    def list_categories(self) -> list[str]:
        return list(self._categories.keys())

    def load(self) -> bool:
        """Load configuration from the JSON file.

        A missing file is not an error: registered categories keep their defaults.
        A corrupt file is logged and the defaults are kept as well.
        """
        with self._lock:
            if not self.config_file.exists():
                logger.info(
                    "[JSONConfigManager] No config file found, using defaults",
                    extra={"dev_only": True},
                )
                return True

            try:
                with open(self.config_file, encoding="utf-8") as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.error("[JSONConfigManager] Failed to load configuration: %s", e)
                return False

            if not isinstance(data, dict):
                logger.error("[JSONConfigManager] Ignoring config file with unexpected layout")
                return False

            for category_name, category in self._categories.items():
                section = data.get(category_name)
                if isinstance(section, dict):
                    category.from_dict(section)

            logger.debug("[JSONConfigManager] Configuration loaded", extra={"dev_only": True})
            return True

    def save(self, create_backup: bool = True) -> bool:
        """Save configuration to the JSON file."""
        with self._lock:
            data: dict[str, Any] = {
                name: category.to_dict() for name, category in self._categories.items()
            }
            data["_metadata"] = {
                "last_saved": datetime.now().isoformat(),
                "version": f"v{APP_VERSION}",
                "app_name": self.app_name,
            }

            try:
                if create_backup and self.config_file.exists():
                    shutil.copy2(self.config_file, self.backup_file)

                with open(self.config_file, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2, ensure_ascii=False)
            except OSError as e:
                logger.error("[JSONConfigManager] Failed to save configuration: %s", e)
                return False

            logger.debug("[JSONConfigManager] Configuration saved successfully")
            return True

    def get_config_info(self) -> dict[str, Any]:
        """Get information about configuration file and categories."""
        return {
            "config_file": str(self.config_file),
            "backup_file": str(self.backup_file),
            "file_exists": self.config_file.exists(),
            "backup_exists": self.backup_file.exists(),
            "app_name": self.app_name,
            "categories": {name: len(cat.to_dict()) for name, cat in self._categories.items()},
        }


def create_app_config_manager(config_dir: str | None = None) -> JSONConfigManager:
    """Create a JSONConfigManager with the browser and window categories registered."""
    manager = JSONConfigManager(app_name=APP_NAME, config_dir=config_dir)
    manager.register_category(BrowserConfig())
    manager.register_category(WindowConfig())
    return manager
