"""Settings manager for settings.yaml files.

Manages a two-scope settings system:
- User global (~/.module-order/settings.yaml)
- Project (.module-order/settings.yaml)

Project settings override user settings. Supported keys:

    manifest: path/to/modules.yaml
    logging:
      level: DEBUG
      path: ./module-order.log.jsonl
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

DEFAULT_MANIFEST = Path("modules.yaml")
LOG_LEVEL_ENV = "MODULE_ORDER_LOG_LEVEL"
LOG_PATH_ENV = "MODULE_ORDER_LOG_PATH"


class SettingsManager:
    """Manages settings across user/project scopes."""

    def __init__(self, project_dir: Path | None = None, user_dir: Path | None = None):
        """Initialize settings manager with standard paths.

        Args:
            project_dir: Base directory for project settings (for testing).
                         If None, uses .module-order in current directory.
            user_dir: Base directory for user settings (for testing).
                      If None, uses ~/.module-order.
        """
        if project_dir is None:
            project_dir = Path(".module-order")
        if user_dir is None:
            user_dir = Path.home() / ".module-order"

        self.user_settings_file = user_dir / "settings.yaml"
        self.project_settings_file = project_dir / "settings.yaml"

    def get_manifest_path(self) -> Path:
        """Get the default manifest path.

        Returns:
            Configured manifest path, or modules.yaml in the current directory
        """
        manifest = self.get_merged_settings().get("manifest")
        return Path(manifest) if manifest else DEFAULT_MANIFEST

    def get_log_level(self) -> str:
        """Get log level (environment overrides settings), defaulting to WARNING."""
        if env_level := os.getenv(LOG_LEVEL_ENV):
            return env_level.upper()
        level = self._get_logging_settings().get("level")
        return str(level).upper() if level else "WARNING"

    def get_log_path(self) -> str | None:
        """Get JSONL log path (environment overrides settings), or None to disable."""
        if env_path := os.getenv(LOG_PATH_ENV):
            return env_path
        path = self._get_logging_settings().get("path")
        return str(path) if path else None

    def get_merged_settings(self) -> dict[str, Any]:
        """Get merged settings from all scopes.

        Merge order (later overrides earlier):
        1. User settings
        2. Project settings

        Returns:
            Merged settings dictionary
        """
        merged: dict[str, Any] = {}

        user = self._read_settings(self.user_settings_file)
        if user:
            merged = self._deep_merge(merged, user)

        project = self._read_settings(self.project_settings_file)
        if project:
            merged = self._deep_merge(merged, project)

        return merged

    def _get_logging_settings(self) -> dict[str, Any]:
        section = self.get_merged_settings().get("logging")
        return section if isinstance(section, dict) else {}

    def _read_settings(self, path: Path) -> dict[str, Any] | None:
        """Read settings from YAML file.

        Args:
            path: Path to settings file

        Returns:
            Settings dict or None if file doesn't exist or can't be read
        """
        if not path.exists():
            return None

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            logger.warning(f"Failed to read settings from {path}: {e}")
            return None

        if data is None:
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring settings file {path}: expected a mapping")
            return None
        return data

    def _deep_merge(self, base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries.

        Args:
            base: Base dictionary
            overlay: Overlay dictionary (takes precedence)

        Returns:
            Merged dictionary
        """
        result = base.copy()

        for key, value in overlay.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
