"""Application configuration for the Digital Footprint settings core.

This is configuration of the tool itself (where the storage file lives,
where exports go, how chatty the logs are), not the user settings that the
extension stores. It is kept as YAML in the platform config directory.
"""

from __future__ import annotations

import logging
import os
import platform
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

APP_DIR_NAME = "digital-footprint"


# =============================================================================
# Exceptions
# =============================================================================


class ConfigurationError(Exception):
    """Raised when configuration is invalid or cannot be loaded."""

    pass


# =============================================================================
# Paths
# =============================================================================


def get_app_dir() -> Path:
    """Platform-appropriate directory for configuration and data.

    Returns:
        - Windows: %APPDATA%/digital-footprint
        - macOS: ~/Library/Application Support/digital-footprint
        - Linux: $XDG_CONFIG_HOME/digital-footprint or ~/.config/digital-footprint
    """
    system = platform.system()

    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
    elif system == "Darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        xdg_config = os.environ.get("XDG_CONFIG_HOME")
        base = Path(xdg_config) if xdg_config else Path.home() / ".config"

    return base / APP_DIR_NAME


# =============================================================================
# Configuration Model
# =============================================================================


class AppConfig(BaseModel):
    """Tool configuration.

    Attributes:
        data_file: JSON file holding the storage namespace (default:
            ``storage.json`` in the app directory)
        export_dir: Directory export artifacts are written to
        log_level: Console/file log level
        log_file: Optional log file path
    """

    data_file: Path | None = None
    export_dir: Path = Path(".")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    log_file: Path | None = None

    @classmethod
    def get_default_config_path(cls) -> Path:
        return get_app_dir() / "config.yaml"

    def resolve_data_file(self) -> Path:
        """Storage file path, falling back to the app directory."""
        return self.data_file or get_app_dir() / "storage.json"

    @classmethod
    def load_from_yaml(cls, path: Path) -> "AppConfig":
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML configuration file.

        Returns:
            Loaded AppConfig instance.

        Raises:
            ConfigurationError: If the file is missing, unreadable or invalid.
        """
        if not path.exists():
            raise ConfigurationError(f"Configuration file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in configuration file: {e}")
        except OSError as e:
            raise ConfigurationError(f"Failed to read configuration: {e}")

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file must hold a mapping: {path}")

        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}")

    def save_to_yaml(self, path: Path) -> None:
        """Save configuration to a YAML file, creating parent directories.

        Raises:
            ConfigurationError: If the file cannot be written.
        """
        data = {
            "data_file": str(self.data_file) if self.data_file else None,
            "export_dir": str(self.export_dir),
            "log_level": self.log_level,
            "log_file": str(self.log_file) if self.log_file else None,
        }

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        except OSError as e:
            raise ConfigurationError(f"Failed to save configuration: {e}")


# =============================================================================
# Module-Level Functions
# =============================================================================


def get_config(path: Path | None = None) -> AppConfig:
    """Load configuration from ``path`` (or the default path) or return defaults.

    A missing or corrupt file yields the default configuration.
    """
    config_path = path or AppConfig.get_default_config_path()

    if config_path.exists():
        try:
            return AppConfig.load_from_yaml(config_path)
        except ConfigurationError as e:
            logger.warning(f"Ignoring unusable configuration: {e}")
            return AppConfig()

    return AppConfig()
