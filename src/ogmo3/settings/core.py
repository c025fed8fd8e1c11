"""
Core settings management for ogmo3.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from PySide6.QtCore import QSettings

from .types import ConfigError, ConfigVersion, ValidationResult
from .migration import SettingsMigrator
from .validation import SettingsValidator
from .logging import LoggingSettings
from .output import OutputSettings

logger = logging.getLogger(__name__)


class AppSettings:
    """
    Configuration management using QSettings.

    Provides type-safe access to settings with automatic cross-platform
    storage and validation. An explicit INI file can be used instead of the
    per-user store, which keeps tests and scripted runs isolated.
    """

    def __init__(
        self, profile: str = "default", settings_file: Optional[Union[str, Path]] = None
    ):
        """Initialize settings with a profile and optional INI file.

        Args:
            profile: Settings profile name (default: "default")
            settings_file: INI file to use instead of the per-user store

        Raises:
            ConfigError: If the profile name is empty or contains a slash
        """
        if not profile or "/" in profile or "\\" in profile:
            raise ConfigError(f"Invalid settings profile name: {profile!r}")

        if settings_file is not None:
            self.settings = QSettings(str(settings_file), QSettings.Format.IniFormat)
        else:
            self.settings = QSettings("ogmo3", "ogmo3")
        self.profile = profile

        # Use profile as a group to create hierarchy: ogmo3/ogmo3/default/...
        self.settings.beginGroup(profile)

        # Initialize subsystems
        self._migrator = SettingsMigrator(self.settings)
        self._validator = SettingsValidator(self)
        self._logging = LoggingSettings(self.settings)
        self._output = OutputSettings(self.settings)

        self._migrator.ensure_version()

        logger.debug(
            f"Settings initialized for profile '{profile}', stored at: {self.settings.fileName()}"
        )

    # === SUBSYSTEM ACCESS ===

    @property
    def logging(self) -> LoggingSettings:
        """Access logging settings subsystem."""
        return self._logging

    @property
    def output(self) -> OutputSettings:
        """Access document output settings subsystem."""
        return self._output

    @property
    def version(self) -> str:
        """Get configuration version."""
        return self._get_str("app/version", ConfigVersion.CURRENT.value)

    # === HELPER METHODS ===

    def _get_str(self, key: str, default: str = "") -> str:
        """Type-safe string retrieval from settings."""
        value = self.settings.value(key, default)
        return str(value) if value is not None else default

    # === LOGGING SETTINGS (DELEGATED) ===

    @property
    def console_logging(self) -> bool:
        """Check if console logging is enabled."""
        return self._logging.console_logging

    @console_logging.setter
    def console_logging(self, value: bool) -> None:
        """Set console logging enabled state."""
        self._logging.console_logging = value

    @property
    def console_log_level(self) -> str:
        """Get console logging level."""
        return self._logging.console_log_level

    @console_log_level.setter
    def console_log_level(self, value: str) -> None:
        """Set console logging level."""
        self._logging.console_log_level = value

    @property
    def console_use_colors(self) -> bool:
        """Check if console should use colors."""
        return self._logging.console_use_colors

    @console_use_colors.setter
    def console_use_colors(self, value: bool) -> None:
        """Set console color usage."""
        self._logging.console_use_colors = value

    @property
    def file_logging(self) -> bool:
        """Check if file logging is enabled."""
        return self._logging.file_logging

    @file_logging.setter
    def file_logging(self, value: bool) -> None:
        """Set file logging enabled state."""
        self._logging.file_logging = value

    @property
    def log_file_path(self) -> str:
        """Get log file path."""
        return self._logging.log_file_path

    @log_file_path.setter
    def log_file_path(self, value: Union[str, Path]) -> None:
        """Set log file path."""
        self._logging.log_file_path = value

    @property
    def log_file_absolute_path(self) -> Path:
        """Get absolute path to log file."""
        return self._logging.log_file_absolute_path

    # === OUTPUT SETTINGS (DELEGATED) ===

    @property
    def pretty_print(self) -> bool:
        """Whether saved documents are indented."""
        return self._output.pretty_print

    @pretty_print.setter
    def pretty_print(self, value: bool) -> None:
        self._output.pretty_print = value

    @property
    def trailing_newline(self) -> bool:
        """Whether saved documents end with a newline."""
        return self._output.trailing_newline

    @trailing_newline.setter
    def trailing_newline(self, value: bool) -> None:
        self._output.trailing_newline = value

    # === VALIDATION ===

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        return self._validator.validate()

    # === UTILITY METHODS ===

    def get_settings_file_path(self) -> str:
        """Get the file path where settings are stored."""
        return self.settings.fileName()

    def sync(self) -> None:
        """Force synchronization of settings to storage."""
        self.settings.sync()
