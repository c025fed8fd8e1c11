"""
Settings version tracking for ogmo3.
"""

import logging
from typing import TYPE_CHECKING

from .types import ConfigVersion

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)


class SettingsMigrator:
    """Stamps the configuration version and handles version changes."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def ensure_version(self) -> None:
        """Ensure configuration version is set and handle migrations."""
        current_version = str(self.settings.value("app/version", ""))

        if not current_version:
            self.settings.setValue("app/version", ConfigVersion.CURRENT.value)
            self.settings.sync()
            logger.info("No configuration version found, initializing configuration")
        elif current_version != ConfigVersion.CURRENT.value:
            self._migrate_config(current_version, ConfigVersion.CURRENT.value)

    def _migrate_config(self, from_version: str, to_version: str) -> None:
        """Migrate configuration from an unknown version to the current one.

        No key layout has changed yet, so migrating only records the version
        the configuration came from.
        """
        logger.warning(f"Configuration version {from_version} is not {to_version}, restamping")
        self.settings.setValue("app/version", to_version)
        self.settings.setValue("app/migrated_from", from_version)
        self.settings.sync()
