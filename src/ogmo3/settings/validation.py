"""
Settings validation for ogmo3.
"""

import logging
from pathlib import Path
from typing import List, TYPE_CHECKING

from .logging import VALID_LEVELS
from .types import ValidationResult

if TYPE_CHECKING:
    from .core import AppSettings

logger = logging.getLogger(__name__)


class SettingsValidator:
    """Validates configuration settings."""

    def __init__(self, settings: "AppSettings"):
        self.settings = settings

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        errors: List[str] = []
        warnings: List[str] = []

        # Level names can be written to the store directly, bypassing the setter
        level = self.settings.console_log_level
        if level.upper() not in VALID_LEVELS:
            errors.append(f"Unknown console log level: {level}")

        if self.settings.file_logging:
            log_path = Path(self.settings.log_file_path)
            if log_path.is_dir():
                errors.append(f"Log file path is a directory: {log_path}")
            elif log_path.parent.exists() and not log_path.parent.is_dir():
                errors.append(f"Log file parent is not a directory: {log_path.parent}")
            elif not log_path.parent.exists():
                warnings.append(f"Log directory will be created: {log_path.parent}")
        elif not self.settings.console_logging:
            warnings.append("Both console and file logging are disabled")

        result = ValidationResult(errors=errors, warnings=warnings)
        if not result.is_valid:
            logger.warning(f"Settings validation failed: {result.summary()}")
        return result
