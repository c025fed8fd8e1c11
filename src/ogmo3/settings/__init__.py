"""
Settings package for ogmo3.

This package provides a modular, type-safe configuration management system
using Qt's QSettings for cross-platform storage.

Usage:
    from ogmo3.settings import AppSettings, ValidationResult

    settings = AppSettings()
    result = settings.validate()
"""

from .core import AppSettings
from .types import ConfigVersion, ConfigError, ValidationResult
from .logging import LoggingSettings
from .output import OutputSettings

__all__ = [
    "AppSettings",
    "ConfigVersion",
    "ConfigError",
    "ValidationResult",
    "LoggingSettings",
    "OutputSettings",
]
