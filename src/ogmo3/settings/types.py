"""
Settings types for ogmo3: the stored layout version, the settings error and
the outcome of a validation pass.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from ..common.errors import OgmoError


class ConfigVersion(Enum):
    """Layout version stamped into the settings store as ``app/version``."""
    V1_0 = "1.0"
    CURRENT = V1_0


class ConfigError(OgmoError):
    """Raised when a settings profile cannot be opened."""
    pass


@dataclass
class ValidationResult:
    """Problems found by `SettingsValidator`.

    Errors make the settings unusable; warnings are reported but harmless.
    """
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def summary(self) -> str:
        """One-line description for logs."""
        if not self.errors and not self.warnings:
            return "settings OK"
        parts = [f"error: {e}" for e in self.errors]
        parts += [f"warning: {w}" for w in self.warnings]
        return "; ".join(parts)
