"""
Document output settings for ogmo3.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings


class OutputSettings:
    """Manages how saved documents are formatted."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def _get_bool(self, key: str, default: bool = False) -> bool:
        """Type-safe boolean retrieval from settings."""
        value = self.settings.value(key, default)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes")
        return bool(value) if value is not None else default

    @property
    def pretty_print(self) -> bool:
        """Whether saved documents are indented."""
        return self._get_bool("output/pretty_print", True)

    @pretty_print.setter
    def pretty_print(self, value: bool) -> None:
        self.settings.setValue("output/pretty_print", value)
        self.settings.sync()

    @property
    def trailing_newline(self) -> bool:
        """Whether saved documents end with a newline."""
        return self._get_bool("output/trailing_newline", False)

    @trailing_newline.setter
    def trailing_newline(self, value: bool) -> None:
        self.settings.setValue("output/trailing_newline", value)
        self.settings.sync()
