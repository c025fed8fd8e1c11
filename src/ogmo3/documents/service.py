"""
Public entry points for reading and writing Ogmo documents.

The module-level functions are stateless. `OgmoDocumentService` binds the
same operations to `AppSettings` output options and logs failures before
re-raising them.
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Optional, TypeVar

from ..common.errors import OgmoError
from ..levels.models import Level
from ..projects.models import Project
from .loaders import parse_json, read_document, stringify, write_document

if TYPE_CHECKING:
    from ..settings import AppSettings

R = TypeVar("R")


# =============================================================================
# Stateless API
# =============================================================================

def level_from_json(text: str | bytes) -> Level:
    """Parse a level from document text.

    Raises:
        JsonSyntaxError: If the text is not well-formed JSON
        DecodeError: If the JSON is not a level document
    """
    return Level.from_dict(parse_json(text))


def project_from_json(text: str | bytes) -> Project:
    """Parse a project from document text.

    Raises:
        JsonSyntaxError: If the text is not well-formed JSON
        DecodeError: If the JSON is not a project document
    """
    return Project.from_dict(parse_json(text))


def level_to_json(level: Level, pretty: bool = True) -> str:
    """Serialize a level to document text."""
    return stringify(level.to_dict(), pretty).decode("utf-8")


def project_to_json(project: Project, pretty: bool = True) -> str:
    """Serialize a project to document text."""
    return stringify(project.to_dict(), pretty).decode("utf-8")


def load_level(path: str | Path) -> Level:
    """Read a level file (``*.json``).

    Raises:
        IoFailure: If the file cannot be read
        JsonSyntaxError: If the file is not well-formed JSON
        DecodeError: If the JSON is not a level document
    """
    return Level.from_dict(read_document(path))


def load_project(path: str | Path) -> Project:
    """Read a project file (``*.ogmo``).

    Raises:
        IoFailure: If the file cannot be read
        JsonSyntaxError: If the file is not well-formed JSON
        DecodeError: If the JSON is not a project document
    """
    return Project.from_dict(read_document(path))


def save_level(
    level: Level, path: str | Path, pretty: bool = True, trailing_newline: bool = False
) -> None:
    """Write a level file.

    Raises:
        EncodeError: If the level holds a value that cannot be serialized
        IoFailure: If the file cannot be written
    """
    write_document(level.to_dict(), path, pretty, trailing_newline)


def save_project(
    project: Project, path: str | Path, pretty: bool = True, trailing_newline: bool = False
) -> None:
    """Write a project file.

    Raises:
        EncodeError: If the project holds a value that cannot be serialized
        IoFailure: If the file cannot be written
    """
    write_document(project.to_dict(), path, pretty, trailing_newline)


# =============================================================================
# Settings-bound facade
# =============================================================================

class OgmoDocumentService:
    """Service for loading and saving Ogmo projects and levels.

    Output formatting (indentation, trailing newline) comes from the
    settings' output subsystem; without settings the editor-like defaults
    are used. Every failure is logged and then re-raised unchanged.
    """

    def __init__(self, settings: Optional["AppSettings"] = None):
        """Initialize the document service.

        Args:
            settings: App settings supplying output options.
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.settings = settings
        self.logger.debug(
            f"OgmoDocumentService initialized (pretty={self.pretty_print}, "
            f"trailing_newline={self.trailing_newline})"
        )

    @property
    def pretty_print(self) -> bool:
        return self.settings.output.pretty_print if self.settings is not None else True

    @property
    def trailing_newline(self) -> bool:
        return self.settings.output.trailing_newline if self.settings is not None else False

    def _run(self, action: str, target: Any, operation: Callable[[], R]) -> R:
        try:
            return operation()
        except OgmoError as e:
            self.logger.error(f"Failed to {action} {target}: {e}")
            raise

    # === LOADING ===

    def load_level(self, path: str | Path) -> Level:
        """Read a level file, logging the outcome."""
        level = self._run("load level", path, lambda: load_level(path))
        self.logger.info(f"Loaded level {path}: {len(level.layers)} layers")
        return level

    def load_project(self, path: str | Path) -> Project:
        """Read a project file, logging the outcome."""
        project = self._run("load project", path, lambda: load_project(path))
        self.logger.info(
            f"Loaded project '{project.name}' from {path}: {len(project.layers)} layers, "
            f"{len(project.entities)} entities, {len(project.tilesets)} tilesets"
        )
        return project

    def level_from_json(self, text: str | bytes) -> Level:
        return self._run("parse level", "<string>", lambda: level_from_json(text))

    def project_from_json(self, text: str | bytes) -> Project:
        return self._run("parse project", "<string>", lambda: project_from_json(text))

    # === SAVING ===

    def level_to_json(self, level: Level) -> str:
        return self._run(
            "serialize level", "<string>", lambda: level_to_json(level, self.pretty_print)
        )

    def project_to_json(self, project: Project) -> str:
        return self._run(
            "serialize project",
            project.name,
            lambda: project_to_json(project, self.pretty_print),
        )

    def save_level(self, level: Level, path: str | Path) -> None:
        """Write a level file using the configured output options."""
        self._run(
            "save level",
            path,
            lambda: save_level(level, path, self.pretty_print, self.trailing_newline),
        )
        self.logger.info(f"Saved level to {path}")

    def save_project(self, project: Project, path: str | Path) -> None:
        """Write a project file using the configured output options."""
        self._run(
            "save project",
            path,
            lambda: save_project(project, path, self.pretty_print, self.trailing_newline),
        )
        self.logger.info(f"Saved project '{project.name}' to {path}")
