"""
Reading and writing Ogmo documents.

Usage:
    from ogmo3.documents import load_project, load_level

    project = load_project("game.ogmo")
    level = load_level("levels/uno.json")
"""

from .loaders import parse_json, stringify, read_document, write_document
from .service import (
    OgmoDocumentService,
    level_from_json,
    project_from_json,
    level_to_json,
    project_to_json,
    load_level,
    load_project,
    save_level,
    save_project,
)

__all__ = [
    'OgmoDocumentService',
    'level_from_json',
    'project_from_json',
    'level_to_json',
    'project_to_json',
    'load_level',
    'load_project',
    'save_level',
    'save_project',
    'parse_json',
    'stringify',
    'read_document',
    'write_document',
]
