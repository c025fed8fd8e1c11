"""
ogmo3: typed access to Ogmo Editor 3 projects and levels

Parses project (``*.ogmo``) and level (``*.json``) documents into dataclass
models, unpacks tile and grid layers into positioned cells, and writes the
models back in the layout the editor produces.
"""

__version__ = "0.1.0"
__author__ = "ogmo3 Contributors"

# Document entry points
from .documents import (
    OgmoDocumentService,
    load_level,
    load_project,
    level_from_json,
    project_from_json,
    level_to_json,
    project_to_json,
    save_level,
    save_project,
)
from .utils.logging_config import setup_logging

# Main data models
from .levels import (
    Level, Layer, TileLayer, TileCoordsLayer, GridLayer, EntityLayer,
    DecalLayer, Entity, Decal, Tile, TileCoords, GridCell,
)
from .projects import (
    Project, LayerTemplate, ValueTemplate, EntityTemplate, Tileset,
)
from .common import (
    Vec2, Value, ExportMode, ArrayMode,
    OgmoError, IoFailure, JsonSyntaxError, DecodeError, NoMatchingVariant,
    UnknownVariantTag, MissingRequiredField, TypeMismatch, InvalidLayerGeometry,
    EncodeError,
    TilesetImageError,
)

__all__ = [
    # Documents
    'OgmoDocumentService',
    'load_level',
    'load_project',
    'level_from_json',
    'project_from_json',
    'level_to_json',
    'project_to_json',
    'save_level',
    'save_project',

    # Logging
    'setup_logging',

    # Levels
    'Level',
    'Layer',
    'TileLayer',
    'TileCoordsLayer',
    'GridLayer',
    'EntityLayer',
    'DecalLayer',
    'Entity',
    'Decal',
    'Tile',
    'TileCoords',
    'GridCell',

    # Projects
    'Project',
    'LayerTemplate',
    'ValueTemplate',
    'EntityTemplate',
    'Tileset',

    # Primitives
    'Vec2',
    'Value',
    'ExportMode',
    'ArrayMode',

    # Errors
    'OgmoError',
    'IoFailure',
    'JsonSyntaxError',
    'DecodeError',
    'NoMatchingVariant',
    'UnknownVariantTag',
    'MissingRequiredField',
    'TypeMismatch',
    'InvalidLayerGeometry',
    'EncodeError',
    'TilesetImageError',
]
