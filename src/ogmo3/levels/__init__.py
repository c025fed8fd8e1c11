"""
Ogmo level documents.

Provides the level model, the layer variants recognised by shape, and the
tile/grid unpacking that turns raw layer storage into positioned cells.
"""

from .models import (
    Level,
    Layer,
    TileLayer,
    TileCoordsLayer,
    GridLayer,
    EntityLayer,
    DecalLayer,
    Entity,
    Decal,
)
from .storage import (
    StorageKind,
    LayerStorage,
    TILE_ID_KINDS,
    TILE_COORD_KINDS,
    GRID_KINDS,
    decode_storage,
)
from .unpack import (
    CellGeometry,
    CellSource,
    Tile,
    TileCoords,
    GridCell,
    EMPTY_TILE,
    EMPTY_GRID_CELL,
    unpack,
)
from .encoder import EncodedStorage, encode_storage

__all__ = [
    # Level model
    'Level',
    'Layer',
    'TileLayer',
    'TileCoordsLayer',
    'GridLayer',
    'EntityLayer',
    'DecalLayer',
    'Entity',
    'Decal',

    # Storage
    'StorageKind',
    'LayerStorage',
    'TILE_ID_KINDS',
    'TILE_COORD_KINDS',
    'GRID_KINDS',
    'decode_storage',

    # Unpacking
    'CellGeometry',
    'CellSource',
    'Tile',
    'TileCoords',
    'GridCell',
    'EMPTY_TILE',
    'EMPTY_GRID_CELL',
    'unpack',

    # Encoding
    'EncodedStorage',
    'encode_storage',
]
