"""
Raw tile and grid storage for level layers.

A tile or grid layer stores its cells in one of six shapes. The field name
decides which: ``data``/``data2D`` hold tileset indices, ``dataCoords``/
``dataCoords2D`` hold [column, row] tileset coordinates, and ``grid``/
``grid2D`` hold strings. The ``2D`` variants are arrays of rows.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Sequence

from ..common.errors import TypeMismatch
from ..common.fields import as_int, as_list_of, as_str, field_path
from ..common.matcher import ShapeCandidate, array_of_depth, match_shape
from ..common.types import ArrayMode, ExportMode


class StorageKind(Enum):
    """The six on-disk storage shapes.

    Each member records its JSON field name, its nesting depth and the mode
    flags the editor writes beside it (grid storage has no export mode).
    """

    DATA = ("data", 1, ExportMode.IDS, ArrayMode.ONE)
    DATA_2D = ("data2D", 2, ExportMode.IDS, ArrayMode.TWO)
    DATA_COORDS = ("dataCoords", 2, ExportMode.COORDS, ArrayMode.ONE)
    DATA_COORDS_2D = ("dataCoords2D", 3, ExportMode.COORDS, ArrayMode.TWO)
    GRID = ("grid", 1, None, ArrayMode.ONE)
    GRID_2D = ("grid2D", 2, None, ArrayMode.TWO)

    def __init__(
        self,
        field_name: str,
        depth: int,
        export_mode: Optional[ExportMode],
        array_mode: ArrayMode,
    ):
        self.field_name = field_name
        self.depth = depth
        self.export_mode = export_mode
        self.array_mode = array_mode

    @property
    def is_2d(self) -> bool:
        """True for storages laid out as an array of rows."""
        return self.array_mode == ArrayMode.TWO


TILE_ID_KINDS = (StorageKind.DATA, StorageKind.DATA_2D)
TILE_COORD_KINDS = (StorageKind.DATA_COORDS, StorageKind.DATA_COORDS_2D)
GRID_KINDS = (StorageKind.GRID, StorageKind.GRID_2D)


@dataclass
class LayerStorage:
    """Cell data of a tile, tile-coords or grid layer, in its on-disk shape.

    ``values`` keeps the document layout: a flat list for the 1D kinds and a
    list of rows for the 2D kinds. Tile ids are ints (-1 = empty), tile
    coordinates are lists of ints ([-1] = empty) and grid cells are strings.
    """
    kind: StorageKind
    values: list[Any]

    @property
    def field_name(self) -> str:
        return self.kind.field_name

    def cell_count(self) -> int:
        """Number of cells actually stored (may differ from the layer's declared size)."""
        if self.kind.is_2d:
            return sum(len(row) for row in self.values)
        return len(self.values)


# =============================================================================
# Decoding
# =============================================================================

def _coords(value: Any, path: str) -> list[int]:
    coords = as_list_of(value, path, as_int)
    # [-1] and [-1, -1] both mark an empty cell
    if len(coords) != 2 and coords[:1] != [-1]:
        raise TypeMismatch("[column, row] pair or [-1]", f"array of length {len(coords)}", path)
    return coords


_CELL_DECODERS: dict[StorageKind, Callable[[Any, str], Any]] = {
    StorageKind.DATA: as_int,
    StorageKind.DATA_2D: as_int,
    StorageKind.DATA_COORDS: _coords,
    StorageKind.DATA_COORDS_2D: _coords,
    StorageKind.GRID: as_str,
    StorageKind.GRID_2D: as_str,
}


def _decode_kind(kind: StorageKind) -> Callable[[dict[str, Any], str], LayerStorage]:
    cell = _CELL_DECODERS[kind]

    def decode(data: dict[str, Any], path: str) -> LayerStorage:
        raw = data[kind.field_name]
        values_path = field_path(path, kind.field_name)
        if kind.is_2d:
            values: list[Any] = [
                as_list_of(row, field_path(values_path, y), cell)
                for y, row in enumerate(raw)
            ]
        else:
            values = as_list_of(raw, values_path, cell)
        return LayerStorage(kind=kind, values=values)

    return decode


def storage_candidate(kind: StorageKind) -> ShapeCandidate[LayerStorage]:
    """Shape candidate recognising one storage kind by its field name and nesting."""
    return ShapeCandidate(
        name=kind.field_name,
        signature={kind.field_name: array_of_depth(kind.depth)},
        decode=_decode_kind(kind),
    )


_CANDIDATES = {kind: storage_candidate(kind) for kind in StorageKind}


def decode_storage(
    data: dict[str, Any], kinds: Sequence[StorageKind], path: str = ""
) -> LayerStorage:
    """Find and decode the storage field of a layer object.

    Kinds are tried in the given order; the first present field with the
    right nesting wins.

    Raises:
        NoMatchingVariant: If none of the storage fields is present
        TypeMismatch: If a cell holds the wrong JSON type
    """
    return match_shape(data, [_CANDIDATES[kind] for kind in kinds], "layer storage", path)
