"""
Tile and grid unpacking.

Turns any of the six storage shapes into one lazy, row-major sequence of
cell records carrying both the grid position and the pixel position of each
cell. Coordinates are computed from the layer's ``gridCellsX``,
``gridCellWidth`` and ``gridCellHeight``:

    flat storage:   grid = (i % gridCellsX, i // gridCellsX)
    nested storage: grid = (x, y) from (inner index, outer index)
    pixel = (grid.x * gridCellWidth, grid.y * gridCellHeight)

The data length is authoritative. Declared cell counts are not checked
against it, so a short array simply yields fewer cells.
"""

from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterator, Optional, TypeVar, Union

from ..common.errors import InvalidLayerGeometry
from ..common.types import ExportMode, Vec2
from .storage import LayerStorage

EMPTY_TILE = -1
"""Tile id (and first tile coordinate) marking an empty cell."""

EMPTY_GRID_CELL = "0"
"""Grid value the editor uses for empty cells by default."""


@dataclass(frozen=True)
class CellGeometry:
    """Layer attributes needed to place cells."""
    cells_x: int
    cell_width: int
    cell_height: int

    def position(self, grid_x: int, grid_y: int) -> tuple[Vec2[int], Vec2[int]]:
        """Return (grid position, pixel position) of a cell."""
        return (
            Vec2(grid_x, grid_y),
            Vec2(grid_x * self.cell_width, grid_y * self.cell_height),
        )


# =============================================================================
# Cell records
# =============================================================================

@dataclass(frozen=True)
class Tile:
    """An individual tile unpacked from an ID tile layer.

    Attributes:
        id: Index of the tile in the tileset, None if the cell is empty
        grid_position: Cell position in grid coordinates
        pixel_position: Cell position in pixels
    """
    id: Optional[int]
    grid_position: Vec2[int]
    pixel_position: Vec2[int]


@dataclass(frozen=True)
class TileCoords:
    """An individual tile unpacked from a coordinate tile layer.

    ``grid_coords``/``pixel_coords`` locate the source tile inside the
    tileset image; ``grid_position``/``pixel_position`` locate the
    destination cell inside the level. Both source fields are None for empty
    cells.
    """
    grid_coords: Optional[Vec2[int]]
    pixel_coords: Optional[Vec2[int]]
    grid_position: Vec2[int]
    pixel_position: Vec2[int]


@dataclass(frozen=True)
class GridCell:
    """An individual cell unpacked from a grid layer.

    Empty cells are still yielded; `is_empty` compares against the editor's
    default empty value.
    """
    value: str
    grid_position: Vec2[int]
    pixel_position: Vec2[int]

    @property
    def is_empty(self) -> bool:
        return self.value == EMPTY_GRID_CELL


Cell = Union[Tile, TileCoords, GridCell]
C = TypeVar("C", Tile, TileCoords, GridCell)


# =============================================================================
# Builders (raw value + position -> record)
# =============================================================================

def _build_tile(raw: int, grid: Vec2[int], pixel: Vec2[int], geometry: CellGeometry) -> Tile:
    return Tile(
        id=None if raw == EMPTY_TILE else raw,
        grid_position=grid,
        pixel_position=pixel,
    )


def _build_tile_coords(
    raw: list[int], grid: Vec2[int], pixel: Vec2[int], geometry: CellGeometry
) -> TileCoords:
    if not raw or raw[0] == EMPTY_TILE:
        return TileCoords(None, None, grid, pixel)
    u, v = raw[0], raw[1]
    return TileCoords(
        grid_coords=Vec2(u, v),
        pixel_coords=Vec2(u * geometry.cell_width, v * geometry.cell_height),
        grid_position=grid,
        pixel_position=pixel,
    )


def _build_grid_cell(raw: str, grid: Vec2[int], pixel: Vec2[int], geometry: CellGeometry) -> GridCell:
    return GridCell(value=raw, grid_position=grid, pixel_position=pixel)


Builder = Callable[[Any, Vec2[int], Vec2[int], CellGeometry], Any]


def _builder_for(storage: LayerStorage) -> Builder:
    export_mode = storage.kind.export_mode
    if export_mode is None:
        return _build_grid_cell
    if export_mode == ExportMode.COORDS:
        return _build_tile_coords
    return _build_tile


# =============================================================================
# Walkers (storage layout -> raw value + position)
# =============================================================================

def _walk_flat(values: list[Any], geometry: CellGeometry) -> Iterator[tuple[Any, int, int]]:
    if values and geometry.cells_x <= 0:
        raise InvalidLayerGeometry("gridCellsX", geometry.cells_x)
    for i, raw in enumerate(values):
        yield raw, i % geometry.cells_x, i // geometry.cells_x


def _walk_nested(rows: list[list[Any]], geometry: CellGeometry) -> Iterator[tuple[Any, int, int]]:
    for y, row in enumerate(rows):
        for x, raw in enumerate(row):
            yield raw, x, y


class CellSource(Generic[C]):
    """Lazy, restartable sequence of unpacked cells.

    Every iteration starts from the first cell; nothing is cached between
    passes.
    """

    def __init__(self, storage: LayerStorage, geometry: CellGeometry):
        self.storage = storage
        self.geometry = geometry

    def __iter__(self) -> Iterator[C]:
        walk = _walk_nested if self.storage.kind.is_2d else _walk_flat
        build = _builder_for(self.storage)
        geometry = self.geometry
        for raw, grid_x, grid_y in walk(self.storage.values, geometry):
            grid, pixel = geometry.position(grid_x, grid_y)
            yield build(raw, grid, pixel, geometry)

    def __len__(self) -> int:
        return self.storage.cell_count()

    def __repr__(self) -> str:
        return f"CellSource(kind={self.storage.kind.name}, cells={len(self)})"


def unpack(storage: LayerStorage, geometry: CellGeometry) -> CellSource[Any]:
    """Unpack any storage shape into a sequence of cell records."""
    return CellSource(storage, geometry)
