"""
Data models for Ogmo levels.

A level is a list of layer instances. Layers carry no type tag in the
document, so `Layer.from_dict` recognises each one by its fields (see
`_LAYER_SHAPES` for the priority order). Models are plain dataclasses with
``from_dict``/``to_dict`` converters over the generic JSON value tree; no
file-system logic lives here.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional, TypeVar

from ..common.fields import (
    as_list_of,
    as_object,
    read,
    read_float,
    read_int,
    read_optional,
    read_str,
    require,
    as_bool,
    as_float,
    as_int,
    as_str,
)
from ..common.matcher import ShapeCandidate, array_of_depth, is_array, is_string, match_shape
from ..common.types import (
    ArrayMode,
    ExportMode,
    JsonObject,
    Value,
    Vec2,
    decode_values,
    encode_values,
    json_number,
)
from .encoder import encode_storage, omit_none
from .storage import (
    GRID_KINDS,
    TILE_COORD_KINDS,
    TILE_ID_KINDS,
    LayerStorage,
    StorageKind,
    decode_storage,
)
from .unpack import CellGeometry, CellSource, GridCell, Tile, TileCoords, unpack

L = TypeVar("L", bound="Layer")


def _optional_number(value: Optional[float]) -> Optional[float | int]:
    return None if value is None else json_number(value)


# =============================================================================
# Layer contents
# =============================================================================

@dataclass
class Entity:
    """An entity instance.

    Optional attributes are only present when the entity's template enabled
    the matching feature (resizing, origin, rotation, flipping, nodes,
    custom values). None means "not present in the document".
    """
    name: str
    export_id: str
    x: float
    y: float
    id: Optional[int] = None
    width: Optional[float] = None
    height: Optional[float] = None
    origin_x: Optional[float] = None
    origin_y: Optional[float] = None
    rotation: Optional[float] = None
    flipped_x: Optional[bool] = None
    flipped_y: Optional[bool] = None
    nodes: Optional[list[Vec2[float]]] = None
    values: Optional[dict[str, Value]] = None

    @classmethod
    def from_dict(cls, data: Any, path: str = "") -> "Entity":
        """Create Entity from JSON dict.

        Args:
            data: Raw JSON dict
            path: Field path used in error messages

        Returns:
            Entity instance
        """
        obj = as_object(data, path)
        return cls(
            name=read_str(obj, "name", path),
            export_id=read_str(obj, "_eid", path),
            x=read_float(obj, "x", path),
            y=read_float(obj, "y", path),
            id=read_optional(obj, "id", path, as_int),
            width=read_optional(obj, "width", path, as_float),
            height=read_optional(obj, "height", path, as_float),
            origin_x=read_optional(obj, "originX", path, as_float),
            origin_y=read_optional(obj, "originY", path, as_float),
            rotation=read_optional(obj, "rotation", path, as_float),
            flipped_x=read_optional(obj, "flippedX", path, as_bool),
            flipped_y=read_optional(obj, "flippedY", path, as_bool),
            nodes=read_optional(
                obj, "nodes", path, lambda v, p: as_list_of(v, p, Vec2.from_dict)
            ),
            values=read_optional(obj, "values", path, decode_values),
        )

    def to_dict(self) -> JsonObject:
        """Convert to JSON dict, omitting absent optional attributes."""
        return omit_none([
            ("name", self.name),
            ("id", self.id),
            ("_eid", self.export_id),
            ("x", json_number(self.x)),
            ("y", json_number(self.y)),
            ("width", _optional_number(self.width)),
            ("height", _optional_number(self.height)),
            ("originX", _optional_number(self.origin_x)),
            ("originY", _optional_number(self.origin_y)),
            ("rotation", _optional_number(self.rotation)),
            ("flippedX", self.flipped_x),
            ("flippedY", self.flipped_y),
            ("nodes", None if self.nodes is None else [node.to_dict() for node in self.nodes]),
            ("values", None if self.values is None else encode_values(self.values)),
        ])


@dataclass
class Decal:
    """A decal instance: a freely placed image not bound to the grid.

    ``values`` is None for documents written before decals gained custom
    values; use `custom_values` to read it as a mapping either way.
    """
    x: float
    y: float
    texture: str
    rotation: Optional[float] = None
    scale_x: Optional[float] = None
    scale_y: Optional[float] = None
    values: Optional[dict[str, Value]] = None

    @property
    def custom_values(self) -> dict[str, Value]:
        return self.values if self.values is not None else {}

    @classmethod
    def from_dict(cls, data: Any, path: str = "") -> "Decal":
        obj = as_object(data, path)
        return cls(
            x=read_float(obj, "x", path),
            y=read_float(obj, "y", path),
            texture=read_str(obj, "texture", path),
            rotation=read_optional(obj, "rotation", path, as_float),
            scale_x=read_optional(obj, "scaleX", path, as_float),
            scale_y=read_optional(obj, "scaleY", path, as_float),
            values=read_optional(obj, "values", path, decode_values),
        )

    def to_dict(self) -> JsonObject:
        return omit_none([
            ("x", json_number(self.x)),
            ("y", json_number(self.y)),
            ("texture", self.texture),
            ("rotation", _optional_number(self.rotation)),
            ("scaleX", _optional_number(self.scale_x)),
            ("scaleY", _optional_number(self.scale_y)),
            ("values", None if self.values is None else encode_values(self.values)),
        ])


# =============================================================================
# Layers
# =============================================================================

@dataclass
class Layer(ABC):
    """Attributes shared by every layer instance.

    Attributes:
        name: Layer name (matches a layer template in the project)
        export_id: Unique export id of the layer (``_eid``)
        offset_x: Layer offset on the X axis
        offset_y: Layer offset on the Y axis
        grid_cell_width: Width of one grid cell in pixels
        grid_cell_height: Height of one grid cell in pixels
        grid_cells_x: Number of cells on the X axis
        grid_cells_y: Number of cells on the Y axis
    """
    name: str
    export_id: str
    offset_x: float
    offset_y: float
    grid_cell_width: int
    grid_cell_height: int
    grid_cells_x: int
    grid_cells_y: int

    kind_name: ClassVar[str] = "layer"

    @classmethod
    def from_dict(cls: type[L], data: Any, path: str = "") -> L:
        """Decode a layer object, recognising its variant by shape.

        Called on `Layer` this accepts any variant; called on a subclass it
        only accepts that subclass's shapes.

        Raises:
            NoMatchingVariant: If the object matches no layer shape
            MissingRequiredField: If a shared attribute is missing
            TypeMismatch: If a field holds the wrong JSON type
        """
        candidates = [
            candidate for layer_cls, candidate in _LAYER_SHAPES if issubclass(layer_cls, cls)
        ]
        return match_shape(data, candidates, cls.kind_name, path)

    @staticmethod
    def _read_common(data: dict[str, Any], path: str) -> dict[str, Any]:
        return {
            "name": read_str(data, "name", path),
            "export_id": read_str(data, "_eid", path),
            "offset_x": read_float(data, "offsetX", path),
            "offset_y": read_float(data, "offsetY", path),
            "grid_cell_width": read_int(data, "gridCellWidth", path),
            "grid_cell_height": read_int(data, "gridCellHeight", path),
            "grid_cells_x": read_int(data, "gridCellsX", path),
            "grid_cells_y": read_int(data, "gridCellsY", path),
        }

    def _common_dict(self) -> JsonObject:
        return {
            "name": self.name,
            "_eid": self.export_id,
            "offsetX": json_number(self.offset_x),
            "offsetY": json_number(self.offset_y),
            "gridCellWidth": self.grid_cell_width,
            "gridCellHeight": self.grid_cell_height,
            "gridCellsX": self.grid_cells_x,
            "gridCellsY": self.grid_cells_y,
        }

    @property
    def geometry(self) -> CellGeometry:
        return CellGeometry(self.grid_cells_x, self.grid_cell_width, self.grid_cell_height)

    @abstractmethod
    def to_dict(self) -> JsonObject:
        """Convert to the JSON object the editor would write."""


@dataclass
class _StorageLayer(Layer):
    """Layer whose cells live in a `LayerStorage`."""
    data: LayerStorage

    storage_kinds: ClassVar[tuple[StorageKind, ...]] = ()

    def __post_init__(self) -> None:
        """Validate that the storage kind fits this layer type."""
        if self.data.kind not in self.storage_kinds:
            raise ValueError(
                f"{self.__class__.__name__} cannot hold {self.data.kind.field_name!r} storage"
            )

    @property
    def export_mode(self) -> Optional[ExportMode]:
        return self.data.kind.export_mode

    @property
    def array_mode(self) -> ArrayMode:
        return self.data.kind.array_mode


@dataclass
class TileLayer(_StorageLayer):
    """A tile layer storing tileset indices (``data`` or ``data2D``)."""
    tileset: str

    kind_name: ClassVar[str] = "tile layer"
    storage_kinds: ClassVar[tuple[StorageKind, ...]] = TILE_ID_KINDS

    @classmethod
    def _decode(cls, data: dict[str, Any], path: str) -> "TileLayer":
        return cls(
            **cls._read_common(data, path),
            data=decode_storage(data, TILE_ID_KINDS, path),
            tileset=read_str(data, "tileset", path),
        )

    def unpack(self) -> CellSource[Tile]:
        """Unpack the tile data; empty cells have ``id`` None."""
        return unpack(self.data, self.geometry)

    def to_dict(self) -> JsonObject:
        return {
            **self._common_dict(),
            "tileset": self.tileset,
            **encode_storage(self.data).fields(),
        }


@dataclass
class TileCoordsLayer(_StorageLayer):
    """A tile layer storing tileset coordinates (``dataCoords`` or ``dataCoords2D``)."""
    tileset: str

    kind_name: ClassVar[str] = "tile coords layer"
    storage_kinds: ClassVar[tuple[StorageKind, ...]] = TILE_COORD_KINDS

    @classmethod
    def _decode(cls, data: dict[str, Any], path: str) -> "TileCoordsLayer":
        return cls(
            **cls._read_common(data, path),
            data=decode_storage(data, TILE_COORD_KINDS, path),
            tileset=read_str(data, "tileset", path),
        )

    def unpack(self) -> CellSource[TileCoords]:
        """Unpack the tile data; empty cells have no source coordinates."""
        return unpack(self.data, self.geometry)

    def to_dict(self) -> JsonObject:
        return {
            **self._common_dict(),
            "tileset": self.tileset,
            **encode_storage(self.data).fields(),
        }


@dataclass
class GridLayer(_StorageLayer):
    """A grid layer storing strings (``grid`` or ``grid2D``); "0" means empty."""

    kind_name: ClassVar[str] = "grid layer"
    storage_kinds: ClassVar[tuple[StorageKind, ...]] = GRID_KINDS

    @classmethod
    def _decode(cls, data: dict[str, Any], path: str) -> "GridLayer":
        return cls(
            **cls._read_common(data, path),
            data=decode_storage(data, GRID_KINDS, path),
        )

    def unpack(self) -> CellSource[GridCell]:
        """Unpack the grid data. Every cell is yielded, empty ones included."""
        return unpack(self.data, self.geometry)

    def to_dict(self) -> JsonObject:
        return {**self._common_dict(), **encode_storage(self.data).fields()}


@dataclass
class EntityLayer(Layer):
    """A layer of entity instances."""
    entities: list[Entity]

    kind_name: ClassVar[str] = "entity layer"

    @classmethod
    def _decode(cls, data: dict[str, Any], path: str) -> "EntityLayer":
        return cls(
            **cls._read_common(data, path),
            entities=read(data, "entities", path, lambda v, p: as_list_of(v, p, Entity.from_dict)),
        )

    def to_dict(self) -> JsonObject:
        return {
            **self._common_dict(),
            "entities": [entity.to_dict() for entity in self.entities],
        }


@dataclass
class DecalLayer(Layer):
    """A layer of decal instances.

    ``folder`` is the decal image directory relative to the project.
    """
    decals: list[Decal]
    folder: Optional[str] = None

    kind_name: ClassVar[str] = "decal layer"

    @classmethod
    def _decode(cls, data: dict[str, Any], path: str) -> "DecalLayer":
        return cls(
            **cls._read_common(data, path),
            decals=read(data, "decals", path, lambda v, p: as_list_of(v, p, Decal.from_dict)),
            folder=read_optional(data, "folder", path, as_str),
        )

    def to_dict(self) -> JsonObject:
        out = {
            **self._common_dict(),
            "decals": [decal.to_dict() for decal in self.decals],
        }
        if self.folder is not None:
            out["folder"] = self.folder
        return out


def _storage_shape(
    name: str, kind: StorageKind, decode: Any, needs_tileset: bool
) -> ShapeCandidate[Layer]:
    signature: dict[str, Any] = {kind.field_name: array_of_depth(kind.depth)}
    if needs_tileset:
        signature["tileset"] = is_string
    return ShapeCandidate(name, signature, decode)


# Priority order: tile ids, tile coords, grid, entity, decal; flat before 2D.
_LAYER_SHAPES: list[tuple[type[Layer], ShapeCandidate[Layer]]] = [
    *[(TileLayer, _storage_shape("tile", k, TileLayer._decode, True)) for k in TILE_ID_KINDS],
    *[
        (TileCoordsLayer, _storage_shape("tile coords", k, TileCoordsLayer._decode, True))
        for k in TILE_COORD_KINDS
    ],
    *[(GridLayer, _storage_shape("grid", k, GridLayer._decode, False)) for k in GRID_KINDS],
    (EntityLayer, ShapeCandidate("entity", {"entities": is_array}, EntityLayer._decode)),
    (DecalLayer, ShapeCandidate("decal", {"decals": is_array}, DecalLayer._decode)),
]


# =============================================================================
# Level
# =============================================================================

@dataclass
class Level:
    """An Ogmo level.

    Attributes:
        width: Level width in pixels
        height: Level height in pixels
        offset_x: Level offset on the X axis (useful for chunked levels)
        offset_y: Level offset on the Y axis
        layers: Layer instances, in document order
        values: Custom level values (empty when the document has none)
        ogmo_version: Editor version that wrote the level, if recorded
        values_recorded: Whether the document carried a ``values`` object,
            so an empty one is written back
    """
    width: float
    height: float
    offset_x: float
    offset_y: float
    layers: list[Layer] = field(default_factory=lambda: [])
    values: dict[str, Value] = field(default_factory=lambda: {})
    ogmo_version: Optional[str] = None
    values_recorded: bool = field(default=False, kw_only=True, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Any) -> "Level":
        """Create Level from a decoded level document.

        Raises:
            DecodeError: If any field fails to decode; no partial level is returned
        """
        obj = as_object(data)
        return cls(
            width=read_float(obj, "width"),
            height=read_float(obj, "height"),
            offset_x=read_float(obj, "offsetX"),
            offset_y=read_float(obj, "offsetY"),
            layers=as_list_of(require(obj, "layers"), "layers", Layer.from_dict),
            values=read_optional(obj, "values", "", decode_values) or {},
            ogmo_version=read_optional(obj, "ogmoVersion", "", as_str),
            values_recorded="values" in obj,
        )

    def to_dict(self) -> JsonObject:
        """Convert to a level document; an empty ``values`` is kept only if it was read."""
        out: JsonObject = {}
        if self.ogmo_version is not None:
            out["ogmoVersion"] = self.ogmo_version
        out.update({
            "width": json_number(self.width),
            "height": json_number(self.height),
            "offsetX": json_number(self.offset_x),
            "offsetY": json_number(self.offset_y),
            "layers": [layer.to_dict() for layer in self.layers],
        })
        if self.values or self.values_recorded:
            out["values"] = encode_values(self.values)
        return out

    def get_layer(self, name: str) -> Optional[Layer]:
        """Return the first layer with the given name, or None."""
        for layer in self.layers:
            if layer.name == name:
                return layer
        return None

    def layers_of_type(self, layer_type: type[L]) -> list[L]:
        """Return all layers of a given variant, in document order."""
        return [layer for layer in self.layers if isinstance(layer, layer_type)]
