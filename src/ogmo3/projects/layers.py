"""
Layer templates: project-level configuration of each layer.

The editor tags layer templates with a lowercase ``definition`` ("tile",
"grid", "entity", "decal"). Templates without the tag are still accepted and
recognised by their fields, in the order tile, grid, entity, decal. Whether
the tag was present is remembered so the template is written back the same
way.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Callable, ClassVar, TypeVar

from ..common.errors import TypeMismatch
from ..common.fields import (
    as_int,
    as_list_of,
    as_object,
    as_str,
    field_path,
    read,
    read_bool,
    read_str,
    read_str_list,
)
from ..common.matcher import (
    ShapeCandidate,
    dispatch_tag,
    is_array,
    is_bool,
    is_number,
    is_object,
    is_string,
    match_shape,
)
from ..common.types import ArrayMode, ExportMode, JsonObject, Vec2
from .values import ValueTemplate

LT = TypeVar("LT", bound="LayerTemplate")
E = TypeVar("E", bound=IntEnum)


def enum_reader(enum_cls: type[E]) -> Callable[[Any, str], E]:
    """Build a converter from a JSON integer to an IntEnum member."""

    def convert(value: Any, path: str) -> E:
        number = as_int(value, path)
        try:
            return enum_cls(number)
        except ValueError:
            allowed = ", ".join(str(int(member)) for member in enum_cls)
            raise TypeMismatch(f"{enum_cls.__name__} ({allowed})", str(number), path) from None

    return convert


_read_export_mode = enum_reader(ExportMode)
_read_array_mode = enum_reader(ArrayMode)


def _read_legend(value: Any, path: str) -> dict[str, str]:
    return {key: as_str(item, field_path(path, key)) for key, item in as_object(value, path).items()}


@dataclass
class LayerTemplate(ABC):
    """Shared part of every layer template.

    Attributes:
        name: Layer name
        grid_size: Size of one grid cell
        export_id: Unique export id of the template (``exportID``)
        tagged: Whether the document carried a ``definition`` tag
    """
    name: str
    grid_size: Vec2[int]
    export_id: str
    tagged: bool = field(default=True, kw_only=True, repr=False, compare=False)

    definition: ClassVar[str] = ""
    signature: ClassVar[dict[str, Callable[[Any], bool]]] = {}

    @classmethod
    def from_dict(cls: type[LT], data: Any, path: str = "") -> LT:
        """Decode a layer template, by tag when present and by shape otherwise.

        Raises:
            UnknownVariantTag: If the ``definition`` tag is not a layer type
            NoMatchingVariant: If an untagged template matches no shape
            DecodeError: If a field is missing or has the wrong type
        """
        types = [
            template_cls for template_cls in LAYER_TEMPLATE_TYPES if issubclass(template_cls, cls)
        ]
        if isinstance(data, dict) and "definition" in data:
            decoders = {template_cls.definition: template_cls._decode for template_cls in types}
            return dispatch_tag(data, "definition", decoders, "layer template", path)

        candidates = [
            ShapeCandidate(template_cls.definition, template_cls.signature, template_cls._decode)
            for template_cls in types
        ]
        return match_shape(data, candidates, "layer template", path)

    @classmethod
    def _decode(cls, data: dict[str, Any], path: str) -> "LayerTemplate":
        return cls(
            name=read_str(data, "name", path),
            grid_size=read(data, "gridSize", path, Vec2.int_from_dict),
            export_id=read_str(data, "exportID", path),
            tagged="definition" in data,
            **cls._read_payload(data, path),
        )

    @classmethod
    @abstractmethod
    def _read_payload(cls, data: dict[str, Any], path: str) -> dict[str, Any]:
        """Read variant-specific fields as constructor keyword arguments."""

    @abstractmethod
    def _payload(self) -> JsonObject:
        """Variant-specific fields in document form."""

    def to_dict(self) -> JsonObject:
        out: JsonObject = {}
        if self.tagged:
            out["definition"] = self.definition
        out.update({
            "name": self.name,
            "gridSize": self.grid_size.to_dict(),
            "exportID": self.export_id,
        })
        out.update(self._payload())
        return out


@dataclass
class TileLayerTemplate(LayerTemplate):
    """Tile layer configuration: how tiles are exported and the default tileset."""
    export_mode: ExportMode
    array_mode: ArrayMode
    default_tileset: str

    definition: ClassVar[str] = "tile"
    signature: ClassVar[dict[str, Callable[[Any], bool]]] = {
        "exportMode": is_number,
        "arrayMode": is_number,
        "defaultTileset": is_string,
    }

    @classmethod
    def _read_payload(cls, data: dict[str, Any], path: str) -> dict[str, Any]:
        return {
            "export_mode": read(data, "exportMode", path, _read_export_mode),
            "array_mode": read(data, "arrayMode", path, _read_array_mode),
            "default_tileset": read_str(data, "defaultTileset", path),
        }

    def _payload(self) -> JsonObject:
        return {
            "exportMode": int(self.export_mode),
            "arrayMode": int(self.array_mode),
            "defaultTileset": self.default_tileset,
        }


@dataclass
class GridLayerTemplate(LayerTemplate):
    """Grid layer configuration. ``legend`` maps cell values to display colors."""
    array_mode: ArrayMode
    legend: dict[str, str]

    definition: ClassVar[str] = "grid"
    signature: ClassVar[dict[str, Callable[[Any], bool]]] = {
        "arrayMode": is_number,
        "legend": is_object,
    }

    @classmethod
    def _read_payload(cls, data: dict[str, Any], path: str) -> dict[str, Any]:
        return {
            "array_mode": read(data, "arrayMode", path, _read_array_mode),
            "legend": read(data, "legend", path, _read_legend),
        }

    def _payload(self) -> JsonObject:
        return {"arrayMode": int(self.array_mode), "legend": dict(self.legend)}


@dataclass
class EntityLayerTemplate(LayerTemplate):
    """Entity layer configuration: tag filters for the entities it shows."""
    required_tags: list[str]
    excluded_tags: list[str]

    definition: ClassVar[str] = "entity"
    signature: ClassVar[dict[str, Callable[[Any], bool]]] = {
        "requiredTags": is_array,
        "excludedTags": is_array,
    }

    @classmethod
    def _read_payload(cls, data: dict[str, Any], path: str) -> dict[str, Any]:
        return {
            "required_tags": read_str_list(data, "requiredTags", path),
            "excluded_tags": read_str_list(data, "excludedTags", path),
        }

    def _payload(self) -> JsonObject:
        return {
            "requiredTags": list(self.required_tags),
            "excludedTags": list(self.excluded_tags),
        }


@dataclass
class DecalLayerTemplate(LayerTemplate):
    """Decal layer configuration.

    Attributes:
        folder: Directory searched for decal images, relative to the project
        include_image_sequence: Whether image sequences are offered as decals
        scaleable: Whether decals on this layer can be scaled
        rotatable: Whether decals on this layer can be rotated
        values: Custom value templates for decals on this layer
    """
    folder: str
    include_image_sequence: bool
    scaleable: bool
    rotatable: bool
    values: list[ValueTemplate]

    definition: ClassVar[str] = "decal"
    signature: ClassVar[dict[str, Callable[[Any], bool]]] = {
        "folder": is_string,
        "includeImageSequence": is_bool,
        "scaleable": is_bool,
        "rotatable": is_bool,
        "values": is_array,
    }

    @classmethod
    def _read_payload(cls, data: dict[str, Any], path: str) -> dict[str, Any]:
        return {
            "folder": read_str(data, "folder", path),
            "include_image_sequence": read_bool(data, "includeImageSequence", path),
            "scaleable": read_bool(data, "scaleable", path),
            "rotatable": read_bool(data, "rotatable", path),
            "values": read(
                data, "values", path, lambda v, p: as_list_of(v, p, ValueTemplate.from_dict)
            ),
        }

    def _payload(self) -> JsonObject:
        return {
            "folder": self.folder,
            "includeImageSequence": self.include_image_sequence,
            "scaleable": self.scaleable,
            "rotatable": self.rotatable,
            "values": [value.to_dict() for value in self.values],
        }


LAYER_TEMPLATE_TYPES: tuple[type[LayerTemplate], ...] = (
    TileLayerTemplate,
    GridLayerTemplate,
    EntityLayerTemplate,
    DecalLayerTemplate,
)
"""Layer template classes in shape-matching priority order."""
