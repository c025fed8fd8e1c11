"""
Data models for Ogmo projects.

The project document (``*.ogmo``) holds the editor configuration: global
settings plus templates for level values, layers, entities and tilesets.
Fields are written back in the order the editor writes them.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, TypeVar

from ..common.fields import (
    as_bool,
    as_list_of,
    as_object,
    as_str,
    read,
    read_bool,
    read_float,
    read_int,
    read_optional,
    read_str,
    read_str_list,
)
from ..common.types import JsonObject, Vec2, json_number
from .layers import LayerTemplate
from .tilesets import Tileset
from .values import ValueTemplate

LT = TypeVar("LT", bound=LayerTemplate)


def _value_templates(value: Any, path: str) -> list[ValueTemplate]:
    return as_list_of(value, path, ValueTemplate.from_dict)


@dataclass
class Shape:
    """Outline used to draw an entity that has no texture."""
    label: str
    points: list[Vec2[float]]

    @classmethod
    def from_dict(cls, data: Any, path: str = "") -> "Shape":
        obj = as_object(data, path)
        return cls(
            label=read_str(obj, "label", path),
            points=read(obj, "points", path, lambda v, p: as_list_of(v, p, Vec2.from_dict)),
        )

    def to_dict(self) -> JsonObject:
        return {"label": self.label, "points": [point.to_dict() for point in self.points]}


@dataclass
class EntityTemplate:
    """An entity template.

    Attributes:
        export_id: Unique export id (``exportID``)
        name: Entity name; entity instances refer to it by this name
        limit: Maximum number of instances per level, 0 for no limit
        size: Default size
        origin: Origin point
        origin_anchored: Whether the entity is anchored to its origin
        shape: Outline drawn when there is no texture
        color: Icon color
        tile_x: Whether the icon tiles on the X axis
        tile_y: Whether the icon tiles on the Y axis
        tile_size: Size of one tiled icon
        resizeable_x: Whether instances can be resized horizontally
        resizeable_y: Whether instances can be resized vertically
        rotatable: Whether instances can be rotated
        rotation_degrees: Rotation snapping interval
        can_flip_x: Whether instances can be flipped horizontally
        can_flip_y: Whether instances can be flipped vertically
        can_set_color: Whether instances can override the color
        has_nodes: Whether instances carry nodes
        node_limit: Maximum number of nodes, 0 for no limit
        node_display: How nodes are drawn in the editor
        node_ghost: Whether ghosts are drawn at node positions
        tags: Entity tags
        values: Custom value templates
        texture: Texture path, when the entity has one
        texture_image: Texture as a base64 data URL, when the entity has one
    """
    export_id: str
    name: str
    limit: int
    size: Vec2[float]
    origin: Vec2[float]
    origin_anchored: bool
    shape: Shape
    color: str
    tile_x: bool
    tile_y: bool
    tile_size: Vec2[float]
    resizeable_x: bool
    resizeable_y: bool
    rotatable: bool
    rotation_degrees: float
    can_flip_x: bool
    can_flip_y: bool
    can_set_color: bool
    has_nodes: bool
    node_limit: int
    node_display: int
    node_ghost: bool
    tags: list[str] = field(default_factory=lambda: [])
    values: list[ValueTemplate] = field(default_factory=lambda: [])
    texture: Optional[str] = None
    texture_image: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any, path: str = "") -> "EntityTemplate":
        obj = as_object(data, path)
        return cls(
            export_id=read_str(obj, "exportID", path),
            name=read_str(obj, "name", path),
            limit=read_int(obj, "limit", path),
            size=read(obj, "size", path, Vec2.from_dict),
            origin=read(obj, "origin", path, Vec2.from_dict),
            origin_anchored=read_bool(obj, "originAnchored", path),
            shape=read(obj, "shape", path, Shape.from_dict),
            color=read_str(obj, "color", path),
            tile_x=read_bool(obj, "tileX", path),
            tile_y=read_bool(obj, "tileY", path),
            tile_size=read(obj, "tileSize", path, Vec2.from_dict),
            resizeable_x=read_bool(obj, "resizeableX", path),
            resizeable_y=read_bool(obj, "resizeableY", path),
            rotatable=read_bool(obj, "rotatable", path),
            rotation_degrees=read_float(obj, "rotationDegrees", path),
            can_flip_x=read_bool(obj, "canFlipX", path),
            can_flip_y=read_bool(obj, "canFlipY", path),
            can_set_color=read_bool(obj, "canSetColor", path),
            has_nodes=read_bool(obj, "hasNodes", path),
            node_limit=read_int(obj, "nodeLimit", path),
            node_display=read_int(obj, "nodeDisplay", path),
            node_ghost=read_bool(obj, "nodeGhost", path),
            tags=read_str_list(obj, "tags", path),
            values=read(obj, "values", path, _value_templates),
            texture=read_optional(obj, "texture", path, as_str),
            texture_image=read_optional(obj, "textureImage", path, as_str),
        )

    def to_dict(self) -> JsonObject:
        out: JsonObject = {
            "exportID": self.export_id,
            "name": self.name,
            "limit": self.limit,
            "size": self.size.to_dict(),
            "origin": self.origin.to_dict(),
            "originAnchored": self.origin_anchored,
            "shape": self.shape.to_dict(),
            "color": self.color,
            "tileX": self.tile_x,
            "tileY": self.tile_y,
            "tileSize": self.tile_size.to_dict(),
            "resizeableX": self.resizeable_x,
            "resizeableY": self.resizeable_y,
            "rotatable": self.rotatable,
            "rotationDegrees": json_number(self.rotation_degrees),
            "canFlipX": self.can_flip_x,
            "canFlipY": self.can_flip_y,
            "canSetColor": self.can_set_color,
            "hasNodes": self.has_nodes,
            "nodeLimit": self.node_limit,
            "nodeDisplay": self.node_display,
            "nodeGhost": self.node_ghost,
            "tags": list(self.tags),
            "values": [value.to_dict() for value in self.values],
        }
        if self.texture is not None:
            out["texture"] = self.texture
        if self.texture_image is not None:
            out["textureImage"] = self.texture_image
        return out


@dataclass
class Project:
    """An Ogmo project.

    Attributes:
        name: Project name
        level_paths: Directories searched for levels, relative to the project
        background_color: Editor background color
        grid_color: Editor grid color
        angles_radians: Whether angles are stored in radians (else degrees)
        directory_depth: How deep the editor searches ``level_paths``
        layer_grid_default_size: Default grid size of new layers
        level_default_size: Default size of new levels
        level_min_size: Smallest allowed level size
        level_max_size: Largest allowed level size
        level_values: Custom value templates for levels
        default_export_mode: File extension used for new levels (``.json``)
        entity_tags: Tags available to entity templates
        layers: Layer templates, in editor order
        entities: Entity templates
        tilesets: Tilesets
        ogmo_version: Editor version that wrote the project, if recorded
        compact_export: Whether levels are written without indentation, if recorded
        external_script: Path of the project's external script, if recorded
        play_command: Command used to launch the game, if recorded
    """
    name: str
    level_paths: list[str]
    background_color: str
    grid_color: str
    angles_radians: bool
    directory_depth: int
    layer_grid_default_size: Vec2[int]
    level_default_size: Vec2[int]
    level_min_size: Vec2[int]
    level_max_size: Vec2[int]
    level_values: list[ValueTemplate]
    default_export_mode: str
    entity_tags: list[str]
    layers: list[LayerTemplate]
    entities: list[EntityTemplate]
    tilesets: list[Tileset]
    ogmo_version: Optional[str] = None
    compact_export: Optional[bool] = None
    external_script: Optional[str] = None
    play_command: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Project":
        """Create Project from a decoded project document.

        Args:
            data: Document root as produced by the JSON parser

        Returns:
            Project instance

        Raises:
            DecodeError: If any field fails to decode; no partial project is returned
        """
        obj = as_object(data)
        return cls(
            name=read_str(obj, "name"),
            level_paths=read_str_list(obj, "levelPaths"),
            background_color=read_str(obj, "backgroundColor"),
            grid_color=read_str(obj, "gridColor"),
            angles_radians=read_bool(obj, "anglesRadians"),
            directory_depth=read_int(obj, "directoryDepth"),
            layer_grid_default_size=read(obj, "layerGridDefaultSize", "", Vec2.int_from_dict),
            level_default_size=read(obj, "levelDefaultSize", "", Vec2.int_from_dict),
            level_min_size=read(obj, "levelMinSize", "", Vec2.int_from_dict),
            level_max_size=read(obj, "levelMaxSize", "", Vec2.int_from_dict),
            level_values=read(obj, "levelValues", "", _value_templates),
            default_export_mode=read_str(obj, "defaultExportMode"),
            entity_tags=read_str_list(obj, "entityTags"),
            layers=read(obj, "layers", "", lambda v, p: as_list_of(v, p, LayerTemplate.from_dict)),
            entities=read(
                obj, "entities", "", lambda v, p: as_list_of(v, p, EntityTemplate.from_dict)
            ),
            tilesets=read(obj, "tilesets", "", lambda v, p: as_list_of(v, p, Tileset.from_dict)),
            ogmo_version=read_optional(obj, "ogmoVersion", "", as_str),
            compact_export=read_optional(obj, "compactExport", "", as_bool),
            external_script=read_optional(obj, "externalScript", "", as_str),
            play_command=read_optional(obj, "playCommand", "", as_str),
        )

    def to_dict(self) -> JsonObject:
        """Convert to a project document in the editor's field order."""
        out: JsonObject = {"name": self.name}
        if self.ogmo_version is not None:
            out["ogmoVersion"] = self.ogmo_version
        out.update({
            "levelPaths": list(self.level_paths),
            "backgroundColor": self.background_color,
            "gridColor": self.grid_color,
            "anglesRadians": self.angles_radians,
            "directoryDepth": self.directory_depth,
            "layerGridDefaultSize": self.layer_grid_default_size.to_dict(),
            "levelDefaultSize": self.level_default_size.to_dict(),
            "levelMinSize": self.level_min_size.to_dict(),
            "levelMaxSize": self.level_max_size.to_dict(),
            "levelValues": [value.to_dict() for value in self.level_values],
            "defaultExportMode": self.default_export_mode,
        })
        for key, value in (
            ("compactExport", self.compact_export),
            ("externalScript", self.external_script),
            ("playCommand", self.play_command),
        ):
            if value is not None:
                out[key] = value
        out.update({
            "entityTags": list(self.entity_tags),
            "layers": [layer.to_dict() for layer in self.layers],
            "entities": [entity.to_dict() for entity in self.entities],
            "tilesets": [tileset.to_dict() for tileset in self.tilesets],
        })
        return out

    def get_tileset(self, label: str) -> Optional[Tileset]:
        """Return the tileset with the given label, or None."""
        for tileset in self.tilesets:
            if tileset.label == label:
                return tileset
        return None

    def get_entity(self, name: str) -> Optional[EntityTemplate]:
        """Return the entity template with the given name, or None."""
        for entity in self.entities:
            if entity.name == name:
                return entity
        return None

    def get_layer(self, name: str) -> Optional[LayerTemplate]:
        """Return the layer template with the given name, or None."""
        for layer in self.layers:
            if layer.name == name:
                return layer
        return None

    def layers_of_type(self, template_type: type[LT]) -> list[LT]:
        """Return all layer templates of a given variant, in editor order."""
        return [layer for layer in self.layers if isinstance(layer, template_type)]
