"""Tests for project decoding and tilesets."""

import inspect
from typing import Any, Callable

import pytest
from PIL import Image

from ogmo3.common import (
    ArrayMode,
    ExportMode,
    MissingRequiredField,
    NoMatchingVariant,
    TilesetImageError,
    TypeMismatch,
    UnknownVariantTag,
    Vec2,
)
from ogmo3.projects import (
    BooleanValueTemplate,
    ColorValueTemplate,
    DecalLayerTemplate,
    EntityLayerTemplate,
    FloatValueTemplate,
    GridLayerTemplate,
    IntegerValueTemplate,
    LayerTemplate,
    Project,
    StringValueTemplate,
    TileLayerTemplate,
    Tileset,
    ValueTemplate,
)


def _tile_template(**overrides: Any) -> dict[str, Any]:
    template: dict[str, Any] = {
        "definition": "tile",
        "name": "tiles",
        "gridSize": {"x": 16, "y": 16},
        "exportID": "1",
        "exportMode": 0,
        "arrayMode": 1,
        "defaultTileset": "terrain",
    }
    template.update(overrides)
    return template


def _tileset(**overrides: Any) -> Tileset:
    fields: dict[str, Any] = dict(
        label="terrain",
        path="terrain.png",
        image="",
        tile_width=16,
        tile_height=16,
        tile_separation_x=0,
        tile_separation_y=0,
    )
    fields.update(overrides)
    return Tileset(**fields)


class TestSampleProject:
    """Test decoding the sample project."""

    def test_settings(self, sample_project_data: dict[str, Any]) -> None:
        """Test global project settings."""
        project = Project.from_dict(sample_project_data)

        assert project.name == "Sample Project"
        assert project.ogmo_version == "3.4.0"
        assert project.level_paths == ["./levels"]
        assert project.angles_radians is True
        assert project.level_default_size == Vec2(320, 240)
        assert project.compact_export is False
        assert project.entity_tags == ["enemy", "pickup"]

    def test_level_values(self, sample_project_data: dict[str, Any]) -> None:
        """Test level value templates dispatch on their definition."""
        project = Project.from_dict(sample_project_data)

        title, gravity, secret = project.level_values
        assert isinstance(title, StringValueTemplate)
        assert title.display == 0
        assert title.trim_whitespace is True
        assert isinstance(gravity, FloatValueTemplate)
        assert gravity.defaults == pytest.approx(9.8)
        assert isinstance(secret, BooleanValueTemplate)
        assert secret.display is None

    def test_layer_templates(self, sample_project_data: dict[str, Any]) -> None:
        """Test tagged and untagged layer templates."""
        project = Project.from_dict(sample_project_data)

        assert [type(layer) for layer in project.layers] == [
            TileLayerTemplate,
            TileLayerTemplate,
            GridLayerTemplate,
            EntityLayerTemplate,
            DecalLayerTemplate,
        ]
        coords = project.layers[1]
        assert isinstance(coords, TileLayerTemplate)
        assert coords.export_mode is ExportMode.COORDS
        assert coords.array_mode is ArrayMode.TWO

        solids = project.get_layer("solids")
        assert isinstance(solids, GridLayerTemplate)
        assert solids.tagged is False
        assert solids.legend["1"] == "#000000ff"

        decals = project.layers_of_type(DecalLayerTemplate)[0]
        assert isinstance(decals.values[0], ColorValueTemplate)

    def test_entity_templates(self, sample_project_data: dict[str, Any]) -> None:
        """Test entity templates, with and without textures."""
        project = Project.from_dict(sample_project_data)

        player = project.get_entity("player")
        assert player is not None
        assert player.limit == 1
        assert player.shape.label == "Rectangle"
        assert len(player.shape.points) == 6
        assert player.texture is None
        assert isinstance(player.values[0], IntegerValueTemplate)

        patroller = project.get_entity("patroller")
        assert patroller is not None
        assert patroller.rotation_degrees == 22.5
        assert patroller.texture == "sprites/patroller.png"
        assert patroller.texture_image is not None

    def test_tilesets(self, sample_project_data: dict[str, Any]) -> None:
        """Test tilesets and lookup by label."""
        project = Project.from_dict(sample_project_data)

        props = project.get_tileset("props")
        assert props is not None
        assert props.tile_separation_x == 1
        assert props.tile_separation_y == 2
        assert project.get_tileset("nope") is None


class TestLayerTemplates:
    """Test layer template decoding."""

    def test_tagged(self) -> None:
        """Test dispatch on the definition tag."""
        template = LayerTemplate.from_dict(_tile_template())
        assert isinstance(template, TileLayerTemplate)
        assert template.tagged is True
        assert template.grid_size == Vec2(16, 16)

    def test_untagged_shapes(self) -> None:
        """Test untagged templates are recognised by their fields."""
        entity = LayerTemplate.from_dict({
            "name": "things", "gridSize": {"x": 8, "y": 8}, "exportID": "2",
            "requiredTags": ["a"], "excludedTags": [],
        })
        assert isinstance(entity, EntityLayerTemplate)
        assert entity.tagged is False
        assert "definition" not in entity.to_dict()

    def test_untagged_priority(self) -> None:
        """Test tile wins over grid when both signatures are present."""
        data = _tile_template(legend={})
        del data["definition"]
        assert isinstance(LayerTemplate.from_dict(data), TileLayerTemplate)

    def test_untagged_no_match(self) -> None:
        """Test untagged templates without a variant payload."""
        with pytest.raises(NoMatchingVariant):
            LayerTemplate.from_dict({"name": "x", "gridSize": {"x": 8, "y": 8}, "exportID": "3"})

    def test_unknown_tag(self) -> None:
        """Test unknown layer definitions."""
        with pytest.raises(UnknownVariantTag) as excinfo:
            LayerTemplate.from_dict(_tile_template(definition="tilemap"), "layers[0]")
        assert excinfo.value.path == "layers[0].definition"
        assert excinfo.value.known == ["tile", "grid", "entity", "decal"]

    def test_bad_export_mode(self) -> None:
        """Test mode flags outside the enum."""
        with pytest.raises(TypeMismatch) as excinfo:
            LayerTemplate.from_dict(_tile_template(exportMode=2))
        assert excinfo.value.path == "exportMode"

    def test_missing_variant_field(self) -> None:
        """Test tagged templates still need their variant fields."""
        data = _tile_template()
        del data["defaultTileset"]
        with pytest.raises(MissingRequiredField) as excinfo:
            LayerTemplate.from_dict(data)
        assert excinfo.value.field_name == "defaultTileset"

    def test_tag_preserved_on_write(self) -> None:
        """Test the definition tag is written first when it was read."""
        written = LayerTemplate.from_dict(_tile_template()).to_dict()
        assert list(written)[:4] == ["definition", "name", "gridSize", "exportID"]
        assert written["definition"] == "tile"


class TestValueTemplates:
    """Test value template decoding."""

    def test_unknown_definition(self) -> None:
        """Test unknown value types."""
        with pytest.raises(UnknownVariantTag) as excinfo:
            ValueTemplate.from_dict({"name": "v", "definition": "Vector", "defaults": 0})
        assert excinfo.value.tag == "Vector"
        assert "Integer" in excinfo.value.known

    def test_missing_definition(self) -> None:
        """Test value templates must be tagged."""
        with pytest.raises(MissingRequiredField):
            ValueTemplate.from_dict({"name": "v", "defaults": True})

    def test_subclass_restricts_tag(self) -> None:
        """Test decoding through a variant class accepts only its own tag."""
        data = {"name": "v", "definition": "Float", "defaults": 1.5, "bounded": False, "min": 0, "max": 1}
        assert isinstance(FloatValueTemplate.from_dict(data), FloatValueTemplate)
        with pytest.raises(UnknownVariantTag):
            IntegerValueTemplate.from_dict(data)

    def test_integer_rejects_fraction(self) -> None:
        """Test integer defaults must be whole."""
        data = {"name": "v", "definition": "Integer", "defaults": 1.5, "bounded": False, "min": 0, "max": 1}
        with pytest.raises(TypeMismatch) as excinfo:
            ValueTemplate.from_dict(data, "values[0]")
        assert excinfo.value.path == "values[0].defaults"


class TestTilesetSlicing:
    """Test tileset tile positions."""

    def test_tile_coords_row(self) -> None:
        """Test 16px tiles without separation across a 64px texture."""
        coords = list(_tileset().tile_coords(64, 16))
        assert [c.x for c in coords] == [0, 16, 32, 48]
        assert all(c.y == 0 for c in coords)

    def test_tile_coords_separation(self) -> None:
        """Test separation widens the step and partial tiles are skipped."""
        tileset = _tileset(tile_width=8, tile_height=8, tile_separation_x=1, tile_separation_y=2)
        coords = list(tileset.tile_coords(27, 25))
        assert coords == [
            Vec2(0, 0), Vec2(9, 0), Vec2(18, 0),
            Vec2(0, 10), Vec2(9, 10), Vec2(18, 10),
        ]

    def test_tile_coords_lazy(self) -> None:
        """Test positions are produced on demand."""
        assert inspect.isgenerator(_tileset().tile_coords(64, 64))

    def test_tile_coords_zero_step(self) -> None:
        """Test a zero-sized tile cannot be sliced."""
        with pytest.raises(ValueError):
            list(_tileset(tile_width=0).tile_coords(64, 64))

    def test_texture_smaller_than_tile(self) -> None:
        """Test a texture smaller than one tile has no tiles."""
        assert list(_tileset().tile_coords(8, 8)) == []


class TestTilesetImages:
    """Test decoding and cutting the embedded tileset image."""

    def _two_tile_image(self) -> Image.Image:
        image = Image.new("RGBA", (32, 16), (255, 0, 0, 255))
        image.paste((0, 0, 255, 255), (16, 0, 32, 16))
        return image

    def test_image_size(self, png_data_url: Callable[[Image.Image], str]) -> None:
        """Test the embedded image is decoded."""
        tileset = _tileset(image=png_data_url(self._two_tile_image()))
        assert tileset.image_size() == (32, 16)

    def test_tile_images(self, png_data_url: Callable[[Image.Image], str]) -> None:
        """Test tiles are cut in tile id order."""
        tileset = _tileset(image=png_data_url(self._two_tile_image()))
        tiles = tileset.tile_images()

        assert len(tiles) == 2
        assert all(tile.size == (16, 16) for tile in tiles)
        assert tiles[0].getpixel((0, 0)) == (255, 0, 0, 255)
        assert tiles[1].getpixel((15, 15)) == (0, 0, 255, 255)

    def test_tile_images_from_given_image(self) -> None:
        """Test slicing an image loaded elsewhere, ignoring the embedded one."""
        tiles = _tileset(image="not an image").tile_images(self._two_tile_image())
        assert len(tiles) == 2

    def test_invalid_base64(self) -> None:
        """Test undecodable base64."""
        with pytest.raises(TilesetImageError):
            _tileset(image="data:image/png;base64,@@@").decode_image()

    def test_not_an_image(self) -> None:
        """Test valid base64 holding something other than an image."""
        with pytest.raises(TilesetImageError):
            _tileset(image="data:image/png;base64,aGVsbG8=").decode_image()
