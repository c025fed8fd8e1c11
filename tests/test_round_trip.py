"""Tests for writing models back in the editor's layout."""

from typing import Any

import orjson
import pytest

from conftest import level_dict, tile_layer_dict
from ogmo3 import level_to_json, project_to_json
from ogmo3.common import ArrayMode, EncodeError, ExportMode, Vec2
from ogmo3.levels import (
    Decal,
    Entity,
    GridLayer,
    Layer,
    LayerStorage,
    Level,
    StorageKind,
    encode_storage,
)
from ogmo3.projects import Project


def _key_order(value: Any) -> Any:
    """Reduce a JSON tree to its object key order, recursively."""
    if isinstance(value, dict):
        return [(key, _key_order(item)) for key, item in value.items()]
    if isinstance(value, list):
        return [_key_order(item) for item in value]
    return None


class TestLevelRoundTrip:
    """Test decode then encode reproduces level documents."""

    def test_values_identical(self, sample_level_data: dict[str, Any]) -> None:
        """Test the written tree equals the read tree."""
        assert Level.from_dict(sample_level_data).to_dict() == sample_level_data

    def test_text_identical(self, sample_level_data: dict[str, Any]) -> None:
        """Test the written text parses back to the same tree."""
        text = level_to_json(Level.from_dict(sample_level_data))
        assert orjson.loads(text) == sample_level_data

    def test_field_order(self, sample_level_data: dict[str, Any]) -> None:
        """Test fields are written in the editor's order."""
        written = Level.from_dict(sample_level_data).to_dict()
        assert _key_order(written) == _key_order(sample_level_data)

    def test_whole_numbers_have_no_fraction(self, sample_level_data: dict[str, Any]) -> None:
        """Test whole numbers are written the way the editor writes them."""
        text = level_to_json(Level.from_dict(sample_level_data), pretty=False)
        assert '"width":64,' in text
        assert '"x":16,' in text
        assert '"x":40.5,' in text

    def test_model_round_trip(self, sample_level_data: dict[str, Any]) -> None:
        """Test decoding the written tree gives an equal model."""
        level = Level.from_dict(sample_level_data)
        assert Level.from_dict(level.to_dict()) == level


class TestModeFlags:
    """Test the payload field and mode flags derived from storage."""

    @pytest.mark.parametrize(
        "kind, export_mode, array_mode",
        [
            (StorageKind.DATA, ExportMode.IDS, ArrayMode.ONE),
            (StorageKind.DATA_2D, ExportMode.IDS, ArrayMode.TWO),
            (StorageKind.DATA_COORDS, ExportMode.COORDS, ArrayMode.ONE),
            (StorageKind.DATA_COORDS_2D, ExportMode.COORDS, ArrayMode.TWO),
            (StorageKind.GRID, None, ArrayMode.ONE),
            (StorageKind.GRID_2D, None, ArrayMode.TWO),
        ],
    )
    def test_flags_per_kind(
        self, kind: StorageKind, export_mode: ExportMode, array_mode: ArrayMode
    ) -> None:
        """Test every storage kind maps to its editor flags."""
        encoded = encode_storage(LayerStorage(kind, []))
        assert encoded.field_name == kind.field_name
        assert encoded.export_mode == export_mode
        assert encoded.array_mode == array_mode

    def test_grid_has_no_export_mode(self) -> None:
        """Test grid layers only carry an array mode."""
        fields = encode_storage(LayerStorage(StorageKind.GRID_2D, [["0"]])).fields()
        assert fields == {"grid2D": [["0"]], "arrayMode": 1}

    def test_stale_flags_regenerated(self) -> None:
        """Test flags read from the document are replaced by the derived ones."""
        layer = Layer.from_dict(tile_layer_dict(exportMode=1, arrayMode=1))
        written = layer.to_dict()
        assert written["exportMode"] == 0
        assert written["arrayMode"] == 0

    def test_payload_is_copied(self) -> None:
        """Test the written tree does not share lists with the model."""
        storage = LayerStorage(StorageKind.DATA_COORDS, [[1, 2], [-1]])
        payload = encode_storage(storage).payload
        payload[0].append(9)
        assert storage.values[0] == [1, 2]

    def test_grid_layer_field_order(self) -> None:
        """Test the shared fields precede the payload."""
        layer = GridLayer(
            name="solids", export_id="4", offset_x=0.0, offset_y=0.0,
            grid_cell_width=8, grid_cell_height=8, grid_cells_x=2, grid_cells_y=1,
            data=LayerStorage(StorageKind.GRID, ["1", "0"]),
        )
        assert list(layer.to_dict()) == [
            "name", "_eid", "offsetX", "offsetY", "gridCellWidth", "gridCellHeight",
            "gridCellsX", "gridCellsY", "grid", "arrayMode",
        ]


class TestOptionalFields:
    """Test absent attributes are left out rather than written as null."""

    def test_minimal_entity(self) -> None:
        """Test an entity without optional attributes."""
        entity = Entity(name="coin", export_id="7", x=1.0, y=2.5)
        assert entity.to_dict() == {"name": "coin", "_eid": "7", "x": 1, "y": 2.5}

    def test_entity_nodes(self) -> None:
        """Test present optional attributes are written."""
        entity = Entity(name="bat", export_id="8", x=0.0, y=0.0, nodes=[Vec2(1.0, 2.0)])
        assert entity.to_dict()["nodes"] == [{"x": 1, "y": 2}]

    def test_minimal_decal(self) -> None:
        """Test a decal without optional attributes."""
        assert Decal(x=0.0, y=0.0, texture="a.png").to_dict() == {"x": 0, "y": 0, "texture": "a.png"}

    def test_absent_level_values_omitted(self) -> None:
        """Test levels read without custom values do not gain an empty object."""
        written = Level.from_dict(level_dict()).to_dict()
        assert "values" not in written
        assert "ogmoVersion" not in written

    def test_explicit_empty_level_values_kept(self) -> None:
        """Test an empty values object read from the document is written back."""
        doc = level_dict(tile_layer_dict(), values={})
        written = orjson.loads(level_to_json(Level.from_dict(doc)))
        assert written == doc
        assert list(written)[-1] == "values"

    def test_values_set_in_code_written(self) -> None:
        """Test values added to a level built in code are written."""
        level = Level(width=8.0, height=8.0, offset_x=0.0, offset_y=0.0)
        level.values["title"] = "intro"
        assert level.to_dict()["values"] == {"title": "intro"}

    def test_huge_whole_number_value(self) -> None:
        """Test whole numbers beyond the 64-bit range still serialize."""
        doc = level_dict(tile_layer_dict(), values={"big": 1e20})
        text = level_to_json(Level.from_dict(doc))
        assert orjson.loads(text) == doc

    def test_no_nulls_anywhere(self, sample_level_data: dict[str, Any]) -> None:
        """Test the written document contains no null."""
        text = level_to_json(Level.from_dict(sample_level_data))
        assert "null" not in text

    def test_non_finite_rejected(self) -> None:
        """Test non-finite numbers cannot be written."""
        level = Level(width=float("nan"), height=1.0, offset_x=0.0, offset_y=0.0)
        with pytest.raises(EncodeError):
            level.to_dict()


class TestProjectRoundTrip:
    """Test decode then encode reproduces project documents."""

    def test_values_identical(self, sample_project_data: dict[str, Any]) -> None:
        """Test the written tree equals the read tree."""
        assert Project.from_dict(sample_project_data).to_dict() == sample_project_data

    def test_field_order(self, sample_project_data: dict[str, Any]) -> None:
        """Test fields are written in the editor's order, tags included."""
        written = Project.from_dict(sample_project_data).to_dict()
        assert _key_order(written) == _key_order(sample_project_data)

    def test_text_identical(self, sample_project_data: dict[str, Any]) -> None:
        """Test the written text parses back to the same tree."""
        text = project_to_json(Project.from_dict(sample_project_data))
        assert orjson.loads(text) == sample_project_data

    def test_optional_settings_omitted(self, sample_project_data: dict[str, Any]) -> None:
        """Test settings missing from older projects stay missing."""
        for key in ("ogmoVersion", "compactExport", "externalScript", "playCommand"):
            del sample_project_data[key]
        written = Project.from_dict(sample_project_data).to_dict()
        assert written == sample_project_data
