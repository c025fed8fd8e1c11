import os
from dataclasses import replace
from pathlib import Path

import pytest
from PIL import Image

from ogmo3 import (
    level_from_json,
    load_level,
    load_project,
    project_from_json,
    save_level,
    save_project,
)
from ogmo3.common import ArrayMode, ExportMode, Vec2
from ogmo3.levels import TileCoordsLayer, TileLayer
from ogmo3.projects import TileLayerTemplate

DATA_DIR = Path(__file__).parent.parent / "data"
OGMO_PROJECT = os.environ.get("OGMO_PROJECT") or ""

# One flat color per tile id of a 5x2 sheet of 16px tiles
PALETTE = [(i * 25, 255 - i * 25, 0, 255) for i in range(10)]


def _terrain_sheet() -> Image.Image:
    sheet = Image.new("RGBA", (80, 32))
    for tile_id, color in enumerate(PALETTE):
        left, top = (tile_id % 5) * 16, (tile_id // 5) * 16
        sheet.paste(color, (left, top, left + 16, top + 16))
    return sheet


def test_tile_layers_reference_project_tilesets():
    project = load_project(DATA_DIR / "sample_project.ogmo")
    level = load_level(DATA_DIR / "levels" / "sample_level.json")

    for layer in level.layers:
        if isinstance(layer, (TileLayer, TileCoordsLayer)):
            assert project.get_tileset(layer.tileset) is not None, layer.name

    templates = {t.name: t for t in project.layers_of_type(TileLayerTemplate)}
    assert templates["tiles"].default_tileset == "terrain"
    print(f"✓ {len(level.layers)} layers checked against {len(project.tilesets)} tilesets")


def test_render_tile_layer():
    project = load_project(DATA_DIR / "sample_project.ogmo")
    level = load_level(DATA_DIR / "levels" / "sample_level.json")
    layer = level.get_layer("tiles")
    assert isinstance(layer, TileLayer)

    terrain = project.get_tileset(layer.tileset)
    assert terrain is not None
    tiles = terrain.tile_images(_terrain_sheet())
    assert len(tiles) == 10

    canvas = Image.new("RGBA", (int(level.width), int(level.height)))
    for tile in layer.unpack():
        if tile.id is not None:
            canvas.paste(tiles[tile.id], (tile.pixel_position.x, tile.pixel_position.y))

    # data: [-1, 3, -1, 0, 1, 2, 2, 1, 4, 4, 4, 4] over 4 columns
    assert canvas.getpixel((0, 0)) == (0, 0, 0, 0)
    assert canvas.getpixel((16, 0)) == PALETTE[3]
    assert canvas.getpixel((48, 0)) == PALETTE[0]
    assert canvas.getpixel((20, 20)) == PALETTE[2]
    assert canvas.getpixel((63, 47)) == PALETTE[4]


def test_coordinate_tiles_land_on_tileset_grid():
    project = load_project(DATA_DIR / "sample_project.ogmo")
    level = load_level(DATA_DIR / "levels" / "sample_level.json")
    layer = level.get_layer("tiles_coords")
    assert isinstance(layer, TileCoordsLayer)

    props = project.get_tileset(layer.tileset)
    assert props is not None
    # Separation is not part of the cell size, so coordinates map onto the
    # tileset grid only for tilesets without it
    flush = replace(props, tile_separation_x=0, tile_separation_y=0)
    origins = set(flush.tile_coords(32, 16))

    placed = [tile for tile in layer.unpack() if tile.pixel_coords is not None]
    assert [tile.grid_position for tile in placed] == [Vec2(1, 0), Vec2(0, 1)]
    for tile in placed:
        assert tile.pixel_coords in origins


def test_coordinate_layer_from_text():
    project = project_from_json(
        """{
          "name": "coords", "levelPaths": ["."], "backgroundColor": "#282c34ff",
          "gridColor": "#3c4049cc", "anglesRadians": true, "directoryDepth": 5,
          "layerGridDefaultSize": {"x": 8, "y": 8}, "levelDefaultSize": {"x": 16, "y": 8},
          "levelMinSize": {"x": 8, "y": 8}, "levelMaxSize": {"x": 4096, "y": 4096},
          "levelValues": [], "defaultExportMode": ".json", "entityTags": [],
          "layers": [{"definition": "tile", "name": "tiles", "gridSize": {"x": 8, "y": 8},
                      "exportID": "1", "exportMode": 1, "arrayMode": 0,
                      "defaultTileset": "props"}],
          "entities": [], "tilesets": []
        }"""
    )
    level = level_from_json(
        """{
          "width": 16, "height": 8, "offsetX": 0, "offsetY": 0,
          "layers": [{"name": "tiles", "_eid": "2", "offsetX": 0, "offsetY": 0,
                      "gridCellWidth": 8, "gridCellHeight": 8, "gridCellsX": 2,
                      "gridCellsY": 1, "tileset": "props",
                      "dataCoords": [[0, 0], [-1]], "exportMode": 1, "arrayMode": 0}]
        }"""
    )

    template = project.get_layer("tiles")
    assert isinstance(template, TileLayerTemplate)
    assert template.export_mode is ExportMode.COORDS
    assert template.array_mode is ArrayMode.ONE

    layer = level.layers[0]
    assert isinstance(layer, TileCoordsLayer)
    first, second = layer.unpack()
    assert first.pixel_coords == Vec2(0, 0)
    assert second.pixel_coords is None
    assert second.grid_position == Vec2(1, 0)


@pytest.mark.skipif(not Path(OGMO_PROJECT).is_file(), reason="OGMO_PROJECT not set")
def test_real_project_round_trip(tmp_path):
    project = load_project(OGMO_PROJECT)
    print(f"✓ {project.name}: {len(project.layers)} layers, {len(project.tilesets)} tilesets")

    copy = tmp_path / "copy.ogmo"
    save_project(project, copy)
    assert load_project(copy) == project

    for level_dir in project.level_paths:
        for level_path in (Path(OGMO_PROJECT).parent / level_dir).glob("*.json"):
            level = load_level(level_path)
            saved = tmp_path / level_path.name
            save_level(level, saved)
            assert load_level(saved) == level
