"""Shared fixtures for ogmo3 tests."""

import base64
import io
from pathlib import Path
from typing import Any, Callable

import orjson
import pytest
from PIL import Image

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture
def data_dir() -> Path:
    return DATA_DIR


@pytest.fixture
def sample_project_path() -> Path:
    return DATA_DIR / "sample_project.ogmo"


@pytest.fixture
def sample_level_path() -> Path:
    return DATA_DIR / "levels" / "sample_level.json"


@pytest.fixture
def sample_project_data(sample_project_path: Path) -> dict[str, Any]:
    """Project document as a plain JSON value tree."""
    return orjson.loads(sample_project_path.read_bytes())


@pytest.fixture
def sample_level_data(sample_level_path: Path) -> dict[str, Any]:
    """Level document as a plain JSON value tree."""
    return orjson.loads(sample_level_path.read_bytes())


@pytest.fixture
def settings_file(tmp_path: Path) -> Path:
    """INI file that keeps QSettings away from the user's real configuration."""
    return tmp_path / "settings.ini"


@pytest.fixture
def app_settings(settings_file: Path):
    from ogmo3.settings import AppSettings

    return AppSettings(profile="test", settings_file=settings_file)


@pytest.fixture
def png_data_url() -> Callable[[Image.Image], str]:
    """Encode a Pillow image as the base64 data URL the editor embeds."""

    def encode(image: Image.Image) -> str:
        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        payload = base64.b64encode(buffer.getvalue()).decode("ascii")
        return f"data:image/png;base64,{payload}"

    return encode


def tile_layer_dict(**overrides: Any) -> dict[str, Any]:
    """Minimal tile layer object; keyword arguments replace or add fields."""
    layer: dict[str, Any] = {
        "name": "tiles",
        "_eid": "1",
        "offsetX": 0,
        "offsetY": 0,
        "gridCellWidth": 16,
        "gridCellHeight": 16,
        "gridCellsX": 4,
        "gridCellsY": 2,
        "tileset": "terrain",
        "data": [0, 1, 2, 3, -1, -1, -1, -1],
        "exportMode": 0,
        "arrayMode": 0,
    }
    layer.update(overrides)
    return layer


def level_dict(*layers: dict[str, Any], **overrides: Any) -> dict[str, Any]:
    """Minimal level object holding the given layers."""
    level: dict[str, Any] = {
        "width": 64,
        "height": 32,
        "offsetX": 0,
        "offsetY": 0,
        "layers": list(layers),
    }
    level.update(overrides)
    return level
