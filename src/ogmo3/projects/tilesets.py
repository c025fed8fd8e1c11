"""
Tilesets declared by a project, and slicing them into tiles.

A project stores each tileset's image twice: as a path relative to the
project and as an embedded base64 data URL. Only the embedded copy is decoded
here; loading the file from disk is left to the caller.
"""

import base64
import binascii
import io
import logging
from dataclasses import dataclass
from typing import Any, Iterator, Optional

from PIL import Image, UnidentifiedImageError

from ..common.errors import TilesetImageError
from ..common.fields import as_object, read_int, read_str
from ..common.types import JsonObject, Vec2

logger = logging.getLogger(__name__)


@dataclass
class Tileset:
    """A tileset template.

    Attributes:
        label: Tileset name; tile layers refer to it by this label
        path: Image path, relative to the project file
        image: Embedded image as a base64 data URL
        tile_width: Width of each tile in pixels
        tile_height: Height of each tile in pixels
        tile_separation_x: Empty pixels between tiles on the X axis
        tile_separation_y: Empty pixels between tiles on the Y axis
    """
    label: str
    path: str
    image: str
    tile_width: int
    tile_height: int
    tile_separation_x: int
    tile_separation_y: int

    @classmethod
    def from_dict(cls, data: Any, path: str = "") -> "Tileset":
        obj = as_object(data, path)
        return cls(
            label=read_str(obj, "label", path),
            path=read_str(obj, "path", path),
            image=read_str(obj, "image", path),
            tile_width=read_int(obj, "tileWidth", path),
            tile_height=read_int(obj, "tileHeight", path),
            tile_separation_x=read_int(obj, "tileSeparationX", path),
            tile_separation_y=read_int(obj, "tileSeparationY", path),
        )

    def to_dict(self) -> JsonObject:
        return {
            "label": self.label,
            "path": self.path,
            "image": self.image,
            "tileWidth": self.tile_width,
            "tileHeight": self.tile_height,
            "tileSeparationX": self.tile_separation_x,
            "tileSeparationY": self.tile_separation_y,
        }

    def tile_coords(self, texture_width: int, texture_height: int) -> Iterator[Vec2[int]]:
        """Yield the top-left pixel position of every tile, row by row.

        The project does not record the size of the tileset image, so it has
        to be supplied. Partial tiles at the right and bottom edges are
        skipped.

        Args:
            texture_width: Width of the tileset image in pixels
            texture_height: Height of the tileset image in pixels

        Raises:
            ValueError: If a tile plus its separation is not a positive size
        """
        step_x = self.tile_width + self.tile_separation_x
        step_y = self.tile_height + self.tile_separation_y
        if step_x <= 0 or step_y <= 0:
            raise ValueError(
                f"Tileset '{self.label}' has a non-positive tile step ({step_x}, {step_y})"
            )

        tiles_x = texture_width // step_x
        tiles_y = texture_height // step_y

        for tile_y in range(tiles_y):
            for tile_x in range(tiles_x):
                yield Vec2(tile_x * step_x, tile_y * step_y)

    def decode_image(self) -> Image.Image:
        """Decode the embedded image into a Pillow image.

        Raises:
            TilesetImageError: If the data URL is not valid base64 or not an image
        """
        _, _, payload = self.image.rpartition(",")
        try:
            raw = base64.b64decode(payload, validate=True)
            image = Image.open(io.BytesIO(raw))
            image.load()
        except (binascii.Error, UnidentifiedImageError, OSError) as e:
            raise TilesetImageError(f"Tileset '{self.label}' has no usable embedded image: {e}") from e

        logger.debug(f"Decoded tileset '{self.label}' image: {image.size[0]}x{image.size[1]}")
        return image

    def image_size(self) -> tuple[int, int]:
        """Pixel size (width, height) of the embedded image."""
        return self.decode_image().size

    def tile_images(self, image: Optional[Image.Image] = None) -> list[Image.Image]:
        """Cut the tileset image into tiles, in tile id order.

        Args:
            image: Image to slice, for example one loaded from `path`. The
                embedded image is decoded when omitted.

        Returns:
            One cropped RGBA image per tile; the list index is the tile id
        """
        if image is None:
            image = self.decode_image()
        image = image.convert("RGBA")

        width, height = image.size
        tiles = []
        for origin in self.tile_coords(width, height):
            left = origin.x
            top = origin.y
            right = left + self.tile_width
            bottom = top + self.tile_height
            tiles.append(image.crop((left, top, right, bottom)))
        return tiles
