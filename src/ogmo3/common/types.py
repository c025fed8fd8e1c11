"""
Scalar and geometry primitives shared by project and level models.

Contains `Vec2`, the dynamically typed `Value` used for custom fields, the
two tile encoding mode enums, and the helpers that convert them to and from
the generic JSON value tree produced by orjson.
"""

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Callable, Dict, Generic, TypeVar, Union

from .errors import EncodeError, TypeMismatch
from .fields import as_float, as_int, as_object, field_path, json_type_name, require


JsonObject = Dict[str, Any]
"""A decoded JSON object (field name -> generic JSON value)."""

Value = Union[bool, str, float]
"""A custom value stored on a level, entity or decal.

Levels do not record the declared type of a value, so the original template
type (integer, float, enum index) cannot be recovered: every JSON number
becomes a float.
"""

T = TypeVar("T", int, float)

_INT64_MIN = -(2**63)
_INT64_LIMIT = 2**63


def json_number(value: float | int) -> float | int:
    """Prepare a number for the JSON value tree.

    Integral floats are emitted as ints so that ``320.0`` is written as
    ``320``, which is how the editor itself writes whole numbers. Floats
    outside the 64-bit integer range stay floats; orjson cannot write
    larger ints.

    Raises:
        EncodeError: If the value is NaN or infinite
    """
    if isinstance(value, float):
        if not math.isfinite(value):
            raise EncodeError(f"Cannot encode non-finite number: {value}")
        if value.is_integer() and _INT64_MIN <= value < _INT64_LIMIT:
            return int(value)
    return value


def decode_value(raw: Any, path: str = "") -> Value:
    """Reconstruct a dynamic value from its JSON shape."""
    # bool before numbers: Python booleans are ints
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        return raw
    if isinstance(raw, (int, float)):
        return float(raw)
    raise TypeMismatch("boolean, string or number", json_type_name(raw), path)


def encode_value(value: Value) -> Any:
    """Convert a dynamic value back into a JSON value."""
    if isinstance(value, (bool, str)):
        return value
    return json_number(value)


def decode_values(raw: Any, path: str = "") -> dict[str, Value]:
    """Decode a JSON object of custom values into a name -> Value mapping."""
    return {
        name: decode_value(item, field_path(path, name))
        for name, item in as_object(raw, path).items()
    }


def encode_values(values: dict[str, Value]) -> JsonObject:
    """Encode a name -> Value mapping as a JSON object."""
    return {name: encode_value(value) for name, value in values.items()}


class ExportMode(IntEnum):
    """Whether tile data is stored as tileset indices or as coordinates."""

    IDS = 0
    """Tiles are tileset indices, counting left to right, top to bottom."""

    COORDS = 1
    """Tiles are [column, row] positions inside the tileset."""


class ArrayMode(IntEnum):
    """Whether tile or grid data is stored as a flat or a nested array."""

    ONE = 0
    """Flat, row-major array."""

    TWO = 1
    """Array of rows."""


@dataclass(frozen=True)
class Vec2(Generic[T]):
    """An X and Y value pair."""
    x: T
    y: T

    @classmethod
    def from_dict(
        cls, data: Any, path: str = "", coerce: Callable[[Any, str], Any] = as_float
    ) -> "Vec2[Any]":
        """Create Vec2 from a JSON ``{"x": ..., "y": ...}`` object.

        Args:
            data: Raw JSON value
            path: Field path used in error messages
            coerce: Converts each component (floats by default)

        Returns:
            Vec2 instance
        """
        obj = as_object(data, path)
        return cls(
            x=coerce(require(obj, "x", path), field_path(path, "x")),
            y=coerce(require(obj, "y", path), field_path(path, "y")),
        )

    @classmethod
    def int_from_dict(cls, data: Any, path: str = "") -> "Vec2[int]":
        """Create an integer Vec2 from JSON."""
        return cls.from_dict(data, path, as_int)

    def to_dict(self) -> JsonObject:
        """Convert to a JSON object."""
        return {"x": json_number(self.x), "y": json_number(self.y)}
