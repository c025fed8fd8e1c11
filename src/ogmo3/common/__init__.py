"""
Primitives shared by the level and project models.

Geometry and value types, the error hierarchy, typed JSON field readers and
the shape matcher used to decode untagged polymorphic records.
"""

from .errors import (
    OgmoError,
    IoFailure,
    JsonSyntaxError,
    DecodeError,
    NoMatchingVariant,
    UnknownVariantTag,
    MissingRequiredField,
    TypeMismatch,
    InvalidLayerGeometry,
    EncodeError,
    TilesetImageError,
)
from .types import (
    JsonObject,
    Value,
    Vec2,
    ExportMode,
    ArrayMode,
    json_number,
    decode_value,
    encode_value,
    decode_values,
    encode_values,
)
from .matcher import ShapeCandidate, match_shape, dispatch_tag

__all__ = [
    # Errors
    "OgmoError",
    "IoFailure",
    "JsonSyntaxError",
    "DecodeError",
    "NoMatchingVariant",
    "UnknownVariantTag",
    "MissingRequiredField",
    "TypeMismatch",
    "InvalidLayerGeometry",
    "EncodeError",
    "TilesetImageError",
    # Types
    "JsonObject",
    "Value",
    "Vec2",
    "ExportMode",
    "ArrayMode",
    "json_number",
    "decode_value",
    "encode_value",
    "decode_values",
    "encode_values",
    # Matching
    "ShapeCandidate",
    "match_shape",
    "dispatch_tag",
]
