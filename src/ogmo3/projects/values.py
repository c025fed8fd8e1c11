"""
Value templates: declarations of custom values on levels, entities and decals.

Unlike layers, value templates carry an explicit ``definition`` tag, so they
are decoded by dispatching on it rather than by shape.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional, TypeVar

from ..common.fields import (
    as_int,
    as_object,
    read_bool,
    read_float,
    read_int,
    read_optional,
    read_str,
    read_str_list,
)
from ..common.matcher import dispatch_tag
from ..common.types import JsonObject, json_number

VT = TypeVar("VT", bound="ValueTemplate")


@dataclass
class ValueTemplate(ABC):
    """Shared part of every value template.

    Attributes:
        name: Name of the value
        display: How the editor displays the value, when recorded
    """
    name: str
    display: Optional[int] = field(default=None, kw_only=True)

    definition: ClassVar[str] = ""

    @classmethod
    def from_dict(cls: type[VT], data: Any, path: str = "") -> VT:
        """Decode a value template by its ``definition`` tag.

        Called on a concrete subclass, only that subclass's tag is accepted.

        Raises:
            UnknownVariantTag: If the tag is not a known value type
            MissingRequiredField: If the tag or a variant field is missing
            TypeMismatch: If a field holds the wrong JSON type
        """
        decoders = {
            tag: value_cls._decode
            for tag, value_cls in VALUE_TEMPLATE_TYPES.items()
            if issubclass(value_cls, cls)
        }
        return dispatch_tag(data, "definition", decoders, "value template", path)

    @classmethod
    def _decode(cls, data: dict[str, Any], path: str) -> "ValueTemplate":
        obj = as_object(data, path)
        return cls(
            name=read_str(obj, "name", path),
            display=read_optional(obj, "display", path, as_int),
            **cls._read_payload(obj, path),
        )

    @classmethod
    @abstractmethod
    def _read_payload(cls, data: dict[str, Any], path: str) -> dict[str, Any]:
        """Read variant-specific fields as constructor keyword arguments."""

    @abstractmethod
    def _payload(self) -> JsonObject:
        """Variant-specific fields in document form."""

    def to_dict(self) -> JsonObject:
        out: JsonObject = {"name": self.name, "definition": self.definition}
        if self.display is not None:
            out["display"] = self.display
        out.update(self._payload())
        return out


@dataclass
class BooleanValueTemplate(ValueTemplate):
    defaults: bool

    definition: ClassVar[str] = "Boolean"

    @classmethod
    def _read_payload(cls, data: dict[str, Any], path: str) -> dict[str, Any]:
        return {"defaults": read_bool(data, "defaults", path)}

    def _payload(self) -> JsonObject:
        return {"defaults": self.defaults}


@dataclass
class ColorValueTemplate(ValueTemplate):
    """Color value; ``defaults`` is a hex string such as ``#ff0000ff``."""
    defaults: str
    include_alpha: bool

    definition: ClassVar[str] = "Color"

    @classmethod
    def _read_payload(cls, data: dict[str, Any], path: str) -> dict[str, Any]:
        return {
            "defaults": read_str(data, "defaults", path),
            "include_alpha": read_bool(data, "includeAlpha", path),
        }

    def _payload(self) -> JsonObject:
        return {"defaults": self.defaults, "includeAlpha": self.include_alpha}


@dataclass
class EnumValueTemplate(ValueTemplate):
    """Enum value; ``defaults`` is an index into ``choices``."""
    defaults: int
    choices: list[str]

    definition: ClassVar[str] = "Enum"

    @classmethod
    def _read_payload(cls, data: dict[str, Any], path: str) -> dict[str, Any]:
        return {
            "defaults": read_int(data, "defaults", path),
            "choices": read_str_list(data, "choices", path),
        }

    def _payload(self) -> JsonObject:
        return {"defaults": self.defaults, "choices": list(self.choices)}


@dataclass
class IntegerValueTemplate(ValueTemplate):
    defaults: int
    bounded: bool
    min: int
    max: int

    definition: ClassVar[str] = "Integer"

    @classmethod
    def _read_payload(cls, data: dict[str, Any], path: str) -> dict[str, Any]:
        return {
            "defaults": read_int(data, "defaults", path),
            "bounded": read_bool(data, "bounded", path),
            "min": read_int(data, "min", path),
            "max": read_int(data, "max", path),
        }

    def _payload(self) -> JsonObject:
        return {
            "defaults": self.defaults,
            "bounded": self.bounded,
            "min": self.min,
            "max": self.max,
        }


@dataclass
class FloatValueTemplate(ValueTemplate):
    defaults: float
    bounded: bool
    min: float
    max: float

    definition: ClassVar[str] = "Float"

    @classmethod
    def _read_payload(cls, data: dict[str, Any], path: str) -> dict[str, Any]:
        return {
            "defaults": read_float(data, "defaults", path),
            "bounded": read_bool(data, "bounded", path),
            "min": read_float(data, "min", path),
            "max": read_float(data, "max", path),
        }

    def _payload(self) -> JsonObject:
        return {
            "defaults": json_number(self.defaults),
            "bounded": self.bounded,
            "min": json_number(self.min),
            "max": json_number(self.max),
        }


@dataclass
class StringValueTemplate(ValueTemplate):
    """Single-line string value. A ``max_length`` of 0 means unlimited."""
    defaults: str
    max_length: int
    trim_whitespace: bool

    definition: ClassVar[str] = "String"

    @classmethod
    def _read_payload(cls, data: dict[str, Any], path: str) -> dict[str, Any]:
        return {
            "defaults": read_str(data, "defaults", path),
            "max_length": read_int(data, "maxLength", path),
            "trim_whitespace": read_bool(data, "trimWhitespace", path),
        }

    def _payload(self) -> JsonObject:
        return {
            "defaults": self.defaults,
            "maxLength": self.max_length,
            "trimWhitespace": self.trim_whitespace,
        }


@dataclass
class TextValueTemplate(ValueTemplate):
    """Multi-line text value."""
    defaults: str

    definition: ClassVar[str] = "Text"

    @classmethod
    def _read_payload(cls, data: dict[str, Any], path: str) -> dict[str, Any]:
        return {"defaults": read_str(data, "defaults", path)}

    def _payload(self) -> JsonObject:
        return {"defaults": self.defaults}


VALUE_TEMPLATE_TYPES: dict[str, type[ValueTemplate]] = {
    value_cls.definition: value_cls
    for value_cls in (
        BooleanValueTemplate,
        ColorValueTemplate,
        EnumValueTemplate,
        IntegerValueTemplate,
        FloatValueTemplate,
        StringValueTemplate,
        TextValueTemplate,
    )
}
"""Definition tag -> value template class."""
