"""
Typed field readers over the generic JSON value tree.

Each ``as_*`` function checks a single JSON value and converts it to the
Python type the models use; each ``read_*`` function looks a field up in an
object first. Failures raise `MissingRequiredField` or `TypeMismatch` with
the dotted path of the offending field.
"""

from typing import Any, Callable, Optional, TypeVar

from .errors import MissingRequiredField, TypeMismatch

R = TypeVar("R")


def json_type_name(value: Any) -> str:
    """Return the JSON type name of a generic value (for error messages)."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def field_path(path: str, key: str | int) -> str:
    """Append an object key or array index to a dotted field path."""
    if isinstance(key, int):
        return f"{path}[{key}]"
    return f"{path}.{key}" if path else key


# =============================================================================
# Value coercion
# =============================================================================

def as_str(value: Any, path: str = "") -> str:
    if not isinstance(value, str):
        raise TypeMismatch("string", json_type_name(value), path)
    return value


def as_bool(value: Any, path: str = "") -> bool:
    if not isinstance(value, bool):
        raise TypeMismatch("boolean", json_type_name(value), path)
    return value


def as_int(value: Any, path: str = "") -> int:
    """Accept JSON integers, and floats holding a whole number."""
    if isinstance(value, bool):
        raise TypeMismatch("integer", "boolean", path)
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise TypeMismatch("integer", json_type_name(value), path)


def as_float(value: Any, path: str = "") -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeMismatch("number", json_type_name(value), path)
    return float(value)


def as_object(value: Any, path: str = "") -> dict[str, Any]:
    if not isinstance(value, dict):
        raise TypeMismatch("object", json_type_name(value), path)
    return value


def as_list(value: Any, path: str = "") -> list[Any]:
    if not isinstance(value, list):
        raise TypeMismatch("array", json_type_name(value), path)
    return value


def as_list_of(
    value: Any, path: str, item: Callable[[Any, str], R]
) -> list[R]:
    """Convert a JSON array, converting every element with ``item``."""
    return [item(element, field_path(path, i)) for i, element in enumerate(as_list(value, path))]


# =============================================================================
# Field access
# =============================================================================

def require(data: dict[str, Any], key: str, path: str = "") -> Any:
    """Return ``data[key]`` or raise `MissingRequiredField`."""
    if key not in data:
        raise MissingRequiredField(key, path)
    return data[key]


def read(
    data: dict[str, Any], key: str, path: str, convert: Callable[[Any, str], R]
) -> R:
    """Read a required field and convert it."""
    return convert(require(data, key, path), field_path(path, key))


def read_optional(
    data: dict[str, Any], key: str, path: str, convert: Callable[[Any, str], R]
) -> Optional[R]:
    """Read a field that may be absent.

    Absent fields give None. An explicit JSON null is rejected: the format
    signals a disabled feature by leaving the field out.
    """
    if key not in data:
        return None
    return convert(data[key], field_path(path, key))


def read_str(data: dict[str, Any], key: str, path: str = "") -> str:
    return read(data, key, path, as_str)


def read_bool(data: dict[str, Any], key: str, path: str = "") -> bool:
    return read(data, key, path, as_bool)


def read_int(data: dict[str, Any], key: str, path: str = "") -> int:
    return read(data, key, path, as_int)


def read_float(data: dict[str, Any], key: str, path: str = "") -> float:
    return read(data, key, path, as_float)


def read_str_list(data: dict[str, Any], key: str, path: str = "") -> list[str]:
    return as_list_of(require(data, key, path), field_path(path, key), as_str)
