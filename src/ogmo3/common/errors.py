"""
Exception types raised while reading and writing Ogmo documents.

Every error derives from `OgmoError` so callers can catch the whole family
with one clause. Decode errors carry the dotted path of the offending field
(for example ``layers[2].gridCellsX``) when it is known.
"""

from typing import Iterable, Optional


class OgmoError(Exception):
    """Base class for all ogmo3 errors."""
    pass


class IoFailure(OgmoError):
    """Raised when a document cannot be read from or written to disk."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot access {path}: {reason}")


class JsonSyntaxError(OgmoError):
    """Raised when document text is not well-formed JSON.

    Attributes:
        msg: Message reported by the JSON parser
        lineno: 1-based line of the error (0 if unknown)
        colno: 1-based column of the error (0 if unknown)
        source: Where the text came from (file path or "<string>")
    """

    def __init__(self, msg: str, lineno: int = 0, colno: int = 0, source: str = "<string>"):
        self.msg = msg
        self.lineno = lineno
        self.colno = colno
        self.source = source
        super().__init__(f"{source}:{lineno}:{colno}: {msg}")


class DecodeError(OgmoError):
    """Raised when well-formed JSON does not match the expected document shape."""

    def __init__(self, message: str, path: str = ""):
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}" if path else message)


class NoMatchingVariant(DecodeError):
    """No candidate record shape matched an untagged object."""

    def __init__(self, what: str, candidates: Iterable[str], path: str = ""):
        self.what = what
        self.candidates = list(candidates)
        super().__init__(
            f"object does not match any {what} shape (tried: {', '.join(self.candidates)})",
            path,
        )


class UnknownVariantTag(DecodeError):
    """A tagged object carried a tag value that is not recognised."""

    def __init__(self, what: str, tag: str, known: Iterable[str], path: str = ""):
        self.what = what
        self.tag = tag
        self.known = list(known)
        super().__init__(
            f"unknown {what} tag {tag!r} (expected one of: {', '.join(self.known)})",
            path,
        )


class MissingRequiredField(DecodeError):
    """A required field is absent from an object."""

    def __init__(self, field_name: str, path: str = ""):
        self.field_name = field_name
        super().__init__(f"missing required field {field_name!r}", path)


class TypeMismatch(DecodeError):
    """A field is present but holds a JSON value of the wrong type."""

    def __init__(self, expected: str, actual: Optional[str], path: str = ""):
        self.expected = expected
        self.actual = actual
        super().__init__(f"expected {expected}, got {actual}", path)


class InvalidLayerGeometry(DecodeError):
    """Layer dimensions make it impossible to place the stored cells."""

    def __init__(self, field_name: str, value: int, path: str = ""):
        self.field_name = field_name
        self.value = value
        super().__init__(f"{field_name} must be positive to place cells, got {value}", path)


class EncodeError(OgmoError):
    """Raised when a model cannot be turned into JSON text."""
    pass


class TilesetImageError(OgmoError):
    """Raised when a tileset's embedded image cannot be decoded."""
    pass
