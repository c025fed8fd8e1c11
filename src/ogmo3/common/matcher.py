"""
Document-shape matching for polymorphic records.

Ogmo documents do not tag layers with their type: a layer is a tile layer
because it has a ``tileset`` and a ``data`` array, a grid layer because it
has ``grid``, and so on. This module decides which record shape an object
has by testing an ordered list of field signatures and committing to the
first one that matches. Records that do carry a tag (value templates, and
layer templates written by the editor) are dispatched directly on it.

Matching never raises an ambiguity error: candidate order is the tie-break.
"""

from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, Mapping, Sequence, TypeVar

from .errors import NoMatchingVariant, TypeMismatch, UnknownVariantTag
from .fields import field_path, json_type_name, require


V = TypeVar("V")

Predicate = Callable[[Any], bool]
Decoder = Callable[[dict[str, Any], str], V]


# =============================================================================
# Shape predicates
# =============================================================================

def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_bool(value: Any) -> bool:
    return isinstance(value, bool)


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_object(value: Any) -> bool:
    return isinstance(value, dict)


def is_array(value: Any) -> bool:
    return isinstance(value, list)


def array_of_depth(depth: int) -> Predicate:
    """Build a predicate for arrays nested exactly ``depth`` levels deep.

    Depth 1 is an array of scalars, depth 2 an array of arrays of scalars,
    and so on. Empty arrays match any depth since they carry no elements to
    contradict it.
    """

    def check(value: Any) -> bool:
        if not isinstance(value, list):
            return False
        if depth == 1:
            return not any(isinstance(item, list) for item in value)
        inner = array_of_depth(depth - 1)
        return all(inner(item) for item in value)

    return check


# =============================================================================
# Candidates
# =============================================================================

@dataclass(frozen=True)
class ShapeCandidate(Generic[V]):
    """One possible record shape for an untagged object.

    Attributes:
        name: Human-readable variant name (used in error messages)
        signature: Field name -> predicate; every field must be present and
            satisfy its predicate for the candidate to match
        decode: Builds the variant from the object and its field path
    """
    name: str
    signature: Mapping[str, Predicate]
    decode: Decoder[V]

    def matches(self, data: dict[str, Any]) -> bool:
        """Check whether the object carries this candidate's signature."""
        return all(
            key in data and check(data[key]) for key, check in self.signature.items()
        )


def match_shape(
    data: Any, candidates: Sequence[ShapeCandidate[V]], what: str, path: str = ""
) -> V:
    """Decode an untagged object as the first candidate whose shape matches.

    Args:
        data: Raw JSON value (must be an object)
        candidates: Candidate shapes in priority order
        what: Record kind used in error messages (e.g. "layer")
        path: Field path of the object

    Returns:
        The decoded variant

    Raises:
        TypeMismatch: If data is not a JSON object
        NoMatchingVariant: If no candidate matches
    """
    if not isinstance(data, dict):
        raise TypeMismatch("object", json_type_name(data), path)

    for candidate in candidates:
        if candidate.matches(data):
            return candidate.decode(data, path)

    raise NoMatchingVariant(what, _unique_names(candidates), path)


def dispatch_tag(
    data: Any,
    tag_field: str,
    decoders: Mapping[str, Decoder[V]],
    what: str,
    path: str = "",
) -> V:
    """Decode a tagged object by reading its tag and calling the matching decoder.

    Raises:
        TypeMismatch: If data is not an object or the tag is not a string
        MissingRequiredField: If the tag field is absent
        UnknownVariantTag: If the tag value has no decoder
    """
    if not isinstance(data, dict):
        raise TypeMismatch("object", json_type_name(data), path)

    tag = require(data, tag_field, path)
    if not isinstance(tag, str):
        raise TypeMismatch("string", json_type_name(tag), field_path(path, tag_field))

    decoder = decoders.get(tag)
    if decoder is None:
        raise UnknownVariantTag(what, tag, decoders.keys(), field_path(path, tag_field))
    return decoder(data, path)


def _unique_names(candidates: Iterable[ShapeCandidate[Any]]) -> list[str]:
    names: list[str] = []
    for candidate in candidates:
        if candidate.name not in names:
            names.append(candidate.name)
    return names
