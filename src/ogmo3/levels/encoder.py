"""
Inverse of the level shape matcher.

Given the storage a layer holds in memory, work out which payload field and
which mode flags the editor would have written for it. Kept apart from the
decoding side; the two must agree on `StorageKind`, which is the single
table both read.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Optional

from ..common.types import ArrayMode, ExportMode, JsonObject
from .storage import LayerStorage


@dataclass(frozen=True)
class EncodedStorage:
    """Storage ready to be written.

    Attributes:
        field_name: Payload field name ("data", "grid2D", ...)
        payload: Cell data in document layout
        export_mode: Export mode flag, None for grid layers
        array_mode: Array mode flag
    """
    field_name: str
    payload: list[Any]
    export_mode: Optional[ExportMode]
    array_mode: ArrayMode

    def fields(self) -> JsonObject:
        """Payload followed by the mode flags that apply to this layer kind."""
        out: JsonObject = {self.field_name: self.payload}
        if self.export_mode is not None:
            out["exportMode"] = int(self.export_mode)
        out["arrayMode"] = int(self.array_mode)
        return out


def encode_storage(storage: LayerStorage) -> EncodedStorage:
    """Derive the payload field and mode flags for a storage variant."""
    kind = storage.kind
    if kind.is_2d:
        payload: list[Any] = [_copy_cells(row) for row in storage.values]
    else:
        payload = _copy_cells(storage.values)
    return EncodedStorage(
        field_name=kind.field_name,
        payload=payload,
        export_mode=kind.export_mode,
        array_mode=kind.array_mode,
    )


def _copy_cells(cells: Iterable[Any]) -> list[Any]:
    # Coordinate cells are lists themselves; copy so the tree owns its data
    return [list(cell) if isinstance(cell, list) else cell for cell in cells]


def omit_none(fields: Iterable[tuple[str, Any]]) -> JsonObject:
    """Build a JSON object, leaving out fields whose value is None.

    Optional attributes that the template did not enable are absent from
    the document, never written as null.
    """
    return {key: value for key, value in fields if value is not None}
