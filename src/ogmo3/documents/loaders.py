"""
Raw document I/O: bytes on disk to the generic JSON value tree and back.

Reading and writing go through orjson. Parser and OS errors are translated
into the ogmo3 error types here so the rest of the package never sees them.
"""

import logging
from pathlib import Path
from typing import Any

import orjson

from ..common.errors import EncodeError, IoFailure, JsonSyntaxError

logger = logging.getLogger(__name__)


def parse_json(text: str | bytes, source: str = "<string>") -> Any:
    """Parse document text into the generic JSON value tree.

    Args:
        text: Document text (str or UTF-8 bytes)
        source: Name used in error messages

    Raises:
        JsonSyntaxError: If the text is not well-formed JSON
    """
    try:
        return orjson.loads(text)
    except orjson.JSONDecodeError as e:
        raise JsonSyntaxError(e.msg, e.lineno, e.colno, source) from e


def stringify(data: Any, pretty: bool = True, trailing_newline: bool = False) -> bytes:
    """Serialize a JSON value tree to UTF-8 bytes.

    Args:
        data: Value tree produced by a model's ``to_dict``
        pretty: Indent with two spaces
        trailing_newline: Append a newline after the closing brace

    Raises:
        EncodeError: If the tree holds a value orjson cannot serialize
    """
    option = 0
    if pretty:
        option |= orjson.OPT_INDENT_2
    if trailing_newline:
        option |= orjson.OPT_APPEND_NEWLINE
    try:
        return orjson.dumps(data, option=option)
    except orjson.JSONEncodeError as e:
        raise EncodeError(f"Cannot serialize document: {e}") from e


def read_document(path: str | Path) -> Any:
    """Read and parse a JSON document from disk.

    Raises:
        IoFailure: If the file cannot be read
        JsonSyntaxError: If the file is not well-formed JSON
    """
    path = Path(path)
    try:
        raw = path.read_bytes()  # orjson works with bytes
    except OSError as e:
        raise IoFailure(str(path), e.strerror or str(e)) from e

    logger.debug(f"Read {len(raw)} bytes from {path}")
    return parse_json(raw, str(path))


def write_document(
    data: Any, path: str | Path, pretty: bool = True, trailing_newline: bool = False
) -> None:
    """Serialize a JSON value tree and write it to disk.

    The document is fully serialized before the file is opened, so an
    encoding failure leaves any existing file untouched.

    Raises:
        EncodeError: If the tree cannot be serialized
        IoFailure: If the file cannot be written
    """
    path = Path(path)
    raw = stringify(data, pretty, trailing_newline)
    try:
        path.write_bytes(raw)
    except OSError as e:
        raise IoFailure(str(path), e.strerror or str(e)) from e

    logger.debug(f"Wrote {len(raw)} bytes to {path}")
