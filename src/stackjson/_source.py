"""
Resolves what load() and dump() were given into text or a destination.

A plain string may be a path to a JSON file or the JSON text itself; the
file is tried first and any failure silently falls back to the literal.
"""

import logging
import os
from pathlib import Path
from typing import IO
from typing import Any
from typing import TypeAlias

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8-sig"
# Legacy "ANSI" files that are not valid UTF-8
FALLBACK_ENCODING = "latin-1"

Source: TypeAlias = str | os.PathLike[str] | IO[str]
Target: TypeAlias = str | os.PathLike[str] | IO[str]


def read_source(source: Any, encoding: str | None = None) -> str:
    """Returns the JSON text behind a file object, path or literal string."""
    if hasattr(source, "read"):
        return source.read()
    if isinstance(source, bytes | bytearray):
        raise TypeError("the JSON object must be str, not bytes")
    if isinstance(source, os.PathLike):
        return _read_file(Path(source), encoding)
    if not isinstance(source, str):
        raise TypeError(
            f"the JSON source must be str, os.PathLike or a file object, "
            f"not {type(source).__name__}"
        )

    text = _try_read_path(source, encoding)
    if text is None:
        logger.debug("Decoding argument as literal JSON text")
        return source
    return text


def write_target(target: Any, text: str, encoding: str | None = None) -> None:
    """Writes encoded JSON to a file object or a path."""
    if hasattr(target, "write"):
        target.write(text)
        return
    if not isinstance(target, str | os.PathLike):
        raise TypeError("fp must have a write() method or be a path")

    path = Path(target)
    logger.debug("Writing JSON document to %s", path)
    path.write_text(text, encoding=encoding or "utf-8")


def _try_read_path(candidate: str, encoding: str | None) -> str | None:
    """Reads candidate as a file path, or returns None if it is not one."""
    try:
        path = Path(candidate)
        if not path.is_file():
            return None
        return _read_file(path, encoding)
    except (OSError, ValueError) as e:
        # ValueError covers NUL bytes in the name and undecodable contents
        logger.debug("Argument is not a readable JSON file: %s", e)
        return None


def _read_file(path: Path, encoding: str | None) -> str:
    logger.debug("Reading JSON document from %s", path)
    if encoding is not None:
        return path.read_text(encoding=encoding)
    try:
        return path.read_text(encoding=DEFAULT_ENCODING)
    except UnicodeDecodeError:
        logger.debug("%s is not UTF-8, reading as %s", path, FALLBACK_ENCODING)
        return path.read_text(encoding=FALLBACK_ENCODING)
