"""
Stack-driven JSON encoder.

Mirrors the decoder: open containers live on an explicit stack of frames
rather than on the call stack, so any tree the decoder can build can be
written back out. Output is appended to a list of chunks as members are
reached; nothing is buffered per container.
"""

import math
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any

from stackjson._config import EncodeConfig
from stackjson._errors import InvalidKeyError
from stackjson._errors import UnsupportedTypeError
from stackjson._escapes import ASCII_LIMIT
from stackjson._escapes import ESCAPES
from stackjson._escapes import escape_non_ascii
from stackjson._profiling import profile_hot_path
from stackjson._types import JsonValueLoose

_CONTAINER_TYPES = (list, tuple, dict, set, frozenset)

# Returned by _next_member once a frame has no members left
_DONE = object()


class FrameKind(Enum):
    """What an encoder frame walks over."""

    ARRAY = "array"
    OBJECT = "object"
    # The single value returned by the default hook
    DEFAULT = "default"


_CLOSERS = {FrameKind.ARRAY: "]", FrameKind.OBJECT: "}"}


@dataclass
class EncodeFrame:
    """
    One container on the encoder stack.

    note names the member currently being encoded; it becomes part of the
    error context if that member cannot be serialized.
    """

    container: Any
    kind: FrameKind
    level: int
    members: Iterator[Any]
    count: int = 0
    note: str | None = None


class _Encoder:
    """
    Walks a value tree and renders it as JSON text.

    Holds the per-call configuration, the output chunks, the frame stack and
    the ids of containers currently open, which is how circular references
    are caught.
    """

    def __init__(self, config: EncodeConfig):
        self.config = config
        self.markers: set[int] | None = (
            set() if config.check_circular else None
        )
        self.chunks: list[str] = []
        self.stack: list[EncodeFrame] = []
        self.indent = config.indent_unit
        self.item_separator = config.item_separator
        if self.indent is not None:
            self.item_separator = self.item_separator.rstrip(" ")

    def encode(self, obj: JsonValueLoose) -> str:
        try:
            self._write_value(obj, 0)
            while self.stack:
                frame = self.stack[-1]
                member = self._next_member(frame)
                if member is _DONE:
                    self.stack.pop()
                    self._leave(frame.container)
                    self._close(frame)
                elif frame.kind is FrameKind.DEFAULT:
                    self._write_value(member, frame.level)
                else:
                    self._write_value(member, frame.level + 1)
        except TypeError as e:
            # Innermost frame first
            for frame in reversed(self.stack):
                if frame.note is not None:
                    e.add_note(frame.note)
            raise
        return "".join(self.chunks)

    def _write_value(self, obj: Any, level: int) -> None:
        """Writes a scalar, or opens a frame for anything else."""
        if obj is None:
            text = "null"
        elif obj is True:
            text = "true"
        elif obj is False:
            text = "false"
        elif isinstance(obj, str):
            text = _encode_string(obj, self.config.ensure_ascii)
        elif isinstance(obj, int):
            text = int.__repr__(obj)
        elif isinstance(obj, float):
            text = _encode_float(obj, self.config.allow_nan)
        else:
            self._open(obj, level)
            return
        self.chunks.append(text)

    def _open(self, obj: Any, level: int) -> None:
        if isinstance(obj, dict):
            self._enter(obj)
            kind = FrameKind.OBJECT
            members: Iterator[Any] = iter(self._object_members(obj))
            self.chunks.append("{")
        elif isinstance(obj, list | tuple):
            self._enter(obj)
            kind = FrameKind.ARRAY
            members = enumerate(obj)
            self.chunks.append("[")
        elif self.config.default is not None:
            self._enter(obj)
            kind = FrameKind.DEFAULT
            members = iter((obj,))
        else:
            msg = f"Object of type {type(obj).__name__} is not JSON serializable"
            raise UnsupportedTypeError(msg)

        self.stack.append(EncodeFrame(obj, kind, level, members))

    def _object_members(
        self, d: dict[Any, Any]
    ) -> list[tuple[Any, str, Any]]:
        """
        Coerces the keys of d up front.

        Returns (original key, JSON key, value) triples in output order.
        Keys that coerce to the same text are refused, since the decoder
        would silently keep only the last of them.
        """
        members = []
        seen: set[str] = set()
        for key, value in d.items():
            str_key = _coerce_key(key, self.config)
            if str_key is None:
                continue
            if str_key in seen:
                raise InvalidKeyError(
                    f"duplicate key {str_key!r} after coercing {key!r}"
                )
            seen.add(str_key)
            members.append((key, str_key, value))

        if self.config.sort_keys:
            members.sort(key=lambda member: member[0])
        return members

    def _next_member(self, frame: EncodeFrame) -> Any:
        """
        Advances frame to its next member and returns the value to encode.

        Writes whatever precedes the value (separator, indentation, key).
        Returns _DONE when the frame is exhausted.
        """
        member = next(frame.members, _DONE)
        if member is _DONE:
            return _DONE

        if frame.kind is FrameKind.DEFAULT:
            default = self.config.default
            assert default is not None
            frame.note = f"when serializing {type(member).__name__} object"
            return default(member)

        if frame.count:
            self.chunks.append(self.item_separator)
        if self.indent is not None:
            self.chunks.append("\n" + self.indent * (frame.level + 1))
        frame.count += 1

        if frame.kind is FrameKind.ARRAY:
            index, value = member
            kind = type(frame.container).__name__
            frame.note = f"when serializing {kind} item {index}"
            return value

        key, str_key, value = member
        frame.note = f"when serializing dict item {key!r}"
        self.chunks.append(
            _encode_string(str_key, self.config.ensure_ascii)
            + self.config.key_separator
        )
        return value

    def _close(self, frame: EncodeFrame) -> None:
        if frame.kind is FrameKind.DEFAULT:
            return
        if frame.count and self.indent is not None:
            self.chunks.append("\n" + self.indent * frame.level)
        self.chunks.append(_CLOSERS[frame.kind])

    def _enter(self, container: Any) -> None:
        if self.markers is None:
            return
        marker = id(container)
        if marker in self.markers:
            raise ValueError("Circular reference detected")
        self.markers.add(marker)

    def _leave(self, container: Any) -> None:
        if self.markers is not None:
            self.markers.discard(id(container))


def _encode_string(s: str, ensure_ascii: bool) -> str:
    """Encode string with proper escape sequences."""
    escaped = s.translate(ESCAPES)
    if ensure_ascii and not escaped.isascii():
        escaped = "".join(
            char if ord(char) <= ASCII_LIMIT else escape_non_ascii(char)
            for char in escaped
        )
    return f'"{escaped}"'


def _encode_float(n: float, allow_nan: bool) -> str:
    """Encode float values with JSON compliance."""
    if math.isnan(n):
        text = "NaN"
    elif math.isinf(n):
        text = "Infinity" if n > 0 else "-Infinity"
    else:
        return float.__repr__(n)

    if not allow_nan:
        raise ValueError(
            f"Out of range float values are not JSON compliant: {text}"
        )
    return text


def _coerce_key(key: Any, config: EncodeConfig) -> str | None:
    """
    Converts a dict key to its JSON string form.

    Returns None when the key should be skipped.
    """
    if isinstance(key, str):
        str_key = key
    elif key is True:
        str_key = "true"
    elif key is False:
        str_key = "false"
    elif key is None:
        str_key = "null"
    elif isinstance(key, int):
        str_key = int.__repr__(key)
    elif isinstance(key, float):
        str_key = _encode_float(key, config.allow_nan)
    elif config.skipkeys and not isinstance(key, _CONTAINER_TYPES):
        return None
    else:
        raise InvalidKeyError(
            f"keys must be str, int, float, bool or None, not "
            f"{type(key).__name__}"
        )

    if not str_key:
        raise InvalidKeyError("keys must be non-empty strings")
    return str_key


def encode_document(obj: JsonValueLoose, config: EncodeConfig) -> str:
    """Encodes one value tree as a JSON document."""
    with profile_hot_path("encode"):
        return _Encoder(config).encode(obj)
