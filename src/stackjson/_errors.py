"""Exceptions raised by the codec."""

from stackjson._types import Position

_EXCERPT_LENGTH = 20


class JSONError(Exception):
    """Base class for every error raised by stackjson."""


class JSONDecodeError(JSONError, ValueError):
    """
    Handles JSON parsing failures with precise position and context information.

    Error state containing position, line/column numbers, and the fragment of
    text where parsing stopped, to help users find and fix syntax issues.
    """

    def __init__(self, msg: str, doc: str = "", pos: Position = 0) -> None:
        if not isinstance(msg, str):
            raise TypeError("msg must be a string")
        if not isinstance(pos, int) or pos < 0:
            raise ValueError("pos must be a non-negative integer")

        self.msg = msg
        self.doc = doc
        self.pos = pos

        self.lineno = doc.count("\n", 0, pos) + 1 if doc else 1
        self.colno = pos - doc.rfind("\n", 0, pos) if doc else pos + 1
        self.excerpt = _excerpt(doc, pos)

        super().__init__(
            f"{msg} at line {self.lineno}, column {self.colno} (char {pos})"
        )

    def __reduce__(self) -> tuple[type["JSONDecodeError"], tuple[str, str, int]]:
        return self.__class__, (self.msg, self.doc, self.pos)


class InvalidKeyError(JSONError, TypeError):
    """Object key that cannot be written as a non-empty JSON string."""


class UnsupportedTypeError(JSONError, TypeError):
    """Value whose type has no JSON representation."""


class ConfigurationError(JSONError, ValueError):
    """Encoder or decoder option outside its allowed range."""


def _excerpt(doc: str, pos: Position) -> str:
    """Returns the text from pos up to the end of its line, truncated."""
    fragment = doc[pos : pos + _EXCERPT_LENGTH]
    return fragment.split("\n", 1)[0]
