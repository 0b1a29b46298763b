"""
Stack-driven JSON decoder.

A single forward pass over the input. The decoder keeps an explicit stack of
open containers instead of recursing, so nesting depth is bounded only by
memory. Which characters may come next is decided by the current ParseState;
a character outside that acceptance set is a syntax error whose message
depends on the state.
"""

import sys
from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from typing import Any

from stackjson._config import ParseConfig
from stackjson._errors import JSONDecodeError
from stackjson._escapes import HEX_DIGITS
from stackjson._escapes import UNESCAPES
from stackjson._escapes import combine_surrogates
from stackjson._escapes import is_high_surrogate
from stackjson._escapes import is_low_surrogate
from stackjson._profiling import profile_hot_path
from stackjson._types import JsonValueOrTransformed
from stackjson._types import Position

WHITESPACE = frozenset(" \t\n\r")
STRUCTURAL = frozenset('{}[],:"')
DELIMITERS = STRUCTURAL | WHITESPACE
_DIGITS = frozenset("0123456789")
_CONSTANTS = frozenset({"NaN", "Infinity", "-Infinity"})
_LITERALS: dict[str, bool | None] = {"true": True, "false": False, "null": None}


class ParseState(Enum):
    """What the decoder accepts next."""

    START = "start"
    OBJECT_START = "object_start"
    OBJECT_KEY = "object_key"
    OBJECT_COLON = "object_colon"
    OBJECT_VALUE = "object_value"
    OBJECT_COMMA = "object_comma"
    ARRAY_START = "array_start"
    ARRAY_VALUE = "array_value"
    ARRAY_COMMA = "array_comma"
    END = "end"


class TokenKind(Enum):
    """Classification of a bare (unquoted) token."""

    INTEGER = "integer"
    FLOAT = "float"
    LITERAL = "literal"
    CONSTANT = "constant"
    INVALID = "invalid"


_VALUE_OPENERS = frozenset('{["')

# Structural characters accepted in each state. In the value states any
# non-structural character also starts a bare token.
ACCEPTANCE: dict[ParseState, frozenset[str]] = {
    ParseState.START: _VALUE_OPENERS,
    ParseState.OBJECT_START: frozenset('"}'),
    ParseState.OBJECT_KEY: frozenset('"'),
    ParseState.OBJECT_COLON: frozenset(":"),
    ParseState.OBJECT_VALUE: _VALUE_OPENERS,
    ParseState.OBJECT_COMMA: frozenset(",}"),
    ParseState.ARRAY_START: _VALUE_OPENERS | {"]"},
    ParseState.ARRAY_VALUE: _VALUE_OPENERS,
    ParseState.ARRAY_COMMA: frozenset(",]"),
    ParseState.END: frozenset(),
}

VALUE_STATES = frozenset(
    {
        ParseState.START,
        ParseState.OBJECT_VALUE,
        ParseState.ARRAY_START,
        ParseState.ARRAY_VALUE,
    }
)

_EXPECTING_VALUE = "Expecting value"
_EXPECTING_KEY = "Expecting property name enclosed in double quotes"
_EXPECTING_COMMA = "Expecting ',' delimiter"

_REJECTIONS: dict[ParseState, str] = {
    ParseState.START: _EXPECTING_VALUE,
    ParseState.OBJECT_START: _EXPECTING_KEY,
    ParseState.OBJECT_KEY: _EXPECTING_KEY,
    ParseState.OBJECT_COLON: "Expecting ':' delimiter",
    ParseState.OBJECT_VALUE: _EXPECTING_VALUE,
    ParseState.OBJECT_COMMA: _EXPECTING_COMMA,
    ParseState.ARRAY_START: _EXPECTING_VALUE,
    ParseState.ARRAY_VALUE: _EXPECTING_VALUE,
    ParseState.ARRAY_COMMA: _EXPECTING_COMMA,
    ParseState.END: "Extra data",
}


@dataclass(frozen=True)
class JsonToken:
    """A bare token isolated between delimiters."""

    kind: TokenKind
    value: str
    start: Position
    end: Position


@dataclass
class ContainerFrame:
    """
    One open array or object on the container stack.

    Objects collect (key, value) pairs so hooks see them in source order;
    key holds the name still waiting for its value.
    """

    is_object: bool
    items: list[Any] = field(default_factory=list)
    key: str | None = None


class JsonScanner:
    """
    Character-level scanning over the input text.

    Isolates strings (decoding escapes as it goes) and bare tokens; the
    decoder decides whether they are allowed where they appear.
    """

    def __init__(self, text: str, strict: bool = True):
        self.text = text
        self.pos = 0
        self.length = len(text)
        self.strict = strict

    def at_end(self) -> bool:
        return self.pos >= self.length

    def peek(self) -> str:
        """Returns current character without advancing."""
        return self.text[self.pos] if self.pos < self.length else "\0"

    def advance(self) -> str:
        """Returns current character and advances position."""
        char = self.peek()
        if self.pos < self.length:
            self.pos += 1
        return char

    def skip_whitespace(self) -> None:
        """Skips space, tab, newline and carriage return."""
        while self.pos < self.length and self.text[self.pos] in WHITESPACE:
            self.pos += 1

    def scan_string(self) -> str:
        """Scans a quoted string and returns its decoded content."""
        start = self.pos
        with profile_hot_path("scan_string"):
            self.advance()
            chunks: list[str] = []
            run_start = self.pos

            while self.pos < self.length:
                char = self.text[self.pos]
                if char == '"':
                    chunks.append(self.text[run_start : self.pos])
                    self.pos += 1
                    return "".join(chunks)
                elif char == "\\":
                    chunks.append(self.text[run_start : self.pos])
                    chunks.append(self._scan_escape(start))
                    run_start = self.pos
                elif self.strict and char < " ":
                    raise JSONDecodeError(
                        "Invalid control character at", self.text, self.pos
                    )
                else:
                    self.pos += 1

            raise JSONDecodeError(
                "Unterminated string starting at", self.text, start
            )

    def _scan_escape(self, string_start: Position) -> str:
        """Decodes the escape sequence at the current backslash."""
        escape_pos = self.pos
        if escape_pos + 1 >= self.length:
            raise JSONDecodeError(
                "Unterminated string starting at", self.text, string_start
            )

        char = self.text[escape_pos + 1]
        if char in UNESCAPES:
            self.pos += 2
            return UNESCAPES[char]
        if char != "u":
            raise JSONDecodeError(
                f"Invalid \\escape: {char!r}", self.text, escape_pos
            )

        code = self._hex_escape_at(escape_pos)
        if code is None:
            raise JSONDecodeError(
                "Invalid \\uXXXX escape", self.text, escape_pos
            )
        self.pos = escape_pos + 6

        if is_high_surrogate(code):
            low = self._hex_escape_at(self.pos)
            if low is not None and is_low_surrogate(low):
                code = combine_surrogates(code, low)
                self.pos += 6
        return chr(code)

    def _hex_escape_at(self, pos: Position) -> int | None:
        """Returns the code point of a \\uXXXX escape at pos, if well formed."""
        if self.text[pos : pos + 2] != "\\u":
            return None
        digits = self.text[pos + 2 : pos + 6]
        if len(digits) != 4 or not all(d in HEX_DIGITS for d in digits):
            return None
        return int(digits, 16)

    def scan_token(self) -> JsonToken:
        """Isolates a bare token up to the next delimiter and classifies it."""
        start = self.pos
        with profile_hot_path("scan_token"):
            while (
                self.pos < self.length and self.text[self.pos] not in DELIMITERS
            ):
                self.pos += 1
            value = self.text[start : self.pos]
            return JsonToken(_classify(value), value, start, self.pos)


def _skip_digits(token: str, i: int) -> int:
    while i < len(token) and token[i] in _DIGITS:
        i += 1
    return i


def _number_kind(token: str) -> TokenKind:
    """Matches the JSON number grammar; ASCII digits only."""
    i = 1 if token.startswith("-") else 0

    if token[i : i + 1] == "0":
        i += 1
    elif token[i : i + 1] in _DIGITS:
        i = _skip_digits(token, i)
    else:
        return TokenKind.INVALID

    kind = TokenKind.INTEGER
    if token[i : i + 1] == ".":
        end = _skip_digits(token, i + 1)
        if end == i + 1:
            return TokenKind.INVALID
        i = end
        kind = TokenKind.FLOAT

    if token[i : i + 1] in ("e", "E"):
        i += 1
        if token[i : i + 1] in ("+", "-"):
            i += 1
        end = _skip_digits(token, i)
        if end == i:
            return TokenKind.INVALID
        i = end
        kind = TokenKind.FLOAT

    return kind if i == len(token) else TokenKind.INVALID


def _classify(token: str) -> TokenKind:
    if token in _LITERALS:
        return TokenKind.LITERAL
    if token in _CONSTANTS:
        return TokenKind.CONSTANT
    return _number_kind(token)


class JsonDecoder:
    """
    Acceptance-set automaton over a JsonScanner.

    Values are bound to the container on top of the stack as they complete;
    containers themselves are bound when they close, so object hooks see the
    finished pairs.
    """

    def __init__(self, text: str, config: ParseConfig):
        self.text = text
        self.config = config
        self.scanner = JsonScanner(text, config.strict)
        self.state = ParseState.START
        self.stack: list[ContainerFrame] = []
        self.result: JsonValueOrTransformed = None
        self._last_comma: Position = 0

    def decode(self) -> JsonValueOrTransformed:
        """Parses the whole text, raising JSONDecodeError on the first fault."""
        if self.text.startswith("\ufeff"):
            raise JSONDecodeError(
                "JSON input should not contain BOM (Byte Order Mark)",
                self.text,
                0,
            )

        scanner = self.scanner
        with profile_hot_path("decode", len(self.text)):
            while True:
                scanner.skip_whitespace()
                if scanner.at_end():
                    break

                char = scanner.peek()
                if char in ACCEPTANCE[self.state]:
                    self._accept(char)
                elif self.state in VALUE_STATES and char not in STRUCTURAL:
                    self._emit(self._token_value(scanner.scan_token()))
                else:
                    raise self._reject(char)

            if self.state is not ParseState.END:
                raise self._reject(None)
            return self.result

    def _accept(self, char: str) -> None:
        scanner = self.scanner
        if char == "{" or char == "[":
            self.stack.append(ContainerFrame(char == "{"))
            scanner.advance()
            self.state = (
                ParseState.OBJECT_START
                if char == "{"
                else ParseState.ARRAY_START
            )
        elif char == "}" or char == "]":
            scanner.advance()
            self._emit(self._close(self.stack.pop()))
        elif char == ",":
            self._last_comma = scanner.pos
            scanner.advance()
            self.state = (
                ParseState.OBJECT_KEY
                if self.stack[-1].is_object
                else ParseState.ARRAY_VALUE
            )
        elif char == ":":
            scanner.advance()
            self.state = ParseState.OBJECT_VALUE
        elif self.state in (ParseState.OBJECT_START, ParseState.OBJECT_KEY):
            key_pos = scanner.pos
            key = scanner.scan_string()
            if not key:
                raise JSONDecodeError("Empty property name", self.text, key_pos)
            self.stack[-1].key = key
            self.state = ParseState.OBJECT_COLON
        else:
            self._emit(scanner.scan_string())

    def _emit(self, value: JsonValueOrTransformed) -> None:
        """Binds a finished value to the enclosing container, or the root."""
        if not self.stack:
            self.result = value
            self.state = ParseState.END
            return

        frame = self.stack[-1]
        if frame.is_object:
            frame.items.append((frame.key, value))
            frame.key = None
            self.state = ParseState.OBJECT_COMMA
        else:
            frame.items.append(value)
            self.state = ParseState.ARRAY_COMMA

    def _close(self, frame: ContainerFrame) -> JsonValueOrTransformed:
        if not frame.is_object:
            return frame.items
        if self.config.object_pairs_hook:
            return self.config.object_pairs_hook(frame.items)
        obj = dict(frame.items)
        if self.config.object_hook:
            return self.config.object_hook(obj)
        return obj

    def _token_value(self, token: JsonToken) -> JsonValueOrTransformed:
        config = self.config
        if token.kind is TokenKind.LITERAL:
            return _LITERALS[token.value]
        if token.kind is TokenKind.FLOAT:
            if config.parse_float:
                return config.parse_float(token.value)
            return float(token.value)
        if token.kind is TokenKind.INTEGER:
            if config.parse_int:
                return config.parse_int(token.value)
            return self._parse_integer(token)
        if token.kind is TokenKind.CONSTANT and config.parse_constant:
            return config.parse_constant(token.value)
        raise JSONDecodeError(_EXPECTING_VALUE, self.text, token.start)

    def _parse_integer(self, token: JsonToken) -> int:
        try:
            return int(token.value)
        except ValueError as e:
            limit = sys.get_int_max_str_digits()
            if limit and len(token.value.lstrip("-")) > limit:
                raise JSONDecodeError(
                    "Number too large", self.text, token.start
                ) from e
            raise JSONDecodeError(
                "Invalid number", self.text, token.start
            ) from e

    def _reject(self, char: str | None) -> JSONDecodeError:
        """Builds the error for a character the current state refuses."""
        pos = self.scanner.pos
        if char == "]" and self.state is ParseState.ARRAY_VALUE:
            return JSONDecodeError(
                "Illegal trailing comma before end of array",
                self.text,
                self._last_comma,
            )
        if char == "}" and self.state is ParseState.OBJECT_KEY:
            return JSONDecodeError(
                "Illegal trailing comma before end of object",
                self.text,
                self._last_comma,
            )
        return JSONDecodeError(_REJECTIONS[self.state], self.text, pos)


def decode_document(text: str, config: ParseConfig) -> JsonValueOrTransformed:
    """Decodes one complete JSON document."""
    return JsonDecoder(text, config).decode()
