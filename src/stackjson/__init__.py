"""
JSON encoding and decoding with a stack-driven parser.

Decoding keeps an explicit stack of open containers, so deeply nested
documents never hit the recursion limit, and reports syntax errors with
line, column, offset and the offending fragment. Encoding is compact by
default and pretty-printed on request.
"""

from typing import Any

from stackjson._config import EncodeConfig
from stackjson._config import ParseConfig
from stackjson._decoder import ContainerFrame
from stackjson._decoder import JsonDecoder
from stackjson._decoder import JsonScanner
from stackjson._decoder import JsonToken
from stackjson._decoder import ParseState
from stackjson._decoder import TokenKind
from stackjson._decoder import decode_document
from stackjson._encoder import encode_document
from stackjson._errors import ConfigurationError
from stackjson._errors import InvalidKeyError
from stackjson._errors import JSONDecodeError
from stackjson._errors import JSONError
from stackjson._errors import UnsupportedTypeError
from stackjson._profiling import PROFILE_HOT_PATHS
from stackjson._profiling import HotPathStats
from stackjson._profiling import clear_hot_path_stats
from stackjson._profiling import format_hot_path_stats
from stackjson._profiling import get_hot_path_stats
from stackjson._source import Source
from stackjson._source import Target
from stackjson._source import read_source
from stackjson._source import write_target
from stackjson._types import JsonValue
from stackjson._types import JsonValueLoose
from stackjson._types import JsonValueOrTransformed

__version__ = "0.1.0"


def loads(s: str, **kwargs: Any) -> JsonValueOrTransformed:
    """
    Parses a JSON document held in a string.

    Keyword arguments are ParseConfig options.
    """
    if not isinstance(s, str):
        raise TypeError(
            f"the JSON object must be str, not {type(s).__name__}"
        )

    config = ParseConfig(**kwargs)
    return decode_document(s, config)


def load(
    fp: Source, *, encoding: str | None = None, **kwargs: Any
) -> JsonValueOrTransformed:
    """
    Parses JSON from a file object, a path, or literal text.

    A string naming a readable file is decoded from that file's contents;
    any other string is decoded as JSON text itself.
    """
    return loads(read_source(fp, encoding), **kwargs)


def dumps(obj: JsonValueLoose, **kwargs: Any) -> str:
    """
    Serializes Python objects to a JSON string.

    Compact unless indent is given. Keyword arguments are EncodeConfig
    options.
    """
    config = EncodeConfig(**kwargs)
    return encode_document(obj, config)


def dump(
    obj: JsonValueLoose,
    fp: Target,
    *,
    encoding: str | None = None,
    **kwargs: Any,
) -> None:
    """Serializes Python objects to a file object or a path."""
    write_target(fp, dumps(obj, **kwargs), encoding)


# Names familiar from JavaScript
parse = load
stringify = dumps


__all__ = [
    "PROFILE_HOT_PATHS",
    "ConfigurationError",
    "ContainerFrame",
    "EncodeConfig",
    "HotPathStats",
    "InvalidKeyError",
    "JSONDecodeError",
    "JSONError",
    "JsonDecoder",
    "JsonScanner",
    "JsonToken",
    "JsonValue",
    "ParseConfig",
    "ParseState",
    "TokenKind",
    "UnsupportedTypeError",
    "clear_hot_path_stats",
    "dump",
    "dumps",
    "format_hot_path_stats",
    "get_hot_path_stats",
    "load",
    "loads",
    "parse",
    "stringify",
]
