"""Escape table shared by the decoder and encoder."""

# Character following a backslash -> decoded character
UNESCAPES: dict[str, str] = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

# Code point -> escaped form, for str.translate. Lone surrogates have no
# UTF-8 form and are escaped as well.
ESCAPES: dict[int, str] = {
    code: f"\\u{code:04x}"
    for code in (*range(0x20), *range(0x7F, 0xA0), *range(0xD800, 0xE000))
}
ESCAPES.update({ord(char): f"\\{key}" for key, char in UNESCAPES.items()})

ASCII_LIMIT = 0x7F
_BMP_LIMIT = 0xFFFF


def escape_non_ascii(char: str) -> str:
    """Escapes one character above ASCII, using a surrogate pair if needed."""
    code = ord(char)
    if code <= ASCII_LIMIT:
        return char
    if code <= _BMP_LIMIT:
        return f"\\u{code:04x}"
    code -= 0x10000
    high = 0xD800 | (code >> 10)
    low = 0xDC00 | (code & 0x3FF)
    return f"\\u{high:04x}\\u{low:04x}"


def combine_surrogates(high: int, low: int) -> int:
    """Returns the code point encoded by a UTF-16 surrogate pair."""
    return 0x10000 + ((high - 0xD800) << 10) + (low - 0xDC00)


def is_high_surrogate(code: int) -> bool:
    return 0xD800 <= code <= 0xDBFF


def is_low_surrogate(code: int) -> bool:
    return 0xDC00 <= code <= 0xDFFF
