"""Immutable option sets for decoding and encoding."""

from dataclasses import dataclass

from stackjson._errors import ConfigurationError
from stackjson._types import DefaultHook
from stackjson._types import ObjectHook
from stackjson._types import ObjectPairsHook
from stackjson._types import ParseConstantHook
from stackjson._types import ParseFloatHook
from stackjson._types import ParseIntHook


@dataclass(frozen=True)
class ParseConfig:
    """
    Configures JSON parsing behavior with immutable settings.

    Hooks receive the literal text of numbers and constants, or the
    finished pairs of an object when it closes.
    """

    strict: bool = True
    parse_float: ParseFloatHook = None
    parse_int: ParseIntHook = None
    parse_constant: ParseConstantHook = None
    object_pairs_hook: ObjectPairsHook = None
    object_hook: ObjectHook = None

    def __post_init__(self) -> None:
        if not isinstance(self.strict, bool):
            raise TypeError("strict must be a boolean")


@dataclass(frozen=True)
class EncodeConfig:
    """
    Configures JSON encoding behavior with immutable settings.

    The default is the compact form: no whitespace, ',' between members
    and ':' between key and value. An indent switches to one member per
    line with ': ' after keys.
    """

    skipkeys: bool = False
    ensure_ascii: bool = False
    sort_keys: bool = False
    check_circular: bool = True
    allow_nan: bool = False
    indent: str | int | None = None
    separators: tuple[str, str] | None = None
    default: DefaultHook = None

    def __post_init__(self) -> None:
        for flag in (
            "skipkeys",
            "ensure_ascii",
            "sort_keys",
            "check_circular",
            "allow_nan",
        ):
            if not isinstance(getattr(self, flag), bool):
                raise TypeError(f"{flag} must be a boolean")

        if isinstance(self.indent, bool) or not isinstance(
            self.indent, str | int | None
        ):
            raise TypeError(
                "indent must be None, a non-negative integer or a string"
            )
        if isinstance(self.indent, int) and self.indent < 0:
            raise ConfigurationError(
                f"indent must be non-negative, got {self.indent}"
            )

        if self.separators is not None and (
            len(self.separators) != 2
            or not all(isinstance(sep, str) for sep in self.separators)
        ):
            raise ConfigurationError(
                "separators must be an (item_separator, key_separator) pair"
            )

    @property
    def indent_unit(self) -> str | None:
        """Whitespace for one nesting level, or None for compact output."""
        if self.indent is None:
            return None
        if isinstance(self.indent, int):
            return " " * self.indent
        return self.indent

    @property
    def item_separator(self) -> str:
        return self.separators[0] if self.separators else ","

    @property
    def key_separator(self) -> str:
        if self.separators:
            return self.separators[1]
        return ":" if self.indent is None else ": "
