"""Type aliases shared by the decoder and encoder."""

from collections.abc import Callable
from typing import Any
from typing import TypeAlias

# Recursive value tree; the Python type of each node is its variant tag
JsonValue = (
    str | int | float | bool | None | dict[str, "JsonValue"] | list["JsonValue"]
)
Position: TypeAlias = int

# Hooks may replace parsed values with arbitrary objects
JsonValueOrTransformed = JsonValue | Any
# Encoder input is checked at run time, not by the annotation
JsonValueLoose = Any

ObjectHook = Callable[[dict[str, Any]], Any] | None
ObjectPairsHook = Callable[[list[tuple[str, Any]]], Any] | None
ParseFloatHook = Callable[[str], Any] | None
ParseIntHook = Callable[[str], Any] | None
ParseConstantHook = Callable[[str], Any] | None
DefaultHook = Callable[[Any], Any] | None
