"""
Test data generators for stackjson benchmarks.

Builds value trees shaped like the documents the codec usually handles:
small settings files, long key-binding tables, deeply nested layouts and
string-heavy logs with escapes.
"""

import random
import string
from typing import Any

import stackjson

_SEED = 1234
_ESCAPE_PROBABILITY = 0.3


def generate_test_tree(data_type: str) -> Any:
    """Generates a value tree of the given shape."""
    generators = {
        "settings": _generate_settings,
        "bindings": _generate_bindings,
        "nested_layout": _generate_nested_layout,
        "string_heavy": _generate_string_heavy,
    }

    if data_type not in generators:
        raise ValueError(f"Unknown data type: {data_type}")

    return generators[data_type](random.Random(_SEED))


def generate_test_data(data_type: str) -> str:
    """Generates JSON text of the given shape."""
    return stackjson.dumps(generate_test_tree(data_type))


def _generate_settings(rng: random.Random) -> dict[str, Any]:
    """A small settings document (< 1KB)."""
    return {
        "version": 3,
        "volume": rng.randint(0, 100),
        "scale": round(rng.uniform(0.5, 2.0), 3),
        "startup": True,
        "theme": {"name": "dark", "accent": "#3a7bd5"},
        "recent": [_random_string(rng, 12) for _ in range(5)],
    }


def _generate_bindings(rng: random.Random) -> list[dict[str, Any]]:
    """A long table of hotkey bindings (> 100KB)."""
    return [
        {
            "id": i,
            "hotkey": f"^!{rng.choice(string.ascii_uppercase)}",
            "action": _random_string(rng, 16),
            "enabled": rng.random() > 0.2,
            "delay": round(rng.uniform(0, 1), 4),
            "args": [rng.randint(0, 255) for _ in range(4)],
            "note": None,
        }
        for i in range(1500)
    ]


def _generate_nested_layout(rng: random.Random) -> dict[str, Any]:
    """A window layout nested several levels deep."""

    def pane(depth: int) -> dict[str, Any]:
        if depth == 0:
            return {"title": _random_string(rng, 8), "w": rng.randint(1, 9)}
        return {
            "split": rng.choice(["h", "v"]),
            "children": [pane(depth - 1) for _ in range(3)],
        }

    return pane(6)


def _generate_string_heavy(rng: random.Random) -> list[str]:
    """Log lines with quotes, slashes, control characters and wide text."""
    specials = ['"', "\\", "/", "\n", "\t", "é", "中"]
    lines = []
    for _ in range(2000):
        chars = list(_random_string(rng, 60))
        if rng.random() < _ESCAPE_PROBABILITY:
            for _ in range(5):
                chars.insert(rng.randrange(len(chars)), rng.choice(specials))
        lines.append("".join(chars))
    return lines


def _random_string(rng: random.Random, length: int) -> str:
    alphabet = string.ascii_letters + string.digits + " "
    return "".join(rng.choice(alphabet) for _ in range(length))
