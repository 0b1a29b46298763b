"""
Opt-in hot path profiling.

Enabled by setting STACKJSON_PROFILE in the environment before import. The
decoder and encoder wrap their hot paths in profile_hot_path(); with
profiling off that returns one shared no-op context and nothing is kept.
"""

import os
import time
from contextlib import AbstractContextManager
from contextlib import nullcontext
from dataclasses import dataclass
from types import TracebackType

PROFILE_HOT_PATHS = __debug__ and "STACKJSON_PROFILE" in os.environ

_NOT_PROFILED = nullcontext()


@dataclass
class HotPathStats:
    """Accumulated timings for one hot path."""

    name: str
    call_count: int = 0
    failures: int = 0
    total_time_ns: int = 0
    max_time_ns: int = 0
    chars_processed: int = 0

    def record_call(
        self, duration_ns: int, chars: int = 0, failed: bool = False
    ) -> None:
        self.call_count += 1
        self.failures += failed
        self.total_time_ns += duration_ns
        self.max_time_ns = max(self.max_time_ns, duration_ns)
        self.chars_processed += chars

    @property
    def ns_per_char(self) -> float | None:
        """Average cost per input character, when characters were counted."""
        if not self.chars_processed:
            return None
        return self.total_time_ns / self.chars_processed


_hot_path_stats: dict[str, HotPathStats] = {}


class _HotPathTimer(AbstractContextManager[None]):
    """Times one pass through a hot path and files it under its name."""

    __slots__ = ("chars", "name", "started")

    def __init__(self, name: str, chars: int) -> None:
        self.name = name
        self.chars = chars
        self.started = 0

    def __enter__(self) -> None:
        self.started = time.perf_counter_ns()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        elapsed = time.perf_counter_ns() - self.started
        stats = _hot_path_stats.get(self.name)
        if stats is None:
            stats = _hot_path_stats[self.name] = HotPathStats(self.name)
        stats.record_call(elapsed, self.chars, failed=exc_type is not None)


def profile_hot_path(
    name: str, chars: int = 0
) -> AbstractContextManager[None]:
    """Returns a context that times its body under name when profiling."""
    if PROFILE_HOT_PATHS:
        return _HotPathTimer(name, chars)
    return _NOT_PROFILED


def get_hot_path_stats() -> dict[str, HotPathStats]:
    """Returns a snapshot of the statistics gathered so far."""
    return dict(_hot_path_stats)


def clear_hot_path_stats() -> None:
    _hot_path_stats.clear()


def format_hot_path_stats() -> str:
    """Renders the gathered statistics as a table, slowest path first."""
    rows = sorted(
        _hot_path_stats.values(),
        key=lambda stats: stats.total_time_ns,
        reverse=True,
    )
    lines = [
        f"{'path':<12} {'calls':>8} {'failed':>7} {'total ms':>10} "
        f"{'max us':>9} {'ns/char':>8}"
    ]
    for stats in rows:
        per_char = stats.ns_per_char
        lines.append(
            f"{stats.name:<12} {stats.call_count:>8} {stats.failures:>7} "
            f"{stats.total_time_ns / 1e6:>10.3f} "
            f"{stats.max_time_ns / 1e3:>9.1f} "
            f"{'-' if per_char is None else f'{per_char:.1f}':>8}"
        )
    return "\n".join(lines)
