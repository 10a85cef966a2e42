"""
Hot-path profiling for the indexer and the on-demand parser.

Disabled unless OPTJSON_PROFILE is set at import time or enable_profiling()
is called. When disabled, ProfileContext does no timing and records nothing.
"""

from __future__ import annotations

import os
import time
from dataclasses import dataclass
from typing import Any

PROFILE_HOT_PATHS = __debug__ and "OPTJSON_PROFILE" in os.environ


@dataclass
class HotPathStats:
    """Accumulated timings for one profiled function."""

    function_name: str
    call_count: int = 0
    total_time_ns: int = 0
    bytes_processed: int = 0

    def record_call(self, duration_ns: int, nbytes: int = 0) -> None:
        """Records one call with its duration and the bytes it covered."""
        self.call_count += 1
        self.total_time_ns += duration_ns
        self.bytes_processed += nbytes

    @property
    def mean_time_ns(self) -> float:
        if not self.call_count:
            return 0.0
        return self.total_time_ns / self.call_count


_hot_path_stats: dict[str, HotPathStats] = {}


class ProfileContext:
    """
    Times the enclosed block under ``func_name``.

    The enabled check happens on entry, so toggling profiling takes effect
    for the next block without re-importing.
    """

    __slots__ = ("func_name", "nbytes", "start_time")

    def __init__(self, func_name: str, nbytes: int = 0) -> None:
        self.func_name = func_name
        self.nbytes = nbytes
        self.start_time = 0

    def __enter__(self) -> ProfileContext:
        if PROFILE_HOT_PATHS:
            self.start_time = time.perf_counter_ns()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if not PROFILE_HOT_PATHS or not self.start_time:
            return
        duration = time.perf_counter_ns() - self.start_time
        stats = _hot_path_stats.get(self.func_name)
        if stats is None:
            stats = _hot_path_stats[self.func_name] = HotPathStats(
                self.func_name
            )
        stats.record_call(duration, self.nbytes)


def enable_profiling() -> None:
    global PROFILE_HOT_PATHS
    PROFILE_HOT_PATHS = True


def disable_profiling() -> None:
    global PROFILE_HOT_PATHS
    PROFILE_HOT_PATHS = False


def get_hot_path_stats() -> dict[str, HotPathStats]:
    """Returns a snapshot of the current profiling statistics."""
    return _hot_path_stats.copy()


def clear_hot_path_stats() -> None:
    _hot_path_stats.clear()
