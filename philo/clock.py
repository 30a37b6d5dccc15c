"""Wall-clock time in milliseconds."""

import time


def now_ms() -> int:
    """Return the current wall-clock time in whole milliseconds."""
    return time.time_ns() // 1_000_000