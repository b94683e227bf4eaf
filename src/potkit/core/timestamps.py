"""
Millisecond clock for pending start times and durations (stdlib-only).

``Pending`` and ``PendingStale`` record when loading started so callers can
measure how long a fetch has been in flight. The clock lives here, in one
place, so tests can freeze it and collaborators know which time base
``duration()`` expects.

Features:
    - **now_ms():** Monotonic milliseconds, the default ``start_time``
    - **elapsed_ms():** Difference between two readings of that clock

Guardrails:
    ❌ DON'T: Pass wall-clock epoch millis to ``duration()``
    ✅ DO: Use ``now_ms()`` (or your own monotonic source) for both readings

Tags:
    clock, monotonic, timestamps, potkit, stdlib-only

STDLIB ONLY - NO PYDANTIC.
"""

import time


def now_ms() -> int:
    """Current monotonic time in whole milliseconds."""
    return time.monotonic_ns() // 1_000_000


def elapsed_ms(start_ms: int, current_ms: int | None = None) -> int:
    """Milliseconds between ``start_ms`` and ``current_ms`` (default: now)."""
    if current_ms is None:
        current_ms = now_ms()
    return current_ms - start_ms
