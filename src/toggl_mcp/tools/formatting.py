"""Text formatting helpers for tool results."""

from datetime import timedelta


def format_duration(seconds: int) -> str:
    """Format a duration in seconds, e.g. ``[1h 1m 5s]``.

    Negative durations mark running entries and render as ``[running]``.
    Hours are omitted when zero, and minutes too when both are zero.
    """
    if seconds < 0:
        return "[running]"

    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    secs = seconds % 60

    if hours > 0:
        return f"[{hours}h {minutes}m {secs}s]"
    if minutes > 0:
        return f"[{minutes}m {secs}s]"
    return f"[{secs}s]"


def format_elapsed(delta: timedelta) -> str:
    """Format an elapsed time rounded to whole seconds, e.g. ``1:02:03``.

    Negative deltas, from clock skew against the API, render as ``0:00:00``.
    """
    return str(timedelta(seconds=max(0, round(delta.total_seconds()))))
