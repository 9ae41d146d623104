"""
Time helpers for the handball scoreboard.

This module contains the clock formatter and the timestamp source used by
the match history.
"""
import time
from datetime import datetime


def format_time(seconds: int) -> str:
    """
    Format seconds as MM:SS string.

    Args:
        seconds: Number of seconds to format (fractions are floored)

    Returns:
        Formatted time string in MM:SS format

    Example:
        >>> format_time(125)
        '02:05'
        >>> format_time(3661)
        '61:01'
    """
    seconds = max(0, int(seconds))
    m = seconds // 60
    s = seconds % 60
    return f"{m:02d}:{s:02d}"


def now_ts() -> float:
    """
    Get current timestamp in epoch seconds.

    Returns:
        Current time as floating point epoch seconds
    """
    return time.time()


def format_local_datetime(ts: float) -> str:
    """Render an epoch timestamp as a local ``DD/MM/YYYY, HH:MM:SS`` string."""
    return datetime.fromtimestamp(ts).strftime("%d/%m/%Y, %H:%M:%S")
