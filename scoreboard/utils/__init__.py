"""
Utilities package for the handball scoreboard.

This package contains utility functions used throughout the application.
"""
from .time_utils import format_time, now_ts, format_local_datetime
from .constants import (
    DEFAULT_INITIAL_TIME_SECONDS, MIN_INITIAL_TIME_SECONDS,
    DEFAULT_HOME_NAME, DEFAULT_AWAY_NAME
)

__all__ = [
    "format_time", "now_ts", "format_local_datetime",
    "DEFAULT_INITIAL_TIME_SECONDS", "MIN_INITIAL_TIME_SECONDS",
    "DEFAULT_HOME_NAME", "DEFAULT_AWAY_NAME"
]
