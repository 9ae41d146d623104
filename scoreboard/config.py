"""
Configuration for the handball scoreboard.

This module centralizes all tunable settings (collaborator credentials and
models, timer cadences, storage location and web server binding).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .utils import constants


def _env_int(name: str, default: int) -> int:
    """Read an integer environment variable, returning default on missing/invalid values."""
    try:
        return int(os.getenv(name, str(default)))
    except (TypeError, ValueError):
        return default


def _env_float(name: str, default: float) -> float:
    """Read a float environment variable, returning default on missing/invalid values."""
    try:
        return float(os.getenv(name, str(default)))
    except (TypeError, ValueError):
        return default


def _env_bool(name: str, default: bool) -> bool:
    """Read a boolean flag such as 1/0, true/false, yes/no."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_path(name: str) -> Optional[Path]:
    raw = os.getenv(name)
    return Path(raw).expanduser() if raw else None


@dataclass(frozen=True)
class AppConfig:
    """
    Immutable app configuration.

    Leaving GEMINI_API_KEY empty disables both the announcements and the
    venue lookups; the scoreboard itself keeps working.
    """

    # Collaborators
    gemini_api_key: str = field(default_factory=lambda: os.getenv("GEMINI_API_KEY", ""))
    gemini_api_base: str = field(default_factory=lambda: os.getenv("GEMINI_API_BASE", constants.GEMINI_API_BASE))
    speech_model: str = field(default_factory=lambda: os.getenv("SPEECH_MODEL", constants.SPEECH_MODEL))
    speech_voice: str = field(default_factory=lambda: os.getenv("SPEECH_VOICE", constants.SPEECH_VOICE))
    location_model: str = field(default_factory=lambda: os.getenv("LOCATION_MODEL", constants.LOCATION_MODEL))
    request_timeout_seconds: float = field(default_factory=lambda: _env_float("REQUEST_TIMEOUT_SECONDS", 30.0))

    # Timers
    lookup_debounce_ms: int = field(default_factory=lambda: _env_int("LOOKUP_DEBOUNCE_MS", 800))
    tick_interval_ms: int = field(default_factory=lambda: _env_int("TICK_INTERVAL_MS", 1000))

    # Storage & audio
    state_file: Optional[Path] = field(default_factory=lambda: _env_path("SCOREBOARD_STATE_FILE"))
    audio_enabled: bool = field(default_factory=lambda: _env_bool("AUDIO_ENABLED", True))

    # Web server
    host: str = field(default_factory=lambda: os.getenv("HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: _env_int("PORT", 7122))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())

    def __post_init__(self):
        # dataclass frozen => use object.__setattr__
        object.__setattr__(self, "lookup_debounce_ms", max(0, self.lookup_debounce_ms))
        object.__setattr__(self, "tick_interval_ms", max(1, self.tick_interval_ms))
        object.__setattr__(self, "request_timeout_seconds", max(1.0, self.request_timeout_seconds))

    @property
    def lookup_debounce_seconds(self) -> float:
        return self.lookup_debounce_ms / 1000.0

    @property
    def tick_interval_seconds(self) -> float:
        return self.tick_interval_ms / 1000.0

    @property
    def collaborators_enabled(self) -> bool:
        return bool(self.gemini_api_key.strip())
