"""Tests for environment-driven configuration."""

from pathlib import Path

from scoreboard.config import AppConfig


def test_defaults(monkeypatch):
    for name in ("GEMINI_API_KEY", "LOOKUP_DEBOUNCE_MS", "TICK_INTERVAL_MS", "SCOREBOARD_STATE_FILE", "PORT"):
        monkeypatch.delenv(name, raising=False)

    config = AppConfig()

    assert config.lookup_debounce_seconds == 0.8
    assert config.tick_interval_seconds == 1.0
    assert config.state_file is None
    assert config.port == 7122
    assert not config.collaborators_enabled


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("GEMINI_API_KEY", "abc")
    monkeypatch.setenv("LOOKUP_DEBOUNCE_MS", "250")
    monkeypatch.setenv("SCOREBOARD_STATE_FILE", str(tmp_path / "state.json"))
    monkeypatch.setenv("AUDIO_ENABLED", "no")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    config = AppConfig()

    assert config.collaborators_enabled
    assert config.lookup_debounce_seconds == 0.25
    assert config.state_file == Path(tmp_path / "state.json")
    assert config.audio_enabled is False
    assert config.log_level == "DEBUG"


def test_invalid_values_fall_back_or_clamp(monkeypatch):
    monkeypatch.setenv("PORT", "eighty")
    monkeypatch.setenv("TICK_INTERVAL_MS", "-5")
    monkeypatch.setenv("REQUEST_TIMEOUT_SECONDS", "nope")

    config = AppConfig()

    assert config.port == 7122
    assert config.tick_interval_ms == 1
    assert config.request_timeout_seconds == 30.0
