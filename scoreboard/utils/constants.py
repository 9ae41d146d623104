"""
Constants for the handball scoreboard application.

This module contains the domain defaults shared by the models and services.
"""

# Clock defaults
DEFAULT_INITIAL_TIME_SECONDS = 30 * 60
MIN_INITIAL_TIME_SECONDS = 60
TICK_INTERVAL_SECONDS = 1.0

# Team placeholders; these never trigger a venue lookup
DEFAULT_HOME_NAME = "Home"
DEFAULT_AWAY_NAME = "Away"
PLACEHOLDER_NAMES = ("home", "away")
MIN_LOOKUP_NAME_LENGTH = 3
LOOKUP_DEBOUNCE_SECONDS = 0.8

# Storage keys
STATE_STORAGE_KEY = "handballScoreboardState"
HISTORY_STORAGE_KEY = "handballMatchHistory"

# End-of-period siren
ALARM_PULSE_COUNT = 3
ALARM_PULSE_SPACING_SECONDS = 0.6
ALARM_FREQ_START_HZ = 900.0
ALARM_FREQ_END_HZ = 600.0
ALARM_PULSE_DURATION_SECONDS = 0.5

# Audio formats
TTS_SAMPLE_RATE = 24000
TTS_CHANNELS = 1
PULSE_SAMPLE_RATE = 44100

# Collaborator defaults
GEMINI_API_BASE = "https://generativelanguage.googleapis.com"
SPEECH_MODEL = "gemini-2.5-flash-preview-tts"
SPEECH_VOICE = "Kore"
LOCATION_MODEL = "gemini-2.5-flash"
SPEECH_PROMPT = "Di en castellano: {home_name} {home_score}, {away_name} {away_score}"
VENUE_PROMPT = (
    'Busca la ubicación del pabellón o campo donde juega habitualmente '
    'el club de balonmano "{team_name}" en España.'
)
