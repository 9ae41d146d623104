"""
Service Factory for dependency injection.

This module builds a ScoreboardSession with its collaborators (storage,
speech, venue lookup, audio output) constructed once from the AppConfig
and passed in explicitly.
"""
import logging
from typing import Optional

from ..config import AppConfig
from .audio_output import AudioOutput, NullAudioOutput, SoundDeviceAudioOutput
from .gemini_client import GeminiClient, GeminiSpeechSynthesizer, GeminiVenueLocator
from .interfaces import SpeechSynthesizer
from .persistence_service import JsonFileStore, KeyValueStore, MemoryStore, PersistenceService
from .scheduler import Scheduler
from .scoreboard_service import ScoreboardSession

logger = logging.getLogger(__name__)


class ServiceFactory:
    """
    Factory for creating the scoreboard session and its collaborators.

    Collaborators are created lazily and cached, so every session built by
    one factory shares the same HTTP client, audio device and store.
    """

    def __init__(self, config: Optional[AppConfig] = None):
        """Initialize factory with the given (or environment) configuration."""
        self.config = config or AppConfig()
        self._store: Optional[KeyValueStore] = None
        self._gemini_client: Optional[GeminiClient] = None
        self._audio_output: Optional[AudioOutput] = None
        self._speech: Optional[SpeechSynthesizer] = None

    def create_session(self, scheduler: Scheduler) -> ScoreboardSession:
        """
        Create a ScoreboardSession with injected dependencies.

        Args:
            scheduler: Scheduler bound to the loop the session will live on

        Returns:
            Configured, not yet loaded, ScoreboardSession
        """
        client = self._get_gemini_client()
        speech = self._speech
        locator = None
        if client is not None:
            if speech is None:
                speech = GeminiSpeechSynthesizer(client, self.config.speech_model, self.config.speech_voice)
            locator = GeminiVenueLocator(client, self.config.location_model)

        return ScoreboardSession(
            persistence=PersistenceService(self._get_store()),
            scheduler=scheduler,
            speech=speech,
            locator=locator,
            audio_output=self._get_audio_output(),
            tick_interval_s=self.config.tick_interval_seconds,
            lookup_debounce_s=self.config.lookup_debounce_seconds,
        )

    def configure_custom_store(self, store: KeyValueStore) -> None:
        self._store = store

    def configure_custom_audio_output(self, audio_output: AudioOutput) -> None:
        self._audio_output = audio_output

    def configure_custom_speech(self, speech: SpeechSynthesizer) -> None:
        self._speech = speech

    def _get_store(self) -> KeyValueStore:
        """Get singleton key-value store."""
        if self._store is None:
            if self.config.state_file is not None:
                self._store = JsonFileStore(self.config.state_file)
            else:
                logger.warning("SCOREBOARD_STATE_FILE is not set; state will not survive a restart")
                self._store = MemoryStore()
        return self._store

    def _get_gemini_client(self) -> Optional[GeminiClient]:
        """Get singleton API client, or None when no API key is configured."""
        if self._gemini_client is None and self.config.collaborators_enabled:
            self._gemini_client = GeminiClient(
                self.config.gemini_api_key,
                base_url=self.config.gemini_api_base,
                timeout=self.config.request_timeout_seconds,
            )
        return self._gemini_client

    def _get_audio_output(self) -> AudioOutput:
        """Get singleton audio output, falling back to a silent one."""
        if self._audio_output is None:
            if self.config.audio_enabled:
                try:
                    self._audio_output = SoundDeviceAudioOutput()
                except RuntimeError:
                    logger.warning("Audio playback unavailable; announcements and siren are muted")
                    self._audio_output = NullAudioOutput()
            else:
                self._audio_output = NullAudioOutput()
        return self._audio_output
