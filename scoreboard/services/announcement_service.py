"""Spoken score announcements after every accepted score change."""

import logging
from typing import Optional

from ..models import MatchState
from ..utils.constants import SPEECH_PROMPT, TTS_CHANNELS, TTS_SAMPLE_RATE
from .audio_output import AudioOutput, NullAudioOutput, decode_pcm16
from .interfaces import SpeechSynthesizer
from .scheduler import Scheduler

logger = logging.getLogger(__name__)


class AnnouncementOrchestrator:
    """
    Speaks the current score, one announcement at a time.

    While an announcement is in flight any further request is dropped, not
    queued. The in-flight token is checked and taken in the same synchronous
    call, so two requests in one loop turn cannot both pass.
    """

    def __init__(
        self,
        match_state: MatchState,
        scheduler: Scheduler,
        speech: Optional[SpeechSynthesizer],
        audio_output: Optional[AudioOutput],
        prompt_template: str = SPEECH_PROMPT,
        sample_rate: int = TTS_SAMPLE_RATE,
        channels: int = TTS_CHANNELS,
    ):
        self.match_state = match_state
        self.scheduler = scheduler
        self.speech = speech
        self.audio_output = audio_output
        self.prompt_template = prompt_template
        self.sample_rate = sample_rate
        self.channels = channels
        self._in_flight = False
        self.dropped = 0

    @property
    def is_announcing(self) -> bool:
        return self._in_flight

    @property
    def enabled(self) -> bool:
        if self.speech is None or self.audio_output is None:
            return False
        return not isinstance(self.audio_output, NullAudioOutput)

    def build_prompt(self, home_score: int, away_score: int) -> str:
        return self.prompt_template.format(
            home_name=self.match_state.home_name,
            home_score=home_score,
            away_name=self.match_state.away_name,
            away_score=away_score,
        )

    def announce(self, home_score: int, away_score: int) -> bool:
        """
        Request an announcement of the given score.

        Returns:
            True if an announcement was started, False if it was dropped
        """
        if not self.enabled:
            return False
        if self._in_flight:
            self.dropped += 1
            logger.debug("Announcement already in flight, dropping %d-%d", home_score, away_score)
            return False

        self._in_flight = True
        text = self.build_prompt(home_score, away_score)
        self.scheduler.spawn(self._run(text))
        return True

    async def _run(self, text: str) -> None:
        try:
            audio = await self.speech.synthesize_speech(text)
            if not audio:
                logger.warning("Speech synthesis returned no audio for %r", text)
                return
            buffer = decode_pcm16(audio, self.sample_rate, self.channels)
            self.audio_output.play_buffer(buffer)
        except Exception:
            logger.error("Score announcement failed", exc_info=True)
        finally:
            self._in_flight = False
