"""End-of-period siren: a fixed train of descending tone pulses."""

import logging
from typing import Optional

from ..models import PulseDescriptor
from ..utils.constants import ALARM_PULSE_COUNT, ALARM_PULSE_SPACING_SECONDS
from .audio_output import AudioOutput
from .scheduler import Scheduler

logger = logging.getLogger(__name__)


class AlarmSignalGenerator:
    """
    Plays the siren when the clock expires.

    ``fire()`` starts a sequence of ``pulse_count`` pulses, one every
    ``spacing_s`` seconds. A started sequence always runs to completion.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        audio_output: Optional[AudioOutput],
        pulse: PulseDescriptor = PulseDescriptor(),
        pulse_count: int = ALARM_PULSE_COUNT,
        spacing_s: float = ALARM_PULSE_SPACING_SECONDS,
    ):
        self.scheduler = scheduler
        self.audio_output = audio_output
        self.pulse = pulse
        self.pulse_count = pulse_count
        self.spacing_s = spacing_s
        self.sequences_started = 0

    def fire(self) -> None:
        """Start one siren sequence (fire-and-forget)."""
        self.sequences_started += 1
        if self.audio_output is None:
            logger.info("Siren requested but no audio output is configured")
            return
        logger.info("Sounding end-of-period siren")
        self.scheduler.call_later(self.spacing_s, lambda: self._emit(1))

    def _emit(self, number: int) -> None:
        try:
            self.audio_output.play_pulse(self.pulse)
        except Exception:
            logger.warning("Siren pulse %d could not be played", number, exc_info=True)
        if number < self.pulse_count:
            self.scheduler.call_later(self.spacing_s, lambda: self._emit(number + 1))
