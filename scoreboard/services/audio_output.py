"""
Audio output adapters.

Score announcements arrive as raw 16-bit PCM and are decoded into float
buffers; siren pulses are rendered from their descriptors. Playback goes
through ``sounddevice`` when it is installed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol

import numpy as np

from ..models import PulseDescriptor
from ..utils.constants import PULSE_SAMPLE_RATE, TTS_CHANNELS, TTS_SAMPLE_RATE

try:
    import sounddevice as sd
except Exception:  # pragma: no cover
    sd = None  # type: ignore

logger = logging.getLogger(__name__)


@dataclass
class AudioBuffer:
    """Decoded audio: ``samples`` has shape (channels, frames), float32 in [-1, 1)."""

    samples: np.ndarray
    sample_rate: int

    @property
    def channels(self) -> int:
        return int(self.samples.shape[0])

    @property
    def frames(self) -> int:
        return int(self.samples.shape[1])

    @property
    def duration_s(self) -> float:
        return self.frames / float(self.sample_rate)


class AudioOutput(Protocol):
    def play_buffer(self, buffer: AudioBuffer) -> None: ...

    def play_pulse(self, pulse: PulseDescriptor) -> None: ...


def decode_pcm16(
    data: bytes,
    sample_rate: int = TTS_SAMPLE_RATE,
    channels: int = TTS_CHANNELS,
) -> AudioBuffer:
    """Convert interleaved little-endian 16-bit PCM into a float AudioBuffer."""
    if channels < 1:
        raise ValueError("channels must be at least 1")
    pcm = np.frombuffer(data, dtype="<i2", count=len(data) // 2)
    frames = len(pcm) // channels
    interleaved = pcm[: frames * channels].reshape(frames, channels)
    samples = (interleaved.T.astype(np.float32)) / 32768.0
    return AudioBuffer(samples=np.ascontiguousarray(samples), sample_rate=sample_rate)


def synthesize_pulse(pulse: PulseDescriptor, sample_rate: int = PULSE_SAMPLE_RATE) -> np.ndarray:
    """Render a pulse as a mono float32 sine with a linear frequency sweep."""
    n = int(round(pulse.duration_s * sample_rate))
    t = np.arange(n, dtype=np.float64) / sample_rate
    sweep = (pulse.freq_end_hz - pulse.freq_start_hz) / max(pulse.duration_s, 1e-9)
    phase = 2.0 * np.pi * (pulse.freq_start_hz * t + 0.5 * sweep * t * t)
    return np.sin(phase).astype(np.float32)


class NullAudioOutput:
    """Discards audio; used when playback is disabled."""

    def play_buffer(self, buffer: AudioBuffer) -> None:
        logger.debug("Discarding %.2fs of announcement audio", buffer.duration_s)

    def play_pulse(self, pulse: PulseDescriptor) -> None:
        logger.debug("Discarding siren pulse %s", pulse)


class SoundDeviceAudioOutput:
    """Non-blocking playback on the default output device."""

    def __init__(self, pulse_sample_rate: int = PULSE_SAMPLE_RATE, volume: float = 0.8) -> None:
        if sd is None:
            raise RuntimeError("sounddevice is not installed")
        self.pulse_sample_rate = pulse_sample_rate
        self.volume = volume

    def play_buffer(self, buffer: AudioBuffer) -> None:
        self._play(buffer.samples.T, buffer.sample_rate)

    def play_pulse(self, pulse: PulseDescriptor) -> None:
        self._play(synthesize_pulse(pulse, self.pulse_sample_rate), self.pulse_sample_rate)

    def _play(self, data: Any, sample_rate: int) -> None:
        sd.play(data * self.volume, samplerate=sample_rate, blocking=False)
