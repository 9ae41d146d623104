"""Value objects exchanged with the speech, venue and audio collaborators."""

from dataclasses import dataclass

from ..utils.constants import (
    ALARM_FREQ_END_HZ,
    ALARM_FREQ_START_HZ,
    ALARM_PULSE_DURATION_SECONDS,
)


@dataclass(frozen=True)
class VenueInfo:
    """Where a team usually plays: a map link and a human readable title."""

    uri: str
    title: str

    def to_json(self) -> dict:
        return {"uri": self.uri, "title": self.title}


@dataclass(frozen=True)
class PulseDescriptor:
    """A single sine pulse sweeping linearly between two frequencies."""

    freq_start_hz: float = ALARM_FREQ_START_HZ
    freq_end_hz: float = ALARM_FREQ_END_HZ
    duration_s: float = ALARM_PULSE_DURATION_SECONDS
