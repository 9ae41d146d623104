"""
MatchState model for the handball scoreboard application.

This module contains the MatchState dataclass which represents the live
state of a match (team names, scores, period and clock) together with the
persistence conversion helpers.
"""
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from ..utils.constants import (
    DEFAULT_AWAY_NAME,
    DEFAULT_HOME_NAME,
    DEFAULT_INITIAL_TIME_SECONDS,
    MIN_INITIAL_TIME_SECONDS,
)


class Team(str, Enum):
    """The two sides of a match."""

    HOME = "home"
    AWAY = "away"

    @classmethod
    def parse(cls, value: str) -> "Team":
        """
        Resolve a team identifier, accepting the legacy storage aliases.

        Raises:
            ValueError: If the identifier is not a known team
        """
        key = (value or "").strip().lower()
        if key in ("home", "local"):
            return cls.HOME
        if key in ("away", "visitante"):
            return cls.AWAY
        raise ValueError(f"Unknown team: {value!r}")


def _as_int(value: Any) -> Optional[int]:
    """Return value as an int when it is a real number, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value):
        return int(value)
    return None


@dataclass
class MatchState:
    """
    Represents the live state of a handball match.

    Attributes:
        home_name: Display name of the home team
        away_name: Display name of the away team
        home_score: Goals scored by the home team (never negative)
        away_score: Goals scored by the away team (never negative)
        period: Current period number (never below 1)
        initial_time: Configured period duration in seconds (at least 60)
        time: Remaining seconds on the countdown
        is_active: Whether the clock is currently counting down
    """
    home_name: str = DEFAULT_HOME_NAME
    away_name: str = DEFAULT_AWAY_NAME
    home_score: int = 0
    away_score: int = 0
    period: int = 1
    initial_time: int = DEFAULT_INITIAL_TIME_SECONDS
    time: int = DEFAULT_INITIAL_TIME_SECONDS
    is_active: bool = False

    def name_of(self, team: Team) -> str:
        return self.home_name if team is Team.HOME else self.away_name

    def set_name(self, team: Team, name: str) -> None:
        if team is Team.HOME:
            self.home_name = name
        else:
            self.away_name = name

    def score_of(self, team: Team) -> int:
        return self.home_score if team is Team.HOME else self.away_score

    def set_score(self, team: Team, score: int) -> None:
        score = max(0, int(score))
        if team is Team.HOME:
            self.home_score = score
        else:
            self.away_score = score

    def to_json(self) -> dict:
        """
        Convert MatchState to the persisted scoreboard record.

        The clock's active flag is not part of the record; a
        restored match always starts paused.

        Returns:
            Dictionary representation suitable for JSON serialization
        """
        return {
            "localName": self.home_name,
            "visitanteName": self.away_name,
            "localScore": self.home_score,
            "visitanteScore": self.away_score,
            "period": self.period,
            "time": self.time,
            "initialTime": self.initial_time,
        }

    @staticmethod
    def from_json(data: Any) -> "MatchState":
        """
        Create MatchState from a persisted scoreboard record.

        Every field is optional. Missing, empty or wrongly typed values fall
        back to the defaults instead of raising.

        Args:
            data: Decoded scoreboard record (anything non-dict yields defaults)

        Returns:
            New MatchState instance
        """
        ms = MatchState()
        if not isinstance(data, dict):
            return ms

        home_name = data.get("localName")
        if isinstance(home_name, str) and home_name:
            ms.home_name = home_name
        away_name = data.get("visitanteName")
        if isinstance(away_name, str) and away_name:
            ms.away_name = away_name

        ms.home_score = max(0, _as_int(data.get("localScore")) or 0)
        ms.away_score = max(0, _as_int(data.get("visitanteScore")) or 0)
        ms.period = max(1, _as_int(data.get("period")) or 1)

        initial_time = _as_int(data.get("initialTime")) or DEFAULT_INITIAL_TIME_SECONDS
        ms.initial_time = max(MIN_INITIAL_TIME_SECONDS, initial_time)

        # An explicit 0 is a valid expired clock; only a missing value resets it
        time_left = _as_int(data.get("time"))
        ms.time = ms.initial_time if time_left is None else max(0, time_left)
        ms.is_active = False
        return ms
