"""Immutable snapshot of a finished or paused match kept in the history."""

from dataclasses import dataclass
from typing import Any, Optional

from .match_state import MatchState, _as_int


@dataclass(frozen=True)
class MatchRecord:
    """A saved match as shown in the history list."""

    id: int
    home_name: str
    away_name: str
    home_score: int
    away_score: int
    period: int
    time: int
    date: str

    @classmethod
    def from_state(cls, state: MatchState, record_id: int, date: str) -> "MatchRecord":
        return cls(
            id=record_id,
            home_name=state.home_name,
            away_name=state.away_name,
            home_score=state.home_score,
            away_score=state.away_score,
            period=state.period,
            time=state.time,
            date=date,
        )

    def to_json(self) -> dict:
        return {
            "id": self.id,
            "localName": self.home_name,
            "visitanteName": self.away_name,
            "localScore": self.home_score,
            "visitanteScore": self.away_score,
            "period": self.period,
            "time": self.time,
            "date": self.date,
        }

    @staticmethod
    def from_json(data: Any) -> Optional["MatchRecord"]:
        """Parse a stored history entry, returning None when it is unusable."""
        if not isinstance(data, dict):
            return None
        record_id = _as_int(data.get("id"))
        if record_id is None:
            return None
        return MatchRecord(
            id=record_id,
            home_name=str(data.get("localName") or ""),
            away_name=str(data.get("visitanteName") or ""),
            home_score=max(0, _as_int(data.get("localScore")) or 0),
            away_score=max(0, _as_int(data.get("visitanteScore")) or 0),
            period=max(1, _as_int(data.get("period")) or 1),
            time=max(0, _as_int(data.get("time")) or 0),
            date=str(data.get("date") or ""),
        )
