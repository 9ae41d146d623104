"""Match history: saved snapshots of the scoreboard, newest first."""

import logging
from typing import Callable, List, Optional

from ..models import MatchRecord, MatchState
from ..utils import format_local_datetime, now_ts

logger = logging.getLogger(__name__)


class MatchHistoryService:
    """
    Append-only list of MatchRecord, newest first.

    Records are never edited in place; the list can only grow or be
    cleared as a whole.
    """

    def __init__(self, on_change: Optional[Callable[[], None]] = None):
        self._records: List[MatchRecord] = []
        self.on_change = on_change

    @property
    def records(self) -> List[MatchRecord]:
        return list(self._records)

    def replace_all(self, records: List[MatchRecord]) -> None:
        """Install the records loaded at startup."""
        self._records = list(records)

    def save_match(self, match_state: MatchState) -> MatchRecord:
        """
        Snapshot the current match and put it at the top of the history.

        Returns:
            The stored record
        """
        ts = now_ts()
        record_id = int(ts * 1000)
        if self._records and record_id <= self._records[0].id:
            record_id = self._records[0].id + 1

        record = MatchRecord.from_state(match_state, record_id, format_local_datetime(ts))
        self._records.insert(0, record)
        logger.info(
            "Saved match %s %d-%d %s",
            record.home_name, record.home_score, record.away_score, record.away_name,
        )
        self._notify()
        return record

    def clear(self) -> None:
        self._records.clear()
        logger.info("Match history cleared")
        self._notify()

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change()
