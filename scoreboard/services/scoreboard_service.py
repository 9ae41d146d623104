"""
Scoreboard session: the single owner of the live match.

User actions mutate the MatchState synchronously, then fan out to the
persistence gateway (snapshots written by a background task, off the
loop thread) and, for scores and names, to the announcement and venue
orchestrators.
"""
import asyncio
import logging
from dataclasses import fields, replace
from typing import Any, Dict, List, Optional, Tuple

from ..models import MatchRecord, MatchState, Team
from ..utils import format_time
from ..utils.constants import LOOKUP_DEBOUNCE_SECONDS, TICK_INTERVAL_SECONDS
from .alarm_service import AlarmSignalGenerator
from .announcement_service import AnnouncementOrchestrator
from .audio_output import AudioOutput
from .clock_service import ClockEngine
from .history_service import MatchHistoryService
from .interfaces import SpeechSynthesizer, VenueLocator
from .location_service import LocationLookupOrchestrator
from .persistence_service import PersistenceService
from .scheduler import Scheduler
from .transaction_service import TransactionManager

logger = logging.getLogger(__name__)


class ScoreboardSession:
    """Application facade exposing every scoreboard action."""

    def __init__(
        self,
        persistence: PersistenceService,
        scheduler: Scheduler,
        speech: Optional[SpeechSynthesizer] = None,
        locator: Optional[VenueLocator] = None,
        audio_output: Optional[AudioOutput] = None,
        tick_interval_s: float = TICK_INTERVAL_SECONDS,
        lookup_debounce_s: float = LOOKUP_DEBOUNCE_SECONDS,
    ):
        self.persistence = persistence
        self.scheduler = scheduler
        self.match_state = MatchState()

        self.history = MatchHistoryService(on_change=self._mark_history_dirty)
        self.alarm = AlarmSignalGenerator(scheduler, audio_output)
        self.clock = ClockEngine(
            self.match_state,
            scheduler,
            alarm=self.alarm,
            tick_interval_s=tick_interval_s,
            on_change=self._mark_state_dirty,
        )
        self.transactions = TransactionManager(self.match_state, self.clock, self.history)
        self.announcer = AnnouncementOrchestrator(self.match_state, scheduler, speech, audio_output)
        self.locations = LocationLookupOrchestrator(scheduler, locator, debounce_s=lookup_debounce_s)

        self._state_dirty = False
        self._history_dirty = False
        self._writing = False
        self._write_version = 0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def load(self) -> None:
        """Restore the last scoreboard and history; called once at startup."""
        loaded = self.persistence.load_state()
        for f in fields(MatchState):
            setattr(self.match_state, f.name, getattr(loaded, f.name))
        self.match_state.is_active = False
        self.history.replace_all(self.persistence.load_history())
        logger.info(
            "Loaded match %s vs %s, period %d, %s left, %d saved matches",
            self.match_state.home_name, self.match_state.away_name,
            self.match_state.period, format_time(self.match_state.time),
            len(self.history.records),
        )
        for team in Team:
            self.locations.on_name_changed(team, self.match_state.name_of(team))

    def close(self) -> None:
        """Stop every timer and write out anything not yet persisted."""
        self.clock.close()
        self.locations.close()
        if self._state_dirty or self._history_dirty:
            self._write(*self._take_dirty())

    # ------------------------------------------------------------------
    # Scores and names
    # ------------------------------------------------------------------
    def change_score(self, team: Team, delta: int) -> bool:
        """Add ``delta`` goals (clamped at zero) and announce the new score."""
        current = self.match_state.score_of(team)
        new_score = max(0, current + int(delta))
        if new_score == current:
            logger.debug("Score change for %s rejected", team.value)
            return False

        self.match_state.set_score(team, new_score)
        self._mark_state_dirty()
        self.announcer.announce(self.match_state.home_score, self.match_state.away_score)
        return True

    def set_team_name(self, team: Team, name: str) -> bool:
        """Rename a team; an unchanged name leaves the venue lookup alone."""
        if name == self.match_state.name_of(team):
            return False
        self.match_state.set_name(team, name)
        self._mark_state_dirty()
        self.locations.on_name_changed(team, name)
        return True

    # ------------------------------------------------------------------
    # Clock
    # ------------------------------------------------------------------
    def start(self) -> bool:
        return self.clock.start()

    def pause(self) -> bool:
        return self.clock.pause()

    def adjust_initial_time(self, delta_minutes: int) -> bool:
        return self.clock.adjust_initial_time(delta_minutes)

    # ------------------------------------------------------------------
    # Confirmed operations
    # ------------------------------------------------------------------
    def request_reset(self) -> None:
        self.transactions.request_reset()

    def confirm_reset(self) -> bool:
        return self.transactions.confirm_reset()

    def cancel_reset(self) -> bool:
        return self.transactions.cancel_reset()

    def request_period_change(self, delta: int) -> None:
        self.transactions.request_period_change(delta)

    def confirm_period_change(self) -> bool:
        return self.transactions.confirm_period_change()

    def cancel_period_change(self) -> bool:
        return self.transactions.cancel_period_change()

    def request_clear_history(self) -> None:
        self.transactions.request_clear_history()

    def confirm_clear_history(self) -> bool:
        return self.transactions.confirm_clear_history()

    def cancel_clear_history(self) -> bool:
        return self.transactions.cancel_clear_history()

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------
    def save_match(self) -> MatchRecord:
        return self.history.save_match(self.match_state)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------
    def snapshot(self) -> Dict[str, Any]:
        """JSON-ready view of everything a client needs to render."""
        ms = self.match_state
        pending = self.transactions.pending
        teams = {}
        for team in Team:
            venue = self.locations.venue(team)
            teams[team.value] = {
                "name": ms.name_of(team),
                "score": ms.score_of(team),
                "location": venue.to_json() if venue else None,
                "is_fetching_location": self.locations.is_fetching(team),
            }
        return {
            "teams": teams,
            "period": ms.period,
            "time": ms.time,
            "time_display": format_time(ms.time),
            "initial_time": ms.initial_time,
            "is_active": ms.is_active,
            "clock_status": self.clock.status.value,
            "pending": pending.to_json() if pending else None,
            "is_announcing": self.announcer.is_announcing,
        }

    def history_snapshot(self) -> list:
        return [
            dict(record.to_json(), time_display=format_time(record.time))
            for record in self.history.records
        ]

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def _mark_state_dirty(self) -> None:
        self._state_dirty = True
        self._schedule_write()

    def _mark_history_dirty(self) -> None:
        self._history_dirty = True
        self._schedule_write()

    def _schedule_write(self) -> None:
        if not self._writing:
            self._writing = True
            self.scheduler.spawn(self._write_pending())

    async def _write_pending(self) -> None:
        """Write snapshots off the loop until nothing is dirty; one write in flight at a time."""
        try:
            while self._state_dirty or self._history_dirty:
                await asyncio.to_thread(self._write, *self._take_dirty())
        finally:
            self._writing = False

    def _take_dirty(self) -> Tuple[int, Optional[MatchState], Optional[List[MatchRecord]]]:
        self._write_version += 1
        state = replace(self.match_state) if self._state_dirty else None
        records = self.history.records if self._history_dirty else None
        self._state_dirty = False
        self._history_dirty = False
        return self._write_version, state, records

    def _write(
        self,
        version: int,
        state: Optional[MatchState],
        records: Optional[List[MatchRecord]],
    ) -> None:
        if state is not None:
            self.persistence.save_state(state, version)
        if records is not None:
            self.persistence.save_history(records, version)
