"""Countdown clock for the handball scoreboard application."""

import logging
from enum import Enum
from typing import Callable, Optional

from ..models import MatchState
from ..utils.constants import MIN_INITIAL_TIME_SECONDS, TICK_INTERVAL_SECONDS
from .alarm_service import AlarmSignalGenerator
from .scheduler import Scheduler, TimerHandle

logger = logging.getLogger(__name__)


class ClockStatus(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    EXPIRED = "expired"


class ClockEngine:
    """
    Service owning the countdown of a MatchState.

    Transitions:
        IDLE/EXPIRED -> RUNNING   start(), only while time > 0
        RUNNING -> IDLE           pause()
        RUNNING -> EXPIRED        automatically when time reaches 0
        any -> IDLE               rewind() (reset and period change)

    The engine owns a single scheduled tick; it exists only while running.
    """

    def __init__(
        self,
        match_state: MatchState,
        scheduler: Scheduler,
        alarm: Optional[AlarmSignalGenerator] = None,
        tick_interval_s: float = TICK_INTERVAL_SECONDS,
        on_change: Optional[Callable[[], None]] = None,
    ):
        self.match_state = match_state
        self.scheduler = scheduler
        self.alarm = alarm
        self.tick_interval_s = tick_interval_s
        self.on_change = on_change
        self._tick_handle: Optional[TimerHandle] = None
        # A restored match never resumes counting on its own
        self.match_state.is_active = False

    # ------------------------------------------------------------------
    # State queries
    # ------------------------------------------------------------------
    @property
    def status(self) -> ClockStatus:
        if self.match_state.is_active:
            return ClockStatus.RUNNING
        if self.match_state.time <= 0:
            return ClockStatus.EXPIRED
        return ClockStatus.IDLE

    # ------------------------------------------------------------------
    # Core timer controls
    # ------------------------------------------------------------------
    def start(self) -> bool:
        """Start the countdown. Rejected when already running or at zero."""
        if self.match_state.is_active:
            return False
        if self.match_state.time <= 0:
            logger.debug("Start rejected: clock is at zero")
            return False

        self.match_state.is_active = True
        self._schedule_tick()
        logger.info("Clock started at %ss", self.match_state.time)
        self._notify()
        return True

    def pause(self) -> bool:
        """Stop the countdown. Idempotent; returns True if it was running."""
        self._cancel_tick()
        if not self.match_state.is_active:
            return False
        self.match_state.is_active = False
        logger.info("Clock paused at %ss", self.match_state.time)
        self._notify()
        return True

    def tick(self) -> None:
        """Advance the countdown by one second; expires the clock at zero."""
        if not self.match_state.is_active:
            return

        self.match_state.time = max(0, self.match_state.time - 1)
        if self.match_state.time == 0:
            self._expire()
        else:
            self._schedule_tick()
        self._notify()

    def adjust_initial_time(self, delta_minutes: int) -> bool:
        """
        Change the configured period length by whole minutes.

        Rejected while running. The countdown is re-synchronised to the new
        length, with a floor of one minute.
        """
        if self.match_state.is_active:
            logger.debug("Initial time change rejected: clock is running")
            return False

        new_initial = max(
            MIN_INITIAL_TIME_SECONDS,
            self.match_state.initial_time + int(delta_minutes) * 60,
        )
        changed = (
            new_initial != self.match_state.initial_time
            or self.match_state.time != new_initial
        )
        self.match_state.initial_time = new_initial
        self.match_state.time = new_initial
        if changed:
            self._notify()
        return changed

    def rewind(self) -> None:
        """Pause and restore the full period length."""
        self._cancel_tick()
        self.match_state.is_active = False
        self.match_state.time = self.match_state.initial_time
        self._notify()

    def close(self) -> None:
        """Teardown: drop the pending tick without touching the state."""
        self._cancel_tick()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _expire(self) -> None:
        self._cancel_tick()
        self.match_state.is_active = False
        logger.info("Period %d expired", self.match_state.period)
        if self.alarm is not None:
            self.alarm.fire()

    def _on_tick(self) -> None:
        self._tick_handle = None
        self.tick()

    def _schedule_tick(self) -> None:
        self._cancel_tick()
        self._tick_handle = self.scheduler.call_later(self.tick_interval_s, self._on_tick)

    def _cancel_tick(self) -> None:
        if self._tick_handle is not None:
            self._tick_handle.cancel()
            self._tick_handle = None

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change()
