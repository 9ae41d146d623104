"""
Confirmation gate for destructive scoreboard operations.

Reset, period change and history clearing all discard data, so they are
never applied directly: a request is stored as the pending transaction and
only a matching confirm applies it. There is a single pending slot; a new
request replaces whatever was pending.
"""
import logging
from typing import Optional

from ..models import (
    ClearHistoryRequest,
    MatchState,
    PendingTransaction,
    PeriodChangeRequest,
    ResetRequest,
    TransactionKind,
)
from .clock_service import ClockEngine
from .history_service import MatchHistoryService

logger = logging.getLogger(__name__)


class TransactionManager:
    """Holds at most one pending destructive operation."""

    def __init__(
        self,
        match_state: MatchState,
        clock: ClockEngine,
        history: Optional[MatchHistoryService] = None,
    ):
        self.match_state = match_state
        self.clock = clock
        self.history = history
        self._pending: Optional[PendingTransaction] = None

    @property
    def pending(self) -> Optional[PendingTransaction]:
        return self._pending

    def is_pending(self, kind: TransactionKind) -> bool:
        return self._pending is not None and self._pending.kind is kind

    def _request(self, transaction: PendingTransaction) -> None:
        if self._pending is not None:
            logger.debug("Replacing pending %s with %s", self._pending.kind.value, transaction.kind.value)
        self._pending = transaction

    def _take(self, kind: TransactionKind) -> Optional[PendingTransaction]:
        if not self.is_pending(kind):
            logger.debug("Nothing pending to confirm for %s", kind.value)
            return None
        transaction, self._pending = self._pending, None
        return transaction

    def _cancel(self, kind: TransactionKind) -> bool:
        if not self.is_pending(kind):
            return False
        self._pending = None
        return True

    # ------------------------------------------------------------------
    # Reset
    # ------------------------------------------------------------------
    def request_reset(self) -> None:
        self._request(ResetRequest())

    def confirm_reset(self) -> bool:
        """Pause, restore the period length, zero both scores and go back to period 1."""
        if self._take(TransactionKind.RESET) is None:
            return False
        self.match_state.home_score = 0
        self.match_state.away_score = 0
        self.match_state.period = 1
        self.clock.rewind()
        logger.info("Match reset")
        return True

    def cancel_reset(self) -> bool:
        return self._cancel(TransactionKind.RESET)

    # ------------------------------------------------------------------
    # Period change
    # ------------------------------------------------------------------
    def request_period_change(self, delta: int) -> None:
        self._request(PeriodChangeRequest(delta=int(delta)))

    def confirm_period_change(self) -> bool:
        """Apply the requested delta (never below period 1) and rewind the clock."""
        transaction = self._take(TransactionKind.PERIOD_CHANGE)
        if transaction is None:
            return False
        self.match_state.period = max(1, self.match_state.period + transaction.delta)
        self.clock.rewind()
        logger.info("Moved to period %d", self.match_state.period)
        return True

    def cancel_period_change(self) -> bool:
        return self._cancel(TransactionKind.PERIOD_CHANGE)

    # ------------------------------------------------------------------
    # History clearing
    # ------------------------------------------------------------------
    def request_clear_history(self) -> None:
        self._request(ClearHistoryRequest())

    def confirm_clear_history(self) -> bool:
        if self._take(TransactionKind.CLEAR_HISTORY) is None:
            return False
        if self.history is not None:
            self.history.clear()
        return True

    def cancel_clear_history(self) -> bool:
        return self._cancel(TransactionKind.CLEAR_HISTORY)
