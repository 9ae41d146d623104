"""
Models package for the handball scoreboard.

This package contains the core data models used throughout the application.
"""
from .match_state import MatchState, Team
from .match_record import MatchRecord
from .media import VenueInfo, PulseDescriptor
from .transaction import (
    PendingTransaction, ResetRequest, PeriodChangeRequest,
    ClearHistoryRequest, TransactionKind
)

__all__ = [
    "MatchState", "Team", "MatchRecord", "VenueInfo", "PulseDescriptor",
    "PendingTransaction", "ResetRequest", "PeriodChangeRequest",
    "ClearHistoryRequest", "TransactionKind",
]
