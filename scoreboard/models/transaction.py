"""
Pending transaction types for destructive scoreboard operations.

A pending transaction is requested first and only applied on explicit
confirmation. None of these objects are persisted.
"""
from dataclasses import dataclass
from enum import Enum


class TransactionKind(str, Enum):
    RESET = "reset"
    PERIOD_CHANGE = "period_change"
    CLEAR_HISTORY = "clear_history"


@dataclass(frozen=True)
class PendingTransaction:
    """Base class; ``kind`` identifies which confirm call applies it."""

    @property
    def kind(self) -> TransactionKind:
        raise NotImplementedError

    def to_json(self) -> dict:
        return {"kind": self.kind.value}


@dataclass(frozen=True)
class ResetRequest(PendingTransaction):
    @property
    def kind(self) -> TransactionKind:
        return TransactionKind.RESET


@dataclass(frozen=True)
class PeriodChangeRequest(PendingTransaction):
    delta: int = 0

    @property
    def kind(self) -> TransactionKind:
        return TransactionKind.PERIOD_CHANGE

    def to_json(self) -> dict:
        return {"kind": self.kind.value, "delta": self.delta}


@dataclass(frozen=True)
class ClearHistoryRequest(PendingTransaction):
    @property
    def kind(self) -> TransactionKind:
        return TransactionKind.CLEAR_HISTORY
