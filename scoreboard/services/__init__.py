"""
Services package for the handball scoreboard.

This package contains the clock, the confirmation gate, the orchestrators
for remote collaborators, persistence and the session that ties them
together. Includes a factory for dependency injection.
"""
from .scheduler import AsyncioScheduler, Scheduler, TimerHandle
from .clock_service import ClockEngine, ClockStatus
from .alarm_service import AlarmSignalGenerator
from .transaction_service import TransactionManager
from .announcement_service import AnnouncementOrchestrator
from .location_service import LocationLookupOrchestrator, is_lookup_candidate
from .history_service import MatchHistoryService
from .persistence_service import PersistenceService, JsonFileStore, MemoryStore
from .scoreboard_service import ScoreboardSession
from .service_factory import ServiceFactory

__all__ = [
    "AsyncioScheduler", "Scheduler", "TimerHandle", "ClockEngine", "ClockStatus",
    "AlarmSignalGenerator", "TransactionManager", "AnnouncementOrchestrator",
    "LocationLookupOrchestrator", "is_lookup_candidate", "MatchHistoryService",
    "PersistenceService", "JsonFileStore", "MemoryStore", "ScoreboardSession",
    "ServiceFactory",
]
