"""
Event-loop seam for the scoreboard services.

All timers (clock tick, lookup debounce, siren cadence) and background
collaborator calls go through a Scheduler. Production code uses the
asyncio implementation below; every callback and task then runs on the
loop's single thread, so the services never need locks.
"""
import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, Protocol, Set

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...

    def spawn(self, coro: Awaitable[Any]) -> None: ...


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop
        self._tasks: Set[asyncio.Task] = set()

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        return self.loop.call_later(max(0.0, delay), callback)

    def spawn(self, coro: Awaitable[Any]) -> None:
        """Run a coroutine as a background task; failures are logged, not raised."""
        task = self.loop.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Background task failed", exc_info=exc)

    @property
    def pending_tasks(self) -> int:
        return len(self._tasks)
