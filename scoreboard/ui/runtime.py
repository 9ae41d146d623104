"""
Background event loop hosting the scoreboard session.

Flask serves requests on its own threads, while the session expects to
live on one cooperative loop. The runtime owns that loop on a dedicated
thread and marshals every session call onto it.
"""
import asyncio
import logging
import threading
from typing import Any, Callable, Optional

from ..services import AsyncioScheduler, ScoreboardSession, ServiceFactory

logger = logging.getLogger(__name__)


class ScoreboardRuntime:
    """Runs a ScoreboardSession on a private asyncio loop thread."""

    def __init__(self, factory: ServiceFactory, call_timeout_s: float = 5.0):
        self.factory = factory
        self.call_timeout_s = call_timeout_s
        self.session: Optional[ScoreboardSession] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> ScoreboardSession:
        """Start the loop thread, then build and load the session on it."""
        if self.session is not None:
            return self.session

        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(
            target=self._run_loop, args=(self._loop,), name="scoreboard-loop", daemon=True
        )
        self._thread.start()
        self.session = self.call(self._create_session)
        return self.session

    def call(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """Run ``fn`` on the loop thread and return its result (or raise its exception)."""
        if self._loop is None:
            raise RuntimeError("Runtime is not started")

        async def _invoke():
            return fn(*args, **kwargs)

        future = asyncio.run_coroutine_threadsafe(_invoke(), self._loop)
        return future.result(timeout=self.call_timeout_s)

    def stop(self) -> None:
        """
        Close the session (persisting pending changes) and stop the loop.

        The loop thread closes its own loop once background work has
        drained; if that takes longer than ``call_timeout_s`` the thread is
        left to finish on its own.
        """
        loop, thread = self._loop, self._thread
        if loop is None:
            return
        try:
            if self.session is not None:
                self.call(self.session.close)
        finally:
            self._loop = None
            self._thread = None
            self.session = None
            loop.call_soon_threadsafe(loop.stop)
            if thread is not None:
                thread.join(timeout=self.call_timeout_s)
                if thread.is_alive():
                    logger.warning("Scoreboard loop is still waiting for background calls to finish")

    def _create_session(self) -> ScoreboardSession:
        session = self.factory.create_session(AsyncioScheduler(self._loop))
        session.load()
        return session

    @staticmethod
    def _run_loop(loop: asyncio.AbstractEventLoop) -> None:
        asyncio.set_event_loop(loop)
        try:
            loop.run_forever()
        finally:
            try:
                pending = asyncio.all_tasks(loop)
                for task in pending:
                    task.cancel()
                if pending:
                    loop.run_until_complete(asyncio.gather(*pending, return_exceptions=True))
                loop.run_until_complete(loop.shutdown_default_executor())
            finally:
                loop.close()
                logger.info("Scoreboard loop stopped")
