"""Tests for the asyncio-backed scheduler."""

import asyncio
import logging

from scoreboard.services import AsyncioScheduler


def test_call_later_runs_and_cancel_prevents_it():
    fired = []

    async def scenario():
        scheduler = AsyncioScheduler()
        scheduler.call_later(0.01, lambda: fired.append("kept"))
        handle = scheduler.call_later(0.01, lambda: fired.append("cancelled"))
        handle.cancel()
        await asyncio.sleep(0.05)

    asyncio.run(scenario())

    assert fired == ["kept"]


def test_spawned_task_failure_is_logged_not_raised(caplog):
    async def boom():
        raise RuntimeError("collaborator exploded")

    async def scenario():
        scheduler = AsyncioScheduler()
        scheduler.spawn(boom())
        await asyncio.sleep(0.01)
        return scheduler.pending_tasks

    with caplog.at_level(logging.ERROR, logger="scoreboard.services.scheduler"):
        remaining = asyncio.run(scenario())

    assert remaining == 0
    assert "Background task failed" in caplog.text
