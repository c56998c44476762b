"""Tests for the named delayed-callback scheduler.

Usage:
    pytest test/test_scheduler.py -v
"""

import asyncio

import pytest

from custom_components.oelo_zone.scheduler import Scheduler


@pytest.mark.asyncio
async def test_rescheduling_replaces_job():
    scheduler = Scheduler(asyncio.get_running_loop(), "test")
    calls = []

    first = scheduler.schedule("job", 0, calls.append, "first")
    second = scheduler.schedule("job", 0, calls.append, "second")
    assert second != first

    await asyncio.sleep(0.01)

    assert calls == ["second"]
    assert not scheduler.cancel("job")


@pytest.mark.asyncio
async def test_coroutine_targets_run_as_tasks():
    scheduler = Scheduler(asyncio.get_running_loop(), "test")
    done = asyncio.Event()

    async def target():
        done.set()

    scheduler.schedule("job", 0, target)
    await asyncio.wait_for(done.wait(), 1)
    await scheduler.async_shutdown()


@pytest.mark.asyncio
async def test_cancel_and_shutdown():
    scheduler = Scheduler(asyncio.get_running_loop(), "test")
    calls = []
    blocker = asyncio.Event()

    scheduler.schedule("a", 60, calls.append, "a")
    scheduler.schedule("b", 60, calls.append, "b")
    task = scheduler.spawn(blocker.wait())

    assert scheduler.cancel("a")
    assert not scheduler.cancel("a")

    await scheduler.async_shutdown()

    assert task.cancelled()
    assert not scheduler.cancel("b")
    assert calls == []
