"""Named delayed-callback scheduler for one zone.

Each job is stored under a key. Scheduling a key again replaces the previous
job, and every job carries a token so a callback that the event loop already
queued is dropped when its token is no longer the current one. Coroutine
results are run as tracked tasks so shutdown can cancel them.
"""

from __future__ import annotations
import asyncio
import itertools
import logging
from typing import Any, Callable, Coroutine

_LOGGER = logging.getLogger(__name__)


class Scheduler:
    """Run named callbacks after a delay, cancellable by name."""

    def __init__(self, loop: asyncio.AbstractEventLoop, name: str = "oelo") -> None:
        self._loop = loop
        self._name = name
        self._tokens = itertools.count(1)
        self._jobs: dict[str, tuple[int, asyncio.TimerHandle]] = {}
        self._tasks: set[asyncio.Task] = set()

    def schedule(self, key: str, delay: float, target: Callable[..., Any], *args: Any) -> int:
        """Schedule target(*args) after delay seconds, replacing any job under key."""
        self.cancel(key)
        token = next(self._tokens)
        handle = self._loop.call_later(max(0.0, delay), self._run, key, token, target, args)
        self._jobs[key] = (token, handle)
        return token

    def cancel(self, key: str) -> bool:
        job = self._jobs.pop(key, None)
        if job is None:
            return False
        job[1].cancel()
        return True

    def cancel_all(self) -> None:
        for key in list(self._jobs):
            self.cancel(key)

    def spawn(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task:
        """Run a coroutine as a task owned by this scheduler."""
        task = self._loop.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._task_done)
        return task

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        err = task.exception()
        if err is not None:
            _LOGGER.error("%s: Scheduled task failed: %s", self._name, err, exc_info=err)

    def _run(self, key: str, token: int, target: Callable[..., Any], args: tuple) -> None:
        job = self._jobs.get(key)
        if job is None or job[0] != token:
            _LOGGER.debug("%s: Dropping stale job '%s' (token %d)", self._name, key, token)
            return
        del self._jobs[key]

        result = target(*args)
        if asyncio.iscoroutine(result):
            self.spawn(result)

    async def async_shutdown(self) -> None:
        """Cancel every pending job and task and wait for the tasks to finish."""
        self.cancel_all()
        current = asyncio.current_task()
        tasks = [task for task in self._tasks if task is not current]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        # Cancelled tasks may have scheduled follow-up jobs
        self.cancel_all()
