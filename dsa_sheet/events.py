"""Publish/subscribe hub for "progress changed" notifications."""

import asyncio
import inspect
import logging
from typing import Any, Callable, List, Optional, Set

logger = logging.getLogger(__name__)

Subscriber = Callable[[], Any]


class ProgressEvents:
    """Fire-and-forget broadcast between the topic view and any dashboards.

    Subscribers are plain callables or coroutine functions. Coroutine
    results are scheduled on the running loop and not awaited by the
    publisher. ``version`` increases on every notification and doubles as a
    change token for callers that prefer polling.
    """

    def __init__(self):
        self._subscribers: List[Subscriber] = []
        self._tasks: Set[asyncio.Task] = set()
        self._changed: Optional[asyncio.Condition] = None
        self.version = 0

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a subscriber and return a function that removes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def notify_progress_changed(self) -> None:
        self.version += 1
        for callback in list(self._subscribers):
            try:
                result = callback()
            except Exception:
                logger.exception("Progress subscriber %r failed", callback)
                continue
            if inspect.isawaitable(result):
                self._schedule(result)
        self._wake_waiters()

    async def wait_for_change(self, since: int, timeout: Optional[float] = None) -> int:
        """Wait until ``version`` moves past ``since`` and return the new version."""
        if self._changed is None:
            self._changed = asyncio.Condition()
        async with self._changed:
            await asyncio.wait_for(self._changed.wait_for(lambda: self.version > since), timeout)
        return self.version

    async def drain(self) -> None:
        """Wait for scheduled subscriber coroutines to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _schedule(self, awaitable) -> None:
        task = asyncio.ensure_future(awaitable)
        self._tasks.add(task)
        task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Progress subscriber failed", exc_info=task.exception())

    def _wake_waiters(self) -> None:
        if self._changed is None:
            return
        condition = self._changed

        async def notify() -> None:
            async with condition:
                condition.notify_all()

        self._schedule(notify())
