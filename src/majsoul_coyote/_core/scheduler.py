# Area: Core
"""
majsoul_coyote._core.scheduler — Delayed callbacks on the event loop
====================================================================

Tracks every delayed callback a controller schedules so that teardown
can cancel all of them at once.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Callable, Optional, Set

logger = logging.getLogger("majsoul_coyote.scheduler")


class Scheduler:
    """
    Runs callbacks after a delay as asyncio tasks.

    Callbacks may be plain functions or coroutine functions. Exceptions
    raised by a callback are logged and never propagated. Must be used
    from inside a running event loop.
    """

    def __init__(self, name: str = "scheduler") -> None:
        self.name = name
        self._tasks: Set[asyncio.Task] = set()
        self._closed = False

    @property
    def pending(self) -> int:
        return sum(1 for task in self._tasks if not task.done())

    @property
    def closed(self) -> bool:
        return self._closed

    def call_later(
        self, delay: float, callback: Callable[..., Any], *args: Any
    ) -> Optional[asyncio.Task]:
        """
        Schedule callback(*args) to run after delay seconds.

        Returns:
            The task, or None if the scheduler has been closed
        """
        if self._closed:
            logger.debug(f"[{self.name}] closed, not scheduling {callback!r}")
            return None
        task = asyncio.get_running_loop().create_task(
            self._run_later(delay, callback, args)
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def spawn(self, callback: Callable[..., Any], *args: Any) -> Optional[asyncio.Task]:
        """Run callback(*args) as soon as the loop gets to it."""
        return self.call_later(0, callback, *args)

    async def _run_later(self, delay: float, callback: Callable[..., Any], args) -> None:
        if delay > 0:
            await asyncio.sleep(delay)
        try:
            result = callback(*args)
            if inspect.isawaitable(result):
                await result
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception(f"[{self.name}] scheduled callback failed")

    def cancel_all(self) -> int:
        """
        Cancel every pending callback.

        Returns:
            Number of tasks cancelled
        """
        cancelled = 0
        for task in list(self._tasks):
            if not task.done() and task is not current_task():
                task.cancel()
                cancelled += 1
        self._tasks.clear()
        if cancelled:
            logger.debug(f"[{self.name}] cancelled {cancelled} pending timers")
        return cancelled

    def close(self) -> None:
        """Cancel everything and refuse further scheduling. Idempotent."""
        self._closed = True
        self.cancel_all()


def current_task() -> Optional[asyncio.Task]:
    try:
        return asyncio.current_task()
    except RuntimeError:
        return None
