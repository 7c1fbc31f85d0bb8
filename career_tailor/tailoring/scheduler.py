from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Any, Awaitable, Callable, Generic, Protocol, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


CallLater = Callable[..., TimerHandle]


class LatestValue(Generic[T]):
    """Owned mutable cell read by deferred callbacks at fire time."""

    def __init__(self, value: T):
        self._value = value

    def get(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        self._value = value


class DebounceScheduler:
    """Cancel-and-replace scheduling for a single logical slot.

    ``schedule`` drops any pending timer before arming a new one, so only the
    last call inside a quiet window fires. A job that already started is never
    interrupted. ``call_later`` defaults to the running loop's and can be
    swapped for a fake timer.
    """

    def __init__(self, call_later: CallLater | None = None):
        self._call_later = call_later
        self._handle: TimerHandle | None = None
        self._task: asyncio.Task[Any] | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self, delay_s: float, job: Callable[[], Awaitable[Any]]) -> None:
        self.cancel_pending()
        call_later = self._call_later or asyncio.get_running_loop().call_later
        self._handle = call_later(delay_s, self._fire, job)

    def cancel_pending(self) -> bool:
        if self._handle is None:
            return False
        self._handle.cancel()
        self._handle = None
        logger.debug("debounce_cancelled")
        return True

    def _fire(self, job: Callable[[], Awaitable[Any]]) -> None:
        self._handle = None
        self._task = asyncio.get_running_loop().create_task(job())
        self._task.add_done_callback(_log_job_failure)

    async def wait(self) -> None:
        """Wait for the most recently fired job, if any, to finish."""
        task = self._task
        if task is None:
            return
        with contextlib.suppress(asyncio.CancelledError):
            await task

    def close(self) -> None:
        """Drop the pending timer and cancel a job that is still running."""
        self.cancel_pending()
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
            logger.debug("debounce_job_cancelled")


def _log_job_failure(task: asyncio.Task[Any]) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("debounce_job_failed: %s", exc, exc_info=exc)
