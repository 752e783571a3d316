"""One-shot timers for the window settle step.

The transition engine owns a single DeferredTask. Scheduling a new task
cancels the previous one, so a stale completion can never overwrite a newer
target window.
"""

import asyncio
import heapq
import itertools
import threading
from abc import ABC, abstractmethod
from typing import Callable

from calpicker.logging import get_logger

_log = get_logger(__name__)


class TimerHandle(ABC):
    """Handle to a scheduled callback."""

    @abstractmethod
    def cancel(self) -> None:
        """Cancel the callback if it has not run yet."""
        pass

    @property
    @abstractmethod
    def cancelled(self) -> bool:
        pass


class Scheduler(ABC):
    """Abstract base class for timer sources."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Run callback once after delay seconds."""
        pass


class _ThreadingHandle(TimerHandle):
    def __init__(self, timer: threading.Timer):
        self._timer = timer
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True
        self._timer.cancel()

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ThreadingScheduler(Scheduler):
    """Scheduler backed by daemon threading.Timer threads."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return _ThreadingHandle(timer)


class _AsyncioHandle(TimerHandle):
    def __init__(self, handle: asyncio.TimerHandle):
        self._handle = handle

    def cancel(self) -> None:
        self._handle.cancel()

    @property
    def cancelled(self) -> bool:
        return self._handle.cancelled()


class AsyncioScheduler(Scheduler):
    """Scheduler that runs callbacks on an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return _AsyncioHandle(loop.call_later(delay, callback))


class _ManualHandle(TimerHandle):
    def __init__(self, due: float, seq: int, callback: Callable[[], None]):
        self.due = due
        self.seq = seq
        self.callback = callback
        self._cancelled = False

    def __lt__(self, other: "_ManualHandle") -> bool:
        return (self.due, self.seq) < (other.due, other.seq)

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ManualScheduler(Scheduler):
    """Deterministic scheduler driven by explicit clock advances.

    Useful in tests and when a host event loop wants to pump timers itself.

    Example:
        scheduler = ManualScheduler()
        scheduler.call_later(0.4, done)
        scheduler.advance(0.4)  # done() runs here
    """

    def __init__(self) -> None:
        self.now = 0.0
        self._queue: list[_ManualHandle] = []
        self._seq = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        handle = _ManualHandle(self.now + delay, next(self._seq), callback)
        heapq.heappush(self._queue, handle)
        return handle

    @property
    def pending(self) -> int:
        """Number of scheduled callbacks that have not run or been cancelled."""
        return sum(1 for h in self._queue if not h.cancelled)

    def advance(self, seconds: float) -> int:
        """Move the clock forward, running every callback that comes due.

        Returns the number of callbacks run.
        """
        target = self.now + seconds
        ran = 0
        while self._queue and self._queue[0].due <= target:
            handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self.now = handle.due
            handle.callback()
            ran += 1
        self.now = target
        return ran

    def run_all(self) -> int:
        """Run callbacks until the queue is empty, including newly scheduled ones."""
        ran = 0
        while self._queue:
            handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self.now = max(self.now, handle.due)
            handle.callback()
            ran += 1
        return ran


class DeferredTask:
    """At most one outstanding timer, replaced on every schedule."""

    def __init__(self, scheduler: Scheduler, name: str = "deferred_task"):
        self._scheduler = scheduler
        self._handle: TimerHandle | None = None
        self._lock = threading.Lock()
        self._log = _log.bind(task=name)

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._handle is not None and not self._handle.cancelled

    def schedule(self, delay: float, callback: Callable[[], None]) -> None:
        """Schedule callback, cancelling any previously scheduled one."""
        def run() -> None:
            with self._lock:
                if self._handle is not handle:
                    return
                self._handle = None
            callback()

        with self._lock:
            if self._handle is not None and not self._handle.cancelled:
                self._handle.cancel()
                self._log.debug("task_superseded")
            handle = self._scheduler.call_later(delay, run)
            self._handle = handle
        self._log.debug("task_scheduled", delay=delay)

    def cancel(self) -> bool:
        """Cancel the outstanding timer. Returns True if one was pending."""
        with self._lock:
            handle, self._handle = self._handle, None
        if handle is None or handle.cancelled:
            return False
        handle.cancel()
        self._log.debug("task_cancelled")
        return True
