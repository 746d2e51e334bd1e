"""
Cancellable delayed callbacks for debounced history commits.

A scheduler exposes call_later(delay_s, callback) and returns a handle with
cancel(). Two implementations:

- EventLoopScheduler: runs callbacks on the caller's asyncio event loop, so a
  debounced commit happens on the same thread as every edit.
- ManualScheduler: a virtual clock that only moves when advance() is called.
  Deterministic drivers (CLI replays, tests) use it to fire timers on demand.

default_scheduler() picks between them for callers that pass none.
"""

import asyncio
import heapq
import itertools
from typing import Callable, List, Optional, Protocol, Tuple


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay_s: float, callback: Callable[[], None]) -> TimerHandle: ...


class EventLoopScheduler:
    """
    Scheduler backed by an asyncio event loop.

    Args:
        loop: Loop to schedule on (defaults to the loop running at call time)
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def call_later(self, delay_s: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay_s, callback)


class ManualTimer:
    """Handle for a ManualScheduler callback."""

    def __init__(self, due_ms: float, callback: Callable[[], None]):
        self.due_ms = due_ms
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """
    Virtual-clock scheduler. Timers fire only inside advance().

    Example:
        scheduler = ManualScheduler()
        scheduler.call_later(0.5, commit)
        scheduler.advance(499)  # nothing fires
        scheduler.advance(1)    # commit() runs
    """

    def __init__(self):
        self.now_ms = 0.0
        self._queue: List[Tuple[float, int, ManualTimer]] = []
        self._sequence = itertools.count()

    def call_later(self, delay_s: float, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(self.now_ms + delay_s * 1000, callback)
        heapq.heappush(self._queue, (timer.due_ms, next(self._sequence), timer))
        return timer

    @property
    def pending(self) -> int:
        """Number of scheduled, uncancelled timers."""
        return sum(1 for _, _, timer in self._queue if not timer.cancelled)

    def advance(self, ms: float) -> int:
        """
        Move the clock forward, firing every timer that comes due, in due order.

        Args:
            ms: Milliseconds to advance

        Returns:
            Number of callbacks fired
        """
        target_ms = self.now_ms + ms
        fired = 0
        while self._queue and self._queue[0][0] <= target_ms:
            due_ms, _, timer = heapq.heappop(self._queue)
            self.now_ms = due_ms
            if timer.cancelled:
                continue
            timer.callback()
            fired += 1
        self.now_ms = target_ms
        return fired


def default_scheduler() -> Scheduler:
    """
    Scheduler for a history created without one.

    Inside a running event loop, commits are scheduled on that loop. From
    synchronous code there is no loop to fire timers, so a ManualScheduler is
    returned: pending edits stay pending until flushed (undo, save) or until
    the caller advances it.
    """
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        return ManualScheduler()
    return EventLoopScheduler(loop)
