"""
Cancellable deferred callbacks for driving playback.

The engine never sleeps; it asks a :class:`Scheduler` to call it back after a
delay and cancels that request whenever the cursor moves for another reason.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, List, Tuple

Callback = Callable[[], None]


@dataclass(slots=True, eq=False)
class ScheduledHandle:
    """Opaque reference to a pending callback."""

    due: float
    callback: Callback
    cancelled: bool = False
    fired: bool = False
    native: Any = field(default=None, repr=False)

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.fired)


class Scheduler(ABC):
    """Abstract single-threaded timer service."""

    @abstractmethod
    def now(self) -> float:
        """Return the current time in milliseconds."""
        raise NotImplementedError

    @abstractmethod
    def schedule_after(self, delay_ms: float, callback: Callback) -> ScheduledHandle:
        """Run ``callback`` once, ``delay_ms`` from now."""
        raise NotImplementedError

    @abstractmethod
    def cancel(self, handle: ScheduledHandle) -> None:
        """Prevent ``handle`` from firing; a no-op for fired or cancelled handles."""
        raise NotImplementedError


class ManualScheduler(Scheduler):
    """Virtual-clock scheduler that only moves when told to.

    Useful for simulations and tests: ``advance(ms)`` runs every callback
    that falls due within the interval, in due-time order, including ones
    scheduled by callbacks that ran earlier in the same interval.
    """

    def __init__(self, start_ms: float = 0.0) -> None:
        self._now = float(start_ms)
        self._queue: List[Tuple[float, int, ScheduledHandle]] = []
        self._counter = itertools.count()

    def now(self) -> float:
        return self._now

    @property
    def pending(self) -> int:
        return sum(1 for _, _, handle in self._queue if handle.active)

    def next_due(self) -> float | None:
        self._discard_inactive()
        return self._queue[0][0] if self._queue else None

    def schedule_after(self, delay_ms: float, callback: Callback) -> ScheduledHandle:
        handle = ScheduledHandle(due=self._now + max(0.0, delay_ms), callback=callback)
        heapq.heappush(self._queue, (handle.due, next(self._counter), handle))
        return handle

    def cancel(self, handle: ScheduledHandle) -> None:
        handle.cancelled = True

    def advance(self, delta_ms: float) -> int:
        """Move the clock forward, firing due callbacks. Returns how many fired."""
        if delta_ms < 0:
            raise ValueError("Cannot move the clock backwards.")
        target = self._now + delta_ms
        fired = 0
        while True:
            self._discard_inactive()
            if not self._queue or self._queue[0][0] > target:
                break
            due, _, handle = heapq.heappop(self._queue)
            self._now = due
            handle.fired = True
            handle.callback()
            fired += 1
        self._now = target
        return fired

    def run_until_idle(self, max_callbacks: int = 100_000) -> int:
        """Fire callbacks in order until nothing is pending."""
        fired = 0
        while fired < max_callbacks:
            due = self.next_due()
            if due is None:
                break
            fired += self.advance(due - self._now)
        return fired

    def _discard_inactive(self) -> None:
        while self._queue and not self._queue[0][2].active:
            heapq.heappop(self._queue)


class AsyncioScheduler(Scheduler):
    """Scheduler backed by an asyncio event loop's ``call_later`` timers."""

    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self._loop = loop

    def now(self) -> float:
        return self._loop.time() * 1000.0

    def schedule_after(self, delay_ms: float, callback: Callback) -> ScheduledHandle:
        handle = ScheduledHandle(due=self.now() + max(0.0, delay_ms), callback=callback)

        def _fire() -> None:
            if not handle.active:
                return
            handle.fired = True
            callback()

        handle.native = self._loop.call_later(max(0.0, delay_ms) / 1000.0, _fire)
        return handle

    def cancel(self, handle: ScheduledHandle) -> None:
        handle.cancelled = True
        if handle.native is not None:
            handle.native.cancel()
