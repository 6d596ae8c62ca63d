"""
Delayed work and cooperative cancellation.

Debounced timers and "current request" tokens are modelled explicitly so
the translation pipeline can be driven by a virtual clock in tests.

Usage:
    scheduler = LoopScheduler()
    debouncer = Debouncer(scheduler, 1.0, on_settled)
    debouncer.trigger(text)      # re-arms, only the latest call fires

    token = CancellationToken()
    token.add_callback(task.cancel)
    token.cancel()               # suppresses result handling
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
from abc import ABC, abstractmethod
from typing import Any, Callable


class RequestCancelled(Exception):
    """Raised when a request's token was cancelled. Never an error."""


# =============================================================================
# Scheduled Calls
# =============================================================================


class ScheduledCall:
    """Handle for a callback scheduled to run later."""

    def __init__(self, when: float, callback: Callable[[], Any]):
        self.when = when
        self.callback = callback
        self.cancelled = False
        self._on_cancel: Callable[[], None] | None = None

    def cancel(self) -> None:
        if self.cancelled:
            return
        self.cancelled = True
        if self._on_cancel:
            self._on_cancel()


class Scheduler(ABC):
    """Source of time and delayed callbacks."""

    @abstractmethod
    def now(self) -> float:
        """Current time in seconds."""
        pass

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], Any]) -> ScheduledCall:
        """Run `callback` after `delay` seconds unless cancelled first."""
        pass


class LoopScheduler(Scheduler):
    """Scheduler backed by the running asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def now(self) -> float:
        return self.loop.time()

    def call_later(self, delay: float, callback: Callable[[], Any]) -> ScheduledCall:
        call = ScheduledCall(self.now() + delay, callback)
        handle = self.loop.call_later(delay, callback)
        call._on_cancel = handle.cancel
        return call


class VirtualScheduler(Scheduler):
    """
    Scheduler driven by a virtual clock.

    Nothing fires until `advance()` moves the clock past a call's due
    time. Due calls run synchronously, in due-time order.
    """

    def __init__(self, start: float = 0.0):
        self._now = start
        self._queue: list[tuple[float, int, ScheduledCall]] = []
        self._counter = itertools.count()

    def now(self) -> float:
        return self._now

    def call_later(self, delay: float, callback: Callable[[], Any]) -> ScheduledCall:
        call = ScheduledCall(self._now + max(delay, 0.0), callback)
        heapq.heappush(self._queue, (call.when, next(self._counter), call))
        return call

    def advance(self, seconds: float) -> int:
        """Move the clock forward, running every call that becomes due."""
        target = self._now + seconds
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            when, _, call = heapq.heappop(self._queue)
            if call.cancelled:
                continue
            self._now = when
            call.callback()
            fired += 1
        self._now = target
        return fired

    @property
    def pending_calls(self) -> int:
        return sum(1 for _, _, call in self._queue if not call.cancelled)


# =============================================================================
# Debounce
# =============================================================================


class Debouncer:
    """
    Delay a callback until triggers stop arriving for `delay` seconds.

    Every trigger cancels the pending call; only the latest arguments
    are delivered.
    """

    def __init__(self, scheduler: Scheduler, delay: float, callback: Callable[..., Any]):
        self.scheduler = scheduler
        self.delay = delay
        self.callback = callback
        self._pending: ScheduledCall | None = None

    @property
    def pending(self) -> bool:
        return self._pending is not None and not self._pending.cancelled

    def trigger(self, *args: Any) -> None:
        self.cancel()
        self._pending = self.scheduler.call_later(self.delay, lambda: self._fire(args))

    def cancel(self) -> None:
        if self._pending:
            self._pending.cancel()
            self._pending = None

    def _fire(self, args: tuple[Any, ...]) -> None:
        self._pending = None
        self.callback(*args)


# =============================================================================
# Cancellation
# =============================================================================


class CancellationToken:
    """
    Cooperative cancellation for one outstanding request.

    Cancelling runs registered callbacks (e.g. aborting the transport)
    but mostly exists so result handlers can compare-and-discard.
    """

    def __init__(self):
        self._cancelled = False
        self._callbacks: list[Callable[[], Any]] = []

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()

    def add_callback(self, callback: Callable[[], Any]) -> None:
        if self._cancelled:
            callback()
        else:
            self._callbacks.append(callback)

    def remove_callback(self, callback: Callable[[], Any]) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise RequestCancelled()
