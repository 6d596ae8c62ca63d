"""
Tests for the virtual clock, debouncing and cancellation tokens.
"""

import asyncio

import pytest

from nansuka.core.scheduling import (
    CancellationToken,
    Debouncer,
    LoopScheduler,
    RequestCancelled,
    VirtualScheduler,
)


class TestVirtualScheduler:
    def test_runs_due_calls_in_order(self, scheduler):
        fired = []
        scheduler.call_later(2.0, lambda: fired.append("late"))
        scheduler.call_later(1.0, lambda: fired.append("early"))

        scheduler.advance(0.5)
        assert fired == []

        assert scheduler.advance(2.0) == 2
        assert fired == ["early", "late"]
        assert scheduler.now() == 2.5

    def test_cancelled_calls_never_fire(self, scheduler):
        fired = []
        call = scheduler.call_later(1.0, lambda: fired.append(1))
        call.cancel()

        scheduler.advance(5)
        assert fired == []
        assert scheduler.pending_calls == 0


class TestDebouncer:
    def test_only_latest_trigger_fires(self, scheduler):
        received = []
        debouncer = Debouncer(scheduler, 1.0, received.append)

        debouncer.trigger("a")
        scheduler.advance(0.6)
        debouncer.trigger("ab")
        scheduler.advance(0.6)
        debouncer.trigger("abc")
        assert debouncer.pending

        scheduler.advance(0.99)
        assert received == []

        scheduler.advance(0.05)
        assert received == ["abc"]
        assert not debouncer.pending

    def test_cancel(self, scheduler):
        received = []
        debouncer = Debouncer(scheduler, 1.0, received.append)
        debouncer.trigger("x")
        debouncer.cancel()

        scheduler.advance(2)
        assert received == []

    @pytest.mark.asyncio
    async def test_loop_scheduler(self):
        received = []
        debouncer = Debouncer(LoopScheduler(), 0.01, received.append)
        debouncer.trigger("first")
        debouncer.trigger("second")

        await asyncio.sleep(0.05)
        assert received == ["second"]


class TestCancellationToken:
    def test_callbacks_run_once(self):
        calls = []
        token = CancellationToken()
        token.add_callback(lambda: calls.append(1))

        token.cancel()
        token.cancel()
        assert calls == [1]
        assert token.cancelled

    def test_callback_added_after_cancel_runs_immediately(self):
        calls = []
        token = CancellationToken()
        token.cancel()
        token.add_callback(lambda: calls.append(1))
        assert calls == [1]

    def test_removed_callback_does_not_run(self):
        calls = []
        callback = lambda: calls.append(1)  # noqa: E731
        token = CancellationToken()
        token.add_callback(callback)
        token.remove_callback(callback)

        token.cancel()
        assert calls == []

    def test_raise_if_cancelled(self):
        token = CancellationToken()
        token.raise_if_cancelled()

        token.cancel()
        with pytest.raises(RequestCancelled):
            token.raise_if_cancelled()
