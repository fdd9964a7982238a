"""Tests for the debounced scheduler."""

import asyncio

import pytest

from beat_catalog.core.debounce import Debouncer

WAIT = 0.05


class TestDebouncer:
    """Test last-input-wins scheduling."""

    @pytest.mark.asyncio
    async def test_runs_after_quiet_window(self):
        calls = []
        debounced = Debouncer(calls.append, wait=WAIT)

        task = debounced("trap")
        assert debounced.pending
        assert calls == []

        await task
        assert calls == ["trap"]
        assert not debounced.pending

    @pytest.mark.asyncio
    async def test_burst_applies_only_last_input(self):
        calls = []
        debounced = Debouncer(calls.append, wait=WAIT)

        for text in ["t", "tr", "tra", "trap"]:
            task = debounced(text)
            await asyncio.sleep(WAIT / 5)

        await task
        await asyncio.sleep(WAIT * 2)
        assert calls == ["trap"]
        assert debounced.calls == 1

    @pytest.mark.asyncio
    async def test_new_input_cancels_previous_task(self):
        debounced = Debouncer(lambda text: None, wait=WAIT)
        first = debounced("a")
        second = debounced("ab")

        await asyncio.sleep(0)
        assert first.cancelled() or first.done()
        await second
        assert not second.cancelled()

    @pytest.mark.asyncio
    async def test_separate_quiet_periods_each_apply(self):
        calls = []
        debounced = Debouncer(calls.append, wait=WAIT)

        await debounced("dark")
        await debounced("drill")
        assert calls == ["dark", "drill"]

    @pytest.mark.asyncio
    async def test_cancel_drops_pending_call(self):
        calls = []
        debounced = Debouncer(calls.append, wait=WAIT)

        debounced("stale")
        assert debounced.cancel() is True
        await asyncio.sleep(WAIT * 2)

        assert calls == []
        assert debounced.cancel() is False

    @pytest.mark.asyncio
    async def test_flush_runs_immediately(self):
        calls = []
        debounced = Debouncer(calls.append, wait=10)

        debounced("now")
        assert await debounced.flush() is True
        assert calls == ["now"]
        assert not debounced.pending
        assert await debounced.flush() is False

    @pytest.mark.asyncio
    async def test_cancel_clears_pending_at_once(self):
        debounced = Debouncer(lambda text: None, wait=10)
        task = debounced("drill")

        assert debounced.cancel() is True
        assert not debounced.pending
        assert debounced.cancel() is False

        await asyncio.sleep(0)
        assert task.cancelled()

    @pytest.mark.asyncio
    async def test_coroutine_functions_are_awaited(self):
        calls = []

        async def apply(text):
            await asyncio.sleep(0)
            calls.append(text)

        debounced = Debouncer(apply, wait=WAIT)
        await debounced("async")
        assert calls == ["async"]

    @pytest.mark.asyncio
    async def test_errors_are_logged_not_raised(self, caplog):
        def broken(text):
            raise RuntimeError("boom")

        debounced = Debouncer(broken, wait=0)
        await debounced("x")
        assert "failed" in caplog.text

    def test_negative_wait_rejected(self):
        with pytest.raises(ValueError):
            Debouncer(print, wait=-1)

    def test_requires_running_loop(self):
        debounced = Debouncer(print, wait=WAIT)
        with pytest.raises(RuntimeError):
            debounced("x")
