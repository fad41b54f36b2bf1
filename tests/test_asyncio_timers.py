"""Tests for src.adapters.asyncio_timers — real event-loop timers."""

import asyncio

import pytest

from src.adapters.asyncio_timers import AsyncioTimers


class TestAsyncioTimers:
    @pytest.mark.asyncio
    async def test_fires_after_delay(self):
        timers = AsyncioTimers()
        fired = []
        timers.schedule("k", 0.01, lambda: fired.append(1))
        assert timers.pending("k") is True
        await asyncio.sleep(0.05)
        assert fired == [1]
        assert timers.pending("k") is False

    @pytest.mark.asyncio
    async def test_reschedule_replaces_previous(self):
        timers = AsyncioTimers()
        fired = []
        timers.schedule("k", 0.01, lambda: fired.append("first"))
        timers.schedule("k", 0.02, lambda: fired.append("second"))
        await asyncio.sleep(0.06)
        assert fired == ["second"]

    @pytest.mark.asyncio
    async def test_cancel(self):
        timers = AsyncioTimers()
        fired = []
        timers.schedule("k", 0.01, lambda: fired.append(1))
        assert timers.cancel("k") is True
        assert timers.cancel("k") is False
        await asyncio.sleep(0.03)
        assert fired == []

    @pytest.mark.asyncio
    async def test_coroutine_callback_runs(self):
        timers = AsyncioTimers()
        done = asyncio.Event()

        async def work():
            done.set()

        timers.schedule("k", 0, work)
        await asyncio.wait_for(done.wait(), timeout=1)
        await timers.drain()

    @pytest.mark.asyncio
    async def test_failing_callback_does_not_break_loop(self):
        timers = AsyncioTimers()
        fired = []

        def boom():
            raise RuntimeError("boom")

        timers.schedule("bad", 0, boom)
        timers.schedule("good", 0.01, lambda: fired.append(1))
        await asyncio.sleep(0.05)
        assert fired == [1]

    @pytest.mark.asyncio
    async def test_chat_round_trip_on_real_loop(self):
        from src.core.chat_engine import ChatEngine
        from src.data.models import DeliveryStatus

        engine = ChatEngine(AsyncioTimers(), sent_delay=0.01, reply_delay=0.02)
        thread = engine.create_thread("Chat")
        message = engine.send_message("hi")
        await asyncio.sleep(0.1)
        assert message.status is DeliveryStatus.SENT
        assert len(thread.messages) == 2
        assert thread.typing is False
