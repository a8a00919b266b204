"""Tests for RecurringScheduler."""

from unittest.mock import AsyncMock, call, patch

import asyncio

import pytest

from gastracker.scheduler import RecurringScheduler, SchedulerState


class TestRunOnce:
    """Tests for a single scheduled cycle."""

    @pytest.mark.asyncio
    async def test_success(self) -> None:
        """Test a successful cycle stores its result."""

        async def job() -> str:
            return "done"

        scheduler = RecurringScheduler(job, interval=0)

        assert await scheduler.run_once() == "done"
        assert scheduler.cycles_run == 1
        assert scheduler.cycles_failed == 0
        assert scheduler.last_result == "done"

    @pytest.mark.asyncio
    async def test_retries_with_fixed_delay(self) -> None:
        """Test a failing job is retried after the retry delay."""
        attempts = 0

        async def job() -> int:
            nonlocal attempts
            attempts += 1
            if attempts < 3:
                raise ConnectionError("database unavailable")
            return attempts

        scheduler = RecurringScheduler(job, retry_attempts=3, retry_delay=30)

        with patch.object(
            scheduler, "_sleep_unless_stopped", new_callable=AsyncMock
        ) as sleep:
            result = await scheduler.run_once()

        assert result == 3
        assert sleep.await_args_list == [call(30), call(30)]
        assert scheduler.last_error is None

    @pytest.mark.asyncio
    async def test_exhausted_retries(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test a cycle that keeps failing is logged and skipped."""
        import logging

        caplog.set_level(logging.ERROR)
        attempts = 0

        async def job() -> None:
            nonlocal attempts
            attempts += 1
            raise ConnectionError("database unavailable")

        scheduler = RecurringScheduler(
            job, name="gas price update", retry_attempts=3, retry_delay=0
        )

        assert await scheduler.run_once() is None
        assert attempts == 3
        assert scheduler.cycles_failed == 1
        assert isinstance(scheduler.last_error, ConnectionError)
        assert any(
            "gas price update failed after 3 attempts" in record.getMessage()
            for record in caplog.records
        )

    def test_negative_interval(self) -> None:
        """Test negative durations are rejected."""

        async def job() -> None:
            return None

        with pytest.raises(ValueError, match="must not be negative"):
            RecurringScheduler(job, interval=-1)
        with pytest.raises(ValueError, match="must not be negative"):
            RecurringScheduler(job, retry_delay=-1)


class TestRunForever:
    """Tests for the recurring loop."""

    @pytest.mark.asyncio
    async def test_max_cycles(self) -> None:
        """Test the loop stops after max_cycles."""
        runs = 0

        async def job() -> None:
            nonlocal runs
            runs += 1

        scheduler = RecurringScheduler(job, interval=0)
        await scheduler.run_forever(max_cycles=3)

        assert runs == 3
        assert scheduler.cycles_run == 3
        assert scheduler.state is SchedulerState.STOPPED

    @pytest.mark.asyncio
    async def test_continues_after_failed_cycle(self) -> None:
        """Test the schedule goes on when a cycle exhausts its retries."""
        runs = 0

        async def job() -> str:
            nonlocal runs
            runs += 1
            if runs <= 2:
                raise ConnectionError("database unavailable")
            return "ok"

        scheduler = RecurringScheduler(job, interval=0, retry_attempts=2, retry_delay=0)
        await scheduler.run_forever(max_cycles=2)

        assert runs == 3
        assert scheduler.cycles_failed == 1
        assert scheduler.last_result == "ok"

    @pytest.mark.asyncio
    async def test_cycles_never_overlap(self) -> None:
        """Test a new cycle starts only after the previous one finished."""
        in_flight = 0
        peak = 0

        async def slow_job() -> None:
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1

        scheduler = RecurringScheduler(slow_job, interval=0)
        await scheduler.run_forever(max_cycles=4)

        assert peak == 1

    @pytest.mark.asyncio
    async def test_shutdown_wakes_pending_wait(self) -> None:
        """Test shutdown ends the wait for the next cycle immediately."""
        ran = asyncio.Event()

        async def job() -> None:
            ran.set()

        scheduler = RecurringScheduler(job, interval=3600)
        task = asyncio.create_task(scheduler.run_forever())

        await asyncio.wait_for(ran.wait(), timeout=1.0)
        scheduler.shutdown()
        await asyncio.wait_for(task, timeout=1.0)

        assert scheduler.cycles_run == 1
        assert scheduler.state is SchedulerState.STOPPED

    @pytest.mark.asyncio
    async def test_shutdown_during_cycle(self) -> None:
        """Test no further cycle starts after shutdown."""
        scheduler: RecurringScheduler

        async def job() -> None:
            scheduler.shutdown()

        scheduler = RecurringScheduler(job, interval=0)
        await scheduler.run_forever()

        assert scheduler.cycles_run == 1

    @pytest.mark.asyncio
    async def test_shutdown_ends_retry_wait(self) -> None:
        """Test shutdown during a retry wait stops without further attempts."""
        attempts = 0
        failed_once = asyncio.Event()

        async def job() -> None:
            nonlocal attempts
            attempts += 1
            failed_once.set()
            raise ConnectionError("database unavailable")

        scheduler = RecurringScheduler(job, interval=0, retry_attempts=3, retry_delay=5)
        task = asyncio.create_task(scheduler.run_forever())

        await asyncio.wait_for(failed_once.wait(), timeout=1.0)
        scheduler.shutdown()
        await asyncio.wait_for(task, timeout=1.0)

        assert attempts == 1
        assert scheduler.cycles_run == 1
        assert scheduler.cycles_failed == 1
        assert isinstance(scheduler.last_error, ConnectionError)
        assert scheduler.state is SchedulerState.STOPPED
