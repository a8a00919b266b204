"""Recurring job scheduler.

Runs an async job, waits a fixed interval once it has finished, and runs it
again until shut down. Runs never overlap. A run that raises is retried a
fixed number of times with a fixed wait in between; when the attempts are
used up the failure is logged and the normal schedule continues. Shutdown
ends both the wait between cycles and the wait between retries.
"""

from collections.abc import Awaitable, Callable
from contextlib import suppress
from enum import StrEnum

from typing import Any

import asyncio

from gastracker.helpers.constants import (
    DEFAULT_POLL_INTERVAL,
    DEFAULT_RETRY_ATTEMPTS,
    DEFAULT_RETRY_DELAY,
)
from gastracker.helpers.http import retry_with_backoff
from gastracker.helpers.logging import get_logger


logger = get_logger(__name__)


class SchedulerState(StrEnum):
    """Lifecycle of a recurring scheduler."""

    IDLE = "idle"
    RUNNING = "running"
    SCHEDULED = "scheduled"
    STOPPED = "stopped"


class RecurringScheduler:
    """Drives one job on a fixed cadence with job-level retries."""

    def __init__(
        self,
        job: Callable[[], Awaitable[Any]],
        *,
        name: str = "job",
        interval: float = DEFAULT_POLL_INTERVAL,
        retry_attempts: int = DEFAULT_RETRY_ATTEMPTS,
        retry_delay: float = DEFAULT_RETRY_DELAY,
    ) -> None:
        """Initialize the scheduler.

        Args:
            job: Coroutine function run once per cycle
            name: Label used in log messages
            interval: Seconds between the end of a cycle and the next start
            retry_attempts: Total attempts per cycle when the job raises
            retry_delay: Fixed wait in seconds between attempts
        """
        if interval < 0 or retry_delay < 0:
            msg = "interval and retry_delay must not be negative"
            raise ValueError(msg)

        self.job = job
        self.name = name
        self.interval = interval
        self.retry_attempts = retry_attempts
        self.retry_delay = retry_delay
        self._run_with_retry = retry_with_backoff(
            max_retries=retry_attempts,
            base_delay=retry_delay,
            max_delay=retry_delay,
            backoff_factor=1.0,
            sleep_func=lambda delay: self._sleep_unless_stopped(delay),
            stop_when=lambda: self.should_shutdown,
        )(job)

        self.state = SchedulerState.IDLE
        self.should_shutdown = False
        self._stop_event = asyncio.Event()

        # Stats
        self.cycles_run = 0
        self.cycles_failed = 0
        self.last_result: Any = None
        self.last_error: Exception | None = None

    async def run_once(self) -> Any:
        """Run one cycle with retries.

        Returns:
            The job's result, or None if every attempt failed
        """
        self.state = SchedulerState.RUNNING
        logger.info("Starting %s", self.name)
        try:
            result = await self._run_with_retry()
        except Exception as e:
            self.cycles_failed += 1
            self.last_error = e
            self.last_result = None
            logger.exception(
                "%s failed after %d attempts", self.name, self.retry_attempts
            )
            return None
        else:
            self.last_error = None
            self.last_result = result
            logger.info("Completed %s", self.name)
            return result
        finally:
            self.cycles_run += 1

    async def _sleep_unless_stopped(self, delay: float) -> None:
        with suppress(TimeoutError):
            await asyncio.wait_for(self._stop_event.wait(), timeout=delay)

    async def _wait_for_next_cycle(self) -> None:
        self.state = SchedulerState.SCHEDULED
        logger.debug("Next %s in %ss", self.name, self.interval)
        await self._sleep_unless_stopped(self.interval)

    async def run_forever(self, max_cycles: int | None = None) -> None:
        """Run cycles until shutdown, or until ``max_cycles`` have run."""
        try:
            while not self.should_shutdown:
                await self.run_once()

                if max_cycles is not None and self.cycles_run >= max_cycles:
                    break
                if self.should_shutdown:
                    break

                await self._wait_for_next_cycle()
        finally:
            self.state = SchedulerState.STOPPED
            logger.info(
                "%s scheduler stopped after %d cycles", self.name, self.cycles_run
            )

    def shutdown(self) -> None:
        """Stop scheduling.

        Wakes a pending wait immediately, whether between cycles or between
        retry attempts; a failing cycle makes no further attempts. A job
        attempt already in flight is not interrupted.
        """
        self.should_shutdown = True
        self._stop_event.set()


__all__ = ["RecurringScheduler", "SchedulerState"]
