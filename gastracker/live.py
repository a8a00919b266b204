"""Live gas price worker.

Polls every active chain on a fixed cadence and stores one reading per
successful fetch. A second, slower schedule prunes readings older than the
retention window.

Processing flow:
1. Scheduler triggers a poll cycle
2. Poller snapshots the active chains and, per chain, concurrently:
   - Fetch eth_gasPrice
   - Convert wei to gwei
   - Insert the reading
3. Scheduler waits the poll interval and repeats

Usage:
    python -m gastracker.live
"""

import signal
import sys

import asyncio

from gastracker.data.chains.registry import ChainRegistry
from gastracker.data.readings.cleanup import cleanup_old_readings
from gastracker.data.readings.models import PollSummary
from gastracker.data.readings.poller import GasPricePoller
from gastracker.data.readings.recorder import ReadingRecorder
from gastracker.helpers.config import PollerConfig, get_poller_config
from gastracker.helpers.constants import DEFAULT_CLEANUP_INTERVAL
from gastracker.helpers.db import create_tables
from gastracker.helpers.http import create_http_client
from gastracker.helpers.logging import get_logger
from gastracker.scheduler import RecurringScheduler


logger = get_logger(__name__)


class LiveGasWorker:
    """Long-lived worker driving the poll and cleanup schedules."""

    def __init__(
        self,
        config: PollerConfig | None = None,
        registry: ChainRegistry | None = None,
        recorder: ReadingRecorder | None = None,
    ) -> None:
        """Initialize the worker.

        Args:
            config: Worker settings; read from the environment when omitted
            registry: Chain source; database backed when omitted
            recorder: Reading sink; database backed when omitted
        """
        self.config = config or get_poller_config()

        # One pooled client; each request carries its own timeout
        self.http_client = create_http_client(
            timeout=self.config.rpc_timeout,
            max_connections=self.config.max_concurrency,
        )

        self.poller = GasPricePoller(
            registry or ChainRegistry(),
            recorder or ReadingRecorder(),
            self.http_client,
            rpc_timeout=self.config.rpc_timeout,
            max_concurrency=self.config.max_concurrency,
        )
        self.poll_scheduler = RecurringScheduler(
            self.poll_gas_prices,
            name="gas price update",
            interval=self.config.poll_interval,
            retry_attempts=self.config.retry_attempts,
            retry_delay=self.config.retry_delay,
        )
        self.cleanup_scheduler = RecurringScheduler(
            self.cleanup_readings,
            name="reading cleanup",
            interval=DEFAULT_CLEANUP_INTERVAL,
            retry_attempts=self.config.retry_attempts,
            retry_delay=self.config.retry_delay,
        )

        self.tasks: list[asyncio.Task[None]] = []

    async def poll_gas_prices(self) -> PollSummary:
        """Run one poll cycle."""
        return await self.poller.poll_all()

    async def cleanup_readings(self) -> int:
        """Run one retention pass."""
        return await cleanup_old_readings(self.config.retention_days)

    def shutdown(self) -> None:
        """Stop both schedules without waiting for an in-flight cycle."""
        logger.info("Shutdown signal received, stopping...")
        self.poll_scheduler.shutdown()
        self.cleanup_scheduler.shutdown()
        for task in self.tasks:
            task.cancel()

    async def cleanup(self) -> None:
        """Clean up resources."""
        await self.http_client.aclose()

    async def run(self) -> None:
        """Run the worker until a shutdown signal arrives."""
        # Setup signal handlers
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, self.shutdown)

        try:
            await create_tables()

            self.tasks = [
                asyncio.create_task(self.poll_scheduler.run_forever()),
                asyncio.create_task(self.cleanup_scheduler.run_forever()),
            ]

            # Cancelled tasks come back as CancelledError results
            await asyncio.gather(*self.tasks, return_exceptions=True)
        finally:
            await self.cleanup()

        logger.info("Live gas worker stopped")


async def main() -> None:
    """Main entry point."""
    try:
        worker = LiveGasWorker()
        await worker.run()
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt, exiting...")
    except Exception:
        logger.exception("Fatal error")
        sys.exit(1)


def cli() -> None:
    """Command-line interface entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    cli()
