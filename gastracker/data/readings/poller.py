"""Gas price poller.

One cycle fetches ``eth_gasPrice`` from every active chain, converts the
result to gwei and stores it. Chains are processed concurrently and
independently: a failing chain is recorded in the cycle summary and never
stops the others. Only failing to list the chains aborts the cycle.
"""

from collections.abc import Callable
from datetime import UTC, datetime

import asyncio

import httpx

from gastracker.data.chains.models import Chain
from gastracker.data.chains.registry import ChainRegistry
from gastracker.data.readings.models import ChainFailure, GasReading, PollSummary
from gastracker.data.readings.recorder import ReadingRecorder
from gastracker.helpers.constants import DEFAULT_MAX_CONCURRENCY, DEFAULT_RPC_TIMEOUT
from gastracker.helpers.errors import RpcError
from gastracker.helpers.logging import get_logger
from gastracker.helpers.parsers import estimate_usd_cost, wei_to_gwei
from gastracker.helpers.rpc import fetch_gas_price


logger = get_logger(__name__)


def utc_now() -> datetime:
    """Current time in UTC."""
    return datetime.now(UTC)


class GasPricePoller:
    """Runs fetch, convert and record for every active chain."""

    def __init__(
        self,
        registry: ChainRegistry,
        recorder: ReadingRecorder,
        http_client: httpx.AsyncClient,
        *,
        rpc_timeout: float = DEFAULT_RPC_TIMEOUT,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize the poller.

        Args:
            registry: Source of the chains to poll
            recorder: Sink for successful readings
            http_client: Shared HTTP client; timeouts are passed per request
            rpc_timeout: Timeout for each eth_gasPrice call in seconds
            max_concurrency: Maximum number of chains processed at once
            clock: Returns the observation time of a reading
        """
        if max_concurrency < 1:
            msg = "max_concurrency must be at least 1"
            raise ValueError(msg)

        self.registry = registry
        self.recorder = recorder
        self.http_client = http_client
        self.rpc_timeout = rpc_timeout
        self.max_concurrency = max_concurrency
        self.clock = clock

    async def poll_chain(self, chain: Chain) -> GasReading:
        """Fetch, convert and record the gas price of one chain.

        Raises:
            RpcError: If the gas price cannot be fetched
            StorageError: If the reading cannot be stored
        """
        logger.debug("Fetching gas price for %s", chain.name)
        wei = await fetch_gas_price(
            self.http_client, chain.rpc_url, timeout=self.rpc_timeout
        )
        gas_price_gwei = wei_to_gwei(wei)
        usd_cost = estimate_usd_cost(gas_price_gwei, chain.native_token)

        reading = await self.recorder.record(
            chain, gas_price_gwei, usd_cost, observed_at=self.clock()
        )
        logger.info(
            "Created gas reading for %s: %s gwei", chain.name, gas_price_gwei.normalize()
        )
        return reading

    async def _poll_isolated(
        self, chain: Chain, semaphore: asyncio.Semaphore
    ) -> GasReading | ChainFailure:
        async with semaphore:
            try:
                return await self.poll_chain(chain)
            except RpcError as e:
                logger.error("Failed to fetch gas price for %s: %s", chain.name, e)
                return ChainFailure(chain=chain, error_kind=e.kind, message=e.message)
            except Exception as e:
                logger.exception("Failed to record gas price for %s", chain.name)
                return ChainFailure(
                    chain=chain, error_kind=type(e).__name__, message=str(e)
                )

    async def poll_all(self) -> PollSummary:
        """Run one poll cycle over a snapshot of the active chains.

        Returns:
            Summary with exactly one outcome per chain

        Raises:
            StorageUnavailableError: If the active chains cannot be listed
        """
        chains = await self.registry.active_chains()
        if not chains:
            logger.warning("No active chains to poll")
            return PollSummary()

        semaphore = asyncio.Semaphore(self.max_concurrency)
        outcomes = await asyncio.gather(*[
            self._poll_isolated(chain, semaphore) for chain in chains
        ])

        summary = PollSummary(attempted=len(chains))
        for outcome in outcomes:
            if isinstance(outcome, ChainFailure):
                summary.failed.append(outcome)
            else:
                summary.readings.append(outcome)
        summary.succeeded = len(summary.readings)

        logger.info(
            "Poll cycle finished: %d attempted, %d succeeded, %d failed",
            summary.attempted,
            summary.succeeded,
            len(summary.failed),
        )
        return summary


__all__ = ["GasPricePoller", "utc_now"]
