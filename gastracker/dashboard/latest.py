"""Console dashboard of the latest gas prices.

Shows every active chain with its most recent reading. Chains that have no
successful reading yet are listed without a price.

Usage:
    python -m gastracker.dashboard.latest
"""

import sys
from collections.abc import Callable
from datetime import datetime

import asyncio

from pydantic import BaseModel
from rich.console import Console
from rich.table import Table
from sqlalchemy.ext.asyncio import AsyncSession

from gastracker.data.readings.models import ChainLatestReading
from gastracker.data.readings.queries import last_updated, latest_readings_by_chain
from gastracker.helpers.db import AsyncSessionLocal
from gastracker.helpers.logging import get_logger


logger = get_logger(__name__)

EMPTY_CELL = "-"


class DashboardView(BaseModel):
    """Data shown on the dashboard."""

    chains: list[ChainLatestReading]
    last_updated: datetime | None = None

    @property
    def total_chains(self) -> int:
        """Number of active chains."""
        return len(self.chains)


async def load_dashboard(
    session_factory: Callable[[], AsyncSession] = AsyncSessionLocal,
) -> DashboardView:
    """Read the latest reading per active chain and the last update time."""
    async with session_factory() as session:
        chains = await latest_readings_by_chain(session)
        updated = await last_updated(session)
    return DashboardView(chains=chains, last_updated=updated)


def _format_time(value: datetime | None) -> str:
    return value.strftime("%Y-%m-%d %H:%M:%S %Z").strip() if value else EMPTY_CELL


def build_table(view: DashboardView) -> Table:
    """Render the dashboard as a rich table."""
    table = Table(
        title="Gas Prices",
        caption=(
            f"{view.total_chains} chains • last updated "
            f"{_format_time(view.last_updated)}"
        ),
    )
    table.add_column("Chain", style="bold")
    table.add_column("Chain ID", justify="right")
    table.add_column("Token")
    table.add_column("Gas (gwei)", justify="right", style="green")
    table.add_column("Cost (USD)", justify="right")
    table.add_column("Observed")

    for row in view.chains:
        latest = row.latest
        if latest is None:
            table.add_row(
                row.chain.name,
                str(row.chain.chain_id),
                row.chain.native_token,
                EMPTY_CELL,
                EMPTY_CELL,
                EMPTY_CELL,
            )
            continue

        cost = latest.usd_cost
        table.add_row(
            row.chain.name,
            str(row.chain.chain_id),
            row.chain.native_token,
            f"{latest.gas_price_gwei.normalize():f}",
            f"{cost:f}" if cost is not None else EMPTY_CELL,
            _format_time(latest.timestamp),
        )

    return table


async def main() -> int:
    """Print the dashboard once.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    console = Console()
    try:
        view = await load_dashboard()
    except ValueError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        return 1
    except Exception:
        logger.exception("Failed to load dashboard")
        return 1

    console.print(build_table(view))
    return 0


def cli() -> None:
    """Command-line interface entry point."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
