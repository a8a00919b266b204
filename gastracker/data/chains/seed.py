"""Bootstrap the default set of monitored chains.

RPC endpoints default to public nodes and can be overridden per network
through environment variables (e.g. ``ETHEREUM_RPC``).

Usage:
    python -m gastracker.data.chains.seed
"""

import asyncio
import sys

from gastracker.data.chains.db import ChainDB
from gastracker.data.chains.models import Chain
from gastracker.helpers.config import get_optional_env
from gastracker.helpers.db import create_tables, insert_models_ignore_conflicts
from gastracker.helpers.logging import get_logger


logger = get_logger(__name__)

# (name, chain_id, env override, public default, native token)
DEFAULT_CHAINS: list[tuple[str, int, str, str, str]] = [
    ("Ethereum", 1, "ETHEREUM_RPC", "https://eth.llamarpc.com", "ETH"),
    ("Polygon", 137, "POLYGON_RPC", "https://polygon-rpc.com", "MATIC"),
    ("Arbitrum", 42161, "ARBITRUM_RPC", "https://arb1.arbitrum.io/rpc", "ETH"),
    ("Optimism", 10, "OPTIMISM_RPC", "https://mainnet.optimism.io", "ETH"),
    ("BNB Chain", 56, "BNB_RPC", "https://bsc-dataseed1.binance.org", "BNB"),
    (
        "Avalanche",
        43114,
        "AVALANCHE_RPC",
        "https://api.avax.network/ext/bc/C/rpc",
        "AVAX",
    ),
]


def default_chains() -> list[Chain]:
    """Build the default chains, applying RPC overrides from the environment."""
    return [
        Chain(
            name=name,
            chain_id=chain_id,
            rpc_url=get_optional_env(env_key, default_url) or default_url,
            native_token=native_token,
        )
        for name, chain_id, env_key, default_url, native_token in DEFAULT_CHAINS
    ]


async def seed_chains(chains: list[Chain] | None = None) -> int:
    """Insert chains that don't exist yet; existing network ids are untouched.

    Returns:
        Number of chains created
    """
    await create_tables()
    created = await insert_models_ignore_conflicts(
        ChainDB,
        chains if chains is not None else default_chains(),
        conflict_columns=["chain_id"],
        exclude={"id"},
    )
    logger.info("Created %d chains", created)
    return created


async def main() -> None:
    """Main entry point."""
    try:
        await seed_chains()
    except Exception:
        logger.exception("Seeding chains failed")
        sys.exit(1)


def cli() -> None:
    """Command-line interface entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    cli()
