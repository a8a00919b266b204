"""Retention cleanup for gas readings.

Usage:
    python -m gastracker.data.readings.cleanup --days 30
"""

import argparse
import sys
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import asyncio

from sqlalchemy.ext.asyncio import AsyncSession

from gastracker.data.readings.queries import delete_readings_older_than
from gastracker.helpers.config import get_poller_config
from gastracker.helpers.constants import DEFAULT_RETENTION_DAYS
from gastracker.helpers.db import AsyncSessionLocal
from gastracker.helpers.logging import get_logger


logger = get_logger(__name__)


async def cleanup_old_readings(
    days_to_keep: int = DEFAULT_RETENTION_DAYS,
    *,
    now: datetime | None = None,
    session_factory: Callable[[], AsyncSession] = AsyncSessionLocal,
) -> int:
    """Delete readings older than ``days_to_keep`` days.

    Returns:
        Number of readings deleted
    """
    if days_to_keep < 0:
        msg = "days_to_keep must not be negative"
        raise ValueError(msg)

    cutoff = (now or datetime.now(UTC)) - timedelta(days=days_to_keep)
    async with session_factory() as session:
        deleted = await delete_readings_older_than(session, cutoff)

    logger.info("Deleted %d readings older than %s", deleted, cutoff.isoformat())
    return deleted


async def main(days_to_keep: int) -> int:
    """Run one cleanup pass.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    try:
        await cleanup_old_readings(days_to_keep)
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1
    except Exception:
        logger.exception("Cleanup failed")
        return 1
    return 0


def cli() -> None:
    """Command-line interface entry point."""
    parser = argparse.ArgumentParser(
        description="Delete old gas readings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Keep the configured retention (READING_RETENTION_DAYS, default 30)
  python -m gastracker.data.readings.cleanup

  # Keep one week
  python -m gastracker.data.readings.cleanup --days 7
        """,
    )
    parser.add_argument(
        "--days",
        type=int,
        default=None,
        help="Days of readings to keep",
    )

    args = parser.parse_args()
    days = args.days if args.days is not None else get_poller_config().retention_days

    sys.exit(asyncio.run(main(days)))


if __name__ == "__main__":
    cli()
