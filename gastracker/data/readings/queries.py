"""Read and retention queries over gas readings."""

from datetime import UTC, datetime, timedelta
from decimal import Decimal

from sqlalchemy import and_, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from gastracker.data.chains.db import ChainDB
from gastracker.data.chains.models import Chain
from gastracker.data.readings.db import GasReadingDB
from gastracker.data.readings.models import ChainLatestReading, GasReading
from gastracker.helpers.constants import DEFAULT_AVERAGE_WINDOW_HOURS


async def latest_readings_by_chain(session: AsyncSession) -> list[ChainLatestReading]:
    """Every active chain paired with its most recent reading.

    Chains that never produced a reading are included with ``latest=None``.
    """
    ranked = select(
        GasReadingDB,
        func.row_number()
        .over(
            partition_by=GasReadingDB.chain_id,
            order_by=(GasReadingDB.timestamp.desc(), GasReadingDB.id.desc()),
        )
        .label("rank"),
    ).subquery()
    latest = aliased(GasReadingDB, ranked)

    stmt = (
        select(ChainDB, latest)
        .outerjoin(latest, and_(latest.chain_id == ChainDB.id, ranked.c.rank == 1))
        .where(ChainDB.is_active.is_(True))
        .order_by(ChainDB.id)
    )
    result = await session.execute(stmt)

    return [
        ChainLatestReading(
            chain=Chain.model_validate(chain_row),
            latest=(
                GasReading.model_validate(reading_row)
                if reading_row is not None
                else None
            ),
        )
        for chain_row, reading_row in result.all()
    ]


async def last_updated(session: AsyncSession) -> datetime | None:
    """Timestamp of the most recent reading across all chains."""
    result = await session.execute(select(func.max(GasReadingDB.timestamp)))
    return result.scalar_one_or_none()


async def readings_for_chain(
    session: AsyncSession,
    chain_pk: int,
    *,
    hours: float | None = None,
    limit: int = 100,
    now: datetime | None = None,
) -> list[GasReading]:
    """Recent readings of one chain, newest first."""
    stmt = select(GasReadingDB).where(GasReadingDB.chain_id == chain_pk)
    if hours is not None:
        since = (now or datetime.now(UTC)) - timedelta(hours=hours)
        stmt = stmt.where(GasReadingDB.timestamp > since)
    stmt = stmt.order_by(GasReadingDB.timestamp.desc(), GasReadingDB.id.desc()).limit(
        limit
    )

    result = await session.execute(stmt)
    return [GasReading.model_validate(row) for row in result.scalars().all()]


async def average_gas_price(
    session: AsyncSession,
    chain_pk: int,
    hours_back: float = DEFAULT_AVERAGE_WINDOW_HOURS,
    *,
    now: datetime | None = None,
) -> Decimal | None:
    """Mean gas price of one chain over the last ``hours_back`` hours."""
    since = (now or datetime.now(UTC)) - timedelta(hours=hours_back)
    stmt = select(func.avg(GasReadingDB.gas_price_gwei)).where(
        GasReadingDB.chain_id == chain_pk,
        GasReadingDB.timestamp > since,
    )
    return (await session.execute(stmt)).scalar_one_or_none()


async def delete_readings_older_than(session: AsyncSession, cutoff: datetime) -> int:
    """Delete readings strictly older than ``cutoff``.

    A reading stamped exactly at the cutoff is kept.

    Returns:
        Number of readings deleted
    """
    stmt = delete(GasReadingDB).where(GasReadingDB.timestamp < cutoff)
    result = await session.execute(stmt)
    await session.commit()
    return result.rowcount or 0


__all__ = [
    "average_gas_price",
    "delete_readings_older_than",
    "last_updated",
    "latest_readings_by_chain",
    "readings_for_chain",
]
