"""Persistence of successful gas price readings."""

from collections.abc import Callable
from datetime import datetime
from decimal import Decimal

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gastracker.data.chains.models import Chain
from gastracker.data.readings.db import GasReadingDB
from gastracker.data.readings.models import GasReading
from gastracker.helpers.db import AsyncSessionLocal, insert_model
from gastracker.helpers.errors import StorageError


class ReadingRecorder:
    """Inserts one new reading per call; readings are never updated."""

    def __init__(
        self, session_factory: Callable[[], AsyncSession] = AsyncSessionLocal
    ) -> None:
        self.session_factory = session_factory

    async def record(
        self,
        chain: Chain,
        gas_price_gwei: Decimal,
        usd_cost: Decimal | None,
        observed_at: datetime,
    ) -> GasReading:
        """Persist a reading for ``chain``.

        Args:
            chain: Chain the reading belongs to; must have a row id
            gas_price_gwei: Price in gwei
            usd_cost: Cost in USD, or None when not computed
            observed_at: Timezone-aware observation time

        Returns:
            The stored reading, including its row id

        Raises:
            StorageError: If the reading is invalid or the insert fails
        """
        if chain.id is None:
            msg = f"Chain {chain.name} has no row id"
            raise StorageError(msg)

        try:
            reading = GasReading(
                chain_id=chain.id,
                gas_price_gwei=gas_price_gwei,
                usd_cost=usd_cost,
                timestamp=observed_at,
            )
        except ValidationError as e:
            msg = f"Invalid reading for {chain.name}: {e.errors()[0]['msg']}"
            raise StorageError(msg) from e

        try:
            async with self.session_factory() as session:
                row_id = await insert_model(
                    GasReadingDB, reading, session=session, exclude={"id"}
                )
        except (SQLAlchemyError, OSError) as e:
            msg = f"Failed to store reading for {chain.name}: {e}"
            raise StorageError(msg) from e

        return reading.model_copy(update={"id": row_id})


__all__ = ["ReadingRecorder"]
