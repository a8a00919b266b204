"""Access to the configured chains."""

from collections.abc import Callable

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gastracker.data.chains.db import ChainDB
from gastracker.data.chains.models import Chain
from gastracker.helpers.db import AsyncSessionLocal, insert_model
from gastracker.helpers.errors import StorageError, StorageUnavailableError
from gastracker.helpers.logging import get_logger


logger = get_logger(__name__)


async def list_active_chains(session: AsyncSession) -> list[Chain]:
    """Return active chains ordered by row id."""
    stmt = select(ChainDB).where(ChainDB.is_active.is_(True)).order_by(ChainDB.id)
    result = await session.execute(stmt)
    return [Chain.model_validate(row) for row in result.scalars().all()]


async def get_chain_by_chain_id(session: AsyncSession, chain_id: int) -> Chain | None:
    """Look up a chain by its network id."""
    stmt = select(ChainDB).where(ChainDB.chain_id == chain_id)
    row = (await session.execute(stmt)).scalar_one_or_none()
    return Chain.model_validate(row) if row is not None else None


async def add_chain(session: AsyncSession, chain: Chain) -> Chain:
    """Insert a new chain.

    Raises:
        StorageError: If the insert fails, e.g. the network id already exists
    """
    try:
        row_id = await insert_model(ChainDB, chain, session=session, exclude={"id"})
    except SQLAlchemyError as e:
        await session.rollback()
        msg = f"Failed to add chain {chain.name} ({chain.chain_id}): {e}"
        raise StorageError(msg) from e
    return chain.model_copy(update={"id": row_id})


async def set_chain_active(session: AsyncSession, chain_id: int, *, active: bool) -> bool:
    """Activate or deactivate a chain; readings are kept either way.

    Returns:
        True if a chain with that network id exists
    """
    stmt = (
        update(ChainDB)
        .where(ChainDB.chain_id == chain_id)
        .values(is_active=active)
        .returning(ChainDB.id)
    )
    found = (await session.execute(stmt)).scalar_one_or_none() is not None
    await session.commit()
    return found


async def delete_chain(session: AsyncSession, chain_id: int) -> bool:
    """Delete a chain together with its readings and bridge routes.

    Returns:
        True if a chain was deleted
    """
    stmt = delete(ChainDB).where(ChainDB.chain_id == chain_id).returning(ChainDB.id)
    deleted = (await session.execute(stmt)).scalar_one_or_none() is not None
    await session.commit()
    return deleted


class ChainRegistry:
    """Supplies the set of chains to poll."""

    def __init__(
        self, session_factory: Callable[[], AsyncSession] = AsyncSessionLocal
    ) -> None:
        self.session_factory = session_factory

    async def active_chains(self) -> list[Chain]:
        """Snapshot of the active chains.

        Raises:
            StorageUnavailableError: If the chains cannot be read
        """
        try:
            async with self.session_factory() as session:
                return await list_active_chains(session)
        except (SQLAlchemyError, OSError) as e:
            logger.exception("Failed to list active chains")
            msg = f"Cannot list active chains: {e}"
            raise StorageUnavailableError(msg) from e


__all__ = [
    "ChainRegistry",
    "add_chain",
    "delete_chain",
    "get_chain_by_chain_id",
    "list_active_chains",
    "set_chain_active",
]
