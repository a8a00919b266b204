"""Storage operations for bridge routes."""

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gastracker.data.bridges.db import BridgeRouteDB
from gastracker.data.bridges.models import BridgeRoute
from gastracker.helpers.db import insert_model
from gastracker.helpers.errors import StorageError


async def add_route(session: AsyncSession, route: BridgeRoute) -> BridgeRoute:
    """Insert a bridge route.

    Raises:
        StorageError: If either chain does not exist or the insert fails
    """
    try:
        row_id = await insert_model(BridgeRouteDB, route, session=session, exclude={"id"})
    except SQLAlchemyError as e:
        await session.rollback()
        msg = f"Failed to add {route.protocol} route: {e}"
        raise StorageError(msg) from e
    return route.model_copy(update={"id": row_id})


async def routes_for(
    session: AsyncSession, source_chain_id: int, destination_chain_id: int
) -> list[BridgeRoute]:
    """Routes from one chain to another, by chain row ids."""
    stmt = (
        select(BridgeRouteDB)
        .where(
            BridgeRouteDB.source_chain_id == source_chain_id,
            BridgeRouteDB.destination_chain_id == destination_chain_id,
        )
        .order_by(BridgeRouteDB.id)
    )
    result = await session.execute(stmt)
    return [BridgeRoute.model_validate(row) for row in result.scalars().all()]


__all__ = ["add_route", "routes_for"]
