"""Database connection helpers."""

from collections.abc import Sequence
from functools import cache

from typing import Any

from pydantic import BaseModel
from sqlalchemy import inspect, insert
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from gastracker.helpers.config import get_optional_env, get_required_env

Base = declarative_base()


def get_database_url() -> str:
    """Get the database URL from environment variables.

    ``DATABASE_URL`` wins when set; otherwise the URL is assembled from the
    ``POSTGRE_*`` variables.

    Returns:
        str: PostgreSQL database URL

    Raises:
        ValueError: If required environment variables are not set
    """
    database_url = get_optional_env("DATABASE_URL")
    if database_url:
        return database_url

    host = get_required_env("POSTGRE_HOST")
    port = get_optional_env("POSTGRE_PORT", "5432")
    user = get_required_env("POSTGRE_USER")
    password = get_required_env("POSTGRE_PASSWORD")
    db_name = get_required_env("POSTGRE_DB")

    # Use psycopg (version 3) as the async PostgreSQL driver
    return (
        "postgresql+psycopg://"
        f"{user}:{password}"
        f"@{host}:{port}"
        f"/{db_name}"
    )


@cache
def get_async_engine() -> AsyncEngine:
    """Create the process-wide async engine on first use."""
    return create_async_engine(get_database_url(), echo=False, pool_pre_ping=True)


@cache
def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Create the process-wide session factory on first use."""
    return async_sessionmaker(
        get_async_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
    )


def AsyncSessionLocal() -> AsyncSession:  # noqa: N802
    """Open a new session from the shared factory."""
    return get_session_factory()()


async def create_tables(engine: AsyncEngine | None = None) -> None:
    """Create all tables registered on ``Base`` if they don't exist."""
    # Register every model on Base.metadata before create_all
    import gastracker.data.bridges.db  # noqa: F401
    import gastracker.data.chains.db  # noqa: F401
    import gastracker.data.readings.db  # noqa: F401

    async with (engine or get_async_engine()).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


def _primary_key(db_model_class: type) -> Any:
    mapper = inspect(db_model_class)
    if not mapper:
        msg = f"Cannot inspect {db_model_class}"
        raise ValueError(msg)
    return mapper.primary_key[0]


async def insert_model[DBModelType](
    db_model_class: type[DBModelType],
    pydantic_model: BaseModel,
    extra_fields: dict[str, Any] | None = None,
    *,
    session: AsyncSession | None = None,
    exclude: set[str] | None = None,
) -> Any:
    """Insert one row built from a Pydantic model and return its primary key.

    Args:
        db_model_class: The SQLAlchemy model class (e.g., GasReadingDB)
        pydantic_model: Pydantic model instance with the row data
        extra_fields: Additional fields not in the Pydantic model
        session: Session to use; a new one is opened and committed when omitted
        exclude: Model fields left out of the insert (e.g. ``{"id"}``)

    Returns:
        The primary key value of the new row

    Raises:
        ValueError: If the database model class cannot be inspected
    """
    data = pydantic_model.model_dump(exclude=exclude)
    if extra_fields:
        data.update(extra_fields)

    stmt = insert(db_model_class).values(**data).returning(_primary_key(db_model_class))

    if session is not None:
        result = await session.execute(stmt)
        await session.commit()
        return result.scalar_one()

    async with AsyncSessionLocal() as new_session:
        try:
            result = await new_session.execute(stmt)
            await new_session.commit()
            return result.scalar_one()
        except Exception:
            await new_session.rollback()
            raise


async def insert_models_ignore_conflicts[DBModelType](
    db_model_class: type[DBModelType],
    pydantic_models: Sequence[BaseModel],
    conflict_columns: Sequence[str],
    *,
    session: AsyncSession | None = None,
    exclude: set[str] | None = None,
) -> int:
    """Insert rows using PostgreSQL INSERT ... ON CONFLICT DO NOTHING.

    Existing rows matching ``conflict_columns`` are left untouched, which
    makes repeated calls idempotent.

    Args:
        db_model_class: The SQLAlchemy model class (e.g., ChainDB)
        pydantic_models: Pydantic model instances with data to insert
        conflict_columns: Columns of the unique constraint to check
        session: Session to use; a new one is opened and committed when omitted
        exclude: Model fields left out of the insert

    Returns:
        Number of rows actually inserted
    """
    data = [model.model_dump(exclude=exclude) for model in pydantic_models]
    if not data:
        return 0

    stmt = (
        pg_insert(db_model_class)
        .values(data)
        .on_conflict_do_nothing(index_elements=list(conflict_columns))
        .returning(_primary_key(db_model_class))
    )

    async def _run(active: AsyncSession) -> int:
        result = await active.execute(stmt)
        inserted = len(result.all())
        await active.commit()
        return inserted

    if session is not None:
        return await _run(session)

    async with AsyncSessionLocal() as new_session:
        try:
            return await _run(new_session)
        except Exception:
            await new_session.rollback()
            raise


__all__ = [
    "AsyncSessionLocal",
    "Base",
    "create_tables",
    "get_async_engine",
    "get_database_url",
    "get_session_factory",
    "insert_model",
    "insert_models_ignore_conflicts",
]
