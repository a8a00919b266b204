"""Database models for gas price readings."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Numeric,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from gastracker.helpers.constants import GAS_PRICE_SCALE, USD_COST_SCALE
from gastracker.helpers.db import Base


class GasReadingDB(Base):
    """One observed gas price for one chain."""

    __tablename__ = "gas_readings"
    __table_args__ = (
        CheckConstraint("gas_price_gwei > 0", name="ck_gas_readings_price_positive"),
        CheckConstraint(
            "usd_cost IS NULL OR usd_cost >= 0", name="ck_gas_readings_cost_non_negative"
        ),
        Index("ix_gas_readings_chain_id_timestamp", "chain_id", "timestamp"),
    )

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    chain_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("chains.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )  # References chains.id, not the network id
    gas_price_gwei: Mapped[Decimal] = mapped_column(
        Numeric(20, GAS_PRICE_SCALE), nullable=False
    )
    usd_cost: Mapped[Decimal | None] = mapped_column(
        Numeric(10, USD_COST_SCALE), nullable=True
    )
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
