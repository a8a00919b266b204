"""Database models for bridge routes between chains."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Numeric,
    String,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from gastracker.helpers.db import Base


class BridgeRouteDB(Base):
    """Directed bridge route from one chain to another."""

    __tablename__ = "bridge_routes"
    __table_args__ = (
        CheckConstraint(
            "source_chain_id <> destination_chain_id",
            name="ck_bridge_routes_distinct_chains",
        ),
        CheckConstraint(
            "fee_usd IS NULL OR fee_usd >= 0", name="ck_bridge_routes_fee_non_negative"
        ),
        Index(
            "ix_bridge_routes_source_destination",
            "source_chain_id",
            "destination_chain_id",
        ),
    )

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    source_chain_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("chains.id", ondelete="CASCADE"), nullable=False
    )
    destination_chain_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("chains.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    fee_usd: Mapped[Decimal | None] = mapped_column(Numeric(10, 4), nullable=True)
    protocol: Mapped[str] = mapped_column(
        String(255), nullable=False, default="stargate", server_default="stargate"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
