"""Database models for monitored chains."""

from datetime import datetime

from sqlalchemy import BigInteger, Boolean, DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from gastracker.helpers.db import Base


class ChainDB(Base):
    """Blockchain network configuration database model."""

    __tablename__ = "chains"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    chain_id: Mapped[int] = mapped_column(
        Integer, nullable=False, unique=True, index=True
    )  # Network id, e.g. 1 for Ethereum mainnet
    rpc_url: Mapped[str] = mapped_column(String, nullable=False)
    native_token: Mapped[str] = mapped_column(
        String(32), nullable=False, default="ETH", server_default="ETH"
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default="true", index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
