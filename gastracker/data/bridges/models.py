"""Pydantic models for bridge routes."""

from decimal import Decimal

from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator


class BridgeRoute(BaseModel):
    """Directed route between two chains, identified by their row ids."""

    id: int | None = None
    source_chain_id: int
    destination_chain_id: int
    protocol: str = Field(default="stargate", min_length=1)
    fee_usd: Decimal | None = Field(
        default=None, ge=0, max_digits=10, decimal_places=4
    )

    model_config = ConfigDict(from_attributes=True, str_strip_whitespace=True)

    @model_validator(mode="after")
    def check_different_chains(self) -> Self:
        """Source and destination must be different chains."""
        if self.source_chain_id == self.destination_chain_id:
            msg = "destination chain must be different from source chain"
            raise ValueError(msg)
        return self


__all__ = ["BridgeRoute"]
