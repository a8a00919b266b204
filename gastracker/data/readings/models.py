"""Pydantic models for gas price readings and poll results."""

from decimal import Decimal

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

from gastracker.data.chains.models import Chain
from gastracker.helpers.constants import GAS_PRICE_SCALE, USD_COST_SCALE
from gastracker.helpers.errors import RpcErrorKind


class GasReading(BaseModel):
    """Immutable gas price observation."""

    id: int | None = Field(default=None, description="Database row id")
    chain_id: int = Field(..., description="Row id of the owning chain")
    gas_price_gwei: Decimal = Field(
        ...,
        gt=0,
        max_digits=20,
        decimal_places=GAS_PRICE_SCALE,
        description="Gas price in gwei",
    )
    usd_cost: Decimal | None = Field(
        default=None,
        ge=0,
        max_digits=10,
        decimal_places=USD_COST_SCALE,
        description="USD cost of a standard transfer, absent until priced",
    )
    timestamp: AwareDatetime = Field(..., description="Observation time")

    model_config = ConfigDict(from_attributes=True, frozen=True)


class ChainLatestReading(BaseModel):
    """An active chain with its most recent reading, if any."""

    chain: Chain
    latest: GasReading | None = None


class ChainFailure(BaseModel):
    """Why one chain produced no reading in a poll cycle."""

    chain: Chain
    error_kind: RpcErrorKind | str = Field(
        ..., description="RPC error kind, or the exception name for other failures"
    )
    message: str


class PollSummary(BaseModel):
    """Outcome of one poll cycle."""

    attempted: int = 0
    succeeded: int = 0
    failed: list[ChainFailure] = Field(default_factory=list)
    readings: list[GasReading] = Field(default_factory=list)


__all__ = [
    "ChainFailure",
    "ChainLatestReading",
    "GasReading",
    "PollSummary",
]
