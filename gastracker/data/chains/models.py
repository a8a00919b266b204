"""Pydantic models for monitored chains."""

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, TypeAdapter, field_validator

_http_url = TypeAdapter(HttpUrl)


class Chain(BaseModel):
    """Blockchain network whose gas price is polled."""

    id: int | None = Field(default=None, description="Database row id")
    name: str = Field(..., min_length=1, description="Human readable network name")
    chain_id: int = Field(..., gt=0, description="Numeric network identifier")
    rpc_url: str = Field(..., description="HTTP(S) JSON-RPC endpoint")
    native_token: str = Field(default="ETH", min_length=1, description="Gas token symbol")
    is_active: bool = Field(default=True, description="Whether the chain is polled")

    model_config = ConfigDict(from_attributes=True, str_strip_whitespace=True)

    @field_validator("rpc_url")
    @classmethod
    def validate_rpc_url(cls, value: str) -> str:
        """Reject anything that is not an absolute http or https URL."""
        # Validate only; keep the configured string as-is (HttpUrl adds a slash)
        _http_url.validate_python(value)
        return value


__all__ = ["Chain"]
