"""Pydantic models for JSON-RPC requests and responses."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from gastracker.helpers.constants import (
    GAS_PRICE_METHOD,
    GAS_PRICE_REQUEST_ID,
    JSONRPC_VERSION,
)


class JsonRpcRequest(BaseModel):
    """JSON-RPC 2.0 request model."""

    jsonrpc: str = Field(default=JSONRPC_VERSION, description="JSON-RPC version")
    method: str = Field(..., description="Method name to call")
    params: list[Any] = Field(
        default_factory=list, description="Method parameters"
    )
    id: int | str = Field(..., description="Request ID")


class EthGasPriceRequest(JsonRpcRequest):
    """JSON-RPC request for eth_gasPrice."""

    method: str = Field(default=GAS_PRICE_METHOD, frozen=True)
    params: list[Any] = Field(default_factory=list, frozen=True)
    id: int | str = Field(default=GAS_PRICE_REQUEST_ID)


class JsonRpcErrorBody(BaseModel):
    """Error object of a JSON-RPC response."""

    code: int | None = None
    message: str = Field(default="unknown error", description="Error message")
    data: Any = None

    model_config = ConfigDict(extra="allow")


class JsonRpcResponse(BaseModel):
    """JSON-RPC 2.0 response envelope."""

    jsonrpc: str | None = None
    id: int | str | None = None
    result: Any = None
    error: JsonRpcErrorBody | str | None = None

    model_config = ConfigDict(extra="allow")


__all__ = [
    "EthGasPriceRequest",
    "JsonRpcErrorBody",
    "JsonRpcRequest",
    "JsonRpcResponse",
]
