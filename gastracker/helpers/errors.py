"""Typed exceptions for RPC and storage failures."""

from enum import StrEnum


class RpcErrorKind(StrEnum):
    """Category of a failed gas price fetch."""

    TRANSPORT = "transport"
    HTTP = "http"
    RPC_PROTOCOL = "rpc_protocol"
    DECODE = "decode"


class GasTrackerError(Exception):
    """Base exception for the gas tracker."""


class RpcError(GasTrackerError):
    """A JSON-RPC call did not produce a usable result."""

    kind: RpcErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.message}"


class RpcTransportError(RpcError):
    """The endpoint could not be reached (connection error or timeout)."""

    kind = RpcErrorKind.TRANSPORT


class RpcHttpError(RpcError):
    """The endpoint answered with a non-success HTTP status."""

    kind = RpcErrorKind.HTTP

    def __init__(self, code: int, message: str) -> None:
        super().__init__(f"HTTP {code} - {message}")
        self.code = code
        self.reason = message


class RpcProtocolError(RpcError):
    """The endpoint returned a JSON-RPC error envelope."""

    kind = RpcErrorKind.RPC_PROTOCOL


class RpcDecodeError(RpcError):
    """The response could not be read as a hexadecimal integer."""

    kind = RpcErrorKind.DECODE


class StorageError(GasTrackerError):
    """A read or write against the database failed."""


class StorageUnavailableError(StorageError):
    """The database could not be queried at all."""


__all__ = [
    "GasTrackerError",
    "RpcDecodeError",
    "RpcError",
    "RpcErrorKind",
    "RpcHttpError",
    "RpcProtocolError",
    "RpcTransportError",
    "StorageError",
    "StorageUnavailableError",
]
