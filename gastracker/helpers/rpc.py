"""Ethereum JSON-RPC client utilities."""

from typing import Any

import httpx
from pydantic import ValidationError

from gastracker.helpers.constants import DEFAULT_RPC_TIMEOUT
from gastracker.helpers.errors import (
    RpcDecodeError,
    RpcHttpError,
    RpcProtocolError,
    RpcTransportError,
)
from gastracker.helpers.parsers import parse_hex_int
from gastracker.helpers.rpc_models import (
    EthGasPriceRequest,
    JsonRpcRequest,
    JsonRpcResponse,
)


class RPCClient:
    """JSON-RPC client bound to a single endpoint.

    The client does not retry; every failure is raised as a subclass of
    ``RpcError`` so callers can decide what to do with it.
    """

    def __init__(self, rpc_url: str, timeout: float = DEFAULT_RPC_TIMEOUT) -> None:
        """Initialize RPC client.

        Args:
            rpc_url: JSON-RPC endpoint URL
            timeout: Default timeout for requests in seconds

        Raises:
            ValueError: If rpc_url is empty or None
        """
        if not rpc_url:
            msg = "RPC URL cannot be empty"
            raise ValueError(msg)

        self.rpc_url = rpc_url
        self.timeout = timeout

    async def send(
        self,
        client: httpx.AsyncClient,
        request: JsonRpcRequest,
        *,
        timeout: float | None = None,
    ) -> Any:
        """Send one JSON-RPC request and return its ``result`` field.

        Args:
            client: HTTP client instance
            request: Request model to post
            timeout: Optional timeout override

        Returns:
            RPC result value

        Raises:
            RpcTransportError: If the endpoint cannot be reached or times out
            RpcHttpError: If the endpoint returns a non-success status
            RpcProtocolError: If the response carries a JSON-RPC error
            RpcDecodeError: If the response body is not a JSON-RPC envelope
        """
        try:
            response = await client.post(
                self.rpc_url,
                json=request.model_dump(),
                timeout=timeout or self.timeout,
            )
        except httpx.TimeoutException as e:
            msg = f"timeout after {timeout or self.timeout}s: {e}"
            raise RpcTransportError(msg) from e
        except httpx.HTTPError as e:
            raise RpcTransportError(str(e) or type(e).__name__) from e

        if not response.is_success:
            raise RpcHttpError(response.status_code, response.reason_phrase)

        try:
            envelope = JsonRpcResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            msg = f"invalid JSON-RPC response: {e}"
            raise RpcDecodeError(msg) from e

        error = envelope.error
        if error is not None:
            raise RpcProtocolError(error if isinstance(error, str) else error.message)

        return envelope.result

    async def get_gas_price(
        self, client: httpx.AsyncClient, *, timeout: float | None = None
    ) -> int:
        """Get the current gas price.

        Args:
            client: HTTP client instance
            timeout: Optional timeout override

        Returns:
            Gas price in wei

        Raises:
            RpcDecodeError: If the result is not an unsigned hex integer
        """
        result = await self.send(client, EthGasPriceRequest(), timeout=timeout)
        try:
            return parse_hex_int(result)
        except ValueError as e:
            msg = f"cannot parse gas price {result!r}: {e}"
            raise RpcDecodeError(msg) from e


async def fetch_gas_price(
    client: httpx.AsyncClient,
    rpc_url: str,
    *,
    timeout: float = DEFAULT_RPC_TIMEOUT,
) -> int:
    """Fetch the gas price in wei from one endpoint.

    Example:
        ```python
        async with httpx.AsyncClient() as client:
            wei = await fetch_gas_price(client, "https://eth.llamarpc.com")
        ```
    """
    return await RPCClient(rpc_url, timeout=timeout).get_gas_price(client)


__all__ = [
    "RPCClient",
    "fetch_gas_price",
]
