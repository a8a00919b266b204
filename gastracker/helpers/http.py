"""HTTP client and retry helpers."""

from asyncio import sleep
from collections.abc import Awaitable, Callable
from functools import wraps

from typing import Any, ParamSpec, TypeVar

import httpx

from gastracker.helpers.constants import (
    DEFAULT_MAX_CONCURRENCY,
    DEFAULT_RETRY_ATTEMPTS,
    DEFAULT_RETRY_DELAY,
    DEFAULT_RPC_TIMEOUT,
    RETRY_MAX_DELAY,
)
from gastracker.helpers.logging import get_logger


logger = get_logger(__name__)

P = ParamSpec("P")
T = TypeVar("T")


def retry_with_backoff(
    max_retries: int = DEFAULT_RETRY_ATTEMPTS,
    base_delay: float = DEFAULT_RETRY_DELAY,
    max_delay: float = RETRY_MAX_DELAY,
    *,
    backoff_factor: float = 2.0,
    retry_on: tuple[type[Exception], ...] = (Exception,),
    log_errors: bool = True,
    sleep_func: Callable[[float], Awaitable[Any]] | None = None,
    stop_when: Callable[[], bool] | None = None,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """Decorator to retry async functions with backoff.

    The wait before retry ``n`` (0-based) is
    ``min(base_delay * backoff_factor**n, max_delay)``; a factor of 1.0
    gives a fixed wait.

    Args:
        max_retries: Total number of attempts, including the first
        base_delay: Initial delay in seconds
        max_delay: Maximum delay between retries
        backoff_factor: Multiplier applied to the delay after each attempt
        retry_on: Exception types that trigger another attempt
        log_errors: Whether to log retry attempts
        sleep_func: Coroutine used for the wait, ``asyncio.sleep`` by default
        stop_when: Checked after each wait; when it returns True no further
            attempt is made and the last exception is raised

    Returns:
        Decorated function that re-raises the last exception once all
        attempts are used

    Example:
        ```python
        from gastracker.helpers.http import retry_with_backoff

        @retry_with_backoff(max_retries=3, base_delay=30.0, backoff_factor=1.0)
        async def run_cycle() -> PollSummary:
            return await poller.poll_all()

        # Up to 3 attempts, 30s apart
        ```
    """
    if max_retries < 1:
        msg = "max_retries must be at least 1"
        raise ValueError(msg)

    def decorator(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            last_exception: Exception | None = None

            for attempt in range(max_retries):
                try:
                    return await func(*args, **kwargs)
                except retry_on as e:
                    last_exception = e
                    if log_errors and attempt < max_retries - 1:
                        logger.warning(
                            "%s error (attempt %d/%d): %s",
                            func.__name__,
                            attempt + 1,
                            max_retries,
                            e,
                        )

                # Don't sleep after the last attempt
                if attempt < max_retries - 1:
                    delay = min(base_delay * (backoff_factor**attempt), max_delay)
                    await (sleep_func or sleep)(delay)
                    if stop_when is not None and stop_when():
                        if log_errors:
                            logger.info(
                                "%s stopped after %d attempts",
                                func.__name__,
                                attempt + 1,
                            )
                        raise last_exception

            if log_errors:
                logger.error("%s failed after %d attempts", func.__name__, max_retries)
            assert last_exception is not None
            raise last_exception

        return wrapper

    return decorator


def create_http_client(
    timeout: float = DEFAULT_RPC_TIMEOUT,
    max_connections: int = DEFAULT_MAX_CONCURRENCY,
    **kwargs: Any,
) -> httpx.AsyncClient:
    """Create a configured httpx AsyncClient.

    Args:
        timeout: Default timeout in seconds
        max_connections: Connection pool size, normally the poll concurrency
        **kwargs: Additional httpx.AsyncClient kwargs

    Returns:
        Configured AsyncClient instance

    Example:
        ```python
        async with create_http_client(timeout=10.0) as client:
            wei = await fetch_gas_price(client, rpc_url)
        ```
    """
    limits = httpx.Limits(
        max_connections=max_connections,
        max_keepalive_connections=max_connections,
    )
    return httpx.AsyncClient(
        timeout=timeout,
        limits=limits,
        headers={"Content-Type": "application/json"},
        **kwargs,
    )


__all__ = [
    "create_http_client",
    "retry_with_backoff",
]
