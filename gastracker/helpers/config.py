"""Configuration management and environment variable utilities."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from gastracker.helpers.constants import (
    DEFAULT_MAX_CONCURRENCY,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_RETENTION_DAYS,
    DEFAULT_RETRY_ATTEMPTS,
    DEFAULT_RETRY_DELAY,
    DEFAULT_RPC_TIMEOUT,
)


# Load environment variables from .env file
load_dotenv()


def get_required_env(key: str) -> str:
    """Get a required environment variable.

    Args:
        key: Environment variable name

    Returns:
        Environment variable value

    Raises:
        ValueError: If the environment variable is not set

    Example:
        ```python
        from gastracker.helpers.config import get_required_env

        password = get_required_env("POSTGRE_PASSWORD")
        ```
    """
    value = os.getenv(key)
    if not value:
        msg = f"{key} environment variable is not set"
        raise ValueError(msg)
    return value


def get_optional_env(key: str, default: str | None = None) -> str | None:
    """Get an optional environment variable with a default value.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Environment variable value or default
    """
    return os.getenv(key, default)


def get_float_env(key: str, default: float) -> float:
    """Get a float environment variable.

    Raises:
        ValueError: If the value is set but is not a number
    """
    value = os.getenv(key)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        msg = f"{key} must be a number, got {value!r}"
        raise ValueError(msg) from None


def get_int_env(key: str, default: int) -> int:
    """Get an integer environment variable.

    Raises:
        ValueError: If the value is set but is not an integer
    """
    value = os.getenv(key)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        msg = f"{key} must be an integer, got {value!r}"
        raise ValueError(msg) from None


class PollerConfig(BaseModel):
    """Runtime settings for the gas price worker."""

    poll_interval: float = Field(
        default=DEFAULT_POLL_INTERVAL,
        ge=0,
        description="Seconds to wait after a cycle before starting the next",
    )
    rpc_timeout: float = Field(
        default=DEFAULT_RPC_TIMEOUT, gt=0, description="Per-request RPC timeout"
    )
    retry_attempts: int = Field(
        default=DEFAULT_RETRY_ATTEMPTS,
        ge=1,
        description="Total attempts for a cycle that fails before polling chains",
    )
    retry_delay: float = Field(
        default=DEFAULT_RETRY_DELAY,
        ge=0,
        description="Seconds between failed cycle attempts",
    )
    max_concurrency: int = Field(
        default=DEFAULT_MAX_CONCURRENCY,
        ge=1,
        description="Chains fetched in parallel within one cycle",
    )
    retention_days: int = Field(
        default=DEFAULT_RETENTION_DAYS,
        ge=1,
        description="Days of readings kept by the cleanup job",
    )


def get_poller_config() -> PollerConfig:
    """Build the worker settings from environment variables.

    Example:
        ```python
        from gastracker.helpers.config import get_poller_config

        # POLL_INTERVAL_SECONDS=15 in .env
        config = get_poller_config()
        assert config.poll_interval == 15.0
        ```
    """
    return PollerConfig(
        poll_interval=get_float_env("POLL_INTERVAL_SECONDS", DEFAULT_POLL_INTERVAL),
        rpc_timeout=get_float_env("RPC_TIMEOUT_SECONDS", DEFAULT_RPC_TIMEOUT),
        retry_attempts=get_int_env("POLL_RETRY_ATTEMPTS", DEFAULT_RETRY_ATTEMPTS),
        retry_delay=get_float_env("POLL_RETRY_DELAY_SECONDS", DEFAULT_RETRY_DELAY),
        max_concurrency=get_int_env("POLL_MAX_CONCURRENCY", DEFAULT_MAX_CONCURRENCY),
        retention_days=get_int_env("READING_RETENTION_DAYS", DEFAULT_RETENTION_DAYS),
    )


__all__ = [
    "PollerConfig",
    "get_float_env",
    "get_int_env",
    "get_optional_env",
    "get_poller_config",
    "get_required_env",
]
