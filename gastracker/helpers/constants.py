"""Common configuration constants used across the application."""

# Polling
DEFAULT_POLL_INTERVAL = 60.0
"""Delay in seconds between the end of one poll cycle and the start of the next"""

DEFAULT_RPC_TIMEOUT = 10.0
"""Per-request timeout in seconds for eth_gasPrice calls"""

DEFAULT_MAX_CONCURRENCY = 10
"""Maximum number of chains fetched in parallel within one cycle"""

# Retry Configuration
DEFAULT_RETRY_ATTEMPTS = 3
"""Total attempts for a poll cycle that fails before any chain is processed"""

DEFAULT_RETRY_DELAY = 30.0
"""Fixed wait in seconds between failed cycle attempts"""

RETRY_MAX_DELAY = 300.0
"""Upper bound for any single retry wait in seconds"""

# Units
GWEI_DECIMALS = 9
"""Base units (wei) per display unit (gwei) as a power of ten"""

GAS_PRICE_SCALE = 9
"""Fractional digits stored for gas prices"""

USD_COST_SCALE = 4
"""Fractional digits stored for USD costs"""

# Retention
DEFAULT_RETENTION_DAYS = 30
"""Readings older than this many days are removed by the cleanup job"""

DEFAULT_CLEANUP_INTERVAL = 86_400.0
"""Seconds between retention cleanup passes in the live worker"""

DEFAULT_AVERAGE_WINDOW_HOURS = 24
"""Look-back window for average gas price queries"""

# JSON-RPC
JSONRPC_VERSION = "2.0"
"""JSON-RPC protocol version sent with every request"""

GAS_PRICE_METHOD = "eth_gasPrice"
"""RPC method returning the current gas price in wei"""

GAS_PRICE_REQUEST_ID = 1
"""Fixed request id for gas price calls"""


__all__ = [
    "DEFAULT_AVERAGE_WINDOW_HOURS",
    "DEFAULT_CLEANUP_INTERVAL",
    "DEFAULT_MAX_CONCURRENCY",
    "DEFAULT_POLL_INTERVAL",
    "DEFAULT_RETENTION_DAYS",
    "DEFAULT_RETRY_ATTEMPTS",
    "DEFAULT_RETRY_DELAY",
    "DEFAULT_RPC_TIMEOUT",
    "GAS_PRICE_METHOD",
    "GAS_PRICE_REQUEST_ID",
    "GAS_PRICE_SCALE",
    "GWEI_DECIMALS",
    "JSONRPC_VERSION",
    "RETRY_MAX_DELAY",
    "USD_COST_SCALE",
]
