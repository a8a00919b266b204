"""Parsing and unit conversion utilities for gas prices."""

import re
from decimal import Context, Decimal

from gastracker.helpers.constants import GWEI_DECIMALS

_HEX_RE = re.compile(r"^(0x)?[0-9a-fA-F]+\Z")


def parse_hex_int(hex_value: str | None, default: int | None = None) -> int:
    """Parse a hex string to a non-negative integer.

    Args:
        hex_value: Hex-encoded string, with or without the ``0x`` prefix
        default: Value returned when hex_value is None; when this is also
            None a missing value is an error

    Returns:
        int: Parsed integer value

    Raises:
        ValueError: If the value is missing, not a string, negative, or not
            plain hex digits (signs, whitespace and underscores are rejected)

    Example:
        >>> parse_hex_int("0x4a817c800")
        20000000000
        >>> parse_hex_int(None, 0)
        0
    """
    if hex_value is None:
        if default is None:
            msg = "hex value is missing"
            raise ValueError(msg)
        return default

    if not isinstance(hex_value, str):
        msg = f"expected a hex string, got {type(hex_value).__name__}"
        raise ValueError(msg)

    if hex_value.startswith("-"):
        msg = f"expected an unsigned value, got {hex_value!r}"
        raise ValueError(msg)

    if not _HEX_RE.match(hex_value):
        msg = f"invalid hex value {hex_value!r}"
        raise ValueError(msg)
    return int(hex_value, 16)


def wei_to_gwei(wei: int) -> Decimal:
    """Convert Wei to Gwei (divide by 1e9) without losing precision.

    Args:
        wei: Amount in Wei

    Returns:
        Decimal: Amount in Gwei, exact

    Example:
        >>> wei_to_gwei(21_000_000_000)
        Decimal('21.000000000')
        >>> wei_to_gwei(1)
        Decimal('1E-9')
    """
    # Precision wide enough that scaling never rounds, whatever the magnitude
    context = Context(prec=max(len(str(abs(wei))), 28))
    return Decimal(wei).scaleb(-GWEI_DECIMALS, context)


def estimate_usd_cost(gas_price_gwei: Decimal, native_token: str) -> Decimal | None:
    """Estimate the USD cost of a standard transfer at the given gas price.

    No price feed is wired in, so the cost is never computed and ``None``
    is returned for every input. Callers store it as an absent value.

    Args:
        gas_price_gwei: Gas price in Gwei
        native_token: Symbol of the chain's native token (e.g. "ETH")

    Returns:
        None until a native token price source exists
    """
    return None


__all__ = [
    "estimate_usd_cost",
    "parse_hex_int",
    "wei_to_gwei",
]
