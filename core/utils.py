"""
Display helpers used by the presentation layer.

Aggregates are kept as raw numbers everywhere else; these helpers are only
applied when a value is rendered:
- File size formatting
- Currency formatting
- Percentage formatting
- Content hashing (upload fingerprints)
"""
from __future__ import annotations
from decimal import Decimal
import hashlib
from typing import Union

from core.logger import get_logger

log = get_logger("core/utils")

Number = Union[int, float, Decimal]

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "INR": "₹",
    "JPY": "¥",
    "CNY": "¥",
    "AUD": "A$",
    "CAD": "C$",
    "CHF": "CHF",
    "SGD": "S$",
    "HKD": "HK$",
    "NZD": "NZ$",
    "MXN": "Mex$",
    "BRL": "R$",
}


def human_size(num_bytes: Union[int, float]) -> str:
    """
    Convert bytes to human-readable size format.

    Args:
        num_bytes: Number of bytes to convert

    Returns:
        str: Formatted size string (e.g., "1.5 MB")

    Examples:
        >>> human_size(1024)
        '1.0 KB'
        >>> human_size(0)
        '0.0 B'
    """
    if not isinstance(num_bytes, (int, float)):
        log.warning(f"Invalid input type for human_size: {type(num_bytes)}")
        return "0.0 B"

    if num_bytes < 0:
        log.warning(f"Negative byte value: {num_bytes}")
        return "0.0 B"

    units = ["B", "KB", "MB", "GB", "TB"]
    size = float(num_bytes)
    idx = 0

    while size >= 1024 and idx < len(units) - 1:
        size /= 1024
        idx += 1

    return f"{size:.1f} {units[idx]}"


def sha256_bytes(data: bytes) -> str:
    """
    Calculate SHA-256 hash of byte data.

    Raises:
        TypeError: If data is not bytes
    """
    if not isinstance(data, bytes):
        error_msg = f"Expected bytes, got {type(data)}"
        log.error(error_msg)
        raise TypeError(error_msg)

    return hashlib.sha256(data).hexdigest()


def format_currency(amount: Number, currency: str | None = None) -> str:
    """
    Format an amount with the appropriate currency symbol.

    Negative amounts (credits, refunds) keep their sign in front of the symbol.
    Falls back to USD if no currency is given; unknown codes are used as the
    symbol verbatim.

    Examples:
        >>> format_currency(1234.56, "USD")
        '$1,234.56'
        >>> format_currency(-20, "EUR")
        '-€20.00'
    """
    currency_code = (currency or "USD").upper().strip()
    symbol = CURRENCY_SYMBOLS.get(currency_code, currency_code)

    value = float(amount)
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"


def format_percent(value: Number, digits: int = 1) -> str:
    """Format a 0-100 percentage value, e.g. ``format_percent(12.345) == '12.3%'``."""
    return f"{float(value):.{digits}f}%"
