"""Data utilities package."""

from .units import (
    SATS_PER_BTC,
    TOKEN_BASE_UNITS,
    from_token_amount,
    percent_change,
    to_btc,
    to_satoshis,
    to_token_amount,
)

__all__ = [
    "SATS_PER_BTC",
    "TOKEN_BASE_UNITS",
    "from_token_amount",
    "percent_change",
    "to_btc",
    "to_satoshis",
    "to_token_amount",
]
