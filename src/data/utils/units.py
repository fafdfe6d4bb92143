"""Unit conversions between BTC, satoshi units and token base units.

Odin.fun amounts travel as integers:
- BTC amounts are expressed in "satoshi" units where 1 BTC = 1000 units
  (the platform's own convention, not the Bitcoin 10^8).
- Token amounts are expressed in base units where 1 token = 10^11 units.

Integer amounts are Python ints, so they never lose precision.
"""

import math

SATS_PER_BTC = 1_000
TOKEN_BASE_UNITS = 100_000_000_000


def to_btc(satoshis: int) -> float:
    """Convert satoshi units to BTC."""
    return satoshis / SATS_PER_BTC


def to_satoshis(btc: float) -> int:
    """Convert BTC to satoshi units, rounding down."""
    return int(math.floor(btc * SATS_PER_BTC))


def to_token_amount(base_units: int) -> float:
    """Convert token base units to a display amount."""
    return base_units / TOKEN_BASE_UNITS


def from_token_amount(amount: float) -> int:
    """Convert a display token amount to base units, rounding down."""
    return int(math.floor(amount * TOKEN_BASE_UNITS))


def percent_change(original: float, new_value: float) -> float:
    """Percentage difference from ``original`` to ``new_value``.

    Returns 0.0 when ``original`` is zero.
    """
    if original == 0:
        return 0.0
    return (new_value - original) / original * 100
