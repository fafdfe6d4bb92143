"""Odin.fun token and portfolio data models.

The REST API returns camelCase JSON; each model exposes ``from_api_dict`` to
build itself from one API record and ``to_dict`` for snake_case output.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any


def _to_float(value: Any, default: float = 0.0) -> float:
    """Coerce an API numeric field (number, numeric string or null) to float."""
    if value is None or value == "":
        return default
    return float(value)


def _to_int(value: Any, default: int = 0) -> int:
    """Coerce an API integer field (often a decimal string) to int."""
    if value is None or value == "":
        return default
    if isinstance(value, str):
        return int(value.split(".")[0])
    return int(value)


def _to_datetime(value: Any) -> datetime | None:
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


@dataclass(frozen=True)
class TokenSnapshot:
    """Market snapshot of a single bonding-curve token.

    Produced once per trading cycle from the market data source and discarded
    after the cycle's decisions are made.

    Attributes:
        token_id: Odin.fun token identifier.
        symbol: Ticker symbol.
        price_usd: Current price in USD.
        market_cap_usd: Market capitalization in USD.
        volume_usd_24h: Trading volume over the last 24 hours in USD.
        bonding_curve_progress: Progress along the bonding curve, 0-100.
        is_graduated: True once the token has left the bonding curve.
        change_24h: Price change over 24 hours in percent (signed).
    """

    token_id: str
    symbol: str
    price_usd: float
    market_cap_usd: float
    volume_usd_24h: float
    bonding_curve_progress: float
    is_graduated: bool = False
    change_24h: float = 0.0
    name: str = ""

    @classmethod
    def from_api_dict(cls, data: dict[str, Any]) -> "TokenSnapshot":
        """Create a snapshot from an API token record."""
        return cls(
            token_id=str(data["id"]),
            symbol=data.get("symbol", ""),
            name=data.get("name", ""),
            price_usd=_to_float(data.get("priceUsd")),
            market_cap_usd=_to_float(data.get("marketCapUsd")),
            volume_usd_24h=_to_float(data.get("volumeUsd24h")),
            bonding_curve_progress=_to_float(data.get("bondingCurveProgress")),
            is_graduated=bool(data.get("isGraduated", False)),
            change_24h=_to_float(data.get("change24h")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "token_id": self.token_id,
            "symbol": self.symbol,
            "name": self.name,
            "price_usd": self.price_usd,
            "market_cap_usd": self.market_cap_usd,
            "volume_usd_24h": self.volume_usd_24h,
            "bonding_curve_progress": self.bonding_curve_progress,
            "is_graduated": self.is_graduated,
            "change_24h": self.change_24h,
        }


@dataclass
class BTCInfo:
    """BTC reference price."""

    price_usd: float

    @classmethod
    def from_api_dict(cls, data: dict[str, Any]) -> "BTCInfo":
        return cls(price_usd=_to_float(data.get("priceUsd")))


@dataclass
class OdinUser:
    """Odin.fun user profile (subset used for portfolio reporting)."""

    user_id: str
    principal: str = ""
    btc_address: str = ""
    user_name: str | None = None
    total_profit_usd: float = 0.0
    total_buy_volume: float = 0.0
    total_sell_volume: float = 0.0

    @classmethod
    def from_api_dict(cls, data: dict[str, Any]) -> "OdinUser":
        return cls(
            user_id=str(data.get("id", "")),
            principal=data.get("principal", ""),
            btc_address=data.get("btcAddress", ""),
            user_name=data.get("userName"),
            total_profit_usd=_to_float(data.get("totalProfitUsd")),
            total_buy_volume=_to_float(data.get("totalBuyVolume")),
            total_sell_volume=_to_float(data.get("totalSellVolume")),
        )


@dataclass
class UserBalance:
    """A token holding in a user's portfolio."""

    token_id: str
    symbol: str
    name: str = ""
    amount: int = 0  # token base units
    percent_ownership: float = 0.0
    market_cap_usd: float = 0.0
    total_value_usd: float = 0.0
    unrealized_profit_usd: float = 0.0
    realized_profit_usd: float = 0.0
    total_profit_usd: float = 0.0
    total_cost_basis: float = 0.0

    @classmethod
    def from_api_dict(cls, data: dict[str, Any]) -> "UserBalance":
        return cls(
            token_id=str(data.get("tokenId", "")),
            symbol=data.get("symbol", ""),
            name=data.get("name", ""),
            amount=_to_int(data.get("amount")),
            percent_ownership=_to_float(data.get("percentOwnership")),
            market_cap_usd=_to_float(data.get("marketCapUsd")),
            total_value_usd=_to_float(data.get("totalValueUsd")),
            unrealized_profit_usd=_to_float(data.get("unrealizedProfitUsd")),
            realized_profit_usd=_to_float(data.get("realizedProfitUsd")),
            total_profit_usd=_to_float(data.get("totalProfitUsd")),
            total_cost_basis=_to_float(data.get("totalCostBasis")),
        )


@dataclass
class TokenTrade:
    """A single executed trade on a token."""

    trade_id: str
    trade_type: str  # "BUY" / "SELL" as reported by the API
    amount: int = 0
    price_usd: float = 0.0
    volume_usd: float = 0.0
    volume_btc: float = 0.0
    user_name: str = ""
    created_at: datetime | None = None

    @classmethod
    def from_api_dict(cls, data: dict[str, Any]) -> "TokenTrade":
        return cls(
            trade_id=str(data.get("id", "")),
            trade_type=str(data.get("tradeType", "")),
            amount=_to_int(data.get("amount")),
            price_usd=_to_float(data.get("priceUsd")),
            volume_usd=_to_float(data.get("volumeUsd")),
            volume_btc=_to_float(data.get("volumeBtc")),
            user_name=data.get("userName") or "",
            created_at=_to_datetime(data.get("createdAt")),
        )


@dataclass
class TokenHolder:
    """One holder of a token, ranked by amount held."""

    principal: str
    amount: int = 0  # token base units
    percent_ownership: float = 0.0
    rank: int = 0
    btc_address: str = ""
    user_name: str | None = None

    @classmethod
    def from_api_dict(cls, data: dict[str, Any]) -> "TokenHolder":
        return cls(
            principal=str(data["principal"]),
            amount=_to_int(data.get("amount")),
            percent_ownership=_to_float(data.get("percentOwnership")),
            rank=_to_int(data.get("rank")),
            btc_address=data.get("btcAddress", ""),
            user_name=data.get("userName"),
        )
