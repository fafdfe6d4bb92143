"""Data models for Odin.fun market and portfolio data."""

from src.data.models.token import (
    BTCInfo,
    OdinUser,
    TokenHolder,
    TokenSnapshot,
    TokenTrade,
    UserBalance,
)

__all__ = [
    "BTCInfo",
    "OdinUser",
    "TokenHolder",
    "TokenSnapshot",
    "TokenTrade",
    "UserBalance",
]
