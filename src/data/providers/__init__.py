"""Data providers for fetching market data."""

from src.data.providers.base import DataUnavailableError, MarketDataProvider
from src.data.providers.odin_provider import OdinFunProvider

__all__ = [
    "DataUnavailableError",
    "MarketDataProvider",
    "OdinFunProvider",
]
