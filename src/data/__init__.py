"""Data layer module for fetching Odin.fun market data."""

from src.data.models import TokenSnapshot

__all__ = [
    "TokenSnapshot",
]
