"""Abstract base class for market data providers."""

from abc import ABC, abstractmethod

from src.data.models.token import TokenSnapshot


class DataUnavailableError(Exception):
    """Raised when market data cannot be fetched (network, HTTP or parse error).

    Callers treat it as "no data this cycle" for the call site that raised it.
    """

    pass


class MarketDataProvider(ABC):
    """Abstract base class for token market data providers.

    The trading bot only needs two reads per cycle: the hot token list used
    for opportunity search, and a single token lookup to price open positions.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name (e.g., 'odin')."""
        pass

    @property
    @abstractmethod
    def is_available(self) -> bool:
        """Check if provider is available."""
        pass

    @abstractmethod
    def get_hot_tokens(self, limit: int = 10) -> list[TokenSnapshot]:
        """Get currently trending tokens.

        Args:
            limit: Maximum number of tokens to return.

        Returns:
            List of TokenSnapshot in the order the source ranks them.

        Raises:
            DataUnavailableError: If the request fails.
        """
        pass

    @abstractmethod
    def get_token(self, token_id: str) -> TokenSnapshot:
        """Get a single token snapshot.

        Args:
            token_id: Token identifier.

        Returns:
            TokenSnapshot instance.

        Raises:
            DataUnavailableError: If the request fails.
        """
        pass
