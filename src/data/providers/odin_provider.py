"""Odin.fun REST API provider for token market data and portfolio data.

Wraps the read endpoints of the public Odin.fun API.
API base: https://api.odin.fun/v1

Authenticated endpoints (``/users/me/...``) need a bearer token. Obtaining one
requires signing a timestamp with the user's identity, which this package does
not do; a pre-issued token can be supplied directly or through the
``ODIN_API_TOKEN`` environment variable.
"""

import logging
import os
import time
from typing import Any, TypeVar

import requests
from dotenv import load_dotenv

from src.data.models.token import (
    BTCInfo,
    OdinUser,
    TokenHolder,
    TokenSnapshot,
    TokenTrade,
    UserBalance,
)
from src.data.providers.base import DataUnavailableError, MarketDataProvider

logger = logging.getLogger(__name__)

T = TypeVar("T")


class OdinFunProvider(MarketDataProvider):
    """Odin.fun API provider.

    Every request failure (connection error, non-2xx status, invalid JSON,
    malformed record) is raised as DataUnavailableError so callers can skip
    the affected step of a trading cycle.

    Usage:
        provider = OdinFunProvider()
        hot = provider.get_hot_tokens(limit=20)
        token = provider.get_token(hot[0].token_id)
    """

    BASE_URL = "https://api.odin.fun/v1"

    def __init__(
        self,
        base_url: str | None = None,
        api_token: str | None = None,
        timeout: float = 30,
        rate_limit: float = 0.0,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize Odin.fun provider.

        Args:
            base_url: API base URL. Defaults to the public endpoint, or
                ODIN_API_BASE_URL if set.
            api_token: Bearer token for /users/me endpoints. If not provided,
                reads from ODIN_API_TOKEN environment variable.
            timeout: Request timeout in seconds.
            rate_limit: Minimum seconds between requests.
            session: Optional requests session (mainly for tests).
        """
        # 加载环境变量（如果尚未加载）
        load_dotenv()

        self._base_url = (
            base_url or os.environ.get("ODIN_API_BASE_URL") or self.BASE_URL
        ).rstrip("/")
        self._api_token = api_token or os.environ.get("ODIN_API_TOKEN")
        self._timeout = timeout
        self._rate_limit = rate_limit
        self._last_request_time = 0.0

        self._session = session or requests.Session()
        self._session.headers.update({"Content-Type": "application/json"})

    @property
    def name(self) -> str:
        """Provider name."""
        return "odin"

    @property
    def is_available(self) -> bool:
        """Public endpoints need no credentials."""
        return True

    @property
    def is_authenticated(self) -> bool:
        """Check if a bearer token is configured."""
        return bool(self._api_token)

    def set_api_token(self, token: str) -> None:
        """Set the bearer token used for authenticated endpoints."""
        self._api_token = token

    def _check_rate_limit(self) -> None:
        """Enforce rate limiting between requests."""
        elapsed = time.time() - self._last_request_time
        if elapsed < self._rate_limit:
            time.sleep(self._rate_limit - elapsed)
        self._last_request_time = time.time()

    def _get(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
        auth: bool = False,
    ) -> Any:
        """Make a GET request and return the decoded JSON body.

        Args:
            endpoint: Path relative to the base URL.
            params: Query parameters.
            auth: Whether the endpoint requires the bearer token.

        Raises:
            DataUnavailableError: On any request or decode failure.
        """
        headers: dict[str, str] = {}
        if auth:
            if not self._api_token:
                raise DataUnavailableError(
                    f"Endpoint {endpoint} requires ODIN_API_TOKEN"
                )
            headers["Authorization"] = f"Bearer {self._api_token}"
        elif self._api_token:
            headers["Authorization"] = f"Bearer {self._api_token}"

        self._check_rate_limit()
        url = f"{self._base_url}/{endpoint.lstrip('/')}"

        try:
            response = self._session.get(
                url, params=params, headers=headers, timeout=self._timeout
            )
            response.raise_for_status()
            return response.json()
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            if status == 401:
                logger.error("Odin API authentication failed - check ODIN_API_TOKEN")
            elif status == 429:
                logger.error("Odin API rate limit exceeded")
            else:
                logger.error(f"Odin API HTTP error on {endpoint}: {e}")
            raise DataUnavailableError(f"HTTP {status} on {endpoint}") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Odin API request failed on {endpoint}: {e}")
            raise DataUnavailableError(f"Request failed on {endpoint}: {e}") from e
        except ValueError as e:
            logger.error(f"Odin API response parse error on {endpoint}: {e}")
            raise DataUnavailableError(f"Invalid JSON from {endpoint}") from e

    @staticmethod
    def _records(payload: Any) -> list[dict[str, Any]]:
        """Extract the record list from a list endpoint response.

        Some endpoints wrap results as {"data": [...]}.
        """
        if isinstance(payload, dict):
            payload = payload.get("data", [])
        if not isinstance(payload, list):
            raise DataUnavailableError(
                f"Unexpected list payload type: {type(payload).__name__}"
            )
        return payload

    @staticmethod
    def _parse(model: type[T], data: Any, endpoint: str) -> T:
        """Build one model from an API record.

        Raises:
            DataUnavailableError: If the record is malformed.
        """
        try:
            return model.from_api_dict(data)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.error(f"Malformed {model.__name__} record from {endpoint}: {e}")
            raise DataUnavailableError(
                f"Malformed {model.__name__} record from {endpoint}"
            ) from e

    def _get_list(
        self,
        model: type[T],
        endpoint: str,
        params: dict[str, Any] | None = None,
        auth: bool = False,
    ) -> list[T]:
        records = self._records(self._get(endpoint, params, auth=auth))
        return [self._parse(model, r, endpoint) for r in records]

    def _get_tokens(self, endpoint: str, params: dict[str, Any]) -> list[TokenSnapshot]:
        records = self._records(self._get(endpoint, params))
        tokens: list[TokenSnapshot] = []
        for record in records:
            try:
                tokens.append(TokenSnapshot.from_api_dict(record))
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                logger.warning(f"Skipping malformed token record from {endpoint}: {e}")
        return tokens

    # Token endpoints

    def get_hot_tokens(self, limit: int = 10) -> list[TokenSnapshot]:
        return self._get_tokens("tokens/hot", {"limit": limit})

    def get_token(self, token_id: str) -> TokenSnapshot:
        endpoint = f"tokens/{token_id}"
        data = self._get(endpoint)
        if isinstance(data, dict) and "id" not in data and "data" in data:
            data = data["data"]
        return self._parse(TokenSnapshot, data, endpoint)

    def get_tokens(self, limit: int = 20, offset: int = 0) -> list[TokenSnapshot]:
        return self._get_tokens("tokens", {"limit": limit, "offset": offset})

    def get_new_tokens(self, limit: int = 10) -> list[TokenSnapshot]:
        return self._get_tokens("tokens/new", {"limit": limit})

    def get_graduated_tokens(self, limit: int = 10, offset: int = 0) -> list[TokenSnapshot]:
        return self._get_tokens("tokens/graduated", {"limit": limit, "offset": offset})

    def get_tokens_by_market_cap(self, limit: int = 10, offset: int = 0) -> list[TokenSnapshot]:
        return self._get_tokens("tokens/by-market-cap", {"limit": limit, "offset": offset})

    def search_tokens(self, query: str) -> list[TokenSnapshot]:
        return self._get_tokens("tokens/search", {"q": query})

    def get_token_holders(
        self, token_id: str, limit: int = 50, offset: int = 0
    ) -> list[TokenHolder]:
        return self._get_list(
            TokenHolder, f"tokens/{token_id}/holders", {"limit": limit, "offset": offset}
        )

    def get_token_trades(
        self, token_id: str, limit: int = 50, offset: int = 0
    ) -> list[TokenTrade]:
        return self._get_list(
            TokenTrade, f"tokens/{token_id}/trades", {"limit": limit, "offset": offset}
        )

    def get_recent_trades(self, limit: int = 50) -> list[TokenTrade]:
        return self._get_list(TokenTrade, "trades/recent", {"limit": limit})

    # Market data

    def get_btc_price(self) -> BTCInfo:
        data = self._get("btc")
        return self._parse(BTCInfo, data if isinstance(data, dict) else {}, "btc")

    def get_stats(self) -> dict[str, Any]:
        """Platform-wide statistics, returned as the raw JSON object."""
        data = self._get("stats")
        if not isinstance(data, dict):
            raise DataUnavailableError(
                f"Unexpected stats payload type: {type(data).__name__}"
            )
        return data

    # Public user lookups

    def get_user_by_principal(self, principal: str) -> OdinUser:
        endpoint = f"users/principal/{principal}"
        return self._parse(OdinUser, self._get(endpoint), endpoint)

    def get_user_by_username(self, username: str) -> OdinUser:
        endpoint = f"users/username/{username}"
        return self._parse(OdinUser, self._get(endpoint), endpoint)

    def get_users_by_profit_range(
        self, days: int = 7, limit: int = 10, offset: int = 0
    ) -> list[OdinUser]:
        """Top users by realized profit over the last ``days`` days."""
        return self._get_list(
            OdinUser, "users/profits", {"days": days, "limit": limit, "offset": offset}
        )

    # User endpoints (bearer token required)

    def get_user(self) -> OdinUser:
        return self._parse(OdinUser, self._get("users/me", auth=True), "users/me")

    def get_user_balances(self) -> list[UserBalance]:
        return self._get_list(UserBalance, "users/me/balances", auth=True)

    def get_user_trades(self, limit: int = 50, offset: int = 0) -> list[TokenTrade]:
        return self._get_list(
            TokenTrade, "users/me/trades", {"limit": limit, "offset": offset}, auth=True
        )
