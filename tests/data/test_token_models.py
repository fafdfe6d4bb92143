"""Tests for Odin.fun token data models."""

from datetime import datetime, timezone

import pytest

from src.data.models.token import TokenSnapshot, TokenTrade, UserBalance


class TestTokenSnapshot:
    def test_from_api_dict(self):
        token = TokenSnapshot.from_api_dict(
            {
                "id": "2jjj",
                "symbol": "ODIN",
                "name": "Odin Dog",
                "priceUsd": "0.0123",
                "marketCapUsd": 54_321.5,
                "volumeUsd24h": 4_200,
                "bondingCurveProgress": 37.5,
                "isGraduated": False,
                "change24h": -3.2,
            }
        )
        assert token.token_id == "2jjj"
        assert token.price_usd == pytest.approx(0.0123)
        assert token.market_cap_usd == 54_321.5
        assert token.bonding_curve_progress == 37.5
        assert token.change_24h == -3.2
        assert not token.is_graduated

    def test_missing_optional_fields_default(self):
        token = TokenSnapshot.from_api_dict({"id": 7, "symbol": "X", "priceUsd": None})
        assert token.token_id == "7"
        assert token.price_usd == 0.0
        assert token.change_24h == 0.0
        assert token.is_graduated is False

    def test_missing_id_raises(self):
        with pytest.raises(KeyError):
            TokenSnapshot.from_api_dict({"symbol": "X"})

    def test_to_dict(self):
        token = TokenSnapshot("a", "A", 1.0, 2.0, 3.0, 4.0)
        data = token.to_dict()
        assert data["token_id"] == "a"
        assert data["volume_usd_24h"] == 3.0


class TestPortfolioModels:
    def test_balance_amount_keeps_precision(self):
        balance = UserBalance.from_api_dict(
            {"tokenId": "t", "symbol": "T", "amount": "123456789012345678901234"}
        )
        assert balance.amount == 123456789012345678901234

    def test_trade_timestamp(self):
        trade = TokenTrade.from_api_dict(
            {"id": 1, "tradeType": "BUY", "amount": 5, "createdAt": "2025-01-26T10:00:00Z"}
        )
        assert trade.trade_type == "BUY"
        assert trade.created_at == datetime(2025, 1, 26, 10, 0, tzinfo=timezone.utc)
