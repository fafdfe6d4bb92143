"""Tests for Odin.fun API provider (HTTP session mocked)."""

from unittest.mock import MagicMock

import pytest
import requests

from src.data.providers.base import DataUnavailableError
from src.data.providers.odin_provider import OdinFunProvider


def _response(payload=None, status_error=None, json_error=None):
    response = MagicMock()
    if status_error is not None:
        response.raise_for_status.side_effect = status_error
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


def _token_record(token_id="t1", **overrides):
    record = {
        "id": token_id,
        "symbol": token_id.upper(),
        "priceUsd": 1.0,
        "marketCapUsd": 50_000,
        "volumeUsd24h": 5_000,
        "bondingCurveProgress": 20,
        "isGraduated": False,
        "change24h": 1.5,
    }
    record.update(overrides)
    return record


class TestOdinFunProvider:
    @pytest.fixture
    def session(self):
        return MagicMock()

    @pytest.fixture
    def provider(self, session, monkeypatch):
        monkeypatch.delenv("ODIN_API_TOKEN", raising=False)
        monkeypatch.delenv("ODIN_API_BASE_URL", raising=False)
        return OdinFunProvider(base_url="https://example.test/v1/", session=session)

    def test_name(self, provider):
        assert provider.name == "odin"
        assert provider.is_available is True
        assert provider.is_authenticated is False

    def test_get_hot_tokens(self, provider, session):
        session.get.return_value = _response([_token_record("a"), _token_record("b")])

        tokens = provider.get_hot_tokens(limit=2)

        assert [t.token_id for t in tokens] == ["a", "b"]
        args, kwargs = session.get.call_args
        assert args[0] == "https://example.test/v1/tokens/hot"
        assert kwargs["params"] == {"limit": 2}

    def test_wrapped_list_payload(self, provider, session):
        session.get.return_value = _response({"data": [_token_record("a")]})
        assert len(provider.get_hot_tokens()) == 1

    def test_malformed_record_skipped(self, provider, session):
        session.get.return_value = _response([{"symbol": "NOID"}, _token_record("ok")])
        tokens = provider.get_hot_tokens()
        assert [t.token_id for t in tokens] == ["ok"]

    def test_get_token(self, provider, session):
        session.get.return_value = _response(_token_record("x", priceUsd="0.5"))
        token = provider.get_token("x")
        assert token.price_usd == 0.5
        assert session.get.call_args[0][0].endswith("/tokens/x")

    def test_http_error_raises_data_unavailable(self, provider, session):
        error_response = MagicMock(status_code=503)
        session.get.return_value = _response(
            status_error=requests.exceptions.HTTPError(response=error_response)
        )
        with pytest.raises(DataUnavailableError, match="503"):
            provider.get_hot_tokens()

    def test_connection_error_raises_data_unavailable(self, provider, session):
        session.get.side_effect = requests.exceptions.ConnectionError("refused")
        with pytest.raises(DataUnavailableError):
            provider.get_token("x")

    def test_invalid_json_raises_data_unavailable(self, provider, session):
        session.get.return_value = _response(json_error=ValueError("bad json"))
        with pytest.raises(DataUnavailableError):
            provider.get_hot_tokens()

    def test_user_endpoints_need_token(self, provider, session):
        with pytest.raises(DataUnavailableError):
            provider.get_user_balances()
        session.get.assert_not_called()

    def test_bearer_token_sent(self, session, monkeypatch):
        monkeypatch.setenv("ODIN_API_TOKEN", "secret")
        provider = OdinFunProvider(session=session)
        session.get.return_value = _response([{"tokenId": "t", "symbol": "T", "amount": "10"}])

        balances = provider.get_user_balances()

        assert balances[0].amount == 10
        headers = session.get.call_args.kwargs["headers"]
        assert headers["Authorization"] == "Bearer secret"

    def test_get_token_malformed_raises_data_unavailable(self, provider, session):
        session.get.return_value = _response({"symbol": "NOID"})
        with pytest.raises(DataUnavailableError, match="TokenSnapshot"):
            provider.get_token("x")


class TestTokenEndpoints:
    @pytest.fixture
    def session(self):
        return MagicMock()

    @pytest.fixture
    def provider(self, session, monkeypatch):
        monkeypatch.delenv("ODIN_API_TOKEN", raising=False)
        monkeypatch.delenv("ODIN_API_BASE_URL", raising=False)
        return OdinFunProvider(base_url="https://example.test/v1", session=session)

    @pytest.mark.parametrize(
        "method, kwargs, path, params",
        [
            ("get_tokens", {"limit": 5, "offset": 10}, "tokens", {"limit": 5, "offset": 10}),
            ("get_new_tokens", {"limit": 3}, "tokens/new", {"limit": 3}),
            ("get_graduated_tokens", {}, "tokens/graduated", {"limit": 10, "offset": 0}),
            ("get_tokens_by_market_cap", {"offset": 20}, "tokens/by-market-cap", {"limit": 10, "offset": 20}),
            ("search_tokens", {"query": "dog"}, "tokens/search", {"q": "dog"}),
        ],
    )
    def test_token_list_endpoints(self, provider, session, method, kwargs, path, params):
        session.get.return_value = _response([_token_record("a", marketCapUsd="75000.5")])

        tokens = getattr(provider, method)(**kwargs)

        assert tokens[0].token_id == "a"
        assert tokens[0].market_cap_usd == 75000.5
        args, call_kwargs = session.get.call_args
        assert args[0] == f"https://example.test/v1/{path}"
        assert call_kwargs["params"] == params

    def test_get_token_holders(self, provider, session):
        session.get.return_value = _response(
            [
                {"principal": "p1", "btcAddress": "bc1q", "amount": "250000000000",
                 "percentOwnership": 12.5, "rank": 1, "userName": "whale"},
                {"principal": "p2", "amount": "1000", "rank": 2},
            ]
        )

        holders = provider.get_token_holders("t1", limit=2)

        assert [h.principal for h in holders] == ["p1", "p2"]
        assert holders[0].amount == 250_000_000_000
        assert holders[0].percent_ownership == 12.5
        assert holders[0].user_name == "whale"
        assert holders[1].user_name is None
        args, kwargs = session.get.call_args
        assert args[0] == "https://example.test/v1/tokens/t1/holders"
        assert kwargs["params"] == {"limit": 2, "offset": 0}

    def test_get_token_holders_malformed(self, provider, session):
        session.get.return_value = _response([{"amount": "10"}])
        with pytest.raises(DataUnavailableError, match="TokenHolder"):
            provider.get_token_holders("t1")

    def test_get_token_trades(self, provider, session):
        session.get.return_value = _response(
            {"data": [{"id": 7, "tradeType": "SELL", "amount": "500", "priceUsd": "0.02",
                       "volumeUsd": 10, "volumeBtc": 0.0001, "createdAt": "2024-05-01T12:00:00Z"}]}
        )

        trades = provider.get_token_trades("t1", limit=1, offset=3)

        trade = trades[0]
        assert trade.trade_id == "7"
        assert trade.trade_type == "SELL"
        assert trade.amount == 500
        assert trade.price_usd == 0.02
        assert trade.created_at.year == 2024
        assert trade.created_at.tzinfo is not None
        args, kwargs = session.get.call_args
        assert args[0] == "https://example.test/v1/tokens/t1/trades"
        assert kwargs["params"] == {"limit": 1, "offset": 3}

    def test_get_recent_trades(self, provider, session):
        session.get.return_value = _response([{"id": "r1", "tradeType": "BUY"}])

        trades = provider.get_recent_trades(limit=20)

        assert trades[0].trade_id == "r1"
        assert trades[0].created_at is None
        args, kwargs = session.get.call_args
        assert args[0] == "https://example.test/v1/trades/recent"
        assert kwargs["params"] == {"limit": 20}

    @pytest.mark.parametrize("record", [{"id": "1", "createdAt": "not-a-date"}, "not-a-dict"])
    def test_malformed_trade_raises_data_unavailable(self, provider, session, record):
        session.get.return_value = _response([record])
        with pytest.raises(DataUnavailableError, match="TokenTrade"):
            provider.get_recent_trades()

    def test_get_btc_price(self, provider, session):
        session.get.return_value = _response({"priceUsd": "100000.25"})

        btc = provider.get_btc_price()

        assert btc.price_usd == 100000.25
        assert session.get.call_args[0][0] == "https://example.test/v1/btc"

    def test_get_btc_price_bad_number(self, provider, session):
        session.get.return_value = _response({"priceUsd": "n/a"})
        with pytest.raises(DataUnavailableError):
            provider.get_btc_price()

    def test_get_stats(self, provider, session):
        session.get.return_value = _response({"tokens": 1200, "users": 5000})

        stats = provider.get_stats()

        assert stats == {"tokens": 1200, "users": 5000}
        assert session.get.call_args[0][0] == "https://example.test/v1/stats"

    def test_get_stats_unexpected_payload(self, provider, session):
        session.get.return_value = _response([1, 2, 3])
        with pytest.raises(DataUnavailableError):
            provider.get_stats()


class TestUserEndpoints:
    @pytest.fixture
    def session(self):
        return MagicMock()

    @pytest.fixture
    def provider(self, session, monkeypatch):
        monkeypatch.delenv("ODIN_API_BASE_URL", raising=False)
        monkeypatch.setenv("ODIN_API_TOKEN", "secret")
        return OdinFunProvider(base_url="https://example.test/v1", session=session)

    def test_get_user(self, provider, session):
        session.get.return_value = _response(
            {"id": 42, "principal": "p1", "btcAddress": "bc1q", "userName": "satoshi",
             "totalProfitUsd": "12.5", "totalBuyVolume": 3, "totalSellVolume": 1}
        )

        user = provider.get_user()

        assert user.user_id == "42"
        assert user.user_name == "satoshi"
        assert user.total_profit_usd == 12.5
        assert session.get.call_args[0][0] == "https://example.test/v1/users/me"
        assert session.get.call_args.kwargs["headers"]["Authorization"] == "Bearer secret"

    def test_get_user_malformed(self, provider, session):
        session.get.return_value = _response({"id": "42", "totalProfitUsd": "lots"})
        with pytest.raises(DataUnavailableError, match="OdinUser"):
            provider.get_user()

    def test_get_user_trades(self, provider, session):
        session.get.return_value = _response(
            [{"id": "1", "tradeType": "BUY", "volumeBtc": 0.005, "createdAt": "2024-05-01T12:00:00"}]
        )

        trades = provider.get_user_trades(limit=5)

        assert trades[0].volume_btc == 0.005
        args, kwargs = session.get.call_args
        assert args[0] == "https://example.test/v1/users/me/trades"
        assert kwargs["params"] == {"limit": 5, "offset": 0}

    def test_get_user_trades_bad_date(self, provider, session):
        session.get.return_value = _response([{"id": "1", "createdAt": "not-a-date"}])
        with pytest.raises(DataUnavailableError):
            provider.get_user_trades()

    def test_get_user_balances_malformed(self, provider, session):
        session.get.return_value = _response([{"tokenId": "t", "amount": "many"}])
        with pytest.raises(DataUnavailableError, match="UserBalance"):
            provider.get_user_balances()

    def test_get_user_by_principal(self, provider, session):
        session.get.return_value = _response({"id": "7", "principal": "abc-def"})

        user = provider.get_user_by_principal("abc-def")

        assert user.principal == "abc-def"
        assert session.get.call_args[0][0] == "https://example.test/v1/users/principal/abc-def"

    def test_get_user_by_username(self, provider, session):
        session.get.return_value = _response({"id": "7", "userName": "satoshi"})

        user = provider.get_user_by_username("satoshi")

        assert user.user_name == "satoshi"
        assert session.get.call_args[0][0] == "https://example.test/v1/users/username/satoshi"

    def test_get_users_by_profit_range(self, provider, session):
        session.get.return_value = _response(
            [{"id": "1", "totalProfitUsd": 900}, {"id": "2", "totalProfitUsd": 400}]
        )

        users = provider.get_users_by_profit_range(days=30, limit=2)

        assert [u.user_id for u in users] == ["1", "2"]
        args, kwargs = session.get.call_args
        assert args[0] == "https://example.test/v1/users/profits"
        assert kwargs["params"] == {"days": 30, "limit": 2, "offset": 0}

    def test_public_lookup_without_token(self, session, monkeypatch):
        monkeypatch.delenv("ODIN_API_TOKEN", raising=False)
        provider = OdinFunProvider(base_url="https://example.test/v1", session=session)
        session.get.return_value = _response({"id": "7"})

        provider.get_user_by_username("anyone")

        assert "Authorization" not in session.get.call_args.kwargs["headers"]
