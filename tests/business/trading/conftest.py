"""
Pytest fixtures for trading module tests.

Provides token snapshots, positions and configs without any network access.
"""

from datetime import datetime, timedelta
from typing import Callable

import pytest

from src.business.trading.config.trading_config import TradingConfig
from src.business.trading.models.position import Position, PositionLedger
from src.data.models.token import TokenSnapshot

NOW = datetime(2025, 1, 26, 12, 0, 0)


@pytest.fixture
def now() -> datetime:
    """固定的当前时间"""
    return NOW


@pytest.fixture
def config() -> TradingConfig:
    """默认策略配置 (与示例机器人一致)"""
    return TradingConfig(
        max_buy_amount_btc=0.005,
        min_market_cap_usd=10_000,
        max_market_cap_usd=100_000,
        min_volume_usd=1_000,
        min_bonding_curve_progress=10,
        profit_target_percent=15,
        stop_loss_percent=10,
        slippage_tolerance=2.0,
    )


@pytest.fixture
def make_token() -> Callable[..., TokenSnapshot]:
    """创建符合默认配置的 token 快照，可覆盖任意字段"""

    def _make(token_id: str = "tok1", **overrides) -> TokenSnapshot:
        fields = {
            "token_id": token_id,
            "symbol": token_id.upper(),
            "price_usd": 1.0,
            "market_cap_usd": 50_000,
            "volume_usd_24h": 5_000,
            "bonding_curve_progress": 20,
            "is_graduated": False,
            "change_24h": 2,
        }
        fields.update(overrides)
        return TokenSnapshot(**fields)

    return _make


@pytest.fixture
def make_position() -> Callable[..., Position]:
    """创建持仓，entry_time 默认为 NOW 前 10 分钟"""

    def _make(
        token_id: str = "tok1",
        entry_price: float = 1.0,
        amount: int = 500_000_000_000_000,
        minutes_ago: float = 10,
    ) -> Position:
        return Position(
            token_id=token_id,
            symbol=token_id.upper(),
            entry_price=entry_price,
            amount=amount,
            entry_time=NOW - timedelta(minutes=minutes_ago),
        )

    return _make


@pytest.fixture
def empty_ledger() -> PositionLedger:
    return PositionLedger()
