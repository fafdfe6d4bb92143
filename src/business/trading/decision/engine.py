"""
Decision Engine - 决策引擎

持仓检查 → 出场决策；机会排序 → 入场决策

输入:
- TokenSnapshot (from market data provider)
- PositionLedger
- now (由调用方传入，引擎不读取系统时钟)

输出:
- TradeAction (BUY / SELL / HOLD)

引擎本身无 I/O，给定相同输入总是得到相同输出。
"""

import logging
from datetime import datetime
from typing import Sequence

from src.business.trading.config.trading_config import TradingConfig
from src.business.trading.decision.opportunity_filter import OpportunityFilter
from src.business.trading.models.action import ExitReason, TradeAction
from src.business.trading.models.position import Position, PositionLedger
from src.data.models.token import TokenSnapshot
from src.data.utils.units import to_satoshis

logger = logging.getLogger(__name__)


class DecisionEngine:
    """决策引擎

    Usage:
        engine = DecisionEngine(config)
        ranked = engine.find_opportunities(snapshots, ledger)
        action = engine.decide_entry(ranked, ledger)
        action = engine.decide_exit(position, current_price, now)
    """

    def __init__(
        self,
        config: TradingConfig | None = None,
        opportunity_filter: OpportunityFilter | None = None,
    ) -> None:
        """初始化决策引擎

        Args:
            config: 交易配置
            opportunity_filter: 机会过滤器
        """
        self._config = config or TradingConfig.load()
        self._filter = opportunity_filter or OpportunityFilter(self._config)

    @property
    def config(self) -> TradingConfig:
        return self._config

    @property
    def opportunity_filter(self) -> OpportunityFilter:
        return self._filter

    @property
    def buy_amount_sats(self) -> int:
        """单笔买入额 (satoshi units)"""
        return to_satoshis(self._config.buy_amount_btc)

    def has_capacity(self, ledger: PositionLedger) -> bool:
        """是否还能开新仓"""
        return len(ledger) < self._config.max_positions

    def find_opportunities(
        self,
        snapshots: Sequence[TokenSnapshot],
        ledger: PositionLedger,
    ) -> list[TokenSnapshot]:
        """过滤并排序入场机会"""
        return self._filter.find_opportunities(snapshots, ledger)

    def decide_entry(
        self,
        ranked: Sequence[TokenSnapshot],
        ledger: PositionLedger,
    ) -> TradeAction:
        """入场决策

        有空余仓位时买入排名第一的机会，否则 HOLD。
        """
        if not self.has_capacity(ledger):
            return TradeAction.hold(
                detail=f"max positions reached ({len(ledger)}/{self._config.max_positions})"
            )

        if not ranked:
            return TradeAction.hold(detail="no eligible opportunities")

        best = ranked[0]
        amount = self.buy_amount_sats
        logger.info(
            f"Entry decision: BUY {best.symbol} ({best.token_id}) "
            f"amount={amount} sats, vol=${best.volume_usd_24h:,.0f}"
        )
        return TradeAction.buy(best, amount)

    def decide_exit(
        self,
        position: Position,
        current_price: float,
        now: datetime,
    ) -> TradeAction:
        """出场决策

        按固定优先级检查，第一个满足的规则生效:
        1. 止盈: profit >= profit_target_percent
        2. 止损: profit <= -stop_loss_percent
        3. 超时: 持有时长 > max_hold_minutes
        """
        config = self._config
        profit = position.profit_percent(current_price)
        held = position.hold_minutes(now)

        if profit >= config.profit_target_percent:
            return TradeAction.sell(
                position,
                current_price,
                ExitReason.PROFIT_TARGET,
                f"Profit target reached: {profit:.2f}%",
            )

        if profit <= -config.stop_loss_percent:
            return TradeAction.sell(
                position,
                current_price,
                ExitReason.STOP_LOSS,
                f"Stop loss triggered: {profit:.2f}%",
            )

        if held > config.max_hold_minutes:
            return TradeAction.sell(
                position,
                current_price,
                ExitReason.TIME_EXIT,
                f"Time-based exit: held for {held:.0f} minutes",
            )

        return TradeAction.hold(
            token_id=position.token_id,
            detail=f"{position.symbol}: {profit:.2f}% (held {held:.0f}m)",
        )
