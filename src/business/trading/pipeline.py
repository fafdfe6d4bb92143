"""
Trading Pipeline - 交易流水线

编排单次交易循环，协调决策引擎、交易执行器和持仓账本。

循环步骤:
1. 检查已有持仓 → 出场决策 → 卖出成功则移除持仓
2. 仍有空余仓位 → 过滤排序机会 → 入场决策 → 买入成功则新增持仓
3. 输出循环统计

执行失败时账本保持不变，失败原因记录在 CycleResult 中，下一轮重新评估。

Usage:
    pipeline = TradingPipeline(config, executor)
    result = pipeline.run_cycle(snapshots, ledger, now)
    ledger = result.ledger
"""

import logging
from datetime import datetime
from typing import Mapping, Sequence

from src.business.trading.config.trading_config import TradingConfig
from src.business.trading.decision.engine import DecisionEngine
from src.business.trading.models.action import CycleResult, CycleSummary, TradeAction
from src.business.trading.models.position import Position, PositionLedger
from src.business.trading.models.trading import ExecutionFailedError, ExecutionResult
from src.business.trading.provider.base import TradeExecutor
from src.data.models.token import TokenSnapshot

logger = logging.getLogger(__name__)


class TradingPipeline:
    """交易流水线

    Usage:
        pipeline = TradingPipeline(config, PaperTradeExecutor())
        result = pipeline.run_cycle(snapshots, ledger, now=datetime.now())
    """

    def __init__(
        self,
        config: TradingConfig | None = None,
        executor: TradeExecutor | None = None,
        engine: DecisionEngine | None = None,
    ) -> None:
        """初始化交易流水线

        Args:
            config: 交易配置
            executor: 交易执行器
            engine: 决策引擎 (默认按 config 创建)
        """
        if executor is None:
            raise ValueError("TradingPipeline requires a trade executor")
        self._config = config or TradingConfig.load()
        self._executor = executor
        self._engine = engine or DecisionEngine(self._config)

    @property
    def engine(self) -> DecisionEngine:
        return self._engine

    @property
    def executor(self) -> TradeExecutor:
        return self._executor

    def run_cycle(
        self,
        snapshots: Sequence[TokenSnapshot] | None,
        ledger: PositionLedger,
        now: datetime,
        prices: Mapping[str, float] | None = None,
    ) -> CycleResult:
        """运行一次交易循环

        Args:
            snapshots: 本轮热门 token 行情，None 表示行情不可用 (跳过找机会)
            ledger: 当前持仓账本 (不会被修改)
            now: 当前时间
            prices: 持仓 token 的最新价格，缺失时从 snapshots 中查找

        Returns:
            CycleResult，result.ledger 为更新后的账本
        """
        working = ledger.copy()
        result = CycleResult(ledger=working, timestamp=now)

        # 1. 检查已有持仓
        if len(working) > 0:
            logger.info(f"Checking {len(working)} existing positions...")
            price_map = self._price_map(snapshots, prices)
            for position in working:
                current_price = price_map.get(position.token_id)
                if current_price is None:
                    logger.warning(
                        f"No price for {position.symbol} ({position.token_id}), holding"
                    )
                    result.actions.append(
                        TradeAction.hold(position.token_id, "price unavailable")
                    )
                    continue

                action = self._engine.decide_exit(position, current_price, now)
                result.actions.append(action)
                if action.is_sell:
                    self._execute_sell(action, working, result)
                else:
                    logger.info(action.detail)

        # 2. 寻找新机会
        if snapshots is None:
            logger.warning("Market data unavailable, skipping opportunity search")
        elif not self._engine.has_capacity(working):
            logger.info(
                f"Maximum positions reached ({len(working)}/{self._config.max_positions}), "
                "not looking for new opportunities"
            )
            result.actions.append(TradeAction.hold(detail="max positions reached"))
        else:
            ranked = self._engine.find_opportunities(snapshots, working)
            result.summary.opportunities = len(ranked)
            if ranked:
                logger.info(f"Found {len(ranked)} opportunities:")
                for token in ranked:
                    logger.info(
                        f"- {token.symbol}: ${token.price_usd} "
                        f"({token.bonding_curve_progress}% bonding curve, "
                        f"{token.volume_usd_24h} vol)"
                    )
            else:
                logger.info("No suitable trading opportunities found")

            action = self._engine.decide_entry(ranked, working)
            result.actions.append(action)
            if action.is_buy:
                self._execute_buy(action, working, now, result)

        # 3. 统计
        self._summarize(result)
        logger.info(f"Cycle summary: {result.summary}")
        return result

    @staticmethod
    def _price_map(
        snapshots: Sequence[TokenSnapshot] | None,
        prices: Mapping[str, float] | None,
    ) -> dict[str, float]:
        price_map = {s.token_id: s.price_usd for s in snapshots or []}
        price_map.update(prices or {})
        return price_map

    def _submit(self, action: TradeAction) -> ExecutionResult:
        """调用执行器，异常统一转换为失败结果

        ExecutionFailedError 表示执行器拒绝了请求，其他异常视为执行器内部错误。
        """
        token_id = action.token_id or ""
        try:
            if action.is_buy:
                return self._executor.submit_buy(
                    token_id, action.amount, self._config.slippage_tolerance
                )
            return self._executor.submit_sell(
                token_id, action.amount, self._config.slippage_tolerance
            )
        except ExecutionFailedError as e:
            return ExecutionResult.failure_result(token_id, str(e))
        except Exception as e:
            logger.exception(f"Executor error on {action.action_type.value} {token_id}")
            return ExecutionResult.failure_result(token_id, str(e))

    def _execute_buy(
        self,
        action: TradeAction,
        ledger: PositionLedger,
        now: datetime,
        result: CycleResult,
    ) -> None:
        token = action.token
        if token is None:
            logger.error("Buy action without token snapshot, skipping")
            result.failures.append((action, "buy action has no token"))
            return
        logger.info(f"Attempting to buy {token.symbol} for {action.amount} sats")

        execution = self._submit(action)
        if not execution.success:
            reason = execution.error_message or "unknown error"
            logger.warning(f"Failed to buy {token.symbol}: {reason}")
            result.failures.append((action, reason))
            return

        ledger.open_position(
            Position(
                token_id=token.token_id,
                symbol=token.symbol,
                entry_price=token.price_usd,
                amount=execution.held_amount,
                entry_time=now,
            )
        )
        result.executed.append(action)
        logger.info(
            f"Successfully bought {token.symbol} @ ${token.price_usd}, "
            f"amount={execution.held_amount}"
        )

    def _execute_sell(
        self,
        action: TradeAction,
        ledger: PositionLedger,
        result: CycleResult,
    ) -> None:
        position = action.position
        if position is None:
            logger.error("Sell action without position, skipping")
            result.failures.append((action, "sell action has no position"))
            return
        logger.info(f"Attempting to sell {position.symbol} - Reason: {action.detail}")

        execution = self._submit(action)
        if not execution.success:
            reason = execution.error_message or "unknown error"
            logger.warning(f"Failed to sell {position.symbol}: {reason}")
            result.failures.append((action, reason))
            return

        ledger.close_position(position.token_id)
        result.executed.append(action)
        profit = position.profit_percent(action.current_price or 0.0)
        logger.info(
            f"Successfully sold {position.symbol}: buy ${position.entry_price}, "
            f"sell ${action.current_price}, profit {profit:.2f}%"
        )

    def _summarize(self, result: CycleResult) -> None:
        summary: CycleSummary = result.summary
        summary.buys = sum(1 for a in result.executed if a.is_buy)
        summary.sells = sum(1 for a in result.executed if a.is_sell)
        summary.holds = sum(1 for a in result.actions if a.is_hold)
        summary.failures = len(result.failures)
        summary.open_positions = len(result.ledger)
