"""
Paper Trade Executor - 模拟交易执行器

不发送任何真实交易，按最新报价模拟成交并记录模拟持仓与 BTC 余额。

报价通过 update_quotes() 在每轮循环开始时由 TradingBot 更新。
"""

import logging
from typing import Iterable

from src.business.trading.models.trading import ExecutionResult
from src.business.trading.provider.base import TradeExecutor
from src.data.models.token import TokenSnapshot
from src.data.utils.units import from_token_amount, to_btc, to_satoshis, to_token_amount

logger = logging.getLogger(__name__)


class PaperTradeExecutor(TradeExecutor):
    """模拟交易执行器

    买入: BTC 金额 × BTC 价格 / token 价格 → 持有 token 数量
    卖出: token 数量 × token 价格 / BTC 价格 → 返还 BTC

    Usage:
        executor = PaperTradeExecutor(btc_price_usd=100000.0, btc_balance_sats=1000)
        executor.update_quotes(snapshots)
        result = executor.submit_buy(token_id, amount=5, slippage=2.0)
    """

    def __init__(
        self,
        btc_price_usd: float = 100_000.0,
        btc_balance_sats: int | None = None,
    ) -> None:
        """初始化模拟执行器

        Args:
            btc_price_usd: BTC 价格 (USD)
            btc_balance_sats: 初始 BTC 余额 (satoshi units)，None 表示不限
        """
        super().__init__()
        self._btc_price_usd = btc_price_usd
        self._btc_balance = btc_balance_sats
        self._quotes: dict[str, float] = {}
        self._balances: dict[str, int] = {}

    @property
    def name(self) -> str:
        return "paper"

    @property
    def btc_balance(self) -> int | None:
        """剩余 BTC 余额 (satoshi units)"""
        return self._btc_balance

    def balance_of(self, token_id: str) -> int:
        """模拟持有的 token 数量 (base units)"""
        return self._balances.get(token_id, 0)

    def set_quote(self, token_id: str, price_usd: float) -> None:
        self._quotes[token_id] = price_usd

    def update_quotes(self, snapshots: Iterable[TokenSnapshot]) -> None:
        """用最新行情更新报价"""
        for snapshot in snapshots:
            self._quotes[snapshot.token_id] = snapshot.price_usd

    def submit_buy(self, token_id: str, amount: int, slippage: float) -> ExecutionResult:
        price = self._quotes.get(token_id)
        if not price or price <= 0:
            return ExecutionResult.failure_result(token_id, f"No quote for token {token_id}")
        if amount <= 0:
            return ExecutionResult.failure_result(token_id, f"Invalid buy amount: {amount}")
        if self._btc_balance is not None and amount > self._btc_balance:
            return ExecutionResult.failure_result(
                token_id,
                f"Insufficient BTC balance: {self._btc_balance} < {amount} sats",
            )

        value_usd = to_btc(amount) * self._btc_price_usd
        held = from_token_amount(value_usd / price)
        if held <= 0:
            return ExecutionResult.failure_result(token_id, "Buy amount too small to fill")

        if self._btc_balance is not None:
            self._btc_balance -= amount
        self._balances[token_id] = self._balances.get(token_id, 0) + held

        logger.info(
            f"[paper] BUY {token_id}: {amount} sats @ ${price} -> "
            f"{to_token_amount(held):,.4f} tokens"
        )
        return ExecutionResult.success_result(
            token_id, held_amount=self._balances[token_id], context={"price_usd": price}
        )

    def submit_sell(self, token_id: str, amount: int, slippage: float) -> ExecutionResult:
        held = self._balances.get(token_id, 0)
        if amount <= 0 or amount > held:
            return ExecutionResult.failure_result(
                token_id, f"Insufficient token balance: {held} < {amount}"
            )
        price = self._quotes.get(token_id)
        if not price or price <= 0:
            return ExecutionResult.failure_result(token_id, f"No quote for token {token_id}")

        proceeds_sats = to_satoshis(to_token_amount(amount) * price / self._btc_price_usd)
        remaining = held - amount
        if remaining:
            self._balances[token_id] = remaining
        else:
            del self._balances[token_id]
        if self._btc_balance is not None:
            self._btc_balance += proceeds_sats

        logger.info(
            f"[paper] SELL {token_id}: {to_token_amount(amount):,.4f} tokens @ ${price} "
            f"-> {proceeds_sats} sats"
        )
        return ExecutionResult.success_result(
            token_id, held_amount=remaining, context={"price_usd": price}
        )

    def load_balances(self, balances: dict[str, int]) -> None:
        """恢复模拟持仓 (重启后与账本对齐)"""
        self._balances.update(balances)
