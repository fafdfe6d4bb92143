"""
Trade Executor Base - 交易执行器抽象基类

定义统一的买入/卖出接口。决策引擎每个决策最多发出一次请求，
失败由执行结果返回，不在同一循环内重试。
"""

import logging
from abc import ABC, abstractmethod
from typing import Iterable

from src.business.trading.models.trading import ExecutionResult
from src.data.models.token import TokenSnapshot

logger = logging.getLogger(__name__)


class TradeExecutor(ABC):
    """交易执行器抽象基类

    Usage:
        executor = PaperTradeExecutor()
        result = executor.submit_buy("token-1", amount=5, slippage=2.0)
        if result.success:
            held = result.held_amount
    """

    def __init__(self) -> None:
        logger.info(f"{self.__class__.__name__} initialized")

    @property
    @abstractmethod
    def name(self) -> str:
        """执行器名称 (e.g., "paper")"""
        ...

    @abstractmethod
    def submit_buy(
        self,
        token_id: str,
        amount: int,
        slippage: float,
    ) -> ExecutionResult:
        """提交买入

        Args:
            token_id: token ID
            amount: 买入金额 (satoshi units)
            slippage: 滑点容忍 (%)

        Returns:
            ExecutionResult，成功时 held_amount 为买入后持有的 token 数量 (base units)

        Raises:
            ExecutionFailedError: 请求被拒绝 (也可返回失败的 ExecutionResult)
            TradingProviderError: 执行器内部错误
        """
        ...

    @abstractmethod
    def submit_sell(
        self,
        token_id: str,
        amount: int,
        slippage: float,
    ) -> ExecutionResult:
        """提交卖出

        Args:
            token_id: token ID
            amount: 卖出数量 (token base units)
            slippage: 滑点容忍 (%)

        Returns:
            ExecutionResult

        Raises:
            TradingProviderError: 执行器内部错误
        """
        ...

    def update_quotes(self, snapshots: Iterable[TokenSnapshot]) -> None:
        """接收最新行情 (真实执行器无需报价，默认忽略)"""

    def load_balances(self, balances: dict[str, int]) -> None:
        """同步已有持仓 (默认忽略)"""

