"""
Trading Models - 交易执行数据模型

定义:
- TradingError: 交易模块错误基类
- DataUnavailableError: 行情数据不可用 (来自数据层)
- ExecutionFailedError: 交易执行被拒绝
- InvalidConfigError: 配置参数不合理
- LedgerError / DuplicatePositionError / PositionNotFoundError: 持仓账本错误
- TradingProviderError: 交易执行器错误
- ExecutionResult: 交易执行结果
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from src.data.providers.base import DataUnavailableError


class TradingError(Exception):
    """交易模块错误基类"""

    pass


class ExecutionFailedError(TradingError):
    """交易执行失败

    Raised when the executor rejects a buy/sell. The ledger is left unchanged.
    """

    pass


class InvalidConfigError(TradingError, ValueError):
    """配置错误

    Raised at construction time for non-sensical parameters
    (e.g. min_market_cap_usd > max_market_cap_usd).
    """

    pass


class LedgerError(TradingError):
    """持仓账本错误"""

    pass


class DuplicatePositionError(LedgerError):
    """同一 token 已存在持仓"""

    pass


class PositionNotFoundError(LedgerError):
    """持仓不存在"""

    pass


class TradingProviderError(TradingError):
    """交易执行器错误基类"""

    pass


@dataclass
class ExecutionResult:
    """交易执行结果

    TradeExecutor.submit_buy() / submit_sell() 的返回值。
    """

    success: bool
    token_id: str | None = None

    # 成交信息 (买入后持有的 token 数量, base units)
    held_amount: int = 0

    # 错误信息
    error_message: str | None = None

    timestamp: datetime = field(default_factory=datetime.now)

    # 额外上下文
    context: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def success_result(
        cls,
        token_id: str,
        held_amount: int = 0,
        **kwargs: Any,
    ) -> "ExecutionResult":
        """创建成功结果"""
        return cls(success=True, token_id=token_id, held_amount=held_amount, **kwargs)

    @classmethod
    def failure_result(
        cls,
        token_id: str | None,
        error_message: str,
        **kwargs: Any,
    ) -> "ExecutionResult":
        """创建失败结果"""
        return cls(
            success=False,
            token_id=token_id,
            error_message=error_message,
            **kwargs,
        )


__all__ = [
    "DataUnavailableError",
    "DuplicatePositionError",
    "ExecutionFailedError",
    "ExecutionResult",
    "InvalidConfigError",
    "LedgerError",
    "PositionNotFoundError",
    "TradingError",
    "TradingProviderError",
]
