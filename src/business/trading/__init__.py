"""
Trading Module - 自动化交易模块

实现行情到交易的闭环:
- Decision Engine: 机会过滤、排序、入场/出场决策
- Trading Pipeline: 单次循环编排，维护持仓账本
- Trading Bot: 固定间隔运行循环，支持停止信号
- Trade Executor: 统一的交易执行接口 (PAPER TRADING ONLY)
"""

from src.business.trading.models.action import (
    ActionType,
    CycleResult,
    CycleSummary,
    ExitReason,
    TradeAction,
)
from src.business.trading.models.position import Position, PositionLedger
from src.business.trading.models.trading import (
    DataUnavailableError,
    DuplicatePositionError,
    ExecutionFailedError,
    ExecutionResult,
    InvalidConfigError,
    LedgerError,
    PositionNotFoundError,
    TradingError,
    TradingProviderError,
)

__all__ = [
    # Action models
    "ActionType",
    "ExitReason",
    "TradeAction",
    "CycleSummary",
    "CycleResult",
    # Position models
    "Position",
    "PositionLedger",
    # Errors / results
    "TradingError",
    "DataUnavailableError",
    "ExecutionFailedError",
    "InvalidConfigError",
    "LedgerError",
    "DuplicatePositionError",
    "PositionNotFoundError",
    "TradingProviderError",
    "ExecutionResult",
]
