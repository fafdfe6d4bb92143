"""Trading Models - 交易模块数据模型"""

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
    "ActionType",
    "ExitReason",
    "TradeAction",
    "CycleSummary",
    "CycleResult",
    "Position",
    "PositionLedger",
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
