"""Trade Executors - 交易执行器

提供统一的交易执行接口。

⚠️  仅提供模拟执行 (Paper Trading)
"""

from src.business.trading.provider.base import TradeExecutor
from src.business.trading.provider.paper_trading import PaperTradeExecutor

__all__ = [
    "PaperTradeExecutor",
    "TradeExecutor",
]
