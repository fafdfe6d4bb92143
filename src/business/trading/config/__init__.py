"""Trading Configuration - 交易配置管理"""

from src.business.trading.config.bot_config import BotConfig
from src.business.trading.config.trading_config import TradingConfig

__all__ = [
    "BotConfig",
    "TradingConfig",
]
