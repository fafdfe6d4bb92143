"""
CLI Commands - 命令行子命令
"""

from src.business.cli.commands.portfolio import portfolio
from src.business.cli.commands.trade import trade

__all__ = ["portfolio", "trade"]
