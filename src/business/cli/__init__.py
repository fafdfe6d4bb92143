"""
Business Layer CLI - 业务层命令行工具

提供命令：
- trade: 运行交易机器人 / 查看入场机会
- portfolio: 查看账户持仓组合
"""

from src.business.cli.main import cli

__all__ = ["cli"]
