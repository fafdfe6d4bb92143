"""
CLI Main Entry Point - 命令行主入口

使用 Click 库构建命令行工具。
"""

import click
from dotenv import load_dotenv

from src.business.cli.commands.portfolio import portfolio
from src.business.cli.commands.trade import trade


@click.group()
@click.version_option(version="0.1.0", prog_name="odintrade")
def cli() -> None:
    """Odin.fun 交易机器人 - 命令行工具

    提供机会筛选、自动交易 (模拟执行)、持仓组合查看等功能。
    """
    load_dotenv()


# 注册子命令
cli.add_command(trade)
cli.add_command(portfolio)


if __name__ == "__main__":
    cli()
