"""
Portfolio Command - 持仓组合命令

显示 Odin.fun 账户的持仓、盈亏汇总、最近交易和 BTC 价格。
需要 ODIN_API_TOKEN (bearer token)。
"""

import logging
import sys
import time
from typing import Optional

import click

from src.data.models.token import UserBalance
from src.data.providers.base import DataUnavailableError
from src.data.providers.odin_provider import OdinFunProvider
from src.data.utils.units import to_token_amount

logger = logging.getLogger(__name__)


def portfolio_totals(balances: list[UserBalance]) -> tuple[float, float, float]:
    """计算组合总市值、总盈亏、总收益率 (%)"""
    total_value = sum(b.total_value_usd for b in balances)
    total_profit = sum(b.total_profit_usd for b in balances)
    cost = total_value - total_profit
    total_return = total_profit / cost * 100 if total_value > 0 and cost != 0 else 0.0
    return total_value, total_profit, total_return


def _print_portfolio(provider: OdinFunProvider, trades_limit: int) -> None:
    user = provider.get_user()
    click.echo(f"User: {user.user_name or 'Anonymous'}")
    click.echo(f"BTC Address: {user.btc_address}")
    click.echo(f"Total Profit: ${user.total_profit_usd:,.2f}")
    click.echo(f"Total Buy Volume: {user.total_buy_volume}")
    click.echo(f"Total Sell Volume: {user.total_sell_volume}")

    balances = provider.get_user_balances()
    if not balances:
        click.echo("No tokens in portfolio")
        return

    click.echo("\n===== PORTFOLIO SUMMARY =====")
    for b in balances:
        click.echo(f"\n{b.symbol} ({b.name})")
        click.echo(f"  Amount: {to_token_amount(b.amount):,.4f}")
        click.echo(f"  Ownership: {b.percent_ownership:.2f}%")
        click.echo(f"  Market Cap: ${b.market_cap_usd:,.0f}")
        click.echo(f"  Value: ${b.total_value_usd:.2f}")
        click.echo(f"  Unrealized P/L: ${b.unrealized_profit_usd:.2f}")
        click.echo(f"  Realized P/L: ${b.realized_profit_usd:.2f}")
        click.echo(f"  Total P/L: ${b.total_profit_usd:.2f}")

    total_value, total_profit, total_return = portfolio_totals(balances)
    click.echo("\n===== TOTALS =====")
    click.echo(f"Total Portfolio Value: ${total_value:.2f}")
    click.echo(f"Total Profit/Loss: ${total_profit:.2f}")
    click.echo(f"Total Return: {total_return:.2f}%")

    trades = provider.get_user_trades(limit=trades_limit)
    if trades:
        click.echo("\n===== RECENT TRADES =====")
        for t in trades:
            day = t.created_at.date().isoformat() if t.created_at else "-"
            click.echo(
                f"{day} - {t.trade_type} {t.volume_btc} BTC worth of tokens (${t.volume_usd:.2f})"
            )

    btc = provider.get_btc_price()
    click.echo(f"\nCurrent BTC Price: ${btc.price_usd:,.2f}")


@click.command()
@click.option("--continuous", is_flag=True, help="持续监控")
@click.option("--interval", "-i", type=float, default=60.0, help="持续监控间隔 (秒)")
@click.option("--trades", "-t", "trades_limit", type=int, default=10, help="显示最近交易数量")
@click.option("--token", "api_token", default=None, help="API bearer token (默认读取 ODIN_API_TOKEN)")
@click.option("--verbose", "-v", is_flag=True, help="显示详细日志")
def portfolio(
    continuous: bool,
    interval: float,
    trades_limit: int,
    api_token: Optional[str],
    verbose: bool,
) -> None:
    """显示账户持仓组合

    \b
    示例：
      odintrade portfolio
      odintrade portfolio --continuous -i 120
    """
    log_level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    provider = OdinFunProvider(api_token=api_token)
    if not provider.is_authenticated:
        click.echo("❌ 需要 ODIN_API_TOKEN", err=True)
        sys.exit(2)

    if not continuous:
        try:
            _print_portfolio(provider, trades_limit)
        except DataUnavailableError as e:
            click.echo(f"❌ 错误: {e}", err=True)
            sys.exit(3)
        return

    click.echo(f"Starting continuous portfolio monitoring (every {interval} seconds)...")
    try:
        while True:
            try:
                _print_portfolio(provider, trades_limit)
            except DataUnavailableError as e:
                click.echo(f"❌ 错误: {e}", err=True)
            click.echo(f"\nNext update in {interval} seconds...\n")
            time.sleep(interval)
    except KeyboardInterrupt:
        click.echo("\nStopped")
