"""
Trade Command - 交易命令

交易机器人的命令行接口。

⚠️  仅支持模拟执行 (Paper Trading)，真实链上执行需要 canister 客户端，不在本项目范围内。

命令:
- trade run: 运行交易机器人 (固定间隔循环)
- trade scan: 拉取热门 token，显示过滤结果与排序后的机会 (不下单)

使用示例:
=========

odintrade trade run                      # 每 30 秒一轮，Ctrl+C 停止
odintrade trade run --once               # 只运行一轮
odintrade trade run -i 60 -c my.yaml     # 自定义间隔与配置文件
odintrade trade run --state ""           # 不持久化账本
odintrade trade scan                     # 查看当前机会
odintrade trade scan --json              # JSON 输出
"""

import json
import logging
import signal
import sys
from typing import Any, Optional

import click

from src.business.trading.bot import TradingBot
from src.business.trading.config.bot_config import BotConfig
from src.business.trading.config.trading_config import TradingConfig
from src.business.trading.decision.opportunity_filter import OpportunityFilter, rank_opportunities
from src.business.trading.models.position import PositionLedger
from src.business.trading.models.trading import InvalidConfigError, LedgerError
from src.business.trading.provider.paper_trading import PaperTradeExecutor
from src.business.trading.store import PositionStore
from src.data.providers.base import DataUnavailableError
from src.data.providers.odin_provider import OdinFunProvider

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _load_configs(config_path: Optional[str]) -> tuple[TradingConfig, BotConfig]:
    try:
        return TradingConfig.load(config_path), BotConfig.load(config_path)
    except InvalidConfigError as e:
        click.echo(f"❌ 配置错误: {e}", err=True)
        sys.exit(2)


@click.group()
def trade() -> None:
    """交易模块 - 机会筛选与自动交易

    ⚠️  仅支持模拟执行 (Paper Trading)

    \b
    命令:
      run    运行交易机器人
      scan   查看当前入场机会 (不下单)
    """
    pass


@trade.command()
@click.option("--interval", "-i", type=float, default=None, help="循环间隔 (秒)")
@click.option("--once", is_flag=True, help="只运行一轮")
@click.option("--config", "-c", "config_path", type=click.Path(exists=True), help="配置文件路径")
@click.option("--state", "-s", "state_path", default=None, help="账本文件路径 (空字符串表示不持久化)")
@click.option("--paper/--no-paper", default=True, help="使用模拟执行器")
@click.option("--verbose", "-v", is_flag=True, help="显示详细日志")
def run(
    interval: Optional[float],
    once: bool,
    config_path: Optional[str],
    state_path: Optional[str],
    paper: bool,
    verbose: bool,
) -> None:
    """运行交易机器人

    \b
    每轮:
      1. 检查持仓 (止盈 / 止损 / 超时)
      2. 有空余仓位时买入成交额最高的机会
    """
    _setup_logging(verbose)

    if not paper:
        click.echo("❌ 只支持模拟执行 (--paper)", err=True)
        sys.exit(2)

    trading_config, bot_config = _load_configs(config_path)

    path = bot_config.state_path if state_path is None else state_path
    store = PositionStore(path) if path else None

    provider = OdinFunProvider(
        base_url=bot_config.api_base_url,
        timeout=bot_config.request_timeout,
    )
    executor = PaperTradeExecutor(btc_price_usd=bot_config.paper_btc_price_usd)

    try:
        bot = TradingBot(
            trading_config,
            provider,
            executor,
            bot_config=bot_config,
            store=store,
        )
    except LedgerError as e:
        click.echo(f"❌ 账本加载失败: {e}", err=True)
        sys.exit(3)

    bot.initialize()

    if once:
        result = bot.run_once()
        click.echo(f"📊 {result.summary}")
        sys.exit(1 if result.has_failures else 0)

    def _handle_sigint(signum: int, frame: Any) -> None:
        click.echo("\nReceived SIGINT, shutting down gracefully...")
        bot.stop()

    signal.signal(signal.SIGINT, _handle_sigint)
    bot.start(interval_seconds=interval)


@trade.command()
@click.option("--limit", "-n", type=int, default=None, help="拉取热门 token 数量")
@click.option("--config", "-c", "config_path", type=click.Path(exists=True), help="配置文件路径")
@click.option("--json", "as_json", is_flag=True, help="JSON 格式输出")
@click.option("--verbose", "-v", is_flag=True, help="显示详细日志")
def scan(
    limit: Optional[int],
    config_path: Optional[str],
    as_json: bool,
    verbose: bool,
) -> None:
    """查看当前入场机会 (不下单)"""
    _setup_logging(verbose)
    trading_config, bot_config = _load_configs(config_path)

    provider = OdinFunProvider(
        base_url=bot_config.api_base_url,
        timeout=bot_config.request_timeout,
    )
    try:
        tokens = provider.get_hot_tokens(limit or bot_config.hot_tokens_limit)
    except DataUnavailableError as e:
        click.echo(f"❌ 行情不可用: {e}", err=True)
        sys.exit(3)

    ledger = PositionLedger()
    if bot_config.state_path:
        try:
            ledger = PositionStore(bot_config.state_path).load()
        except LedgerError as e:
            logger.warning(f"Ignoring unreadable ledger: {e}")

    opportunity_filter = OpportunityFilter(trading_config)
    rows = []
    for token in tokens:
        reasons = opportunity_filter.rejection_reasons(token, ledger)
        rows.append((token, reasons))
    ranked = rank_opportunities(t for t, reasons in rows if not reasons)

    if as_json:
        click.echo(json.dumps({
            "tokens": [
                {**t.to_dict(), "eligible": not reasons, "rejection_reasons": reasons}
                for t, reasons in rows
            ],
            "opportunities": [t.token_id for t in ranked],
        }, indent=2))
        return

    click.echo(f"\n🔍 热门 token: {len(tokens)}")
    click.echo("-" * 60)
    for token, reasons in rows:
        mark = "✅" if not reasons else "❌"
        click.echo(
            f"{mark} {token.symbol:<10} ${token.price_usd:<12.8g} "
            f"mcap ${token.market_cap_usd:>10,.0f}  vol ${token.volume_usd_24h:>10,.0f}  "
            f"bc {token.bonding_curve_progress:5.1f}%  24h {token.change_24h:+.1f}%"
        )
        for reason in reasons:
            click.echo(f"     - {reason}")

    click.echo("-" * 60)
    if ranked:
        click.echo(f"📈 机会 ({len(ranked)}):")
        for i, token in enumerate(ranked, 1):
            click.echo(f"  {i}. {token.symbol} ({token.token_id}) vol ${token.volume_usd_24h:,.0f}")
    else:
        click.echo("No suitable trading opportunities found")
