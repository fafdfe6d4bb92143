"""
Trading Bot - 交易机器人

固定间隔运行交易循环:
行情拉取 → 持仓定价 → TradingPipeline.run_cycle → 账本更新/持久化 → 等待下一轮

停止信号是 threading.Event，只在两轮之间检查；正在运行的循环不会被中断。
任何循环内的异常都会被记录，然后继续下一轮。
"""

import logging
import threading
from datetime import datetime
from typing import Callable

from src.business.trading.config.bot_config import BotConfig
from src.business.trading.config.trading_config import TradingConfig
from src.business.trading.models.action import CycleResult
from src.business.trading.models.position import PositionLedger
from src.business.trading.pipeline import TradingPipeline
from src.business.trading.provider.base import TradeExecutor
from src.business.trading.store import PositionStore
from src.data.models.token import TokenSnapshot
from src.data.providers.base import DataUnavailableError, MarketDataProvider

logger = logging.getLogger(__name__)


class TradingBot:
    """交易机器人

    持有账本，按固定间隔调用 TradingPipeline。

    Usage:
        bot = TradingBot(config, provider, executor)
        bot.run_once()  # 单轮
        bot.start(interval_seconds=30)  # 阻塞运行，直到 bot.stop()
    """

    def __init__(
        self,
        config: TradingConfig,
        provider: MarketDataProvider,
        executor: TradeExecutor,
        bot_config: BotConfig | None = None,
        ledger: PositionLedger | None = None,
        store: PositionStore | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """初始化交易机器人

        Args:
            config: 交易配置
            provider: 行情数据源
            executor: 交易执行器
            bot_config: 运行配置
            ledger: 初始账本，默认从 store 加载 (无 store 时为空)
            store: 账本持久化，None 表示不持久化
            clock: 时钟 (测试时可注入)
        """
        self._config = config
        self._bot_config = bot_config or BotConfig()
        self._provider = provider
        self._executor = executor
        self._store = store
        self._clock = clock
        self._pipeline = TradingPipeline(config, executor)
        self._stop_event = threading.Event()
        self._running = False
        self._cycle_count = 0

        if ledger is not None:
            self._ledger = ledger
        elif store is not None:
            self._ledger = store.load()
        else:
            self._ledger = PositionLedger()

        executor.load_balances({p.token_id: p.amount for p in self._ledger})

    @property
    def ledger(self) -> PositionLedger:
        return self._ledger

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def cycle_count(self) -> int:
        return self._cycle_count

    def initialize(self) -> None:
        """打印配置"""
        config = self._config
        logger.info("Initializing trading bot...")
        logger.info(f"Executor: {self._executor.name}, data source: {self._provider.name}")
        logger.info("Trading Configuration:")
        logger.info(f"- Max buy amount: {config.max_buy_amount_btc} BTC")
        logger.info(
            f"- Market cap range: {config.min_market_cap_usd} - {config.max_market_cap_usd} USD"
        )
        logger.info(f"- Min volume: {config.min_volume_usd} USD")
        logger.info(f"- Min bonding curve progress: {config.min_bonding_curve_progress}%")
        logger.info(f"- Profit target: {config.profit_target_percent}%")
        logger.info(f"- Stop loss: {config.stop_loss_percent}%")
        logger.info(f"- Open positions: {len(self._ledger)}/{config.max_positions}")

    def _fetch_snapshots(self) -> list[TokenSnapshot] | None:
        try:
            return self._provider.get_hot_tokens(self._bot_config.hot_tokens_limit)
        except DataUnavailableError as e:
            logger.warning(f"Hot tokens unavailable this cycle: {e}")
            return None

    def _fetch_prices(
        self,
        snapshots: list[TokenSnapshot] | None,
    ) -> dict[str, float]:
        """为持仓 token 取价，已在热门列表中的直接使用"""
        known = {s.token_id for s in snapshots or []}
        prices: dict[str, float] = {}
        for position in self._ledger:
            if position.token_id in known:
                continue
            try:
                token = self._provider.get_token(position.token_id)
            except DataUnavailableError as e:
                logger.warning(f"Price unavailable for {position.symbol}: {e}")
                continue
            prices[token.token_id] = token.price_usd
            self._executor.update_quotes([token])
        return prices

    def run_once(self) -> CycleResult:
        """运行一轮交易循环"""
        self._cycle_count += 1
        logger.info(f"=== Trading Cycle #{self._cycle_count} ===")

        snapshots = self._fetch_snapshots()
        if snapshots:
            self._executor.update_quotes(snapshots)
        prices = self._fetch_prices(snapshots)

        result = self._pipeline.run_cycle(snapshots, self._ledger, self._clock(), prices)

        for action, reason in result.failures:
            logger.warning(
                f"{action.action_type.value.upper()} {action.token_id} failed: {reason}"
            )

        self._ledger = result.ledger
        if self._store is not None:
            self._store.save(self._ledger)

        logger.info(
            f"Current positions: {len(self._ledger)}/{self._config.max_positions}"
        )
        return result

    def start(self, interval_seconds: float | None = None, max_cycles: int | None = None) -> None:
        """阻塞运行交易循环，直到 stop() 被调用

        Args:
            interval_seconds: 循环间隔，默认使用 BotConfig.interval_seconds
            max_cycles: 最多运行轮数 (None 表示不限)
        """
        interval = interval_seconds or self._bot_config.interval_seconds
        self._stop_event.clear()
        self._running = True
        logger.info(f"Starting trading bot ({interval}s intervals)...")

        cycles = 0
        while not self._stop_event.is_set():
            try:
                self.run_once()
            except Exception:
                logger.exception("Trading cycle error")

            cycles += 1
            if max_cycles is not None and cycles >= max_cycles:
                break

            logger.info(f"Next cycle in {interval} seconds...")
            self._stop_event.wait(interval)

        self._running = False
        logger.info("Trading bot stopped")

    def stop(self) -> None:
        """请求停止 (当前循环会运行完成)"""
        self._stop_event.set()
