"""
Trading Configuration - 交易策略配置

决策引擎的全部策略参数 (入场过滤、仓位、止盈止损、持有时长)。

配置来源 (优先级高→低):
1. 环境变量 TRADING_ + 字段名大写，如 TRADING_PROFIT_TARGET_PERCENT
2. YAML 文件 config/trading/trading.yaml 的 trading 节 (或扁平结构)
3. dataclass 默认值

不合理的参数在构造时抛出 InvalidConfigError，不会被静默忽略。
"""

import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from src.business.trading.models.trading import InvalidConfigError

DEFAULT_CONFIG_FILE = (
    Path(__file__).parent.parent.parent.parent.parent / "config" / "trading" / "trading.yaml"
)


def _coerce(value: str, target: Any) -> Any:
    """把环境变量字符串转换为字段默认值的类型"""
    if isinstance(target, bool):
        return value.lower() in ("true", "1", "yes")
    if isinstance(target, int):
        return int(value)
    if isinstance(target, float):
        return float(value)
    return value


def _read_yaml(path: str | Path) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return data or {}


@dataclass(frozen=True)
class TradingConfig:
    """交易策略配置

    Usage:
        config = TradingConfig.load()
        config = TradingConfig.from_dict({"max_positions": 5})
    """

    # =========================================================================
    # 仓位
    # =========================================================================

    max_buy_amount_btc: float = 0.005  # 单笔最大买入 (BTC)
    per_trade_cap_btc: float = 0.01  # 单笔硬上限 (BTC)
    max_positions: int = 3  # 同时持仓上限
    slippage_tolerance: float = 2.0  # 滑点容忍 (%)

    # =========================================================================
    # 入场过滤
    # =========================================================================

    min_market_cap_usd: float = 10_000.0
    max_market_cap_usd: float = 100_000.0
    min_volume_usd: float = 1_000.0  # 24h 成交额下限
    min_bonding_curve_progress: float = 10.0  # bonding curve 进度下限 (%)

    # =========================================================================
    # 出场规则
    # =========================================================================

    profit_target_percent: float = 15.0  # 止盈 (%)
    stop_loss_percent: float = 10.0  # 止损 (%)
    max_hold_minutes: float = 120.0  # 最长持有 (分钟)

    _ENV_PREFIX = "TRADING_"
    _YAML_SECTION = "trading"

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """校验参数

        Raises:
            InvalidConfigError: 参数不合理
        """
        errors: list[str] = []

        if self.min_market_cap_usd < 0 or self.max_market_cap_usd < 0:
            errors.append("market cap bounds must be non-negative")
        if self.min_market_cap_usd > self.max_market_cap_usd:
            errors.append(
                f"min_market_cap_usd ({self.min_market_cap_usd}) > "
                f"max_market_cap_usd ({self.max_market_cap_usd})"
            )
        if self.min_volume_usd < 0:
            errors.append(f"min_volume_usd must be non-negative: {self.min_volume_usd}")
        if not 0 <= self.min_bonding_curve_progress <= 100:
            errors.append(
                f"min_bonding_curve_progress must be within 0-100: "
                f"{self.min_bonding_curve_progress}"
            )
        if self.max_buy_amount_btc <= 0:
            errors.append(f"max_buy_amount_btc must be positive: {self.max_buy_amount_btc}")
        if self.per_trade_cap_btc <= 0:
            errors.append(f"per_trade_cap_btc must be positive: {self.per_trade_cap_btc}")
        if self.max_positions < 1:
            errors.append(f"max_positions must be at least 1: {self.max_positions}")
        if self.max_hold_minutes <= 0:
            errors.append(f"max_hold_minutes must be positive: {self.max_hold_minutes}")
        if not 0 <= self.slippage_tolerance <= 100:
            errors.append(
                f"slippage_tolerance must be within 0-100: {self.slippage_tolerance}"
            )

        if errors:
            raise InvalidConfigError("Invalid trading config: " + "; ".join(errors))

    @property
    def buy_amount_btc(self) -> float:
        """实际单笔买入额 = min(max_buy_amount_btc, per_trade_cap_btc)"""
        return min(self.max_buy_amount_btc, self.per_trade_cap_btc)

    @classmethod
    def _field_names(cls) -> set[str]:
        return {f.name for f in fields(cls) if not f.name.startswith("_")}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TradingConfig":
        """从字典创建配置

        支持嵌套 trading 节或扁平结构，未知字段忽略，缺失字段使用默认值。
        """
        section = data.get(cls._YAML_SECTION, data)
        valid_fields = cls._field_names()
        kwargs = {k: v for k, v in section.items() if k in valid_fields}
        return cls(**kwargs)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "TradingConfig":
        """从 YAML 文件加载配置"""
        return cls.from_dict(_read_yaml(path))

    @classmethod
    def load(cls, path: str | Path | None = None) -> "TradingConfig":
        """加载配置

        优先级: 环境变量 > YAML > dataclass 默认值

        Args:
            path: YAML 文件路径，默认 config/trading/trading.yaml (不存在则跳过)
        """
        config_file = Path(path) if path else DEFAULT_CONFIG_FILE
        data: dict[str, Any] = {}
        if config_file.exists():
            raw = _read_yaml(config_file)
            data = dict(raw.get(cls._YAML_SECTION, raw))

        defaults = cls.__dataclass_fields__
        for name in cls._field_names():
            val = os.getenv(f"{cls._ENV_PREFIX}{name.upper()}")
            if val is not None:
                try:
                    data[name] = _coerce(val, defaults[name].default)
                except ValueError as e:
                    raise InvalidConfigError(
                        f"Invalid value for {cls._ENV_PREFIX}{name.upper()}: {val!r}"
                    ) from e

        return cls.from_dict(data)

    def to_dict(self) -> dict[str, Any]:
        """转换为字典"""
        return {self._YAML_SECTION: asdict(self)}
