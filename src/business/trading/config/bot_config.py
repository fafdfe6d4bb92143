"""
Bot Configuration - 交易机器人运行配置

循环间隔、行情拉取数量、API 地址、账本存储路径等运行参数。

配置来源 (优先级高→低):
1. 环境变量 BOT_ + 字段名大写，如 BOT_INTERVAL_SECONDS
2. YAML 文件 config/trading/trading.yaml 的 bot 节
3. dataclass 默认值
"""

import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from src.business.trading.config.trading_config import DEFAULT_CONFIG_FILE, _coerce
from src.business.trading.models.trading import InvalidConfigError


@dataclass(frozen=True)
class BotConfig:
    """机器人运行配置"""

    interval_seconds: float = 30.0  # 循环间隔
    hot_tokens_limit: int = 20  # 每轮拉取热门 token 数量
    api_base_url: str = "https://api.odin.fun/v1"
    request_timeout: float = 30.0
    state_path: str = "data/trading/positions.json"  # 账本持久化路径 ("" 表示不持久化)
    paper_btc_price_usd: float = 100_000.0  # 模拟执行器使用的 BTC 价格

    _ENV_PREFIX = "BOT_"
    _YAML_SECTION = "bot"

    def __post_init__(self) -> None:
        errors: list[str] = []
        if self.interval_seconds <= 0:
            errors.append(f"interval_seconds must be positive: {self.interval_seconds}")
        if self.hot_tokens_limit < 1:
            errors.append(f"hot_tokens_limit must be at least 1: {self.hot_tokens_limit}")
        if self.request_timeout <= 0:
            errors.append(f"request_timeout must be positive: {self.request_timeout}")
        if self.paper_btc_price_usd <= 0:
            errors.append(
                f"paper_btc_price_usd must be positive: {self.paper_btc_price_usd}"
            )
        if errors:
            raise InvalidConfigError("Invalid bot config: " + "; ".join(errors))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BotConfig":
        """从字典创建配置 (只读取 bot 节，缺失时视为扁平结构)"""
        section = data.get(cls._YAML_SECTION, data)
        valid_fields = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in section.items() if k in valid_fields})

    @classmethod
    def load(cls, path: str | Path | None = None) -> "BotConfig":
        """加载配置

        优先级: 环境变量 > YAML bot 节 > dataclass 默认值
        """
        config_file = Path(path) if path else DEFAULT_CONFIG_FILE
        data: dict[str, Any] = {}
        if config_file.exists():
            with open(config_file, "r", encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
            data = dict(raw.get(cls._YAML_SECTION, {}))

        for f in fields(cls):
            val = os.getenv(f"{cls._ENV_PREFIX}{f.name.upper()}")
            if val is not None:
                try:
                    data[f.name] = _coerce(val, f.default)
                except ValueError as e:
                    raise InvalidConfigError(
                        f"Invalid value for {cls._ENV_PREFIX}{f.name.upper()}: {val!r}"
                    ) from e

        return cls(**data)

    def to_dict(self) -> dict[str, Any]:
        """转换为字典"""
        return {self._YAML_SECTION: asdict(self)}
