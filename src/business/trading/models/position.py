"""
Position Models - 持仓与持仓账本

定义:
- Position: 单个 token 的持仓
- PositionLedger: 持仓账本 (每个 token 最多一个持仓)

账本是交易循环之间唯一需要保留的状态，由调用方 (TradingBot) 持有，
每个循环显式传入，不使用全局变量。
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterator

from src.business.trading.models.trading import (
    DuplicatePositionError,
    PositionNotFoundError,
)
from src.data.utils.units import percent_change


@dataclass(frozen=True)
class Position:
    """持仓

    买入成功时创建，卖出成功时移除。
    """

    token_id: str
    symbol: str
    entry_price: float  # USD
    amount: int  # token base units
    entry_time: datetime

    def profit_percent(self, current_price: float) -> float:
        """相对买入价的盈亏百分比"""
        return percent_change(self.entry_price, current_price)

    def hold_minutes(self, now: datetime) -> float:
        """持有时长 (分钟)"""
        return (now - self.entry_time).total_seconds() / 60

    def to_dict(self) -> dict[str, Any]:
        """转换为字典 (amount 以字符串保存，避免精度丢失)"""
        return {
            "token_id": self.token_id,
            "symbol": self.symbol,
            "entry_price": self.entry_price,
            "amount": str(self.amount),
            "entry_time": self.entry_time.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Position":
        """从字典创建"""
        return cls(
            token_id=data["token_id"],
            symbol=data.get("symbol", ""),
            entry_price=float(data["entry_price"]),
            amount=int(data["amount"]),
            entry_time=datetime.fromisoformat(data["entry_time"]),
        )


@dataclass
class PositionLedger:
    """持仓账本

    token_id -> Position，保证同一 token 只有一个持仓。

    Usage:
        ledger = PositionLedger()
        ledger.open_position(position)
        if "token-1" in ledger:
            ledger.close_position("token-1")
    """

    positions: dict[str, Position] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.positions)

    def __contains__(self, token_id: object) -> bool:
        return token_id in self.positions

    def __iter__(self) -> Iterator[Position]:
        return iter(list(self.positions.values()))

    def get(self, token_id: str) -> Position | None:
        """获取持仓"""
        return self.positions.get(token_id)

    def open_position(self, position: Position) -> None:
        """新增持仓

        Raises:
            DuplicatePositionError: 该 token 已有持仓
        """
        if position.token_id in self.positions:
            raise DuplicatePositionError(
                f"Position already open for token {position.token_id}"
            )
        self.positions[position.token_id] = position

    def close_position(self, token_id: str) -> Position:
        """移除持仓并返回

        Raises:
            PositionNotFoundError: 该 token 没有持仓
        """
        try:
            return self.positions.pop(token_id)
        except KeyError:
            raise PositionNotFoundError(f"No open position for token {token_id}") from None

    def copy(self) -> "PositionLedger":
        """浅拷贝 (Position 不可变，共享即可)"""
        return PositionLedger(positions=dict(self.positions))

    def to_dict(self) -> dict[str, Any]:
        """转换为字典"""
        return {"positions": [p.to_dict() for p in self.positions.values()]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PositionLedger":
        """从字典创建"""
        ledger = cls()
        for item in data.get("positions", []):
            ledger.open_position(Position.from_dict(item))
        return ledger
