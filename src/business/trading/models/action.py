"""
Action Models - 交易动作与循环结果

定义:
- ActionType: 动作类型 (BUY, SELL, HOLD)
- ExitReason: 卖出原因 (止盈 / 止损 / 超时)
- TradeAction: 决策引擎输出的动作
- CycleSummary: 单次循环统计
- CycleResult: 单次循环结果 (动作 + 更新后的账本)
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from src.business.trading.models.position import Position, PositionLedger
from src.data.models.token import TokenSnapshot


class ActionType(str, Enum):
    """动作类型"""

    BUY = "buy"
    SELL = "sell"
    HOLD = "hold"


class ExitReason(str, Enum):
    """卖出原因 (按优先级排列)"""

    PROFIT_TARGET = "profit target reached"
    STOP_LOSS = "stop loss triggered"
    TIME_EXIT = "time-based exit"


@dataclass(frozen=True)
class TradeAction:
    """交易动作

    - BUY: token + amount (satoshi units)
    - SELL: position + current_price + reason
    - HOLD: 可选 token_id，detail 说明原因
    """

    action_type: ActionType
    token: TokenSnapshot | None = None
    amount: int = 0
    position: Position | None = None
    current_price: float | None = None
    reason: ExitReason | None = None
    token_id: str | None = None
    detail: str = ""

    @classmethod
    def buy(cls, token: TokenSnapshot, amount: int) -> "TradeAction":
        """买入动作"""
        return cls(
            action_type=ActionType.BUY,
            token=token,
            amount=amount,
            token_id=token.token_id,
        )

    @classmethod
    def sell(
        cls,
        position: Position,
        current_price: float,
        reason: ExitReason,
        detail: str = "",
    ) -> "TradeAction":
        """卖出动作"""
        return cls(
            action_type=ActionType.SELL,
            position=position,
            current_price=current_price,
            reason=reason,
            token_id=position.token_id,
            amount=position.amount,
            detail=detail or reason.value,
        )

    @classmethod
    def hold(cls, token_id: str | None = None, detail: str = "") -> "TradeAction":
        """不操作"""
        return cls(action_type=ActionType.HOLD, token_id=token_id, detail=detail)

    @property
    def is_buy(self) -> bool:
        return self.action_type == ActionType.BUY

    @property
    def is_sell(self) -> bool:
        return self.action_type == ActionType.SELL

    @property
    def is_hold(self) -> bool:
        return self.action_type == ActionType.HOLD

    def to_dict(self) -> dict[str, Any]:
        """转换为字典 (用于 JSON 输出)"""
        return {
            "action_type": self.action_type.value,
            "token_id": self.token_id,
            "symbol": self.token.symbol if self.token else (
                self.position.symbol if self.position else None
            ),
            "amount": str(self.amount),
            "current_price": self.current_price,
            "reason": self.reason.value if self.reason else None,
            "detail": self.detail,
        }


@dataclass
class CycleSummary:
    """循环统计"""

    buys: int = 0
    sells: int = 0
    holds: int = 0
    failures: int = 0
    opportunities: int = 0
    open_positions: int = 0

    def __str__(self) -> str:
        return (
            f"buys={self.buys} sells={self.sells} holds={self.holds} "
            f"failures={self.failures} opportunities={self.opportunities} "
            f"open_positions={self.open_positions}"
        )


@dataclass
class CycleResult:
    """循环结果

    actions: 本轮所有决策 (含 HOLD)
    executed: 执行成功的 BUY/SELL
    failures: 执行失败的动作及原因
    ledger: 更新后的账本
    """

    actions: list[TradeAction] = field(default_factory=list)
    executed: list[TradeAction] = field(default_factory=list)
    failures: list[tuple[TradeAction, str]] = field(default_factory=list)
    ledger: PositionLedger = field(default_factory=PositionLedger)
    summary: CycleSummary = field(default_factory=CycleSummary)
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def has_failures(self) -> bool:
        return bool(self.failures)
