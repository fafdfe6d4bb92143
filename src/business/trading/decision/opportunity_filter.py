"""
Opportunity Filter - 入场机会过滤与排序

检查项目 (全部满足才算机会):
- 该 token 当前没有持仓
- 市值在 [min_market_cap_usd, max_market_cap_usd] 区间
- 24h 成交额 >= min_volume_usd
- bonding curve 进度 >= min_bonding_curve_progress
- 未毕业 (仍在 bonding curve 上)
- 24h 跌幅不超过 10% (固定阈值，不可配置)

排序: 按 24h 成交额降序 (稳定排序，同额保持原顺序)，取前 5 个。
"""

import logging
from typing import Iterable

from src.business.trading.config.trading_config import TradingConfig
from src.business.trading.models.position import PositionLedger
from src.data.models.token import TokenSnapshot

logger = logging.getLogger(__name__)

# 跌幅超过 10% 的 token 不参与
MIN_CHANGE_24H_PERCENT = -10.0

MAX_RANKED_OPPORTUNITIES = 5


def rank_opportunities(
    tokens: Iterable[TokenSnapshot],
    limit: int = MAX_RANKED_OPPORTUNITIES,
) -> list[TokenSnapshot]:
    """按 24h 成交额降序排序并截断

    Python 的 sorted 是稳定排序，成交额相同的 token 保持输入顺序。
    """
    ranked = sorted(tokens, key=lambda t: t.volume_usd_24h, reverse=True)
    return ranked[:limit]


class OpportunityFilter:
    """入场机会过滤器

    Usage:
        opportunity_filter = OpportunityFilter(config)
        if opportunity_filter.is_eligible(token, ledger):
            ...
        ranked = opportunity_filter.find_opportunities(snapshots, ledger)
    """

    def __init__(self, config: TradingConfig) -> None:
        self.config = config

    def rejection_reasons(
        self,
        token: TokenSnapshot,
        ledger: PositionLedger,
    ) -> list[str]:
        """列出所有未通过的检查项 (空列表表示符合条件)"""
        config = self.config
        reasons: list[str] = []

        if token.token_id in ledger:
            reasons.append("already holding a position")

        # 数值检查取 "满足" 形式：NaN 不满足任何比较，会被拒绝
        mc = token.market_cap_usd
        if not (config.min_market_cap_usd <= mc <= config.max_market_cap_usd):
            if mc > config.max_market_cap_usd:
                reasons.append(f"market cap ${mc:,.0f} > ${config.max_market_cap_usd:,.0f}")
            else:
                reasons.append(f"market cap ${mc:,.0f} < ${config.min_market_cap_usd:,.0f}")

        if not token.volume_usd_24h >= config.min_volume_usd:
            reasons.append(
                f"24h volume ${token.volume_usd_24h:,.0f} < ${config.min_volume_usd:,.0f}"
            )

        if not token.bonding_curve_progress >= config.min_bonding_curve_progress:
            reasons.append(
                f"bonding curve {token.bonding_curve_progress:.1f}% "
                f"< {config.min_bonding_curve_progress:.1f}%"
            )

        if token.is_graduated:
            reasons.append("graduated")

        if not token.change_24h >= MIN_CHANGE_24H_PERCENT:
            reasons.append(
                f"24h change {token.change_24h:.1f}% < {MIN_CHANGE_24H_PERCENT:.0f}%"
            )

        return reasons

    def is_eligible(self, token: TokenSnapshot, ledger: PositionLedger) -> bool:
        """是否符合入场条件"""
        reasons = self.rejection_reasons(token, ledger)
        if reasons:
            logger.debug(f"{token.symbol} ({token.token_id}) rejected: {'; '.join(reasons)}")
            return False
        return True

    def find_opportunities(
        self,
        snapshots: Iterable[TokenSnapshot],
        ledger: PositionLedger,
        limit: int = MAX_RANKED_OPPORTUNITIES,
    ) -> list[TokenSnapshot]:
        """过滤 + 排序"""
        eligible = [t for t in snapshots if self.is_eligible(t, ledger)]
        return rank_opportunities(eligible, limit)
