"""Decision Engine - 决策引擎模块"""

from src.business.trading.decision.engine import DecisionEngine
from src.business.trading.decision.opportunity_filter import (
    MAX_RANKED_OPPORTUNITIES,
    MIN_CHANGE_24H_PERCENT,
    OpportunityFilter,
    rank_opportunities,
)

__all__ = [
    "DecisionEngine",
    "OpportunityFilter",
    "rank_opportunities",
    "MAX_RANKED_OPPORTUNITIES",
    "MIN_CHANGE_24H_PERCENT",
]
