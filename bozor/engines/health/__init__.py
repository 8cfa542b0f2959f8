"""
Listing Health Engine

Handles health scoring and search rank tracking for seller dashboards.
"""

from .core import ListingHealthService
from .health_score import HEALTH_RULES, HealthScoreEngine, status_for
from .rank_tracker import RankHistory, RankTracker, drop_severity
from .schemas import HealthFactors, HealthScore, HealthWeights, RankInfo, RankRecord

__all__ = [
    "HEALTH_RULES",
    "HealthFactors",
    "HealthScore",
    "HealthScoreEngine",
    "HealthWeights",
    "ListingHealthService",
    "RankHistory",
    "RankInfo",
    "RankRecord",
    "RankTracker",
    "drop_severity",
    "status_for",
]
