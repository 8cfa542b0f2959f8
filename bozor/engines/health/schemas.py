"""
Pydantic schemas for listing health and search visibility
"""
from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

HealthStatus = Literal["healthy", "needs_improvement", "critical"]
DropSeverity = Literal["minor", "major", "critical"]


class HealthWeights(BaseModel):
    """Maximum points per health factor for one listing type"""

    conversion: float
    engagement: float
    completeness: float
    ranking: float

    class Config:
        frozen = True


class HealthFactors(BaseModel):
    conversion: float = 0.0
    engagement: float = 0.0
    completeness: float = 0.0
    ranking: float = 0.0

    @property
    def total(self) -> float:
        return self.conversion + self.engagement + self.completeness + self.ranking


class HealthScore(BaseModel):
    """Health of one listing with actionable advice for the seller"""

    listing_id: str
    score: int = Field(ge=0, le=100)
    status: HealthStatus
    factors: HealthFactors
    recommendations: List[str] = Field(default_factory=list)


class RankRecord(BaseModel):
    """One observed rank of a listing for a query"""

    query: str
    entity_id: str
    rank: int = Field(ge=1)
    observed_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class RankInfo(BaseModel):
    """Where a listing ranks for a query and how that changed"""

    entity_id: str
    title: str
    query: str
    rank: int = Field(ge=1)
    total_results: int = Field(ge=0)
    previous_rank: Optional[int] = None
    rank_change: int = Field(default=0, description="Positive = moved up, negative = moved down")
    is_drop: bool = False
    drop_severity: Optional[DropSeverity] = None
    explanation: List[str] = Field(default_factory=list)
    matched_tags: List[str] = Field(default_factory=list)
