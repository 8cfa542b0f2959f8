"""
Pydantic schemas for the Recommendation Engine
"""
from typing import Dict, List

from pydantic import BaseModel, Field


class SimilarityScore(BaseModel):
    """How closely a candidate listing matches a reference (listing, taxonomy or user)"""

    source_id: str
    candidate_id: str
    score: float = Field(ge=0)
    reasons: List[str] = Field(default_factory=list)


class InterestProfile(BaseModel):
    """Interests derived from the listings a user recently viewed"""

    categories: Dict[str, int] = Field(default_factory=dict, description="Category -> view count")
    brands: Dict[str, int] = Field(default_factory=dict, description="Canonical brand -> view count")
    tags: Dict[str, int] = Field(default_factory=dict, description="Normalized tag -> view count")
    price_min: float = float("inf")
    price_max: float = 0.0

    def top_categories(self, count: int = 3) -> List[str]:
        ranked = sorted(self.categories.items(), key=lambda item: item[1], reverse=True)
        return [category for category, _ in ranked[:count]]
