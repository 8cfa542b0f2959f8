"""
Pydantic schemas for the Search Engine
"""
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from bozor.schemas import ListingType


class RankingFactors(BaseModel):
    """Per-listing score components; the total is their sum"""

    boosted: float = 0.0
    popularity: float = 0.0
    recency: float = 0.0
    distance: float = 0.0
    relevance: float = 0.0
    personalization: float = 0.0
    text_relevance: float = 0.0

    @property
    def base_total(self) -> float:
        return self.boosted + self.popularity + self.relevance + self.recency + self.distance + self.text_relevance


class RankedResult(BaseModel):
    """One listing in a ranked result list"""

    id: str
    total_score: float
    rank: int = Field(ge=1)
    factors: RankingFactors


class TagSearchResult(BaseModel):
    """One listing matched by tag search"""

    listing_id: str
    listing_type: ListingType
    score: float = Field(gt=0)
    rank: int = Field(ge=1)
    explanation: List[str] = Field(default_factory=list, max_length=3)


class SearchResponse(BaseModel):
    """Response of a free-text search"""

    query: str
    results: List[RankedResult] = Field(default_factory=list)
    total_found: int = Field(default=0, ge=0, description="Matches before the limit was applied")
    variations: List[str] = Field(default_factory=list)
    suggested_correction: Optional[str] = None
    brand_detected: Optional[str] = None
    processing_time: float = 0.0


SuggestionType = Literal["recent", "brand", "category", "popular"]


class SearchSuggestion(BaseModel):
    """One autocomplete suggestion"""

    query: str
    score: float
    type: SuggestionType


class PopularSearch(BaseModel):
    """Aggregated search volume for one normalized query"""

    query: str
    count: int = Field(ge=0)
    avg_results: int = Field(default=0, ge=0)
