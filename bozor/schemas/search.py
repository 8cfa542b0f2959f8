"""
Pydantic schemas for search requests and search analytics
"""
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, validator

from bozor.schemas.listings import ListingType


class SearchFilters(BaseModel):
    """Filtering criteria applied to the candidate pool before scoring"""

    category: Optional[str] = None
    price_min: Optional[float] = Field(default=None, ge=0)
    price_max: Optional[float] = Field(default=None, ge=0)
    max_radius: float = Field(default=10.0, ge=0, description="Search radius in km for the distance factor")
    listing_type: Optional[ListingType] = None
    store_id: Optional[str] = None

    @validator("price_max")
    def validate_price_range(cls, v, values):
        if v is not None and values.get("price_min") is not None:
            if v < values["price_min"]:
                raise ValueError("price_max must be greater than price_min")
        return v


class SearchEvent(BaseModel):
    """One executed search, as reported to analytics"""

    query: str
    normalized_query: str
    category: Optional[str] = None
    result_count: int = Field(ge=0)
    user_id: Optional[str] = None
    brand_detected: Optional[str] = None
    searched_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
