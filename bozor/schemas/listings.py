"""
Pydantic schemas for marketplace listings
"""
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, validator

ListingType = Literal["product", "store_product", "service"]

DEFAULT_TAG_WEIGHT = 0.7


class ListingTag(BaseModel):
    """Weighted tag attached to a listing"""

    value: str
    weight: float = Field(default=DEFAULT_TAG_WEIGHT, ge=0, le=1)
    source: str = Field(default="user", description="Where the tag came from: user, ai, system")


class Taxonomy(BaseModel):
    """Structured classification: audience.segment.item"""

    id: Optional[str] = None
    audience: Optional[str] = Field(default=None, description="erkaklar, ayollar, bolalar, unisex")
    segment: Optional[str] = Field(default=None, description="kiyim, oyoq_kiyim, aksessuar, ...")
    label_uz: Optional[str] = Field(default=None, alias="labelUz")

    class Config:
        populate_by_name = True


class ListingText(BaseModel):
    """Searchable view of a product, store product or service listing"""

    id: str
    listing_type: ListingType = "product"
    title: str
    description: str = ""
    category: str = ""
    tags: List[ListingTag] = Field(default_factory=list)
    brand: Optional[str] = None
    taxonomy: Optional[Taxonomy] = None
    colors: List[str] = Field(default_factory=list)
    price: Optional[float] = Field(default=None, ge=0)
    created_at: datetime
    view_count: int = Field(default=0, ge=0)
    favorite_count: int = Field(default=0, ge=0)
    is_boosted: bool = False
    boosted_until: Optional[datetime] = None
    status: str = "active"
    distance: Optional[float] = Field(default=None, ge=0, description="Distance from the searcher in km")
    image_url: Optional[str] = None
    store_id: Optional[str] = None

    @validator("tags", pre=True)
    def coerce_plain_tags(cls, v):
        # Plain strings are accepted as user tags with the default weight
        if v is None:
            return []
        return [{"value": t} if isinstance(t, str) else t for t in v]

    @property
    def is_active(self) -> bool:
        return self.status == "active"

    @property
    def tag_values(self) -> List[str]:
        return [tag.value for tag in self.tags]

    @property
    def is_free(self) -> bool:
        return self.price == 0
