"""
Pydantic schemas for listing interaction events and their aggregated counters
"""
from datetime import datetime, timezone
from typing import Annotated, Dict, Iterable, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, Field, TypeAdapter

from bozor.schemas.listings import ListingType

# (listing_id, listing_type)
InteractionKey = Tuple[str, str]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseInteraction(BaseModel):
    """Fields shared by every interaction event"""

    listing_id: str
    listing_type: ListingType
    user_id: Optional[str] = None
    matched_tags: List[str] = Field(default_factory=list)
    search_query: Optional[str] = None
    occurred_at: datetime = Field(default_factory=_utcnow)

    @property
    def key(self) -> InteractionKey:
        return (self.listing_id, self.listing_type)


class ViewInteraction(BaseInteraction):
    kind: Literal["view"] = "view"


class ClickInteraction(BaseInteraction):
    kind: Literal["click"] = "click"


class ContactInteraction(BaseInteraction):
    kind: Literal["contact"] = "contact"


class OrderInteraction(BaseInteraction):
    kind: Literal["order"] = "order"


Interaction = Annotated[
    Union[ViewInteraction, ClickInteraction, ContactInteraction, OrderInteraction],
    Field(discriminator="kind"),
]

_interaction_list = TypeAdapter(List[Interaction])


def parse_interactions(raw: Iterable[dict]) -> List[Interaction]:
    """
    Validate raw event payloads into typed interaction events.

    Raises:
        pydantic.ValidationError: if any payload has an unknown kind or bad fields
    """
    return _interaction_list.validate_python(list(raw))


class InteractionCounts(BaseModel):
    """Aggregated interaction counters for one (listing_id, listing_type) pair"""

    views: int = Field(default=0, ge=0)
    clicks: int = Field(default=0, ge=0)
    contacts: int = Field(default=0, ge=0)
    orders: int = Field(default=0, ge=0)

    @classmethod
    def from_events(cls, events: Iterable[BaseInteraction]) -> Dict[InteractionKey, "InteractionCounts"]:
        """Aggregate a stream of interaction events into counters per listing"""
        totals: Dict[InteractionKey, Dict[str, int]] = {}
        for event in events:
            bucket = totals.setdefault(event.key, {"views": 0, "clicks": 0, "contacts": 0, "orders": 0})
            bucket[f"{event.kind}s"] += 1
        return {key: cls(**bucket) for key, bucket in totals.items()}
