"""
Shared data model for listings, interactions and users
"""
from bozor.schemas.interactions import (
    ClickInteraction,
    ContactInteraction,
    Interaction,
    InteractionCounts,
    InteractionKey,
    OrderInteraction,
    ViewInteraction,
    parse_interactions,
)
from bozor.schemas.listings import DEFAULT_TAG_WEIGHT, ListingTag, ListingText, ListingType, Taxonomy
from bozor.schemas.search import SearchEvent, SearchFilters
from bozor.schemas.users import UserContext

__all__ = [
    "ClickInteraction",
    "ContactInteraction",
    "DEFAULT_TAG_WEIGHT",
    "Interaction",
    "InteractionCounts",
    "InteractionKey",
    "ListingTag",
    "ListingText",
    "ListingType",
    "OrderInteraction",
    "SearchEvent",
    "SearchFilters",
    "Taxonomy",
    "UserContext",
    "ViewInteraction",
    "parse_interactions",
]
