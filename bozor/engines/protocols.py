"""
Collaborator interfaces the engines depend on.

Implementations live outside the core (database repositories, analytics
pipelines, caches). Every method is async. Pools and counters are fetched
once per request, rank history once per tracked query; failures are
surfaced to callers as ``DataUnavailable``.
"""
from typing import Dict, List, Optional, Protocol, Sequence

from bozor.schemas import InteractionCounts, InteractionKey, ListingText, SearchEvent, SearchFilters


class ListingSource(Protocol):
    async def fetch_active_listings(self, filters: Optional[SearchFilters] = None) -> List[ListingText]:
        """Return the candidate pool, optionally pre-filtered"""
        ...

    async def fetch_listing(self, listing_id: str) -> Optional[ListingText]:
        ...


class InteractionSource(Protocol):
    async def fetch_counts(self, keys: Sequence[InteractionKey]) -> Dict[InteractionKey, InteractionCounts]:
        """Bulk counter lookup; keys without interactions may be omitted"""
        ...


class RankHistorySource(Protocol):
    async def previous_rank(self, entity_id: str, query: str) -> Optional[int]:
        ...


class SearchEventSink(Protocol):
    async def record(self, event: SearchEvent) -> None:
        ...
