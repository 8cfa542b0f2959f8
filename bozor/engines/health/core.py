"""
Listing Health Service Core

Orchestrates bulk counter fetches for health scoring and rank tracking for
the seller dashboard.
"""
import asyncio
import logging
from typing import Dict, List, Optional, Sequence

from bozor.core.exceptions import ListingNotFound
from bozor.schemas import ListingText

from ..concurrency import fetch_or_raise
from ..protocols import InteractionSource, ListingSource, RankHistorySource
from .health_score import HealthScoreEngine
from .rank_tracker import RankHistory, RankTracker
from .schemas import HealthScore, RankInfo, RankRecord

logger = logging.getLogger(__name__)


class ListingHealthService:
    """
    Seller dashboard service

    Health scores are computed from a single bulk counter fetch per batch.
    Rank reports compare against an external history source when one is
    configured and against the service's own in-memory history otherwise.
    """

    def __init__(
        self,
        listing_source: ListingSource,
        interaction_source: InteractionSource,
        history_source: Optional[RankHistorySource] = None,
        engine: Optional[HealthScoreEngine] = None,
        tracker: Optional[RankTracker] = None,
    ):
        self.listing_source = listing_source
        self.interaction_source = interaction_source
        self.history_source = history_source
        self.engine = engine or HealthScoreEngine()
        self.tracker = tracker or RankTracker()
        self.history = RankHistory()

        logger.info("ListingHealthService initialized")

    async def score_listings(self, listings: Sequence[ListingText]) -> Dict[str, HealthScore]:
        """
        Health scores for a batch of listings

        Raises:
            DataUnavailable: if the interaction counters could not be fetched
        """
        if not listings:
            return {}
        keys = [(listing.id, listing.listing_type) for listing in listings]
        counts = await fetch_or_raise("interaction counters", self.interaction_source.fetch_counts(keys))
        return self.engine.score_many(listings, counts)

    async def score_listing(self, listing_id: str) -> HealthScore:
        listing = await self._fetch_listing(listing_id)
        scores = await self.score_listings([listing])
        return scores[listing.id]

    async def rank_report(self, listing_id: str, queries: Optional[Sequence[str]] = None) -> List[RankInfo]:
        """
        Current rank of a listing for each query, with drop detection

        Args:
            listing_id: Tracked listing
            queries: Queries to check; defaults to the listing's top tags

        Returns:
            One RankInfo per usable query

        Raises:
            ListingNotFound: if the listing does not exist
            DataUnavailable: if the listing, pool or rank history could not be fetched
        """
        listing = await self._fetch_listing(listing_id)
        pool = await fetch_or_raise("listing pool", self.listing_source.fetch_active_listings(None))
        queries = list(queries) if queries else self.tracker.default_queries(listing)

        history = await self._previous_ranks(listing.id, queries)
        infos = self.tracker.track(listing, pool, queries, history)
        self.tracker.record(infos, self.history)

        drops = sum(1 for info in infos if info.is_drop)
        logger.info(f"Rank report for {listing_id}: {len(infos)} queries, {drops} drops")
        return infos

    async def _previous_ranks(self, entity_id: str, queries: Sequence[str]) -> RankHistory:
        if self.history_source is None:
            return self.history

        ranks = await fetch_or_raise(
            "rank history",
            asyncio.gather(*(self.history_source.previous_rank(entity_id, query) for query in queries)),
        )
        return RankHistory(
            RankRecord(query=query, entity_id=entity_id, rank=rank)
            for query, rank in zip(queries, ranks)
            if rank is not None
        )

    async def _fetch_listing(self, listing_id: str) -> ListingText:
        listing = await fetch_or_raise("listing", self.listing_source.fetch_listing(listing_id))
        if listing is None:
            raise ListingNotFound(listing_id)
        return listing
