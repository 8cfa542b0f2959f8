"""
Recommendation Engine Core

Main orchestration class for listing recommendations.
"""
import logging
import math
from datetime import datetime
from typing import List, Optional, Sequence

from bozor.core.config import settings
from bozor.core.exceptions import ListingNotFound
from bozor.schemas import ListingText, SearchFilters

from ..concurrency import fetch_or_raise
from ..protocols import ListingSource
from .schemas import SimilarityScore
from .similarity_service import SimilarityRecommender

logger = logging.getLogger(__name__)


class RecommendationEngine:
    """
    Main Recommendation Engine

    Fetches the candidate pool once per request and delegates scoring to the
    SimilarityRecommender.
    """

    def __init__(self, listing_source: ListingSource, recommender: Optional[SimilarityRecommender] = None):
        """Initialize the recommendation engine with all services"""
        self.listing_source = listing_source
        self.recommender = recommender or SimilarityRecommender()

        logger.info("RecommendationEngine initialized with all services")

    async def get_similar(self, listing_id: str, limit: Optional[int] = None) -> List[SimilarityScore]:
        """
        Similar listings for a listing page

        Args:
            listing_id: Listing the user is looking at
            limit: Maximum number of recommendations

        Returns:
            Recommendations, best first

        Raises:
            ListingNotFound: if the listing does not exist
            DataUnavailable: if the listing or candidate pool could not be fetched
        """
        target = await self._fetch_target(listing_id)
        pool = await self._fetch_pool(SearchFilters(category=target.category) if target.category else None)
        recommendations = self.recommender.similar_listings(target, pool, limit)
        logger.info(f"Found {len(recommendations)} similar listings for {listing_id}")
        return recommendations

    async def get_for_user(
        self,
        user_id: str,
        viewed_ids: Sequence[str],
        limit: int = 10,
    ) -> List[SimilarityScore]:
        """Recommendations from the listings a user viewed most recently"""
        if not viewed_ids:
            return []
        pool = await self._fetch_pool(None)
        viewed_set = set(viewed_ids)
        viewed = [listing for listing in pool if listing.id in viewed_set]
        return self.recommender.for_user(viewed, pool, limit, user_id=user_id)

    async def get_by_taxonomy(
        self,
        taxonomy_id: str,
        exclude_id: Optional[str] = None,
        limit: int = 8,
        category: Optional[str] = None,
    ) -> List[SimilarityScore]:
        pool = await self._fetch_pool(SearchFilters(category=category) if category else None)
        return self.recommender.by_taxonomy(taxonomy_id, pool, exclude_id, limit, category=category)

    async def you_may_also_like(
        self,
        listing_id: str,
        user_id: Optional[str] = None,
        viewed_ids: Optional[Sequence[str]] = None,
        limit: Optional[int] = None,
    ) -> List[SimilarityScore]:
        """
        Blend of taxonomy, personal and similar-listing recommendations

        Up to 60% of the slots come from the listing's taxonomy and up to 40%
        from the user's viewing history; remaining slots are filled with
        similar listings. Duplicates keep their first occurrence.
        """
        limit = settings.similar_limit if limit is None else limit
        target = await self._fetch_target(listing_id)
        pool = await self._fetch_pool(None)

        results: List[SimilarityScore] = []
        seen = {listing_id}

        def add(recommendations: List[SimilarityScore]) -> None:
            for recommendation in recommendations:
                if recommendation.candidate_id not in seen:
                    seen.add(recommendation.candidate_id)
                    results.append(recommendation)

        if target.taxonomy and target.taxonomy.id:
            add(
                self.recommender.by_taxonomy(
                    target.taxonomy.id, pool, listing_id, math.ceil(limit * 0.6), category=target.category
                )
            )

        if user_id and viewed_ids:
            viewed_set = set(viewed_ids)
            viewed = [listing for listing in pool if listing.id in viewed_set]
            add(self.recommender.for_user(viewed, pool, math.ceil(limit * 0.4), user_id=user_id))

        remaining = limit - len(results)
        if remaining > 0:
            similar = self.recommender.similar_listings(target, pool, len(pool))
            add([recommendation for recommendation in similar if recommendation.candidate_id not in seen][:remaining])

        results.sort(key=lambda recommendation: recommendation.score, reverse=True)
        return results[:limit]

    async def trending(self, category: str, limit: int = 6, now: Optional[datetime] = None) -> List[str]:
        pool = await self._fetch_pool(SearchFilters(category=category))
        return self.recommender.trending_in_category(category, pool, limit, now)

    async def _fetch_target(self, listing_id: str) -> ListingText:
        target = await fetch_or_raise("listing", self.listing_source.fetch_listing(listing_id))
        if target is None:
            raise ListingNotFound(listing_id)
        return target

    async def _fetch_pool(self, filters: Optional[SearchFilters]) -> List[ListingText]:
        return await fetch_or_raise("listing pool", self.listing_source.fetch_active_listings(filters))
