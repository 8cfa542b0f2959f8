"""
Deterministic, explainable listing ranking service.

Scoring Formula:
    TOTAL =
        boosted          (1000 while a paid boost is active, else 0)  +
        popularity       (views and favorites, <= 100)                +
        relevance        (user category preference and searches, <= 50) +
        recency          (age step function, <= 10)                   +
        distance         (linear falloff inside the radius, <= 50)    +
        text_relevance   (query relevance, capped)

Every non-boosted total stays below 1000, so an active boost always wins.
Ties keep their input order (stable sort).
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Sequence

from bozor.core.config import settings
from bozor.schemas import ListingText, UserContext

from .schemas import RankedResult, RankingFactors

logger = logging.getLogger(__name__)


def as_utc(moment: datetime) -> datetime:
    """Treat naive datetimes as UTC"""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


class ListingRanker:
    """Combines boost, popularity, recency, distance and personalization signals"""

    BOOST_SCORE = 1000.0
    PERSONALIZATION_BOOST = 50.0

    # (max age, points), checked in order
    RECENCY_STEPS = [
        (timedelta(hours=24), 10.0),
        (timedelta(hours=48), 8.0),
        (timedelta(hours=72), 5.0),
    ]
    RECENCY_FLOOR = 2.0

    def __init__(self, text_relevance_cap: Optional[float] = None, default_max_radius: Optional[float] = None):
        self.text_relevance_cap = settings.text_relevance_cap if text_relevance_cap is None else text_relevance_cap
        self.default_max_radius = settings.default_max_radius if default_max_radius is None else default_max_radius
        logger.info("ListingRanker initialized")

    # ==================== Factors ====================

    def is_boost_active(self, listing: ListingText, now: datetime) -> bool:
        return bool(
            listing.is_boosted
            and listing.boosted_until is not None
            and as_utc(listing.boosted_until) > now
        )

    def calculate_boosted(self, listing: ListingText, now: datetime) -> float:
        return self.BOOST_SCORE if self.is_boost_active(listing, now) else 0.0

    def calculate_popularity(self, listing: ListingText) -> float:
        views_score = min(listing.view_count / 10, 100)
        favorites_score = min(listing.favorite_count * 10, 100)
        return views_score * 0.6 + favorites_score * 0.4

    def calculate_recency(self, listing: ListingText, now: datetime) -> float:
        age = now - as_utc(listing.created_at)
        for max_age, points in self.RECENCY_STEPS:
            if age < max_age:
                return points
        return self.RECENCY_FLOOR

    def calculate_distance(self, distance: Optional[float], max_radius: Optional[float] = None) -> float:
        """Linear falloff from 50 at the searcher's location to 0 at the radius edge"""
        max_radius = self.default_max_radius if max_radius is None else max_radius
        if distance is None or max_radius <= 0:
            return 0.0
        return max(0.0, 50 * (1 - distance / max_radius))

    def calculate_relevance(self, listing: ListingText, user: Optional[UserContext]) -> float:
        if user is None:
            return 0.0
        preference_score = min(user.category_preference(listing.category) * 3, 30)
        search_score = min(self._matched_searches(listing, user) * 5, 20)
        return preference_score + search_score

    def personalization_boost(self, listing: ListingText, user: Optional[UserContext]) -> float:
        if user is None:
            return 0.0
        if user.category_preference(listing.category) > 5 or self._matched_searches(listing, user) > 0:
            return self.PERSONALIZATION_BOOST
        return 0.0

    def _matched_searches(self, listing: ListingText, user: UserContext) -> int:
        text = f"{listing.title} {listing.description}".lower()
        return sum(1 for term in user.recent_searches if term and term.lower() in text)

    # ==================== Ranking ====================

    def score_listing(
        self,
        listing: ListingText,
        user: Optional[UserContext] = None,
        max_radius: Optional[float] = None,
        now: Optional[datetime] = None,
        text_relevance: float = 0.0,
    ) -> RankingFactors:
        now = as_utc(now) if now else datetime.now(timezone.utc)
        return RankingFactors(
            boosted=self.calculate_boosted(listing, now),
            popularity=self.calculate_popularity(listing),
            recency=self.calculate_recency(listing, now),
            distance=self.calculate_distance(listing.distance, max_radius),
            relevance=self.calculate_relevance(listing, user),
            text_relevance=min(max(text_relevance, 0.0), self.text_relevance_cap),
        )

    def rank(
        self,
        listings: Sequence[ListingText],
        user: Optional[UserContext] = None,
        max_radius: Optional[float] = None,
        now: Optional[datetime] = None,
        text_scores: Optional[Dict[str, float]] = None,
    ) -> List[RankedResult]:
        """
        Rank listings by total score, highest first.

        Args:
            listings: Candidate listings in their pre-sort order
            user: Signed-in user for preference relevance, None for anonymous
            max_radius: Distance falloff radius in km
            now: Reference time for boost expiry and recency
            text_scores: Listing id -> query relevance from RelevanceScorer

        Returns:
            Ranked results; equal totals keep their input order
        """
        now = as_utc(now) if now else datetime.now(timezone.utc)
        text_scores = text_scores or {}

        scored = []
        for listing in listings:
            factors = self.score_listing(listing, user, max_radius, now, text_scores.get(listing.id, 0.0))
            scored.append((listing.id, factors.base_total, factors))

        scored.sort(key=lambda item: item[1], reverse=True)

        return [
            RankedResult(id=listing_id, total_score=total, rank=position, factors=factors)
            for position, (listing_id, total, factors) in enumerate(scored, start=1)
        ]

    def rank_personalized(
        self,
        listings: Sequence[ListingText],
        user: Optional[UserContext],
        max_radius: Optional[float] = None,
        now: Optional[datetime] = None,
        text_scores: Optional[Dict[str, float]] = None,
    ) -> List[RankedResult]:
        """
        Re-rank the base order for a known user.

        The base ranking is re-sorted by (1000 if boost active) + personalization
        boost, so personalization only reorders listings within the same boost
        tier and otherwise keeps the base order. ``total_score`` holds that
        sort key; the base components stay in ``factors``.
        """
        now = as_utc(now) if now else datetime.now(timezone.utc)
        base = self.rank(listings, user, max_radius, now, text_scores)
        by_id = {listing.id: listing for listing in listings}

        personalized = []
        for result in base:
            boost = self.personalization_boost(by_id[result.id], user)
            factors = result.factors.model_copy(update={"personalization": boost})
            key = (self.BOOST_SCORE if factors.boosted > 0 else 0.0) + boost
            personalized.append((result.id, key, factors))

        personalized.sort(key=lambda item: item[1], reverse=True)

        return [
            RankedResult(id=listing_id, total_score=key, rank=position, factors=factors)
            for position, (listing_id, key, factors) in enumerate(personalized, start=1)
        ]

    def deals_of_day(
        self,
        listings: Sequence[ListingText],
        limit: int = 10,
        now: Optional[datetime] = None,
    ) -> List[ListingText]:
        """
        Free listings and fresh listings that are already drawing attention.

        A listing qualifies when it is free, or was posted in the last 24 hours
        and has more than 5 views or more than 2 favorites. Free listings come
        first, then by views + 2 * favorites, then newest.
        """
        now = as_utc(now) if now else datetime.now(timezone.utc)
        day_ago = now - timedelta(hours=24)

        deals = [
            listing
            for listing in listings
            if listing.is_active
            and (
                listing.is_free
                or (
                    as_utc(listing.created_at) > day_ago
                    and (listing.view_count > 5 or listing.favorite_count > 2)
                )
            )
        ]
        deals.sort(
            key=lambda listing: (
                listing.is_free,
                listing.view_count + listing.favorite_count * 2,
                as_utc(listing.created_at),
            ),
            reverse=True,
        )
        return deals[:limit]
