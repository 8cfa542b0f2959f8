"""
Similarity Recommender

Item-to-item similarity ("similar listings"), interest-profile
recommendations for a user and taxonomy-based recommendations.

Scores are additive points with Uzbek reason strings shown to buyers.
Similarity never crosses categories: a candidate from another category
scores 0.
"""
import logging
import math
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence

from bozor.core.config import settings
from bozor.schemas import ListingText

from ..concurrency import score_concurrently
from ..search.brand_normalizer import BrandNormalizer
from ..search.ranking_service import as_utc
from ..search.text_normalizer import normalize_text
from .schemas import InterestProfile, SimilarityScore

logger = logging.getLogger(__name__)

AUDIENCE_LABELS = {
    "erkaklar": "Erkaklar uchun",
    "ayollar": "Ayollar uchun",
    "bolalar": "Bolalar uchun",
    "unisex": "Unisex",
}

SEGMENT_LABELS = {
    "kiyim": "Kiyim",
    "oyoq_kiyim": "Oyoq kiyim",
    "aksessuar": "Aksessuar",
    "ichki_kiyim": "Ichki kiyim",
    "sport": "Sport kiyim",
    "milliy": "Milliy kiyim",
}


def audience_label(audience: str) -> str:
    return AUDIENCE_LABELS.get(audience, audience)


def segment_label(segment: str) -> str:
    return SEGMENT_LABELS.get(segment, segment)


def within_price_band(reference: Optional[float], candidate: Optional[float], band: float = 0.3) -> bool:
    """True when candidate is within +-band of a positive reference price"""
    if not reference or candidate is None:
        return False
    return abs(reference - candidate) / reference <= band


class SimilarityRecommender:
    """Scores candidate listings against a reference listing, user or taxonomy"""

    # Tagged path
    CATEGORY_MATCH = 20.0
    BRAND_MATCH = 35.0
    AUDIENCE_MATCH = 15.0
    SEGMENT_MATCH = 20.0
    LABEL_MATCH = 25.0
    TAG_POINTS = 8.0
    TAG_CAP = 30.0
    PRICE_MATCH = 10.0
    COLOR_MATCH = 5.0

    # Fallback path (listings without structured data)
    FALLBACK_CATEGORY = 30.0
    FALLBACK_KEYWORD_POINTS = 5.0
    FALLBACK_KEYWORD_CAP = 40.0
    FALLBACK_PRICE_MATCH = 20.0
    FALLBACK_PRICE_PENALTY_CAP = 10.0
    FALLBACK_TITLE_WORD = 10.0
    FALLBACK_MAX_KEYWORDS = 15

    def __init__(self, brand_normalizer: Optional[BrandNormalizer] = None, max_workers: Optional[int] = None):
        self.brand_normalizer = brand_normalizer or BrandNormalizer()
        self.max_workers = settings.scoring_workers if max_workers is None else max_workers
        logger.info("SimilarityRecommender initialized")

    # ==================== Item to item ====================

    def similarity(self, target: ListingText, candidate: ListingText) -> SimilarityScore:
        """
        Structured similarity between two listings.

        Args:
            target: Listing the user is looking at
            candidate: Listing that may be recommended next to it

        Returns:
            SimilarityScore; score 0 with no reasons when categories differ
        """
        if target.category != candidate.category:
            return SimilarityScore(source_id=target.id, candidate_id=candidate.id, score=0, reasons=[])

        score = self.CATEGORY_MATCH
        reasons = ["Bir xil kategoriya"]

        if target.brand and candidate.brand:
            target_brand = self.brand_normalizer.normalize_brand(target.brand)
            candidate_brand = self.brand_normalizer.normalize_brand(candidate.brand)
            if target_brand == candidate_brand:
                score += self.BRAND_MATCH
                reasons.append(f"{candidate_brand} brendi")

        if target.taxonomy and candidate.taxonomy:
            t_tax, c_tax = target.taxonomy, candidate.taxonomy
            if t_tax.audience and t_tax.audience == c_tax.audience:
                score += self.AUDIENCE_MATCH
                reasons.append(audience_label(t_tax.audience))
            if t_tax.segment and t_tax.segment == c_tax.segment:
                score += self.SEGMENT_MATCH
                reasons.append(segment_label(t_tax.segment))
            if t_tax.label_uz and t_tax.label_uz == c_tax.label_uz:
                score += self.LABEL_MATCH
                reasons.append(c_tax.label_uz)

        if target.tags and candidate.tags:
            target_tags = {normalize_text(tag) for tag in target.tag_values}
            matching = sum(1 for tag in candidate.tag_values if normalize_text(tag) in target_tags)
            if matching > 0:
                score += min(matching * self.TAG_POINTS, self.TAG_CAP)
                reasons.append(f"{matching} ta mos tag")

        if within_price_band(target.price, candidate.price):
            score += self.PRICE_MATCH
            reasons.append("O'xshash narx")

        if target.colors and candidate.colors:
            target_colors = {normalize_text(color) for color in target.colors}
            if any(normalize_text(color) in target_colors for color in candidate.colors):
                score += self.COLOR_MATCH
                reasons.append("O'xshash rang")

        return SimilarityScore(source_id=target.id, candidate_id=candidate.id, score=score, reasons=reasons)

    def fallback_similarity(self, target: ListingText, candidate: ListingText) -> float:
        """
        Keyword and price similarity for listings without tags, taxonomy or brand.

        May be negative when the candidate's price is far from the target's.
        """
        if target.category != candidate.category:
            return 0.0

        score = self.FALLBACK_CATEGORY

        text = normalize_text(f"{candidate.title} {candidate.description}")
        keywords = self._reference_keywords(target)
        matching = sum(1 for keyword in keywords if keyword in text)
        score += min(matching * self.FALLBACK_KEYWORD_POINTS, self.FALLBACK_KEYWORD_CAP)

        if candidate.price:
            reference_price = target.price or 0
            difference = abs(candidate.price - reference_price)
            if difference <= reference_price * 0.3:
                score += self.FALLBACK_PRICE_MATCH
            elif reference_price > 0:
                score -= min(difference / reference_price, self.FALLBACK_PRICE_PENALTY_CAP)
            else:
                score -= self.FALLBACK_PRICE_PENALTY_CAP

        title_words = normalize_text(target.title).split(" ")
        if title_words[0] and title_words[0] in text:
            score += self.FALLBACK_TITLE_WORD

        return score

    def _reference_keywords(self, target: ListingText) -> List[str]:
        words = normalize_text(f"{target.title} {target.description}").split(" ")
        return [word for word in words if len(word) > 2][: self.FALLBACK_MAX_KEYWORDS]

    @staticmethod
    def has_structured_data(listing: ListingText) -> bool:
        return bool(listing.tags or listing.taxonomy or listing.brand)

    def similar_listings(
        self,
        target: ListingText,
        pool: Sequence[ListingText],
        limit: Optional[int] = None,
    ) -> List[SimilarityScore]:
        """
        Most similar active listings to a target, best first.

        Uses structured similarity when the target has tags, taxonomy or a
        brand and keyword similarity otherwise. The target itself, inactive
        listings and non-positive scores are excluded.
        """
        limit = settings.similar_limit if limit is None else limit
        candidates = [listing for listing in pool if listing.id != target.id and listing.is_active]

        if self.has_structured_data(target):
            scored = score_concurrently(lambda c: self.similarity(target, c), candidates, self.max_workers)
        else:
            points = score_concurrently(lambda c: self.fallback_similarity(target, c), candidates, self.max_workers)
            scored = [
                SimilarityScore(source_id=target.id, candidate_id=c.id, score=p, reasons=[])
                for c, p in zip(candidates, points)
                if p > 0
            ]

        results = [result for result in scored if result.score > 0]
        results.sort(key=lambda result: result.score, reverse=True)
        return results[:limit]

    # ==================== User interests ====================

    def build_interest_profile(self, viewed: Sequence[ListingText]) -> InterestProfile:
        profile = InterestProfile()
        for listing in viewed:
            profile.categories[listing.category] = profile.categories.get(listing.category, 0) + 1
            if listing.brand:
                brand = self.brand_normalizer.normalize_brand(listing.brand)
                profile.brands[brand] = profile.brands.get(brand, 0) + 1
            for tag in listing.tag_values:
                key = normalize_text(tag)
                profile.tags[key] = profile.tags.get(key, 0) + 1
            if listing.price:
                profile.price_min = min(profile.price_min, listing.price)
                profile.price_max = max(profile.price_max, listing.price)
        return profile

    def for_user(
        self,
        viewed: Sequence[ListingText],
        pool: Sequence[ListingText],
        limit: int = 10,
        user_id: str = "user",
    ) -> List[SimilarityScore]:
        """
        Recommendations from a user's recently viewed listings.

        Candidates come from the user's three most viewed categories and
        exclude listings already viewed.
        """
        if not viewed:
            return []

        profile = self.build_interest_profile(viewed)
        top_categories = set(profile.top_categories(3))
        viewed_ids = {listing.id for listing in viewed}
        candidates = [
            listing
            for listing in pool
            if listing.is_active and listing.category in top_categories and listing.id not in viewed_ids
        ]

        scored = score_concurrently(lambda c: self._score_interest(profile, c, user_id), candidates, self.max_workers)
        results = [result for result in scored if result.score > 0]
        results.sort(key=lambda result: result.score, reverse=True)
        return results[:limit]

    def _score_interest(self, profile: InterestProfile, candidate: ListingText, user_id: str) -> SimilarityScore:
        score = 0.0
        reasons = []

        category_interest = profile.categories.get(candidate.category, 0)
        if category_interest > 0:
            score += category_interest * 10
            reasons.append("Siz qiziqgan kategoriya")

        if candidate.brand:
            brand = self.brand_normalizer.normalize_brand(candidate.brand)
            brand_interest = profile.brands.get(brand, 0)
            if brand_interest > 0:
                score += brand_interest * 15
                reasons.append(f"{brand} brendi")

        tag_matches = sum(1 for tag in candidate.tag_values if normalize_text(tag) in profile.tags)
        if tag_matches > 0:
            score += tag_matches * 5
            reasons.append(f"{tag_matches} ta mos tag")

        if (
            candidate.price
            and not math.isinf(profile.price_min)
            and profile.price_min * 0.5 <= candidate.price <= profile.price_max * 1.5
        ):
            score += 10
            reasons.append("Sizning byudjetingizda")

        return SimilarityScore(source_id=user_id, candidate_id=candidate.id, score=score, reasons=reasons)

    # ==================== Taxonomy ====================

    def by_taxonomy(
        self,
        taxonomy_id: str,
        pool: Sequence[ListingText],
        exclude_id: Optional[str] = None,
        limit: int = 8,
        category: Optional[str] = None,
    ) -> List[SimilarityScore]:
        """
        Listings in the same part of the taxonomy as ``audience.segment.item``.

        Exact id 100, same audience and segment 60, audience only 30, segment
        only 20. A candidate that matches a tier and carries a brand gets 10
        more. With ``category`` set, other categories are skipped.
        """
        parts = taxonomy_id.split(".")
        if len(parts) < 2:
            return []
        audience, segment = parts[0], parts[1]
        item_type = parts[2] if len(parts) > 2 and parts[2] else None

        results = []
        for candidate in pool:
            if not candidate.is_active or candidate.id == exclude_id or candidate.taxonomy is None:
                continue
            if category is not None and candidate.category != category:
                continue
            tax = candidate.taxonomy
            score = 0.0
            reasons = []

            if item_type and tax.id == taxonomy_id:
                score += 100
                reasons.append(f"Aynan {tax.label_uz or 'bir xil tur'}")
            elif tax.audience == audience and tax.segment == segment:
                score += 60
                if tax.label_uz:
                    reasons.append(f"{segment_label(segment)} bo'limi")
            elif tax.audience == audience:
                score += 30
                reasons.append(audience_label(audience))
            elif tax.segment == segment:
                score += 20
                reasons.append(segment_label(segment))

            if score == 0:
                continue
            if candidate.brand:
                score += 10

            results.append(
                SimilarityScore(source_id=taxonomy_id, candidate_id=candidate.id, score=score, reasons=reasons)
            )

        results.sort(key=lambda result: result.score, reverse=True)
        return results[:limit]

    # ==================== Trending ====================

    def trending_in_category(
        self,
        category: str,
        pool: Sequence[ListingText],
        limit: int = 6,
        now: Optional[datetime] = None,
    ) -> List[str]:
        """Most viewed active listings of a category posted in the last 7 days"""
        now = as_utc(now) if now else datetime.now(timezone.utc)
        week_ago = now - timedelta(days=7)
        recent = [
            listing
            for listing in pool
            if listing.is_active and listing.category == category and as_utc(listing.created_at) >= week_ago
        ]
        recent.sort(key=lambda listing: listing.view_count, reverse=True)
        return [listing.id for listing in recent[:limit]]
