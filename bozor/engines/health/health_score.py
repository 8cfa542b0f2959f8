"""
Listing health score service.

Weighted, type-specific model for how well a listing converts and how
complete it is:

    SCORE = conversion + engagement + completeness + ranking   (0-100)

Services convert through a click -> contact -> order funnel; products and
store products convert directly from views to orders.
"""
import logging
import math
from typing import Dict, Iterable, Mapping, Optional

from bozor.schemas import InteractionCounts, InteractionKey, ListingText

from .schemas import HealthFactors, HealthScore, HealthStatus, HealthWeights

logger = logging.getLogger(__name__)

HEALTH_RULES: Dict[str, HealthWeights] = {
    "service": HealthWeights(conversion=30, engagement=30, completeness=20, ranking=20),
    "product": HealthWeights(conversion=35, engagement=25, completeness=20, ranking=20),
    "store_product": HealthWeights(conversion=35, engagement=25, completeness=20, ranking=20),
}

ENGAGEMENT_CAP = 30.0
COMPLETENESS_CAP = 20.0
# Constant until live rank data feeds the ranking factor
RANKING_PLACEHOLDER = 10.0

HEALTHY_THRESHOLD = 70
NEEDS_IMPROVEMENT_THRESHOLD = 40
MIN_TAGS = 3
MIN_DESCRIPTION_LENGTH = 50


def status_for(score: float) -> HealthStatus:
    if score >= HEALTHY_THRESHOLD:
        return "healthy"
    if score >= NEEDS_IMPROVEMENT_THRESHOLD:
        return "needs_improvement"
    return "critical"


def _ratio(numerator: int, denominator: int) -> float:
    return numerator / denominator if denominator > 0 else 0.0


class HealthScoreEngine:
    """Scores listing health from interaction counters and listing content"""

    def __init__(self, rules: Optional[Mapping[str, HealthWeights]] = None):
        self.rules = dict(rules or HEALTH_RULES)
        logger.info("HealthScoreEngine initialized")

    def calculate_conversion(self, listing: ListingText, counts: InteractionCounts) -> float:
        max_score = self.rules[listing.listing_type].conversion
        if listing.listing_type == "service":
            click_rate = _ratio(counts.clicks, counts.views)
            contact_rate = _ratio(counts.contacts, counts.clicks)
            order_rate = _ratio(counts.orders, counts.contacts)
            score = (click_rate * 0.3 + contact_rate * 0.4 + order_rate * 0.3) * max_score
        else:
            score = _ratio(counts.orders, counts.views) * max_score
        return min(max_score, score)

    def calculate_engagement(self, listing: ListingText, counts: InteractionCounts) -> float:
        # Listing view counter first; interaction views when the counter is not maintained
        views = listing.view_count or counts.views
        if views == 0:
            return 0.0
        return min(ENGAGEMENT_CAP, counts.clicks / views * 100)

    def calculate_completeness(self, listing: ListingText) -> float:
        score = 0.0

        title_length = len(listing.title)
        if title_length >= 10:
            score += 5
        elif title_length >= 5:
            score += 3

        description_length = len(listing.description)
        if description_length >= 100:
            score += 5
        elif description_length >= 50:
            score += 3
        elif description_length > 0:
            score += 1

        if listing.image_url:
            score += 5

        tag_count = len(listing.tags)
        if tag_count >= 5:
            score += 5
        elif tag_count >= 3:
            score += 3
        elif tag_count >= 1:
            score += 1

        return min(COMPLETENESS_CAP, score)

    def calculate(self, listing: ListingText, counts: Optional[InteractionCounts] = None) -> HealthScore:
        """
        Health score for one listing.

        Args:
            listing: Listing to score
            counts: Aggregated interactions; None is treated as no interactions

        Returns:
            HealthScore with the rounded score, status, factors and advice
        """
        counts = counts or InteractionCounts()
        weights = self.rules[listing.listing_type]

        factors = HealthFactors(
            conversion=self.calculate_conversion(listing, counts),
            engagement=self.calculate_engagement(listing, counts),
            completeness=self.calculate_completeness(listing),
            ranking=RANKING_PLACEHOLDER,
        )

        recommendations = []
        if factors.conversion < weights.conversion * 0.5:
            recommendations.append("Konversiya darajasi past - title va taglarni yaxshilang")
        if len(listing.tags) < MIN_TAGS:
            recommendations.append(f"{MIN_TAGS - len(listing.tags)} ta tag qo'shing - qidiruv natijalarini yaxshilash")
        if not listing.image_url:
            recommendations.append("Rasm qo'shing - ko'rishlar 2x oshadi")
        if len(listing.description) < MIN_DESCRIPTION_LENGTH:
            recommendations.append("Tavsifni kengaytiring - foydalanuvchilar ishonchi oshadi")

        # Halves round up
        score = max(0, min(100, int(math.floor(factors.total + 0.5))))
        return HealthScore(
            listing_id=listing.id,
            score=score,
            status=status_for(score),
            factors=factors,
            recommendations=recommendations,
        )

    def score_many(
        self,
        listings: Iterable[ListingText],
        counts: Mapping[InteractionKey, InteractionCounts],
    ) -> Dict[str, HealthScore]:
        """Score a batch of listings against counters fetched in one bulk call"""
        scores = {
            listing.id: self.calculate(listing, counts.get((listing.id, listing.listing_type)))
            for listing in listings
        }
        logger.info(f"Calculated health scores for {len(scores)} listings")
        return scores
