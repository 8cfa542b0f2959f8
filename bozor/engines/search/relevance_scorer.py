"""
Relevance Scorer

Textual relevance of one listing against the variations of a query.
"""
import logging
from typing import Optional, Sequence

from bozor.schemas import ListingText

from .query_variations import QueryVariationBuilder
from .text_normalizer import normalize_text
from .typo_corrector import similarity

logger = logging.getLogger(__name__)


class RelevanceScorer:
    """
    Sums per-variation match signals for a listing's title and description.

    Each variation contributes the strongest of: exact title match (100),
    title substring (50), description substring (20) or a fuzzy title match
    worth similarity * 30 when similarity > 0.7. Contributions are summed
    across variations with no upper cap, so a listing matched by several
    variations outranks one matched by a single strong variation.
    """

    EXACT_TITLE = 100.0
    TITLE_CONTAINS = 50.0
    DESCRIPTION_CONTAINS = 20.0
    FUZZY_WEIGHT = 30.0
    FUZZY_THRESHOLD = 0.7

    def __init__(self, builder: Optional[QueryVariationBuilder] = None):
        self.builder = builder or QueryVariationBuilder()

    def score(self, listing: ListingText, query: Optional[str]) -> float:
        return self.score_variations(listing, self.builder.build(query))

    def score_variations(self, listing: ListingText, variations: Sequence[str]) -> float:
        """Score against variations built once per request"""
        title = normalize_text(listing.title)
        description = normalize_text(listing.description)

        score = 0.0
        for variation in variations:
            target = normalize_text(variation)
            if not target:
                continue
            if title == target:
                score += self.EXACT_TITLE
            elif target in title:
                score += self.TITLE_CONTAINS
            elif target in description:
                score += self.DESCRIPTION_CONTAINS
            else:
                title_similarity = similarity(title, target)
                if title_similarity > self.FUZZY_THRESHOLD:
                    score += title_similarity * self.FUZZY_WEIGHT
        return score
