"""
Unified Tag Ranker

Tag-based search across products, store products and services in one pool.
"""
import logging
from typing import List, Optional, Sequence, Tuple

from bozor.core.config import settings
from bozor.schemas import DEFAULT_TAG_WEIGHT, ListingText

from ..concurrency import score_concurrently
from .schemas import TagSearchResult

logger = logging.getLogger(__name__)

MAX_EXPLANATIONS = 3


class UnifiedTagRanker:
    """Scores listings by weighted tag overlap with text fallbacks"""

    EXACT_TAG = 100.0
    PARTIAL_TAG = 20.0
    TITLE_MATCH = 30.0
    DESCRIPTION_MATCH = 10.0

    def __init__(self, max_workers: Optional[int] = None):
        self.max_workers = settings.scoring_workers if max_workers is None else max_workers
        logger.info("UnifiedTagRanker initialized")

    def score_listing(self, query_tags: Sequence[str], listing: ListingText) -> Tuple[float, List[str]]:
        """
        Score one listing against the query tags.

        Exact tag hits score 100 * tag weight, a zero weight counting as the
        default 0.7. Query tags without an exact hit score 20 for every
        listing tag that contains or is contained in them.
        Independently, each query tag found in the title scores 30, else one
        found in the description scores 10.

        Returns:
            (score, explanations) with explanations in generation order
        """
        queries = [tag.lower() for tag in query_tags if tag]
        listing_tags = [(tag.value.lower(), tag.weight) for tag in listing.tags]
        tag_values = {value for value, _ in listing_tags}

        score = 0.0
        explanations = []

        for query in queries:
            for value, weight in listing_tags:
                if value == query:
                    score += self.EXACT_TAG * (weight or DEFAULT_TAG_WEIGHT)
                    explanations.append(f"Exact tag: {query}")
                    break

        for query in queries:
            if query in tag_values:
                continue
            partial = sum(1 for value, _ in listing_tags if value and (query in value or value in query))
            if partial:
                score += self.PARTIAL_TAG * partial
                explanations.append(f"Partial match: {query}")

        title = listing.title.lower()
        description = listing.description.lower()
        for query in queries:
            if query in title:
                score += self.TITLE_MATCH
                explanations.append(f"Title match: {query}")
            elif query in description:
                score += self.DESCRIPTION_MATCH
                explanations.append(f"Description match: {query}")

        return score, explanations[:MAX_EXPLANATIONS]

    def rank(
        self,
        query_tags: Sequence[str],
        listings: Sequence[ListingText],
        limit: Optional[int] = None,
    ) -> List[TagSearchResult]:
        """
        Rank a mixed pool of listings for a set of query tags.

        Args:
            query_tags: Tags already extracted and normalized from the query
            listings: Candidate pool of any listing type
            limit: Maximum number of results, None for all

        Returns:
            Matching listings (score > 0), highest score first, ties in pool order
        """
        if not query_tags or not listings:
            return []

        scores = score_concurrently(lambda listing: self.score_listing(query_tags, listing), listings, self.max_workers)

        matched = [
            (listing, score, explanations)
            for listing, (score, explanations) in zip(listings, scores)
            if score > 0
        ]
        matched.sort(key=lambda item: item[1], reverse=True)
        if limit is not None:
            matched = matched[:limit]

        logger.debug(f"Tag search {list(query_tags)} matched {len(matched)} of {len(listings)} listings")
        return [
            TagSearchResult(
                listing_id=listing.id,
                listing_type=listing.listing_type,
                score=score,
                rank=position,
                explanation=explanations,
            )
            for position, (listing, score, explanations) in enumerate(matched, start=1)
        ]
