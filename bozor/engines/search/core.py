"""
Search Engine Core

Main orchestration class for free-text listing search.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional

from bozor.core.config import settings
from bozor.schemas import ListingText, SearchEvent, SearchFilters, UserContext
from bozor.vocabulary import Vocabulary, VocabularyStore

from ..concurrency import fetch_or_raise, score_concurrently
from ..protocols import ListingSource, SearchEventSink
from .brand_normalizer import BrandNormalizer
from .filtering_service import FilteringService
from .query_variations import QueryVariationBuilder
from .ranking_service import ListingRanker
from .relevance_scorer import RelevanceScorer
from .schemas import SearchResponse, TagSearchResult
from .synonym_expander import SynonymExpander
from .tag_ranker import UnifiedTagRanker
from .text_normalizer import TextNormalizer, extract_tags, normalize_text
from .typo_corrector import TypoCorrector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TextPipeline:
    """Text components bound to one vocabulary snapshot"""

    vocabulary: Vocabulary
    normalizer: TextNormalizer
    corrector: TypoCorrector
    builder: QueryVariationBuilder
    scorer: RelevanceScorer
    brands: BrandNormalizer

    @classmethod
    def build(cls, vocabulary: Vocabulary, typo_threshold: float) -> "TextPipeline":
        normalizer = TextNormalizer(vocabulary)
        corrector = TypoCorrector(vocabulary, threshold=typo_threshold)
        builder = QueryVariationBuilder(normalizer, SynonymExpander(vocabulary), corrector)
        return cls(
            vocabulary=vocabulary,
            normalizer=normalizer,
            corrector=corrector,
            builder=builder,
            scorer=RelevanceScorer(builder),
            brands=BrandNormalizer(vocabulary, normalizer),
        )


class SearchEngine:
    """
    Main Search Engine

    Orchestrates candidate fetching, filtering, text scoring and ranking to
    answer free-text queries in Uzbek (Latin or Cyrillic) and Russian.
    """

    def __init__(
        self,
        listing_source: ListingSource,
        event_sink: Optional[SearchEventSink] = None,
        vocabulary_store: Optional[VocabularyStore] = None,
        ranker: Optional[ListingRanker] = None,
        tag_ranker: Optional[UnifiedTagRanker] = None,
        max_workers: Optional[int] = None,
    ):
        """Initialize the search engine with all services"""
        self.listing_source = listing_source
        self.event_sink = event_sink
        self.vocabulary_store = vocabulary_store or VocabularyStore(path=settings.vocabulary_path)
        self.filtering_service = FilteringService()
        self.ranker = ranker or ListingRanker()
        self.max_workers = settings.scoring_workers if max_workers is None else max_workers
        self.tag_ranker = tag_ranker or UnifiedTagRanker(self.max_workers)
        self._pipeline: Optional[TextPipeline] = None

        logger.info("SearchEngine initialized with all services")

    def text_pipeline(self) -> TextPipeline:
        """
        Text components for the current vocabulary.

        Rebuilt only after the store swaps in a new vocabulary; a request keeps
        the pipeline it started with.
        """
        vocabulary = self.vocabulary_store.current
        pipeline = self._pipeline
        if pipeline is None or pipeline.vocabulary is not vocabulary:
            pipeline = TextPipeline.build(vocabulary, settings.typo_threshold)
            self._pipeline = pipeline
        return pipeline

    async def search(
        self,
        query: str,
        filters: Optional[SearchFilters] = None,
        user: Optional[UserContext] = None,
        limit: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> SearchResponse:
        """
        Search listings for a free-text query

        Args:
            query: Raw query in any supported script; empty ranks the whole pool
            filters: Structured filters applied before scoring
            user: Signed-in user for personalized ranking
            limit: Maximum number of results
            now: Reference time for boost expiry and recency

        Returns:
            SearchResponse; ``results`` is empty when nothing matched

        Raises:
            DataUnavailable: if the candidate pool could not be fetched
        """
        start_time = datetime.now()
        limit = settings.search_limit if limit is None else limit
        pipeline = self.text_pipeline()

        listings = await self._fetch_listings(filters)
        candidates = self.filtering_service.filter_listings(listings, filters)
        logger.info(f"Searching '{query}' over {len(candidates)} candidates")

        variations = pipeline.builder.build(query)
        text_scores: Dict[str, float] = {}
        if variations:
            scores = score_concurrently(
                lambda listing: pipeline.scorer.score_variations(listing, variations),
                candidates,
                self.max_workers,
            )
            matched = [(listing, score) for listing, score in zip(candidates, scores) if score > 0]
            candidates = [listing for listing, _ in matched]
            text_scores = {listing.id: score for listing, score in matched}

        max_radius = filters.max_radius if filters else settings.default_max_radius
        if user is not None:
            ranked = self.ranker.rank_personalized(candidates, user, max_radius, now, text_scores)
        else:
            ranked = self.ranker.rank(candidates, None, max_radius, now, text_scores)

        response = SearchResponse(
            query=query,
            results=ranked[:limit],
            total_found=len(ranked),
            variations=variations,
            suggested_correction=pipeline.corrector.suggest(query),
            brand_detected=pipeline.brands.detect_brand(query),
            processing_time=(datetime.now() - start_time).total_seconds(),
        )

        logger.info(
            f"Returning {len(response.results)} of {response.total_found} results "
            f"(processing time: {response.processing_time:.3f}s)"
        )

        await self._record_event(
            SearchEvent(
                query=query,
                normalized_query=normalize_text(query),
                category=filters.category if filters else None,
                result_count=response.total_found,
                user_id=user.user_id if user else None,
                brand_detected=response.brand_detected,
            )
        )
        return response

    async def search_by_tags(self, query: str, limit: Optional[int] = None) -> List[TagSearchResult]:
        """
        Unified tag search across products, store products and services

        Raises:
            DataUnavailable: if the candidate pool could not be fetched
        """
        limit = settings.search_limit if limit is None else limit
        query_tags = extract_tags(query)
        if not query_tags:
            return []

        listings = await self._fetch_listings(None)
        pool = self.filtering_service.filter_listings(listings)
        return self.tag_ranker.rank(query_tags, pool, limit)

    async def deals_of_day(self, limit: int = 10, now: Optional[datetime] = None) -> List[ListingText]:
        listings = await self._fetch_listings(None)
        return self.ranker.deals_of_day(listings, limit, now)

    async def _fetch_listings(self, filters: Optional[SearchFilters]) -> List[ListingText]:
        return await fetch_or_raise("listing pool", self.listing_source.fetch_active_listings(filters))

    async def _record_event(self, event: SearchEvent) -> None:
        # Analytics is best effort; a failed write never fails the search
        if self.event_sink is None:
            return
        try:
            await self.event_sink.record(event)
        except Exception as e:
            logger.error(f"Error recording search event: {e}", exc_info=True)
