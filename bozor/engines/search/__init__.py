"""
Search Engine

Handles multi-script query normalization, expansion, relevance scoring and
listing ranking.
"""

from .analytics import (
    autocomplete_suggestions,
    popular_queries,
    popular_searches,
    recent_queries,
    zero_result_queries,
)
from .brand_normalizer import BrandNormalizer
from .core import SearchEngine, TextPipeline
from .filtering_service import FilteringService
from .query_variations import QueryVariationBuilder, extract_keywords
from .ranking_service import ListingRanker
from .relevance_scorer import RelevanceScorer
from .schemas import (
    PopularSearch,
    RankedResult,
    RankingFactors,
    SearchResponse,
    SearchSuggestion,
    TagSearchResult,
)
from .synonym_expander import SynonymExpander
from .tag_ranker import UnifiedTagRanker
from .text_normalizer import TextNormalizer, extract_tags, is_cyrillic, normalize_tag, normalize_text
from .typo_corrector import TypoCorrector, levenshtein, similarity

__all__ = [
    "BrandNormalizer",
    "FilteringService",
    "ListingRanker",
    "PopularSearch",
    "QueryVariationBuilder",
    "RankedResult",
    "RankingFactors",
    "RelevanceScorer",
    "SearchEngine",
    "SearchResponse",
    "SearchSuggestion",
    "SynonymExpander",
    "TagSearchResult",
    "TextNormalizer",
    "TextPipeline",
    "TypoCorrector",
    "UnifiedTagRanker",
    "autocomplete_suggestions",
    "extract_keywords",
    "extract_tags",
    "is_cyrillic",
    "levenshtein",
    "normalize_tag",
    "normalize_text",
    "popular_queries",
    "popular_searches",
    "recent_queries",
    "similarity",
    "zero_result_queries",
]
