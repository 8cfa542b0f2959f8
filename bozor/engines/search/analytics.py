"""
Search Analytics

Pure aggregations over recorded ``SearchEvent``s: popular and recent
queries, queries that found nothing, and autocomplete suggestions.

Events are only recorded for searches that completed, so a zero
``result_count`` always means "no listing matched" and never an outage.
"""
import math
from collections import Counter
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from bozor.schemas import SearchEvent

from .ranking_service import as_utc
from .schemas import PopularSearch, SearchSuggestion
from .text_normalizer import normalize_text

MIN_AUTOCOMPLETE_LENGTH = 2
MIN_DYNAMIC_POPULAR = 5

RECENT_SCORE = 100.0
BRAND_SCORE = 80.0
CATEGORY_SCORE = 70.0
POPULAR_SCORE = 60.0

POPULAR_BRANDS = (
    "Nike", "Adidas", "Puma", "Reebok", "New Balance", "Zara", "H&M",
    "Samsung", "iPhone", "Xiaomi", "Nexia", "Lacetti", "Malibu", "Cobalt",
)

# (query, category)
CATEGORY_QUERIES = (
    ("krossovka", "clothing"),
    ("futbolka", "clothing"),
    ("jinsi", "clothing"),
    ("kurtka", "clothing"),
    ("sport forma", "clothing"),
    ("telefon", "electronics"),
    ("noutbuk", "electronics"),
    ("televizor", "electronics"),
    ("mashina", "automotive"),
    ("kvartira", "realestate"),
)

# Used until enough searches have been recorded
DEFAULT_POPULAR_SEARCHES = (
    PopularSearch(query="krossovka", count=1000, avg_results=50),
    PopularSearch(query="futbolka", count=800, avg_results=100),
    PopularSearch(query="jinsi", count=750, avg_results=80),
    PopularSearch(query="nike", count=600, avg_results=30),
    PopularSearch(query="adidas", count=550, avg_results=25),
    PopularSearch(query="sport forma", count=400, avg_results=40),
    PopularSearch(query="telefon", count=900, avg_results=60),
    PopularSearch(query="nexia", count=700, avg_results=20),
    PopularSearch(query="kvartira", count=500, avg_results=30),
    PopularSearch(query="laptop", count=450, avg_results=25),
)


def _newest_first(events: Iterable[SearchEvent]) -> List[SearchEvent]:
    return sorted(events, key=lambda event: as_utc(event.searched_at), reverse=True)


def _dedupe(queries: Iterable[str]) -> List[str]:
    """Keep the first query of every normalized form"""
    seen = set()
    unique = []
    for query in queries:
        key = normalize_text(query)
        if key in seen:
            continue
        seen.add(key)
        unique.append(query)
    return unique


def popular_queries(search_queries: Iterable[Optional[str]], limit: int = 10) -> List[str]:
    """Most frequent non-empty search queries, most frequent first"""
    counts = Counter(query.strip() for query in search_queries if query and query.strip())
    return [query for query, _ in counts.most_common(limit)]


def popular_searches(
    events: Iterable[SearchEvent],
    limit: int = 10,
    since: Optional[datetime] = None,
) -> List[PopularSearch]:
    """
    Search volume per normalized query, highest count first.

    Args:
        events: Recorded searches
        limit: Maximum number of queries returned
        since: Only count searches at or after this moment

    Returns:
        The aggregated queries, or the built-in list when fewer than five
        distinct queries were searched
    """
    stats: Dict[str, Tuple[int, int]] = {}
    for event in events:
        if since is not None and as_utc(event.searched_at) < as_utc(since):
            continue
        count, total_results = stats.get(event.normalized_query, (0, 0))
        stats[event.normalized_query] = (count + 1, total_results + event.result_count)

    dynamic = [
        PopularSearch(query=query, count=count, avg_results=int(math.floor(total_results / count + 0.5)))
        for query, (count, total_results) in stats.items()
    ]
    dynamic.sort(key=lambda popular: popular.count, reverse=True)
    dynamic = dynamic[:limit]

    if len(dynamic) >= MIN_DYNAMIC_POPULAR:
        return dynamic
    return list(DEFAULT_POPULAR_SEARCHES[:limit])


def recent_queries(events: Iterable[SearchEvent], limit: int = 5) -> List[str]:
    """A user's latest distinct queries, newest first"""
    return _dedupe(event.query for event in _newest_first(events))[:limit]


def zero_result_queries(events: Iterable[SearchEvent], limit: int = 20) -> List[str]:
    """
    Latest searches that matched no listing, newest first.

    The newest ``limit`` zero-result events are taken before repeats of the
    same normalized query are dropped.
    """
    misses = [event for event in _newest_first(events) if event.result_count == 0]
    return _dedupe(event.query for event in misses[:limit])


def autocomplete_suggestions(
    query: Optional[str],
    recent: Sequence[str] = (),
    popular: Optional[Sequence[PopularSearch]] = None,
    limit: int = 8,
    brands: Sequence[str] = POPULAR_BRANDS,
    category_queries: Sequence[Tuple[str, str]] = CATEGORY_QUERIES,
) -> List[SearchSuggestion]:
    """
    Suggestions for a partially typed query.

    A candidate matches when its normalized form contains the query or is
    contained in it. Recent searches score 100, brands 80, category queries
    70 and popular searches 60 plus a hundredth of their count; a popular
    search already suggested from another source is skipped.

    Args:
        query: Text typed so far; fewer than two characters gives nothing
        recent: The user's recent queries, newest first
        popular: Popular searches; defaults to the built-in list
        limit: Maximum number of suggestions

    Returns:
        Suggestions ordered by score, one per normalized form
    """
    if not query or len(query) < MIN_AUTOCOMPLETE_LENGTH:
        return []

    normalized = normalize_text(query)
    if not normalized:
        return []

    def matches(candidate: str) -> bool:
        candidate = normalize_text(candidate)
        return bool(candidate) and (normalized in candidate or candidate in normalized)

    suggestions = [SearchSuggestion(query=q, score=RECENT_SCORE, type="recent") for q in recent if matches(q)]
    suggestions += [SearchSuggestion(query=b, score=BRAND_SCORE, type="brand") for b in brands if matches(b)]
    suggestions += [
        SearchSuggestion(query=q, score=CATEGORY_SCORE, type="category") for q, _ in category_queries if matches(q)
    ]

    suggested = {normalize_text(suggestion.query) for suggestion in suggestions}
    for search in DEFAULT_POPULAR_SEARCHES if popular is None else popular:
        if matches(search.query) and normalize_text(search.query) not in suggested:
            suggestions.append(
                SearchSuggestion(query=search.query, score=POPULAR_SCORE + search.count / 100, type="popular")
            )

    suggestions.sort(key=lambda suggestion: suggestion.score, reverse=True)
    unique = {}
    for suggestion in suggestions:
        unique.setdefault(normalize_text(suggestion.query), suggestion)
    return list(unique.values())[:limit]
