"""
Integration tests: search, recommendations and seller dashboard running
against in-memory collaborators
"""
from datetime import timedelta
from typing import Dict, List, Optional, Sequence

import pytest

from bozor.engines.health import ListingHealthService, RankTracker
from bozor.engines.recommendation import RecommendationEngine
from bozor.engines.search import SearchEngine, UnifiedTagRanker, popular_queries, zero_result_queries
from bozor.schemas import (
    InteractionCounts,
    InteractionKey,
    ListingText,
    SearchEvent,
    SearchFilters,
    parse_interactions,
)
from bozor.vocabulary import VocabularyStore


class InMemoryListings:
    def __init__(self, listings: Sequence[ListingText]):
        self.listings = {listing.id: listing for listing in listings}

    async def fetch_active_listings(self, filters: Optional[SearchFilters]) -> List[ListingText]:
        listings = [listing for listing in self.listings.values() if listing.is_active]
        if filters and filters.category:
            listings = [listing for listing in listings if listing.category == filters.category]
        return listings

    async def fetch_listing(self, listing_id: str) -> Optional[ListingText]:
        return self.listings.get(listing_id)


class InMemoryInteractions:
    def __init__(self, raw_events: List[dict]):
        self.counts = InteractionCounts.from_events(parse_interactions(raw_events))

    async def fetch_counts(self, keys: Sequence[InteractionKey]) -> Dict[InteractionKey, InteractionCounts]:
        return {key: self.counts[key] for key in keys if key in self.counts}


class RecordingSink:
    def __init__(self):
        self.events: List[SearchEvent] = []

    async def record(self, event: SearchEvent) -> None:
        self.events.append(event)


@pytest.fixture
def marketplace(make_listing, now):
    return InMemoryListings(
        [
            make_listing(
                id="nexia",
                title="Nexia 3 sotiladi",
                description="Avtomobil yaxshi holatda",
                category="automotive",
                brand="Нексия",
                tags=["mashina", "nexia", "avtomobil"],
                price=9000,
                view_count=120,
                created_at=now - timedelta(hours=5),
            ),
            make_listing(
                id="cobalt",
                title="Cobalt 2020",
                description="Mashina sotiladi, probeg kam",
                category="automotive",
                brand="Chevrolet",
                tags=["mashina", "cobalt"],
                price=11000,
                view_count=40,
            ),
            make_listing(
                id="repair",
                listing_type="service",
                title="Avto ta'mirlash",
                description="Mashina va yuk mashinasi ta'mirlash",
                category="automotive",
                tags=["mashina", "tamirlash"],
            ),
            make_listing(
                id="phone",
                title="Telefon sotiladi",
                description="Samsung Galaxy",
                category="electronics",
                brand="Samsung",
                tags=["telefon"],
                price=300,
            ),
        ]
    )


@pytest.mark.integration
@pytest.mark.asyncio
async def test_search_to_dashboard_flow(marketplace, vocabulary, now):
    """Test a buyer search feeds analytics and the seller sees health and rank"""
    sink = RecordingSink()
    search = SearchEngine(marketplace, sink, VocabularyStore(vocabulary), max_workers=2)

    response = await search.search("машина", now=now)
    assert response.results
    assert "phone" not in [r.id for r in response.results]
    assert all(r.rank == i for i, r in enumerate(response.results, start=1))

    await search.search("mashina", now=now)
    await search.search("telefon", now=now)
    assert popular_queries(event.normalized_query for event in sink.events) == ["машина", "mashina", "telefon"]

    nothing = await search.search("qwxyz", now=now)
    assert nothing.results == []
    assert zero_result_queries(sink.events) == ["qwxyz"]

    interactions = InMemoryInteractions(
        [{"kind": "view", "listing_id": "nexia", "listing_type": "product"}] * 10
        + [{"kind": "click", "listing_id": "nexia", "listing_type": "product"}] * 2
        + [{"kind": "order", "listing_id": "nexia", "listing_type": "product"}]
    )
    dashboard = ListingHealthService(
        marketplace,
        interactions,
        tracker=RankTracker(UnifiedTagRanker(max_workers=2), window=10),
    )

    health = await dashboard.score_listing("nexia")
    assert 0 <= health.score <= 100
    assert health.factors.conversion == pytest.approx(0.1 * 35)

    report = await dashboard.rank_report("nexia", ["nexia", "telefon"])
    assert report[0].rank == 1
    assert report[1].rank == 11
    assert report[1].explanation == ["E'lon top natijalarda ko'rinmayapti"]


@pytest.mark.integration
@pytest.mark.asyncio
async def test_recommendations_stay_in_category(marketplace, now):
    """Test similar and personal recommendations never cross categories"""
    engine = RecommendationEngine(marketplace)

    similar = await engine.get_similar("nexia")
    assert [(r.candidate_id, r.score) for r in similar] == [("cobalt", 38), ("repair", 28)]

    personal = await engine.get_for_user("u1", ["nexia"])
    assert [r.candidate_id for r in personal] == ["cobalt", "repair"]

    trending = await engine.trending("automotive", now=now)
    assert trending == ["nexia"]
