"""
Unit tests for the SearchEngine orchestration
"""
from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from bozor.core.exceptions import DataUnavailable
from bozor.engines.search import SearchEngine, SearchResponse
from bozor.schemas import SearchEvent, SearchFilters, UserContext
from bozor.vocabulary import Vocabulary, VocabularyStore


@pytest.fixture
def event_sink():
    sink = AsyncMock()
    sink.record = AsyncMock(return_value=None)
    return sink


@pytest.fixture
def vocabulary_store(vocabulary):
    return VocabularyStore(vocabulary)


@pytest.fixture
def engine(listing_source, event_sink, vocabulary_store):
    return SearchEngine(listing_source, event_sink=event_sink, vocabulary_store=vocabulary_store, max_workers=2)


class TestSearch:
    """Test SearchEngine.search"""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_cyrillic_query_finds_latin_listings(self, engine, now):
        """Test a Russian query ranks Latin-titled listings by relevance"""
        response = await engine.search("телефон", now=now)

        assert isinstance(response, SearchResponse)
        assert [r.id for r in response.results] == ["phone-1", "service-1", "phone-2"]
        assert response.total_found == 3
        assert "telefon" in response.variations
        assert response.results[0].factors.text_relevance == 50

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_no_matches_is_empty_not_error(self, engine, now):
        """Test a query matching nothing returns an empty response"""
        response = await engine.search("qwertyxyz", now=now)
        assert response.results == []
        assert response.total_found == 0

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_empty_query_ranks_whole_pool(self, engine, now):
        """Test an empty query ranks every active candidate"""
        response = await engine.search("", limit=2, now=now)
        assert response.total_found == 4
        assert len(response.results) == 2
        assert response.variations == []

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_filters_passed_to_source(self, engine, listing_source, now):
        """Test filters reach the listing source and the candidate filter"""
        filters = SearchFilters(category="electronics")
        response = await engine.search("telefon", filters=filters, now=now)
        listing_source.fetch_active_listings.assert_awaited_once_with(filters)
        assert {r.id for r in response.results} == {"phone-1", "phone-2"}

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_boosted_listing_first(self, make_listing, event_sink, vocabulary_store, now):
        """Test an active boost outranks a stronger text match"""
        pool = [
            make_listing(id="exact", title="Telefon"),
            make_listing(
                id="boosted",
                title="Eski telefon",
                is_boosted=True,
                boosted_until=now + timedelta(days=1),
            ),
        ]
        source = AsyncMock()
        source.fetch_active_listings = AsyncMock(return_value=pool)
        engine = SearchEngine(source, event_sink, vocabulary_store, max_workers=1)

        response = await engine.search("telefon", now=now)

        assert [r.id for r in response.results] == ["boosted", "exact"]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_personalized_search(self, engine, now):
        """Test a signed-in user's preferred category is lifted"""
        user = UserContext(user_id="u1", category_preferences={"services": 10})
        response = await engine.search("telefon", user=user, now=now)
        assert response.results[0].id == "service-1"
        assert response.results[0].factors.personalization == 50

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_records_search_event(self, engine, event_sink, now):
        """Test every search is reported to analytics"""
        user = UserContext(user_id="u1")
        await engine.search("Telefon  Samsung", filters=SearchFilters(category="electronics"), user=user, now=now)

        event_sink.record.assert_awaited_once()
        event = event_sink.record.await_args.args[0]
        assert isinstance(event, SearchEvent)
        assert event.normalized_query == "telefon samsung"
        assert event.category == "electronics"
        assert event.user_id == "u1"
        assert event.brand_detected == "samsung"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_sink_failure_does_not_fail_search(self, engine, event_sink, now):
        """Test an analytics outage is logged, not raised"""
        event_sink.record.side_effect = RuntimeError("analytics down")
        response = await engine.search("telefon", now=now)
        assert response.total_found > 0

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_source_failure_raises_data_unavailable(self, engine, listing_source, event_sink):
        """Test a pool outage is not reported as zero results"""
        listing_source.fetch_active_listings.side_effect = ConnectionError("db down")
        with pytest.raises(DataUnavailable):
            await engine.search("telefon")
        event_sink.record.assert_not_awaited()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_suggested_correction(self, engine, now):
        """Test a misspelled query carries a suggestion"""
        response = await engine.search("telefn", now=now)
        assert response.suggested_correction == "telefon"
        assert "telefon" in response.variations


class TestTagSearch:
    """Test SearchEngine.search_by_tags and deals_of_day"""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_search_by_tags_skips_inactive(self, engine):
        """Test inactive listings never appear in tag search"""
        results = await engine.search_by_tags("telefon")
        ids = [r.listing_id for r in results]
        assert "sold-1" not in ids
        assert {"phone-1", "phone-2", "service-1"} <= set(ids)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_search_by_tags_empty_query(self, engine, listing_source):
        """Test a query without tags does not hit the source"""
        assert await engine.search_by_tags(" ,; ") == []
        listing_source.fetch_active_listings.assert_not_awaited()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_deals_of_day(self, engine, listing_source, make_listing, now):
        """Test deals come from the full pool"""
        listing_source.fetch_active_listings.return_value = [make_listing(id="free", price=0)]
        deals = await engine.deals_of_day(now=now)
        assert [d.id for d in deals] == ["free"]


class TestVocabularyReload:
    """Test text pipeline refresh after a vocabulary swap"""

    @pytest.mark.unit
    def test_pipeline_cached_until_swap(self, engine, vocabulary_store):
        """Test the pipeline is reused until the vocabulary changes"""
        first = engine.text_pipeline()
        assert engine.text_pipeline() is first

        replacement = Vocabulary(common_words=("kitob",))
        vocabulary_store.swap(replacement)

        second = engine.text_pipeline()
        assert second is not first
        assert second.vocabulary is replacement
        assert first.corrector.correct_typo("kitobb") is None
        assert second.corrector.correct_typo("kitobb") == "kitob"
