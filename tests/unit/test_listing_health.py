"""
Unit tests for listing health scoring, rank tracking and the seller
dashboard service
"""
from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from bozor.core.exceptions import DataUnavailable, ListingNotFound
from bozor.engines.health import (
    HealthScoreEngine,
    ListingHealthService,
    RankHistory,
    RankRecord,
    RankTracker,
    drop_severity,
    status_for,
)
from bozor.engines.health.rank_tracker import NOT_VISIBLE_EXPLANATION
from bozor.engines.search import UnifiedTagRanker
from bozor.schemas import InteractionCounts


@pytest.fixture
def health_engine():
    return HealthScoreEngine()


@pytest.fixture
def complete_listing(make_listing):
    return make_listing(
        id="complete",
        title="Samsung Galaxy S21 Ultra",
        description="x" * 120,
        image_url="https://cdn.example.uz/s21.jpg",
        tags=["telefon", "samsung", "galaxy", "s21", "smartfon"],
    )


class TestHealthStatus:
    """Test status thresholds"""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "score,expected",
        [(100, "healthy"), (70, "healthy"), (69, "needs_improvement"), (40, "needs_improvement"), (39, "critical"), (0, "critical")],
    )
    def test_boundaries(self, score, expected):
        """Test 70 and 40 are inclusive lower bounds"""
        assert status_for(score) == expected


class TestHealthFactors:
    """Test individual health factors"""

    @pytest.mark.unit
    def test_product_conversion(self, health_engine, make_listing):
        """Test products convert directly from views to orders"""
        listing = make_listing(listing_type="product")
        assert health_engine.calculate_conversion(listing, InteractionCounts(views=100, orders=10)) == pytest.approx(3.5)

    @pytest.mark.unit
    def test_service_conversion_funnel(self, health_engine, make_listing):
        """Test services convert through click, contact and order"""
        listing = make_listing(listing_type="service")
        counts = InteractionCounts(views=100, clicks=50, contacts=10, orders=5)
        assert health_engine.calculate_conversion(listing, counts) == pytest.approx((0.15 + 0.08 + 0.15) * 30)

    @pytest.mark.unit
    def test_conversion_capped_and_zero_safe(self, health_engine, make_listing):
        """Test conversion never exceeds its weight and survives zero counts"""
        listing = make_listing(listing_type="store_product")
        assert health_engine.calculate_conversion(listing, InteractionCounts(views=1, orders=5)) == 35
        assert health_engine.calculate_conversion(listing, InteractionCounts()) == 0
        service = make_listing(listing_type="service")
        assert health_engine.calculate_conversion(service, InteractionCounts()) == 0

    @pytest.mark.unit
    def test_engagement(self, health_engine, make_listing):
        """Test click-through against the listing view counter"""
        counts = InteractionCounts(views=100, clicks=20)
        assert health_engine.calculate_engagement(make_listing(), counts) == pytest.approx(20)
        assert health_engine.calculate_engagement(make_listing(view_count=200), counts) == pytest.approx(10)
        assert health_engine.calculate_engagement(make_listing(), InteractionCounts(views=100, clicks=60)) == 30
        assert health_engine.calculate_engagement(make_listing(), InteractionCounts()) == 0

    @pytest.mark.unit
    def test_completeness(self, health_engine, complete_listing, make_listing):
        """Test title, description, image and tag points"""
        assert health_engine.calculate_completeness(complete_listing) == 20
        assert health_engine.calculate_completeness(make_listing(title="Divan")) == 3
        partial = make_listing(title="Stol", description="x" * 60, tags=["stol", "mebel", "yog'och"])
        assert health_engine.calculate_completeness(partial) == 0 + 3 + 3


class TestHealthScore:
    """Test the combined health score"""

    @pytest.mark.unit
    def test_healthy_listing(self, health_engine, complete_listing):
        """Test a complete, converting listing is healthy with no advice"""
        counts = InteractionCounts(views=100, clicks=30, orders=100)
        result = health_engine.calculate(complete_listing, counts)
        assert result.score == 95
        assert result.status == "healthy"
        assert result.factors.ranking == 10
        assert result.recommendations == []

    @pytest.mark.unit
    def test_poor_listing(self, health_engine, make_listing):
        """Test an empty listing is critical with advice for every gap"""
        result = health_engine.calculate(make_listing(id="poor", title="Divan", tags=["divan"]))
        assert result.score == 0 + 0 + 4 + 10
        assert result.status == "critical"
        assert result.recommendations == [
            "Konversiya darajasi past - title va taglarni yaxshilang",
            "2 ta tag qo'shing - qidiruv natijalarini yaxshilash",
            "Rasm qo'shing - ko'rishlar 2x oshadi",
            "Tavsifni kengaytiring - foydalanuvchilar ishonchi oshadi",
        ]

    @pytest.mark.unit
    def test_status_uses_rounded_score(self, health_engine, make_listing):
        """Test the status agrees with the reported integer score"""
        listing = make_listing(
            title="Samsung Galaxy S21 Ultra",
            description="x" * 120,
            image_url="https://cdn.example.uz/s21.jpg",
            tags=["a1", "b2", "c3", "d4", "e5"],
        )
        # 20 completeness + 10 ranking + 29.1 engagement + 10.5 conversion = 69.6
        counts = InteractionCounts(views=1000, clicks=291, orders=300)
        result = health_engine.calculate(listing, counts)
        assert result.score == 70
        assert result.status == "healthy"

    @pytest.mark.unit
    def test_half_point_rounds_up(self, health_engine, make_listing):
        """Test a total ending in .5 rounds up, not to the nearest even score"""
        listing = make_listing(title="Telefon sotiladi", description="x", view_count=8)
        # 6 completeness + 12.5 engagement + 10 ranking = 28.5
        result = health_engine.calculate(listing, InteractionCounts(views=8, clicks=1))
        assert result.factors.total == pytest.approx(28.5)
        assert result.score == 29

    @pytest.mark.unit
    def test_score_many_uses_keyed_counts(self, health_engine, make_listing):
        """Test counters are matched by listing id and type"""
        product = make_listing(id="same-id", listing_type="product")
        counts = {
            ("same-id", "service"): InteractionCounts(views=100, clicks=100),
            ("same-id", "product"): InteractionCounts(views=100, clicks=10),
        }
        scores = health_engine.score_many([product], counts)
        assert scores["same-id"].factors.engagement == pytest.approx(10)


class TestDropSeverity:
    """Test drop_severity"""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "change,expected",
        [(3, None), (0, None), (-4, None), (-5, "minor"), (-9, "minor"), (-10, "major"), (-19, "major"), (-20, "critical"), (-25, "critical")],
    )
    def test_thresholds(self, change, expected):
        """Test drops start at five places and escalate at ten and twenty"""
        assert drop_severity(change) == expected


class TestRankHistory:
    """Test RankHistory"""

    @pytest.mark.unit
    def test_latest_observation_wins(self, now):
        """Test the newest record is the previous rank"""
        history = RankHistory()
        history.record(RankRecord(query="telefon", entity_id="a", rank=3, observed_at=now))
        history.record(RankRecord(query="telefon", entity_id="a", rank=9, observed_at=now - timedelta(days=1)))
        history.record(RankRecord(query="divan", entity_id="a", rank=1, observed_at=now))
        assert history.previous_rank("a", "telefon") == 3
        assert history.previous_rank("a", "mashina") is None
        assert len(history) == 3
        assert len(history.records_for("a")) == 3
        assert history.records_for("b") == []


class TestRankTracker:
    """Test RankTracker"""

    @pytest.fixture
    def tracker(self):
        return RankTracker(UnifiedTagRanker(max_workers=2), window=50)

    def _pool(self, make_listing, stronger):
        strong = [
            make_listing(id=f"strong-{i}", title="Telefon", tags=[{"value": "telefon", "weight": 1.0}])
            for i in range(stronger)
        ]
        target = make_listing(id="target", title="Samsung Galaxy", tags=["telefon", "samsung"])
        return target, strong + [target]

    @pytest.mark.unit
    def test_critical_drop(self, tracker, make_listing, now):
        """Test moving from 5th to 30th is a critical drop of 25"""
        target, pool = self._pool(make_listing, 29)
        history = RankHistory([RankRecord(query="telefon", entity_id="target", rank=5, observed_at=now)])

        [info] = tracker.track(target, pool, ["telefon"], history)

        assert info.rank == 30
        assert info.previous_rank == 5
        assert info.rank_change == -25
        assert info.is_drop
        assert info.drop_severity == "critical"
        assert info.total_results == 30
        assert info.matched_tags == ["telefon"]
        assert info.explanation == ["Exact tag: telefon"]

    @pytest.mark.unit
    def test_absent_listing_gets_sentinel_rank(self, tracker, make_listing):
        """Test a listing outside the results ranks window + 1"""
        target, pool = self._pool(make_listing, 3)
        [info] = tracker.track(target, pool, ["mashina"])
        assert info.rank == 51
        assert info.total_results == 0
        assert info.explanation == [NOT_VISIBLE_EXPLANATION]
        assert info.matched_tags == []
        assert info.rank_change == 0
        assert not info.is_drop

    @pytest.mark.unit
    def test_absent_after_visible_is_a_drop(self, tracker, make_listing, now):
        """Test dropping out of the window counts against the sentinel rank"""
        target, pool = self._pool(make_listing, 0)
        history = RankHistory([RankRecord(query="mashina", entity_id="target", rank=2, observed_at=now)])
        [info] = tracker.track(target, pool, ["mashina"], history)
        assert info.rank_change == 2 - 51
        assert info.drop_severity == "critical"

    @pytest.mark.unit
    def test_improvement_is_not_a_drop(self, tracker, make_listing, now):
        """Test moving up gives a positive change"""
        target, pool = self._pool(make_listing, 1)
        history = RankHistory([RankRecord(query="telefon", entity_id="target", rank=8, observed_at=now)])
        [info] = tracker.track(target, pool, ["telefon"], history)
        assert info.rank == 2
        assert info.rank_change == 6
        assert not info.is_drop

    @pytest.mark.unit
    def test_default_queries_and_blank_queries(self, tracker, make_listing):
        """Test the listing's first tags are the default queries and tagless queries are skipped"""
        listing = make_listing(tags=["a1", "b2", "c3", "d4", "e5", "f6"])
        assert tracker.default_queries(listing) == ["a1", "b2", "c3", "d4", "e5"]
        assert tracker.track(listing, [listing], ["  ", "!!"]) == []

    @pytest.mark.unit
    def test_record_appends(self, tracker, make_listing, now):
        """Test observations are appended to the history"""
        target, pool = self._pool(make_listing, 2)
        history = RankHistory()
        infos = tracker.track(target, pool, ["telefon", "samsung"])
        records = tracker.record(infos, history, observed_at=now)
        assert [(r.query, r.rank) for r in records] == [("telefon", 3), ("samsung", 1)]
        assert history.previous_rank("target", "telefon") == 3


class TestListingHealthService:
    """Test ListingHealthService orchestration"""

    @pytest.fixture
    def interaction_source(self):
        source = AsyncMock()
        source.fetch_counts = AsyncMock(
            return_value={("phone-1", "product"): InteractionCounts(views=100, clicks=10, orders=5)}
        )
        return source

    @pytest.fixture
    def service(self, listing_source, interaction_source):
        tracker = RankTracker(UnifiedTagRanker(max_workers=1), window=10)
        return ListingHealthService(listing_source, interaction_source, tracker=tracker)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_bulk_fetch_once(self, service, interaction_source, sample_pool):
        """Test counters for a batch are fetched in a single call"""
        scores = await service.score_listings(sample_pool)
        interaction_source.fetch_counts.assert_awaited_once()
        keys = interaction_source.fetch_counts.await_args.args[0]
        assert ("phone-1", "product") in keys
        assert ("service-1", "service") in keys
        assert set(scores) == {listing.id for listing in sample_pool}
        assert scores["phone-1"].factors.engagement == pytest.approx(10)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_empty_batch(self, service, interaction_source):
        """Test an empty batch makes no fetch"""
        assert await service.score_listings([]) == {}
        interaction_source.fetch_counts.assert_not_awaited()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_counter_failure(self, service, interaction_source):
        """Test a failing counter source surfaces as DataUnavailable"""
        interaction_source.fetch_counts.side_effect = TimeoutError("slow")
        with pytest.raises(DataUnavailable) as exc_info:
            await service.score_listing("phone-1")
        assert exc_info.value.source == "interaction counters"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_missing_listing(self, service):
        """Test an unknown listing raises ListingNotFound"""
        with pytest.raises(ListingNotFound):
            await service.score_listing("missing")

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_rank_report_uses_own_history(self, service):
        """Test a second report compares against the first one"""
        first = await service.rank_report("phone-1", ["samsung", "mashina"])
        assert [(i.query, i.rank) for i in first] == [("samsung", 1), ("mashina", 11)]
        assert all(i.previous_rank is None for i in first)

        second = await service.rank_report("phone-1", ["samsung", "mashina"])
        assert [i.previous_rank for i in second] == [1, 11]
        assert len(service.history) == 4

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_rank_report_with_history_source(self, listing_source, interaction_source):
        """Test previous ranks come from the configured history source"""
        history_source = AsyncMock()
        history_source.previous_rank = AsyncMock(return_value=20)
        service = ListingHealthService(
            listing_source,
            interaction_source,
            history_source=history_source,
            tracker=RankTracker(UnifiedTagRanker(max_workers=1), window=10),
        )
        [info] = await service.rank_report("phone-1", ["samsung"])
        history_source.previous_rank.assert_awaited_once_with("phone-1", "samsung")
        assert info.previous_rank == 20
        assert info.rank_change == 19
        assert not info.is_drop

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_rank_report_default_queries(self, service):
        """Test the listing's tags are used when no queries are given"""
        infos = await service.rank_report("phone-1")
        assert [i.query for i in infos] == ["telefon", "samsung", "smartfon"]
