"""
Unit tests for the shared listing and interaction schemas
"""
import pytest
from pydantic import ValidationError

from bozor.schemas import (
    DEFAULT_TAG_WEIGHT,
    ClickInteraction,
    InteractionCounts,
    ListingText,
    OrderInteraction,
    ViewInteraction,
    parse_interactions,
)


class TestListingText:
    """Test ListingText"""

    @pytest.mark.unit
    def test_plain_tags_get_default_weight(self, make_listing):
        """Test string tags become user tags with the default weight"""
        listing = make_listing(tags=["telefon", {"value": "samsung", "weight": 1.0, "source": "ai"}])
        assert listing.tag_values == ["telefon", "samsung"]
        assert listing.tags[0].weight == DEFAULT_TAG_WEIGHT
        assert listing.tags[0].source == "user"
        assert listing.tags[1].source == "ai"

    @pytest.mark.unit
    def test_tag_weight_bounds(self, make_listing):
        """Test tag weights outside [0, 1] are rejected"""
        with pytest.raises(ValidationError):
            make_listing(tags=[{"value": "telefon", "weight": 1.5}])

    @pytest.mark.unit
    def test_taxonomy_alias(self, make_listing):
        """Test the taxonomy label accepts its camelCase alias"""
        listing = make_listing(taxonomy={"id": "a.b.c", "labelUz": "Krossovka"})
        assert listing.taxonomy.label_uz == "Krossovka"

    @pytest.mark.unit
    def test_flags(self, make_listing):
        """Test active and free flags"""
        assert make_listing().is_active
        assert not make_listing(status="sold").is_active
        assert make_listing(price=0).is_free
        assert not make_listing().is_free

    @pytest.mark.unit
    def test_listing_type_validated(self, now):
        """Test unknown listing types are rejected"""
        with pytest.raises(ValidationError):
            ListingText(id="x", title="x", listing_type="auction", created_at=now)


class TestInteractions:
    """Test interaction events and counters"""

    @pytest.mark.unit
    def test_parse_discriminates_on_kind(self):
        """Test raw payloads parse into typed events"""
        events = parse_interactions(
            [
                {"kind": "view", "listing_id": "a", "listing_type": "product"},
                {"kind": "order", "listing_id": "a", "listing_type": "product", "user_id": "u1"},
            ]
        )
        assert isinstance(events[0], ViewInteraction)
        assert isinstance(events[1], OrderInteraction)
        assert events[1].key == ("a", "product")

    @pytest.mark.unit
    def test_parse_rejects_unknown_kind(self):
        """Test an unknown event kind is a validation error"""
        with pytest.raises(ValidationError):
            parse_interactions([{"kind": "share", "listing_id": "a", "listing_type": "product"}])

    @pytest.mark.unit
    def test_counts_from_events(self):
        """Test events aggregate per (listing_id, listing_type)"""
        events = [
            ViewInteraction(listing_id="a", listing_type="product"),
            ViewInteraction(listing_id="a", listing_type="product"),
            ClickInteraction(listing_id="a", listing_type="product"),
            OrderInteraction(listing_id="a", listing_type="product"),
            ViewInteraction(listing_id="a", listing_type="service"),
        ]
        counts = InteractionCounts.from_events(events)
        assert counts[("a", "product")] == InteractionCounts(views=2, clicks=1, orders=1)
        assert counts[("a", "service")] == InteractionCounts(views=1)

    @pytest.mark.unit
    def test_counts_non_negative(self):
        """Test counters cannot be negative"""
        with pytest.raises(ValidationError):
            InteractionCounts(views=-1)
