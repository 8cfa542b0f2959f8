"""
Shared pytest fixtures and configuration for all tests
"""
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest

from bozor.schemas import ListingText
from bozor.vocabulary import default_vocabulary


@pytest.fixture
def now():
    """Fixed reference time so boost expiry and recency are deterministic"""
    return datetime(2025, 3, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def vocabulary():
    return default_vocabulary()


@pytest.fixture
def make_listing(now):
    """Factory for listings with sensible defaults"""
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        data = {
            "id": f"listing-{counter['n']}",
            "listing_type": "product",
            "title": "Telefon sotiladi",
            "description": "",
            "category": "electronics",
            "created_at": now - timedelta(days=10),
        }
        data.update(overrides)
        return ListingText(**data)

    return _make


@pytest.fixture
def sample_pool(make_listing, now):
    """Small mixed pool across categories and listing types"""
    return [
        make_listing(
            id="car-1",
            title="Avtomobil sotiladi",
            description="Yaxshi holatda, 2019 yil",
            category="automotive",
            tags=["mashina", "nexia"],
            price=9000,
        ),
        make_listing(
            id="phone-1",
            title="Telefon sotiladi",
            description="Samsung Galaxy, yangi",
            category="electronics",
            tags=["telefon", "samsung", "smartfon"],
            brand="Samsung",
            price=300,
        ),
        make_listing(
            id="phone-2",
            title="iPhone 13",
            description="Telefon ideal holatda",
            category="electronics",
            tags=["telefon", "iphone"],
            brand="Apple",
            price=700,
        ),
        make_listing(
            id="service-1",
            listing_type="service",
            title="Telefon ta'mirlash",
            description="Har qanday telefon ta'mirlanadi",
            category="services",
            tags=["telefon-tamirlash", "telefon"],
        ),
        make_listing(
            id="sold-1",
            title="Telefon eski",
            category="electronics",
            status="sold",
        ),
    ]


@pytest.fixture
def listing_source(sample_pool):
    """Mock listing source serving the sample pool"""
    source = AsyncMock()
    source.fetch_active_listings = AsyncMock(return_value=sample_pool)
    by_id = {listing.id: listing for listing in sample_pool}
    source.fetch_listing = AsyncMock(side_effect=lambda listing_id: by_id.get(listing_id))
    return source
