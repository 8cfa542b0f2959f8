"""
Filtering Service for Listing Filtering

Narrows the candidate pool by structured criteria before scoring.
"""
import logging
from typing import List, Optional

from bozor.schemas import ListingText, SearchFilters

logger = logging.getLogger(__name__)


class FilteringService:
    """Service for filtering listings by various criteria"""

    def __init__(self):
        logger.info("FilteringService initialized")

    def filter_listings(self, listings: List[ListingText], criteria: Optional[SearchFilters] = None) -> List[ListingText]:
        """
        Filter listings based on multiple criteria

        Inactive listings are always dropped. Listings without a price are
        dropped only when a price range is requested.

        Args:
            listings: Candidate listings
            criteria: Filtering criteria, None for status filtering only

        Returns:
            Filtered list of listings in their original order
        """
        filtered = [listing for listing in listings if listing.is_active]

        if criteria is None:
            return filtered

        # Category filter
        if criteria.category:
            category = criteria.category.lower()
            filtered = [listing for listing in filtered if listing.category.lower() == category]

        # Price range filter
        if criteria.price_min is not None or criteria.price_max is not None:
            min_price = criteria.price_min or 0
            max_price = criteria.price_max if criteria.price_max is not None else float("inf")
            filtered = [
                listing for listing in filtered
                if listing.price is not None and min_price <= listing.price <= max_price
            ]

        # Listing type filter
        if criteria.listing_type:
            filtered = [listing for listing in filtered if listing.listing_type == criteria.listing_type]

        # Store filter
        if criteria.store_id:
            filtered = [listing for listing in filtered if listing.store_id == criteria.store_id]

        logger.debug(f"Filtered {len(listings)} listings down to {len(filtered)}")
        return filtered
