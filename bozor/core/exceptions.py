"""
Exceptions raised by the search core.

Collaborator failures surface as ``DataUnavailable`` so callers can tell an
upstream outage apart from a search that genuinely matched nothing.
"""
from typing import Optional


class BozorError(Exception):
    """Base class for search core errors"""


class DataUnavailable(BozorError):
    """A collaborator (listing pool, interaction counters, history) could not deliver data"""

    def __init__(self, source: str, reason: Optional[str] = None):
        self.source = source
        self.reason = reason
        message = f"{source} unavailable"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ListingNotFound(BozorError):
    """The listing a recommendation or rank report is built around does not exist"""

    def __init__(self, listing_id: str):
        self.listing_id = listing_id
        super().__init__(f"Listing not found: {listing_id}")


class VocabularyError(BozorError):
    """A vocabulary file could not be read or failed validation"""
