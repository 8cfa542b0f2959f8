"""
Rank Tracker

Where a listing appears in tag search for the queries that matter to it,
and whether it has dropped since the last observation.
"""
import logging
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from bozor.core.config import settings
from bozor.schemas import ListingText

from ..search.tag_ranker import UnifiedTagRanker
from ..search.text_normalizer import extract_tags
from .schemas import DropSeverity, RankInfo, RankRecord

logger = logging.getLogger(__name__)

NOT_VISIBLE_EXPLANATION = "E'lon top natijalarda ko'rinmayapti"

DROP_THRESHOLD = 5
MAJOR_DROP = 10
CRITICAL_DROP = 20


def drop_severity(rank_change: int) -> Optional[DropSeverity]:
    """Severity of a rank change, None when it is not a drop"""
    if rank_change > -DROP_THRESHOLD:
        return None
    amount = abs(rank_change)
    if amount >= CRITICAL_DROP:
        return "critical"
    if amount >= MAJOR_DROP:
        return "major"
    return "minor"


class RankHistory:
    """Append-only in-memory rank history; latest observation wins"""

    def __init__(self, records: Optional[Iterable[RankRecord]] = None):
        self._records: List[RankRecord] = []
        self._latest: Dict[Tuple[str, str], RankRecord] = {}
        for record in records or []:
            self.record(record)

    def record(self, record: RankRecord) -> None:
        self._records.append(record)
        key = (record.entity_id, record.query)
        latest = self._latest.get(key)
        if latest is None or record.observed_at >= latest.observed_at:
            self._latest[key] = record

    def previous_rank(self, entity_id: str, query: str) -> Optional[int]:
        latest = self._latest.get((entity_id, query))
        return latest.rank if latest else None

    def records_for(self, entity_id: str) -> List[RankRecord]:
        return [record for record in self._records if record.entity_id == entity_id]

    def __len__(self) -> int:
        return len(self._records)


class RankTracker:
    """Tracks a listing's tag-search rank across queries"""

    def __init__(self, tag_ranker: Optional[UnifiedTagRanker] = None, window: Optional[int] = None):
        self.tag_ranker = tag_ranker or UnifiedTagRanker()
        self.window = settings.rank_window if window is None else window
        logger.info("RankTracker initialized")

    def default_queries(self, listing: ListingText) -> List[str]:
        return listing.tag_values[: settings.rank_tracker_default_queries]

    def track(
        self,
        listing: ListingText,
        pool: Sequence[ListingText],
        queries: Optional[Sequence[str]] = None,
        history: Optional[RankHistory] = None,
    ) -> List[RankInfo]:
        """
        Rank a listing for each query against the active pool.

        Args:
            listing: Tracked listing
            pool: Every listing competing in search (inactive ones are skipped)
            queries: Queries to check; defaults to the listing's top tags
            history: Previous observations used for rank change

        Returns:
            One RankInfo per query that yields at least one tag; a listing
            outside the top window gets rank window + 1
        """
        queries = list(queries) if queries else self.default_queries(listing)
        active_pool = [candidate for candidate in pool if candidate.is_active]

        infos = []
        for query in queries:
            query_tags = extract_tags(query)
            if not query_tags:
                continue

            results = self.tag_ranker.rank(query_tags, active_pool, self.window)
            position = next((i for i, result in enumerate(results) if result.listing_id == listing.id), None)

            if position is None:
                current_rank = self.window + 1
                explanation = [NOT_VISIBLE_EXPLANATION]
                matched_tags: List[str] = []
            else:
                current_rank = position + 1
                explanation = results[position].explanation
                matched_tags = query_tags

            previous_rank = history.previous_rank(listing.id, query) if history else None
            rank_change = previous_rank - current_rank if previous_rank is not None else 0
            severity = drop_severity(rank_change)

            if severity:
                logger.warning(
                    f"Rank drop for {listing.id} on '{query}': {previous_rank} -> {current_rank} ({severity})"
                )

            infos.append(
                RankInfo(
                    entity_id=listing.id,
                    title=listing.title,
                    query=query,
                    rank=current_rank,
                    total_results=len(results),
                    previous_rank=previous_rank,
                    rank_change=rank_change,
                    is_drop=severity is not None,
                    drop_severity=severity,
                    explanation=explanation,
                    matched_tags=matched_tags,
                )
            )
        return infos

    def record(self, infos: Iterable[RankInfo], history: RankHistory, observed_at: Optional[datetime] = None) -> List[RankRecord]:
        """Append the observed ranks to the history"""
        observed_at = observed_at or datetime.now(timezone.utc)
        records = [
            RankRecord(query=info.query, entity_id=info.entity_id, rank=info.rank, observed_at=observed_at)
            for info in infos
        ]
        for record in records:
            history.record(record)
        return records
