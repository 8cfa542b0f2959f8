"""
Concurrency helpers shared by the engines: pooled scoring and guarded
collaborator fetches.
"""
import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Awaitable, Callable, List, Sequence, TypeVar

from bozor.core.exceptions import DataUnavailable

T = TypeVar("T")
R = TypeVar("R")

logger = logging.getLogger(__name__)


def score_concurrently(fn: Callable[[T], R], items: Sequence[T], max_workers: int = 8) -> List[R]:
    """
    Apply a pure scoring function to every item across a thread pool.

    Results come back in input order regardless of completion order, so a
    single stable sort afterwards gives a deterministic ranking.
    """
    if len(items) <= 1 or max_workers <= 1:
        return [fn(item) for item in items]

    with ThreadPoolExecutor(max_workers=min(max_workers, len(items))) as executor:
        return list(executor.map(fn, items))


async def fetch_or_raise(source: str, awaitable: Awaitable[R]) -> R:
    """
    Await a collaborator call, converting failures to DataUnavailable.

    Cancellation propagates unchanged. Partial data is never returned.
    """
    try:
        return await awaitable
    except asyncio.CancelledError:
        logger.error(f"Fetching {source} was cancelled")
        raise
    except Exception as e:
        logger.error(f"Error fetching {source}: {e}", exc_info=True)
        raise DataUnavailable(source, str(e)) from e
