"""Search orchestrator.

Fans one query out to every provider adapter concurrently.  Each call is
isolated at its own task boundary: an adapter that raises contributes an
empty list and a warning, and never cancels its siblings.  Results are
normalized and concatenated in adapter order (web, video, news, image by
default) regardless of which call finishes first.
"""

import asyncio
import logging

from ..models import UnifiedResult
from .normalizer import normalize
from .providers import ProviderAdapter

logger = logging.getLogger(__name__)


class SearchOrchestrator:
    """Run a query against all configured providers."""

    def __init__(self, adapters: list[ProviderAdapter]):
        self.adapters = list(adapters)

    async def _safe_search(self, adapter: ProviderAdapter, query: str) -> list[dict]:
        try:
            records = await adapter.search(query)
        except Exception as exc:
            logger.warning("%s failed: %r", adapter.name, exc)
            return []
        if not isinstance(records, list):
            logger.warning(
                "%s returned %s instead of a list; ignoring",
                adapter.name, type(records).__name__,
            )
            return []
        logger.info("%s completed with %d results", adapter.name, len(records))
        return records

    async def run_all(self, query: str) -> list[UnifiedResult]:
        """Return the normalized results of every provider for *query*.

        Never raises; if every provider fails the result is an empty list.
        """
        logger.info("Starting parallel searches for: %r", query)
        groups = await asyncio.gather(
            *(self._safe_search(adapter, query) for adapter in self.adapters)
        )

        results: list[UnifiedResult] = []
        for adapter, records in zip(self.adapters, groups):
            results.extend(normalize(record, adapter.platform) for record in records)
        return results
