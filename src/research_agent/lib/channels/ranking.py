"""Channel search and relevance ranking.

Pipeline:
    profile → targeted queries → orchestrator per query (concurrently)
    → dedup by source_link → relevance scoring → threshold, sort, cap

Without a scorer, or when scoring fails, the first ``MAX_RESULTS``
deduplicated results are returned unranked instead.
"""

import asyncio
import logging
from typing import Callable, Iterable

from ...models import ChannelProfile, ScoredCandidate, UnifiedResult
from ..orchestrator import SearchOrchestrator
from .planner import build_queries

logger = logging.getLogger(__name__)

MAX_RESULTS = 20
# Scored results below this are dropped, not merely ranked lower.
MIN_RELEVANCE_SCORE = 5


def merge_unique(groups: Iterable[list[UnifiedResult]]) -> dict[str, UnifiedResult]:
    """Flatten result groups into an insertion-ordered map keyed by source_link.

    The first occurrence of a link wins; results without a link are skipped.
    """
    unique: dict[str, UnifiedResult] = {}
    for group in groups:
        for result in group:
            if result.source_link and result.source_link not in unique:
                unique[result.source_link] = result
    return unique


def candidate_projection(result: UnifiedResult) -> dict:
    """The reduced view of a result sent to the scorer."""
    return {
        "url": result.source_link,
        "title": result.title,
        "snippet": result.description or result.body or "",
        "platform": result.platform,
    }


class ChannelSearchPipeline:
    """Targeted, relevance-ranked search for one channel.

    Parameters
    ----------
    orchestrator:
        Runs a single query against every provider.
    scorer:
        Object with ``async score(profile, candidates)``; ``None`` disables
        ranking.
    query_builder:
        Turns a profile into search queries.
    """

    def __init__(
        self,
        orchestrator: SearchOrchestrator,
        scorer=None,
        query_builder: Callable[[ChannelProfile], list[str]] = build_queries,
    ):
        self.orchestrator = orchestrator
        self.scorer = scorer
        self.query_builder = query_builder

    async def _safe_run(self, query: str) -> list[UnifiedResult]:
        try:
            return await self.orchestrator.run_all(query)
        except Exception as exc:
            logger.warning("Sub-search %r failed: %r", query, exc)
            return []

    async def _rank(
        self, profile: ChannelProfile, unique: dict[str, UnifiedResult]
    ) -> list[ScoredCandidate]:
        candidates = [candidate_projection(r) for r in unique.values()]
        logger.info("Sending %d results for relevance ranking", len(candidates))
        scores = await self.scorer.score(profile, candidates)

        ranked: list[ScoredCandidate] = []
        seen: set[str] = set()
        for s in scores:
            original = unique.get(s.url)
            if original is None or s.url in seen or s.relevance_score < MIN_RELEVANCE_SCORE:
                continue
            seen.add(s.url)
            ranked.append(
                ScoredCandidate(
                    **original.model_dump(),
                    relevance_score=s.relevance_score,
                    relevance_reason=s.relevance_reason,
                    suggested_angle=s.suggested_angle,
                )
            )
        ranked.sort(key=lambda c: c.relevance_score, reverse=True)
        return ranked[:MAX_RESULTS]

    async def search_for_channel(self, profile: ChannelProfile) -> list[UnifiedResult]:
        """Return up to ``MAX_RESULTS`` results for *profile*.  Never raises."""
        logger.info("Initiating filtered search for channel: %s", profile.channel)

        queries = self.query_builder(profile)
        logger.info("Generated target queries: %s", queries)

        groups = await asyncio.gather(*(self._safe_run(q) for q in queries))
        unique = merge_unique(groups)
        logger.info("Gathered %d unique results across all queries", len(unique))

        if not unique:
            return []

        unranked = list(unique.values())[:MAX_RESULTS]
        if self.scorer is None:
            logger.warning("No relevance scorer configured, returning unranked results")
            return unranked

        try:
            ranked = await self._rank(profile, unique)
        except Exception as exc:
            logger.warning("Relevance ranking failed (%s), returning unranked results", exc)
            return unranked

        logger.info(
            "Filtered down to %d relevant items for %s", len(ranked), profile.channel,
        )
        return ranked
