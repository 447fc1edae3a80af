"""Research router: free-text query across every provider.

POST /api/research
    Fan the query out to all providers and summarize what came back.
"""

import logging

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from ..lib.summary import build_research_context
from ..models import Summary, UnifiedResult

router = APIRouter(tags=["research"])

logger = logging.getLogger(__name__)


class ResearchRequest(BaseModel):
    query: str = Field("", description="Natural-language search query")


class ResearchResponse(BaseModel):
    results: list[UnifiedResult]
    summary: Summary


@router.post("/api/research", response_model=ResearchResponse)
async def research(request: Request, payload: ResearchRequest) -> ResearchResponse:
    """Run every provider for the query and attach a neutral briefing.

    A query that finds nothing still succeeds, with an empty result list.
    """
    query = payload.query.strip()
    if not query:
        logger.warning("Missing query in request body")
        raise HTTPException(status_code=400, detail="Query is required.")

    logger.info("Received research query: %r", query)
    try:
        results = await request.app.state.orchestrator.run_all(query)
        context = build_research_context(results)
        summary = await request.app.state.summarizer.generate_summary(query, context)
    except Exception as exc:
        logger.exception("Error processing research request")
        raise HTTPException(
            status_code=500,
            detail="Internal server error during research orchestration.",
        ) from exc

    logger.info("Query %r completed with %d results", query, len(results))
    return ResearchResponse(results=results, summary=summary)
