import logging

from fastapi import APIRouter, HTTPException, Query, Request

from ..lib.trending import DEFAULT_PERIOD
from ..models import TrendingItem

router = APIRouter(tags=["trending"])

logger = logging.getLogger(__name__)


@router.get("/api/trending", response_model=list[TrendingItem])
async def trending(
    request: Request,
    period: str = Query(DEFAULT_PERIOD, description="today, yesterday, 3days, week or month"),
) -> list[TrendingItem]:
    logger.info("Received trending request for period %r", period)
    try:
        results = await request.app.state.trending.fetch(period)
    except Exception as exc:
        logger.exception("Error fetching trending news")
        raise HTTPException(
            status_code=500, detail="Internal server error fetching trending news."
        ) from exc
    return results
