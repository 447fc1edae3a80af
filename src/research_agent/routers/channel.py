"""Channel router – channel profiles and profile-ranked search.

GET /api/channel/profile
    Return the (cached or freshly built) content-DNA profile of a channel.

GET /api/channel/search
    Search for content matching a channel and build a channel-aware brief.
"""

import logging

from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..models import ChannelProfile, ChannelSummary, ScoredCandidate, UnifiedResult

router = APIRouter(prefix="/api/channel", tags=["channel"])

logger = logging.getLogger(__name__)

# Number of top results handed to the channel summary.
SUMMARY_TOP_N = 5


class ChannelSearchResponse(BaseModel):
    profile: ChannelProfile
    # Ranked results carry relevance fields; the unranked fallback does not.
    results: list[ScoredCandidate | UnifiedResult]
    summary: ChannelSummary


def _require_channel(channel: str | None) -> str:
    if not channel or not channel.strip():
        raise HTTPException(status_code=400, detail="Missing channel query parameter.")
    return channel.strip()


@router.get("/profile", response_model=ChannelProfile)
async def channel_profile(
    request: Request,
    channel: str | None = Query(None, description="Channel identifier (username)"),
    refresh: bool = Query(False, description="Rebuild the profile even if cached"),
) -> ChannelProfile:
    channel_id = _require_channel(channel)
    try:
        return await request.app.state.profile_store.get_profile(channel_id, refresh)
    except Exception as exc:
        logger.exception("Error fetching profile for %s", channel_id)
        raise HTTPException(
            status_code=500, detail="Failed to build or fetch channel DNA profile."
        ) from exc


@router.get("/search", response_model=ChannelSearchResponse)
async def channel_search(
    request: Request,
    channel: str | None = Query(None, description="Channel identifier (username)"),
) -> ChannelSearchResponse:
    channel_id = _require_channel(channel)
    state = request.app.state
    try:
        profile = await state.profile_store.get_profile(channel_id)
        results = await state.channel_search.search_for_channel(profile)
        summary = await state.summarizer.generate_channel_summary(
            profile, results[:SUMMARY_TOP_N]
        )
    except Exception as exc:
        logger.exception("Error searching for channel %s", channel_id)
        raise HTTPException(status_code=500, detail="Failed to search for channel.") from exc

    return ChannelSearchResponse(profile=profile, results=results, summary=summary)


@router.get("/combined", status_code=501)
async def channel_combined():
    return JSONResponse(
        status_code=501,
        content={"message": "Combined channel search not yet implemented."},
    )
