"""Model-backed channel capabilities: content-DNA analysis and relevance scoring.

Replies are validated with pydantic as soon as they are decoded.  Any
violation of the expected shape is a ``MalformedPayloadError``, which the
caller maps to its fallback path (degraded profile, unranked results).
"""

import json
import logging
from datetime import datetime, timezone

from pydantic import BaseModel, Field, ValidationError

from ...models import ChannelProfile, ContentSample
from ..errors import MalformedPayloadError, MissingCredentialError

logger = logging.getLogger(__name__)

DNA_PROMPT = """You are a content strategy analyst. Analyse these Instagram posts from a single creator and extract their content DNA.
Return ONLY a valid JSON object with this exact structure. DO NOT wrap the output in markdown code blocks. DO NOT add any conversational text.

{
  "channel": "username",
  "analysed_at": "ISO8601",
  "primary_topics": ["array of 5-8 core topics this channel covers"],
  "search_keywords": ["array of 15-20 specific search keywords and phrases that represent what this channel covers; these will be used to search Google and YouTube for trending content"],
  "content_tone": "one of: educational | entertainment | news | opinion | investigative | inspirational",
  "format_style": "describe in 2 sentences how this channel presents information: fast cuts or slow, text-heavy or visual, serious or casual, etc.",
  "target_audience": "describe the audience in 1 sentence",
  "avoid_topics": ["array of topics that would NOT fit this channel based on what is absent from their content"],
  "reel_style_guide": {
    "hook_pattern": "describe how this channel typically opens a reel based on caption analysis",
    "structure": "describe the typical content flow",
    "cta_style": "describe how they typically end posts",
    "tone_words": ["5-6 adjectives describing the voice"]
  }
}"""

RELEVANCE_PROMPT = """You are a content strategy ranker. I am providing you with a specific Instagram Channel's Content DNA Profile, and a list of trending web search results.
Your job is to evaluate how relevant each search result is to the specific channel's DNA and format style.

Return ONLY a valid JSON array of objects. DO NOT wrap the output in markdown code blocks. DO NOT add any conversational text.

For each result, return this exact structure:
[
  {
    "url": "the original url of the matched context",
    "relevance_score": number between 1 and 10,
    "relevance_reason": "One sentence explaining why this fits or doesn't fit the channel's DNA.",
    "suggested_angle": "How this channel would uniquely cover this story based on their reel_style_guide."
  }
]"""


class RelevanceScore(BaseModel):
    """One scored candidate as returned by the relevance scorer."""

    url: str = Field(..., min_length=1)
    relevance_score: int = Field(..., ge=1, le=10)
    relevance_reason: str = ""
    suggested_angle: str = ""


def _drop_nulls(data: dict) -> dict:
    return {k: v for k, v in data.items() if v is not None}


class ContentAnalyzer:
    """Turn scraped channel samples into a ``ChannelProfile``.

    *model* is any JSON model client exposing ``generate_json``; with no
    model, ``analyze`` raises ``MissingCredentialError``.
    """

    def __init__(self, model, temperature: float = 0.2):
        self.model = model
        self.temperature = temperature

    async def analyze(self, channel_id: str, samples: list[ContentSample]) -> ChannelProfile:
        if self.model is None:
            raise MissingCredentialError("content-analysis", "GEMINI_API_KEY")

        posts = [s.model_dump() for s in samples]
        prompt = f"Channel: {channel_id}\n\nRecent Posts Data:\n{json.dumps(posts, indent=2)}"

        logger.info("Sending %d posts for DNA analysis of %s", len(posts), channel_id)
        data = await self.model.generate_json(DNA_PROMPT, prompt, temperature=self.temperature)
        if not isinstance(data, dict):
            raise MalformedPayloadError("content-analysis", "expected a JSON object")

        data = _drop_nulls(data)
        if isinstance(data.get("reel_style_guide"), dict):
            data["reel_style_guide"] = _drop_nulls(data["reel_style_guide"])
        data["channel"] = channel_id
        data["analysed_at"] = datetime.now(timezone.utc).isoformat()
        try:
            return ChannelProfile.model_validate(data)
        except ValidationError as exc:
            raise MalformedPayloadError("content-analysis", f"invalid profile: {exc}") from exc


class RelevanceScorer:
    """Score candidate results 1-10 against a channel profile."""

    def __init__(self, model, temperature: float = 0.2):
        self.model = model
        self.temperature = temperature

    async def score(self, profile: ChannelProfile, candidates: list[dict]) -> list[RelevanceScore]:
        """Return scores for (possibly a subset of) *candidates*.

        Individual entries that do not validate are dropped; a reply that is
        not a JSON array raises ``MalformedPayloadError``.
        """
        prompt = (
            f"Channel DNA Profile:\n{profile.model_dump_json(indent=2)}\n\n"
            f"Web Results to Score:\n{json.dumps(candidates, indent=2)}"
        )
        data = await self.model.generate_json(RELEVANCE_PROMPT, prompt, temperature=self.temperature)
        if not isinstance(data, list):
            raise MalformedPayloadError("relevance-scoring", "expected a JSON array")

        scores: list[RelevanceScore] = []
        for entry in data:
            try:
                scores.append(RelevanceScore.model_validate(entry))
            except ValidationError:
                logger.debug("Dropping invalid score entry: %r", entry)
        return scores
