from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

MediaType = Literal["article", "video", "image"]


class UnifiedResult(BaseModel):
    """A provider record normalized into the shared result schema.

    Every field is always present when serialized; absent provider data is
    represented by an empty string or ``None``, never by a missing key.
    """

    platform: str = Field(..., description="Source tag: web, video, news or image")
    media_type: MediaType = Field("article", description="Drives rendering downstream")
    title: str = ""
    media_url: str = Field("", description="Directly playable/viewable URL, or empty")
    thumbnail: str | None = None
    source_link: str = Field("", description="Canonical link back to the content; dedup key")
    timestamp: str | None = Field(None, description="Provider date/time string, if any")
    description: str | None = None
    body: str | None = None
    source: str | None = Field(None, description="Publisher name, when the provider gives one")


class ScoredCandidate(UnifiedResult):
    """A result annotated by the relevance-scoring capability."""

    relevance_score: int = Field(..., ge=1, le=10)
    relevance_reason: str = ""
    suggested_angle: str = ""


class ReelStyleGuide(BaseModel):
    model_config = ConfigDict(extra="ignore")

    hook_pattern: str = ""
    structure: str = ""
    cta_style: str = ""
    tone_words: list[str] = Field(default_factory=list)


class ChannelProfile(BaseModel):
    """Content-DNA of a channel, as cached by the profile store."""

    model_config = ConfigDict(extra="ignore")

    channel: str
    analysed_at: str = Field(..., description="ISO-8601 time of the last analysis")
    primary_topics: list[str] = Field(default_factory=list)
    search_keywords: list[str] = Field(default_factory=list)
    content_tone: str = ""
    format_style: str = ""
    target_audience: str = ""
    avoid_topics: list[str] = Field(default_factory=list)
    reel_style_guide: ReelStyleGuide = Field(default_factory=ReelStyleGuide)


class ContentSample(BaseModel):
    """One recent post scraped from a channel."""

    caption: str = ""
    hashtags: list[str] = Field(default_factory=list)
    type: str = "unknown"
    likes: int = 0
    comments: int = 0
    views: int = 0
    posted_at: str = ""


class TrendingItem(BaseModel):
    rank: int
    title: str = ""
    link: str = ""
    source: str | None = None
    date: str | None = None
    snippet: str | None = None
    thumbnail: str | None = None


# ---------------------------------------------------------------------------
# Summaries
# ---------------------------------------------------------------------------

class KeySource(BaseModel):
    name: str = ""
    url: str = ""


class Summary(BaseModel):
    """Neutral briefing produced for a free-text research query."""

    model_config = ConfigDict(extra="ignore")

    headline: str
    what_happened: str = ""
    current_status: str = ""
    key_sources: list[KeySource] = Field(default_factory=list)


class ReelSection(BaseModel):
    section: str = ""
    content: str = ""
    duration_seconds: float = 0


class ReelBrief(BaseModel):
    model_config = ConfigDict(extra="ignore")

    hook: str = ""
    structure: list[ReelSection] = Field(default_factory=list)
    key_facts: list[str] = Field(default_factory=list)
    cta: str = ""
    hashtags: list[str] = Field(default_factory=list)
    music_mood: str = ""


class TrendingTopic(BaseModel):
    topic: str = ""
    why_relevant: str = ""
    quick_angle: str = ""


class ChannelSummary(BaseModel):
    """Channel-aware content brief built from the top ranked results."""

    model_config = ConfigDict(extra="ignore")

    headline: str
    why_this_fits: str = ""
    trending_angle: str = ""
    reel_brief: ReelBrief = Field(default_factory=ReelBrief)
    other_trending_topics: list[TrendingTopic] = Field(default_factory=list)
