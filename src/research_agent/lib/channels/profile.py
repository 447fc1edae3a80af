"""Channel profile store.

Builds, caches and refreshes the content-DNA profile of a channel:

1. Unless a refresh is forced, load the cached profile.
2. Return it if it is younger than ``ttl_hours``.
3. Otherwise scrape a sample of recent posts and analyze it into a fresh
   profile; ``channel`` and ``analysed_at`` are always set here, not taken
   from the analysis output.
4. Persist the fresh profile, replacing the cached one.

Any failure along the refresh path (including zero scraped posts) yields a
fixed degraded profile, which is returned but never persisted.  No lock is
held across the scrape and analysis; concurrent refreshes of one channel are
last-write-wins.
"""

import logging
from datetime import datetime, timezone
from typing import Callable

from pydantic import ValidationError

from ...models import ChannelProfile, ReelStyleGuide
from .cache import ProfileCache

logger = logging.getLogger(__name__)

DEFAULT_TTL_HOURS = 24.0


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: str) -> datetime | None:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (AttributeError, ValueError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def degraded_profile(channel_id: str, now: datetime | None = None) -> ChannelProfile:
    """Generic profile used whenever a real one cannot be built."""
    return ChannelProfile(
        channel=channel_id,
        analysed_at=(now or _utcnow()).isoformat(),
        primary_topics=["Business", "Startups", "News"],
        search_keywords=[
            "business news today",
            "startup funding",
            "brand strategy",
            "technology trends latest",
        ],
        content_tone="educational",
        format_style="Fallback dynamic format based on current events.",
        target_audience="Professionals and entrepreneurs",
        avoid_topics=[],
        reel_style_guide=ReelStyleGuide(
            hook_pattern="Starts with a bold statement",
            structure="Standard hook -> context -> value",
            cta_style="Follow for more",
            tone_words=["informative", "fast-paced"],
        ),
    )


class ChannelProfileStore:
    """Cached access to channel profiles.

    Parameters
    ----------
    cache:
        Key-value backend holding one profile per channel id.
    scraper:
        Object with ``async scrape(channel_id) -> list[ContentSample]``.
    analyzer:
        Object with ``async analyze(channel_id, samples) -> ChannelProfile``.
    ttl_hours:
        Age after which a cached profile is rebuilt.
    clock:
        Returns the current time as an aware datetime.
    """

    def __init__(
        self,
        cache: ProfileCache,
        scraper,
        analyzer,
        ttl_hours: float = DEFAULT_TTL_HOURS,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.cache = cache
        self.scraper = scraper
        self.analyzer = analyzer
        self.ttl_hours = ttl_hours
        self.clock = clock

    async def _load_fresh(self, channel_id: str) -> ChannelProfile | None:
        try:
            document = await self.cache.get(channel_id)
        except Exception as exc:
            logger.warning("Could not read cached profile for %s: %s", channel_id, exc)
            return None
        if document is None:
            logger.info("No cached profile for %s, generating a fresh one", channel_id)
            return None

        try:
            profile = ChannelProfile.model_validate(document)
        except ValidationError:
            logger.warning("Cached profile for %s is invalid, regenerating", channel_id)
            return None
        if profile.channel != channel_id:
            logger.warning(
                "Cached profile for %s belongs to %r, regenerating", channel_id, profile.channel,
            )
            return None

        analysed_at = parse_timestamp(profile.analysed_at)
        if analysed_at is None:
            logger.warning("Cached profile for %s has no usable analysed_at", channel_id)
            return None

        age_hours = (self.clock() - analysed_at).total_seconds() / 3600
        if age_hours < self.ttl_hours:
            logger.info("Loaded cached profile for %s (%.1f hours old)", channel_id, age_hours)
            return profile

        logger.info(
            "Cached profile for %s is older than %s hours, refreshing",
            channel_id, self.ttl_hours,
        )
        return None

    async def _refresh(self, channel_id: str) -> ChannelProfile:
        samples = await self.scraper.scrape(channel_id)
        if not samples:
            raise ValueError(f"scraper returned 0 posts for {channel_id}")

        profile = await self.analyzer.analyze(channel_id, samples)
        profile = profile.model_copy(
            update={"channel": channel_id, "analysed_at": self.clock().isoformat()}
        )
        await self.cache.put(channel_id, profile)
        logger.info("Generated and cached profile for %s", channel_id)
        return profile

    async def get_profile(self, channel_id: str, force_refresh: bool = False) -> ChannelProfile:
        """Return the profile for *channel_id*.  Never raises."""
        if force_refresh:
            logger.info("Force refresh requested for %s", channel_id)
        else:
            cached = await self._load_fresh(channel_id)
            if cached is not None:
                return cached

        try:
            return await self._refresh(channel_id)
        except Exception as exc:
            logger.warning("Error building profile for %s: %s", channel_id, exc)
            return degraded_profile(channel_id, self.clock())
