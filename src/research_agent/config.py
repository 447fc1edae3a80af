"""Runtime configuration read from the environment.

Every external capability is optional: a missing credential disables that
capability (its adapter returns nothing) instead of failing startup, and an
invalid numeric setting falls back to its default with a warning.
"""

import logging
import os

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

DEFAULT_APIFY_ACTOR_ID = "apify~instagram-post-scraper"
DEFAULT_PROFILES_DIR = "data/channel-profiles"
DEFAULT_PROFILE_INDEX = "channel_profiles"


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes")


def _env_float(name: str, default: float) -> float:
    """Read a positive number; an unset or invalid value yields *default*."""
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        value = 0.0
    if not value > 0:
        logger.warning("Ignoring invalid %s=%r, using %s", name, raw, default)
        return default
    return value


class Settings(BaseModel):
    """Credentials and tunables for the research agent."""

    serpapi_key: str | None = Field(None, description="SerpApi key (web, news, image, trending)")
    youtube_api_key: str | None = Field(None, description="YouTube Data API v3 key")
    gemini_api_key: str | None = Field(None, description="Gemini key (analysis, scoring, summaries)")
    openai_api_key: str | None = Field(None, description="OpenAI key (summary fallback)")
    apify_token: str | None = Field(None, description="Apify token for channel scraping")
    apify_actor_id: str = DEFAULT_APIFY_ACTOR_ID

    yt_dlp_path: str = "yt-dlp"
    serverless: bool = Field(
        False, description="True on runtimes where subprocesses cannot be spawned"
    )

    channel_cache_hours: float = Field(24.0, gt=0)
    profiles_dir: str = DEFAULT_PROFILES_DIR
    profile_cache_backend: str = Field("file", description="'file' or 'elasticsearch'")
    elasticsearch_url: str | None = None
    elasticsearch_api_key: str | None = None
    profile_index: str = DEFAULT_PROFILE_INDEX

    http_timeout_seconds: float = Field(20.0, gt=0)

    @classmethod
    def from_env(cls) -> "Settings":
        env = os.environ
        return cls(
            serpapi_key=env.get("SERPAPI_KEY") or None,
            youtube_api_key=env.get("YOUTUBE_API_KEY") or None,
            gemini_api_key=env.get("GEMINI_API_KEY") or None,
            openai_api_key=env.get("OPENAI_API_KEY") or None,
            apify_token=env.get("APIFY_API_TOKEN") or None,
            apify_actor_id=env.get("APIFY_ACTOR_ID") or DEFAULT_APIFY_ACTOR_ID,
            yt_dlp_path=env.get("YT_DLP_PATH") or "yt-dlp",
            serverless=_env_flag("SERVERLESS") or _env_flag("VERCEL"),
            channel_cache_hours=_env_float("CHANNEL_CACHE_HOURS", 24.0),
            profiles_dir=env.get("PROFILES_DIR") or DEFAULT_PROFILES_DIR,
            profile_cache_backend=(env.get("PROFILE_CACHE_BACKEND") or "file").lower(),
            elasticsearch_url=env.get("ELASTICSEARCH_URL") or None,
            elasticsearch_api_key=env.get("ELASTICSEARCH_API_KEY") or None,
            profile_index=env.get("PROFILE_INDEX") or DEFAULT_PROFILE_INDEX,
            http_timeout_seconds=_env_float("HTTP_TIMEOUT_SECONDS", 20.0),
        )


def log_configuration_warnings(settings: Settings) -> None:
    """Log which capabilities are disabled.  Never raises."""
    if not settings.serpapi_key:
        logger.warning("SERPAPI_KEY is not set: web, news, image and trending search are disabled")
    else:
        logger.info("SERPAPI_KEY is configured")

    if not settings.youtube_api_key:
        logger.warning("YOUTUBE_API_KEY is not set: video search is disabled")
    else:
        logger.info("YOUTUBE_API_KEY is configured")

    if not settings.gemini_api_key and not settings.openai_api_key:
        logger.info("No AI API keys (Gemini/OpenAI) are set: AI enhancements are disabled")
