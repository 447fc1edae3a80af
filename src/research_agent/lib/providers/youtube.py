"""YouTube video provider.

Searches the YouTube Data API v3 and, for each video, tries to resolve a
directly playable stream URL.  When extraction fails or times out the
record falls back to the embeddable player URL; a single slow video never
fails the whole result set.
"""

import asyncio
import logging

import httpx

from ..errors import ProviderError
from ..media import MediaExtractor
from .base import ProviderAdapter

logger = logging.getLogger(__name__)

YOUTUBE_SEARCH_URL = "https://www.googleapis.com/youtube/v3/search"
MAX_RESULTS = 5


def watch_url(video_id: str) -> str:
    return f"https://www.youtube.com/watch?v={video_id}"


def embed_url(video_id: str) -> str:
    return f"https://www.youtube.com/embed/{video_id}"


def _dict(value) -> dict:
    return value if isinstance(value, dict) else {}


class VideoSearchAdapter(ProviderAdapter):

    def __init__(
        self,
        http: httpx.AsyncClient,
        api_key: str | None,
        extractor: MediaExtractor | None = None,
    ):
        self._http = http
        self._api_key = api_key
        self._extractor = extractor

    @property
    def name(self) -> str:
        return "YouTube Search"

    @property
    def platform(self) -> str:
        return "video"

    async def _search_items(self, query: str) -> list[dict]:
        params = {
            "part": "snippet",
            "q": query,
            "type": "video",
            "maxResults": MAX_RESULTS,
            "key": self._api_key,
        }
        try:
            resp = await self._http.get(YOUTUBE_SEARCH_URL, params=params)
        except httpx.HTTPError as exc:
            raise ProviderError(self.name, f"request failed: {exc!r}") from exc
        if resp.is_error:
            raise ProviderError(self.name, f"HTTP {resp.status_code}")
        try:
            data = resp.json()
        except ValueError as exc:
            raise ProviderError(self.name, "response is not JSON") from exc
        items = _dict(data).get("items")
        if not isinstance(items, list):
            return []
        return [item for item in items if isinstance(item, dict)]

    async def _to_record(self, item: dict) -> dict | None:
        video_id = _dict(item.get("id")).get("videoId")
        if not video_id or not isinstance(video_id, str):
            return None
        snippet = _dict(item.get("snippet"))
        thumbnails = _dict(snippet.get("thumbnails"))
        thumbnail = (_dict(thumbnails.get("high")) or _dict(thumbnails.get("default"))).get("url")

        watch = watch_url(video_id)
        embed = embed_url(video_id)
        direct = await self._extractor.resolve(watch) if self._extractor else None

        return {
            "video_id": video_id,
            "title": snippet.get("title"),
            "description": snippet.get("description"),
            "thumbnail": thumbnail,
            "published_at": snippet.get("publishedAt"),
            "source_link": watch,
            "embed_url": embed,
            "media_url": direct or embed,
        }

    async def search(self, query: str) -> list[dict]:
        if not self._api_key:
            logger.warning("Skipping %s: missing YouTube API key", self.name)
            return []

        logger.info("Querying YouTube Data API for: %r", query)
        try:
            items = await self._search_items(query)
        except ProviderError as exc:
            logger.warning("%s failed: %s", self.name, exc)
            return []

        records = await asyncio.gather(*(self._to_record(item) for item in items))
        return [r for r in records if r is not None]
