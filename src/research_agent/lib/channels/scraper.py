"""Channel-content scraping through an Apify actor.

The actor is run synchronously over the Apify REST API and its dataset
items are mapped to ``ContentSample`` records.
"""

import logging

import httpx

from ...models import ContentSample
from ..errors import MalformedPayloadError, MissingCredentialError, ProviderError

logger = logging.getLogger(__name__)

APIFY_BASE_URL = "https://api.apify.com/v2"

# Number of recent posts sampled per channel.
RESULTS_LIMIT = 20

# Actor runs are slow; this bounds the synchronous run call.
RUN_TIMEOUT_SECONDS = 300.0


def _count(value) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def to_sample(item: dict) -> ContentSample:
    hashtags = item.get("hashtags")
    return ContentSample(
        caption=item.get("caption") or "",
        hashtags=[str(h) for h in hashtags] if isinstance(hashtags, list) else [],
        type=item.get("type") or "unknown",
        likes=_count(item.get("likesCount")),
        comments=_count(item.get("commentsCount")),
        views=_count(item.get("videoViewCount")),
        posted_at=item.get("timestamp") or "",
    )


class ApifyChannelScraper:
    """Scrape a bounded sample of a channel's recent posts."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        token: str | None,
        actor_id: str,
        results_limit: int = RESULTS_LIMIT,
    ):
        self._http = http
        self._token = token
        self.actor_id = actor_id
        self.results_limit = results_limit

    async def scrape(self, channel_id: str) -> list[ContentSample]:
        if not self._token:
            raise MissingCredentialError("apify", "APIFY_API_TOKEN")

        url = f"{APIFY_BASE_URL}/acts/{self.actor_id}/run-sync-get-dataset-items"
        payload = {"usernames": [channel_id], "resultsLimit": self.results_limit}

        logger.info("Starting Apify scrape for %s", channel_id)
        try:
            resp = await self._http.post(
                url,
                json=payload,
                headers={"Authorization": f"Bearer {self._token}"},
                timeout=RUN_TIMEOUT_SECONDS,
            )
        except httpx.HTTPError as exc:
            raise ProviderError("apify", f"actor run failed: {exc!r}") from exc
        if resp.is_error:
            raise ProviderError("apify", f"HTTP {resp.status_code}: {resp.text[:200]}")

        try:
            items = resp.json()
        except ValueError as exc:
            raise MalformedPayloadError("apify", "dataset items are not JSON") from exc
        if not isinstance(items, list):
            raise MalformedPayloadError("apify", "dataset items are not a list")

        samples = [to_sample(item) for item in items if isinstance(item, dict)]
        logger.info("Apify returned %d posts for %s", len(samples), channel_id)
        return samples
