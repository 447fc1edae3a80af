"""Top trending news through SerpApi Google News.

Unlike the fan-out providers, this feed is the sole input of its endpoint,
so upstream failures propagate as ``ProviderError``.
"""

import logging

import httpx

from ..models import TrendingItem
from .providers.google import source_name
from .providers.serpapi import serpapi_search

logger = logging.getLogger(__name__)

# Period name -> Google ``tbs`` filter.  Google has no exact "yesterday" or
# "3 days" window, so those collapse onto the nearest wider one.
TIME_PERIODS = {
    "today": "qdr:d",
    "yesterday": "qdr:d",
    "3days": "qdr:w",
    "week": "qdr:w",
    "month": "qdr:m",
}
DEFAULT_PERIOD = "today"
MAX_RESULTS = 20


def period_filter(period: str | None) -> str:
    """Return the ``tbs`` value for *period*, defaulting to today."""
    return TIME_PERIODS.get(period or DEFAULT_PERIOD, TIME_PERIODS[DEFAULT_PERIOD])


class TrendingNewsFeed:

    def __init__(self, http: httpx.AsyncClient, api_key: str | None):
        self._http = http
        self._api_key = api_key

    async def fetch(self, period: str = DEFAULT_PERIOD) -> list[TrendingItem]:
        if not self._api_key:
            logger.warning("Trending news disabled: missing SerpApi key")
            return []

        tbs = period_filter(period)
        logger.info("Fetching top trending news for period %r (tbs: %s)", period, tbs)
        data = await serpapi_search(
            self._http,
            self._api_key,
            {"q": "news", "tbm": "nws", "tbs": tbs, "num": MAX_RESULTS},
            capability="Trending News",
        )

        items = [i for i in (data.get("news_results") or []) if isinstance(i, dict)]
        return [
            TrendingItem(
                rank=index,
                title=item.get("title") or "",
                link=item.get("link") or "",
                source=source_name(item.get("source")),
                date=item.get("date"),
                snippet=item.get("snippet"),
                thumbnail=item.get("thumbnail"),
            )
            for index, item in enumerate(items, start=1)
        ]
