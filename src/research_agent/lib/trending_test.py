"""Tests for the trending news feed."""

import httpx
import pytest

from .errors import ProviderError
from .trending import TIME_PERIODS, TrendingNewsFeed, period_filter


def feed_for(body, status=200, api_key="key"):
    requests: list[httpx.Request] = []

    def handler(request):
        requests.append(request)
        return httpx.Response(status, json=body)

    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return TrendingNewsFeed(http, api_key), requests


@pytest.mark.parametrize(
    "period,expected",
    [
        ("today", "qdr:d"),
        ("yesterday", "qdr:d"),
        ("3days", "qdr:w"),
        ("week", "qdr:w"),
        ("month", "qdr:m"),
        ("decade", "qdr:d"),
        (None, "qdr:d"),
    ],
)
def test_period_filter(period, expected):
    assert period_filter(period) == expected


def test_known_periods():
    assert set(TIME_PERIODS) == {"today", "yesterday", "3days", "week", "month"}


class TestTrendingNewsFeed:
    @pytest.mark.asyncio
    async def test_ranks_items_in_order(self):
        feed, requests = feed_for({
            "news_results": [
                {"title": "First", "link": "http://1", "source": {"name": "Wire"}, "date": "1h ago"},
                "junk",
                {"title": "Second", "link": "http://2", "source": "Paper", "thumbnail": "http://t"},
            ]
        })

        items = await feed.fetch("week")

        assert [(i.rank, i.title, i.source) for i in items] == [(1, "First", "Wire"), (2, "Second", "Paper")]
        assert items[1].thumbnail == "http://t"
        params = requests[0].url.params
        assert params["tbm"] == "nws"
        assert params["tbs"] == "qdr:w"
        assert params["num"] == "20"

    @pytest.mark.asyncio
    async def test_missing_key_returns_empty(self):
        feed, requests = feed_for({})
        assert await feed.fetch() == []
        assert requests == []

    @pytest.mark.asyncio
    async def test_no_results(self):
        feed, _ = feed_for({"search_metadata": {}})
        assert await feed.fetch("today") == []

    @pytest.mark.asyncio
    async def test_upstream_error_propagates(self):
        feed, _ = feed_for({"error": "Invalid API key"}, status=401)
        with pytest.raises(ProviderError):
            await feed.fetch("today")
