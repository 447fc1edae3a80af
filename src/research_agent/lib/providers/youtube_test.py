"""Tests for the YouTube video adapter."""

import httpx
import pytest

from .youtube import VideoSearchAdapter

SEARCH_BODY = {
    "items": [
        {
            "id": {"videoId": "abc"},
            "snippet": {
                "title": "Flood footage",
                "description": "River overflows",
                "publishedAt": "2026-03-01T10:00:00Z",
                "thumbnails": {"high": {"url": "https://i.ytimg.com/abc/hq.jpg"}},
            },
        },
        {
            "id": {"videoId": "def"},
            "snippet": {
                "title": "Aftermath",
                "thumbnails": {"default": {"url": "https://i.ytimg.com/def/d.jpg"}},
            },
        },
        {"id": {"kind": "youtube#channel"}, "snippet": {}},
    ]
}


class FakeExtractor:
    def __init__(self, urls: dict[str, str | None]):
        self.urls = urls
        self.calls: list[str] = []

    async def resolve(self, watch_url: str) -> str | None:
        self.calls.append(watch_url)
        return self.urls.get(watch_url)


def client_for(body, status=200):
    requests: list[httpx.Request] = []

    def handler(request):
        requests.append(request)
        return httpx.Response(status, json=body)

    return httpx.AsyncClient(transport=httpx.MockTransport(handler)), requests


class TestVideoSearchAdapter:
    @pytest.mark.asyncio
    async def test_direct_url_and_embed_fallback(self):
        http, requests = client_for(SEARCH_BODY)
        extractor = FakeExtractor({"https://www.youtube.com/watch?v=abc": "https://cdn/abc.mp4"})

        records = await VideoSearchAdapter(http, "key", extractor).search("flood")

        assert len(records) == 2
        first, second = records
        assert first["media_url"] == "https://cdn/abc.mp4"
        assert first["source_link"] == "https://www.youtube.com/watch?v=abc"
        assert first["embed_url"] == "https://www.youtube.com/embed/abc"
        assert first["thumbnail"] == "https://i.ytimg.com/abc/hq.jpg"
        assert first["published_at"] == "2026-03-01T10:00:00Z"

        assert second["media_url"] == "https://www.youtube.com/embed/def"
        assert second["thumbnail"] == "https://i.ytimg.com/def/d.jpg"

        assert sorted(extractor.calls) == [
            "https://www.youtube.com/watch?v=abc",
            "https://www.youtube.com/watch?v=def",
        ]
        params = requests[0].url.params
        assert params["type"] == "video"
        assert params["maxResults"] == "5"

    @pytest.mark.asyncio
    async def test_without_extractor_uses_embed(self):
        http, _ = client_for(SEARCH_BODY)
        records = await VideoSearchAdapter(http, "key").search("flood")
        assert records[0]["media_url"] == "https://www.youtube.com/embed/abc"

    @pytest.mark.asyncio
    async def test_missing_key(self):
        http, requests = client_for(SEARCH_BODY)
        assert await VideoSearchAdapter(http, None).search("q") == []
        assert requests == []

    @pytest.mark.asyncio
    async def test_api_error_degrades_to_empty(self):
        http, _ = client_for({"error": {"code": 403}}, status=403)
        assert await VideoSearchAdapter(http, "key").search("q") == []

    @pytest.mark.asyncio
    async def test_odd_shaped_items_are_skipped_individually(self):
        body = {
            "items": [
                {"id": "abc", "snippet": {"title": "string id"}},
                {"id": {"videoId": "ghi"}, "snippet": "not an object"},
                {"id": {"videoId": 42}},
                {"id": {"videoId": "jkl"}, "snippet": {"thumbnails": {"high": "url", "default": None}}},
            ]
        }
        http, _ = client_for(body)
        records = await VideoSearchAdapter(http, "key").search("q")

        assert [r["video_id"] for r in records] == ["ghi", "jkl"]
        assert records[0]["title"] is None
        assert records[1]["thumbnail"] is None

    @pytest.mark.asyncio
    async def test_non_object_body_is_empty(self):
        http, _ = client_for(["unexpected"])
        assert await VideoSearchAdapter(http, "key").search("q") == []
