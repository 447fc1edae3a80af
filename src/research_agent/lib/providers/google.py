"""Google verticals served through SerpApi: web, news and images."""

from .base import SerpApiAdapter


def source_name(value) -> str | None:
    """SerpApi gives the publisher either as a string or as ``{"name": ...}``."""
    if isinstance(value, dict):
        value = value.get("name")
    return value if isinstance(value, str) and value else None


def _results(data: dict, key: str) -> list[dict]:
    items = data.get(key) or []
    return [item for item in items if isinstance(item, dict)]


class WebSearchAdapter(SerpApiAdapter):
    """Top organic Google results."""

    search_params = {"num": 5}

    @property
    def name(self) -> str:
        return "Google Search"

    @property
    def platform(self) -> str:
        return "web"

    def parse(self, data: dict) -> list[dict]:
        return [
            {
                "title": item.get("title"),
                "link": item.get("link"),
                "snippet": item.get("snippet"),
                # Organic results with a thumbnail render as image cards.
                "media_type": "image" if item.get("thumbnail") else "article",
                "thumbnail": item.get("thumbnail"),
            }
            for item in _results(data, "organic_results")
        ]


class NewsSearchAdapter(SerpApiAdapter):
    """Google News results."""

    search_params = {"tbm": "nws", "num": 5}

    @property
    def name(self) -> str:
        return "News Search"

    @property
    def platform(self) -> str:
        return "news"

    def parse(self, data: dict) -> list[dict]:
        return [
            {
                "title": item.get("title"),
                "url": item.get("link"),
                "source": source_name(item.get("source")),
                "date": item.get("date"),
                "snippet": item.get("snippet"),
                "thumbnail": item.get("thumbnail"),
            }
            for item in _results(data, "news_results")
        ]


class ImageSearchAdapter(SerpApiAdapter):
    """Google Images results, preferring the original (high-res) image."""

    search_params = {"tbm": "isch", "num": 10}
    max_results = 10

    @property
    def name(self) -> str:
        return "Image Search"

    @property
    def platform(self) -> str:
        return "image"

    def parse(self, data: dict) -> list[dict]:
        return [
            {
                "title": item.get("title"),
                "link": item.get("link"),
                "media_type": "image",
                "media_url": item.get("original"),
                "thumbnail": item.get("thumbnail"),
                "source": source_name(item.get("source")),
            }
            for item in _results(data, "images_results")[: self.max_results]
        ]
