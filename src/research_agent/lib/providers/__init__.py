"""Content provider adapters.

The default adapter set is built explicitly from settings and handed to the
search orchestrator; the order here is the order results are concatenated in.
"""

import httpx

from ...config import Settings
from ..media import MediaExtractor
from .base import ProviderAdapter, SerpApiAdapter
from .google import ImageSearchAdapter, NewsSearchAdapter, WebSearchAdapter
from .youtube import VideoSearchAdapter


def build_default_adapters(
    settings: Settings,
    http: httpx.AsyncClient,
    extractor: MediaExtractor | None = None,
) -> list[ProviderAdapter]:
    """Return the web, video, news and image adapters, in that order."""
    return [
        WebSearchAdapter(http, settings.serpapi_key),
        VideoSearchAdapter(http, settings.youtube_api_key, extractor),
        NewsSearchAdapter(http, settings.serpapi_key),
        ImageSearchAdapter(http, settings.serpapi_key),
    ]


__all__ = [
    "ProviderAdapter",
    "SerpApiAdapter",
    "WebSearchAdapter",
    "NewsSearchAdapter",
    "ImageSearchAdapter",
    "VideoSearchAdapter",
    "build_default_adapters",
]
