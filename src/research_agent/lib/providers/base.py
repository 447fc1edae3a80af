"""Base abstraction for content providers.

Each provider adapter has a display name, a platform tag understood by the
normalizer, and an async ``search`` method that turns a query string into a
list of provider-shaped records (plain dicts).  Adapters used in the
best-effort fan-out degrade to an empty list on a missing credential or an
upstream failure instead of raising.
"""

import logging
from abc import ABC, abstractmethod

import httpx

from ..errors import ProviderError
from .serpapi import serpapi_search

logger = logging.getLogger(__name__)


class ProviderAdapter(ABC):
    """Abstract base class for provider adapters.

    Subclasses must implement ``name``, ``platform`` and ``search``.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable provider name used in logs (e.g. ``Google Search``)."""
        ...

    @property
    @abstractmethod
    def platform(self) -> str:
        """Platform tag passed to the normalizer (``web``, ``video``, ...)."""
        ...

    @abstractmethod
    async def search(self, query: str) -> list[dict]:
        """Return provider-shaped records for *query*.

        Returns
        -------
        list[dict]
            Possibly empty; an empty list is a valid answer.
        """
        ...


class SerpApiAdapter(ProviderAdapter):
    """Shared plumbing for the SerpApi-backed Google verticals.

    Subclasses set ``search_params`` and implement ``parse``.
    """

    search_params: dict = {}

    def __init__(self, http: httpx.AsyncClient, api_key: str | None):
        self._http = http
        self._api_key = api_key

    @abstractmethod
    def parse(self, data: dict) -> list[dict]:
        """Map a SerpApi response body to provider records."""
        ...

    async def search(self, query: str) -> list[dict]:
        if not self._api_key:
            logger.warning("Skipping %s: missing SerpApi key", self.name)
            return []

        logger.info("Querying %s (SerpApi) for: %r", self.name, query)
        try:
            data = await serpapi_search(
                self._http, self._api_key, {"q": query, **self.search_params},
                capability=self.name,
            )
        except ProviderError as exc:
            logger.warning("%s failed: %s", self.name, exc)
            return []
        return self.parse(data)
