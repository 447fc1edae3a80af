"""Tests for the search orchestrator."""

import asyncio
import itertools

import pytest

from .orchestrator import SearchOrchestrator
from .providers import ProviderAdapter


class FakeAdapter(ProviderAdapter):
    """Adapter returning canned records, optionally after a delay or by raising."""

    def __init__(self, platform: str, records=None, error: Exception | None = None, delay: float = 0):
        self._platform = platform
        self.records = records or []
        self.error = error
        self.delay = delay
        self.queries: list[str] = []

    @property
    def name(self) -> str:
        return f"fake-{self._platform}"

    @property
    def platform(self) -> str:
        return self._platform

    async def search(self, query: str) -> list[dict]:
        self.queries.append(query)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.records


def default_adapters(**overrides) -> list[FakeAdapter]:
    adapters = {
        "web": FakeAdapter("web", [{"title": "w", "link": "https://web/1"}]),
        "video": FakeAdapter("video", [{"title": "v", "source_link": "https://yt/1"}]),
        "news": FakeAdapter("news", [{"title": "n", "url": "https://news/1"}]),
        "image": FakeAdapter("image", [{"title": "i", "link": "https://img/1"}]),
    }
    adapters.update(overrides)
    return [adapters[p] for p in ("web", "video", "news", "image")]


class TestRunAll:
    @pytest.mark.asyncio
    async def test_concatenates_in_adapter_order(self):
        results = await SearchOrchestrator(default_adapters()).run_all("q")
        assert [r.platform for r in results] == ["web", "video", "news", "image"]

    @pytest.mark.asyncio
    async def test_order_is_independent_of_completion_order(self):
        adapters = default_adapters(
            web=FakeAdapter("web", [{"link": "https://web/1"}], delay=0.05),
            image=FakeAdapter("image", [{"link": "https://img/1"}], delay=0),
        )
        results = await SearchOrchestrator(adapters).run_all("q")
        assert [r.platform for r in results] == ["web", "video", "news", "image"]

    @pytest.mark.asyncio
    async def test_same_query_sent_to_every_adapter(self):
        adapters = default_adapters()
        await SearchOrchestrator(adapters).run_all("flood warning")
        assert all(a.queries == ["flood warning"] for a in adapters)

    @pytest.mark.asyncio
    async def test_single_web_result(self):
        adapters = [
            FakeAdapter("web", [{"title": "only", "link": "https://web/only"}]),
            FakeAdapter("video", error=RuntimeError("quota")),
            FakeAdapter("news", []),
            FakeAdapter("image", error=ValueError("bad")),
        ]
        results = await SearchOrchestrator(adapters).run_all("test")
        assert len(results) == 1
        assert results[0].platform == "web"
        assert results[0].source_link == "https://web/only"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "failing",
        [set(c) for n in range(5) for c in itertools.combinations(["web", "video", "news", "image"], n)],
    )
    async def test_failures_are_isolated(self, failing):
        overrides = {p: FakeAdapter(p, error=RuntimeError(f"{p} down")) for p in failing}
        results = await SearchOrchestrator(default_adapters(**overrides)).run_all("q")
        assert {r.platform for r in results} == {"web", "video", "news", "image"} - failing

    @pytest.mark.asyncio
    async def test_failing_adapter_does_not_cancel_slow_sibling(self):
        slow = FakeAdapter("news", [{"url": "https://news/slow"}], delay=0.05)
        adapters = default_adapters(web=FakeAdapter("web", error=RuntimeError("boom")), news=slow)
        results = await SearchOrchestrator(adapters).run_all("q")
        assert any(r.source_link == "https://news/slow" for r in results)

    @pytest.mark.asyncio
    async def test_non_list_return_is_ignored(self):
        adapters = default_adapters(web=FakeAdapter("web", records=None))
        adapters[0].records = {"not": "a list"}
        results = await SearchOrchestrator(adapters).run_all("q")
        assert "web" not in {r.platform for r in results}

    @pytest.mark.asyncio
    async def test_no_adapters(self):
        assert await SearchOrchestrator([]).run_all("q") == []
