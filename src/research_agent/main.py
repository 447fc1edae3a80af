import logging
from contextlib import asynccontextmanager

import httpx
import openai
from elasticsearch import AsyncElasticsearch
from fastapi import FastAPI
from google import genai

from .config import Settings, log_configuration_warnings
from .lib.channels import (
    ApifyChannelScraper,
    ChannelProfileStore,
    ChannelSearchPipeline,
    ContentAnalyzer,
    ElasticsearchProfileCache,
    JsonFileProfileCache,
    ProfileCache,
    RelevanceScorer,
)
from .lib.llm import GeminiJsonModel, OpenAIJsonModel
from .lib.media import MediaExtractor
from .lib.orchestrator import SearchOrchestrator
from .lib.providers import build_default_adapters
from .lib.summary import Summarizer
from .lib.trending import TrendingNewsFeed
from .routers import channel, health, research, trending

logger = logging.getLogger(__name__)


def configure_services(
    app: FastAPI,
    settings: Settings,
    http: httpx.AsyncClient,
    es: AsyncElasticsearch | None = None,
) -> None:
    """Build every service from *settings* and attach it to ``app.state``.

    Tests skip this and put fakes on ``app.state`` directly.
    """
    extractor = MediaExtractor(settings.yt_dlp_path, enabled=not settings.serverless)
    orchestrator = SearchOrchestrator(build_default_adapters(settings, http, extractor))

    gemini_flash = gemini_pro = None
    if settings.gemini_api_key:
        client = genai.Client(api_key=settings.gemini_api_key)
        gemini_flash = GeminiJsonModel(client, "gemini-2.5-flash")
        gemini_pro = GeminiJsonModel(client, "gemini-2.5-pro")

    summary_models = [gemini_pro] if gemini_pro else []
    if settings.openai_api_key:
        summary_models.append(OpenAIJsonModel(openai.AsyncOpenAI(api_key=settings.openai_api_key)))

    cache: ProfileCache
    if es is not None:
        cache = ElasticsearchProfileCache(es, settings.profile_index)
    else:
        cache = JsonFileProfileCache(settings.profiles_dir)

    app.state.orchestrator = orchestrator
    app.state.summarizer = Summarizer(summary_models)
    app.state.trending = TrendingNewsFeed(http, settings.serpapi_key)
    app.state.profile_store = ChannelProfileStore(
        cache,
        ApifyChannelScraper(http, settings.apify_token, settings.apify_actor_id),
        ContentAnalyzer(gemini_flash),
        ttl_hours=settings.channel_cache_hours,
    )
    app.state.channel_search = ChannelSearchPipeline(
        orchestrator,
        scorer=RelevanceScorer(gemini_pro) if gemini_pro else None,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings.from_env()
    log_configuration_warnings(settings)

    http = httpx.AsyncClient(timeout=settings.http_timeout_seconds, follow_redirects=True)
    es = None
    if settings.profile_cache_backend == "elasticsearch":
        if settings.elasticsearch_url:
            es = AsyncElasticsearch(settings.elasticsearch_url, api_key=settings.elasticsearch_api_key)
        else:
            logger.warning("PROFILE_CACHE_BACKEND=elasticsearch but ELASTICSEARCH_URL is unset; using files")

    configure_services(app, settings, http, es)
    try:
        yield
    finally:
        await http.aclose()
        if es is not None:
            await es.close()


app = FastAPI(
    title="Research Agent API",
    description="Multi-source research and channel-aware content intelligence",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(health.router)
app.include_router(research.router)
app.include_router(trending.router)
app.include_router(channel.router)


@app.get("/")
async def root():
    return {"message": "Research Agent API"}
