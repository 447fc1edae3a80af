"""Channel intelligence: cached content-DNA profiles and profile-ranked search."""

from .analysis import ContentAnalyzer, RelevanceScore, RelevanceScorer
from .cache import (
    ElasticsearchProfileCache,
    InMemoryProfileCache,
    JsonFileProfileCache,
    ProfileCache,
)
from .planner import build_queries
from .profile import ChannelProfileStore, degraded_profile
from .ranking import ChannelSearchPipeline, merge_unique
from .scraper import ApifyChannelScraper

__all__ = [
    "ApifyChannelScraper",
    "ChannelProfileStore",
    "ChannelSearchPipeline",
    "ContentAnalyzer",
    "ElasticsearchProfileCache",
    "InMemoryProfileCache",
    "JsonFileProfileCache",
    "ProfileCache",
    "RelevanceScore",
    "RelevanceScorer",
    "build_queries",
    "degraded_profile",
    "merge_unique",
]
