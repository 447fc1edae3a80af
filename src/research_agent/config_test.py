import logging

import pytest

from .config import DEFAULT_APIFY_ACTOR_ID, Settings, log_configuration_warnings

ENV_VARS = [
    "SERPAPI_KEY", "YOUTUBE_API_KEY", "GEMINI_API_KEY", "OPENAI_API_KEY",
    "APIFY_API_TOKEN", "APIFY_ACTOR_ID", "YT_DLP_PATH", "SERVERLESS", "VERCEL",
    "CHANNEL_CACHE_HOURS", "PROFILES_DIR", "PROFILE_CACHE_BACKEND",
    "ELASTICSEARCH_URL", "ELASTICSEARCH_API_KEY", "PROFILE_INDEX", "HTTP_TIMEOUT_SECONDS",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    settings = Settings.from_env()

    assert settings.serpapi_key is None
    assert settings.apify_actor_id == DEFAULT_APIFY_ACTOR_ID
    assert settings.serverless is False
    assert settings.channel_cache_hours == 24
    assert settings.profile_cache_backend == "file"


def test_reads_environment(clean_env):
    clean_env.setenv("SERPAPI_KEY", "serp")
    clean_env.setenv("GEMINI_API_KEY", "")
    clean_env.setenv("VERCEL", "1")
    clean_env.setenv("CHANNEL_CACHE_HOURS", "6")
    clean_env.setenv("PROFILE_CACHE_BACKEND", "Elasticsearch")

    settings = Settings.from_env()

    assert settings.serpapi_key == "serp"
    assert settings.gemini_api_key is None
    assert settings.serverless is True
    assert settings.channel_cache_hours == 6
    assert settings.profile_cache_backend == "elasticsearch"


def test_warnings_for_missing_credentials(caplog):
    with caplog.at_level(logging.INFO, logger="research_agent.config"):
        log_configuration_warnings(Settings())

    assert "SERPAPI_KEY is not set" in caplog.text
    assert "YOUTUBE_API_KEY is not set" in caplog.text
    assert "No AI API keys" in caplog.text


def test_no_warnings_when_configured(caplog):
    settings = Settings(serpapi_key="s", youtube_api_key="y", gemini_api_key="g")
    with caplog.at_level(logging.WARNING, logger="research_agent.config"):
        log_configuration_warnings(settings)
    assert caplog.records == []


@pytest.mark.parametrize("value", ["abc", "", "0", "-3", "nan"])
def test_invalid_numbers_fall_back_to_defaults(clean_env, caplog, value):
    clean_env.setenv("CHANNEL_CACHE_HOURS", value)
    clean_env.setenv("HTTP_TIMEOUT_SECONDS", value)

    with caplog.at_level(logging.WARNING, logger="research_agent.config"):
        settings = Settings.from_env()

    assert settings.channel_cache_hours == 24
    assert settings.http_timeout_seconds == 20
    if value:
        assert "Ignoring invalid CHANNEL_CACHE_HOURS" in caplog.text
        assert "Ignoring invalid HTTP_TIMEOUT_SECONDS" in caplog.text
