"""Derive targeted search queries from a channel profile."""

import random
from datetime import date

from ...models import ChannelProfile

# Each template frames the same keyword space with a different recency.
QUERY_TEMPLATES = (
    "{} latest news today",
    "{} trending viral this week",
    "{} recent update {year}",
)


def build_queries(
    profile: ChannelProfile,
    rng: random.Random | None = None,
    year: int | None = None,
) -> list[str]:
    """Return 1-3 search queries for *profile*.

    Keywords are sampled without a reproducible order; with fewer keywords
    than templates some keywords repeat.
    """
    keywords = [k for k in profile.search_keywords if k and k.strip()]
    if not keywords:
        topic = next((t for t in profile.primary_topics if t and t.strip()), "news")
        return [f"{topic} trending today"]

    rng = rng or random.Random()
    year = year or date.today().year
    n = len(QUERY_TEMPLATES)
    picked = rng.sample(keywords, n) if len(keywords) >= n else rng.choices(keywords, k=n)
    return [tpl.format(kw, year=year) for tpl, kw in zip(QUERY_TEMPLATES, picked)]
