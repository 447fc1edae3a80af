"""Structured briefs built from search results.

Models are tried in order (Gemini, then OpenAI when configured); if none is
configured or all fail, a deterministic fallback brief is returned.  The
summarizer never raises.
"""

import json
import logging

from pydantic import ValidationError

from ..models import (
    ChannelProfile,
    ChannelSummary,
    ReelBrief,
    ReelSection,
    Summary,
    UnifiedResult,
)

logger = logging.getLogger(__name__)

SUMMARY_PROMPT = """You are a professional incident analyst. Your task is to summarize real-time incident data into a factual, neutral briefing.
Extract exactly the following information and output ONLY a valid JSON object matching the schema below. DO NOT wrap the output in markdown code blocks. DO NOT add any conversational text.

Required JSON Schema:
{
  "headline": "A single bold line summarizing the core incident in one sentence.",
  "what_happened": "2-3 sentences explaining the incident (who, what, where, when) based purely on the data.",
  "current_status": "1-2 sentences on the latest known update or current impact.",
  "key_sources": [
    { "name": "Source Name", "url": "URL of the source" }
  ]
}

CRITICAL RULES:
- Do NOT mention the search process, how many results were found, or the "provided data". ONLY describe the incident itself.
- Tone MUST be neutral, factual, and professional. No speculation or opinions.
- If the provided context is completely insufficient or unrelated to an incident, output: { "headline": "Insufficient Information", "what_happened": "Limited information available at this time.", "current_status": "Awaiting further updates.", "key_sources": [] }
- Extract the 2-3 most credible sources from the context and include their names and URLs."""

CHANNEL_SUMMARY_PROMPT = """You are a content strategist for a specific Instagram channel.
Based on the channel's content DNA and the trending web results provided, generate a content intelligence brief.
Return ONLY a valid JSON object matching the schema below. DO NOT wrap the output in markdown code blocks. DO NOT add any conversational text.

Required JSON Schema:
{
  "headline": "The single biggest trending story/topic right now that fits this channel perfectly, in one punchy sentence",
  "why_this_fits": "Two sentences explaining why this topic matches this channel's DNA and audience",
  "trending_angle": "The specific angle or hook this channel should take on this topic, different from generic coverage",
  "reel_brief": {
    "hook": "The exact opening line or visual concept for the reel, written in this channel tone",
    "structure": [
      {"section": "string", "content": "what to say/show here", "duration_seconds": number}
    ],
    "key_facts": ["3-5 specific facts from the web results to include in the reel"],
    "cta": "closing line written in this channel voice",
    "hashtags": ["15 hashtags matching this channel style"],
    "music_mood": "string"
  },
  "other_trending_topics": [
    {"topic": "string", "why_relevant": "string", "quick_angle": "string"}
  ]
}
Include 3-4 runner-up topics in other_trending_topics."""


def build_research_context(results: list[UnifiedResult], limit: int = 10) -> str:
    """Text context for a research summary from the first textual results."""
    lines: list[str] = []
    textual = [r for r in results if r.description or r.title][:limit]
    for r in textual:
        lines.append(f"Source: {r.source or r.platform}")
        lines.append(f"Title: {r.title}")
        if r.timestamp:
            lines.append(f"Date: {r.timestamp}")
        if r.description:
            lines.append(f"Snippet: {r.description}")
        lines.append("---")
    return "\n".join(lines) + ("\n" if lines else "")


def fallback_summary(query: str) -> Summary:
    return Summary(
        headline=f"Incident Review: {query}",
        what_happened=f'Multiple web results, news articles, and videos were retrieved for "{query}".',
        current_status="Please refer to the gathered sources below for specific details and live updates.",
        key_sources=[],
    )


def fallback_channel_summary(channel: str) -> ChannelSummary:
    return ChannelSummary(
        headline=f"Trending Output for {channel}",
        why_this_fits="Analyzed multiple sources to compile this report.",
        trending_angle="Focus on the key facts presented in current events.",
        reel_brief=ReelBrief(
            hook="Latest updates incoming.",
            structure=[
                ReelSection(section="Intro", content="Brief context.", duration_seconds=5),
                ReelSection(section="Body", content="Main details.", duration_seconds=15),
                ReelSection(section="Outro", content="See facts.", duration_seconds=5),
            ],
            key_facts=["Reference sources for details."],
            cta="Stay tuned for more updates.",
            hashtags=["#news", "#trending"],
            music_mood="Neutral",
        ),
        other_trending_topics=[],
    )


class Summarizer:
    """Generate research and channel briefs with an ordered list of models.

    Each model exposes ``name`` and ``async generate_json(system_prompt,
    prompt, temperature=None)``.
    """

    def __init__(self, models: list | None = None):
        self.models = list(models or [])

    async def _generate(self, system_prompt: str, prompt: str, schema, temperature: float):
        for model in self.models:
            try:
                logger.info("Attempting summary generation via %s", model.name)
                data = await model.generate_json(system_prompt, prompt, temperature=temperature)
                return schema.model_validate(data)
            except ValidationError as exc:
                logger.warning("%s returned an invalid summary: %s", model.name, exc)
            except Exception as exc:
                logger.warning("%s failed: %s", model.name, exc)
        return None

    async def generate_summary(self, query: str, context: str) -> Summary:
        if not context or not context.strip():
            return fallback_summary(query)

        prompt = f'Query: "{query}"\n\nIncident Data Context:\n{context}'
        summary = await self._generate(SUMMARY_PROMPT, prompt, Summary, temperature=0.1)
        if summary is None:
            logger.warning("All AI providers failed or missing keys, returning fallback summary")
            return fallback_summary(query)
        return summary

    async def generate_channel_summary(
        self, profile: ChannelProfile | None, top_results: list[UnifiedResult]
    ) -> ChannelSummary:
        if profile is None or not top_results:
            return fallback_channel_summary(profile.channel if profile else "Unknown Channel")

        context = "\n\n".join(
            f"Title: {r.title}\nSnippet: {r.description or r.body or ''}\nURL: {r.source_link}"
            for r in top_results
        )
        prompt = (
            f"Channel DNA Profile:\n{profile.model_dump_json(indent=2)}\n\n"
            f"Trending Web Results:\n{context}\n\n"
            f"Channel's Reel Style Guide:\n{json.dumps(profile.reel_style_guide.model_dump(), indent=2)}"
        )
        summary = await self._generate(CHANNEL_SUMMARY_PROMPT, prompt, ChannelSummary, temperature=0.3)
        if summary is None:
            logger.warning("All AI providers failed, returning fallback channel summary")
            return fallback_channel_summary(profile.channel)
        return summary
