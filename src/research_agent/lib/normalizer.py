"""Map provider-shaped records onto the unified result schema.

``normalize`` is total: any record (even a non-dict) and any platform tag
produce a complete ``UnifiedResult``.  Unknown tags keep the raw tag as the
platform and default every other field.
"""

import logging

from ..models import UnifiedResult

logger = logging.getLogger(__name__)

PLATFORMS = ("web", "video", "news", "image")
MEDIA_TYPES = ("article", "video", "image")


def _text(value) -> str:
    return value if isinstance(value, str) else ""


def _opt(value) -> str | None:
    return value if isinstance(value, str) and value else None


def _first(*values) -> str:
    for v in values:
        if isinstance(v, str) and v:
            return v
    return ""


def normalize(record, platform: str) -> UnifiedResult:
    """Convert one provider *record* tagged with *platform*."""
    item = record if isinstance(record, dict) else {}
    fields: dict = {}

    if platform == "web":
        media_type = item.get("media_type")
        fields = {
            "media_type": media_type if media_type in MEDIA_TYPES else "article",
            "title": _text(item.get("title")),
            "media_url": _text(item.get("media_url")),
            "thumbnail": _opt(item.get("thumbnail")),
            "source_link": _text(item.get("link")),
            "description": _opt(item.get("snippet")),
        }
    elif platform == "video":
        fields = {
            "media_type": "video",
            "title": _text(item.get("title")),
            # Direct stream first, embeddable player as the fallback.
            "media_url": _first(item.get("media_url"), item.get("embed_url")),
            "thumbnail": _opt(item.get("thumbnail")),
            "source_link": _text(item.get("source_link")),
            "timestamp": _opt(item.get("published_at")),
            "description": _opt(item.get("description")),
        }
    elif platform == "news":
        fields = {
            "media_type": "article",
            "title": _text(item.get("title")),
            "source_link": _text(item.get("url")),
            "timestamp": _opt(item.get("date")),
            "description": _opt(item.get("snippet")),
            "thumbnail": _opt(item.get("thumbnail")),
            "source": _opt(item.get("source")) or "News Source",
        }
    elif platform == "image":
        fields = {
            "media_type": "image",
            "title": _text(item.get("title")),
            "source_link": _text(item.get("link")),
            "media_url": _first(item.get("media_url"), item.get("thumbnail")),
            "thumbnail": _opt(item.get("thumbnail")),
            "source": _opt(item.get("source")) or "Image Source",
        }
    else:
        logger.warning("Unknown platform type: %r", platform)

    return UnifiedResult(platform=str(platform), **fields)
