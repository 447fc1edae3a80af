"""Key-value backends for cached channel profiles.

The profile store talks to a ``ProfileCache`` it is given; nothing here is
a process-wide singleton.  Backends return the raw stored document (a dict)
so that the store decides what a usable cache entry is.  Reads and writes
are not transactional: concurrent writers for one channel are last-write-wins.
"""

import asyncio
import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from urllib.parse import quote

from elastic_transport import ObjectApiResponse
from elasticsearch import NotFoundError

from ...models import ChannelProfile
from ..errors import ProfileCacheError

logger = logging.getLogger(__name__)


class ProfileCache(ABC):
    """Abstract key-value store addressed by channel id."""

    @abstractmethod
    async def get(self, channel_id: str) -> dict | None:
        """Return the stored profile document, or ``None`` when absent.

        Raises ``ProfileCacheError`` when the backend cannot be read.
        """
        ...

    @abstractmethod
    async def put(self, channel_id: str, profile: ChannelProfile) -> None:
        """Store *profile* under *channel_id*, replacing any previous value."""
        ...


class InMemoryProfileCache(ProfileCache):
    """Dict-backed cache for tests and ephemeral deployments."""

    def __init__(self, initial: dict[str, dict] | None = None):
        self.data: dict[str, dict] = dict(initial or {})

    async def get(self, channel_id: str) -> dict | None:
        return self.data.get(channel_id)

    async def put(self, channel_id: str, profile: ChannelProfile) -> None:
        self.data[channel_id] = profile.model_dump()


def safe_filename(channel_id: str) -> str:
    """Percent-encode a channel id into a file name inside the cache dir.

    The encoding is reversible, so distinct ids never share a file.
    """
    return f"{quote(channel_id, safe='')}.json"


class JsonFileProfileCache(ProfileCache):
    """One pretty-printed ``<channel>.json`` file per channel."""

    def __init__(self, directory: str | os.PathLike):
        self.directory = Path(directory)

    def path_for(self, channel_id: str) -> Path:
        return self.directory / safe_filename(channel_id)

    def _read(self, path: Path) -> dict | None:
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise ProfileCacheError("file-cache", f"cannot read {path}: {exc}") from exc
        try:
            data = json.loads(text)
        except ValueError as exc:
            raise ProfileCacheError("file-cache", f"corrupt cache file {path}") from exc
        if not isinstance(data, dict):
            raise ProfileCacheError("file-cache", f"unexpected document in {path}")
        return data

    def _write(self, path: Path, document: dict) -> None:
        # Each writer gets its own temp file; the last os.replace wins.
        tmp_name = None
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=self.directory,
                prefix=f"{path.stem}.", suffix=".tmp", delete=False,
            ) as tmp:
                tmp_name = tmp.name
                json.dump(document, tmp, indent=2, ensure_ascii=False)
            os.replace(tmp_name, path)
        except OSError as exc:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            raise ProfileCacheError("file-cache", f"cannot write {path}: {exc}") from exc

    async def get(self, channel_id: str) -> dict | None:
        return await asyncio.to_thread(self._read, self.path_for(channel_id))

    async def put(self, channel_id: str, profile: ChannelProfile) -> None:
        await asyncio.to_thread(self._write, self.path_for(channel_id), profile.model_dump())


def _response_body(resp) -> dict:
    # AsyncElasticsearch returns ObjectApiResponse; plain dicts pass through.
    if isinstance(resp, ObjectApiResponse):
        return resp.body
    if isinstance(resp, dict):
        return resp
    raise ProfileCacheError("elasticsearch", f"unexpected response type {type(resp).__name__}")


class ElasticsearchProfileCache(ProfileCache):
    """One document per channel id in an Elasticsearch index.

    Parameters
    ----------
    es:
        An ``AsyncElasticsearch`` client instance.
    index:
        Index holding the profile documents.
    """

    def __init__(self, es, index: str = "channel_profiles"):
        self.es = es
        self.index = index

    async def get(self, channel_id: str) -> dict | None:
        try:
            resp = await self.es.get(index=self.index, id=channel_id)
        except NotFoundError:
            return None
        except Exception as exc:
            raise ProfileCacheError("elasticsearch", f"get {channel_id!r} failed: {exc}") from exc

        data = _response_body(resp)
        if not data.get("found", True):
            return None
        source = data.get("_source")
        return source if isinstance(source, dict) else None

    async def put(self, channel_id: str, profile: ChannelProfile) -> None:
        try:
            await self.es.index(index=self.index, id=channel_id, document=profile.model_dump())
        except Exception as exc:
            raise ProfileCacheError("elasticsearch", f"index {channel_id!r} failed: {exc}") from exc
