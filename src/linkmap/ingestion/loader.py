"""Viewer document retrieval.

Locations are tried in order: the requested location, then (for relative
paths that are not URLs and do not already start with "./") the same path
prefixed with "./". The first candidate that yields valid JSON wins.
"""

import json
import logging
import re
import time
from pathlib import Path
from typing import Any

import aiofiles
import httpx

from linkmap.config import settings
from linkmap.errors import LoadError
from linkmap.graph.normalizer import normalize_document
from linkmap.graph.store import GraphStore

logger = logging.getLogger(__name__)

_URL_PATTERN = re.compile(r"^(?:https?:)?//", re.IGNORECASE)
CACHE_BUSTER_PARAM = "__t"


def is_url(location: str) -> bool:
    return bool(_URL_PATTERN.match(location))


def candidate_locations(location: str) -> list[str]:
    """Locations to try for one requested document."""
    candidates = [location]
    if not is_url(location) and not location.startswith("./"):
        candidates.append("./" + location)
    return candidates


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are not JSON
    raise ValueError(f"Unexpected token {name}")


def parse_json(text: str, source: str) -> Any:
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:
        raise LoadError(f"Invalid JSON at {source}: {e}") from e


class DocumentLoader:
    """Fetches raw viewer documents from HTTP(S) URLs or local files."""

    def __init__(
        self,
        base_dir: Path | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_dir = base_dir or Path.cwd()
        self.timeout = timeout or settings.http_timeout
        self._client = client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout, follow_redirects=True)
        return self._client

    async def fetch(self, location: str | None = None) -> Any:
        """Fetch and parse a document, trying each candidate location.

        Raises:
            LoadError: if no candidate could be fetched and parsed
        """
        wanted = location or settings.data_location
        last_error: LoadError | None = None
        for candidate in candidate_locations(wanted):
            try:
                return await self._fetch_one(candidate)
            except LoadError as e:
                logger.debug(f"Candidate {candidate!r} failed: {e}")
                last_error = e
        raise last_error or LoadError("Unable to load JSON")

    async def load(self, location: str | None = None) -> GraphStore:
        """Fetch, parse and normalize a document into a new GraphStore."""
        data = await self.fetch(location)
        return normalize_document(data)

    async def _fetch_one(self, location: str) -> Any:
        if is_url(location):
            return await self._fetch_url(location)
        return await self._read_file(location)

    async def _fetch_url(self, location: str) -> Any:
        url = f"https:{location}" if location.startswith("//") else location
        client = self._get_client()
        try:
            response = await client.get(
                url,
                params={CACHE_BUSTER_PARAM: str(int(time.time() * 1000))},
                headers={"Cache-Control": "no-store"},
            )
        except httpx.HTTPError as e:
            raise LoadError(f"Request failed at {url}: {e}") from e

        if not response.is_success:
            raise LoadError(f"HTTP {response.status_code} at {response.url}")
        return parse_json(response.text, str(response.url))

    async def _read_file(self, location: str) -> Any:
        path = Path(location)
        if not path.is_absolute():
            path = self.base_dir / path
        try:
            async with aiofiles.open(path, encoding="utf-8") as f:
                text = await f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise LoadError(f"Cannot read {path}: {e}") from e
        return parse_json(text, str(path))
