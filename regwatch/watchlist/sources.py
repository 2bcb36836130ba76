"""Watch list source strategies.

Each source produces the ordered list of WatchEntry items for one pass.
Format problems raise WatchListFormatError before any entity is processed.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path

import httpx
import structlog

from regwatch.models.watch import WatchEntry
from regwatch.registry.base import RegistryClient
from regwatch.watchlist.parsing import WatchListFormatError, parse_csv, parse_json

_log = structlog.get_logger(component="watchlist.sources")


class WatchSource(ABC):
    """Produces the watch list for a pass."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Short human-readable origin, used in logs."""

    @abstractmethod
    async def load(self) -> list[WatchEntry]:
        """Return the watch entries in processing order."""


class JsonFileSource(WatchSource):
    """Reads ``{"companies": [...]}`` from a local JSON file."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def description(self) -> str:
        return f"json:{self._path}"

    async def load(self) -> list[WatchEntry]:
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise WatchListFormatError(f"Watch list not found: {self._path}") from exc
        except ValueError as exc:
            raise WatchListFormatError(f"Watch list {self._path} is not valid JSON: {exc}") from exc
        return parse_json(data)


class CsvFileSource(WatchSource):
    """Reads a CSV watch list from a local file."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def description(self) -> str:
        return f"csv:{self._path}"

    async def load(self) -> list[WatchEntry]:
        try:
            text = self._path.read_text(encoding="utf-8-sig")
        except FileNotFoundError as exc:
            raise WatchListFormatError(f"Watch list not found: {self._path}") from exc
        return parse_csv(text)


class CsvUrlSource(WatchSource):
    """Downloads a published spreadsheet as CSV.

    Args:
        url:     Published CSV link.  Redirects are followed.
        timeout: HTTP timeout in seconds.
        client:  Optional pre-built ``httpx.AsyncClient`` (used by tests).
    """

    def __init__(self, url: str, timeout: float = 30.0, client: httpx.AsyncClient | None = None) -> None:
        if not url:
            raise ValueError("CSV url must not be empty")
        self._url = url
        self._timeout = timeout
        self._client = client

    @property
    def description(self) -> str:
        return f"csv-url:{self._url}"

    async def load(self) -> list[WatchEntry]:
        text = await self._fetch()
        # Sharing links that are not published as CSV return an HTML page
        if "uid" not in text.lower():
            raise WatchListFormatError(f"Sheet did not return expected CSV. First 200 chars:\n{text[:200]}")
        return parse_csv(text)

    async def _fetch(self) -> str:
        headers = {"User-Agent": "Mozilla/5.0", "Accept": "text/csv,*/*"}
        if self._client is not None:
            response = await self._client.get(self._url, headers=headers, follow_redirects=True)
        else:
            async with httpx.AsyncClient(timeout=self._timeout, max_redirects=10) as client:
                response = await client.get(self._url, headers=headers, follow_redirects=True)
        response.raise_for_status()
        return response.content.decode("utf-8-sig")


class QuerySource(WatchSource):
    """Searches the registry by company name and watches the first valid hit."""

    def __init__(self, registry: RegistryClient, query: str) -> None:
        if not query.strip():
            raise ValueError("Query must not be empty")
        self._registry = registry
        self._query = query.strip()

    @property
    def description(self) -> str:
        return f"query:{self._query}"

    async def load(self) -> list[WatchEntry]:
        candidates = await self._registry.search(self._query)
        for key in candidates:
            if self._registry.is_valid_key(key):
                _log.info("query_resolved", query=self._query, key=key, candidates=len(candidates))
                return [WatchEntry(key=key)]
        _log.warning("query_no_valid_key", query=self._query, candidates=len(candidates))
        return []
