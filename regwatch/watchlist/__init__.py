"""Watch list sources for regwatch.

Exports:
    WatchSource          -- Abstract base for all source strategies.
    JsonFileSource       -- Local ``{"companies": [...]}`` file.
    CsvFileSource        -- Local CSV file.
    CsvUrlSource         -- Published spreadsheet CSV fetched over HTTP.
    QuerySource          -- Single company found by a registry name search.
    WatchListFormatError -- Malformed watch list; fatal before any processing.
    build_watch_source   -- Factory used by the application bootstrap.
"""

from __future__ import annotations

from regwatch.models.config import WatchConfig
from regwatch.registry.base import RegistryClient
from regwatch.watchlist.parsing import WatchListFormatError, parse_csv, parse_json
from regwatch.watchlist.sources import (
    CsvFileSource,
    CsvUrlSource,
    JsonFileSource,
    QuerySource,
    WatchSource,
)

__all__ = [
    "CsvFileSource",
    "CsvUrlSource",
    "JsonFileSource",
    "QuerySource",
    "WatchListFormatError",
    "WatchSource",
    "build_watch_source",
    "parse_csv",
    "parse_json",
]


def build_watch_source(config: WatchConfig, registry: RegistryClient, timeout: float = 30.0) -> WatchSource:
    """Build the source strategy named by ``config.source``."""
    if config.source == "json-file":
        return JsonFileSource(config.location)
    if config.source == "csv-file":
        return CsvFileSource(config.location)
    if config.source == "csv-url":
        return CsvUrlSource(config.location, timeout=timeout)
    if config.source == "query":
        return QuerySource(registry, config.location)
    raise ValueError(f"Unknown watch source: {config.source!r}")
