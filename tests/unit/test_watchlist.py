"""Tests for watch list parsing and source strategies."""

from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest

from regwatch.models.config import WatchConfig
from regwatch.models.watch import WatchEntry
from regwatch.watchlist import (
    CsvFileSource,
    CsvUrlSource,
    JsonFileSource,
    QuerySource,
    WatchListFormatError,
    build_watch_source,
    parse_csv,
    parse_json,
)
from tests.conftest import FakeRegistry, make_company

# ---------------------------------------------------------------------------
# parse_csv
# ---------------------------------------------------------------------------


class TestParseCsv:
    def test_uid_only(self) -> None:
        assert parse_csv("uid\nCHE-1\nCHE-2\n") == [WatchEntry(key="CHE-1"), WatchEntry(key="CHE-2")]

    def test_label_and_active_columns(self) -> None:
        text = "UID,Label,Active\nCHE-1,Supplier,yes\nCHE-2,Client,no\nCHE-3,,TRUE\nCHE-4,Other,1\n"
        assert parse_csv(text) == [
            WatchEntry(key="CHE-1", label="Supplier", active=True),
            WatchEntry(key="CHE-2", label="Client", active=False),
            WatchEntry(key="CHE-3", label=None, active=True),
            WatchEntry(key="CHE-4", label="Other", active=True),
        ]

    def test_empty_active_cell_defaults_true(self) -> None:
        assert parse_csv("uid,active\nCHE-1,\n")[0].active is True

    def test_short_row_defaults(self) -> None:
        assert parse_csv("uid,label,active\nCHE-1\n") == [WatchEntry(key="CHE-1", label=None, active=True)]

    def test_quoted_cells(self) -> None:
        text = 'uid,label\n"CHE-1","Muster, Meier & Co"\r\n'
        assert parse_csv(text) == [WatchEntry(key="CHE-1", label="Muster, Meier & Co")]

    def test_blank_lines_and_empty_uid_ignored(self) -> None:
        assert parse_csv("uid,label\n\n ,x\nCHE-1,y\n\n") == [WatchEntry(key="CHE-1", label="y")]

    def test_column_order_irrelevant(self) -> None:
        assert parse_csv("label,uid\nSupplier, CHE-1 \n") == [WatchEntry(key="CHE-1", label="Supplier")]

    def test_missing_uid_column_fails(self) -> None:
        with pytest.raises(WatchListFormatError, match="uid"):
            parse_csv("name,label\nX,Y\n")

    def test_empty_text_fails(self) -> None:
        with pytest.raises(WatchListFormatError):
            parse_csv("\n\n")


# ---------------------------------------------------------------------------
# parse_json
# ---------------------------------------------------------------------------


class TestParseJson:
    def test_companies_object(self) -> None:
        data = {"companies": [{"uid": "CHE-1", "label": "Supplier"}, {"uid": "CHE-2"}]}
        assert parse_json(data) == [WatchEntry(key="CHE-1", label="Supplier"), WatchEntry(key="CHE-2")]

    def test_bare_list_with_active(self) -> None:
        data = [{"uid": "CHE-1", "active": False}, {"uid": "CHE-2", "active": "yes"}]
        assert parse_json(data) == [WatchEntry(key="CHE-1", active=False), WatchEntry(key="CHE-2", active=True)]

    def test_missing_uid_fails(self) -> None:
        with pytest.raises(WatchListFormatError, match="item 1"):
            parse_json({"companies": [{"uid": "CHE-1"}, {"label": "no uid"}]})

    def test_wrong_shape_fails(self) -> None:
        with pytest.raises(WatchListFormatError):
            parse_json({"entries": []})


# ---------------------------------------------------------------------------
# File sources
# ---------------------------------------------------------------------------


class TestFileSources:
    async def test_json_file(self, tmp_path: Path) -> None:
        path = tmp_path / "watch_list.json"
        path.write_text(json.dumps({"companies": [{"uid": "CHE-1"}]}), encoding="utf-8")

        assert await JsonFileSource(path).load() == [WatchEntry(key="CHE-1")]

    async def test_json_file_missing(self, tmp_path: Path) -> None:
        with pytest.raises(WatchListFormatError, match="not found"):
            await JsonFileSource(tmp_path / "absent.json").load()

    async def test_json_file_invalid(self, tmp_path: Path) -> None:
        path = tmp_path / "watch_list.json"
        path.write_text("{", encoding="utf-8")

        with pytest.raises(WatchListFormatError):
            await JsonFileSource(path).load()

    async def test_csv_file_with_bom(self, tmp_path: Path) -> None:
        path = tmp_path / "watch.csv"
        path.write_bytes("\ufeffuid,label\nCHE-1,Zürich AG\n".encode("utf-8"))

        assert await CsvFileSource(path).load() == [WatchEntry(key="CHE-1", label="Zürich AG")]


# ---------------------------------------------------------------------------
# CsvUrlSource
# ---------------------------------------------------------------------------


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestCsvUrlSource:
    async def test_follows_redirect(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/pub":
                return httpx.Response(307, headers={"Location": "https://sheets.test/export.csv"})
            return httpx.Response(200, content=b"uid,label\nCHE-1,Supplier\n")

        async with _client(handler) as client:
            source = CsvUrlSource("https://sheets.test/pub", client=client)
            assert await source.load() == [WatchEntry(key="CHE-1", label="Supplier")]

    async def test_html_page_rejected(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"<html><body>Sign in</body></html>")

        async with _client(handler) as client:
            with pytest.raises(WatchListFormatError, match="expected CSV"):
                await CsvUrlSource("https://sheets.test/pub", client=client).load()

    async def test_http_error_propagates(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500)

        async with _client(handler) as client:
            with pytest.raises(httpx.HTTPStatusError):
                await CsvUrlSource("https://sheets.test/pub", client=client).load()

    def test_empty_url_rejected(self) -> None:
        with pytest.raises(ValueError):
            CsvUrlSource("")


# ---------------------------------------------------------------------------
# QuerySource and factory
# ---------------------------------------------------------------------------


class TestQuerySource:
    async def test_first_valid_key_wins(self) -> None:
        registry = FakeRegistry(
            {"bad": make_company("bad", name="Muster AG"), "CHE-2": make_company("CHE-2", name="Muster AG")},
            invalid={"bad"},
        )

        assert await QuerySource(registry, "muster").load() == [WatchEntry(key="CHE-2")]

    async def test_no_match_is_empty(self) -> None:
        assert await QuerySource(FakeRegistry(), "nobody").load() == []


class TestBuildWatchSource:
    @pytest.mark.parametrize(
        ("kind", "location", "expected"),
        [
            ("json-file", "watch_list.json", JsonFileSource),
            ("csv-file", "watch.csv", CsvFileSource),
            ("csv-url", "https://sheets.test/pub", CsvUrlSource),
            ("query", "Muster AG", QuerySource),
        ],
    )
    def test_kinds(self, kind: str, location: str, expected: type) -> None:
        source = build_watch_source(WatchConfig(source=kind, location=location), FakeRegistry())
        assert isinstance(source, expected)

    def test_unknown_kind(self) -> None:
        with pytest.raises(ValueError):
            build_watch_source(WatchConfig(source="ftp", location="x"), FakeRegistry())
