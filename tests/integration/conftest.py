"""Shared fixtures for regwatch integration tests.

Provides a configuration pointing at a temporary watch list and state file.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from regwatch.models.config import RegistryConfig, RegwatchConfig, StateConfig, WatchConfig


@pytest.fixture()
def watch_list_path(tmp_path: Path) -> Path:
    path = tmp_path / "watch_list.json"
    path.write_text(json.dumps({"companies": [{"uid": "X1"}]}), encoding="utf-8")
    return path


@pytest.fixture()
def regwatch_config(tmp_path: Path, watch_list_path: Path) -> RegwatchConfig:
    """Complete RegwatchConfig for a single-entity watch list."""
    return RegwatchConfig(
        registry=RegistryConfig(endpoint="https://zefix.test/ZefixPublicREST", username="u", password="p"),
        watch=WatchConfig(source="json-file", location=str(watch_list_path)),
        state=StateConfig(path=str(tmp_path / "watch_state.json")),
    )
