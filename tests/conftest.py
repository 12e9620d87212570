"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def _read_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


@pytest.fixture
def hcard_nested_html() -> str:
    return _read_fixture("hcard_nested.html")


@pytest.fixture
def hentry_legacy_html() -> str:
    return _read_fixture("hentry_legacy.html")


@pytest.fixture
def event_html() -> str:
    return _read_fixture("event.html")


@pytest.fixture
def mixed_versions_html() -> str:
    return _read_fixture("mixed_versions.html")


@pytest.fixture
def geo_html() -> str:
    return _read_fixture("geo.html")


@pytest.fixture
def rels_html() -> str:
    return _read_fixture("rels.html")


@pytest.fixture
def fixture_path():
    """Return the on-disk path of a fixture file by name."""
    return lambda name: FIXTURES_DIR / name


@pytest.fixture(autouse=True)
def _no_depth_env(monkeypatch):
    monkeypatch.delenv("MFPARSER_MAX_DEPTH", raising=False)
