"""Tests for occurrence counting."""

from __future__ import annotations

from mfparser import count


def test_legacy_entry_counts(hentry_legacy_html):
    assert count(hentry_legacy_html) == {
        "h-entry": 1,
        "p-name": 2,
        "u-url": 2,
        "dt-published": 1,
        "p-author": 1,
        "h-card": 1,
        "e-content": 1,
        "p-category": 1,
    }


def test_insertion_order(hcard_nested_html):
    assert list(count(hcard_nested_html)) == ["h-card", "p-name", "u-url", "p-org", "h-org"]


def test_returns_plain_dict(hcard_nested_html):
    assert type(count(hcard_nested_html)) is dict
    assert count("<p>no items</p>") == {}


def test_filters_limit_counted_roots(geo_html):
    assert count(geo_html, filters=["h-geo"]) == {"h-geo": 1}


def test_separate_passes_both_counted(mixed_versions_html):
    assert count(mixed_versions_html) == {
        "h-card": 2,
        "p-name": 2,
        "u-url": 1,
        "p-tel": 1,
    }


def test_merged_pass_counts_once(mixed_versions_html):
    assert count(mixed_versions_html, overlappingVersions=True) == {
        "h-card": 1,
        "p-name": 1,
        "u-url": 1,
        "p-tel": 1,
    }


def test_no_items():
    assert count("<p>plain</p>") == {}
