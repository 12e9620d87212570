"""Unit tests for the class vocabulary and legacy mapping tables."""

from __future__ import annotations

import pytest

from mfparser.extractors.vocab import (
    LEGACY_BY_ROOT,
    LEGACY_ONLY,
    MERGED,
    V2_ONLY,
    V2_PROPERTY_RE,
    V2_ROOT_RE,
    has_root_class,
    legacy_root_types,
    legacy_vocabulary,
    passes_for,
    v2_property_classes,
    v2_root_types,
)


@pytest.mark.parametrize("cls", ["h-card", "h-entry", "h-review-aggregate", "h-as-note", "h-x2-thing"])
def test_v2_root_pattern_matches(cls):
    assert V2_ROOT_RE.match(cls)


@pytest.mark.parametrize("cls", ["h-", "h-Card", "h-1", "hcard", "p-name", "h-card-"])
def test_v2_root_pattern_rejects(cls):
    assert not V2_ROOT_RE.match(cls)


@pytest.mark.parametrize(
    ("cls", "prefix", "name"),
    [
        ("p-name", "p", "name"),
        ("u-in-reply-to", "u", "in-reply-to"),
        ("dt-start", "dt", "start"),
        ("e-content", "e", "content"),
    ],
)
def test_v2_property_pattern(cls, prefix, name):
    m = V2_PROPERTY_RE.match(cls)
    assert m is not None
    assert (m.group(1), m.group(2)) == (prefix, name)


def test_v2_property_pattern_rejects_other_prefixes():
    assert not V2_PROPERTY_RE.match("x-name")
    assert not V2_PROPERTY_RE.match("p-")


def test_v2_class_helpers():
    classes = ["h-card", "p-name", "foo", "u-url", "h-org"]
    assert v2_root_types(classes) == ["h-card", "h-org"]
    assert v2_property_classes(classes) == [("p", "name"), ("u", "url")]


# ---------------------------------------------------------------------------
# Legacy tables
# ---------------------------------------------------------------------------

class TestLegacyTables:
    def test_root_mapping(self):
        assert legacy_root_types(["vcard", "hentry", "vcard"]) == ["h-card", "h-entry"]

    def test_every_root_listed(self):
        assert set(LEGACY_BY_ROOT) == {
            "adr", "geo", "hentry", "hfeed", "hnews", "hproduct", "hrecipe",
            "hresume", "hreview", "hreview-aggregate", "vcard", "vevent",
        }

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            LEGACY_BY_ROOT["vcard"] = None  # type: ignore[index]

    def test_vcard_properties(self):
        vocab = legacy_vocabulary(["h-card"])
        assert vocab.properties["fn"].key == "p-name"
        assert vocab.properties["url"].key == "u-url"
        assert vocab.properties["bday"].key == "dt-bday"
        assert vocab.properties["title"].key == "p-job-title"

    def test_entry_properties(self):
        vocab = legacy_vocabulary(["h-entry"])
        assert vocab.properties["entry-content"].key == "e-content"
        assert vocab.rels["bookmark"].key == "u-url"
        assert vocab.rels["tag"].tag_segment is True

    def test_first_type_wins(self):
        vocab = legacy_vocabulary(["h-event", "h-card"])
        assert vocab.properties["url"].key == "u-url"
        assert vocab.properties["summary"].key == "p-name"
        assert vocab.properties["fn"].key == "p-name"

    def test_unknown_type_is_empty(self):
        assert not legacy_vocabulary(["h-unknown"])

    def test_has_root_class(self):
        assert has_root_class(["foo", "vcard"])
        assert has_root_class(["h-entry"])
        assert not has_root_class(["fn", "p-name"])


def test_passes_for():
    assert passes_for(True) == (MERGED,)
    assert passes_for(False) == (V2_ONLY, LEGACY_ONLY)
