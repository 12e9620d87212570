"""Tests for the result data model and its JSON shape."""

from __future__ import annotations

import json

import pytest

from mfparser.items import (
    DateTimeValue,
    Document,
    EmbeddedItem,
    HtmlValue,
    ImageValue,
    Item,
    NumberValue,
    PlainText,
    RelUrl,
    UrlValue,
    freeze_properties,
    value_to_json,
)


class TestValueToJson:
    def test_scalar_values(self):
        assert value_to_json(PlainText("a")) == "a"
        assert value_to_json(UrlValue("https://ex.com/")) == "https://ex.com/"
        assert value_to_json(DateTimeValue("2020-01-01")) == "2020-01-01"
        assert value_to_json(NumberValue(1.5)) == 1.5

    def test_image(self):
        assert value_to_json(ImageValue("https://ex.com/a.jpg", "A")) == {
            "value": "https://ex.com/a.jpg",
            "alt": "A",
        }

    def test_html_with_and_without_lang(self):
        assert value_to_json(HtmlValue("<b>x</b>", "x")) == {"html": "<b>x</b>", "value": "x"}
        assert value_to_json(HtmlValue("<b>x</b>", "x", "en"))["lang"] == "en"

    def test_embedded_item(self):
        item = Item(type=("h-card",), value="Ann")
        assert value_to_json(EmbeddedItem(item)) == {
            "type": ["h-card"],
            "properties": {},
            "value": "Ann",
        }

    def test_unknown_value_rejected(self):
        with pytest.raises(TypeError):
            value_to_json("plain string")  # type: ignore[arg-type]


class TestItem:
    def test_optional_keys_only_when_set(self):
        item = Item(type=("h-entry",), id="p1", lang="en", html="<i>x</i>", value="x")
        assert list(item.to_dict()) == ["type", "id", "lang", "properties", "value", "html"]

    def test_get_missing_property(self):
        assert Item(type=("h-card",)).get("name") == ()

    def test_properties_read_only(self):
        props = freeze_properties({"name": [PlainText("a")]})
        assert props["name"] == (PlainText("a"),)
        with pytest.raises(TypeError):
            props["name"] = ()  # type: ignore[index]


def test_rel_url_omits_empty_fields():
    assert RelUrl(rels=("me",), text="", title="T").to_dict() == {"rels": ["me"], "title": "T"}


def test_document_json():
    doc = Document(
        items=(Item(type=("h-card",), properties=freeze_properties({"name": [PlainText("Zoë")]})),),
    )
    data = json.loads(doc.to_json(indent=2))
    assert data == {
        "items": [{"type": ["h-card"], "properties": {"name": ["Zoë"]}}],
        "rels": {},
        "rel-urls": {},
    }
    assert "Zoë" in doc.to_json()
