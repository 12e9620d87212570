"""Tests for latitude/longitude enrichment."""

from __future__ import annotations

from mfparser import get
from mfparser.extractors.geo import split_pair, to_number
from mfparser.items import EmbeddedItem, NumberValue, PlainText

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class TestNumbers:
    def test_to_number(self):
        assert to_number(" -122.5 ") == NumberValue(-122.5)
        assert to_number("+4") == NumberValue(4.0)
        assert to_number("north") is None

    def test_split_pair(self):
        assert split_pair("37.38; -122.08") == (NumberValue(37.38), NumberValue(-122.08))

    def test_split_pair_keeps_text_half(self):
        assert split_pair("37.38;abc") == (NumberValue(37.38), PlainText("abc"))

    def test_split_pair_rejects_other_shapes(self):
        assert split_pair("37.38") is None
        assert split_pair("1;2;3") is None
        assert split_pair(";2") is None


# ---------------------------------------------------------------------------
# Through get()
# ---------------------------------------------------------------------------

class TestGeoEnrichment:
    def test_disabled_by_default(self, geo_html):
        card = get(geo_html).items[0]
        assert card.get("geo") == (PlainText("37.386013;-122.082932"),)

    def test_geo_string_becomes_embedded_item(self, geo_html):
        card = get(geo_html, parseLatLonGeo=True).items[0]
        (geo,) = card.get("geo")
        assert isinstance(geo, EmbeddedItem)
        assert geo.item.to_dict() == {
            "type": ["h-geo"],
            "properties": {"latitude": [37.386013], "longitude": [-122.082932]},
            "value": "37.386013;-122.082932",
        }

    def test_discrete_coordinates_parsed(self, geo_html):
        card = get(geo_html, parseLatLonGeo=True).items[0]
        (location,) = card.get("location")
        assert location.item.get("latitude") == (NumberValue(51.5),)

    def test_unparseable_coordinate_kept_as_text(self, geo_html):
        card = get(geo_html, parseLatLonGeo=True).items[0]
        (location,) = card.get("location")
        assert location.item.get("longitude") == (PlainText("west"),)

    def test_legacy_geo_title(self, geo_html):
        doc = get(geo_html, parseLatLonGeo=True)
        legacy_geo = doc.items[1]
        assert legacy_geo.type == ("h-geo",)
        assert legacy_geo.to_dict()["properties"] == {"latitude": [48.2], "longitude": [16.37]}

    def test_implied_name_split(self):
        doc = get('<span class="h-geo">10.5;20.25</span>', parseLatLonGeo=True)
        assert doc.items[0].to_dict()["properties"] == {
            "name": ["10.5;20.25"],
            "latitude": [10.5],
            "longitude": [20.25],
        }
