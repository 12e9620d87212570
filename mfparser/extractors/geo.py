"""Latitude/longitude enrichment, enabled by ``parseLatLonGeo``.

- ``latitude``, ``longitude`` and ``altitude`` of an ``h-geo`` item become
  numbers when they parse as numbers.
- An ``h-geo`` item without discrete coordinates takes them from a combined
  ``"lat;long"`` string in its name, ``abbr`` title or text.
- A plain-text ``geo`` property holding such a string becomes an embedded
  ``h-geo`` item.

Values that do not parse are kept as the text they were.
"""

from __future__ import annotations

import logging
import re

from bs4.element import Tag

from mfparser.extractors.tree import attr, render_text
from mfparser.items import EmbeddedItem, Item, NumberValue, PlainText, PropertyValue, freeze_properties
from mfparser.options import TextFormat

logger = logging.getLogger(__name__)

_NUMBER_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)$")

_COORDINATES: tuple[str, ...] = ("latitude", "longitude", "altitude")


def to_number(text: str) -> NumberValue | None:
    """Return *text* as a :class:`NumberValue`, or None if it is not numeric."""
    cleaned = text.strip()
    if not _NUMBER_RE.match(cleaned):
        return None
    return NumberValue(float(cleaned))


def _numeric(value: PropertyValue) -> PropertyValue:
    if not isinstance(value, PlainText):
        return value
    number = to_number(value.value)
    if number is None:
        logger.debug("Keeping non-numeric coordinate %r", value.value)
        return value
    return number


def split_pair(text: str) -> tuple[PropertyValue, PropertyValue] | None:
    """Split ``"lat;long"`` into two values, or return None.

    Each half becomes a number when it parses as one and stays text otherwise.
    """
    halves = text.split(";")
    if len(halves) != 2 or not all(half.strip() for half in halves):
        return None
    return _numeric(PlainText(halves[0].strip())), _numeric(PlainText(halves[1].strip()))


def _combined_text(
    properties: dict[str, list[PropertyValue]],
    tag: Tag,
    text_format: TextFormat,
) -> str:
    for value in properties.get("name", ()):
        if isinstance(value, PlainText):
            return value.value
    if tag.name == "abbr":
        title = attr(tag, "title")
        if title:
            return title
    return render_text(tag, text_format)


def _embed(value: PropertyValue) -> PropertyValue:
    if not isinstance(value, PlainText):
        return value
    pair = split_pair(value.value)
    if pair is None:
        return value
    latitude, longitude = pair
    item = Item(
        type=("h-geo",),
        properties=freeze_properties({"latitude": [latitude], "longitude": [longitude]}),
        value=value.value,
    )
    return EmbeddedItem(item)


def apply_geo(
    types: tuple[str, ...],
    properties: dict[str, list[PropertyValue]],
    tag: Tag,
    text_format: TextFormat = TextFormat.NORMALIZED,
) -> None:
    """Rewrite coordinate properties of one item in place."""
    if "h-geo" in types:
        if any(name in properties for name in ("latitude", "longitude")):
            for name in _COORDINATES:
                if name in properties:
                    properties[name] = [_numeric(v) for v in properties[name]]
        else:
            pair = split_pair(_combined_text(properties, tag, text_format))
            if pair is not None:
                properties["latitude"] = [pair[0]]
                properties["longitude"] = [pair[1]]

    if "geo" in properties:
        properties["geo"] = [_embed(v) for v in properties["geo"]]
