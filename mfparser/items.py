"""Result data model: documents, items and property values.

Property values form a closed union of frozen dataclasses.  Serialization to
the microformats2 JSON shape happens in :func:`value_to_json`, which handles
every member of the union and rejects anything else.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

_EMPTY: Mapping[str, Any] = MappingProxyType({})


# ---------------------------------------------------------------------------
# Property values
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PlainText:
    value: str


@dataclass(frozen=True)
class UrlValue:
    value: str  # absolute when a base URL was available


@dataclass(frozen=True)
class DateTimeValue:
    value: str


@dataclass(frozen=True)
class ImageValue:
    value: str
    alt: str


@dataclass(frozen=True)
class HtmlValue:
    html: str
    value: str
    lang: str | None = None


@dataclass(frozen=True)
class NumberValue:
    value: float


@dataclass(frozen=True)
class EmbeddedItem:
    item: Item


PropertyValue = (
    PlainText | UrlValue | DateTimeValue | ImageValue | HtmlValue | NumberValue | EmbeddedItem
)


# ---------------------------------------------------------------------------
# Items and documents
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Item:
    """A single microformat item.

    ``value`` and ``html`` are only set when the item is the value of a
    parent property; top-level items and ``children`` leave them empty.
    """

    type: tuple[str, ...]
    properties: Mapping[str, tuple[PropertyValue, ...]] = field(default_factory=lambda: _EMPTY)
    value: str | None = None
    html: str | None = None
    id: str | None = None
    lang: str | None = None
    children: tuple[Item, ...] = ()

    def get(self, name: str) -> tuple[PropertyValue, ...]:
        """Return the values of property *name*, or an empty tuple."""
        return self.properties.get(name, ())

    def to_dict(self) -> dict[str, Any]:
        return item_to_json(self)


@dataclass(frozen=True)
class RelUrl:
    """Aggregated metadata for one URL seen in ``rel``/``rev`` links."""

    rels: tuple[str, ...]
    text: str | None = None
    media: str | None = None
    type: str | None = None
    hreflang: str | None = None
    title: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"rels": list(self.rels)}
        for key in ("text", "media", "type", "hreflang", "title"):
            val = getattr(self, key)
            if val:
                out[key] = val
        return out


@dataclass(frozen=True)
class Document:
    """Everything extracted from one piece of markup."""

    items: tuple[Item, ...] = ()
    rels: Mapping[str, tuple[str, ...]] = field(default_factory=lambda: _EMPTY)
    rel_urls: Mapping[str, RelUrl] = field(default_factory=lambda: _EMPTY)

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": [item_to_json(item) for item in self.items],
            "rels": {key: list(urls) for key, urls in self.rels.items()},
            "rel-urls": {url: meta.to_dict() for url, meta in self.rel_urls.items()},
        }

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


def freeze_properties(
    properties: Mapping[str, list[PropertyValue]],
) -> Mapping[str, tuple[PropertyValue, ...]]:
    """Turn a builder's ``{name: [values]}`` dict into a read-only mapping."""
    return MappingProxyType({name: tuple(values) for name, values in properties.items()})


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

def item_to_json(item: Item) -> dict[str, Any]:
    out: dict[str, Any] = {"type": list(item.type)}
    if item.id:
        out["id"] = item.id
    if item.lang:
        out["lang"] = item.lang
    out["properties"] = {
        name: [value_to_json(v) for v in values]
        for name, values in item.properties.items()
    }
    if item.value is not None:
        out["value"] = item.value
    if item.html is not None:
        out["html"] = item.html
    if item.children:
        out["children"] = [item_to_json(child) for child in item.children]
    return out


def value_to_json(value: PropertyValue) -> Any:
    if isinstance(value, (PlainText, UrlValue, DateTimeValue, NumberValue)):
        return value.value
    if isinstance(value, ImageValue):
        return {"value": value.value, "alt": value.alt}
    if isinstance(value, HtmlValue):
        out: dict[str, Any] = {"html": value.html, "value": value.value}
        if value.lang:
            out["lang"] = value.lang
        return out
    if isinstance(value, EmbeddedItem):
        return item_to_json(value.item)
    raise TypeError(f"Unknown property value type: {type(value).__name__}")
