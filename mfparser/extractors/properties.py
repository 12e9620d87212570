"""Property classification and per-prefix value extraction.

Precedence per prefix (first match wins):

    p-   value-class pattern → abbr/link[title] → data/input[value]
         → img/area[alt] → rendered text
    u-   a/area/link[href] → img/audio/video/source/iframe/embed[src]
         → video[poster] → object[data] → value-class pattern
         → abbr[title] → data/input[value] → rendered text
    dt-  value-class pattern → time/ins/del[datetime] → abbr[title]
         → data/input[value] → rendered text
    e-   inner markup + rendered text
"""

from __future__ import annotations

from dataclasses import dataclass

from bs4.element import Tag

from mfparser.extractors.datetimes import DateTimeParts, combine_parts, parse_datetime
from mfparser.extractors.tree import (
    attr,
    class_tokens,
    element_children,
    inner_html,
    language_of,
    render_text,
    tokens,
)
from mfparser.extractors.urlnorm import last_path_segment, resolve_url
from mfparser.extractors.vocab import LegacyVocabulary, has_root_class, v2_property_classes
from mfparser.items import HtmlValue, ImageValue, PlainText, UrlValue
from mfparser.options import DateFormat, TextFormat

_LINK_TAGS: frozenset[str] = frozenset({"a", "area", "link"})
_SRC_TAGS: frozenset[str] = frozenset({"img", "audio", "video", "source", "iframe", "embed"})


@dataclass(frozen=True)
class ValueContext:
    """Per-call settings every value extraction needs."""

    base_url: str = ""
    text_format: TextFormat = TextFormat.NORMALIZED
    date_format: DateFormat = DateFormat.RAW


@dataclass(frozen=True)
class PropertyToken:
    """One property an element contributes to its item."""

    prefix: str
    name: str
    implied_type: str | None = None
    tag_segment: bool = False

    @property
    def key(self) -> str:
        return f"{self.prefix}-{self.name}"


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

def property_tokens(tag: Tag, v2: bool, legacy: LegacyVocabulary) -> list[PropertyToken]:
    """Return the properties *tag* declares, in class order.

    An element yields each (prefix, name) pair once, even when a v2 class and
    a legacy class map to the same property.
    """
    found: list[PropertyToken] = []
    seen: set[tuple[str, str]] = set()

    def _add(token: PropertyToken) -> None:
        if (token.prefix, token.name) not in seen:
            seen.add((token.prefix, token.name))
            found.append(token)

    classes = class_tokens(tag)
    if v2:
        for prefix, name in v2_property_classes(classes):
            _add(PropertyToken(prefix, name))
    if legacy:
        for cls in classes:
            prop = legacy.properties.get(cls)
            if prop is not None:
                _add(PropertyToken(prop.prefix, prop.name, implied_type=prop.implied_type))
        if tag.name in _LINK_TAGS and attr(tag, "href") is not None:
            for rel in tokens(tag, "rel"):
                prop = legacy.rels.get(rel)
                if prop is not None:
                    _add(PropertyToken(prop.prefix, prop.name, tag_segment=prop.tag_segment))
    return found


# ---------------------------------------------------------------------------
# Value-class pattern
# ---------------------------------------------------------------------------

def value_class_nodes(tag: Tag) -> list[Tag]:
    """Return descendants classed ``value``/``value-title`` outside nested roots."""
    found: list[Tag] = []
    for child in element_children(tag):
        classes = class_tokens(child)
        if has_root_class(classes):
            continue
        if "value" in classes or "value-title" in classes:
            found.append(child)
        else:
            found.extend(value_class_nodes(child))
    return found


def _value_text(node: Tag, ctx: ValueContext) -> str:
    if "value-title" in class_tokens(node):
        return attr(node, "title") or ""
    if node.name in ("img", "area"):
        return attr(node, "alt") or ""
    if node.name == "data":
        return _attr_or_text(node, "value", ctx)
    if node.name == "abbr":
        return _attr_or_text(node, "title", ctx)
    return render_text(node, ctx.text_format)


def _value_datetime_text(node: Tag, ctx: ValueContext) -> str:
    if node.name in ("del", "ins", "time"):
        return _attr_or_text(node, "datetime", ctx)
    return _value_text(node, ctx)


def _attr_or_text(node: Tag, name: str, ctx: ValueContext) -> str:
    val = attr(node, name)
    if val is not None:
        return val
    return render_text(node, ctx.text_format)


# ---------------------------------------------------------------------------
# Per-prefix extraction
# ---------------------------------------------------------------------------

def plain_value(tag: Tag, ctx: ValueContext) -> str:
    nodes = value_class_nodes(tag)
    if nodes:
        return "".join(_value_text(node, ctx) for node in nodes).strip()
    if tag.name in ("abbr", "link") and attr(tag, "title") is not None:
        return (attr(tag, "title") or "").strip()
    if tag.name in ("data", "input") and attr(tag, "value") is not None:
        return (attr(tag, "value") or "").strip()
    if tag.name in ("img", "area") and attr(tag, "alt") is not None:
        return (attr(tag, "alt") or "").strip()
    return render_text(tag, ctx.text_format)


def _url_attribute(tag: Tag) -> str | None:
    if tag.name in _LINK_TAGS:
        return attr(tag, "href")
    if tag.name in _SRC_TAGS:
        src = attr(tag, "src")
        if src is None and tag.name == "video":
            return attr(tag, "poster")
        return src
    if tag.name == "object":
        return attr(tag, "data")
    return None


def url_value(tag: Tag, ctx: ValueContext) -> UrlValue | ImageValue:
    raw = _url_attribute(tag)
    if raw is not None:
        url = resolve_url(raw, ctx.base_url)
        alt = attr(tag, "alt")
        if tag.name == "img" and alt is not None:
            return ImageValue(value=url, alt=alt)
        return UrlValue(url)

    nodes = value_class_nodes(tag)
    if nodes:
        raw = "".join(_value_text(node, ctx) for node in nodes)
    elif tag.name == "abbr" and attr(tag, "title") is not None:
        raw = attr(tag, "title")
    elif tag.name in ("data", "input") and attr(tag, "value") is not None:
        raw = attr(tag, "value")
    else:
        raw = render_text(tag, ctx.text_format)

    raw = (raw or "").strip()
    return UrlValue(resolve_url(raw, ctx.base_url) if raw else "")


def tag_segment_value(tag: Tag, ctx: ValueContext) -> PlainText:
    """Value of a ``rel=tag`` link: the last path segment of its target."""
    url = resolve_url(attr(tag, "href") or "", ctx.base_url)
    return PlainText(last_path_segment(url))


def datetime_parts(tag: Tag, ctx: ValueContext) -> DateTimeParts:
    nodes = value_class_nodes(tag)
    if nodes:
        return combine_parts([parse_datetime(_value_datetime_text(n, ctx)) for n in nodes])
    if tag.name in ("time", "ins", "del") and attr(tag, "datetime") is not None:
        raw = attr(tag, "datetime") or ""
    elif tag.name == "abbr" and attr(tag, "title") is not None:
        raw = attr(tag, "title") or ""
    elif tag.name in ("data", "input") and attr(tag, "value") is not None:
        raw = attr(tag, "value") or ""
    else:
        raw = render_text(tag, ctx.text_format)
    return parse_datetime(raw)


def html_value(tag: Tag, ctx: ValueContext) -> HtmlValue:
    return HtmlValue(
        html=inner_html(tag, ctx.base_url),
        value=render_text(tag, ctx.text_format),
        lang=language_of(tag),
    )
