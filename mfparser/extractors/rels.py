"""Document-wide link relations (``rels`` and ``rel-urls``)."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from bs4 import BeautifulSoup

from mfparser.extractors.tree import attr, render_text, tokens
from mfparser.extractors.urlnorm import resolve_url
from mfparser.items import RelUrl
from mfparser.options import TextFormat

logger = logging.getLogger(__name__)

_LINK_TAGS: list[str] = ["a", "area", "link"]
_META_ATTRIBUTES: tuple[str, ...] = ("media", "type", "hreflang", "title")


def extract_rels(
    soup: BeautifulSoup,
    base_url: str = "",
    text_format: TextFormat = TextFormat.NORMALIZED,
) -> tuple[Mapping[str, tuple[str, ...]], Mapping[str, RelUrl]]:
    """Collect every ``rel``/``rev`` link in *soup*, ignoring item boundaries.

    Returns:
        ``(rels, rel_urls)``.  ``rels`` maps each keyword to the absolutized
        URLs carrying it, in document order with duplicates kept.
        ``rel_urls`` maps each URL to its keywords (first-seen order) and the
        first non-empty text, media, type, hreflang and title seen for it.
    """
    rels: dict[str, list[str]] = {}
    meta: dict[str, dict[str, Any]] = {}

    for tag in soup.find_all(_LINK_TAGS):
        href = attr(tag, "href")
        if href is None:
            continue
        keywords: list[str] = []
        for keyword in tokens(tag, "rel") + tokens(tag, "rev"):
            if keyword not in keywords:
                keywords.append(keyword)
        if not keywords:
            continue

        url = resolve_url(href, base_url)
        for keyword in keywords:
            rels.setdefault(keyword, []).append(url)

        entry = meta.setdefault(url, {"rels": []})
        for keyword in keywords:
            if keyword not in entry["rels"]:
                entry["rels"].append(keyword)
        for name in _META_ATTRIBUTES:
            if name not in entry:
                val = (attr(tag, name) or "").strip()
                if val:
                    entry[name] = val
        if "text" not in entry:
            text = render_text(tag, text_format)
            if text:
                entry["text"] = text

    logger.debug("Found %d relation keywords over %d URLs", len(rels), len(meta))
    rel_urls = {
        url: RelUrl(
            rels=tuple(entry["rels"]),
            text=entry.get("text"),
            media=entry.get("media"),
            type=entry.get("type"),
            hreflang=entry.get("hreflang"),
            title=entry.get("title"),
        )
        for url, entry in meta.items()
    }
    return (
        MappingProxyType({keyword: tuple(urls) for keyword, urls in rels.items()}),
        MappingProxyType(rel_urls),
    )
