"""mfparser.query - one-call microformats extraction API.

Parses a markup string and returns every microformat item in it together
with the document's link relations.  No network access: fetching the page is
the caller's job.

Basic usage::

    from mfparser.query import get

    doc = get(html, base_url="https://example.com/")
    for item in doc.items:
        print(item.type, item.get("name"))

    # As plain data in the microformats2 JSON shape
    data = get(html).to_dict()

Options can be passed as a mapping with the camelCase keys of the
microformats parser service, as keyword arguments, or both::

    get(html, {"dateFormat": "normalized"}, filters=["h-entry"])

Counting instead of extracting::

    from mfparser.query import count

    count(html)   # {"h-card": 2, "p-name": 1, ...}
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from bs4 import BeautifulSoup

from mfparser.extractors.builder import ItemBuilder
from mfparser.extractors.counter import count_document
from mfparser.extractors.rels import extract_rels
from mfparser.extractors.roots import iter_roots
from mfparser.extractors.tree import check_depth, document_base_url, load_document
from mfparser.extractors.vocab import passes_for
from mfparser.filters import filter_items
from mfparser.items import Document, Item
from mfparser.options import ParseOptions, resolve_options

logger = logging.getLogger(__name__)


def _prepare(
    html: str,
    options: ParseOptions | Mapping[str, Any] | None,
    overrides: dict[str, Any],
) -> tuple[BeautifulSoup, ParseOptions]:
    opts = resolve_options(options, **overrides)
    soup = load_document(html)
    check_depth(soup, opts.max_depth)
    return soup, opts


def _collect_items(soup: BeautifulSoup, opts: ParseOptions, base_url: str) -> list[Item]:
    """Build the top-level items of every vocabulary pass.

    Items of separate passes are interleaved by the document position of
    their root element; on a tie the earlier pass (v2) comes first.
    """
    positions = {id(tag): index for index, tag in enumerate(soup.find_all(True))}
    found: list[tuple[int, int, Item]] = []
    for order, vocabulary in enumerate(passes_for(opts.overlapping_versions)):
        builder = ItemBuilder(vocabulary, opts, base_url)
        for tag, spec in iter_roots(soup, vocabulary):
            found.append((positions[id(tag)], order, builder.build(tag, spec)))
    found.sort(key=lambda entry: (entry[0], entry[1]))
    return [item for _, _, item in found]


# ---------------------------------------------------------------------------
# Main public API
# ---------------------------------------------------------------------------

def get(
    html: str,
    options: ParseOptions | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> Document:
    """Extract every microformat item and link relation from *html*.

    Args:
        html:        Markup to parse.  Malformed markup is accepted; whatever
                     structure can be recovered is used.
        options:     A :class:`~mfparser.options.ParseOptions`, or a mapping
                     using the camelCase or snake_case option names.
        **overrides: Individual options, applied on top of *options*.

    Returns:
        :class:`~mfparser.items.Document` with the top-level items in
        document order, ``rels`` and ``rel_urls``.  Empty collections when
        the markup holds nothing.

    Raises:
        :class:`~mfparser.options.ConfigurationError`: On unknown or invalid
            options, before the markup is parsed.
        :class:`~mfparser.extractors.tree.DepthLimitError`: When elements
            nest deeper than ``max_depth``.
    """
    soup, opts = _prepare(html, options, overrides)
    base_url = document_base_url(soup, opts.base_url)

    items = filter_items(_collect_items(soup, opts, base_url), opts.filters)
    rels, rel_urls = extract_rels(soup, base_url, opts.text_format)

    logger.debug("Extracted %d items, %d rel keywords", len(items), len(rels))
    return Document(items=tuple(items), rels=rels, rel_urls=rel_urls)


def count(
    html: str,
    options: ParseOptions | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> dict[str, int]:
    """Count item types and property keys in *html*.

    Uses the same classification as :func:`get` but builds no values.  Type
    names count once per item (nested items included); property keys count
    once per element in prefixed form (``p-name``, ``dt-start``).

    Returns:
        ``{name: occurrences}`` in insertion order.

    Raises:
        Same as :func:`get`.
    """
    soup, opts = _prepare(html, options, overrides)
    return count_document(soup, opts)
