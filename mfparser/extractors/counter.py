"""Occurrence counting over the same classification as item building.

No values are computed: each item root adds one to every one of its types
and each property element adds one to every property key it declares
(``p-name``, ``u-url`` ...).
"""

from __future__ import annotations

import logging
from collections import Counter

from bs4 import BeautifulSoup
from bs4.element import Tag

from mfparser.extractors.properties import property_tokens
from mfparser.extractors.roots import RootSpec, classify_root, iter_roots
from mfparser.extractors.tree import element_children
from mfparser.extractors.vocab import Vocabulary, passes_for
from mfparser.filters import matches_filters
from mfparser.options import ParseOptions

logger = logging.getLogger(__name__)


class _TallyWalker:
    def __init__(self, vocabulary: Vocabulary, counts: Counter[str]) -> None:
        self._vocabulary = vocabulary
        self._counts = counts

    def count_item(self, tag: Tag, spec: RootSpec) -> None:
        for type_ in spec.types:
            self._counts[type_] += 1
        self._walk(tag, spec)

    def _walk(self, parent: Tag, spec: RootSpec) -> None:
        for child in element_children(parent):
            tokens = property_tokens(child, self._vocabulary.v2, spec.legacy)
            for token in tokens:
                self._counts[token.key] += 1
            implied_type = next((t.implied_type for t in tokens if t.implied_type), None)
            nested = classify_root(child, self._vocabulary, implied_type)
            if nested is not None:
                self.count_item(child, nested)
            else:
                self._walk(child, spec)


def count_document(soup: BeautifulSoup, options: ParseOptions) -> dict[str, int]:
    """Return ``{type or property key: occurrences}`` for *soup*.

    With filters set, only matching top-level items and their subtrees are
    counted.
    """
    counts: Counter[str] = Counter()
    for vocabulary in passes_for(options.overlapping_versions):
        walker = _TallyWalker(vocabulary, counts)
        for tag, spec in iter_roots(soup, vocabulary):
            if matches_filters(spec.types, options.filters):
                walker.count_item(tag, spec)
    logger.debug("Counted %d distinct names", len(counts))
    return dict(counts)
