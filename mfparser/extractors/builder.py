"""Item construction: walk one root's subtree into an :class:`Item`.

The walk visits every descendant of the root but stops at nested item roots.
A nested root is built recursively and then either becomes the value of the
properties its element declares, or, when it declares none, a child of the
current item.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from bs4.element import Tag

from mfparser.extractors.datetimes import DateSlot, DateTimeMerger, format_datetime
from mfparser.extractors.geo import apply_geo
from mfparser.extractors.implied import apply_implied
from mfparser.extractors.properties import (
    PropertyToken,
    ValueContext,
    datetime_parts,
    html_value,
    plain_value,
    property_tokens,
    tag_segment_value,
    url_value,
)
from mfparser.extractors.roots import RootSpec, classify_root
from mfparser.extractors.tree import attr, class_tokens, element_children, language_of
from mfparser.extractors.vocab import Vocabulary, has_root_class
from mfparser.items import (
    DateTimeValue,
    EmbeddedItem,
    ImageValue,
    Item,
    PlainText,
    PropertyValue,
    UrlValue,
    freeze_properties,
)
from mfparser.options import DateFormat, ParseOptions

logger = logging.getLogger(__name__)


class _ItemState:
    """Mutable accumulator for one item under construction."""

    def __init__(self, spec: RootSpec) -> None:
        self.spec = spec
        self.values: dict[str, list[PropertyValue | DateSlot]] = {}
        self.prefixes: set[str] = set()
        self.children: list[Item] = []
        self.has_nested = False
        self.dates = DateTimeMerger()

    def add(self, token: PropertyToken, value: PropertyValue | DateSlot | None) -> None:
        self.prefixes.add(token.prefix)
        values = self.values.setdefault(token.name, [])
        if value is not None:
            values.append(value)

    def finalize(self, date_format: DateFormat) -> dict[str, list[PropertyValue]]:
        out: dict[str, list[PropertyValue]] = {}
        for name, values in self.values.items():
            out[name] = [
                DateTimeValue(format_datetime(v.parts, date_format)) if isinstance(v, DateSlot) else v
                for v in values
            ]
        return out


class ItemBuilder:
    """Build items for one vocabulary pass.

    Args:
        vocabulary: The class vocabularies the pass recognizes.
        options:    Validated parse options.
        base_url:   Effective base URL of the document.
    """

    def __init__(self, vocabulary: Vocabulary, options: ParseOptions, base_url: str = "") -> None:
        self._vocabulary = vocabulary
        self._options = options
        self._ctx = ValueContext(
            base_url=base_url,
            text_format=options.text_format,
            date_format=options.date_format,
        )

    def build(self, tag: Tag, spec: RootSpec) -> Item:
        """Return the item rooted at *tag*."""
        state = _ItemState(spec)
        self._collect(tag, state)
        properties = state.finalize(self._ctx.date_format)

        if spec.v2 or not self._options.implied_properties_by_version:
            apply_implied(
                tag,
                properties,
                state.prefixes,
                state.has_nested,
                lambda node: self._is_implied_candidate(node, spec),
                self._ctx,
            )
        if self._options.parse_lat_lon_geo:
            apply_geo(spec.types, properties, tag, self._ctx.text_format)

        logger.debug("Built %s with %d properties", "/".join(spec.types), len(properties))

        return Item(
            type=spec.types,
            properties=freeze_properties(properties),
            id=attr(tag, "id") or None,
            lang=language_of(tag),
            children=tuple(state.children),
        )

    # ------------------------------------------------------------------
    # Walk
    # ------------------------------------------------------------------

    def _tokens(self, tag: Tag, spec: RootSpec) -> list[PropertyToken]:
        return property_tokens(tag, self._vocabulary.v2, spec.legacy)

    def _collect(self, parent: Tag, state: _ItemState) -> None:
        for child in element_children(parent):
            tokens = self._tokens(child, state.spec)
            implied_type = next((t.implied_type for t in tokens if t.implied_type), None)
            nested_spec = classify_root(child, self._vocabulary, implied_type)

            if nested_spec is not None:
                state.has_nested = True
                nested = self.build(child, nested_spec)
                if not tokens:
                    state.children.append(nested)
                    continue
                for token in tokens:
                    state.add(token, self._embedded(token, child, nested))
                continue

            for token in tokens:
                self._add_value(state, token, child)
            self._collect(child, state)

    def _add_value(self, state: _ItemState, token: PropertyToken, tag: Tag) -> None:
        if token.prefix == "dt":
            state.add(token, state.dates.add(token.name, datetime_parts(tag, self._ctx)))
        elif token.prefix == "u":
            state.add(token, url_value(tag, self._ctx))
        elif token.prefix == "e":
            state.add(token, html_value(tag, self._ctx))
        elif token.tag_segment:
            state.add(token, tag_segment_value(tag, self._ctx))
        else:
            state.add(token, PlainText(plain_value(tag, self._ctx)))

    def _embedded(self, token: PropertyToken, tag: Tag, nested: Item) -> EmbeddedItem:
        """Wrap *nested* as the value of *token*, setting its plain ``value``."""
        html = None
        if token.prefix == "p":
            name = next((v.value for v in nested.get("name") if isinstance(v, PlainText)), None)
            value = name if name is not None else plain_value(tag, self._ctx)
        elif token.prefix == "u":
            url = next(
                (v.value for v in nested.get("url") if isinstance(v, (UrlValue, ImageValue))),
                None,
            )
            value = url if url is not None else url_value(tag, self._ctx).value
        elif token.prefix == "dt":
            value = format_datetime(datetime_parts(tag, self._ctx), self._ctx.date_format)
        else:
            embedded = html_value(tag, self._ctx)
            value, html = embedded.value, embedded.html
        return EmbeddedItem(replace(nested, value=value, html=html))

    def _is_implied_candidate(self, node: Tag, spec: RootSpec) -> bool:
        if has_root_class(class_tokens(node)):
            return False
        return not self._tokens(node, spec)
