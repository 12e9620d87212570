"""Root classification: which elements start a microformat item."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from bs4.element import Tag

from mfparser.extractors.tree import class_tokens, element_children
from mfparser.extractors.vocab import (
    EMPTY_LEGACY,
    LegacyVocabulary,
    Vocabulary,
    legacy_root_types,
    legacy_vocabulary,
    v2_root_types,
)


@dataclass(frozen=True)
class RootSpec:
    """Classification of one item root element."""

    types: tuple[str, ...]
    v2: bool  # carries at least one h-* class
    legacy: LegacyVocabulary  # legacy properties recognized inside the item


def classify_root(
    tag: Tag,
    vocabulary: Vocabulary,
    implied_type: str | None = None,
) -> RootSpec | None:
    """Return the :class:`RootSpec` of *tag*, or None if it is not a root.

    *implied_type* is the type named by a legacy property that always holds
    an item (hReview ``item``); it is used only when the element carries no
    root class of its own.
    """
    classes = class_tokens(tag)
    v2_types = v2_root_types(classes) if vocabulary.v2 else []
    legacy_types = legacy_root_types(classes) if vocabulary.legacy else []
    if vocabulary.legacy and implied_type and not v2_types and not legacy_types:
        legacy_types = [implied_type]

    types: list[str] = list(v2_types)
    for type_ in legacy_types:
        if type_ not in types:
            types.append(type_)
    if not types:
        return None

    legacy = EMPTY_LEGACY
    if vocabulary.legacy:
        legacy = legacy_vocabulary(types)
    return RootSpec(types=tuple(types), v2=bool(v2_types), legacy=legacy)


def iter_roots(node: Tag, vocabulary: Vocabulary) -> Iterator[tuple[Tag, RootSpec]]:
    """Yield the outermost item roots below *node* in document order.

    Descent stops at each root; nested items belong to the item builder.
    """
    for child in element_children(node):
        spec = classify_root(child, vocabulary)
        if spec is not None:
            yield child, spec
        else:
            yield from iter_roots(child, vocabulary)
