"""Microformats vocabulary: v2 class patterns and the legacy (v1) mapping tables.

The legacy tables translate classic root classes (``vcard``, ``hentry`` ...)
to v2 types and their property classes (``fn``, ``entry-title`` ...) to v2
prefixed properties.  They are built once at import time and exposed as
read-only mappings.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

# ---------------------------------------------------------------------------
# v2 class patterns
# ---------------------------------------------------------------------------

V2_ROOT_RE = re.compile(r"^h-(?:[a-z0-9]+-)?[a-z]+(?:-[a-z]+)*$")
V2_PROPERTY_RE = re.compile(r"^(p|u|dt|e)-((?:[a-z0-9]+-)?[a-z]+(?:-[a-z]+)*)$")

PREFIXES: tuple[str, ...] = ("p", "u", "dt", "e")


@dataclass(frozen=True)
class Vocabulary:
    """Which class vocabularies a parsing pass recognizes."""

    v2: bool = True
    legacy: bool = True


V2_ONLY = Vocabulary(v2=True, legacy=False)
LEGACY_ONLY = Vocabulary(v2=False, legacy=True)
MERGED = Vocabulary(v2=True, legacy=True)


def passes_for(overlapping_versions: bool) -> tuple[Vocabulary, ...]:
    """Return the parsing passes for the ``overlappingVersions`` setting."""
    if overlapping_versions:
        return (MERGED,)
    return (V2_ONLY, LEGACY_ONLY)


# ---------------------------------------------------------------------------
# Legacy tables
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LegacyProperty:
    name: str
    prefix: str
    # Item type produced when the element carries no root class of its own
    implied_type: str | None = None
    # rel=tag style: the value is the last path segment of the link
    tag_segment: bool = False

    @property
    def key(self) -> str:
        return f"{self.prefix}-{self.name}"


@dataclass(frozen=True)
class LegacyFormat:
    root: str | None
    type: str
    properties: Mapping[str, LegacyProperty]
    rels: Mapping[str, LegacyProperty]


def _prop(spec: str, implied_type: str | None = None) -> LegacyProperty:
    prefix, _, name = spec.partition("-")
    return LegacyProperty(name=name, prefix=prefix, implied_type=implied_type)


def _format(
    root: str | None,
    type_: str,
    properties: dict[str, str | tuple[str, str]],
    rels: dict[str, str] | None = None,
) -> LegacyFormat:
    props: dict[str, LegacyProperty] = {}
    for cls, spec in properties.items():
        if isinstance(spec, tuple):
            props[cls] = _prop(spec[0], implied_type=spec[1])
        else:
            props[cls] = _prop(spec)
    rel_props: dict[str, LegacyProperty] = {}
    for rel, spec in (rels or {}).items():
        prop = _prop(spec)
        if rel == "tag":
            prop = LegacyProperty(name=prop.name, prefix=prop.prefix, tag_segment=True)
        rel_props[rel] = prop
    return LegacyFormat(
        root=root,
        type=type_,
        properties=MappingProxyType(props),
        rels=MappingProxyType(rel_props),
    )


_ADR_PROPERTIES: dict[str, str | tuple[str, str]] = {
    "post-office-box": "p-post-office-box",
    "extended-address": "p-extended-address",
    "street-address": "p-street-address",
    "locality": "p-locality",
    "region": "p-region",
    "postal-code": "p-postal-code",
    "country-name": "p-country-name",
}

_ENTRY_PROPERTIES: dict[str, str | tuple[str, str]] = {
    "entry-title": "p-name",
    "entry-summary": "p-summary",
    "entry-content": "e-content",
    "published": "dt-published",
    "updated": "dt-updated",
    "author": "p-author",
    "category": "p-category",
    "geo": "p-geo",
    "latitude": "p-latitude",
    "longitude": "p-longitude",
}

_TAG_REL = {"tag": "p-category"}

_FORMATS: tuple[LegacyFormat, ...] = (
    _format("adr", "h-adr", _ADR_PROPERTIES),
    _format("geo", "h-geo", {"latitude": "p-latitude", "longitude": "p-longitude"}),
    _format(
        "vcard",
        "h-card",
        {
            "fn": "p-name",
            "honorific-prefix": "p-honorific-prefix",
            "given-name": "p-given-name",
            "additional-name": "p-additional-name",
            "family-name": "p-family-name",
            "honorific-suffix": "p-honorific-suffix",
            "nickname": "p-nickname",
            "sort-string": "p-sort-string",
            "email": "u-email",
            "logo": "u-logo",
            "photo": "u-photo",
            "url": "u-url",
            "uid": "u-uid",
            "key": "u-key",
            "sound": "u-sound",
            "category": "p-category",
            "adr": "p-adr",
            "label": "p-label",
            "geo": "p-geo",
            "latitude": "p-latitude",
            "longitude": "p-longitude",
            "tel": "p-tel",
            "note": "p-note",
            "bday": "dt-bday",
            "rev": "dt-rev",
            "org": "p-org",
            "organization-name": "p-organization-name",
            "organization-unit": "p-organization-unit",
            "title": "p-job-title",
            "role": "p-role",
            "tz": "p-tz",
            "agent": "p-agent",
            **_ADR_PROPERTIES,
        },
        _TAG_REL,
    ),
    _format("hentry", "h-entry", _ENTRY_PROPERTIES, {"bookmark": "u-url", **_TAG_REL}),
    _format(
        "hfeed",
        "h-feed",
        {"author": "p-author", "url": "u-url", "photo": "u-photo", "category": "p-category"},
        _TAG_REL,
    ),
    _format(
        "hnews",
        "h-news",
        {
            "entry": "p-entry",
            "source-org": "p-source-org",
            "dateline": "p-dateline",
            "geo": "p-geo",
            "latitude": "p-latitude",
            "longitude": "p-longitude",
        },
        {"principles": "u-principles"},
    ),
    _format(
        "vevent",
        "h-event",
        {
            "summary": "p-name",
            "dtstart": "dt-start",
            "dtend": "dt-end",
            "duration": "dt-duration",
            "description": "p-description",
            "url": "u-url",
            "category": "p-category",
            "location": "p-location",
            "geo": "p-location",
            "latitude": "p-latitude",
            "longitude": "p-longitude",
            "attendee": "p-attendee",
            "contact": "p-contact",
            "organizer": "p-organizer",
        },
        _TAG_REL,
    ),
    _format(
        "hproduct",
        "h-product",
        {
            "fn": "p-name",
            "photo": "u-photo",
            "brand": "p-brand",
            "category": "p-category",
            "description": "p-description",
            "identifier": "u-identifier",
            "url": "u-url",
            "review": "p-review",
            "price": "p-price",
        },
        _TAG_REL,
    ),
    _format(
        "hrecipe",
        "h-recipe",
        {
            "fn": "p-name",
            "ingredient": "p-ingredient",
            "yield": "p-yield",
            "instructions": "e-instructions",
            "duration": "dt-duration",
            "photo": "u-photo",
            "summary": "p-summary",
            "author": "p-author",
            "published": "dt-published",
            "nutrition": "p-nutrition",
            "category": "p-category",
        },
        _TAG_REL,
    ),
    _format(
        "hresume",
        "h-resume",
        {
            "summary": "p-summary",
            "contact": "p-contact",
            "education": "p-education",
            "experience": "p-experience",
            "skill": "p-skill",
            "affiliation": "p-affiliation",
        },
    ),
    _format(
        "hreview",
        "h-review",
        {
            "summary": "p-name",
            "item": ("p-item", "h-item"),
            "reviewer": "p-author",
            "dtreviewed": "dt-published",
            "rating": "p-rating",
            "best": "p-best",
            "worst": "p-worst",
            "description": "e-content",
        },
        {"bookmark": "u-url", **_TAG_REL},
    ),
    _format(
        "hreview-aggregate",
        "h-review-aggregate",
        {
            "summary": "p-name",
            "item": ("p-item", "h-item"),
            "rating": "p-rating",
            "average": "p-average",
            "best": "p-best",
            "worst": "p-worst",
            "count": "p-count",
            "votes": "p-votes",
        },
        {"bookmark": "u-url", **_TAG_REL},
    ),
    # Reviewed things have no root class of their own
    _format(None, "h-item", {"fn": "p-name", "photo": "u-photo", "url": "u-url"}),
)

LEGACY_BY_ROOT: Mapping[str, LegacyFormat] = MappingProxyType(
    {fmt.root: fmt for fmt in _FORMATS if fmt.root},
)
LEGACY_BY_TYPE: Mapping[str, LegacyFormat] = MappingProxyType(
    {fmt.type: fmt for fmt in _FORMATS},
)


@dataclass(frozen=True)
class LegacyVocabulary:
    """Legacy property classes and rel alternates valid inside one item."""

    properties: Mapping[str, LegacyProperty]
    rels: Mapping[str, LegacyProperty]

    def __bool__(self) -> bool:
        return bool(self.properties or self.rels)


EMPTY_LEGACY = LegacyVocabulary(MappingProxyType({}), MappingProxyType({}))


def legacy_vocabulary(types: Iterable[str]) -> LegacyVocabulary:
    """Merge the legacy property tables of every type in *types*.

    The first type to define a class wins when two tables disagree.
    """
    props: dict[str, LegacyProperty] = {}
    rels: dict[str, LegacyProperty] = {}
    for type_ in types:
        fmt = LEGACY_BY_TYPE.get(type_)
        if fmt is None:
            continue
        for cls, prop in fmt.properties.items():
            props.setdefault(cls, prop)
        for rel, prop in fmt.rels.items():
            rels.setdefault(rel, prop)
    if not props and not rels:
        return EMPTY_LEGACY
    return LegacyVocabulary(MappingProxyType(props), MappingProxyType(rels))


# ---------------------------------------------------------------------------
# Class token classification
# ---------------------------------------------------------------------------

def v2_root_types(classes: Iterable[str]) -> list[str]:
    return [cls for cls in classes if V2_ROOT_RE.match(cls)]


def legacy_root_types(classes: Iterable[str]) -> list[str]:
    types: list[str] = []
    for cls in classes:
        fmt = LEGACY_BY_ROOT.get(cls)
        if fmt is not None and fmt.type not in types:
            types.append(fmt.type)
    return types


def v2_property_classes(classes: Iterable[str]) -> list[tuple[str, str]]:
    """Return ``(prefix, name)`` pairs for the v2 property classes in *classes*."""
    found: list[tuple[str, str]] = []
    for cls in classes:
        m = V2_PROPERTY_RE.match(cls)
        if m:
            found.append((m.group(1), m.group(2)))
    return found


def has_root_class(classes: Iterable[str]) -> bool:
    """True if any class in *classes* is a v2 or legacy root."""
    return any(V2_ROOT_RE.match(cls) or cls in LEGACY_BY_ROOT for cls in classes)
