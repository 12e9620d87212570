"""Implied ``name``, ``photo`` and ``url`` for items that omit them.

Each rule looks at the root element first, then at its only child, then at
that child's only child.  A candidate element that is itself an item root, or
that already supplies a property to this item, is never used.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from bs4.element import Tag

from mfparser.extractors.properties import ValueContext
from mfparser.extractors.tree import attr, only_child, only_of_type, render_text
from mfparser.extractors.urlnorm import resolve_url
from mfparser.items import ImageValue, PlainText, PropertyValue, UrlValue

logger = logging.getLogger(__name__)

Candidate = Callable[[Tag], bool]


def apply_implied(
    tag: Tag,
    properties: dict[str, list[PropertyValue]],
    prefixes: set[str],
    has_nested: bool,
    is_candidate: Candidate,
    ctx: ValueContext,
) -> None:
    """Add implied properties to *properties* in place.

    Args:
        tag:          The item root element.
        properties:   Explicit properties collected so far, by name.
        prefixes:     Prefixes (``p``, ``u``, ``dt``, ``e``) used by any
                      explicit property of the item.
        has_nested:   True if the item contains nested items.
        is_candidate: Predicate telling whether a descendant may supply an
                      implied value.
        ctx:          Base URL and text format.
    """
    if "name" not in properties and not prefixes & {"p", "e"} and not has_nested:
        name = implied_name(tag, is_candidate, ctx)
        if name:
            properties["name"] = [PlainText(name)]

    if "photo" not in properties and "u" not in prefixes and not has_nested:
        photo = implied_photo(tag, is_candidate, ctx)
        if photo is not None:
            properties["photo"] = [photo]

    if "url" not in properties and "u" not in prefixes and not has_nested:
        url = implied_url(tag, is_candidate, ctx)
        if url is not None:
            properties["url"] = [url]


def _descend(tag: Tag, is_candidate: Candidate) -> Tag | None:
    child = only_child(tag)
    if child is not None and is_candidate(child):
        return child
    return None


def _image_name(tag: Tag) -> str | None:
    if tag.name in ("img", "area"):
        alt = attr(tag, "alt")
        if alt is not None and alt.strip():
            return alt
    if tag.name == "abbr":
        title = attr(tag, "title")
        if title is not None and title.strip():
            return title
    return None


def implied_name(tag: Tag, is_candidate: Candidate, ctx: ValueContext) -> str:
    """Return the implied name: alt/title of the root or its only descendants, else its text."""
    name = _image_name(tag)
    if name is not None:
        return name.strip()

    child = _descend(tag, is_candidate)
    if child is not None:
        name = _image_name(child)
        if name is not None:
            return name.strip()
        grandchild = _descend(child, is_candidate)
        if grandchild is not None:
            name = _image_name(grandchild)
            if name is not None:
                return name.strip()

    return render_text(tag, ctx.text_format)


def _photo_of(tag: Tag, ctx: ValueContext) -> PropertyValue | None:
    if tag.name == "img":
        src = attr(tag, "src")
        if src is None:
            return None
        url = resolve_url(src, ctx.base_url)
        alt = attr(tag, "alt")
        return ImageValue(value=url, alt=alt) if alt is not None else UrlValue(url)
    if tag.name == "object":
        data = attr(tag, "data")
        if data is not None:
            return UrlValue(resolve_url(data, ctx.base_url))
    return None


def _only_photo_child(tag: Tag, is_candidate: Candidate) -> Tag | None:
    for name in ("img", "object"):
        child = only_of_type(tag, name)
        if child is not None and is_candidate(child):
            return child
    return None


def implied_photo(tag: Tag, is_candidate: Candidate, ctx: ValueContext) -> PropertyValue | None:
    photo = _photo_of(tag, ctx)
    if photo is not None:
        return photo

    child = _only_photo_child(tag, is_candidate)
    if child is not None:
        return _photo_of(child, ctx)

    only = _descend(tag, is_candidate)
    if only is not None:
        grandchild = _only_photo_child(only, is_candidate)
        if grandchild is not None:
            return _photo_of(grandchild, ctx)
    return None


def _link_of(tag: Tag, ctx: ValueContext) -> UrlValue | None:
    if tag.name in ("a", "area"):
        href = attr(tag, "href")
        if href is not None:
            return UrlValue(resolve_url(href, ctx.base_url))
    return None


def _only_link_child(tag: Tag, is_candidate: Candidate) -> Tag | None:
    for name in ("a", "area"):
        child = only_of_type(tag, name)
        if child is not None and is_candidate(child):
            return child
    return None


def implied_url(tag: Tag, is_candidate: Candidate, ctx: ValueContext) -> UrlValue | None:
    url = _link_of(tag, ctx)
    if url is not None:
        return url

    child = _only_link_child(tag, is_candidate)
    if child is not None:
        return _link_of(child, ctx)

    only = _descend(tag, is_candidate)
    if only is not None:
        grandchild = _only_link_child(only, is_candidate)
        if grandchild is not None:
            return _link_of(grandchild, ctx)
    logger.debug("No implied url for <%s>", tag.name)
    return None
