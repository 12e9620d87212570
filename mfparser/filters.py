"""Top-level item filtering."""

from __future__ import annotations

from collections.abc import Iterable

from mfparser.items import Item


def matches_filters(types: Iterable[str], filters: Iterable[str]) -> bool:
    """True if *filters* is empty or shares a type name with *types*."""
    wanted = set(filters)
    return not wanted or not wanted.isdisjoint(types)


def filter_items(items: Iterable[Item], filters: Iterable[str]) -> list[Item]:
    """Keep the items whose type list intersects *filters*.

    Only the given items are tested; their embedded values and children stay
    as they are.  An empty filter set keeps everything.
    """
    wanted = tuple(filters)
    return [item for item in items if matches_filters(item.type, wanted)]
