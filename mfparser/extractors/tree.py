"""Markup tree helpers on top of BeautifulSoup.

Everything in the extraction engine touches the parsed tree through these
functions: class tokens, attributes, element children, rendered text, inner
markup, the document base URL and language, and the depth guard.  The tree
itself is never modified.
"""

from __future__ import annotations

import copy
import logging
import re
from collections.abc import Iterator

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Tag

from mfparser.extractors.urlnorm import resolve_url
from mfparser.options import TextFormat

logger = logging.getLogger(__name__)

# Content never shown as text
_SKIP_TAGS: frozenset[str] = frozenset({"script", "style", "template", "noscript"})

# Elements whose boundaries become line breaks in normalized text
_BLOCK_TAGS: frozenset[str] = frozenset(
    {
        "address", "article", "aside", "blockquote", "dd", "details", "dialog",
        "div", "dl", "dt", "fieldset", "figcaption", "figure", "footer", "form",
        "h1", "h2", "h3", "h4", "h5", "h6", "header", "hgroup", "hr", "li",
        "main", "nav", "ol", "p", "pre", "section", "summary", "table", "tr",
        "ul",
    },
)

# Attributes holding URLs, resolved inside embedded markup
_URL_ATTRIBUTES: tuple[str, ...] = ("href", "src", "poster", "data", "cite")

_WHITESPACE_RE = re.compile(r"\s+")


class DepthLimitError(RuntimeError):
    """Raised when markup nests deeper than the configured limit.

    Attributes:
        depth -- nesting depth at which the walk stopped
        limit -- configured maximum
    """

    def __init__(self, depth: int, limit: int) -> None:
        super().__init__(f"Markup nesting depth {depth} exceeds the limit of {limit}")
        self.depth = depth
        self.limit = limit


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def load_document(html: str) -> BeautifulSoup:
    """Parse *html* with the lenient lxml tree builder."""
    return BeautifulSoup(html or "", "lxml")


def check_depth(soup: BeautifulSoup, limit: int) -> int:
    """Return the element nesting depth of *soup*, raising past *limit*.

    Iterative, so it is safe to call before any recursive walk.
    """
    deepest = 0
    stack: list[tuple[Tag, int]] = [(soup, 0)]
    while stack:
        node, depth = stack.pop()
        if depth > limit:
            raise DepthLimitError(depth, limit)
        deepest = max(deepest, depth)
        stack.extend((child, depth + 1) for child in element_children(node))
    logger.debug("Markup depth %d (limit %d)", deepest, limit)
    return deepest


# ---------------------------------------------------------------------------
# Attributes
# ---------------------------------------------------------------------------

def attr(tag: Tag, name: str) -> str | None:
    """Return attribute *name* as a string, joining multi-valued attributes."""
    val = tag.get(name)
    if val is None:
        return None
    if isinstance(val, list):
        return " ".join(str(v) for v in val)
    return str(val)


def tokens(tag: Tag, name: str) -> list[str]:
    """Return the whitespace-separated tokens of attribute *name*, in order."""
    val = tag.get(name)
    if val is None:
        return []
    if isinstance(val, list):
        raw = [str(v) for v in val]
    else:
        raw = str(val).split()
    out: list[str] = []
    for token in raw:
        if token and token not in out:
            out.append(token)
    return out


def class_tokens(tag: Tag) -> list[str]:
    return tokens(tag, "class")


def element_children(tag: Tag) -> Iterator[Tag]:
    for child in tag.children:
        if isinstance(child, Tag):
            yield child


def only_child(tag: Tag) -> Tag | None:
    """Return the single element child of *tag*, or None."""
    children = list(element_children(tag))
    return children[0] if len(children) == 1 else None


def only_of_type(tag: Tag, name: str) -> Tag | None:
    """Return the only element child of *tag* named *name*, or None."""
    matches = [child for child in element_children(tag) if child.name == name]
    return matches[0] if len(matches) == 1 else None


# ---------------------------------------------------------------------------
# Text and markup
# ---------------------------------------------------------------------------

def _collect_text(tag: Tag, parts: list[str], normalize: bool) -> None:
    for node in tag.children:
        if isinstance(node, Tag):
            if node.name in _SKIP_TAGS:
                continue
            if node.name == "img":
                alt = attr(node, "alt")
                if alt is not None:
                    parts.append(alt)
                elif attr(node, "src"):
                    parts.append(f" {attr(node, 'src')} ")
                continue
            if node.name == "br":
                if normalize:
                    parts.append("\n")
                continue
            block = normalize and node.name in _BLOCK_TAGS
            if block:
                parts.append("\n")
            _collect_text(node, parts, normalize)
            if block:
                parts.append("\n")
        elif isinstance(node, NavigableString) and not isinstance(node, PreformattedString):
            text = str(node)
            parts.append(_WHITESPACE_RE.sub(" ", text) if normalize else text)


def render_text(tag: Tag, text_format: TextFormat = TextFormat.NORMALIZED) -> str:
    """Return the text of *tag* in the requested format.

    ``normalized`` collapses whitespace runs, turns ``br`` and block element
    boundaries into single newlines and trims.  ``trimmed`` keeps the text as
    authored apart from leading and trailing whitespace.
    """
    normalize = text_format == TextFormat.NORMALIZED
    parts: list[str] = []
    _collect_text(tag, parts, normalize)
    text = "".join(parts)
    if not normalize:
        return text.strip()
    lines = (" ".join(line.split()) for line in text.split("\n"))
    return "\n".join(line for line in lines if line)


def inner_html(tag: Tag, base_url: str = "") -> str:
    """Return the markup inside *tag* with relative URLs resolved.

    Works on a copy; the parsed document is left untouched.
    """
    clone = copy.copy(tag)
    if base_url:
        for node in [clone, *clone.find_all(True)]:
            for name in _URL_ATTRIBUTES:
                val = node.get(name)
                if isinstance(val, str) and val.strip():
                    node[name] = resolve_url(val, base_url)
    return clone.decode_contents().strip()


# ---------------------------------------------------------------------------
# Document context
# ---------------------------------------------------------------------------

def document_base_url(soup: BeautifulSoup, fallback: str = "") -> str:
    """Return the effective base URL: ``<base href>`` when present, else *fallback*."""
    base = soup.find("base", href=True)
    if isinstance(base, Tag):
        href = (attr(base, "href") or "").strip()
        if href:
            return resolve_url(href, fallback)
    return fallback


def language_of(tag: Tag) -> str | None:
    """Return the nearest declared ``lang`` of *tag* or its ancestors."""
    node: Tag | None = tag
    while node is not None and not isinstance(node, BeautifulSoup):
        lang = (attr(node, "lang") or "").strip()
        if lang:
            return lang
        node = node.parent
    return None
