"""URL resolution utilities."""

from __future__ import annotations

import re
from urllib.parse import unquote, urljoin, urlparse

# ASCII whitespace and control characters browsers strip from URL attributes
_STRIP_CHARS = "".join(chr(c) for c in range(0x21))
_INNER_NEWLINES_RE = re.compile(r"[\t\n\r]")


def resolve_url(url: str, base_url: str = "") -> str:
    """Return *url* made absolute against *base_url*.

    Leading/trailing whitespace and embedded tabs or newlines are removed
    first, as browsers do for ``href``/``src`` values.  Without a base URL,
    or when joining fails, the cleaned value is returned as is.
    """
    cleaned = _INNER_NEWLINES_RE.sub("", url.strip(_STRIP_CHARS))
    if not base_url:
        return cleaned
    try:
        return urljoin(base_url, cleaned)
    except ValueError:
        return cleaned


def last_path_segment(url: str) -> str:
    """Return the last non-empty path segment of *url*, percent-decoded.

    Example:
        https://example.com/tags/python/ → python
    """
    try:
        path = urlparse(url).path
    except ValueError:
        path = url
    segments = [seg for seg in path.split("/") if seg]
    return unquote(segments[-1]) if segments else ""

