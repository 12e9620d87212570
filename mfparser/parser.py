"""mfparser.parser - High-level MicroformatParser class.

Bundles a set of parse options into a reusable object, so a service that
parses many documents with the same settings validates them once.

Usage::

    from mfparser import MicroformatParser

    parser = MicroformatParser(baseUrl="https://example.com/", dateFormat="normalized")
    doc = parser.get(html)
    print(doc.to_json(indent=2))

    # Only h-entry items, as plain data
    parser = MicroformatParser(filters=["h-entry"])
    data = parser.get_dict(html)

    # Occurrence counts
    parser.count(html)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from mfparser.options import resolve_options
from mfparser.query import count as _count
from mfparser.query import get as _get

if TYPE_CHECKING:
    from mfparser.items import Document
    from mfparser.options import ParseOptions


class MicroformatParser:
    """Parser with a fixed set of options.

    Keyword arguments are the parse options, in camelCase (``baseUrl``,
    ``overlappingVersions`` ...) or snake_case form.  Creating
    ``MicroformatParser()`` with no arguments behaves exactly like calling
    :func:`mfparser.get` with defaults.

    Raises:
        :class:`~mfparser.options.ConfigurationError`: On invalid options,
            at construction time.
    """

    def __init__(self, **options: Any) -> None:
        self._options = resolve_options(options)

    @property
    def options(self) -> ParseOptions:
        return self._options

    # ------------------------------------------------------------------
    # Public methods
    # ------------------------------------------------------------------

    def get(self, html: str, **overrides: Any) -> Document:
        """Extract items and relations from *html*.

        Args:
            html:        Markup to parse.
            **overrides: Options replacing the constructor's for this call.

        Returns:
            :class:`~mfparser.items.Document`.
        """
        return _get(html, self._options, **overrides)

    def count(self, html: str, **overrides: Any) -> dict[str, int]:
        """Count item types and property keys in *html*."""
        return _count(html, self._options, **overrides)

    def get_dict(self, html: str, **overrides: Any) -> dict[str, Any]:
        """Like :meth:`get`, returned in the microformats2 JSON shape."""
        return self.get(html, **overrides).to_dict()
