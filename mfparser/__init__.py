"""mfparser - extract microformats (v1 and v2) from HTML.

Quick usage::

    from mfparser import get

    doc = get(html, base_url="https://example.com/")
    print(doc.to_json(indent=2))

Reusable options::

    from mfparser import MicroformatParser

    parser = MicroformatParser(overlappingVersions=True, parseLatLonGeo=True)
    items = parser.get(html).items

Counting::

    from mfparser import count

    count(html)   # {"h-card": 1, "p-name": 1, ...}
"""

from mfparser.extractors.tree import DepthLimitError
from mfparser.items import (
    DateTimeValue,
    Document,
    EmbeddedItem,
    HtmlValue,
    ImageValue,
    Item,
    NumberValue,
    PlainText,
    RelUrl,
    UrlValue,
)
from mfparser.options import ConfigurationError, DateFormat, ParseOptions, TextFormat, load_options_file
from mfparser.parser import MicroformatParser
from mfparser.query import count, get

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "DateFormat",
    "DateTimeValue",
    "DepthLimitError",
    "Document",
    "EmbeddedItem",
    "HtmlValue",
    "ImageValue",
    "Item",
    "MicroformatParser",
    "NumberValue",
    "ParseOptions",
    "PlainText",
    "RelUrl",
    "TextFormat",
    "UrlValue",
    "count",
    "get",
    "load_options_file",
]
